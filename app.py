import logging
import os
from pathlib import Path
from tempfile import NamedTemporaryFile

from nicegui import app, run, ui

import config
from error_handler import ErrorHandler, NotesAppError, StorageReadError
from extract_content import combine_resources, extract_text
from merge_notes import merge_block_set, merge_single_block
from notes_pipeline import enhance_note, generate_block_notes, generate_full_curriculum
from notes_storage import MappingStorage, NoteStore, create_storage
from search_notes import search_notes
from study_assistant import ask
from study_plan import StudyPlan
from subjects import BLOCKS, SUBJECTS, subject_color, subject_name

config.configure_logging()
logger = logging.getLogger(__name__)

BUTTON_PROPS = 'unelevated rounded color=indigo text-color=white'


def show_user_error(error: NotesAppError, user_action: str):
    """Log the error and show a friendly notification"""
    ErrorHandler.log_exception(error, user_action)
    title, message = ErrorHandler.get_user_friendly_message(error.error_type)
    ui.notify(f"{title}: {message}", type="negative", timeout=8000)


def open_storage():
    try:
        return create_storage(browser_storage=app.storage.user)
    except StorageReadError as e:
        ErrorHandler.log_exception(e, "Opening notes storage")
        return MappingStorage(app.storage.user)


@ui.page('/')
def main_page():
    storage = open_storage()
    note_store = NoteStore(storage)
    study_plan = StudyPlan(storage)

    state = {
        "subject": None,
        "block": None,
        "notes": note_store.load(),
        "resources": [],
    }

    def update_notes(new_notes):
        """Replace the notes, persist them and re-render."""
        state["notes"] = new_notes
        note_store.save(new_notes)
        render_blocks.refresh()
        render_note.refresh()

    def select_subject(subject):
        state["subject"] = subject
        state["block"] = None
        render_subjects.refresh()
        render_blocks.refresh()
        render_note.refresh()
        render_actions.refresh()

    def select_block(block):
        state["block"] = block
        render_blocks.refresh()
        render_note.refresh()

    def open_note(subject, block):
        state["subject"] = subject
        state["block"] = str(block)
        render_subjects.refresh()
        render_blocks.refresh()
        render_note.refresh()
        render_actions.refresh()

    # ---------- Editor ----------

    def open_editor():
        subject, block = state["subject"], state["block"]
        current = state["notes"].get(subject, {}).get(block, "")

        with ui.dialog() as dialog, ui.card().classes('w-full max-w-2xl p-6'):
            ui.label(f'Editing {subject_name(subject)} - Block {block}').classes('text-lg font-medium')
            editor = ui.textarea(value=current, placeholder='Enter your notes here...') \
                .props('outlined autogrow').classes('w-full')

            def save():
                update_notes(merge_single_block(state["notes"], subject, block, editor.value))
                ui.notify("Note saved successfully!", type="positive")
                dialog.close()

            async def enhance():
                if not editor.value.strip():
                    ui.notify("Please add some content before enhancing", type="warning")
                    return
                enhance_button.disable()
                enhance_button.text = 'Enhancing...'
                try:
                    editor.value = await run.io_bound(
                        enhance_note, subject, block, editor.value, config.GOOGLE_API_KEY
                    )
                    ui.notify("Notes enhanced with AI!", type="positive")
                except NotesAppError as e:
                    show_user_error(e, "Enhancing note")
                finally:
                    enhance_button.enable()
                    enhance_button.text = '✨ Enhance with AI'

            with ui.row().classes('w-full gap-3'):
                ui.button('💾 Save', on_click=save).props(BUTTON_PROPS)
                enhance_button = ui.button('✨ Enhance with AI', on_click=enhance).props('outline rounded')
                ui.button('Cancel', on_click=dialog.close).props('flat').classes('ml-auto')

        dialog.open()

    # ---------- Full curriculum ----------

    def open_full_curriculum():
        subject = state["subject"]

        with ui.dialog() as dialog, ui.card().classes('w-full max-w-2xl p-6'):
            ui.label(f'Upload Full Curriculum for {subject_name(subject)}').classes('text-lg font-medium')
            content = ui.textarea(
                placeholder=f'Paste all your {subject_name(subject)} notes here. '
                            f'The AI will automatically organize them into blocks...'
            ).props('outlined').classes('w-full h-96')
            status_label = ui.label('').classes('text-gray-600')

            async def generate():
                if not content.value.strip():
                    ui.notify("Please enter some content first", type="warning")
                    return
                generate_button.disable()
                status_label.text = "🛠 Organizing your notes into 6 blocks..."
                try:
                    blocks = await run.io_bound(
                        generate_full_curriculum, subject, content.value, config.GOOGLE_API_KEY
                    )
                except NotesAppError as e:
                    show_user_error(e, "Full curriculum generation")
                    return
                finally:
                    generate_button.enable()
                    status_label.text = ""

                if state["subject"] != subject:
                    logger.info(f"Discarding curriculum for {subject}: user switched subject")
                    ui.notify("Subject changed while generating, result discarded", type="warning")
                    return

                update_notes(merge_block_set(state["notes"], subject, blocks))
                dialog.close()
                ui.notify("Notes generated and organized into blocks!", type="positive")

            with ui.row().classes('w-full justify-end'):
                generate_button = ui.button('Generate Structured Notes', on_click=generate).props(BUTTON_PROPS)

        dialog.open()

    # ---------- Resource upload ----------

    def open_resource_uploader():
        subject = state["subject"]
        state["resources"] = []

        with ui.dialog() as dialog, ui.card().classes('w-full max-w-2xl p-6'):
            ui.label(f'Upload Resources for {subject_name(subject)}').classes('text-lg font-medium')
            block_select = ui.select(
                {block: f'Block {block}' for block in BLOCKS},
                value=state["block"] or BLOCKS[0],
                label='Target block'
            ).classes('w-40')
            file_list = ui.column().classes('w-full')

            def render_files():
                file_list.clear()
                with file_list:
                    for name, text in state["resources"]:
                        ui.label(f'📄 {name} ({len(text)} characters)').classes('text-sm')

            def handle_upload(e):
                suffix = Path(e.name).suffix
                with NamedTemporaryFile(delete=False, suffix=suffix) as temp_file:
                    temp_file.write(e.content.read())
                    temp_file_path = Path(temp_file.name)

                try:
                    state["resources"].append((e.name, extract_text(temp_file_path)))
                    render_files()
                    ui.notify(f"{e.name} added")
                except NotesAppError as error:
                    show_user_error(error, f"Reading {e.name}")
                finally:
                    os.unlink(temp_file_path)

            ui.upload(label='PDF, DOCX or text files', on_upload=handle_upload, auto_upload=True, multiple=True) \
                .props('accept=.pdf,.docx,.txt,.md').classes('w-full')
            status_label = ui.label('').classes('text-gray-600')

            async def generate():
                if not state["resources"]:
                    ui.notify("Please upload at least one resource file", type="warning")
                    return
                block = block_select.value
                generate_button.disable()
                status_label.text = "🛠 Generating structured notes..."
                try:
                    blocks = await run.io_bound(
                        generate_block_notes, subject, block,
                        combine_resources(state["resources"]), config.GOOGLE_API_KEY
                    )
                except NotesAppError as e:
                    show_user_error(e, "Resource notes generation")
                    return
                finally:
                    generate_button.enable()
                    status_label.text = ""

                if state["subject"] != subject:
                    logger.info(f"Discarding block {block} for {subject}: user switched subject")
                    ui.notify("Subject changed while generating, result discarded", type="warning")
                    return

                update_notes(merge_block_set(state["notes"], subject, blocks))
                dialog.close()
                ui.notify(f"Notes generated for {subject_name(subject)} Block {block}!", type="positive")

            with ui.row().classes('w-full justify-end'):
                generate_button = ui.button('Generate Notes', on_click=generate).props(BUTTON_PROPS)

        dialog.open()

    # ---------- Search ----------

    def open_search():
        with ui.dialog() as dialog, ui.card().classes('w-full max-w-2xl p-6'):
            ui.label('Search Notes').classes('text-lg font-medium')

            def choose(result):
                open_note(result.subject, result.block)
                dialog.close()

            def show_results(e):
                results_column.clear()
                results = search_notes(state["notes"], e.value)
                with results_column:
                    if e.value and e.value.strip() and not results:
                        ui.label('No results found').classes('text-gray-500')
                    for result in results:
                        with ui.card().classes('w-full cursor-pointer').on('click', lambda _, r=result: choose(r)):
                            ui.label(f'{subject_name(result.subject)} - Block {result.block}').classes('font-medium')
                            ui.label(f'{result.snippet}...').classes('text-sm text-gray-500')

            ui.input(placeholder='Search your notes...', on_change=show_results) \
                .props('clearable autofocus').classes('w-full')
            results_column = ui.column().classes('w-full max-h-96 overflow-y-auto')

        dialog.open()

    # ---------- Study plan ----------

    def open_study_plan():
        with ui.dialog() as dialog, ui.card().classes('w-full max-w-4xl p-6'):
            ui.label('📅 Study Plan').classes('text-lg font-medium')
            progress_label = ui.label('')
            progress_bar = ui.linear_progress(show_value=False).classes('h-3')

            def refresh_progress():
                percent = study_plan.percent_complete()
                progress_label.text = f'Your Progress: {percent}%'
                progress_bar.value = percent / 100

            def toggle(subject, block):
                study_plan.toggle(subject, block)
                refresh_progress()

            with ui.grid(columns=len(SUBJECTS) + 1).classes('w-full gap-1 items-center'):
                ui.label('Blocks').classes('font-medium')
                for subject in SUBJECTS:
                    ui.label(subject["name"]).classes(f'text-{subject["color"]}-500 font-medium text-sm')
                for block in BLOCKS:
                    ui.label(f'Block {block}').classes('font-medium')
                    for subject in SUBJECTS:
                        ui.checkbox(value=study_plan.is_done(subject["id"], block),
                                    on_change=lambda _, s=subject["id"], b=block: toggle(s, b))

            refresh_progress()
            ui.label('Your progress is automatically saved').classes('text-xs text-gray-500')

        dialog.open()

    # ---------- Study assistant ----------

    def open_assistant():
        with ui.dialog() as dialog, ui.card().classes('w-full max-w-md h-[600px] p-6 flex flex-col'):
            ui.label('🤖 Study Assistant AI').classes('text-lg font-medium')
            messages = ui.column().classes('w-full flex-1 overflow-y-auto')
            with messages:
                ui.label(f'Ask me anything about your {subject_name(state["subject"]) if state["subject"] else "studies"}!') \
                    .classes('text-gray-500')

            async def send():
                question = question_input.value.strip()
                if not question:
                    return
                question_input.value = ''
                with messages:
                    ui.chat_message(question, sent=True)
                    thinking = ui.label('Thinking...').classes('text-sm text-gray-500')
                reply = await run.io_bound(ask, state["notes"], state["subject"], question, config.GOOGLE_API_KEY)
                messages.remove(thinking)
                with messages:
                    ui.chat_message(reply, name='Assistant')

            with ui.row().classes('w-full'):
                question_input = ui.input(placeholder='Ask about your notes...').classes('flex-1') \
                    .on('keydown.enter', send)
                ui.button(icon='send', on_click=send).props('flat')

        dialog.open()

    # ---------- Layout ----------

    @ui.refreshable
    def render_subjects():
        with ui.row().classes('w-full gap-2 justify-center flex-wrap'):
            for subject in SUBJECTS:
                selected = state["subject"] == subject["id"]
                ui.button(subject["name"], on_click=lambda _, s=subject["id"]: select_subject(s)) \
                    .props(f'rounded {"unelevated" if selected else "outline"} color={subject["color"]}')

    @ui.refreshable
    def render_blocks():
        subject = state["subject"]
        if not subject:
            return
        saved = state["notes"].get(subject, {})
        with ui.grid(columns=3).classes('w-full max-w-3xl gap-4'):
            for block in BLOCKS:
                selected = state["block"] == block
                label = f'Block {block}' + (' ✅' if saved.get(block) else '')
                ui.button(label, on_click=lambda _, b=block: select_block(b)) \
                    .props(f'rounded {"unelevated" if selected else "outline"} color={subject_color(subject)}') \
                    .classes('p-6 text-lg')

    @ui.refreshable
    def render_actions():
        if not state["subject"]:
            return
        with ui.row().classes('gap-2'):
            ui.button('Upload Full Curriculum', icon='upload', on_click=open_full_curriculum).props('outline rounded')
            ui.button('Upload Resources', icon='attach_file', on_click=open_resource_uploader).props('outline rounded')

    @ui.refreshable
    def render_note():
        subject, block = state["subject"], state["block"]
        if not subject or not block:
            return
        with ui.card().classes('w-full max-w-3xl p-6 rounded-2xl'):
            with ui.row().classes('w-full justify-between items-center'):
                ui.label(f'{subject_name(subject)} - Block {block}').classes('text-xl font-medium')
                ui.button('Edit', icon='edit', on_click=open_editor).props('flat rounded')
            content = state["notes"].get(subject, {}).get(block)
            if content:
                ui.html(content).classes('prose max-w-none w-full')
            else:
                ui.label('No notes yet. Click Edit to add some!').classes('text-gray-500')

    with ui.column().classes('w-full items-center min-h-screen bg-gray-50 px-3 sm:px-6 py-6 gap-6'):
        with ui.row().classes('w-full max-w-5xl justify-between items-center'):
            ui.label('Klaab Notes').classes('text-3xl font-extrabold text-indigo-800')
            with ui.row().classes('gap-1'):
                ui.button(icon='search', on_click=open_search).props('flat round')
                ui.button(icon='calendar_month', on_click=open_study_plan).props('flat round')
                ui.button(icon='smart_toy', on_click=open_assistant).props('flat round')

        render_subjects()
        render_actions()
        render_blocks()
        render_note()


if __name__ in {"__main__", "__mp_main__"}:
    try:
        secret = config.storage_secret()
    except ValueError as e:
        logger.error(f"Refusing to start: {e}")
        raise SystemExit(1)
    ui.run(host='0.0.0.0', port=config.PORT, title='Klaab Notes', storage_secret=secret)
