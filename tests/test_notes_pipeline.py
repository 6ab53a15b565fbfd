"""
Tests for the generation pipeline: request -> Gemini -> segmentation -> merge.

Gemini is a mocked client; the activity log writes to tmp_path.
"""

import pytest

from error_handler import EmptyInputError, GenerationRequestError
from notes_pipeline import (
    enhance_note,
    generate_block_notes,
    generate_full_curriculum,
    import_full_curriculum,
    import_single_block,
)

SIX_BLOCKS = "".join(f"<h2>Block {n}: Topic {n}</h2><p>Content {n}</p>" for n in range(1, 7))


class TestFullCurriculum:

    def test_generates_six_blocks(self, gemini_client, generation_logger):
        blocks = generate_full_curriculum(
            "physics", "raw notes", "key", client=gemini_client(text=SIX_BLOCKS),
            generation_logger=generation_logger,
        )

        assert list(blocks) == ["1", "2", "3", "4", "5", "6"]
        assert blocks["2"] == "<h2>Block 2: Topic 2</h2><p>Content 2</p>"

    def test_prompt_is_full_mode(self, gemini_client, generation_logger):
        client = gemini_client(text=SIX_BLOCKS)

        generate_full_curriculum("physics", "raw notes", "key", client=client, generation_logger=generation_logger)

        prompt = client.models.generate_content.call_args.kwargs["contents"]
        assert "split them into 6 blocks" in prompt
        assert "Physics" in prompt

    def test_import_merges_into_subject(self, notes, gemini_client, generation_logger):
        result = import_full_curriculum(
            notes, "chemistry", "raw", "key", client=gemini_client(text=SIX_BLOCKS),
            generation_logger=generation_logger,
        )

        assert result["chemistry"]["3"] == "<h2>Block 3: Topic 3</h2><p>Content 3</p>"
        assert result["biology"] is notes["biology"]
        assert notes["chemistry"]["3"] == "<p>old</p>"

    def test_success_is_logged(self, gemini_client, generation_logger):
        generate_full_curriculum(
            "physics", "raw", "key", client=gemini_client(text=SIX_BLOCKS), generation_logger=generation_logger
        )

        [entry] = generation_logger.read_logs()
        assert entry["status"] == "success"
        assert entry["mode"] == "full"
        assert entry["blocks_written"] == ["1", "2", "3", "4", "5", "6"]
        assert entry["tokens"] == {"input": 12, "output": 34, "total": 46}


class TestSingleBlock:

    def test_generates_target_block_only(self, gemini_client, generation_logger):
        blocks = generate_block_notes(
            "biology", 4, "resource text", "key", client=gemini_client(text="<h2>Genes</h2>"),
            generation_logger=generation_logger,
        )

        assert blocks == {"4": "<h2>Genes</h2>"}

    def test_import_keeps_other_blocks(self, notes, gemini_client, generation_logger):
        result = import_single_block(
            notes, "chemistry", 1, "resource", "key", client=gemini_client(text="<p>A</p>"),
            generation_logger=generation_logger,
        )

        assert result["chemistry"] == {"1": "<p>A</p>", "2": "<p>atoms</p>", "3": "<p>old</p>"}

    def test_enhance_returns_text(self, gemini_client, generation_logger):
        client = gemini_client(text="<h2>Better</h2>")

        text = enhance_note("maths", 2, "messy notes", "key", client=client, generation_logger=generation_logger)

        assert text == "<h2>Better</h2>"
        assert "Block 2" in client.models.generate_content.call_args.kwargs["contents"]


class TestFailures:

    @pytest.mark.parametrize("raw_text", ["", "   \n"])
    def test_empty_input_never_calls_gemini(self, gemini_client, generation_logger, raw_text):
        client = gemini_client(text="unused")

        with pytest.raises(EmptyInputError):
            generate_full_curriculum("physics", raw_text, "key", client=client, generation_logger=generation_logger)

        client.models.generate_content.assert_not_called()

    def test_gemini_failure_propagates_and_is_logged(self, notes, gemini_client, generation_logger):
        client = gemini_client(error=RuntimeError("503 service unavailable"))

        with pytest.raises(GenerationRequestError) as exc_info:
            import_full_curriculum(notes, "physics", "raw", "key", client=client, generation_logger=generation_logger)

        assert exc_info.value.error_type == "NETWORK_ERROR"
        [entry] = generation_logger.read_logs()
        assert entry["status"] == "failed"
        assert entry["error"]["error_type"] == "NETWORK_ERROR"
        assert generation_logger.active_sessions == {}
