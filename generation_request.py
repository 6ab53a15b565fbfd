"""Build the prompt and tuning parameters sent to Gemini."""
from dataclasses import dataclass
from typing import Optional

import config
from Ins_for_notes_generation import (
    for_full_curriculum,
    for_single_block,
    for_study_assistant,
    formatting_rules,
)
from subjects import normalize_block, subject_name

FULL = "full"
SINGLE = "single"
MODES = (FULL, SINGLE)


@dataclass(frozen=True)
class GenerationRequest:
    subject: str
    mode: str
    raw_input_text: str
    target_block: Optional[str] = None

    def __post_init__(self):
        if self.mode not in MODES:
            raise ValueError(f"Unknown generation mode: {self.mode!r}")
        if self.mode == SINGLE:
            block = normalize_block(self.target_block)
            if block is None:
                raise ValueError(f"Single block mode needs a block 1-6, got {self.target_block!r}")
            object.__setattr__(self, "target_block", block)


def generation_parameters() -> dict:
    return {
        "temperature": config.GENERATION_TEMPERATURE,
        "top_p": config.GENERATION_TOP_P,
        "max_output_tokens": config.GENERATION_MAX_OUTPUT_TOKENS,
    }


def build_generation_request(request: GenerationRequest) -> dict:
    """Return {"prompt_text": ..., "generation_parameters": {...}}."""
    if request.mode == FULL:
        prompt_text = for_full_curriculum.format(
            subject=subject_name(request.subject),
            formatting_rules=formatting_rules,
            raw_input_text=request.raw_input_text,
        )
    else:
        prompt_text = for_single_block.format(
            subject=subject_name(request.subject),
            target_block=request.target_block,
            formatting_rules=formatting_rules,
            raw_input_text=request.raw_input_text,
        )

    return {
        "prompt_text": prompt_text,
        "generation_parameters": generation_parameters(),
    }


def build_assistant_request(subject, context: str, question: str) -> dict:
    prompt_text = for_study_assistant.format(
        subject=subject_name(subject) if subject else "studies",
        context=context,
        question=question,
    )
    return {
        "prompt_text": prompt_text,
        "generation_parameters": {
            "temperature": config.ASSISTANT_TEMPERATURE,
            "top_p": config.ASSISTANT_TOP_P,
            "max_output_tokens": config.ASSISTANT_MAX_OUTPUT_TOKENS,
        },
    }
