"""Shared fixtures: in-memory storage and a fake Gemini client."""

from types import SimpleNamespace
from unittest.mock import Mock

import pytest

from logger import GenerationLogger
from notes_storage import MappingStorage, default_notes


def make_gemini_response(text, prompt_tokens=12, output_tokens=34):
    part = SimpleNamespace(text=text)
    candidate = SimpleNamespace(content=SimpleNamespace(parts=[part]))
    usage = SimpleNamespace(
        prompt_token_count=prompt_tokens,
        candidates_token_count=output_tokens,
        total_token_count=prompt_tokens + output_tokens,
    )
    return SimpleNamespace(candidates=[candidate], usage_metadata=usage)


def make_gemini_client(text=None, error=None):
    client = Mock()
    if error is not None:
        client.models.generate_content.side_effect = error
    else:
        client.models.generate_content.return_value = make_gemini_response(text)
    return client


@pytest.fixture
def memory_storage():
    return MappingStorage({})


@pytest.fixture
def notes():
    store = default_notes()
    store["chemistry"] = {"2": "<p>atoms</p>", "3": "<p>old</p>"}
    store["biology"] = {"1": "<h2>Cells</h2><p>Mitochondria is the powerhouse</p>"}
    return store


@pytest.fixture
def generation_logger(tmp_path):
    return GenerationLogger(logs_folder=tmp_path / "logs")


@pytest.fixture
def gemini_client():
    """Factory: gemini_client(text=...) or gemini_client(error=...)."""
    return make_gemini_client
