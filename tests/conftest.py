"""Shared fixtures for prompt store tests."""

import pytest

from promptbank.core.schema import PromptMetadata
from promptbank.data import PromptStorage


@pytest.fixture
def storage(tmp_path):
    """Empty prompt store rooted in a temporary directory."""
    store = PromptStorage(tmp_path)
    store.init()
    return store


@pytest.fixture
def add_prompt(storage):
    """Write a prompt with minimal metadata."""

    def _add(name: str, description: str = "", body: str = "body") -> None:
        storage.write_prompt(name, PromptMetadata(id=name, description=description), body)

    return _add


@pytest.fixture
def library(storage, add_prompt):
    """Store with a small mixed library of loose and bank prompts."""
    add_prompt("api", "REST API design")
    add_prompt("auth", "JWT authentication")
    add_prompt("auth-basic", "Basic auth")
    add_prompt("essentials/commit", "Conventional commit message", body="Write a commit message.")
    add_prompt("essentials/code-review", "Review a diff")
    return storage
