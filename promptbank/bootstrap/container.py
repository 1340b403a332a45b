"""Dependency composition root."""

from __future__ import annotations

from dataclasses import dataclass

from promptbank.application import PromptApplicationService
from promptbank.data import MatchingConfig, PromptStorage


@dataclass(frozen=True)
class AppContainer:
    """Wired application dependencies."""

    storage: PromptStorage
    prompts: PromptApplicationService


_CONTAINER: AppContainer | None = None


def get_container() -> AppContainer:
    global _CONTAINER
    if _CONTAINER is not None:
        return _CONTAINER

    storage = PromptStorage.from_env()
    prompts = PromptApplicationService(storage=storage, matching=MatchingConfig())

    _CONTAINER = AppContainer(storage=storage, prompts=prompts)
    return _CONTAINER


def reset_container() -> None:
    """Drop the wired container so the next call re-reads configuration."""
    global _CONTAINER
    _CONTAINER = None
