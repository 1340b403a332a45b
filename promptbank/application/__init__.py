"""Application layer services."""

from .prompt_service import PromptApplicationService, PromptResolutionError
from .suggestions import render_resolution

__all__ = [
    "PromptApplicationService",
    "PromptResolutionError",
    "render_resolution",
]
