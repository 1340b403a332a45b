"""Schema definitions for prompt files."""

from .prompt_schema import (
    PromptFormatError,
    PromptMetadata,
    parse_prompt,
    render_prompt,
)

__all__ = [
    "PromptFormatError",
    "PromptMetadata",
    "parse_prompt",
    "render_prompt",
]
