"""Prompt file schema.

Prompts are markdown files with optional YAML frontmatter:

    ---
    id: commit
    description: Conventional commit message
    version: 1.2.0
    ---

    Write a commit message for...

Usage:
    metadata, body = parse_prompt(path.read_text(encoding="utf-8"))
    path.write_text(render_prompt(metadata, body), encoding="utf-8")
"""

from __future__ import annotations

import logging
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

FRONTMATTER_DELIMITER = "---"


class PromptFormatError(ValueError):
    """Raised when a prompt's frontmatter cannot be parsed."""


class PromptMetadata(BaseModel):
    """Metadata from the YAML frontmatter of a prompt file.

    Attributes:
        id: Identifier recorded in the file
        description: Human-readable purpose of the prompt
        tags: Optional categorization tags
        created_at: ISO 8601 creation timestamp
        updated_at: ISO 8601 last update timestamp
        version: Semantic version string (e.g. "1.2.0")
        git_hash: Commit hash if the prompt is under version control
        parent_version: Previous version, for tracking prompt evolution
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(default="unknown", description="Prompt identifier")
    description: str = Field(default="", description="Human-readable description")
    tags: list[str] | None = Field(default=None, description="Categorization tags")
    created_at: str | None = Field(default=None, description="Creation timestamp")
    updated_at: str | None = Field(default=None, description="Last update timestamp")
    version: str | None = Field(default=None, description="Semantic version")
    git_hash: str | None = Field(default=None, description="Git commit hash")
    parent_version: str | None = Field(default=None, description="Previous version")

    @classmethod
    def placeholder(cls) -> "PromptMetadata":
        """Metadata used for prompt files without frontmatter."""
        return cls(id="unknown", description="No description")


def _stringify_scalars(data: dict[str, Any]) -> dict[str, Any]:
    # YAML turns `version: 1.0` and bare timestamps into floats/datetimes.
    result: dict[str, Any] = {}
    for key, value in data.items():
        if value is None or isinstance(value, (str, list)):
            result[key] = value
        else:
            result[key] = str(value)
    return result


def parse_prompt(content: str) -> tuple[PromptMetadata, str]:
    """Split prompt content into frontmatter metadata and body.

    Content without a leading ``---`` line (or without a closing one) is
    treated as a body with placeholder metadata.

    Raises:
        PromptFormatError: If the frontmatter is not a valid YAML mapping
    """
    lines = content.splitlines()
    if not lines or lines[0].strip() != FRONTMATTER_DELIMITER:
        return PromptMetadata.placeholder(), content

    end_index = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONTMATTER_DELIMITER:
            end_index = i
            break

    if end_index is None:
        return PromptMetadata.placeholder(), content

    yaml_content = "\n".join(lines[1:end_index])
    body = "\n".join(lines[end_index + 1 :]).strip()

    try:
        parsed = yaml.safe_load(yaml_content) or {}
    except yaml.YAMLError as exc:
        raise PromptFormatError(f"Failed to parse prompt metadata: {exc}") from exc

    if not isinstance(parsed, dict):
        raise PromptFormatError("Prompt metadata must be a YAML mapping")

    try:
        metadata = PromptMetadata(**_stringify_scalars(parsed))
    except ValidationError as exc:
        raise PromptFormatError(f"Invalid prompt metadata: {exc}") from exc

    return metadata, body


def render_prompt(metadata: PromptMetadata, body: str) -> str:
    """Serialize metadata and body back to a prompt file."""
    yaml_metadata = yaml.safe_dump(
        metadata.model_dump(exclude_none=True),
        sort_keys=False,
        allow_unicode=True,
    )
    return f"{FRONTMATTER_DELIMITER}\n{yaml_metadata}{FRONTMATTER_DELIMITER}\n\n{body}"
