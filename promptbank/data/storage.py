"""Filesystem prompt store.

Layout under the base directory:
    prompts/<name>.md            loose prompts
    banks/<bank>/<name>.md       bank prompts, addressed as "bank/name"
    banks/<bank>/<sub>/<name>.md nested bank prompts, "bank/sub/name"

Listings are sorted so that short code assignment and tie-breaking in the
matcher are reproducible between runs.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from promptbank.core.schema import (
    PromptFormatError,
    PromptMetadata,
    parse_prompt,
    render_prompt,
)

from .cache import TTLCache
from .config import StorageConfig

logger = logging.getLogger(__name__)

PROMPT_SUFFIX = ".md"
_ALL_PROMPTS_KEY = "all"
_INVALID_COMPONENTS = {"", ".", ".."}


class PromptStoreError(Exception):
    """Base error for prompt store operations."""


class PromptNotFoundError(PromptStoreError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Prompt '{name}' does not exist")
        self.name = name


class InvalidPromptNameError(PromptStoreError, ValueError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Invalid prompt name: '{name}'")
        self.name = name


def _split_name(name: str) -> list[str]:
    parts = name.split("/")
    for part in parts:
        if part in _INVALID_COMPONENTS or "\\" in part or "\x00" in part or part.startswith("."):
            raise InvalidPromptNameError(name)
    return parts


def _bank_key(bank: str) -> str:
    return f"bank:{bank}"


def _bank_of(name: str) -> tuple[str, ...]:
    bank, sep, _ = name.partition("/")
    return (bank,) if sep else ()


class PromptStorage:
    """Reads and writes prompts as markdown files with YAML frontmatter."""

    def __init__(self, base_dir: Path, *, listing_cache_ttl_s: float = 0.0) -> None:
        self._base_dir = base_dir
        self._listings = TTLCache(listing_cache_ttl_s)

    @classmethod
    def from_env(cls) -> "PromptStorage":
        config = StorageConfig()
        return cls(config.base_dir, listing_cache_ttl_s=config.listing_cache_ttl_s)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    @property
    def prompts_dir(self) -> Path:
        return self._base_dir / "prompts"

    @property
    def banks_dir(self) -> Path:
        return self._base_dir / "banks"

    def init(self) -> None:
        """Create the directory layout if missing."""
        self.prompts_dir.mkdir(parents=True, exist_ok=True)
        self.banks_dir.mkdir(parents=True, exist_ok=True)

    def prompt_path(self, name: str) -> Path:
        parts = _split_name(name)
        if len(parts) == 1:
            return self.prompts_dir / f"{parts[0]}{PROMPT_SUFFIX}"
        return self.banks_dir.joinpath(*parts[:-1]) / f"{parts[-1]}{PROMPT_SUFFIX}"

    def _bank_dir(self, bank: str) -> Path:
        parts = _split_name(bank)
        if len(parts) != 1:
            raise InvalidPromptNameError(bank)
        return self.banks_dir / bank

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def list_prompts(self) -> list[str]:
        """All prompt names, loose and bank-qualified, sorted."""
        cached = self._listings.get(_ALL_PROMPTS_KEY)
        if cached is not None:
            return list(cached)

        names: list[str] = []
        if self.prompts_dir.is_dir():
            for path in self.prompts_dir.iterdir():
                if path.is_file() and path.suffix == PROMPT_SUFFIX:
                    names.append(path.stem)

        if self.banks_dir.is_dir():
            for bank_path in self.banks_dir.iterdir():
                if bank_path.is_dir() and not bank_path.name.startswith("."):
                    self._collect_bank(bank_path, bank_path.name, names)

        names.sort()
        self._listings.set(_ALL_PROMPTS_KEY, tuple(names))
        return names

    def _collect_bank(self, directory: Path, prefix: str, names: list[str]) -> None:
        for path in directory.iterdir():
            if path.name.startswith("."):
                continue
            if path.is_dir():
                self._collect_bank(path, f"{prefix}/{path.name}", names)
            elif path.suffix == PROMPT_SUFFIX and path.stem.lower() != "readme":
                names.append(f"{prefix}/{path.stem}")

    def list_bank_prompts(self, bank: str) -> list[str]:
        """Names of prompts directly inside a bank, as ``bank/name``, sorted."""
        try:
            bank_dir = self._bank_dir(bank)
        except InvalidPromptNameError:
            return []

        key = _bank_key(bank)
        cached = self._listings.get(key)
        if cached is not None:
            return list(cached)

        names: list[str] = []
        if bank_dir.is_dir():
            for path in bank_dir.iterdir():
                if path.is_file() and path.suffix == PROMPT_SUFFIX:
                    names.append(f"{bank}/{path.stem}")

        names.sort()
        self._listings.set(key, tuple(names))
        return names

    def list_banks(self) -> list[str]:
        if not self.banks_dir.is_dir():
            return []
        return sorted(
            p.name for p in self.banks_dir.iterdir() if p.is_dir() and not p.name.startswith(".")
        )

    def prompt_exists(self, name: str) -> bool:
        try:
            return self.prompt_path(name).is_file()
        except InvalidPromptNameError:
            return False

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def read_prompt(self, name: str) -> tuple[PromptMetadata, str]:
        path = self.prompt_path(name)
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise PromptNotFoundError(name) from exc
        except OSError as exc:
            raise PromptStoreError(f"Could not read prompt '{name}': {exc}") from exc

        try:
            return parse_prompt(content)
        except PromptFormatError as exc:
            raise PromptStoreError(f"Could not parse prompt '{name}': {exc}") from exc

    def read_prompt_metadata(self, name: str) -> PromptMetadata:
        metadata, _ = self.read_prompt(name)
        return metadata

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def _invalidate_listings(self, *banks: str) -> None:
        """Drop the full listing and the listings of the touched banks."""
        self._listings.invalidate(_ALL_PROMPTS_KEY)
        for bank in banks:
            self._listings.invalidate(_bank_key(bank))

    def write_prompt(self, name: str, metadata: PromptMetadata, body: str) -> None:
        path = self.prompt_path(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_prompt(metadata, body), encoding="utf-8")
        self._invalidate_listings(*_bank_of(name))
        logger.debug("[PromptStorage] Wrote %s", path)

    def write_prompt_metadata(self, name: str, metadata: PromptMetadata) -> None:
        _, body = self.read_prompt(name)
        self.write_prompt(name, metadata, body)

    def delete_prompt(self, name: str) -> None:
        path = self.prompt_path(name)
        if not path.is_file():
            raise PromptNotFoundError(name)
        path.unlink()
        self._invalidate_listings(*_bank_of(name))
        logger.info("[PromptStorage] Deleted prompt %s", name)

    def delete_bank(self, bank: str) -> None:
        bank_dir = self._bank_dir(bank)
        if not bank_dir.exists():
            raise PromptStoreError(f"Bank '{bank}' does not exist")
        if not bank_dir.is_dir():
            raise PromptStoreError(f"'{bank}' is not a directory")
        if any(bank_dir.iterdir()):
            raise PromptStoreError(f"Bank '{bank}' is not empty. Delete all prompts first.")
        bank_dir.rmdir()
        self._invalidate_listings(bank)
        logger.info("[PromptStorage] Deleted bank %s", bank)

    def rename_bank(self, old_name: str, new_name: str) -> None:
        old_dir = self._bank_dir(old_name)
        new_dir = self._bank_dir(new_name)
        if not old_dir.exists():
            raise PromptStoreError(f"Bank '{old_name}' does not exist")
        if new_dir.exists():
            raise PromptStoreError(f"Bank '{new_name}' already exists")
        shutil.move(str(old_dir), str(new_dir))
        self._invalidate_listings(old_name, new_name)
        logger.info("[PromptStorage] Renamed bank %s → %s", old_name, new_name)
