"""Configuration for prompt storage and matching."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path

from .matcher import DEFAULT_AMBIGUITY_THRESHOLD, DEFAULT_MAX_SUGGESTIONS
from .scoring import ScoreWeights

DEFAULT_PRIVILEGED_BANKS = "essentials,10x"
_DEFAULT_BASE_DIR = Path.home() / ".promptbank"


def _get_base_dir() -> Path:
    """Resolve the prompt library directory.

    Priority:
    1. Explicit `PROMPTBANK_BASE_DIR` env override.
    2. `~/.promptbank`.
    """
    explicit = os.getenv("PROMPTBANK_BASE_DIR")
    if explicit:
        return Path(explicit).expanduser()
    return _DEFAULT_BASE_DIR


def _get_privileged_prefixes() -> tuple[str, ...]:
    raw = os.getenv("PROMPTBANK_PRIVILEGED_BANKS", DEFAULT_PRIVILEGED_BANKS)
    banks = [b.strip().strip("/").lower() for b in raw.split(",")]
    return tuple(f"{bank}/" for bank in banks if bank)


@dataclass(frozen=True)
class StorageConfig:
    base_dir: Path = field(default_factory=_get_base_dir)
    # 0 disables the listing cache
    listing_cache_ttl_s: float = field(
        default_factory=lambda: float(os.getenv("PROMPTBANK_LISTING_CACHE_TTL_S", "0"))
    )


@dataclass(frozen=True)
class MatchingConfig:
    ambiguity_threshold: int = field(
        default_factory=lambda: int(
            os.getenv("PROMPTBANK_AMBIGUITY_THRESHOLD", str(DEFAULT_AMBIGUITY_THRESHOLD))
        )
    )
    max_suggestions: int = field(
        default_factory=lambda: int(
            os.getenv("PROMPTBANK_MAX_SUGGESTIONS", str(DEFAULT_MAX_SUGGESTIONS))
        )
    )
    privileged_prefixes: tuple[str, ...] = field(default_factory=_get_privileged_prefixes)

    def weights(self) -> ScoreWeights:
        return ScoreWeights(privileged_prefixes=self.privileged_prefixes)
