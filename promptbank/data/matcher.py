"""Tiered prompt matching.

Resolves a user query against a fixed snapshot of prompts:
1. Exact name match (case-sensitive)
2. Exact short code match
3. Fuzzy matching with heuristic scoring, deduplicated by name

A single fuzzy survivor, or a top scorer that beats the runner-up by more than
the ambiguity threshold, is a definite match. Otherwise the top candidates are
returned for disambiguation. ``find`` never raises; ambiguity and absence are
ordinary results for the caller to report.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

from .scoring import DEFAULT_WEIGHTS, ScoreWeights, fuzzy_score, score

logger = logging.getLogger(__name__)

DEFAULT_AMBIGUITY_THRESHOLD = 1000
DEFAULT_MAX_SUGGESTIONS = 8


@dataclass(frozen=True)
class Prompt:
    """A prompt with the metadata needed for matching and display."""

    name: str
    short_code: str = ""
    description: str = ""
    version: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    git_hash: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "short_code": self.short_code,
            "description": self.description,
            "version": self.version,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "git_hash": self.git_hash,
        }


@dataclass(frozen=True)
class ScoredPrompt:
    prompt: Prompt
    score: int


@dataclass(frozen=True)
class Definite:
    """Exactly one prompt matched."""

    prompt: Prompt
    kind: Literal["definite"] = field(default="definite", init=False)

    @property
    def prompts(self) -> list[Prompt]:
        return [self.prompt]

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "match_count": 1, "matches": [self.prompt.to_dict()]}


@dataclass(frozen=True)
class Ambiguous:
    """Several plausible prompts, ranked best first."""

    candidates: tuple[Prompt, ...]
    kind: Literal["ambiguous"] = field(default="ambiguous", init=False)

    @property
    def prompts(self) -> list[Prompt]:
        return list(self.candidates)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "match_count": len(self.candidates),
            "matches": [p.to_dict() for p in self.candidates],
        }


@dataclass(frozen=True)
class NoMatch:
    """Nothing matched the query."""

    kind: Literal["none"] = field(default="none", init=False)

    @property
    def prompts(self) -> list[Prompt]:
        return []

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "match_count": 0, "matches": []}


MatchResult = Definite | Ambiguous | NoMatch


class Matcher:
    """Finds prompts by name, short code or fuzzy query.

    The prompt list is copied at construction; later changes to the source
    list do not affect lookups.
    """

    def __init__(
        self,
        prompts: Iterable[Prompt],
        *,
        weights: ScoreWeights = DEFAULT_WEIGHTS,
        ambiguity_threshold: int = DEFAULT_AMBIGUITY_THRESHOLD,
        max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
    ) -> None:
        self._prompts: tuple[Prompt, ...] = tuple(prompts)
        self._weights = weights
        self._ambiguity_threshold = ambiguity_threshold
        self._max_suggestions = max(max_suggestions, 1)

    @property
    def prompts(self) -> tuple[Prompt, ...]:
        return self._prompts

    def rank(self, query: str) -> list[ScoredPrompt]:
        """Score every fuzzy match, best first.

        Equal scores keep the order of the prompt list.
        """
        scored: list[ScoredPrompt] = []
        for prompt in self._prompts:
            base = fuzzy_score(prompt.name, query)
            if base is None:
                continue
            scored.append(ScoredPrompt(prompt, score(prompt.name, query, base, self._weights)))

        # sort() is stable, so ties stay in insertion order
        scored.sort(key=lambda s: s.score, reverse=True)

        seen: set[str] = set()
        deduped: list[ScoredPrompt] = []
        for entry in scored:
            if entry.prompt.name in seen:
                continue
            seen.add(entry.prompt.name)
            deduped.append(entry)
        return deduped

    def find(self, query: str) -> MatchResult:
        """Resolve a query to a definite prompt, ranked suggestions, or nothing."""
        for prompt in self._prompts:
            if prompt.name == query:
                logger.debug("[Matcher] Exact name match for %r", query)
                return Definite(prompt)

        for prompt in self._prompts:
            if prompt.short_code and prompt.short_code == query:
                logger.debug("[Matcher] Short code match %r → %s", query, prompt.name)
                return Definite(prompt)

        ranked = self.rank(query)

        if not ranked:
            logger.debug("[Matcher] No match for %r", query)
            return NoMatch()

        if len(ranked) == 1:
            return Definite(ranked[0].prompt)

        top, runner_up = ranked[0], ranked[1]
        if top.score > runner_up.score + self._ambiguity_threshold:
            logger.debug(
                "[Matcher] %r resolved to %s (score %s vs %s)",
                query, top.prompt.name, top.score, runner_up.score,
            )
            return Definite(top.prompt)

        logger.debug("[Matcher] %r is ambiguous across %s candidates", query, len(ranked))
        return Ambiguous(tuple(entry.prompt for entry in ranked[: self._max_suggestions]))


def find(candidates: Sequence[Prompt], query: str) -> MatchResult:
    """Resolve ``query`` against ``candidates`` with default settings."""
    return Matcher(candidates).find(query)
