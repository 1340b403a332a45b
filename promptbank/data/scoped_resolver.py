"""Bank-scoped prompt resolution.

Queries shaped like ``bank/prompt`` are resolved in three steps:
1. Exact existence check for the literal name (no scoring)
2. Best fuzzy match among the bank's own prompts, compared without the
   ``bank/`` prefix; the highest scorer wins outright
3. Whole-library ``Matcher.find`` over the full candidate list

Unscoped queries go straight to step 3. Bank qualification already narrows
intent, so step 2 has no ambiguity threshold; the whole-library fallback keeps
the definite/ambiguous/none outcomes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from .matcher import (
    DEFAULT_AMBIGUITY_THRESHOLD,
    DEFAULT_MAX_SUGGESTIONS,
    Definite,
    Matcher,
    MatchResult,
    Prompt,
)
from .scoring import DEFAULT_WEIGHTS, ScoreWeights, fuzzy_score, score

logger = logging.getLogger(__name__)

Candidates = Sequence[Prompt] | Callable[[], Sequence[Prompt]]


class PromptSource(Protocol):
    """Read-only view of a prompt store used for bank-scoped lookups."""

    def prompt_exists(self, name: str) -> bool: ...

    def list_bank_prompts(self, bank: str) -> list[str]: ...


@dataclass(frozen=True)
class ScopedQuery:
    bank: str
    item: str

    @property
    def full_name(self) -> str:
        return f"{self.bank}/{self.item}"


@dataclass(frozen=True)
class UnscopedQuery:
    text: str


def parse_query(query: str) -> ScopedQuery | UnscopedQuery:
    """Split ``bank/prompt`` on the first slash; anything else is unscoped."""
    if "/" not in query:
        return UnscopedQuery(query)
    bank, item = query.split("/", 1)
    return ScopedQuery(bank=bank, item=item)


class BankScopedResolver:
    """Resolves ``bank/prompt`` queries before falling back to a full-library match.

    ``candidates`` may be a prompt sequence or a zero-argument callable that
    builds one. A callable is only invoked when the fallback is reached, so the
    existence fast path never loads the whole library.
    """

    def __init__(
        self,
        source: PromptSource,
        candidates: Candidates,
        *,
        weights: ScoreWeights = DEFAULT_WEIGHTS,
        ambiguity_threshold: int = DEFAULT_AMBIGUITY_THRESHOLD,
        max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
    ) -> None:
        self._source = source
        self._candidates = candidates
        self._weights = weights
        self._ambiguity_threshold = ambiguity_threshold
        self._max_suggestions = max_suggestions

    def _materialize(self) -> Sequence[Prompt]:
        if callable(self._candidates):
            self._candidates = tuple(self._candidates())
        return self._candidates

    def _as_prompt(self, name: str) -> Prompt:
        # Only reuse hydrated prompts that are already built.
        if not callable(self._candidates):
            for prompt in self._candidates:
                if prompt.name == name:
                    return prompt
        return Prompt(name=name)

    def _best_in_bank(self, scoped: ScopedQuery) -> str | None:
        # An empty item scores every prompt equally; there is no best.
        if not scoped.item:
            return None
        prefix = f"{scoped.bank}/"
        best_name: str | None = None
        best_score: int | None = None
        for name in self._source.list_bank_prompts(scoped.bank):
            item_part = name[len(prefix):] if name.startswith(prefix) else name
            base = fuzzy_score(item_part, scoped.item)
            if base is None:
                continue
            adjusted = score(item_part, scoped.item, base, self._weights)
            if best_score is None or adjusted > best_score:
                best_name, best_score = name, adjusted
        return best_name

    def resolve(self, query: str) -> MatchResult:
        parsed = parse_query(query)

        if isinstance(parsed, ScopedQuery):
            if self._source.prompt_exists(parsed.full_name):
                logger.debug("[ScopedResolver] Exact bank match for %r", query)
                return Definite(self._as_prompt(parsed.full_name))

            best = self._best_in_bank(parsed)
            if best is not None:
                logger.debug("[ScopedResolver] %r resolved within bank to %s", query, best)
                return Definite(self._as_prompt(best))

            logger.debug("[ScopedResolver] Nothing in bank %r, searching all prompts", parsed.bank)

        matcher = Matcher(
            self._materialize(),
            weights=self._weights,
            ambiguity_threshold=self._ambiguity_threshold,
            max_suggestions=self._max_suggestions,
        )
        return matcher.find(query)


def resolve_scoped(source: PromptSource, candidates: Candidates, query: str) -> MatchResult:
    """Resolve ``query`` with bank scoping and default settings."""
    return BankScopedResolver(source, candidates).resolve(query)
