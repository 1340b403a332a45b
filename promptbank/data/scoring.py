"""Relevance scoring for prompt name matching.

Two layers:
- ``fuzzy_score``: base subsequence score. Every query character must appear
  in the candidate in order; the best alignment is rewarded for consecutive
  runs and for landing on word boundaries, and penalised for gaps.
- ``score``: deterministic heuristic adjustments on top of the base score that
  bias towards short, canonical, prefix-matching, bank-qualified names.

The adjustment weights live in ``ScoreWeights`` so they can be tuned and tested
independently of the tiering logic in ``matcher``. The ambiguity threshold used
by the matcher depends on the gap between these weights, so their relative
ordering must be kept: prefix > namespace-qualified > word-boundary > length.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# Base fuzzy score constants
SCORE_MATCH = 16
SCORE_GAP_START = -3
SCORE_GAP_EXTENSION = -1
BONUS_BOUNDARY = SCORE_MATCH // 2
BONUS_NON_WORD = SCORE_MATCH // 2
BONUS_CAMEL = BONUS_BOUNDARY + SCORE_GAP_EXTENSION
BONUS_CONSECUTIVE = -(SCORE_GAP_START + SCORE_GAP_EXTENSION)
BONUS_FIRST_CHAR_MULTIPLIER = 2

_NEG_INF = float("-inf")
_TOKEN_SPLIT_RE = re.compile(r"[-/_ ]")

# Character classes for boundary bonuses
_NON_WORD, _LOWER, _UPPER, _NUMBER = range(4)


@dataclass(frozen=True)
class ScoreWeights:
    """Bonus table applied on top of the base fuzzy score."""

    prefix: int = 2000
    namespace_qualified: int = 1500
    word_boundary: int = 1000
    short_name: int = 300
    privileged_namespace: int = 200
    long_name_penalty: int = 200
    short_name_length: int = 20
    long_name_length: int = 50
    privileged_prefixes: tuple[str, ...] = ("essentials/", "10x/")

    def preserves_ordering(self) -> bool:
        """Check that the bonus strengths keep their required relative order."""
        return (
            self.prefix > self.namespace_qualified > self.word_boundary > self.short_name
            and self.word_boundary > self.privileged_namespace
        )

    def as_dict(self) -> dict[str, int]:
        return {
            "prefix": self.prefix,
            "namespace_qualified": self.namespace_qualified,
            "word_boundary": self.word_boundary,
            "short_name": self.short_name,
            "privileged_namespace": self.privileged_namespace,
            "long_name_penalty": -self.long_name_penalty,
        }


DEFAULT_WEIGHTS = ScoreWeights()


def _char_class(char: str) -> int:
    if char.islower():
        return _LOWER
    if char.isupper():
        return _UPPER
    if char.isdigit():
        return _NUMBER
    if char.isalpha():
        return _LOWER
    return _NON_WORD


def _position_bonus(prev_class: int, cur_class: int) -> int:
    if prev_class == _NON_WORD and cur_class != _NON_WORD:
        return BONUS_BOUNDARY
    if (prev_class == _LOWER and cur_class == _UPPER) or (
        prev_class != _NUMBER and cur_class == _NUMBER
    ):
        return BONUS_CAMEL
    if cur_class == _NON_WORD:
        return BONUS_NON_WORD
    return 0


def _lower_chars(value: str) -> str:
    # Keep one char per position so bonuses stay aligned with the candidate.
    return "".join(char.lower()[:1] for char in value)


def is_subsequence(query: str, text: str) -> bool:
    """Check if query is a subsequence of text (chars in order, not necessarily adjacent)."""
    it = iter(text)
    return all(char in it for char in query)


def fuzzy_score(candidate: str, query: str) -> int | None:
    """Score ``query`` as a subsequence of ``candidate``.

    Returns ``None`` when the query is not a subsequence of the candidate.
    Matching is case-insensitive unless the query contains an uppercase
    character. An empty query matches everything with a score of 0.
    """
    if not query:
        return 0

    case_sensitive = any(c.isupper() for c in query)
    text = candidate if case_sensitive else _lower_chars(candidate)
    pattern = query if case_sensitive else _lower_chars(query)

    if len(pattern) > len(text) or not is_subsequence(pattern, text):
        return None

    bonuses: list[int] = []
    prev_class = _NON_WORD
    for char in candidate:
        cur_class = _char_class(char)
        bonuses.append(_position_bonus(prev_class, cur_class))
        prev_class = cur_class

    n = len(text)
    prev_row: list[float] = []
    for i, q_char in enumerate(pattern):
        row: list[float] = [_NEG_INF] * n
        gap_carry = _NEG_INF
        for j, t_char in enumerate(text):
            if i > 0 and j >= 2:
                gap_carry = max(
                    gap_carry + SCORE_GAP_EXTENSION,
                    prev_row[j - 2] + SCORE_GAP_START,
                )
            if t_char != q_char:
                continue

            if i == 0:
                row[j] = SCORE_MATCH + bonuses[j] * BONUS_FIRST_CHAR_MULTIPLIER
                continue

            best = _NEG_INF
            if j >= 1 and prev_row[j - 1] != _NEG_INF:
                best = prev_row[j - 1] + SCORE_MATCH + max(bonuses[j], BONUS_CONSECUTIVE)
            if gap_carry != _NEG_INF:
                best = max(best, gap_carry + SCORE_MATCH + bonuses[j])
            row[j] = best
        prev_row = row

    result = max(prev_row)
    if result == _NEG_INF:
        return None
    return int(result)


def score(
    candidate_name: str,
    query: str,
    base_fuzzy_score: int,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> int:
    """Apply heuristic adjustments to a base fuzzy score."""
    total = base_fuzzy_score
    name_lower = candidate_name.lower()
    query_lower = query.lower()

    # Prefix match, e.g. "ap" → "api-design"
    if name_lower.startswith(query_lower):
        total += weights.prefix

    # Word boundary match, e.g. "rev" → "team/code-review"
    if any(token.startswith(query_lower) for token in _TOKEN_SPLIT_RE.split(name_lower)):
        total += weights.word_boundary

    # Bank-qualified query, e.g. "ess/com" → "essentials/commit"
    if query_lower.count("/") == 1:
        bank_part, item_part = query_lower.split("/")
        if name_lower.startswith(bank_part) and item_part in name_lower:
            total += weights.namespace_qualified

    if len(candidate_name) < weights.short_name_length:
        total += weights.short_name

    if name_lower.startswith(weights.privileged_prefixes):
        total += weights.privileged_namespace

    if len(candidate_name) > weights.long_name_length:
        total -= weights.long_name_penalty

    return total
