"""Prompt storage and resolution."""

from .cache import TTLCache
from .config import MatchingConfig, StorageConfig
from .matcher import Ambiguous, Definite, Matcher, MatchResult, NoMatch, Prompt, ScoredPrompt, find
from .scoped_resolver import (
    BankScopedResolver,
    PromptSource,
    ScopedQuery,
    UnscopedQuery,
    parse_query,
    resolve_scoped,
)
from .scoring import DEFAULT_WEIGHTS, ScoreWeights, fuzzy_score, score
from .short_codes import assign_short_codes, generate_short_code
from .storage import (
    InvalidPromptNameError,
    PromptNotFoundError,
    PromptStorage,
    PromptStoreError,
)

__all__ = [
    "TTLCache",
    "MatchingConfig",
    "StorageConfig",
    "Ambiguous",
    "Definite",
    "Matcher",
    "MatchResult",
    "NoMatch",
    "Prompt",
    "ScoredPrompt",
    "find",
    "BankScopedResolver",
    "PromptSource",
    "ScopedQuery",
    "UnscopedQuery",
    "parse_query",
    "resolve_scoped",
    "DEFAULT_WEIGHTS",
    "ScoreWeights",
    "fuzzy_score",
    "score",
    "assign_short_codes",
    "generate_short_code",
    "InvalidPromptNameError",
    "PromptNotFoundError",
    "PromptStorage",
    "PromptStoreError",
]
