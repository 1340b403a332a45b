"""Application service for prompt lookup use-cases."""

from __future__ import annotations

import logging
from typing import Any

from promptbank.data import (
    Ambiguous,
    BankScopedResolver,
    Definite,
    Matcher,
    MatchingConfig,
    MatchResult,
    Prompt,
    PromptStorage,
    PromptStoreError,
    assign_short_codes,
)

logger = logging.getLogger(__name__)


class PromptResolutionError(Exception):
    """A query did not resolve to exactly one prompt."""

    def __init__(self, query: str, result: MatchResult) -> None:
        if isinstance(result, Ambiguous):
            message = f"Multiple prompts match '{query}'"
        else:
            message = f"No prompt found matching '{query}'"
        super().__init__(message)
        self.query = query
        self.result = result

    @property
    def suggestions(self) -> list[Prompt]:
        return self.result.prompts


class PromptApplicationService:
    """Builds candidate lists from the store and resolves queries against them."""

    def __init__(self, *, storage: PromptStorage, matching: MatchingConfig | None = None) -> None:
        self._storage = storage
        self._matching = matching or MatchingConfig()
        self._weights = self._matching.weights()

    def build_candidates(self) -> list[Prompt]:
        """Hydrate every stored prompt and assign short codes in listing order.

        Prompts that cannot be read are skipped so one broken file does not
        block lookups of the rest.
        """
        hydrated = []
        for name in self._storage.list_prompts():
            try:
                metadata, _ = self._storage.read_prompt(name)
            except PromptStoreError as exc:
                logger.warning("Skipping unreadable prompt %s: %s", name, exc)
                continue
            hydrated.append((name, metadata))

        codes = dict(assign_short_codes(name for name, _ in hydrated))
        return [
            Prompt(
                name=name,
                short_code=codes[name],
                description=metadata.description,
                version=metadata.version,
                created_at=metadata.created_at,
                updated_at=metadata.updated_at,
                git_hash=metadata.git_hash,
            )
            for name, metadata in hydrated
        ]

    def _matcher(self) -> Matcher:
        return Matcher(
            self.build_candidates(),
            weights=self._weights,
            ambiguity_threshold=self._matching.ambiguity_threshold,
            max_suggestions=self._matching.max_suggestions,
        )

    def find(self, query: str) -> MatchResult:
        """Whole-library match, ignoring bank scoping."""
        return self._matcher().find(query)

    def resolve(self, query: str) -> MatchResult:
        """Resolve a query, trying ``bank/prompt`` scoping first."""
        resolver = BankScopedResolver(
            self._storage,
            self.build_candidates,
            weights=self._weights,
            ambiguity_threshold=self._matching.ambiguity_threshold,
            max_suggestions=self._matching.max_suggestions,
        )
        return resolver.resolve(query)

    def resolve_name(self, query: str) -> str:
        """Resolve a query to a single prompt name.

        Raises:
            PromptResolutionError: If the query is ambiguous or matches nothing
        """
        result = self.resolve(query)
        if isinstance(result, Definite):
            return result.prompt.name
        raise PromptResolutionError(query, result)

    def show(self, query: str) -> dict[str, Any]:
        name = self.resolve_name(query)
        metadata, body = self._storage.read_prompt(name)
        return {
            "name": name,
            "metadata": metadata.model_dump(exclude_none=True),
            "body": body,
        }

    def list_prompts(self) -> dict[str, Any]:
        prompts = self.build_candidates()
        return {
            "count": len(prompts),
            "prompts": [
                {"name": p.name, "short_code": p.short_code, "description": p.description}
                for p in prompts
            ],
        }
