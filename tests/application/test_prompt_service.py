"""Tests for the prompt application service."""

import pytest

from promptbank.application import PromptApplicationService, PromptResolutionError
from promptbank.data import Ambiguous, Definite, MatchingConfig, NoMatch, PromptStoreError


@pytest.fixture
def service(library):
    matching = MatchingConfig(
        ambiguity_threshold=1000,
        max_suggestions=8,
        privileged_prefixes=("essentials/", "10x/"),
    )
    return PromptApplicationService(storage=library, matching=matching)


class TestBuildCandidates:
    def test_short_codes_follow_listing_order(self, service):
        candidates = service.build_candidates()
        assert [(p.name, p.short_code) for p in candidates] == [
            ("api", "a"),
            ("auth", "au"),
            ("auth-basic", "ab"),
            ("essentials/code-review", "er"),
            ("essentials/commit", "e"),
        ]

    def test_metadata_is_hydrated(self, service):
        by_name = {p.name: p for p in service.build_candidates()}
        assert by_name["api"].description == "REST API design"

    def test_unreadable_prompts_are_skipped(self, service, library):
        library.prompt_path("broken").write_text("---\nkey: [unclosed\n---\n", encoding="utf-8")
        names = [p.name for p in service.build_candidates()]
        assert "broken" not in names
        assert "api" in names


class TestResolve:
    def test_short_code(self, service):
        result = service.resolve("ab")
        assert isinstance(result, Definite)
        assert result.prompt.name == "auth-basic"

    def test_short_code_beats_fuzzy(self, service):
        assert service.resolve_name("a") == "api"

    def test_bank_fast_path(self, service):
        result = service.resolve("essentials/commit")
        assert isinstance(result, Definite)
        assert result.prompt.name == "essentials/commit"

    def test_bank_fuzzy(self, service):
        assert service.resolve_name("essentials/cr") == "essentials/code-review"

    def test_ambiguous(self, service):
        result = service.resolve("aut")
        assert isinstance(result, Ambiguous)
        assert [p.name for p in result.prompts] == ["auth", "auth-basic"]

    def test_find_ignores_bank_scoping(self, service):
        assert isinstance(service.find("essentials/commit"), Definite)
        assert isinstance(service.find("zzz999"), NoMatch)

    def test_empty_library(self, storage):
        service = PromptApplicationService(storage=storage, matching=MatchingConfig())
        assert isinstance(service.resolve("anything"), NoMatch)
        assert isinstance(service.resolve("team/anything"), NoMatch)


class TestResolveName:
    def test_ambiguous_raises_with_suggestions(self, service):
        with pytest.raises(PromptResolutionError, match="Multiple prompts") as exc_info:
            service.resolve_name("aut")
        assert [p.name for p in exc_info.value.suggestions] == ["auth", "auth-basic"]
        assert exc_info.value.query == "aut"

    def test_no_match_raises(self, service):
        with pytest.raises(PromptResolutionError, match="No prompt found matching 'zzz999'") as exc_info:
            service.resolve_name("zzz999")
        assert exc_info.value.suggestions == []


class TestShowAndList:
    def test_show(self, service):
        shown = service.show("essentials/com")
        assert shown["name"] == "essentials/commit"
        assert shown["body"] == "Write a commit message."
        assert shown["metadata"]["description"] == "Conventional commit message"

    def test_list_prompts(self, service):
        listing = service.list_prompts()
        assert listing["count"] == 5
        assert listing["prompts"][0] == {
            "name": "api",
            "short_code": "a",
            "description": "REST API design",
        }

    def test_show_malformed_bank_prompt_raises_store_error(self, service, library):
        library.prompt_path("essentials/broken").write_text("---\nkey: [unclosed\n---\n", encoding="utf-8")
        assert service.resolve_name("essentials/broken") == "essentials/broken"
        with pytest.raises(PromptStoreError, match="Could not parse"):
            service.show("essentials/broken")
