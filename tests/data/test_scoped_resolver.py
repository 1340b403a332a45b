"""Tests for bank-scoped resolution."""

import pytest

from promptbank.data.matcher import Ambiguous, Definite, NoMatch, Prompt
from promptbank.data.scoped_resolver import (
    BankScopedResolver,
    ScopedQuery,
    UnscopedQuery,
    parse_query,
    resolve_scoped,
)
from promptbank.data.short_codes import assign_short_codes


class FakeSource:
    """In-memory prompt source that records lookups."""

    def __init__(self, names):
        self.names = sorted(names)
        self.exists_calls = []
        self.bank_calls = []

    def prompt_exists(self, name):
        self.exists_calls.append(name)
        return name in self.names

    def list_bank_prompts(self, bank):
        self.bank_calls.append(bank)
        prefix = f"{bank}/"
        return [n for n in self.names if n.startswith(prefix) and n.count("/") == 1]


def candidates_for(source):
    return [Prompt(name=n, short_code=c) for n, c in assign_short_codes(source.names)]


def failing_candidates():
    raise AssertionError("candidate list should not be built")


class TestParseQuery:
    """Tests for the scoped/unscoped split."""

    def test_unscoped(self):
        assert parse_query("commit") == UnscopedQuery("commit")

    def test_scoped(self):
        parsed = parse_query("team/review")
        assert parsed == ScopedQuery(bank="team", item="review")
        assert parsed.full_name == "team/review"

    def test_splits_on_first_slash_only(self):
        assert parse_query("a/b/c") == ScopedQuery(bank="a", item="b/c")

    def test_empty_parts(self):
        assert parse_query("/") == ScopedQuery(bank="", item="")


class TestBankScopedResolver:
    """Tests for the three-step scoped resolution."""

    def test_exact_fast_path_skips_scoring(self):
        source = FakeSource(["team/shared", "team/shared-notes"])
        resolver = BankScopedResolver(source, failing_candidates)

        result = resolver.resolve("team/shared")

        assert isinstance(result, Definite)
        assert result.prompt.name == "team/shared"
        assert source.exists_calls == ["team/shared"]
        assert source.bank_calls == []

    def test_fast_path_reuses_hydrated_prompt(self):
        source = FakeSource(["team/shared"])
        candidates = [Prompt(name="team/shared", short_code="t", description="Shared notes")]

        result = BankScopedResolver(source, candidates).resolve("team/shared")

        assert isinstance(result, Definite)
        assert result.prompt.short_code == "t"
        assert result.prompt.description == "Shared notes"

    def test_fuzzy_within_bank(self):
        source = FakeSource(["essentials/commit", "essentials/code-review", "other/commit"])
        result = BankScopedResolver(source, failing_candidates).resolve("essentials/com")

        assert isinstance(result, Definite)
        assert result.prompt.name == "essentials/commit"
        assert source.bank_calls == ["essentials"]

    def test_bank_search_takes_best_even_on_tie(self):
        source = FakeSource(["essentials/review", "essentials/preview"])
        result = BankScopedResolver(source, failing_candidates).resolve("essentials/view")

        assert isinstance(result, Definite)
        assert result.prompt.name == "essentials/preview"

    def test_bank_search_ignores_other_banks(self):
        source = FakeSource(["essentials/commit", "other/commit-msg"])
        result = BankScopedResolver(source, failing_candidates).resolve("other/commit")

        assert isinstance(result, Definite)
        assert result.prompt.name == "other/commit-msg"

    def test_falls_back_when_bank_missing(self):
        source = FakeSource(["essentials/commit", "commit-msg"])
        result = BankScopedResolver(source, candidates_for(source)).resolve("ess/commit")

        assert isinstance(result, Definite)
        assert result.prompt.name == "essentials/commit"
        assert source.bank_calls == ["ess"]

    def test_falls_back_when_nothing_in_bank_matches(self):
        source = FakeSource(["essentials/commit", "team/zzz"])
        result = BankScopedResolver(source, candidates_for(source)).resolve("team/commit")

        assert isinstance(result, NoMatch)

    def test_bank_only_query_does_not_pick_first_prompt(self):
        source = FakeSource(["team/alpha", "team/beta", "team/gamma"])
        result = BankScopedResolver(source, []).resolve("team/")

        assert isinstance(result, NoMatch)
        assert source.bank_calls == []

    def test_bank_only_query_falls_back_to_library_ranking(self):
        source = FakeSource(["team/alpha", "team/beta"])
        result = BankScopedResolver(source, candidates_for(source)).resolve("team/")

        assert isinstance(result, Ambiguous)
        assert [p.name for p in result.prompts] == ["team/alpha", "team/beta"]

    def test_unscoped_goes_to_matcher(self):
        source = FakeSource(["essentials/commit", "commit-msg"])
        result = BankScopedResolver(source, candidates_for(source)).resolve("commit")

        assert isinstance(result, Definite)
        assert result.prompt.name == "commit-msg"
        assert source.exists_calls == []

    def test_unscoped_keeps_ambiguity(self):
        source = FakeSource(["auth", "auth-basic"])
        result = BankScopedResolver(source, candidates_for(source)).resolve("aut")

        assert isinstance(result, Ambiguous)
        assert [p.name for p in result.prompts] == ["auth", "auth-basic"]

    def test_lazy_candidates_built_once(self):
        source = FakeSource(["alpha", "beta"])
        calls = []

        def build():
            calls.append(1)
            return candidates_for(source)

        resolver = BankScopedResolver(source, build)
        resolver.resolve("alpha")
        resolver.resolve("beta")

        assert calls == [1]

    @pytest.mark.parametrize("query", ["/", "team/", "/shared", "a/b/c", "(*?[/x"])
    def test_odd_queries_do_not_raise(self, query):
        source = FakeSource(["team/shared", "alpha"])
        result = BankScopedResolver(source, candidates_for(source)).resolve(query)
        assert isinstance(result, (Definite, Ambiguous, NoMatch))

    def test_empty_library(self):
        source = FakeSource([])
        assert isinstance(resolve_scoped(source, [], "team/shared"), NoMatch)
        assert isinstance(resolve_scoped(source, [], "shared"), NoMatch)

    def test_resolve_scoped_function(self):
        source = FakeSource(["team/shared"])
        result = resolve_scoped(source, candidates_for(source), "team/sh")
        assert isinstance(result, Definite)
        assert result.prompt.name == "team/shared"
