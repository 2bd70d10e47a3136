"""Tests for the filter strategies (pure narrowing functions)."""
from design_guidance import filters
from design_guidance.knowledge import freeze

RECORD = freeze({"colorContrast": {"a": 1}, "focusStates": {"b": 2}, "bestPractices": ["x"]})
ENTRIES = freeze([
    {"name": "Card Grid", "usage": "Listings"},
    {"name": "Bento Grid", "usage": "Portfolios"},
    {"name": "Split Screen", "usage": "Comparison"},
])


class TestSlug:
    def test_spaces_to_hyphens(self):
        assert filters.slug("Visual Hierarchy") == "visual-hierarchy"

    def test_collapses_whitespace(self):
        assert filters.slug("  Hero   Sections ") == "hero-sections"


class TestExactKey:
    def test_hit(self):
        assert filters.exact_key(freeze({"hero": {"p": 1}}), "HERO") == {"p": 1}

    def test_miss(self):
        assert filters.exact_key(RECORD, "nope") is None


class TestSubstringOnKeys:
    def test_case_insensitive(self):
        assert filters.substring_on_keys(RECORD, "CONTRAST") == {"colorContrast": {"a": 1}}

    def test_preserves_order(self):
        assert list(filters.substring_on_keys(RECORD, "s")) == ["colorContrast", "focusStates", "bestPractices"]

    def test_no_match_is_empty(self):
        assert filters.substring_on_keys(RECORD, "zzz") == {}

    def test_returns_plain_values(self):
        out = filters.substring_on_keys(RECORD, "best")
        assert out["bestPractices"] == ["x"]


class TestListField:
    def test_hyphenated_match(self):
        assert filters.list_field_matches("Bento Grid", "bento-grid")

    def test_substring_match(self):
        assert filters.list_field_matches("Bento Grid", "bento")

    def test_no_match(self):
        assert not filters.list_field_matches("Bento Grid", "masonry")

    def test_narrowing_keeps_order(self):
        out = filters.substring_on_list_field(ENTRIES, "name", "grid")
        assert [e["name"] for e in out] == ["Card Grid", "Bento Grid"]


class TestMultiField:
    def test_any_field(self):
        out = filters.substring_on_fields(ENTRIES, ("name", "usage"), "portfolio")
        assert [e["name"] for e in out] == ["Bento Grid"]

    def test_tag_contains(self):
        entries = freeze([{"n": 1, "tags": ["dark", "minimal"]}, {"n": 2, "tags": ["saas"]}])
        assert filters.tag_contains(entries, "tags", "MINI") == [{"n": 1, "tags": ["dark", "minimal"]}]

    def test_field_contains(self):
        records = freeze({"a": {"style": "Clean, accessible"}, "b": {"style": "Playful"}})
        assert filters.field_contains(records, "style", "clean") == {"a": {"style": "Clean, accessible"}}
