"""Tests for order and filter parsing."""

import pytest

from pipeline.parameter_normalizer import FilterParser, parse_filter, parse_order
from value_objects import OrderSpec, Predicate, PredicateOperator, SortDirection


class TestParseOrder:
    """Test "Field [DESC]" order expressions."""

    def test_desc_suffix(self):
        assert parse_order("PublishDate DESC") == OrderSpec("PublishDate", SortDirection.DESCENDING)

    def test_desc_is_case_insensitive(self):
        order = parse_order("title desc")
        assert order.field == "title"
        assert order.descending

    def test_field_only_is_ascending(self):
        assert parse_order("Title") == OrderSpec("Title", SortDirection.ASCENDING)

    def test_other_direction_token_is_ascending(self):
        assert not parse_order("Title ASC").descending
        assert not parse_order("Title sideways").descending

    def test_extra_whitespace(self):
        assert parse_order("  Title   DESC ") == OrderSpec("Title", SortDirection.DESCENDING)

    @pytest.mark.parametrize("expression", [None, "", "   "])
    def test_empty_means_no_ordering(self, expression):
        assert parse_order(expression) is None


class TestFilterParser:
    """Test single-clause filter expressions."""

    def test_equals_strips_quotes(self):
        result = parse_filter('Title="Intro"')
        assert result.predicates == (Predicate.equals("Title", "Intro"),)
        assert result.diagnostic is None

    def test_equals_single_quotes(self):
        result = parse_filter("Title = 'Intro'")
        assert result.predicates == (Predicate.equals("Title", "Intro"),)

    def test_strips_only_one_pair_of_quotes(self):
        result = parse_filter('Title=""Intro""')
        assert result.predicates[0].literal == '"Intro"'

    def test_mismatched_quotes_kept(self):
        result = parse_filter("Title=\"Intro'")
        assert result.predicates[0].literal == "\"Intro'"

    def test_contains(self):
        result = parse_filter('Title Contains "Intro"')
        predicate = result.predicates[0]
        assert predicate.operator is PredicateOperator.CONTAINS
        assert predicate.field == "Title"
        assert predicate.literal == "Intro"

    def test_contains_keyword_is_case_insensitive(self):
        result = parse_filter("Title contains coffee")
        assert result.predicates == (Predicate.contains("Title", "coffee"),)

    def test_greater_than_degrades_to_equals(self):
        result = parse_filter("Price>100")
        assert result.predicates == (Predicate.equals("Price", "100"),)

    def test_less_than_renders_integer_canonically(self):
        result = parse_filter("Price < 007")
        assert result.predicates == (Predicate.equals("Price", "7"),)

    def test_comparison_keeps_date_literal(self):
        result = parse_filter("PublishDate > 2024-01-01")
        assert result.predicates == (Predicate.equals("PublishDate", "2024-01-01"),)

    def test_equals_takes_precedence(self):
        result = parse_filter("Title=a>b")
        assert result.predicates == (Predicate.equals("Title", "a>b"),)

    def test_garbage_is_ignored_with_diagnostic(self):
        result = parse_filter("this is not a filter")
        assert result.ignored
        assert "Filter ignored" in result.diagnostic

    def test_too_many_operands_ignored(self):
        result = parse_filter("a=b=c")
        assert result.ignored
        assert "a=b=c" in result.diagnostic

    def test_missing_field_ignored(self):
        assert parse_filter("=value").ignored

    @pytest.mark.parametrize("expression", [None, "", "  "])
    def test_empty_filter_has_no_diagnostic(self, expression):
        result = FilterParser().parse(expression)
        assert result.ignored
        assert result.diagnostic is None
