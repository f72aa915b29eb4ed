"""Tests for recursive matching."""

import pytest

from anchor.errors import (
    MalformedSchemaError,
    MaxDepthExceededError,
    UnknownRuleError,
    ValidationFailure,
)
from anchor.validation.engine import DeepMatcher
from anchor.validation.framework import ValidationContext
from anchor.validation.matcher import Matcher
from anchor.validation.predicates import BUILTIN_PREDICATES
from anchor.validation.registry import RuleRegistry
from anchor.validation.ruleset import UNDEFINED, EachOf, Named


def _nest(rule, levels):
    for _ in range(levels):
        rule = [rule]
    return rule


def _nest_data(value, levels):
    for _ in range(levels):
        value = [value]
    return value


@pytest.fixture
def visited():
    return []


@pytest.fixture
def deep_matcher(visited):
    """Deep matcher with an extra 'tracked' rule recording every datum it sees."""
    def tracked(x):
        visited.append(x)
        return x != "bad"

    registry = RuleRegistry(BUILTIN_PREDICATES)
    registry.register("tracked", tracked)
    return DeepMatcher(Matcher(registry.freeze()))


def _context(data=None, on_error=None):
    return ValidationContext(data=data, on_error=on_error)


class TestLeafDelegation:
    """Test that scalar rulesets go straight to the matcher."""

    def test_scalar_pass(self, deep_matcher):
        assert deep_matcher.deep_match(5, "number", _context(5)) is True

    def test_scalar_fail(self, deep_matcher):
        with pytest.raises(ValidationFailure):
            deep_matcher.deep_match("5", "number", _context("5"))

    def test_unknown_rule(self, deep_matcher):
        with pytest.raises(UnknownRuleError):
            deep_matcher.deep_match(5, "bogus", _context(5))


class TestArraySchema:
    """Test each-element matching."""

    def test_empty_sequence_is_vacuously_valid(self, deep_matcher):
        assert deep_matcher.deep_match([], ["bogus"], _context([])) is True

    def test_all_elements_match(self, deep_matcher):
        assert deep_matcher.deep_match([1, 2, 3], ["integer"], _context())

    def test_one_element_fails(self, deep_matcher):
        with pytest.raises(ValidationFailure) as exc_info:
            deep_matcher.deep_match([1, "x", 3], ["integer"], _context())
        assert exc_info.value.datum == "x"

    def test_non_sequence_data(self, deep_matcher):
        with pytest.raises(ValidationFailure) as exc_info:
            deep_matcher.deep_match("abc", ["string"], _context())
        assert exc_info.value.rule == "array"

    def test_stops_at_first_failure(self, deep_matcher, visited):
        with pytest.raises(ValidationFailure):
            deep_matcher.deep_match(["a", "bad", "c"], ["tracked"], _context())
        assert visited == ["a", "bad"]

    def test_large_array(self, deep_matcher):
        data = list(range(20000))
        assert deep_matcher.deep_match(data, ["integer"], _context(data))

    def test_malformed_schema_ignores_data(self, deep_matcher):
        with pytest.raises(MalformedSchemaError):
            deep_matcher.deep_match([], ["string", "number"], _context([]))


class TestObjectSchema:
    """Test keyed matching."""

    def test_all_keys_match(self, deep_matcher):
        data = {"name": "Al", "age": 30}
        assert deep_matcher.deep_match(data, {"name": "string", "age": "integer"}, _context(data))

    def test_missing_key_fails(self, deep_matcher):
        with pytest.raises(ValidationFailure) as exc_info:
            deep_matcher.deep_match({}, {"a": "string"}, _context({}))
        assert exc_info.value.datum is UNDEFINED
        assert exc_info.value.rule == "string"

    def test_missing_key_satisfies_undefined(self, deep_matcher):
        assert deep_matcher.deep_match({}, {"a": "undefined"}, _context({}))

    def test_extra_data_keys_are_ignored(self, deep_matcher):
        data = {"a": "x", "b": 1}
        assert deep_matcher.deep_match(data, {"a": "string"}, _context(data))

    def test_non_mapping_data(self, deep_matcher):
        with pytest.raises(ValidationFailure):
            deep_matcher.deep_match(5, {"a": "number"}, _context(5))

    def test_integer_keys_index_sequences(self, deep_matcher):
        data = ["a", 2]
        assert deep_matcher.deep_match(data, {0: "string", 1: "integer"}, _context(data))
        assert deep_matcher.deep_match(("a",), {0: "string"}, _context(("a",)))

    def test_out_of_range_index_is_undefined(self, deep_matcher):
        data = ["a"]
        assert deep_matcher.deep_match(data, {1: "undefined", -1: "undefined"}, _context(data))
        with pytest.raises(ValidationFailure) as exc_info:
            deep_matcher.deep_match(data, {"0": "string"}, _context(data))
        assert exc_info.value.datum is UNDEFINED

    def test_keys_visited_in_schema_order(self, deep_matcher, visited):
        data = {"a": "first", "b": "bad", "c": "third"}
        ruleset = {"c": "tracked", "b": "tracked", "a": "tracked"}

        with pytest.raises(ValidationFailure):
            deep_matcher.deep_match(data, ruleset, _context(data))
        assert visited == ["third", "bad"]

    def test_nested_collections(self, deep_matcher):
        data = [{"id": 1}, {"id": "x"}]
        with pytest.raises(ValidationFailure) as exc_info:
            deep_matcher.deep_match(data, [{"id": "integer"}], _context(data))
        assert exc_info.value.datum == "x"

    def test_self_referential_data(self, deep_matcher):
        data = {}
        data["self"] = data
        assert deep_matcher.deep_match(data, {"self": {"self": {}}}, _context(data))


class TestDepthGuard:
    """Test the maximum recursion depth."""

    def test_fifty_levels_pass(self, deep_matcher):
        data = _nest_data("x", 50)
        assert deep_matcher.deep_match(data, _nest("string", 50), _context(data))

    def test_fifty_one_levels_raise(self, deep_matcher):
        data = _nest_data("x", 51)
        with pytest.raises(MaxDepthExceededError):
            deep_matcher.deep_match(data, _nest("string", 51), _context(data))

    def test_depth_guard_ignores_data_shape(self, deep_matcher):
        with pytest.raises(MaxDepthExceededError):
            deep_matcher.deep_match([], _nest("string", 51), _context([]))

    def test_starting_depth_counts(self, deep_matcher):
        assert deep_matcher.deep_match("x", "string", _context("x"), depth=50)
        with pytest.raises(MaxDepthExceededError):
            deep_matcher.deep_match("x", "string", _context("x"), depth=51)

    def test_guard_on_parsed_tree(self):
        deep_matcher = DeepMatcher(Matcher(RuleRegistry.builtin().freeze()), max_depth=1)
        node = EachOf(EachOf(Named("string")))

        with pytest.raises(MaxDepthExceededError) as exc_info:
            deep_matcher.deep_match([["x"]], node, _context())
        assert exc_info.value.max_depth == 1

    def test_guard_failure_goes_to_handler(self, deep_matcher):
        recorded = []
        outcome = deep_matcher.deep_match([], _nest("string", 51), _context([], recorded.append))

        assert outcome is None
        assert len(recorded) == 1
        assert isinstance(recorded[0], MaxDepthExceededError)


class TestFailureHandler:
    """Test that one handler governs the whole traversal."""

    def test_handler_called_once(self, deep_matcher):
        recorded = []
        data = ["x", "y", "z"]
        outcome = deep_matcher.deep_match(data, ["number"], _context(data, recorded.append))

        assert outcome is None
        assert len(recorded) == 1
        assert recorded[0].datum == "x"

    def test_handler_return_value_is_returned(self, deep_matcher):
        outcome = deep_matcher.deep_match("5", "number", _context("5", lambda error: "nope"))
        assert outcome == "nope"

    def test_schema_errors_go_to_handler(self, deep_matcher):
        recorded = []
        deep_matcher.deep_match([], ["a", "b"], _context([], recorded.append))
        assert isinstance(recorded[0], MalformedSchemaError)
