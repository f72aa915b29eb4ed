"""Leaf rule evaluation.

Resolution order for a leaf rule:

1. ``[]`` marker: "is array"
2. ``{}`` marker: "is object"
3. inline pattern: "is a string the pattern matches"
4. anything else: registry lookup by name
"""

import logging
from typing import TYPE_CHECKING, Any

from ..errors import AnchorError, PredicateInternalError, UnknownRuleError, ValidationFailure
from .predicates import Predicate, is_array, is_object, pattern_predicate
from .registry import RuleRegistry
from .ruleset import Leaf, Marker, Named, Pattern, is_leaf, parse_ruleset

if TYPE_CHECKING:
    from .framework import ValidationContext

logger = logging.getLogger(__name__)

_MARKER_PREDICATES: dict[str, Predicate] = {
    "array": is_array,
    "object": is_object,
}


class Matcher:
    """Evaluates one leaf rule against one datum."""

    def __init__(self, registry: RuleRegistry):
        self.registry = registry

    def resolve(self, rule: Leaf) -> Predicate:
        if isinstance(rule, Marker):
            predicate = _MARKER_PREDICATES.get(rule.kind)
            if predicate is None:
                raise UnknownRuleError(rule.kind)
            return predicate
        if isinstance(rule, Pattern):
            return pattern_predicate(rule.regex)
        return self.registry.resolve(rule.name)

    def evaluate(self, datum: Any, rule: Any) -> bool:
        """Run a leaf rule, raising on any failure.

        Raises:
            UnknownRuleError: If the rule name is not registered
            PredicateInternalError: If the predicate itself raised
            ValidationFailure: If the predicate rejected the datum
        """
        leaf = rule if is_leaf(rule) else parse_ruleset(rule)
        if not is_leaf(leaf):
            raise TypeError(f"Matcher evaluates leaf rules only, got {type(leaf).__name__}")

        predicate = self.resolve(leaf)
        argument = leaf.argument if isinstance(leaf, Named) else None

        try:
            outcome = predicate(datum) if argument is None else predicate(datum, argument)
        except AnchorError:
            raise
        except Exception as e:
            logger.debug(f"Predicate for rule '{leaf.identifier}' raised: {e}")
            raise PredicateInternalError(leaf.identifier, e) from e

        if not outcome:
            raise ValidationFailure(datum, leaf.identifier)
        return True

    def match(self, datum: Any, rule: Any, context: "ValidationContext") -> Any:
        """Run a leaf rule and apply the context's failure contract.

        Returns:
            True on success, otherwise the value returned by the context's
            error handler (without a handler the failure is raised)
        """
        try:
            return self.evaluate(datum, rule)
        except AnchorError as error:
            return context.fail(error)
