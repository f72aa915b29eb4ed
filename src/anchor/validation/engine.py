"""Recursive matching of composite rulesets.

Traversal order is deterministic: schema keys in insertion order, array
elements by ascending index. The first failure in that order is the one
reported.

Recursion depth follows schema nesting only. Array fan-out is a loop, so a
very long data array never deepens the stack.
"""

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..errors import AnchorError, MaxDepthExceededError, ValidationFailure
from .matcher import Matcher
from .predicates import is_array
from .ruleset import DEFAULT_MAX_DEPTH, EachOf, Ruleset, UNDEFINED, is_leaf, parse_ruleset

if TYPE_CHECKING:
    from .framework import ValidationContext

logger = logging.getLogger(__name__)


def _lookup(data: Any, key: Any) -> Any:
    if isinstance(data, Mapping):
        return data.get(key, UNDEFINED)
    if isinstance(data, (list, tuple)) and isinstance(key, int) and not isinstance(key, bool):
        if 0 <= key < len(data):
            return data[key]
    return UNDEFINED


class DeepMatcher:
    """Walks nested rulesets against nested data, delegating leaves to a Matcher."""

    def __init__(self, matcher: Matcher, max_depth: int = DEFAULT_MAX_DEPTH):
        self.matcher = matcher
        self.max_depth = max_depth

    def deep_match(self, data: Any, ruleset: Any, context: "ValidationContext", depth: int = 0) -> Any:
        """Match ``data`` against ``ruleset`` starting at nesting level ``depth``.

        The ruleset is parsed first, so a malformed or over-deep ruleset fails
        whatever the data looks like. The first failure is routed through
        ``context`` exactly once.
        """
        try:
            node = parse_ruleset(ruleset, self.max_depth, depth)
            self._descend(data, node, depth)
        except MaxDepthExceededError as error:
            logger.warning(f"Depth guard tripped: {error}")
            return context.fail(error)
        except AnchorError as error:
            return context.fail(error)
        return True

    def _descend(self, data: Any, node: Ruleset, depth: int) -> None:
        if depth > self.max_depth:
            raise MaxDepthExceededError(depth, self.max_depth)

        if is_leaf(node):
            self.matcher.evaluate(data, node)
            return

        if isinstance(node, EachOf):
            if not is_array(data):
                raise ValidationFailure(data, "array")
            for element in data:
                self._descend(element, node.item, depth + 1)
            return

        for key, sub_rule in node.fields:
            self._descend(_lookup(data, key), sub_rule, depth + 1)
