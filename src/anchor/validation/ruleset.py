"""Ruleset model.

A raw ruleset is classified once, by shape only, into one of the node types
below. The registry is never consulted here; whether a name resolves is the
matcher's concern.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from ..errors import MalformedSchemaError, MaxDepthExceededError

DEFAULT_MAX_DEPTH = 50


class _Undefined:
    """Marker for an absent value, distinct from ``None``."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "undefined"

    def __reduce__(self):
        return (_Undefined, ())


UNDEFINED = _Undefined()


@dataclass(frozen=True)
class Named:
    """A rule looked up by name, with an optional auxiliary argument."""
    name: Any
    argument: Any = None

    @property
    def identifier(self) -> str:
        return str(self.name)


@dataclass(frozen=True)
class Pattern:
    """An inline regular expression; only strings can match it."""
    regex: re.Pattern

    @property
    def identifier(self) -> str:
        return f"/{self.regex.pattern}/"


@dataclass(frozen=True)
class Marker:
    """Structural marker produced by ``[]`` ("is array") or ``{}`` ("is object")."""
    kind: str

    @property
    def identifier(self) -> str:
        return self.kind


ARRAY = Marker("array")
OBJECT = Marker("object")


@dataclass(frozen=True)
class EachOf:
    """Every element of the data sequence must match ``item``."""
    item: "Ruleset"


@dataclass(frozen=True)
class KeyedSchema:
    """Every ``(key, rule)`` pair must hold for the value at ``data[key]``."""
    fields: tuple[tuple[Any, "Ruleset"], ...]

    def keys(self) -> list[Any]:
        return [key for key, _ in self.fields]


Leaf = Union[Named, Pattern, Marker]
Ruleset = Union[Named, Pattern, Marker, EachOf, KeyedSchema]

_LEAF_TYPES = (Named, Pattern, Marker)


def is_leaf(node: Ruleset) -> bool:
    return isinstance(node, _LEAF_TYPES)


def parse_ruleset(raw: Any, max_depth: int = DEFAULT_MAX_DEPTH, depth: int = 0) -> Ruleset:
    """Classify a raw ruleset into its parsed form.

    Args:
        raw: Rule name, ``(name, argument)`` tuple, compiled pattern, list,
            mapping, or an already parsed node
        max_depth: Deepest nesting level allowed
        depth: Nesting level of ``raw`` itself

    Returns:
        The parsed ruleset tree

    Raises:
        MalformedSchemaError: If a list ruleset holds more than one element
        MaxDepthExceededError: If nesting goes past ``max_depth``, which is
            also how a ruleset that contains itself is caught
    """
    if depth > max_depth:
        raise MaxDepthExceededError(depth, max_depth)

    if isinstance(raw, _LEAF_TYPES):
        return raw

    if isinstance(raw, EachOf):
        return EachOf(parse_ruleset(raw.item, max_depth, depth + 1))

    if isinstance(raw, KeyedSchema):
        return KeyedSchema(tuple(
            (key, parse_ruleset(sub, max_depth, depth + 1)) for key, sub in raw.fields
        ))

    if isinstance(raw, re.Pattern):
        return Pattern(raw)

    if isinstance(raw, list):
        if not raw:
            return ARRAY
        if len(raw) > 1:
            raise MalformedSchemaError(raw)
        return EachOf(parse_ruleset(raw[0], max_depth, depth + 1))

    if isinstance(raw, Mapping):
        if not raw:
            return OBJECT
        return KeyedSchema(tuple(
            (key, parse_ruleset(sub, max_depth, depth + 1)) for key, sub in raw.items()
        ))

    if isinstance(raw, tuple) and len(raw) == 2 and isinstance(raw[0], str):
        return Named(raw[0], raw[1])

    # Anything else is treated as a name; non-strings fail at resolution.
    return Named(raw)
