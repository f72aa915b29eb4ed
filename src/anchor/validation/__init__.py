"""Validation engine for anchor.

Rulesets are classified once into parsed nodes, leaf rules are resolved
through an explicit registry, and composite rules are walked recursively
with a depth guard.
"""

from .engine import DeepMatcher
from .framework import ValidationContext, ValidationResult, Validator
from .matcher import Matcher
from .registry import RuleRegistry
from .ruleset import (
    ARRAY,
    DEFAULT_MAX_DEPTH,
    OBJECT,
    UNDEFINED,
    EachOf,
    KeyedSchema,
    Marker,
    Named,
    Pattern,
    parse_ruleset,
)

__all__ = [
    "Validator",
    "ValidationContext",
    "ValidationResult",
    "DeepMatcher",
    "Matcher",
    "RuleRegistry",
    "parse_ruleset",
    "Named",
    "Pattern",
    "Marker",
    "EachOf",
    "KeyedSchema",
    "ARRAY",
    "OBJECT",
    "UNDEFINED",
    "DEFAULT_MAX_DEPTH",
]
