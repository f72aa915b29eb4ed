"""anchor - Declarative structural validation for Python data.

anchor checks arbitrary values against rulesets made of rule names, regular
expressions, single-element lists ("each element must match") and mappings
of keys to sub-rules, reporting the first violation.
"""

__version__ = "0.1.0"
__description__ = "Declarative structural validation for Python data"

from anchor.api import Anchor, anchor, check, validate
from anchor.config import AnchorConfig
from anchor.errors import (
    AnchorError,
    MalformedSchemaError,
    MaxDepthExceededError,
    PredicateInternalError,
    RegistryFrozenError,
    SchemaError,
    UnknownRuleError,
    ValidationFailure,
)
from anchor.validation import UNDEFINED, RuleRegistry, ValidationResult, Validator

__all__ = [
    "__version__",
    "__description__",
    "Anchor",
    "anchor",
    "check",
    "validate",
    "AnchorConfig",
    "RuleRegistry",
    "Validator",
    "ValidationResult",
    "UNDEFINED",
    "AnchorError",
    "SchemaError",
    "UnknownRuleError",
    "MalformedSchemaError",
    "MaxDepthExceededError",
    "ValidationFailure",
    "PredicateInternalError",
    "RegistryFrozenError",
]
