"""Error taxonomy for anchor validation.

Data-dependent failures (ValidationFailure) and caller programming errors
(SchemaError subclasses) are separate branches so callers can tell them apart
with ``except`` clauses instead of message matching.
"""

from typing import Any


class AnchorError(Exception):
    """Base class for every error raised by anchor."""


class SchemaError(AnchorError):
    """A ruleset is unusable regardless of the data it is applied to."""


class UnknownRuleError(SchemaError):
    """A named rule has no registered predicate."""

    def __init__(self, rule: Any):
        self.rule = rule
        super().__init__(f"Unknown rule: {rule}")


class MalformedSchemaError(SchemaError):
    """An array-schema holds more than one element."""

    def __init__(self, ruleset: Any):
        self.ruleset = ruleset
        super().__init__("[] (or schema) rules can contain only one item.")


class MaxDepthExceededError(AnchorError):
    """The recursion guard tripped on a cyclic or overly deep structure."""

    def __init__(self, depth: int, max_depth: int):
        self.depth = depth
        self.max_depth = max_depth
        super().__init__(
            f"Depth of object being parsed exceeds maxDepth ({max_depth}). "
            "Maybe it links to itself?"
        )


class ValidationFailure(AnchorError):
    """A leaf predicate rejected a datum."""

    def __init__(self, datum: Any, rule: str):
        self.datum = datum
        self.rule = rule
        super().__init__(f'Validation error: "{datum}" is not of type "{rule}"')


class PredicateInternalError(AnchorError):
    """A predicate raised instead of returning a boolean.

    The original exception is kept both as ``original`` and as ``__cause__``.
    """

    def __init__(self, rule: str, original: BaseException):
        self.rule = rule
        self.original = original
        super().__init__(f"Rule '{rule}' failed: {original}")


class RegistryFrozenError(AnchorError):
    """A rule was registered after the registry was frozen."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Cannot register rule '{name}': registry is frozen")
