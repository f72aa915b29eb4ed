"""Public entry points.

Usage::

    from anchor import anchor, check, validate

    validate({"name": "Al", "age": 30}, {"name": "string", "age": "integer"})
    anchor([1, 2, 3]).to(["integer"])
    check("5", "number").valid  # False
"""

from typing import Any

from .validation.framework import ErrorHandler, ValidationResult, Validator

default_validator = Validator()


class Anchor:
    """Data bound for validation; call ``to`` with a ruleset."""

    def __init__(self, entity: Any, validator: Validator | None = None):
        if callable(entity):
            raise TypeError("Anchor does not support functions yet!")
        self.data = entity
        self.validator = validator or default_validator

    def to(self, ruleset: Any, on_error: ErrorHandler | None = None) -> Any:
        """Enforce the data with ``ruleset``; see ``Validator.validate``."""
        return self.validator.validate(self.data, ruleset, on_error)


def anchor(entity: Any, validator: Validator | None = None) -> Anchor:
    return Anchor(entity, validator)


def validate(data: Any, ruleset: Any, on_error: ErrorHandler | None = None) -> Any:
    return default_validator.validate(data, ruleset, on_error)


def check(data: Any, ruleset: Any) -> ValidationResult:
    return default_validator.check(data, ruleset)
