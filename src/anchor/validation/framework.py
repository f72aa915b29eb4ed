"""Validation framework: per-call context, result type and the Validator facade.

A Validator owns a frozen rule registry and a maximum depth. It offers two
variants of the same operation:

- ``validate``: raises on the first violation, or routes it to ``on_error``
  when a handler is given and returns the handler's value
- ``check``: never raises for validation errors and returns a
  ``ValidationResult`` instead
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..config import AnchorConfig
from ..errors import AnchorError
from .engine import DeepMatcher
from .matcher import Matcher
from .registry import RuleRegistry
from .ruleset import DEFAULT_MAX_DEPTH

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[AnchorError], Any]


@dataclass(frozen=True)
class ValidationContext:
    """Subject data and optional failure handler for one validation call.

    The same instance is shared by every recursive step of the call, so the
    handler cannot change mid-traversal.
    """
    data: Any
    on_error: ErrorHandler | None = None

    def fail(self, error: AnchorError) -> Any:
        """Route a failure: hand it to ``on_error`` if set, raise it otherwise."""
        if self.on_error is not None:
            logger.debug(f"Routing {type(error).__name__} to error handler: {error}")
            return self.on_error(error)
        raise error


@dataclass
class ValidationResult:
    """Outcome of ``Validator.check``."""
    valid: bool
    error: AnchorError | None = None

    def __bool__(self) -> bool:
        return self.valid

    def raise_for_error(self) -> None:
        """Raise the captured error, if any."""
        if self.error is not None:
            raise self.error

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        error = None
        if self.error is not None:
            rule = getattr(self.error, "rule", None)
            error = {
                "type": type(self.error).__name__,
                "message": str(self.error),
                "rule": None if rule is None else str(rule),
            }
        return {"valid": self.valid, "error": error}


class Validator:
    """Validates data against rulesets using one frozen registry."""

    def __init__(self, registry: RuleRegistry | None = None, max_depth: int = DEFAULT_MAX_DEPTH):
        if max_depth < 1:
            raise ValueError("max_depth must be >= 1")
        if registry is None:
            registry = RuleRegistry.builtin()
        self.registry = registry.freeze()
        self.max_depth = max_depth
        self.matcher = Matcher(self.registry)
        self.deep_matcher = DeepMatcher(self.matcher, max_depth=max_depth)

    @classmethod
    def from_config(cls, config: AnchorConfig, registry: RuleRegistry | None = None) -> "Validator":
        return cls(registry, max_depth=config.validation.max_depth)

    def validate(self, data: Any, ruleset: Any, on_error: ErrorHandler | None = None) -> Any:
        """Validate ``data`` against ``ruleset``.

        Args:
            data: Any value
            ruleset: Raw or parsed ruleset
            on_error: Optional handler receiving the first failure instead of
                it being raised

        Returns:
            True on success, otherwise whatever ``on_error`` returns

        Raises:
            AnchorError: The first failure, when no handler is given
        """
        context = ValidationContext(data=data, on_error=on_error)
        outcome = self.deep_matcher.deep_match(data, ruleset, context)
        logger.debug(f"Validation finished with outcome: {outcome!r}")
        return outcome

    def check(self, data: Any, ruleset: Any) -> ValidationResult:
        """Validate without raising; the first failure is kept on the result."""
        captured: list[AnchorError] = []
        self.validate(data, ruleset, on_error=captured.append)
        if captured:
            return ValidationResult(valid=False, error=captured[0])
        return ValidationResult(valid=True)
