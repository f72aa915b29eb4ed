"""Rule registry: maps rule names to predicates.

A registry is populated once (built-ins plus any custom rules) and then
frozen. Validators freeze the registry they are given, so registrations must
happen before the first validation call.
"""

import logging
from collections.abc import Iterator, Mapping

from ..errors import RegistryFrozenError, UnknownRuleError
from .predicates import BUILTIN_PREDICATES, Predicate

logger = logging.getLogger(__name__)


class RuleRegistry:
    """Name-to-predicate mapping with an explicit freeze step."""

    def __init__(self, rules: Mapping[str, Predicate] | None = None):
        self._rules: dict[str, Predicate] = {}
        self._frozen = False
        for name, predicate in (rules or {}).items():
            self.register(name, predicate)

    @classmethod
    def builtin(cls) -> "RuleRegistry":
        """Create a fresh, unfrozen registry holding the built-in rules."""
        return cls(BUILTIN_PREDICATES)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, name: str, predicate: Predicate) -> None:
        """Add a rule.

        Args:
            name: Rule name used in rulesets
            predicate: Callable taking the datum (and an optional argument)

        Raises:
            RegistryFrozenError: If the registry has been frozen
            ValueError: If the name is empty or already registered
            TypeError: If the predicate is not callable
        """
        if self._frozen:
            raise RegistryFrozenError(name)
        if not isinstance(name, str) or not name:
            raise ValueError(f"Rule name must be a non-empty string, got: {name!r}")
        if name in self._rules:
            raise ValueError(f"Rule already registered: {name}")
        if not callable(predicate):
            raise TypeError(f"Predicate for rule '{name}' must be callable")

        self._rules[name] = predicate
        logger.debug(f"Registered rule: {name}")

    def freeze(self) -> "RuleRegistry":
        if not self._frozen:
            self._frozen = True
            logger.debug(f"Rule registry frozen with {len(self._rules)} rules")
        return self

    def resolve(self, name: object) -> Predicate:
        """Look up the predicate for a rule name.

        Raises:
            UnknownRuleError: If nothing is registered under ``name``
        """
        predicate = self._rules.get(name) if isinstance(name, str) else None
        if predicate is None:
            raise UnknownRuleError(name)
        return predicate

    def names(self) -> list[str]:
        return sorted(self._rules)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())
