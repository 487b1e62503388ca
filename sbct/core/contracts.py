"""
Contracts — Type definitions and interfaces for pipeline components.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from sbct.ir.schema import ParsedEntity, ValidationResult

# A single cascade strategy: returns a value or None to defer to the next one.
Strategy = Callable[[str], Optional[str]]


class Validator(ABC):
    """Abstract base for entity validators."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Validator name for diagnostics."""
        ...

    @abstractmethod
    def validate(self, entity: ParsedEntity) -> ValidationResult:
        """
        Validate one parsed entity.

        Returns:
            ValidationResult with warnings and a 0-100 score
        """
        ...
