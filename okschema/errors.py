"""
Exceptions raised by okschema.

Validation itself reports problems as Failure records; ValidationError only
surfaces when a caller asks an Invalid outcome for its value.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import Failure


class ValidationError(ValueError):
    """Raised by `Invalid.unwrap()`; carries every failure of the outcome."""

    def __init__(self, failures: tuple[Failure, ...]):
        self.failures = failures
        lines = "\n".join(f"  {failure}" for failure in failures)
        super().__init__(f"{len(failures)} validation failure(s):\n{lines}")
