"""
tantalum.core.errors
====================

Exception hierarchy shared by the numeric layer and the unit algebra.

Conversion failures are recoverable and carry both units involved. Adding or
subtracting quantities whose units cannot be converted into one another is a
logic error in the caller, so it surfaces as a ``TypeError`` subclass rather
than a wrong number.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - imported only for type checking
    from tantalum.core.unit import Unit


class TantalumError(Exception):
    """Base class for every error raised by tantalum."""


class ConversionError(TantalumError, ValueError):
    """A quantity cannot be expressed in the requested unit."""

    def __init__(self, source: "Unit", target: "Unit", message: str | None = None) -> None:
        self.source = source
        self.target = target
        if message is None:
            message = f"Cannot convert {source.symbol() or '1'} to {target.symbol() or '1'}."
        super().__init__(message)


class IncompatibleUnitsError(ConversionError, TypeError):
    """Raised by ``+`` and ``-`` when the right operand cannot take the left operand's unit."""


class InexactDivisionError(TantalumError, ArithmeticError):
    """An exact integer division left a remainder."""


__all__ = [
    "TantalumError",
    "ConversionError",
    "IncompatibleUnitsError",
    "InexactDivisionError",
]
