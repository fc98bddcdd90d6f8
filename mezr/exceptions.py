"""mezr exception types.

This module provides the exception hierarchy for the error conditions that can occur while
building measurement types and working with their instances.

Exception Hierarchy
-------------------

Exception (built-in Python)
├── TypeError
│   └── UnitTypeError
│       ├── UnitConversionError
│       └── MeasurementConstructionError
└── ValueError
    ├── InvalidAmountError
    └── MeasurementConfigError

Exception Types
---------------

- UnitTypeError: Raised when a measurement of one type is used as an operand of another type,
  e.g. adding an `Angle` to a `Distance`.

- UnitConversionError: Raised when a unit name is not part of the measurement type's conversion table.

- MeasurementConstructionError: Raised when a measurement constructor is invoked with a receiver
  that is not an instance of that measurement type, or when the abstract `Measurement` base is instantiated.

- InvalidAmountError: Raised when an amount in a description is not a number (or is NaN).
  The offending unit name is available as `unit`.

- MeasurementConfigError: Raised at factory time for an unusable conversion table or format
  options, and by the type registry for unknown type names.
"""
from __future__ import annotations

from typing import Any, Optional

__all__ = (
    'UnitTypeError',
    'UnitConversionError',
    'MeasurementConstructionError',
    'InvalidAmountError',
    'MeasurementConfigError',
)


class UnitTypeError(TypeError):
    """Unit type error."""


class UnitConversionError(UnitTypeError):
    """Unit conversion error."""


class MeasurementConstructionError(UnitTypeError):
    """Invalid measurement constructor call."""


class InvalidAmountError(ValueError):
    """Exception for amounts that are not numbers.

    Contains:
    - The unit the amount was given for
    - The rejected amount
    """

    def __init__(self, unit: Optional[str], amount: Any, note: str = ""):
        self.unit: Optional[str] = unit
        self.amount: Any = amount
        if unit is None:
            msg = f"Invalid amount {amount!r}"
        else:
            msg = f"Unit '{unit}' is NaN (got {amount!r})"
        if note:
            msg += f". {note}"
        super().__init__(msg)


class MeasurementConfigError(ValueError):
    """Measurement type configuration error."""
