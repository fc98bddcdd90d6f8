"""Immutable measurement value types built from unit conversion tables."""

import importlib.metadata

try:
    __version__ = importlib.metadata.version("mezr")
except importlib.metadata.PackageNotFoundError:
    __version__ = "unknown"

# Standard library imports
import importlib.resources
from typing import Any, Dict, Mapping, Optional, Type

# Local imports
from .logger import logger as log
from .measurement import Measurement
from .config import load_config, load_types


def _basic_config(filename: Optional[str] = None,
                  types: Optional[Mapping[str, Mapping[str, Any]]] = None,
                  suppress_warnings: bool = False) -> Dict[str, Type[Measurement]]:
    """Load measurement type definitions from file or Mapping.

    Args:
        filename: Configuration file path
        types: Mapping of type name to definition (`table`, `reference_unit`, `format`)
        suppress_warnings: If True, suppress warning messages

    Returns:
        The types that were loaded, by name.

    Raises:
        ValueError: If both filename and types are provided
    """
    if filename and types:
        raise ValueError("Can't use types and config file at same time")
    if not filename and types:
        loaded = load_types(types)
    else:
        # trying to load definitions from mezr.toml
        loaded = load_config(filename, suppress_warnings)
    log.debug(f"Loaded {len(loaded)} measurement types")
    return loaded


def _resolve_resource_path(path: str) -> str:
    """Resolve a resource path relative to the package."""
    return str(importlib.resources.files('mezr').joinpath(path))


def _load_imperial_types() -> Dict[str, Type[Measurement]]:
    """Load the bundled imperial measurement types."""
    return _basic_config(_resolve_resource_path('assets/.mezr-imperial.toml'), suppress_warnings=True)


loadImperialTypes = _load_imperial_types

basicConfig = _basic_config

basicConfig()


from .config import get_measurement_type, register_type, registered_types
from .exceptions import (UnitTypeError, UnitConversionError, MeasurementConstructionError,
                         InvalidAmountError, MeasurementConfigError)
from .logger import logger, enable_file_logging, disable_file_logging
from .measurement import (BreakdownOptions, Description, FormatOptions, Number, create_measurement_type,
                          format_number)
from .quantities import Angle, DataSize, Distance, Frequency, Period, Weight

__all__ = [
    'Measurement',
    'FormatOptions',
    'BreakdownOptions',
    'Description',
    'Number',
    'create_measurement_type',
    'format_number',
    'Distance',
    'Angle',
    'Period',
    'Weight',
    'DataSize',
    'Frequency',
    'get_measurement_type',
    'register_type',
    'registered_types',
    'load_config',
    'load_types',
    'UnitTypeError',
    'UnitConversionError',
    'MeasurementConstructionError',
    'InvalidAmountError',
    'MeasurementConfigError',
    'logger',
    'enable_file_logging',
    'disable_file_logging',
    'basicConfig',
    'loadImperialTypes',
]
