"""Loading user-defined measurement types from TOML files.

A config file holds one table per type under `mezr.types`:

```toml
[mezr.types.GameDistance]
reference_unit = "map_units"
table = { map_units = 1, metres = 0.015625, player_steps = 0.041666666666666664 }

[mezr.types.GameDistance.format]
units = ["map_units"]
suffices = { map_units = "u", metres = "m", player_steps = [" step", " steps"] }
```

Every type is built with [`create_measurement_type`][mezr.measurement.create_measurement_type]
and registered by name, next to the predefined quantities.
"""
from __future__ import annotations

import os
import sys
import threading
from typing import Any, Dict, List, Mapping, Optional, Type

from mezr.exceptions import MeasurementConfigError
from mezr.logger import logger
from mezr.measurement import Measurement, create_measurement_type
from mezr.quantities import Angle, DataSize, Distance, Frequency, Period, Weight

if sys.version_info[:2] < (3, 11):
    import tomli as tomllib
else:
    import tomllib

__all__ = (
    'CONFIG_FILENAMES',
    'find_config',
    'load_config',
    'load_types',
    'register_type',
    'get_measurement_type',
    'registered_types',
)

CONFIG_FILENAMES = ('.mezr.toml', 'mezr.toml')
_TYPE_KEYS = frozenset({'table', 'reference_unit', 'format'})

_registry_lock = threading.Lock()
_registry: Dict[str, Type[Measurement]] = {
    measurement_type.__name__: measurement_type
    for measurement_type in (Distance, Angle, Period, Weight, DataSize, Frequency)
}


def register_type(measurement_type: Type[Measurement], name: Optional[str] = None) -> None:
    """Register a measurement type under `name` (defaults to the class name), replacing any previous one."""
    if not (isinstance(measurement_type, type) and issubclass(measurement_type, Measurement)):
        raise MeasurementConfigError(f"Measurement type expected, got {measurement_type!r}")
    with _registry_lock:
        _registry[name or measurement_type.__name__] = measurement_type


def get_measurement_type(name: str) -> Type[Measurement]:
    """Look up a registered measurement type.

    Raises:
        MeasurementConfigError: If no type is registered under `name`.
    """
    with _registry_lock:
        try:
            return _registry[name]
        except KeyError:
            raise MeasurementConfigError(f"Unknown measurement type {name!r}") from None


def registered_types() -> List[str]:
    """Names of all registered measurement types, sorted."""
    with _registry_lock:
        return sorted(_registry)


def find_config(start_dir: Optional[str] = None) -> Optional[str]:
    """Search for `.mezr.toml` or `mezr.toml` from `start_dir` up to the filesystem root.

    Args:
        start_dir: The directory to start searching from. Default is the current working directory.

    Returns:
        The absolute path to the config file if found, otherwise None.
    """
    current_dir = os.path.abspath(start_dir or os.getcwd())
    while True:
        for filename in CONFIG_FILENAMES:
            path = os.path.join(current_dir, filename)
            if os.path.exists(path):
                return os.path.abspath(path)

        parent_dir = os.path.dirname(current_dir)
        if parent_dir == current_dir:
            return None
        current_dir = parent_dir


def _build_type(name: str, definition: Mapping[str, Any]) -> Type[Measurement]:
    if not isinstance(definition, Mapping):
        raise MeasurementConfigError(f"Type {name}: table expected, got {type(definition).__name__}")
    unknown = set(definition) - _TYPE_KEYS
    if unknown:
        raise MeasurementConfigError(f"Type {name}: unknown keys {', '.join(sorted(unknown))}")
    if 'table' not in definition:
        raise MeasurementConfigError(f"Type {name}: missing conversion table")
    return create_measurement_type(definition['table'],
                                   reference_unit=definition.get('reference_unit'),
                                   format_options=definition.get('format'),
                                   name=name,
                                   module=__name__)


def load_types(definitions: Mapping[str, Mapping[str, Any]]) -> Dict[str, Type[Measurement]]:
    """Build and register measurement types from a mapping of name to definition.

    A definition has a `table`, an optional `reference_unit` and optional `format` options.
    Nothing is registered when any definition is invalid.

    Returns:
        The built types by name.

    Raises:
        MeasurementConfigError: If a definition is invalid.
    """
    built = {name: _build_type(name, definition) for name, definition in definitions.items()}
    for name, measurement_type in built.items():
        register_type(measurement_type, name)
        logger.debug(f"Registered measurement type {name}")
    return built


def load_config(filepath: Optional[str] = None, suppress_warnings: bool = False) -> Dict[str, Type[Measurement]]:
    """Load measurement types from a `.mezr.toml` file.

    Args:
        filepath: Path to configuration file. If None, searches for .mezr.toml or mezr.toml
            from the working directory upwards.
        suppress_warnings: If True, suppress warning messages

    Returns:
        The types defined by the file by name; empty when no file was found.
    """
    if filepath is None:
        filepath = find_config()
    if filepath is None:
        logger.debug("No mezr config file found")
        return {}

    logger.debug(f"Found {os.path.basename(filepath)} at {os.path.dirname(filepath)}")
    with open(filepath, "rb") as fp:
        _config = tomllib.load(fp)

    if _mezr := _config.get('mezr'):
        if types := _mezr.get('types'):
            return load_types(types)
        if not suppress_warnings:
            logger.warning("Config has no `mezr.types` section")
    elif not suppress_warnings:
        logger.warning("Config has no `mezr` section")
    return {}
