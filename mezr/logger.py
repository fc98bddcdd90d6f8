"""Package logger of mezr.

The `mezr` logger writes to the console at INFO level. What it reports:

    * DEBUG `Created measurement type <Name> with <n> units, reference unit '<unit>'`
      from [`create_measurement_type`][mezr.measurement.create_measurement_type]
    * DEBUG `Found .mezr.toml at <dir>` and `Registered measurement type <Name>` while loading config
    * WARNING "Config has no `mezr` section" or "Config has no `mezr.types` section"
      for a config file that defines no types

The `mezr -d` command line switch lowers the level to DEBUG. To keep the type-building
trace of a session, mirror it to a file:

    ```python
    import logging
    from mezr import basicConfig
    from mezr.logger import logger, enable_file_logging, disable_file_logging

    logger.setLevel(logging.DEBUG)
    enable_file_logging("mezr_types.log")
    basicConfig("game.mezr.toml")
    disable_file_logging()
    ```
"""
import logging
from typing import Optional

__all__ = ('logger',
           'enable_file_logging',
           'disable_file_logging',
)

formatter = logging.Formatter("%(levelname)s:%(name)s:%(message)s")
console_handler = logging.StreamHandler()
console_handler.setFormatter(formatter)
console_handler.setLevel(logging.DEBUG)  # the logger level decides

logger: logging.Logger = logging.getLogger('mezr')
logger.addHandler(console_handler)
logger.setLevel(logging.INFO)

# set by enable_file_logging
file_handler: Optional[logging.FileHandler] = None


def enable_file_logging(filename: str = "mezr.log") -> None:
    """Mirror mezr log records to `filename` (append mode).

    Records still pass the logger level first; call `logger.setLevel(logging.DEBUG)`
    to capture the type-building trace. A previously enabled log file is closed first.
    """
    global file_handler
    if file_handler is not None:
        disable_file_logging()

    file_handler = logging.FileHandler(filename)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter("%(asctime)s:%(levelname)s:%(name)s:%(message)s"))
    logger.addHandler(file_handler)


def disable_file_logging() -> None:
    """Stop mirroring to the log file; does nothing when no file is enabled."""
    global file_handler
    if file_handler is not None:
        logger.removeHandler(file_handler)
        file_handler.close()
        file_handler = None
