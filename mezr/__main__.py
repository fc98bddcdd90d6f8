import argparse
import json
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from mezr import __version__, basicConfig
from mezr.config import get_measurement_type, registered_types
from mezr.exceptions import InvalidAmountError, MeasurementConfigError, UnitTypeError
from mezr.logger import logger


def amount_argument(value: str) -> Tuple[str, float]:
    """Parse a `unit=amount` command line argument."""
    unit, sep, amount = value.partition('=')
    if not sep or not unit:
        raise argparse.ArgumentTypeError(f"expected UNIT=AMOUNT, got {value!r}")
    try:
        return unit.strip(), float(amount)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid amount for {unit!r}: {amount!r}") from None


def get_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='mezr',
        description="Convert, break down and format measurements"
    )
    parser.add_argument('type', help="Measurement type, e.g. Distance")
    parser.add_argument('amounts', nargs='*', type=amount_argument, metavar='UNIT=AMOUNT',
                        help="Amounts making up the measurement, e.g. metres=2 centimetres=50")
    parser.add_argument("-V", "--version", action='version', version=f'mezr v{__version__}',
                        help="Show version")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug messages")
    parser.add_argument("-c", "--config", help="Load measurement types from a .mezr.toml file")

    output = parser.add_argument_group('Output')
    output.add_argument("-t", "--to", metavar='UNIT', action='append', default=[],
                        help="Print the value in UNIT (repeatable)")
    output.add_argument("-n", "--nearest", metavar='TARGET', type=float, nargs='?', const=None,
                        default=argparse.SUPPRESS, help="Format to the unit nearest TARGET")
    output.add_argument("-u", "--units", nargs='+', metavar='UNIT',
                        help="Candidate units for --nearest and --breakdown")
    output.add_argument("-b", "--breakdown", action="store_true", help="Print a breakdown into mixed units")
    output.add_argument("-j", "--json", action="store_true", help="Print the JSON form")
    output.add_argument("-r", "--repr", action="store_true", help="Print repr")
    return parser


def render(argv: argparse.Namespace) -> List[str]:
    measurement_type = get_measurement_type(argv.type)
    measurement = measurement_type(_sum_amounts(argv.amounts))

    outs: List[str] = []
    for unit in argv.to:
        outs.append(repr(measurement.to_unit(unit)))
    if hasattr(argv, 'nearest'):
        outs.append(measurement.format_nearest(argv.nearest, argv.units))
    if argv.breakdown:
        outs.append(json.dumps(measurement.breakdown(argv.units)))
    if argv.json:
        outs.append(measurement.dumps())
    if argv.repr:
        outs.append(repr(measurement))
    if not outs:
        outs.append(str(measurement))
    return outs


def _sum_amounts(amounts: Sequence[Tuple[str, float]]) -> Dict[str, float]:
    totals: Dict[str, float] = {}
    for unit, amount in amounts:
        totals[unit] = totals.get(unit, 0.) + amount
    return totals


def main(args: Optional[Sequence[str]] = None) -> int:
    parser = get_arg_parser()
    argv = parser.parse_args(args)

    if argv.debug:
        logger.setLevel(logging.DEBUG)
        logger.info("Debug messages enabled")

    try:
        if argv.config:
            basicConfig(argv.config)
        for line in render(argv):
            print(line)
    except MeasurementConfigError as exc:
        parser.error(f"{exc}; known types: {', '.join(registered_types())}")
    except (UnitTypeError, InvalidAmountError) as exc:
        parser.error(str(exc))
    except OSError as exc:
        parser.error(f"Can't read config: {exc}")
    except ValueError as exc:
        parser.error(f"Invalid config: {exc}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
