"""Measurement type factory.

This module builds immutable, type-safe measurement value types from a conversion table.
A conversion table maps unit names to ratios, each ratio stating how many of that unit make up
one abstract reference quantity, e.g. `{'metres': 1, 'centimetres': 100}`.

Every generated type is a subclass of [`Measurement`][mezr.measurement.Measurement]. An instance stores
a single number, its *reference value*, and is never mutated after construction; every operation
returns a new instance or a plain number.

Key Features:
    * One factory, [`create_measurement_type`][mezr.measurement.create_measurement_type], for any quantity
    * Per-unit creators (`Distance.metres(5)`) and accessors (`d.as_metres`)
    * Arithmetic and comparison against instances or plain descriptions (`{'centimetres': 300}`)
    * Breakdown into mixed units and nearest-unit formatting
    * Compact JSON form that can be fed back into the constructor

Examples:
    >>> Length = create_measurement_type({'metres': 1, 'centimetres': 100, 'kilometres': 0.001},
    ...                                  reference_unit='metres', name='Length')
    >>> Length.kilometres(1).as_metres
    1000.0
    >>> Length.metres(5).add({'centimetres': 300}).as_metres
    8.0
    >>> Length.metres(2.5).breakdown()
    {'metres': 2, 'centimetres': 50.0}
    >>> Length.metres(2.5).to_json()
    {'metres': 2.5}
    >>> Length.metres(5) / Length.centimetres(50)
    10.0
"""

# Standard library imports
from __future__ import annotations

import json
import math
import sys
from collections.abc import Mapping as MappingABC
from types import MappingProxyType
from typing import (Any, ClassVar, Dict, Final, Iterable, List, Mapping, NamedTuple, Optional, Sequence,
                    Tuple, Type, Union)

from typing_extensions import Self, TypeAlias

# Local imports
from mezr.exceptions import (InvalidAmountError, MeasurementConfigError, MeasurementConstructionError,
                             UnitConversionError, UnitTypeError)
from mezr.logger import logger

Number: TypeAlias = Union[float, int]
Description: TypeAlias = Mapping[str, Number]
Suffix: TypeAlias = Union[str, Tuple[str, str]]
MeasurementLike: TypeAlias = Union['Measurement', Description]

DEFAULT_TARGET: Final[Number] = 500
FRACTION_DIGITS: Final[int] = 2

__all__ = (
    'Number',
    'Description',
    'Suffix',
    'DEFAULT_TARGET',
    'FormatOptions',
    'BreakdownOptions',
    'Measurement',
    'create_measurement_type',
    'format_number',
)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _divide(dividend: float, divisor: float) -> float:
    """IEEE-754 division: a zero divisor gives a signed infinity or NaN instead of raising."""
    if divisor == 0:
        if dividend == 0 or math.isnan(dividend):
            return math.nan
        return math.copysign(math.inf, dividend) * math.copysign(1., divisor)
    return dividend / divisor


def _fmod(dividend: float, divisor: float) -> float:
    """Truncated remainder (sign follows the dividend); NaN for a zero divisor."""
    if divisor == 0 or math.isinf(dividend) or math.isnan(divisor):
        return math.nan
    return math.fmod(dividend, divisor)


def _round_half_up(value: float) -> int:
    # value + 0.5 can round up past the next integer; compare the fractional part instead
    rounded = math.floor(value)
    return rounded + 1 if value - rounded >= 0.5 else rounded


def _integral(function, value: float) -> Number:
    # math.floor/ceil refuse non-finite input; those values pass through unchanged
    if not math.isfinite(value):
        return value
    return function(value)


def format_number(value: Number) -> str:
    """Render a number with thousands grouping and at most two fractional digits.

    Trailing fractional zeros are dropped and negative zero is shown as `0`.

    Args:
        value: Number to render.

    Returns:
        Human-readable text, e.g. `'1,234.5'`.

    Examples:
        >>> format_number(1234.5678)
        '1,234.57'
        >>> format_number(5.0)
        '5'
        >>> format_number(-0.001)
        '0'
    """
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return '∞' if value > 0 else '-∞'
    text = f'{value:,.{FRACTION_DIGITS}f}'.rstrip('0').rstrip('.')
    return '0' if text == '-0' else text


def _decimal_text(value: Number) -> str:
    """Shortest round-tripping decimal text of a number, without a trailing `.0`."""
    text = repr(float(value))
    return text[:-2] if text.endswith('.0') else text


class FormatOptions(NamedTuple):
    """Display options of a measurement type.

    Attributes:
        suffices: Mapping of unit name to the text appended after a formatted value.
            A plain string is appended as is (include any separating space);
            a `(singular, plural)` pair is chosen by whether the rendered value is `1`.
            Units without a suffix are rendered as `' ' + unit`.
        default_target: Number that `format_nearest` aims for when no target is given.
        units: Units considered by `format_nearest`, `breakdown` and `to_json`
            when the caller does not name any. `None` means every unit of the table.

    Examples:
        >>> FormatOptions(suffices={'metres': (' metre', ' metres')}, units=('metres',))
        FormatOptions(suffices={'metres': (' metre', ' metres')}, default_target=500, units=('metres',))
    """

    suffices: Mapping[str, Suffix] = MappingProxyType({})
    default_target: Number = DEFAULT_TARGET
    units: Optional[Tuple[str, ...]] = None

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> FormatOptions:
        """Create format options from a plain mapping, e.g. a parsed TOML table.

        Args:
            options: Mapping with any of the keys `suffices`, `default_target` and `units`.

        Raises:
            MeasurementConfigError: If the mapping has keys other than those three, or a suffix
                or the units are not strings or sequences of strings.
        """
        unknown = set(options) - set(cls._fields)
        if unknown:
            raise MeasurementConfigError(f"Unknown format options: {', '.join(sorted(unknown))}")
        suffices = {}
        try:
            for unit, suffix in (options.get('suffices') or {}).items():
                suffices[unit] = suffix if isinstance(suffix, str) else tuple(suffix)
            units = options.get('units')
            units = tuple(units) if units is not None else None
        except (AttributeError, TypeError) as exc:
            raise MeasurementConfigError(f"Invalid format options: {exc}") from exc
        return cls(suffices=MappingProxyType(suffices),
                   default_target=options.get('default_target', DEFAULT_TARGET),
                   units=units)


class BreakdownOptions(NamedTuple):
    """Options of [`Measurement.breakdown`][mezr.measurement.Measurement.breakdown].

    `None` leaves the choice to `breakdown`, which depends on whether units were given.

    Attributes:
        include_zero: Record units whose amount is zero.
        float_last: Keep the fractional remainder on the smallest unit instead of flooring it.
    """

    include_zero: Optional[bool] = None
    float_last: Optional[bool] = None


class Measurement:
    """Base class of every generated measurement type.

    Subclasses are produced by [`create_measurement_type`][mezr.measurement.create_measurement_type];
    instantiating `Measurement` itself raises
    [`MeasurementConstructionError`][mezr.exceptions.MeasurementConstructionError].

    Attributes:
        table: Read-only conversion table of the type.
        units: Unit names of the type in table order.
        reference_unit: Unit that internal values are re-expressed in.
        format_options: [`FormatOptions`][mezr.measurement.FormatOptions] of the type.

    Examples:
        >>> from mezr import Distance
        >>> d = Distance(metres=2, centimetres=50)
        >>> d.as_centimetres
        250.0
        >>> Distance({'metres': 2.5}) == d
        True
        >>> str(Distance.centimetres(500))
        '5 metres'
    """

    __slots__ = ('_reference', '_absolute')

    _reference: float
    _absolute: Measurement

    table: ClassVar[Mapping[str, Number]] = MappingProxyType({})
    units: ClassVar[Tuple[str, ...]] = ()
    reference_unit: ClassVar[str] = ''
    format_options: ClassVar[FormatOptions] = FormatOptions()
    _reference_multiplier: ClassVar[float] = 1.
    _measurement_type: ClassVar[Optional[Type[Measurement]]] = None

    def __init__(self, description: Optional[MeasurementLike] = None, /, **amounts: Number):
        """Create a measurement from a description of unit amounts.

        All amounts are summed, so `Distance({'metres': 2, 'centimetres': 50})` is 2.5 metres.
        Keyword amounts are added to the description. An empty description is zero.

        Args:
            description: Mapping of unit name to amount, or a measurement of the same type.
            **amounts: Further unit amounts.

        Raises:
            InvalidAmountError: If an amount is not a number or is NaN.
            UnitConversionError: If a unit is not part of the conversion table.
            MeasurementConstructionError: If the receiver is not a fresh instance of a generated type.
        """
        if not isinstance(self, Measurement) or type(self)._measurement_type is None:
            raise MeasurementConstructionError("invalid call: measurements must be created "
                                               "through a type built by create_measurement_type()")
        if hasattr(self, '_reference'):
            raise MeasurementConstructionError(f"invalid call: {type(self).__name__} is already constructed")
        cls = type(self)
        reference = cls._reference_of(description) if description is not None else 0.
        if amounts:
            reference += cls._sum_description(amounts)
        self._setup(reference)

    def _setup(self, reference: float) -> None:
        object.__setattr__(self, '_reference', reference)
        # NaN is not negative, so it is its own absolute
        if reference < 0:
            absolute = type(self)._new(abs(reference * self._reference_multiplier))
        else:
            absolute = self
        object.__setattr__(self, '_absolute', absolute)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"'{type(self).__name__}' object is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"'{type(self).__name__}' object is immutable")

    def __reduce__(self):
        return type(self)._from_reference, (self._reference,)

    #region construction helpers
    @classmethod
    def _from_reference(cls, reference: float) -> Self:
        obj = cls.__new__(cls)
        obj._setup(reference)
        return obj

    @classmethod
    def _new(cls, amount: float) -> Self:
        """Create an instance from an amount in the reference unit."""
        return cls._from_reference(_divide(amount, cls._reference_multiplier))

    @classmethod
    def _ratio(cls, unit: str) -> Number:
        try:
            return cls.table[unit]
        except KeyError:
            raise UnitConversionError(f'{cls.__name__}: unit {unit!r} is not supported') from None

    @classmethod
    def _sum_description(cls, description: Description) -> float:
        reference = 0.
        for unit, amount in description.items():
            if not _is_number(amount) or math.isnan(amount):
                raise InvalidAmountError(unit, amount)
            reference += amount / cls._ratio(unit)
        return reference

    @classmethod
    def _reference_of(cls, value: MeasurementLike) -> float:
        """Reference value of a measurement or a description ("breakdown coercion").

        Raises:
            UnitTypeError: If `value` is a measurement of a different type.
            TypeError: If `value` is neither a measurement nor a mapping.
        """
        if isinstance(value, Measurement):
            if value._measurement_type is not cls._measurement_type:
                raise UnitTypeError(f'{cls.__name__}: expected {cls.__name__} or a description, '
                                    f'got {type(value).__name__}')
            return value._reference
        if isinstance(value, MappingABC):
            return cls._sum_description(value)
        raise TypeError(f'{cls.__name__}: expected {cls.__name__} or a description, got {type(value).__name__}')

    @classmethod
    def _default_units(cls) -> Tuple[str, ...]:
        units = cls.format_options.units
        return units if units is not None else cls.units
    #endregion construction helpers

    #region creation
    @classmethod
    def from_description(cls, description: Optional[MeasurementLike] = None, /, **amounts: Number) -> Self:
        """Create a measurement from a description; equivalent to calling the type."""
        return cls(description, **amounts)

    @classmethod
    def create(cls, unit: str, amount: Number) -> Self:
        """Create a measurement of `amount` in `unit`; equivalent to `cls.<unit>(amount)`.

        Raises:
            UnitConversionError: If `unit` is not part of the conversion table.
        """
        cls._ratio(unit)
        return cls({unit: amount})

    @classmethod
    def total(cls, measurements: Iterable[MeasurementLike]) -> Self:
        """Sum measurements and descriptions, starting from zero.

        Examples:
            >>> from mezr import Distance
            >>> Distance.total([Distance.metres(2), {'centimetres': 50}, Distance.millimetres(300)]).as_centimetres
            280.0
            >>> Distance.total([]).as_metres
            0.0
        """
        result = cls()
        for measurement in measurements:
            result = result.add(measurement)
        return result

    @classmethod
    def loads(cls, text: Union[str, bytes]) -> Self:
        """Create a measurement from the JSON text produced by [`dumps`][mezr.measurement.Measurement.dumps].

        Raises:
            InvalidAmountError: If the JSON document is not an object.
        """
        description = json.loads(text)
        if not isinstance(description, dict):
            raise InvalidAmountError(None, description, 'JSON object of unit amounts expected')
        return cls(description)
    #endregion creation

    #region conversion
    @property
    def absolute(self) -> Self:
        """Non-negative counterpart of this measurement.

        A non-negative measurement is its own absolute (the very same object, not a copy).
        """
        return self._absolute

    @property
    def reference_value(self) -> float:
        """Quantity of this measurement in abstract reference units (`amount / table[unit]`)."""
        return self._reference

    def to_unit(self, unit: str) -> float:
        """Value of this measurement expressed in `unit`.

        Raises:
            UnitConversionError: If `unit` is not part of the conversion table.
        """
        return self._reference * type(self)._ratio(unit)
    #endregion conversion

    #region arithmetic
    def multiply(self, factor: Number) -> Self:
        """Scale this measurement by a number."""
        if not _is_number(factor):
            raise TypeError(f'{type(self).__name__}: number expected, got {type(factor).__name__}')
        return type(self)._new(self._reference * factor * self._reference_multiplier)

    def divide(self, divisor: Union[Number, MeasurementLike]) -> Union[Self, float]:
        """Divide this measurement.

        Returns:
            - By a number: a measurement scaled by `1 / divisor`.
            - By a measurement or description: the dimensionless ratio of the two, as a float.

        Note:
            Zero divisors do not raise; the result is infinite or NaN.
        """
        if _is_number(divisor):
            return type(self)._new(_divide(self._reference, divisor) * self._reference_multiplier)
        return _divide(self._reference, type(self)._reference_of(divisor))

    def remainder(self, modulus: Number) -> Self:
        """Remainder of this measurement's value in the reference unit divided by `modulus`.

        The remainder is always taken in the reference unit of the type, whichever unit
        the caller has in mind, and carries the sign of this measurement.

        Examples:
            >>> from mezr import Distance
            >>> Distance.metres(7).remainder(3).as_metres
            1.0
        """
        if not _is_number(modulus):
            raise TypeError(f'{type(self).__name__}: number expected, got {type(modulus).__name__}')
        return type(self)._new(_fmod(self.to_unit(self.reference_unit), modulus))

    def blend(self, target: MeasurementLike, bias: Number = .5) -> Self:
        """Linear interpolation between this measurement and `target`.

        `bias` is not clamped: values outside `[0, 1]` extrapolate.

        Examples:
            >>> from mezr import Angle
            >>> Angle.degrees(10).blend(Angle.degrees(20), .25).as_degrees
            12.5
        """
        cls = type(self)
        this_amount = self.to_unit(self.reference_unit)
        target_amount = cls._reference_of(target) * self._reference_multiplier
        return cls._new(this_amount + bias * (target_amount - this_amount))

    def add(self, *others: MeasurementLike) -> Self:
        """Sum of this measurement and every argument."""
        cls = type(self)
        total = self._reference
        for other in others:
            total += cls._reference_of(other)
        return cls._new(total * self._reference_multiplier)

    def subtract(self, other: MeasurementLike) -> Self:
        """Difference between this measurement and `other`."""
        cls = type(self)
        return cls._new((self._reference - cls._reference_of(other)) * self._reference_multiplier)

    def floor(self, unit: str) -> Self:
        """Round down to a whole number of `unit`.

        Examples:
            >>> from mezr import Distance
            >>> Distance.centimetres(150).floor('metres').as_centimetres
            100.0
        """
        return type(self)({unit: _integral(math.floor, self.to_unit(unit))})

    def ceil(self, unit: str) -> Self:
        """Round up to a whole number of `unit`."""
        return type(self)({unit: _integral(math.ceil, self.to_unit(unit))})

    def round(self, unit: str) -> Self:
        """Round to the nearest whole number of `unit`; halves round up (towards +∞)."""
        return type(self)({unit: _integral(_round_half_up, self.to_unit(unit))})
    #endregion arithmetic

    #region comparison
    def equals(self, other: MeasurementLike) -> bool:
        """Exact equality of reference values (no tolerance)."""
        return self._reference == type(self)._reference_of(other)

    def greater_than(self, other: MeasurementLike) -> bool:
        return self._reference > type(self)._reference_of(other)

    def greater_than_or_equal(self, other: MeasurementLike) -> bool:
        return self._reference >= type(self)._reference_of(other)

    def less_than(self, other: MeasurementLike) -> bool:
        return self._reference < type(self)._reference_of(other)

    def less_than_or_equal(self, other: MeasurementLike) -> bool:
        return self._reference <= type(self)._reference_of(other)
    #endregion comparison

    #region breakdown and formatting
    def breakdown(self, units: Optional[Sequence[str]] = None,
                  options: Optional[BreakdownOptions] = None, *,
                  include_zero: Optional[bool] = None,
                  float_last: Optional[bool] = None) -> Dict[str, Number]:
        """Decompose this measurement into amounts of several units.

        Units are filled from the physically largest to the smallest; every amount is
        floored except, with `float_last`, the smallest unit, which keeps the fractional rest.
        An infinite or NaN measurement is reported whole in the largest unit.

        Args:
            units: Units to break down into. Defaults to the format units of the type, or all units.
            options: Prepared [`BreakdownOptions`][mezr.measurement.BreakdownOptions].
            include_zero: Record units whose amount is zero. Overrides `options`.
                Defaults to `False` without `units` and `True` with `units`.
            float_last: Keep the fractional remainder on the smallest unit. Overrides `options`.
                Defaults to `True` without `units` and `False` with `units`.

        Returns:
            Mapping of unit to amount, largest unit first. Never empty unless `units` is empty.

        Examples:
            >>> from mezr import Distance
            >>> Distance.metres(2.5).breakdown()
            {'metres': 2, 'centimetres': 50}
            >>> Distance.metres(-2.5).breakdown()
            {'metres': -2, 'centimetres': -50}
            >>> Distance.metres(2.5).breakdown(['kilometres', 'metres'])
            {'kilometres': 0, 'metres': 2}
        """
        explicit = units is not None
        resolved_include_zero = explicit
        resolved_float_last = not explicit
        if options is not None:
            if options.include_zero is not None:
                resolved_include_zero = options.include_zero
            if options.float_last is not None:
                resolved_float_last = options.float_last
        if include_zero is not None:
            resolved_include_zero = include_zero
        if float_last is not None:
            resolved_float_last = float_last
        return self._get_breakdown(list(units) if explicit else list(type(self)._default_units()),
                                   resolved_include_zero, resolved_float_last)

    def _get_breakdown(self, units: List[str], include_zero: bool, float_last: bool) -> Dict[str, Number]:
        if not units:
            return {}
        cls = type(self)
        units = sorted(units, key=cls._ratio)
        last = units[-1]

        negative = self._reference < 0
        remaining = self.multiply(-1) if negative else self
        breakdown: Dict[str, Number] = {}
        if not math.isfinite(self._reference):
            # subtracting an infinite amount leaves NaN, so the whole value goes to the largest unit
            breakdown[units[0]] = remaining.to_unit(units[0])
        else:
            for unit in units:
                precise_amount = remaining.to_unit(unit)
                if float_last and unit == last:
                    amount = precise_amount
                else:
                    amount = _integral(math.floor, precise_amount)
                if include_zero or amount != 0:
                    breakdown[unit] = amount
                    remaining = remaining.subtract({unit: amount})

        if not breakdown:
            breakdown[self.reference_unit if self.reference_unit in units else units[0]] = 0
        if negative:
            breakdown = {unit: 0 - amount for unit, amount in breakdown.items()}
        return breakdown

    def format_nearest(self, target: Optional[Number] = None, units: Optional[Sequence[str]] = None) -> str:
        """Format this measurement in the unit whose value is closest to `target`.

        Args:
            target: Value to aim for. Defaults to the type's `default_target` (500 unless configured).
            units: Candidate units. Defaults to the format units of the type, or all units.
                When two units are equally close, the later one wins.

        Returns:
            Value with at most two fractional digits followed by the unit's suffix.

        Raises:
            ValueError: If `units` is empty.

        Examples:
            >>> from mezr import Distance
            >>> Distance.centimetres(500).format_nearest(6)
            '5 metres'
            >>> Distance.centimetres(500).format_nearest(400)
            '500cm'
        """
        cls = type(self)
        if target is None:
            target = cls.format_options.default_target
        candidates = list(units) if units is not None else list(cls._default_units())
        if not candidates:
            raise ValueError(f'{cls.__name__}: no units to format with')

        unit = min(reversed(candidates), key=lambda u: abs(target - self.to_unit(u)))
        text = format_number(self.to_unit(unit))
        suffix = cls.format_options.suffices.get(unit, f' {unit}')
        if not isinstance(suffix, str):
            suffix = suffix[0] if text == '1' else suffix[1]
        return text + suffix

    def to_json(self) -> Dict[str, Number]:
        """Compact single-unit description of this measurement.

        The unit whose value has the shortest decimal text is chosen among the format
        units of the type (ties go to the earlier unit). Passing the result back to the
        type recreates the measurement.

        Examples:
            >>> from mezr import Distance
            >>> Distance.metres(2.5).to_json()
            {'centimetres': 250.0}
            >>> Distance(Distance.metres(2.5).to_json()).as_metres
            2.5
        """
        units = type(self)._default_units()
        unit = min(units, key=lambda u: len(_decimal_text(self.to_unit(u))))
        return self._get_breakdown([unit], include_zero=False, float_last=True)

    def dumps(self, **kwargs: Any) -> str:
        """JSON text of [`to_json`][mezr.measurement.Measurement.to_json]; `kwargs` go to `json.dumps`."""
        return json.dumps(self.to_json(), **kwargs)

    def __str__(self) -> str:
        return self.format_nearest()

    def __repr__(self) -> str:
        return f'<{type(self).__name__}: {self} ({round(self._reference, 4)})>'

    def __format__(self, format_spec: str) -> str:
        """`f'{d}'` formats to the nearest unit; `f'{d:centimetres}'` formats in that unit."""
        if not format_spec:
            return str(self)
        type(self)._ratio(format_spec)
        return self.format_nearest(units=[format_spec])
    #endregion breakdown and formatting

    #region operators
    def __hash__(self) -> int:
        return hash((self._measurement_type, self._reference))

    def _is_operand(self, other: Any) -> bool:
        if isinstance(other, Measurement):
            return other._measurement_type is self._measurement_type
        return isinstance(other, MappingABC)

    def __eq__(self, other: object) -> bool:
        if not self._is_operand(other):
            return NotImplemented
        return self.equals(other)  # type: ignore[arg-type]

    def __lt__(self, other: MeasurementLike) -> bool:
        if not isinstance(other, (Measurement, MappingABC)):
            return NotImplemented
        return self.less_than(other)

    def __le__(self, other: MeasurementLike) -> bool:
        if not isinstance(other, (Measurement, MappingABC)):
            return NotImplemented
        return self.less_than_or_equal(other)

    def __gt__(self, other: MeasurementLike) -> bool:
        if not isinstance(other, (Measurement, MappingABC)):
            return NotImplemented
        return self.greater_than(other)

    def __ge__(self, other: MeasurementLike) -> bool:
        if not isinstance(other, (Measurement, MappingABC)):
            return NotImplemented
        return self.greater_than_or_equal(other)

    def __add__(self, other: MeasurementLike) -> Self:
        if not isinstance(other, (Measurement, MappingABC)):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other: Union[Number, Description]) -> Self:
        """Right-hand addition; a numeric `0` is the start value of `sum()`."""
        if _is_number(other) and other == 0:
            return self
        if not isinstance(other, MappingABC):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: MeasurementLike) -> Self:
        if not isinstance(other, (Measurement, MappingABC)):
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other: Description) -> Self:
        if not isinstance(other, MappingABC):
            return NotImplemented
        return type(self)(other).subtract(self)

    def __mul__(self, other: Number) -> Self:
        if not _is_number(other):
            return NotImplemented
        return self.multiply(other)

    __rmul__ = __mul__

    def __truediv__(self, other: Union[Number, MeasurementLike]) -> Union[Self, float]:
        if not (_is_number(other) or isinstance(other, (Measurement, MappingABC))):
            return NotImplemented
        return self.divide(other)

    def __mod__(self, other: Number) -> Self:
        if not _is_number(other):
            return NotImplemented
        return self.remainder(other)

    def __neg__(self) -> Self:
        return self.multiply(-1)

    def __pos__(self) -> Self:
        return self

    def __abs__(self) -> Self:
        return self.absolute
    #endregion operators


_RESERVED_NAMES: Final[frozenset] = frozenset(dir(Measurement))


def _unit_accessor(unit: str) -> property:
    def getter(self: Measurement) -> float:
        return self.to_unit(unit)

    getter.__name__ = f'as_{unit}'
    getter.__doc__ = f'Value of this measurement in {unit}.'
    return property(getter)


def _unit_creator(unit: str) -> classmethod:
    def creator(cls: Type[Measurement], amount: Number) -> Measurement:
        return cls({unit: amount})

    creator.__name__ = unit
    creator.__doc__ = f'Create a measurement of `amount` {unit}.'
    return classmethod(creator)


def _validate_table(table: Mapping[str, Number]) -> None:
    if not table:
        raise MeasurementConfigError("Conversion table must have at least one unit")
    for unit, ratio in table.items():
        if not isinstance(unit, str) or not unit.isidentifier():
            raise MeasurementConfigError(f"Unit name {unit!r} is not a valid identifier")
        if unit in _RESERVED_NAMES or f'as_{unit}' in _RESERVED_NAMES:
            raise MeasurementConfigError(f"Unit name {unit!r} clashes with a Measurement attribute")
        if not _is_number(ratio) or not math.isfinite(ratio) or ratio <= 0:
            raise MeasurementConfigError(f"Ratio of unit {unit!r} must be a positive finite number, got {ratio!r}")


def _validate_format(table: Mapping[str, Number], options: FormatOptions) -> None:
    if options.units is not None:
        if not options.units:
            raise MeasurementConfigError("Format units must name at least one unit")
        for unit in options.units:
            if unit not in table:
                raise MeasurementConfigError(f"Format unit {unit!r} is not in the conversion table")
    for unit, suffix in options.suffices.items():
        if unit not in table:
            raise MeasurementConfigError(f"Suffix given for unknown unit {unit!r}")
        if not isinstance(suffix, str):
            if len(suffix) != 2 or not all(isinstance(s, str) for s in suffix):
                raise MeasurementConfigError(f"Suffix of {unit!r} must be a string or a (singular, plural) pair")
    target = options.default_target
    if not _is_number(target) or not math.isfinite(target) or target <= 0:
        raise MeasurementConfigError(f"Default target must be a positive finite number, got {target!r}")


def _median_unit(table: Mapping[str, Number]) -> str:
    ordered = sorted(table.items(), key=lambda item: item[1])
    return ordered[len(ordered) // 2][0]


def create_measurement_type(table: Mapping[str, Number],
                            reference_unit: Optional[str] = None,
                            format_options: Optional[Union[FormatOptions, Mapping[str, Any]]] = None,
                            name: str = 'Measurement',
                            module: Optional[str] = None) -> Type[Measurement]:
    """Build a measurement type from a conversion table.

    Args:
        table: Mapping of unit name to ratio; ratios state equivalents,
            e.g. `{'metres': 1, 'centimetres': 100}`.
        reference_unit: Unit that internal values are re-expressed in.
            Defaults to the unit with the median ratio.
        format_options: [`FormatOptions`][mezr.measurement.FormatOptions] or a mapping of the same fields.
        name: Class name of the generated type.
        module: `__module__` of the generated type; defaults to the caller's module
            so instances can be pickled.

    Returns:
        A new subclass of [`Measurement`][mezr.measurement.Measurement] with a creator
        classmethod and an `as_<unit>` property per unit.

    Raises:
        MeasurementConfigError: If the table is empty, a ratio is not a positive finite number,
            a unit name is unusable, the reference unit is unknown or the format options
            refer to unknown units.

    Examples:
        >>> GameDistance = create_measurement_type(
        ...     {'map_units': 1, 'metres': 1 / 64, 'player_steps': 1 / 24},
        ...     format_options={'units': ['map_units'], 'suffices': {'map_units': 'u', 'metres': 'm'}},
        ...     name='GameDistance')
        >>> GameDistance.player_steps(1).multiply(2).as_map_units
        48.0
        >>> GameDistance.metres(2).format_nearest()
        '128u'
    """
    _validate_table(table)
    if reference_unit is None:
        reference_unit = _median_unit(table)
    elif reference_unit not in table:
        raise MeasurementConfigError(f"Reference unit {reference_unit!r} is not in the conversion table")

    if format_options is None:
        format_options = FormatOptions()
    elif not isinstance(format_options, FormatOptions):
        format_options = FormatOptions.from_mapping(format_options)
    _validate_format(table, format_options)

    if module is None:
        try:
            module = sys._getframe(1).f_globals.get('__name__', '__main__')
        except (AttributeError, ValueError):
            module = __name__

    namespace: Dict[str, Any] = {
        '__slots__': (),
        '__module__': module,
        '__qualname__': name,
        'table': MappingProxyType(dict(table)),
        'units': tuple(table),
        'reference_unit': reference_unit,
        'format_options': format_options,
        '_reference_multiplier': table[reference_unit],
    }
    for unit in table:
        namespace[unit] = _unit_creator(unit)
        namespace[f'as_{unit}'] = _unit_accessor(unit)

    measurement_type = type(name, (Measurement,), namespace)
    measurement_type._measurement_type = measurement_type
    logger.debug(f"Created measurement type {name} with {len(table)} units, reference unit '{reference_unit}'")
    return measurement_type
