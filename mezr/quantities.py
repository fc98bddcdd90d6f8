"""Predefined measurement types.

Supported Quantities:
    * Distance: `metres`, `kilometres`, `centimetres`, `millimetres`, `inches`, `feet`, `yards`,
      `cubits`, `miles`, `nautical_miles`
    * Angle: `degrees`, `radians`, `turns`
    * Period: `seconds`, `minutes`, `hours`, `days`, `weeks`, `microfortnights`, `milliseconds`
    * Weight: `grams`, `kilograms`, `tonnes`, `ounces`, `pounds`, `stones`
    * DataSize: `bytes`, `kibibytes`, `mebibytes`, `gibibytes`, `tebibytes`, `pebibytes`
    * Frequency: `hertz`, `kilohertz`, `megahertz`, `gigahertz`, `cycles_per_minute`

Examples:
    >>> Distance.kilometres(1).as_metres
    1000.0
    >>> print(Period.minutes(90))
    1.5h
    >>> print(DataSize.mebibytes(1.5))
    1.5 MiB
"""
from math import pi

from mezr.measurement import FormatOptions, create_measurement_type

__all__ = (
    'Distance',
    'Angle',
    'Period',
    'Weight',
    'DataSize',
    'Frequency',
)

#: Distance measurements.  Reference unit is metres.
Distance = create_measurement_type({
    'metres': 1,
    'kilometres': .001,
    'centimetres': 100,
    'millimetres': 1_000,
    'inches': 39.37007874,
    'feet': 3.28084,
    'yards': 1.093613,
    'cubits': 2.1872266,
    'miles': .0006213712,
    'nautical_miles': .0005399568,
}, reference_unit='metres', format_options=FormatOptions(
    suffices={
        'centimetres': 'cm',
        'feet': "'",
        'inches': '"',
        'kilometres': 'km',
        'metres': (' metre', ' metres'),
        'miles': (' mile', ' miles'),
        'millimetres': 'mm',
        'nautical_miles': (' nautical mile', ' nautical miles'),
    },
    default_target=500,
    units=('millimetres', 'centimetres', 'metres', 'kilometres'),
), name='Distance')

#: Angular measurements.  Reference unit is degrees.
Angle = create_measurement_type({
    'degrees': 180,
    'radians': pi,
    'turns': .5,
}, reference_unit='degrees', format_options=FormatOptions(
    suffices={
        'degrees': '°',
        'radians': (' radian', ' radians'),
        'turns': (' turn', ' turns'),
    },
    units=('degrees',),
), name='Angle')

#: Time periods.  Reference unit is the median one, minutes.
Period = create_measurement_type({
    'seconds': 900,
    'minutes': 15,
    'hours': .25,
    'days': .01041667,
    'weeks': .001488095,
    'microfortnights': 744.05,
    'milliseconds': 900_000,
}, format_options=FormatOptions(
    suffices={
        'seconds': 's',
        'days': (' day', ' days'),
        'hours': 'h',
        'minutes': 'm',
        'milliseconds': 'ms',
        'weeks': (' week', ' weeks'),
    },
    default_target=30,
    units=('weeks', 'days', 'hours', 'minutes', 'seconds', 'milliseconds'),
), name='Period')

#: Weight measurements.  Reference unit is the median one, pounds.
Weight = create_measurement_type({
    'grams': 500,
    'kilograms': .5,
    'tonnes': .0005,
    'ounces': 17.63698,
    'pounds': 1.102311,
    'stones': .07873652,
}, format_options=FormatOptions(
    suffices={
        'grams': 'g',
        'kilograms': 'kg',
        'tonnes': (' tonne', ' tonnes'),
        'ounces': 'oz',
        'pounds': 'lb',
        'stones': 'st',
    },
    default_target=500,
    units=('grams', 'kilograms', 'tonnes'),
), name='Weight')

#: Data sizes in binary multiples.  Reference unit is bytes.
DataSize = create_measurement_type({
    'pebibytes': 1,
    'tebibytes': 1024,
    'gibibytes': 1024 ** 2,
    'mebibytes': 1024 ** 3,
    'kibibytes': 1024 ** 4,
    'bytes': 1024 ** 5,
}, reference_unit='bytes', format_options=FormatOptions(
    suffices={
        'bytes': ' b',
        'kibibytes': ' KiB',
        'mebibytes': ' MiB',
        'gibibytes': ' GiB',
        'tebibytes': ' TiB',
        'pebibytes': ' PiB',
    },
    default_target=512,
), name='DataSize')

#: Frequencies.  Reference unit is hertz.
Frequency = create_measurement_type({
    'hertz': 1,
    'kilohertz': .001,
    'megahertz': .000001,
    'gigahertz': .000000001,
    'cycles_per_minute': 60,
}, reference_unit='hertz', format_options=FormatOptions(
    suffices={
        'hertz': ' Hz',
        'kilohertz': ' kHz',
        'megahertz': ' MHz',
        'gigahertz': ' GHz',
        'cycles_per_minute': ' cpm',
    },
    default_target=500,
    units=('hertz', 'kilohertz', 'megahertz', 'gigahertz'),
), name='Frequency')
