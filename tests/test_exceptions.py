import pytest

from mezr import Angle, Distance, Measurement
from mezr.exceptions import (InvalidAmountError, MeasurementConfigError, MeasurementConstructionError,
                             UnitConversionError, UnitTypeError)


def test_hierarchy():
    assert issubclass(UnitTypeError, TypeError)
    assert issubclass(UnitConversionError, UnitTypeError)
    assert issubclass(MeasurementConstructionError, UnitTypeError)
    assert issubclass(InvalidAmountError, ValueError)
    assert issubclass(MeasurementConfigError, ValueError)


def test_invalid_amount_error_message_and_attrs():
    err = InvalidAmountError('metres', 'two')
    assert err.unit == 'metres'
    assert err.amount == 'two'
    assert "Unit 'metres' is NaN" in str(err)
    assert "'two'" in str(err)

    err_no_unit = InvalidAmountError(None, [1, 2], 'JSON object of unit amounts expected')
    assert err_no_unit.unit is None
    assert str(err_no_unit).startswith("Invalid amount [1, 2]")
    assert str(err_no_unit).endswith("JSON object of unit amounts expected")


def test_invalid_amount_raised_with_unit():
    with pytest.raises(InvalidAmountError) as exc_info:
        Distance(metres=1, centimetres=float('nan'))
    assert exc_info.value.unit == 'centimetres'


def test_unit_conversion_error_names_unit():
    with pytest.raises(UnitConversionError, match="'furlongs'"):
        Distance.metres(1).to_unit('furlongs')
    with pytest.raises(UnitConversionError):
        Distance({'furlongs': 1})


def test_cross_type_operands():
    with pytest.raises(UnitTypeError):
        Distance.metres(1).add(Angle.degrees(1))
    with pytest.raises(UnitTypeError):
        Distance.metres(1) < Angle.degrees(1)


def test_construction_errors():
    with pytest.raises(MeasurementConstructionError):
        Measurement()
    with pytest.raises(MeasurementConstructionError):
        Distance.__init__(Angle.degrees(1), metres=1)
    with pytest.raises(MeasurementConstructionError):
        Distance.metres(1).__init__(metres=2)


def test_loads_non_object():
    with pytest.raises(InvalidAmountError):
        Distance.loads('[1, 2]')
