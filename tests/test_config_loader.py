import logging
import os

import pytest

from mezr import (Distance, MeasurementConfigError, basicConfig, get_measurement_type, loadImperialTypes,
                  register_type, registered_types)
from mezr.config import find_config, load_config, load_types

GAME_CONFIG = """
[mezr.types.TomlGameDistance]
reference_unit = "map_units"
table = { map_units = 1, metres = 0.015625, player_steps = 0.041666666666666664 }

[mezr.types.TomlGameDistance.format]
units = ["map_units", "player_steps"]
suffices = { map_units = "u", metres = "m", player_steps = [" step", " steps"] }
"""


@pytest.fixture
def game_config(tmp_path):
    path = tmp_path / '.mezr.toml'
    path.write_text(GAME_CONFIG, encoding='utf-8')
    return path


class TestRegistry:

    def test_predefined_types(self):
        names = registered_types()
        for name in ('Distance', 'Angle', 'Period', 'Weight', 'DataSize', 'Frequency'):
            assert name in names
        assert names == sorted(names)
        assert get_measurement_type('Distance') is Distance

    def test_unknown_type(self):
        with pytest.raises(MeasurementConfigError, match="'Furlongs'"):
            get_measurement_type('Furlongs')

    def test_register_alias(self):
        register_type(Distance, 'Length')
        assert get_measurement_type('Length') is Distance

    @pytest.mark.parametrize("value", [Distance.metres(1), int, None])
    def test_register_non_type(self, value):
        with pytest.raises(MeasurementConfigError):
            register_type(value)


class TestConfigLoader:

    def test_find_config(self, game_config, tmp_path, monkeypatch):
        nested = tmp_path / 'a' / 'b'
        nested.mkdir(parents=True)
        assert find_config(str(nested)) == os.path.abspath(game_config)

        monkeypatch.chdir(nested)
        assert find_config() == os.path.abspath(game_config)

    def test_load_config(self, game_config):
        loaded = load_config(str(game_config))
        assert list(loaded) == ['TomlGameDistance']

        game_distance = get_measurement_type('TomlGameDistance')
        assert game_distance is loaded['TomlGameDistance']
        assert game_distance.reference_unit == 'map_units'
        assert game_distance.player_steps(1).as_map_units == pytest.approx(24)
        assert game_distance.player_steps(1).format_nearest(1) == "1 step"
        assert str(game_distance.metres(2)) == "128u"

    def test_load_config_from_working_dir(self, game_config, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        loaded = basicConfig()
        assert 'TomlGameDistance' in loaded

    def test_no_config_found(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        if find_config() is None:
            assert load_config() == {}

    @pytest.mark.parametrize(
        "content, message",
        [
            ("[other]\nkey = 1\n", "Config has no `mezr` section"),
            ("[mezr]\nkey = 1\n", "Config has no `mezr.types` section"),
        ],
    )
    def test_missing_sections(self, tmp_path, caplog, content, message):
        path = tmp_path / 'mezr.toml'
        path.write_text(content, encoding='utf-8')
        with caplog.at_level(logging.WARNING, logger='mezr'):
            assert load_config(str(path)) == {}
        assert message in caplog.text

        caplog.clear()
        with caplog.at_level(logging.WARNING, logger='mezr'):
            assert load_config(str(path), suppress_warnings=True) == {}
        assert message not in caplog.text

    def test_invalid_config_registers_nothing(self, tmp_path):
        path = tmp_path / 'mezr.toml'
        path.write_text(
            "[mezr.types.ValidButDropped]\n"
            "table = { a = 1, b = 2 }\n"
            "[mezr.types.BrokenRatios]\n"
            "table = { a = 1, b = 0 }\n",
            encoding='utf-8')
        with pytest.raises(MeasurementConfigError):
            load_config(str(path))
        assert 'ValidButDropped' not in registered_types()
        assert 'BrokenRatios' not in registered_types()

    @pytest.mark.parametrize(
        "definition",
        [
            {'reference_unit': 'a'},
            {'table': {'a': 1}, 'colour': 'red'},
            {'table': {'a': 1}, 'reference_unit': 'b'},
            {'table': {'a': 1}, 'format': {'units': ['b']}},
            {'table': {'a': 1}, 'format': {'suffices': {'a': 5}}},
            {'table': {'a': 1}, 'format': {'suffices': 'a'}},
            {'table': {'a': 1}, 'format': {'units': 5}},
            'not a table',
        ],
        ids=['no_table', 'unknown_key', 'bad_reference', 'bad_format', 'number_suffix', 'suffices_not_table',
             'number_units', 'not_mapping'],
    )
    def test_invalid_definition(self, definition):
        with pytest.raises(MeasurementConfigError):
            load_types({'InvalidDefinition': definition})
        assert 'InvalidDefinition' not in registered_types()

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_config(str(tmp_path / 'missing.toml'))


class TestBasicConfig:

    def test_types_mapping(self):
        loaded = basicConfig(types={
            'Pace': {'table': {'paces': 1, 'metres': 0.75}, 'reference_unit': 'paces'},
        })
        pace = get_measurement_type('Pace')
        assert loaded == {'Pace': pace}
        assert pace.paces(4).as_metres == 3

    def test_file_and_types(self, game_config):
        with pytest.raises(ValueError):
            basicConfig(str(game_config), types={'Pace': {'table': {'paces': 1}}})

    def test_imperial_types(self):
        loaded = loadImperialTypes()
        assert set(loaded) == {'ImperialDistance', 'ImperialWeight'}

        imperial_distance = get_measurement_type('ImperialDistance')
        assert imperial_distance.reference_unit == 'feet'
        assert str(imperial_distance.feet(3)) == '36"'
        assert imperial_distance.yards(1).format_nearest(1, ['yards']) == "1 yard"
        assert imperial_distance.miles(1).as_feet == pytest.approx(5280)

        imperial_weight = get_measurement_type('ImperialWeight')
        assert imperial_weight.pounds(14).as_stones == pytest.approx(1)
        assert str(imperial_weight.ounces(32)) == "32oz"

    def test_imperial_types_are_distinct(self):
        loadImperialTypes()
        imperial_distance = get_measurement_type('ImperialDistance')
        assert not isinstance(imperial_distance.feet(1), Distance)
