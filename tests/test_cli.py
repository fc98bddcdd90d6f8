import pytest

from mezr.__main__ import amount_argument, get_arg_parser, main


def run(capsys, *args):
    assert main(list(args)) == 0
    return capsys.readouterr().out.splitlines()


class TestArguments:

    def test_amount_argument(self):
        assert amount_argument('metres=2.5') == ('metres', 2.5)
        assert amount_argument(' feet =-3') == ('feet', -3.0)

    @pytest.mark.parametrize("value", ['metres', '=2', 'metres=two'])
    def test_invalid_amount_argument(self, value):
        parser = get_arg_parser()
        with pytest.raises(SystemExit) as exc_info:
            parser.parse_args(['Distance', value])
        assert exc_info.value.code == 2


class TestMain:

    def test_default_format(self, capsys):
        assert run(capsys, 'Distance', 'metres=2.5') == ['250cm']

    def test_summed_amounts(self, capsys):
        assert run(capsys, 'Distance', 'metres=2', 'centimetres=50') == ['250cm']
        assert run(capsys, 'Distance', 'metres=2', 'metres=0.5') == ['250cm']

    def test_zero(self, capsys):
        assert run(capsys, 'Period') == ['0ms']

    def test_to_unit(self, capsys):
        assert run(capsys, 'Distance', 'metres=2.5', '--to', 'centimetres', '-t', 'metres') == ['250.0', '2.5']

    def test_nearest(self, capsys):
        assert run(capsys, 'Distance', 'metres=2.5', '-n', '6') == ['2.5 metres']
        assert run(capsys, 'Distance', 'metres=2.5', '-n') == ['250cm']
        assert run(capsys, 'Distance', 'metres=2.5', '-n', '1', '-u', 'feet') == ["8.2'"]

    def test_breakdown(self, capsys):
        assert run(capsys, 'Distance', 'metres=2.5', '--breakdown') == ['{"metres": 2, "centimetres": 50}']
        assert run(capsys, 'Distance', 'metres=2.5', '-b', '-u', 'kilometres', 'metres') == \
            ['{"kilometres": 0, "metres": 2}']

    def test_json(self, capsys):
        assert run(capsys, 'Distance', 'metres=2.5', '--json') == ['{"centimetres": 250.0}']

    def test_repr(self, capsys):
        assert run(capsys, 'Distance', 'metres=2.5', '-r') == ['<Distance: 250cm (2.5)>']

    def test_combined_outputs(self, capsys):
        assert run(capsys, 'Angle', 'turns=0.25', '-t', 'degrees', '-j') == ['90.0', '{"degrees": 90.0}']

    @pytest.mark.parametrize(
        "args, message",
        [
            (['Furlongs', 'metres=1'], 'known types'),
            (['Distance', 'furlongs=1'], "'furlongs'"),
            (['Distance', 'metres=nan'], 'NaN'),
            (['Distance', 'metres=1', '-t', 'furlongs'], "'furlongs'"),
        ],
        ids=['unknown_type', 'unknown_unit', 'nan_amount', 'unknown_target_unit'],
    )
    def test_errors(self, capsys, args, message):
        with pytest.raises(SystemExit) as exc_info:
            main(args)
        assert exc_info.value.code == 2
        assert message in capsys.readouterr().err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(['--version'])
        assert exc_info.value.code == 0
        assert 'mezr v' in capsys.readouterr().out

    def test_config(self, capsys, tmp_path):
        path = tmp_path / 'game.toml'
        path.write_text(
            '[mezr.types.CliGameDistance]\n'
            'reference_unit = "map_units"\n'
            'table = { map_units = 1, metres = 0.015625 }\n'
            '[mezr.types.CliGameDistance.format]\n'
            'suffices = { map_units = "u", metres = "m" }\n',
            encoding='utf-8')
        assert run(capsys, 'CliGameDistance', 'metres=2', '-c', str(path)) == ['128u']

    def test_missing_config(self, capsys, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main(['Distance', 'metres=1', '-c', str(tmp_path / 'missing.toml')])
        assert exc_info.value.code == 2
        assert "Can't read config" in capsys.readouterr().err

    def test_invalid_config(self, capsys, tmp_path):
        path = tmp_path / 'broken.toml'
        path.write_text('[mezr.types.CliBroken]\ntable = { a = -1 }\n', encoding='utf-8')
        with pytest.raises(SystemExit) as exc_info:
            main(['CliBroken', 'a=1', '-c', str(path)])
        assert exc_info.value.code == 2

    def test_invalid_suffix_in_config(self, capsys, tmp_path):
        path = tmp_path / 'suffix.toml'
        path.write_text(
            '[mezr.types.CliBadSuffix]\n'
            'table = { metres = 1 }\n'
            '[mezr.types.CliBadSuffix.format]\n'
            'suffices = { metres = 5 }\n',
            encoding='utf-8')
        with pytest.raises(SystemExit) as exc_info:
            main(['CliBadSuffix', 'metres=1', '-c', str(path)])
        assert exc_info.value.code == 2
        assert 'Invalid format options' in capsys.readouterr().err
