"""
Test Command Line
=================
"""

import pytest


def test_validate_ok(capsys):
    from ucumkit.run import main

    assert main(["validate", "kg.m/s2"]) == 0
    assert "[OK]" in capsys.readouterr().out


def test_validate_fail_names_kind(capsys):
    from ucumkit.run import main

    assert main(["validate", "Cel2"]) == 1
    assert "SpecialUnitMisuse" in capsys.readouterr().out


def test_validate_purpose(capsys):
    from ucumkit.run import main

    assert main(["validate", "--purpose", "operations", "Cel"]) == 1
    assert "SpecialUnitNotEligible" in capsys.readouterr().out


def test_canonize(capsys):
    from ucumkit.run import main

    assert main(["canonize", "N"]) == 0
    assert capsys.readouterr().out.strip() == "m.s-2.g, 1000.0"


def test_vector(capsys):
    from ucumkit.run import main

    assert main(["vector", "m.s-1"]) == 0
    assert capsys.readouterr().out.strip() == "[1, -1, 0, 0, 0, 0, 0]"


def test_convert(capsys):
    from ucumkit.run import main

    assert main(["convert", "m", "km", "1000"]) == 0
    assert float(capsys.readouterr().out) == pytest.approx(1)


def test_commensurable(capsys):
    from ucumkit.run import main

    assert main(["commensurable", "m", "km"]) == 0
    assert main(["commensurable", "m", "s"]) == 1


def test_multiply_and_divide(capsys):
    from ucumkit.run import main

    assert main(["multiply", "m", "2", "m", "3"]) == 0
    assert capsys.readouterr().out.strip() == "m2, 6.0"
    assert main(["divide", "m", "1", "s", "0"]) == 1


def test_display_and_notation(capsys):
    from ucumkit.run import main

    assert main(["display", "km"]) == 0
    assert capsys.readouterr().out.strip() == "[kilometer]"
    assert main(["notation", "0.05"]) == 0
    assert capsys.readouterr().out.strip() == "5.10^-2"


def test_ineligible_exit_code(capsys):
    from ucumkit.run import main

    assert main(["canonize", "[iU]"]) == 1
    assert "ineligible" in capsys.readouterr().out


def test_config_file(tmp_path, capsys):
    from ucumkit.run import main

    path = tmp_path / "settings.yaml"
    path.write_text("max_expansion_depth: 1\n")

    assert main(["--config", str(path), "validate", "J"]) == 1
    assert "ExpansionTooDeep" in capsys.readouterr().out


def test_bad_config_file(tmp_path, capsys):
    from ucumkit.run import main

    path = tmp_path / "settings.yaml"
    path.write_text("depth: 1\n")

    assert main(["--config", str(path), "validate", "m"]) == 2
    assert "Configuration error" in capsys.readouterr().err


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
