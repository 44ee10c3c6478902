"""Command-line evaluation, exit codes, and error reporting."""

import math

import pytest

from taintfloat import floats
from taintfloat.calc import EvaluationError, calculate
from taintfloat.cli import main
from taintfloat.errors import NaNEncountered, PositiveInfinity


@pytest.fixture(autouse=True)
def unbounded(monkeypatch):
    monkeypatch.setattr(floats, "BOUNDED", False)


# ---------------------------------------------------------------------------
# calculate()
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "source,expected",
    [
        ("1 + 2 * 3", 7.0),
        ("(1 + 2) * 3", 9.0),
        ("2^3^2", 512.0),
        ("2**10", 1024.0),
        ("-2^2", -4.0),
        ("7 % 4", 3.0),
        ("sqrt(16)", 4.0),
        ("hypot(3, 4)", 5.0),
        ("fma(2, 3, 4)", 10.0),
        ("round(-2.5)", -3.0),
        ("atan2(1, 1) * 4", math.pi),
        ("log(8, 2)", 3.0),
        ("min(3, -2) + max(3, -2)", 1.0),
        ("1 / 0", math.inf),
        ("-inf", -math.inf),
    ],
)
def test_calculate(source: str, expected: float):
    assert calculate(source) == expected


def test_calculate_f32():
    assert calculate("0.1", f32=True).raw == 0.10000000149011612
    assert calculate("16777216 + 1", f32=True) == 16777216.0


def test_calculate_bounded(monkeypatch):
    monkeypatch.setattr(floats, "BOUNDED", True)
    with pytest.raises(PositiveInfinity):
        calculate("1 / 0")
    assert calculate("atan(inf)") == math.pi / 2


@pytest.mark.diagnostic
def test_calculate_reports_first_failure():
    with pytest.raises(NaNEncountered) as exc:
        calculate("sqrt(0 / 0 + 1) * ln(-1)")
    assert exc.value.record.describe() == "Division of zero by zero resulted in NaN"


def test_plain_nan_literal():
    with pytest.raises(NaNEncountered) as exc:
        calculate("nan")
    assert exc.value.record is None


@pytest.mark.parametrize(
    "source,msg",
    [
        ("foo(1)", "unknown function 'foo'"),
        ("x + 1", "unknown constant 'x'"),
        ("sqrt(1, 2)", "sqrt() takes 1 argument, got 2"),
        ("atan2(1)", "atan2() takes 2 arguments, got 1"),
    ],
)
def test_evaluation_errors(source: str, msg: str):
    with pytest.raises(EvaluationError) as exc:
        calculate(source)
    assert exc.value.msg == msg


# ---------------------------------------------------------------------------
# main()
# ---------------------------------------------------------------------------


def test_main_prints_result(capsys):
    assert main(["1", "+", "2"]) == 0
    assert capsys.readouterr().out == "3.0\n"


def test_main_negative_number_is_not_a_flag(capsys):
    assert main(["-1.5", "*", "2"]) == 0
    assert capsys.readouterr().out == "-3.0\n"


def test_main_double_dash(capsys):
    # After "--" nothing is a flag: "--f32" reads as two negations of a name.
    assert main(["--", "--f32"]) == 1
    assert capsys.readouterr().err == "taintfloat: error: unknown constant 'f32' at col 3\n"


def test_main_help(capsys):
    assert main(["--help"]) == 0
    assert "taintfloat [OPTIONS]" in capsys.readouterr().out


def test_main_unknown_flag(capsys):
    assert main(["--frobnicate", "1"]) == 2
    assert "unknown flag '--frobnicate'" in capsys.readouterr().err


def test_main_missing_expression(capsys):
    assert main([]) == 2
    assert "missing expression" in capsys.readouterr().err


def test_main_parse_error(capsys):
    assert main(["1 +"]) == 1
    err = capsys.readouterr().err
    assert err == "taintfloat: parse error: expected expression, got end of input at col 4\n"


def test_main_evaluation_error(capsys):
    assert main(["foo(1)"]) == 1
    assert capsys.readouterr().err == "taintfloat: error: unknown function 'foo' at col 1\n"


@pytest.mark.diagnostic
def test_main_invalid_result(capsys):
    assert main(["inf - inf + 1"]) == 1
    assert capsys.readouterr().err == (
        "taintfloat: invalid result: Subtraction of infinity by infinity resulted in NaN\n"
    )


def test_main_f32(capsys):
    assert main(["--f32", "0.1"]) == 0
    assert capsys.readouterr().out == "0.10000000149011612\n"


# ---------------------------------------------------------------------------
# Subprocess
# ---------------------------------------------------------------------------


def test_cli_module(run_cli):
    result = run_cli("2", "*", "21")
    assert result.returncode == 0
    assert result.stdout == "42.0\n"


def test_cli_diagnostic(run_cli):
    result = run_cli("0/0")
    assert result.returncode == 1
    assert result.stderr == "taintfloat: invalid result: Division of zero by zero resulted in NaN\n"


def test_cli_release(run_cli):
    result = run_cli("0/0", TAINTFLOAT_DIAGNOSTICS="0")
    assert result.returncode == 1
    assert result.stderr == "taintfloat: invalid result: Sanitization of NaN\n"


def test_cli_bounded(run_cli):
    result = run_cli("1/0", TAINTFLOAT_POLICY="bounded")
    assert result.returncode == 1
    assert result.stderr == "taintfloat: invalid result: Sanitization of infinity\n"


def test_cli_verbose_logs_registry(run_cli):
    result = run_cli("--verbose", "0/0")
    assert result.returncode == 1
    assert "DEBUG taintfloat.registry" in result.stderr
