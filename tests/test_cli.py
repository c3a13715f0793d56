"""Command line front end."""

import pytest

from symbolic_differentiation.cli import join_expression_options, main, parse_bindings


def test_eval(capsys):
    assert main(["--eval", "2*x", "x=10"]) == 0
    assert capsys.readouterr().out == "20.0\n"


def test_eval_with_several_bindings(capsys):
    assert main(["--eval", "x*y + z", "x=2", "y=3.5", "z=-1"]) == 0
    assert capsys.readouterr().out.strip() == "6.0"


def test_diff(capsys):
    assert main(["--diff", "x*x", "--by", "x"]) == 0
    assert capsys.readouterr().out == "((1 * x) + (x * 1))\n"


def test_diff_latex(capsys):
    assert main(["--diff", "x^2", "--by", "x", "--latex"]) == 0
    assert capsys.readouterr().out.strip() == "2 x"


def test_diff_requires_variable(capsys):
    assert main(["--diff", "x*x"]) == 1
    assert capsys.readouterr().err.strip() == "Error: must specify --by var"


def test_eval_error_is_reported(capsys):
    assert main(["--eval", "y+1"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.strip() == "Error: Missing value for variable: y"


def test_parse_error_is_reported(capsys):
    assert main(["--eval", "(x+1"]) == 1
    assert capsys.readouterr().err.startswith("Error: ")


def test_bad_binding(capsys):
    assert main(["--eval", "x", "x=abc"]) == 1
    assert "Invalid value for x" in capsys.readouterr().err


def test_mode_is_required():
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2


def test_modes_are_exclusive():
    with pytest.raises(SystemExit):
        main(["--eval", "x", "--diff", "x"])


def test_parse_bindings():
    assert parse_bindings(["x=1", " y =2.5"]) == {"x": 1.0, "y": 2.5}
    with pytest.raises(ValueError):
        parse_bindings(["x"])
    with pytest.raises(ValueError):
        parse_bindings(["=3"])


def test_eval_expression_with_leading_minus(capsys):
    assert main(["--eval", "-x+1", "x=2"]) == 0
    assert capsys.readouterr().out == "-1.0\n"


def test_diff_expression_with_leading_minus(capsys):
    assert main(["--diff", "-x^2", "--by", "x"]) == 0
    assert capsys.readouterr().out == "(0 - ((2 * (x^1)) * 1))\n"


@pytest.mark.parametrize("argv", [
    ["--eval", "x", "--by", "x", "x=1"],
    ["--eval", "x", "--latex", "x=1"],
    ["--diff", "x*y", "--by", "x", "y=2"],
])
def test_options_for_the_other_mode_are_rejected(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2


def test_non_finite_result_warns_on_stderr(capsys):
    assert main(["--eval", "exp(x)", "x=1000"]) == 0
    captured = capsys.readouterr()
    assert captured.out == "inf\n"
    assert "non-finite result" in captured.err


def test_quiet_suppresses_warnings(capsys):
    assert main(["-q", "--eval", "exp(x)", "x=1000"]) == 0
    captured = capsys.readouterr()
    assert captured.out == "inf\n"
    assert captured.err == ""


def test_join_expression_options():
    assert join_expression_options(["--eval", "-x", "x=1"]) == ["--eval=-x", "x=1"]
    assert join_expression_options(["--diff", "-x", "--by", "x"]) == ["--diff=-x", "--by", "x"]
    assert join_expression_options(["--eval"]) == ["--eval"]


def test_verbose_reports_bindings(capsys):
    assert main(["-v", "--eval", "x+1", "x=1"]) == 0
    captured = capsys.readouterr()
    assert captured.out == "2.0\n"
    assert "Bindings: {'x': 1.0}" in captured.err
