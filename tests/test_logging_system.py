"""Logging levels and the parser trace."""

import numpy as np
import pytest

from symbolic_differentiation import Expression, EvalError
from symbolic_differentiation.logging_system import (
    LogLevel, configure_logging, get_logger, set_log_level
)


def test_verbose_traces_parser_splits(capsys):
    configure_logging(LogLevel.VERBOSE)
    Expression.parse("a+b*c")
    err = capsys.readouterr().err
    assert "split 'a+b*c' at '+'" in err
    assert "split 'b*c' at '*'" in err


def test_default_level_is_quiet(capsys):
    configure_logging()
    Expression.parse("a+b")
    assert capsys.readouterr().err == ""


def test_detailed_level_reports_evaluation_failures(capsys):
    configure_logging(LogLevel.DETAILED)
    with pytest.raises(EvalError):
        Expression.parse("1/x").evaluate({"x": 0.0})
    err = capsys.readouterr().err
    assert "evaluation of (1 / x) failed" in err
    assert "split" not in err


def test_silent_level_has_no_console_handler():
    logger = configure_logging(LogLevel.SILENT)
    assert logger.logger.handlers == []


def test_set_log_level_updates_global_logger():
    configure_logging(LogLevel.MINIMAL)
    set_log_level(LogLevel.VERBOSE)
    assert get_logger().log_level == LogLevel.VERBOSE


def test_non_finite_evaluation_logs_warning(capsys):
    configure_logging(LogLevel.MINIMAL)
    result = Expression.parse("x^0.5").evaluate({"x": np.array([4.0, -1.0])})
    assert result[0] == pytest.approx(2.0)
    assert np.isnan(result[1])
    assert "non-finite result" in capsys.readouterr().err


def test_finite_evaluation_does_not_warn(capsys):
    configure_logging(LogLevel.MINIMAL)
    Expression.parse("x^0.5").evaluate({"x": 4.0})
    assert capsys.readouterr().err == ""


def test_silent_level_drops_warnings(capsys):
    configure_logging(LogLevel.SILENT)
    Expression.parse("exp(1000)").evaluate()
    assert capsys.readouterr().err == ""
