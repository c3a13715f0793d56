import pytest

from symbolic_differentiation.logging_system import LogLevel, configure_logging


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers bound to a previous test's captured stderr"""
    yield
    configure_logging(LogLevel.SILENT)
