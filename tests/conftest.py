# tests/conftest.py
import io
import pytest
from decimal import getcontext

from capgains import config as app_config
from capgains.domain.position import Position


@pytest.fixture(scope="session", autouse=True)
def set_decimal_precision_session_wide():
    """
    Set global decimal precision and rounding for all tests in the session.
    This mirrors setup_decimal_context in capgains.main.
    """
    getcontext().prec = app_config.INTERNAL_CALCULATION_PRECISION
    getcontext().rounding = app_config.DECIMAL_ROUNDING_MODE


@pytest.fixture
def position():
    """A fresh position under the default tax policy."""
    return Position()


@pytest.fixture
def output_stream():
    """In-memory text stream collecting pipeline output."""
    with io.StringIO() as stream:
        yield stream
