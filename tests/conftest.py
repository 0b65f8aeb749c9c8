"""
Shared fixtures for the Org date tests.
"""

import pytest

from orgdate_mcp.timestamps import (
    set_month_abbreviations,
    set_trace_enabled,
    set_weekday_abbreviations,
)


@pytest.fixture(autouse=True)
def reset_process_state():
    """Restore the English name tables and disable tracing around every test."""
    set_weekday_abbreviations(None)
    set_month_abbreviations(None)
    set_trace_enabled(False)
    yield
    set_weekday_abbreviations(None)
    set_month_abbreviations(None)
    set_trace_enabled(False)
