"""
Tests for main.py - applying configuration at startup
"""

import logging
from datetime import date

from orgdate_mcp.main import apply_config
from orgdate_mcp.timestamps import (
    DEFAULT_MONTHS,
    DEFAULT_WEEKDAYS,
    get_name_tables,
    is_trace_enabled,
    parse_and_format,
)


class TestApplyConfig:
    """Tests for apply_config."""

    def test_defaults_leave_english_tables(self):
        apply_config({"weekday_abbreviations": None, "month_abbreviations": None, "trace": False})
        assert get_name_tables().weekdays == DEFAULT_WEEKDAYS
        assert get_name_tables().months == DEFAULT_MONTHS
        assert is_trace_enabled() is False

    def test_configured_tables(self):
        weekdays = ["Dim", "Lun", "Mar", "Mer", "Jeu", "Ven", "Sam"]
        months = ["janv", "févr", "mars", "avr", "mai", "juin",
                  "juil", "août", "sept", "oct", "nov", "déc"]
        apply_config({"weekday_abbreviations": weekdays, "month_abbreviations": months, "trace": True})

        assert get_name_tables().weekdays == tuple(weekdays)
        assert get_name_tables().months == tuple(months)
        assert is_trace_enabled() is True
        assert parse_and_format("sept 12 18", base_date=date(2018, 10, 29)) == "2018-09-12 Mer"

    def test_wrong_length_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING, logger="orgdate_mcp.main"):
            apply_config({"weekday_abbreviations": ["Dim", "Lun"]})
        assert get_name_tables().weekdays == DEFAULT_WEEKDAYS
        assert "weekday_abbreviations needs 7 names" in caplog.text
