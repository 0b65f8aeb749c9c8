"""
Tests for mcp/tools.py and mcp/resources.py - the MCP surface
"""

import pytest
from unittest.mock import patch

import orgdate_mcp.mcp.tools as tools_module
from orgdate_mcp.mcp.resources import setup_resources
from orgdate_mcp.mcp.tools import resolve_activity, setup_tools
from orgdate_mcp.timestamps import Activity, DEFAULT_WEEKDAYS, get_name_tables, is_trace_enabled


class FakeMCP:
    """Collects the functions registered through the FastMCP decorators."""

    def __init__(self):
        self.tools = {}
        self.resources = {}

    def tool(self):
        def register(fn):
            self.tools[fn.__name__] = fn
            return fn
        return register

    def resource(self, uri):
        def register(fn):
            self.resources[uri] = fn
            return fn
        return register


@pytest.fixture
def tools():
    mcp = FakeMCP()
    setup_tools(mcp)
    return mcp.tools


@pytest.fixture
def resources():
    mcp = FakeMCP()
    setup_resources(mcp)
    return mcp.resources


@pytest.fixture
def no_default_activity():
    with patch.object(tools_module, "get_config", return_value={"default_activity": "none"}):
        yield


class TestRegistration:
    """Tests for tool and resource registration."""

    def test_all_tools_registered(self, tools):
        assert set(tools) == {
            "parse_date_input",
            "describe_timestamp",
            "adjust_timestamp",
            "set_weekday_names",
            "set_month_names",
            "set_trace",
        }

    def test_all_resources_registered(self, resources):
        assert set(resources) == {"orgdate://names", "orgdate://today"}


class TestResolveActivity:
    """Tests for resolve_activity."""

    def test_explicit_values(self):
        assert resolve_activity("active") == Activity.ACTIVE
        assert resolve_activity("Inactive") == Activity.INACTIVE
        assert resolve_activity("none") == Activity.UNMARKED

    def test_invalid_explicit_value_raises(self):
        with pytest.raises(ValueError):
            resolve_activity("bold")

    def test_falls_back_to_config(self):
        with patch.object(tools_module, "get_config", return_value={"default_activity": "active"}):
            assert resolve_activity(None) == Activity.ACTIVE

    def test_invalid_config_value_is_unmarked(self):
        with patch.object(tools_module, "get_config", return_value={"default_activity": "bold"}):
            assert resolve_activity(None) == Activity.UNMARKED


@pytest.mark.usefixtures("no_default_activity")
class TestParseDateInput:
    """Tests for the parse_date_input tool."""

    def test_full_date(self, tools):
        result = tools["parse_date_input"]("9/5/18")
        assert result["success"] is True
        assert result["timestamp"] == "2018-09-05 Wed"
        assert result["kind"] == "date"
        assert result["activity"] == "unmarked"
        assert result["start"] == "2018-09-05T00:00:00"
        assert result["end"] is None

    def test_active_brackets(self, tools):
        result = tools["parse_date_input"]("9/5/18 10am", activity="active")
        assert result["timestamp"] == "<2018-09-05 Wed 10:00>"
        assert result["activity"] == "active"
        assert result["kind"] == "date_time"

    def test_configured_brackets(self, tools):
        with patch.object(tools_module, "get_config", return_value={"default_activity": "inactive"}):
            result = tools["parse_date_input"]("2018-9-5")
        assert result["timestamp"] == "[2018-09-05 Wed]"

    def test_bracketed_input_keeps_its_brackets(self, tools):
        result = tools["parse_date_input"]("[2018-10-21 Sun]", activity="active")
        assert result["timestamp"] == "[2018-10-21 Sun]"

    def test_offset_from_default(self, tools):
        result = tools["parse_date_input"]("++4d", default_timestamp="2018-10-21 Sun 19:10")
        assert result["timestamp"] == "2018-10-25 Thu 19:10"

    def test_time_range(self, tools):
        result = tools["parse_date_input"]("2018-9-5 11am-1:15pm")
        assert result["timestamp"] == "2018-09-05 Wed 11:00-13:15"
        assert result["kind"] == "diary"
        assert result["end"] == "2018-09-05T13:15:00"

    def test_invalid_activity(self, tools):
        result = tools["parse_date_input"]("9/5/18", activity="bold")
        assert result["success"] is False
        assert "hint" in result

    def test_malformed_timestamp(self, tools):
        result = tools["parse_date_input"]("[garbage]")
        assert result["success"] is False
        assert "garbage" in result["error"]


class TestDescribeTimestamp:
    """Tests for the describe_timestamp tool."""

    def test_all_fields(self, tools):
        result = tools["describe_timestamp"]("<2018-10-21 Sun 19:10 +1w -2d>")
        assert result["success"] is True
        assert result["timestamp"] == "<2018-10-21 Sun 19:10 +1w -2d>"
        assert result["kind"] == "date_time"
        assert result["activity"] == "active"
        assert result["start"] == "2018-10-21T19:10:00"
        assert result["repeater"] == {"magnitude": 1, "unit": "w", "text": "+1w"}
        assert result["delay"] == {"magnitude": -2, "unit": "d", "text": "-2d"}

    def test_range(self, tools):
        result = tools["describe_timestamp"]("[2018-10-21 Sun]--[2018-10-23 Tue]")
        assert result["kind"] == "date_range"
        assert result["activity"] == "inactive"
        assert result["end"] == "2018-10-23T00:00:00"
        assert result["repeater"] is None

    def test_not_a_timestamp(self, tools):
        result = tools["describe_timestamp"]("next friday")
        assert result["success"] is False


class TestAdjustTimestamp:
    """Tests for the adjust_timestamp tool."""

    def test_days(self, tools):
        result = tools["adjust_timestamp"]("<2018-10-21 Sun 19:10>", 1)
        assert result["timestamp"] == "<2018-10-22 Mon 19:10>"

    def test_weekday(self, tools):
        result = tools["adjust_timestamp"]("<2018-10-21 Sun>", 1, "fri")
        assert result["timestamp"] == "<2018-10-26 Fri>"

    def test_hours_add_a_time(self, tools):
        result = tools["adjust_timestamp"]("2018-10-21 Sun", 3, "h")
        assert result["timestamp"] == "2018-10-21 Sun 03:00"
        assert result["kind"] == "date_time"

    def test_out_of_range_amount_leaves_timestamp(self, tools):
        result = tools["adjust_timestamp"]("<2018-10-21 Sun>", 10 ** 12, "d")
        assert result["success"] is True
        assert result["timestamp"] == "<2018-10-21 Sun>"

    def test_not_a_timestamp(self, tools):
        result = tools["adjust_timestamp"]("[oops]", 1)
        assert result["success"] is False


class TestNameTools:
    """Tests for the name table tools and resource."""

    def test_set_weekday_names(self, tools, resources):
        names = ["Dim", "Lun", "Mar", "Mer", "Jeu", "Ven", "Sam"]
        result = tools["set_weekday_names"](names)
        assert result["success"] is True
        assert result["weekdays"] == names
        assert resources["orgdate://names"]()["weekdays"] == names

    def test_reset_weekday_names(self, tools):
        tools["set_weekday_names"](["a", "b", "c", "d", "e", "f", "g"])
        result = tools["set_weekday_names"]()
        assert result["weekdays"] == list(DEFAULT_WEEKDAYS)
        assert get_name_tables().weekdays == DEFAULT_WEEKDAYS

    def test_set_month_names(self, tools):
        names = ["m%d" % i for i in range(1, 13)]
        result = tools["set_month_names"](names)
        assert result["months"] == names


class TestTraceAndToday:
    """Tests for set_trace and the today resource."""

    def test_set_trace(self, tools, resources):
        assert tools["set_trace"](True) == {"success": True, "trace": True}
        assert is_trace_enabled() is True
        assert resources["orgdate://today"]()["trace"] is True

    def test_today(self, resources):
        result = resources["orgdate://today"]()
        assert result["kind"] == "date"
        assert result["start"].endswith("T00:00:00")
