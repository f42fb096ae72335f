"""Tests for wire building helpers and lazy lookups."""

from datetime import datetime

import pytest

from helpdesk_client.common import FILES_KEY, FilePayload, Lazy
from helpdesk_client.common.wire import (
    build_bool,
    build_date,
    build_file,
    build_list,
    build_numeric,
    build_repeated,
    build_string,
    format_timestamp,
    is_numeric,
    parse_date,
    split_files,
    timestamp_from,
)

MARCH_15_2024 = 1710460800


class TestBuildHelpers:
    """Test the field builders."""

    def test_string(self):
        data = {}
        build_string(data, "title", 5)
        build_string(data, "missing", None)
        assert data == {"title": "5"}

    @pytest.mark.parametrize("value, expected", [
        (5, True),
        (2.5, True),
        ("12", True),
        ("abc", False),
        (True, False),
        (None, False),
    ])
    def test_is_numeric(self, value, expected):
        assert is_numeric(value) is expected

    def test_numeric_skips_non_numbers(self):
        data = {}
        build_numeric(data, "a", 3)
        build_numeric(data, "b", "abc")
        build_numeric(data, "c", None)
        assert data == {"a": 3}

    def test_bool(self):
        data = {}
        build_bool(data, "on", True)
        build_bool(data, "off", False)
        build_bool(data, "unset", None)
        assert data == {"on": 1, "off": 0}

    def test_indexed_list(self):
        data = {}
        build_list(data, "usergroupidlist", [3, 7])
        build_list(data, "empty", None)
        assert data == {"usergroupidlist[0]": 3, "usergroupidlist[1]": 7}

    def test_repeated_list(self):
        data = {}
        build_repeated(data, "email", ("a@example.com", "b@example.com"))
        build_repeated(data, "empty", [])
        assert data == {"email": ["a@example.com", "b@example.com"]}

    def test_date(self):
        data = {}
        build_date(data, "expiry", MARCH_15_2024)
        build_date(data, "iso", MARCH_15_2024, "%Y-%m-%d")
        build_date(data, "unset", None)
        build_date(data, "epoch", 0)
        assert data == {"expiry": "03/15/2024", "iso": "2024-03-15", "epoch": "01/01/1970"}

    def test_format_timestamp_is_utc(self):
        assert format_timestamp(0, "%Y-%m-%d %H:%M") == "1970-01-01 00:00"


class TestDates:
    """Test reading dates from the wire and from callers."""

    @pytest.mark.parametrize("text, expected", [
        ("03/15/2024", MARCH_15_2024),
        ("2024-03-15", MARCH_15_2024),
        ("2024-03-15 00:00:00", MARCH_15_2024),
        ("2024-03-15T00:00:00Z", MARCH_15_2024),
        ("Mar 15, 2024", MARCH_15_2024),
        ("March 15 2024", MARCH_15_2024),
        ("15 Mar 2024", MARCH_15_2024),
        ("1710460800", MARCH_15_2024),
        ("", None),
        (None, None),
        ("next tuesday", None),
    ])
    def test_parse_date(self, text, expected):
        assert parse_date(text) == expected

    @pytest.mark.parametrize("value, expected", [
        (MARCH_15_2024, MARCH_15_2024),
        ("03/15/2024", MARCH_15_2024),
        (datetime(2024, 3, 15), MARCH_15_2024),
        (0, None),
        ("later", None),
        (None, None),
    ])
    def test_timestamp_from(self, value, expected):
        assert timestamp_from(value) == expected


class TestFiles:
    """Test the file payload channel."""

    def test_split(self):
        data = {"title": "x"}
        build_file(data, "field1", FilePayload("a.txt", b"abc"))
        fields, files = split_files(data)

        assert fields == {"title": "x"}
        assert files == {"field1": FilePayload("a.txt", b"abc")}
        assert FILES_KEY in data

    def test_split_without_files(self):
        assert split_files({"a": 1}) == ({"a": 1}, {})


class TestLazy:
    """Test lazily loaded related objects."""

    def test_loaded_once(self):
        loads = []
        lazy = Lazy(lambda: loads.append(1) or "value")

        assert lazy.get() == "value"
        assert lazy.get() == "value"
        assert len(loads) == 1
        assert lazy.loaded

    def test_reload(self):
        values = iter(["first", "second"])
        lazy = Lazy(lambda: next(values))
        lazy.get()
        assert lazy.get(reload=True) == "second"

    def test_none_not_cached(self):
        loads = []
        lazy = Lazy(lambda: loads.append(1))

        assert lazy.get() is None
        assert lazy.get() is None
        assert len(loads) == 2
        assert not lazy.loaded

    def test_set_and_reset(self):
        lazy = Lazy(lambda: "loaded")
        lazy.set("primed")
        assert lazy.get() == "primed"
        lazy.reset()
        assert lazy.get() == "loaded"
