"""Tests for output formatters."""

from __future__ import annotations

import json

import yaml

from tasklane.utils.ui.formatters import _format_value, format_output

_TASK = {
    "id": "tsk_0001",
    "listId": "lst_01",
    "title": "Revisar contrato",
    "status": "open",
    "priority": "high",
    "dueAt": None,
    "tags": ["Q3"],
    "checklist": [{"id": "chk_00", "title": "ler", "checked": True}],
    "version": 1,
}


def test_json_output(capsys):
    format_output(_TASK, "json")

    assert json.loads(capsys.readouterr().out) == _TASK


def test_yaml_output(capsys):
    format_output(_TASK, "yaml")

    assert yaml.safe_load(capsys.readouterr().out) == _TASK


def test_single_item_table(capsys):
    format_output(_TASK, "table")

    out = capsys.readouterr().out
    assert "Revisar contrato" in out
    assert "ler (chk_00)" in out


def test_page_table_with_cursor_hints(capsys):
    task = dict(_TASK, title="A", tags=[])
    format_output({"data": [task], "links": {"next": "1", "prev": "0"}}, "table")

    out = capsys.readouterr().out
    assert "tsk_0001" in out
    assert "--after 1" in out
    assert "--before 0" in out


def test_empty_page(capsys):
    format_output({"data": [], "links": {"next": None, "prev": None}}, "table")

    assert "No tasks found" in capsys.readouterr().out


def test_no_data(capsys):
    format_output([], "table")

    assert "No data to display" in capsys.readouterr().out


def test_format_value():
    assert _format_value(None) == "-"
    assert _format_value([]) == "-"
    assert _format_value(["a", "b"]) == "a, b"
    assert _format_value(True) == "✓"
    assert _format_value(3) == "3"
