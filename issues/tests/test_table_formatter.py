"""Tests for the aligned text table formatter."""

import io

import pytest

from issues.table_formatter import (
    fit_widths_to_headers,
    format_for,
    is_printable,
    lookup,
    print_table_for_columns,
    printable,
    rows_from_columns,
    separator,
    split_into_columns,
    unprintable_fields,
    widths_of,
)

SIMPLE_ROWS = [{"a": "1", "b": "xx"}, {"a": "22", "b": "y"}]


def _table(rows, headers, **kwargs) -> list[str]:
    out = io.StringIO()
    print_table_for_columns(rows, headers, out=out, **kwargs)
    return out.getvalue().split("\n")[:-1]


# ===========================================================================
# printable / lookup
# ===========================================================================


def test_printable_string_is_verbatim():
    assert printable('say "hi"\t') == 'say "hi"\t'


def test_printable_scalars():
    assert printable(42) == "42"
    assert printable(-7) == "-7"
    assert printable(1.5) == "1.5"
    assert printable(True) == "true"
    assert printable(False) == "false"
    assert printable(None) == ""


def test_printable_rejects_non_scalars():
    with pytest.raises(TypeError):
        printable(["bug"])  # type: ignore[arg-type]


def test_is_printable():
    assert all(is_printable(v) for v in ["x", 1, 1.5, True, None])
    assert not is_printable({"login": "octo"})
    assert not is_printable([])


def test_unprintable_fields():
    rows = [{"number": 1, "user": None}, {"number": 2, "user": {"login": "octo"}, "labels": []}]
    assert unprintable_fields(rows, ["number", "user", "labels", "title"]) == ["user", "labels"]


def test_lookup_missing_field_is_none():
    assert lookup({"a": 1}, "b") is None
    assert lookup({"a": 1}, "a") == 1


# ===========================================================================
# columns and widths
# ===========================================================================


def test_split_into_columns_shape():
    rows = [{"a": 1, "b": 2, "c": 3}] * 4
    columns = split_into_columns(rows, ["c", "a"])
    assert len(columns) == 2
    assert all(len(c) == 4 for c in columns)
    assert columns[0] == ["3", "3", "3", "3"]


def test_split_into_columns_missing_field_prints_empty():
    columns = split_into_columns([{"a": "x"}, {"a": None}, {}], ["a"])
    assert columns == [["x", "", ""]]


def test_widths_of_is_max_length():
    assert widths_of([["1", "22", "333"], ["abcd", ""]]) == [3, 4]


def test_widths_of_empty_column_is_zero():
    assert widths_of([[]]) == [0]
    assert widths_of([]) == []


def test_widths_ignore_header_length():
    """Header labels do not widen a column unless asked to."""
    columns = split_into_columns([{"number": 1}], ["number"])
    assert widths_of(columns) == [1]


def test_fit_widths_to_headers():
    assert fit_widths_to_headers([1, 10], ["number", "title"]) == [6, 10]


def test_rows_from_columns_round_trip():
    rows = [["1", "a", "x"], ["2", "b", "y"]]
    columns = [list(c) for c in zip(*rows)]
    assert rows_from_columns(columns, 2) == rows
    assert [list(c) for c in zip(*rows_from_columns(columns, 2))] == columns


def test_rows_from_columns_without_columns():
    assert rows_from_columns([], 3) == [[], [], []]


# ===========================================================================
# format and separator
# ===========================================================================


def test_format_for():
    assert format_for([2, 2]) == "{:<2} | {:<2}\n"
    assert format_for([2, 2]).format("1", "xx") == "1  | xx\n"


def test_format_for_zero_width_does_not_truncate():
    assert format_for([0]).format("header") == "header\n"


def test_format_for_value_wider_than_column():
    assert format_for([2, 1]).format("long", "z") == "long | z\n"


def test_separator():
    assert separator([2, 2]) == "--+--"
    assert separator([1, 3, 0]) == "-" + "-+-" + "---" + "-+-"
    assert separator([]) == ""


# ===========================================================================
# print_table_for_columns
# ===========================================================================


def test_print_simple_table():
    assert _table(SIMPLE_ROWS, ["a", "b"]) == [
        "a  | b ",
        "--+--",
        "1  | xx",
        "22 | y ",
    ]


def test_print_issue_table():
    rows = [
        {"number": 101, "created_at": "2024-01-01T10:00:00Z", "title": "Crash on start", "state": "open"},
        {"number": 7, "created_at": "2024-02-01T10:00:00Z", "title": "Typo"},
    ]
    lines = _table(rows, ["number", "created_at", "title"])
    assert lines == [
        "number | " + "created_at".ljust(20) + " | " + "title".ljust(14),
        "---" + "-+-" + "-" * 20 + "-+-" + "-" * 14,
        "101 | 2024-01-01T10:00:00Z | Crash on start",
        "7   | 2024-02-01T10:00:00Z | " + "Typo".ljust(14),
    ]


def test_print_fit_headers():
    rows = [{"number": 7, "title": "Typo"}]
    assert _table(rows, ["number", "title"], fit_headers=True) == [
        "number | title",
        "-------+------",
        "7      | Typo ",
    ]


def test_print_no_rows():
    assert _table([], ["x"]) == ["x", ""]


def test_print_no_headers():
    assert _table([{"a": 1}, {"a": 2}], []) == ["", "", "", ""]


def test_print_is_repeatable():
    first = _table(SIMPLE_ROWS, ["b", "a"])
    second = _table(SIMPLE_ROWS, ["b", "a"])
    assert first == second


def test_print_does_not_mutate_rows():
    rows = [{"a": "1"}, {"b": "2"}]
    _table(rows, ["a", "b"])
    assert rows == [{"a": "1"}, {"b": "2"}]


def test_print_defaults_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    print_table_for_columns(SIMPLE_ROWS, ["a", "b"])
    assert capsys.readouterr().out == "a  | b \n--+--\n1  | xx\n22 | y \n"
