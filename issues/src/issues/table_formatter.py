"""Aligned text tables: columnize rows, measure widths, print header/separator/rows.

Column widths come from the data values only, so a header longer than every
value in its column is printed unpadded. Pass ``fit_headers=True`` to widen
each column to its header label instead.
"""

from __future__ import annotations

import sys
from collections.abc import Mapping, Sequence
from typing import IO, Any

# Values a decoded JSON row may hold in a printed column
Scalar = str | int | float | bool | None

COLUMN_SEPARATOR = " | "
SEPARATOR_JOIN = "-+-"


def lookup(row: Mapping[str, Any], header: str) -> Scalar:
    """Return the value for ``header``, or None when the row lacks the field."""
    if header not in row:
        return None
    return row[header]


def printable(value: Scalar) -> str:
    """Convert a JSON scalar to the string shown in the table.

    Strings are used verbatim. Absent fields and JSON null both print as "".
    """
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return repr(value)
    raise TypeError(f"Cannot print {type(value).__name__} value in a table column: {value!r}")


def is_printable(value: Any) -> bool:
    return value is None or isinstance(value, (str, int, float, bool))


def unprintable_fields(rows: Sequence[Mapping[str, Any]], headers: Sequence[str]) -> list[str]:
    """Headers whose column holds a nested value (object or array) in any row."""
    return [header for header in headers if not all(is_printable(lookup(row, header)) for row in rows)]


def split_into_columns(rows: Sequence[Mapping[str, Any]], headers: Sequence[str]) -> list[list[str]]:
    """One column of printable strings per header, each in row order."""
    return [[printable(lookup(row, header)) for row in rows] for header in headers]


def widths_of(columns: Sequence[Sequence[str]]) -> list[int]:
    """Widest value in each column; 0 for a column with no values."""
    return [max((len(value) for value in column), default=0) for column in columns]


def fit_widths_to_headers(widths: Sequence[int], headers: Sequence[str]) -> list[int]:
    """Widen each column so its header label fits."""
    return [max(width, len(header)) for width, header in zip(widths, headers)]


def format_for(column_widths: Sequence[int]) -> str:
    """Build the str.format template used for every printed line.

    "{:<0}" would read the 0 as a fill flag, so empty columns get a bare "{}".
    """
    fields = [f"{{:<{width}}}" if width > 0 else "{}" for width in column_widths]
    return COLUMN_SEPARATOR.join(fields) + "\n"


def separator(column_widths: Sequence[int]) -> str:
    return SEPARATOR_JOIN.join("-" * width for width in column_widths)


def rows_from_columns(columns: Sequence[Sequence[str]], row_count: int) -> list[list[str]]:
    """Transpose column-major data back into rows.

    ``row_count`` is explicit so that a table with no columns still yields
    one (empty) row per input row.
    """
    return [[column[i] for column in columns] for i in range(row_count)]


def puts_one_line_in_columns(fields: Sequence[str], fmt: str, out: IO[str]) -> None:
    out.write(fmt.format(*fields))


def puts_in_columns(columns: Sequence[Sequence[str]], row_count: int, fmt: str, out: IO[str]) -> None:
    for fields in rows_from_columns(columns, row_count):
        puts_one_line_in_columns(fields, fmt, out)


def print_table_for_columns(
    rows: Sequence[Mapping[str, Any]],
    headers: Sequence[str],
    out: IO[str] | None = None,
    fit_headers: bool = False,
) -> None:
    """Print ``rows`` as a table with one column per header, in header order.

    Writes the header line, a separator line, then one line per row.
    Empty ``rows`` or ``headers`` are not errors.
    """
    if out is None:
        out = sys.stdout

    data_by_columns = split_into_columns(rows, headers)
    column_widths = widths_of(data_by_columns)
    if fit_headers:
        column_widths = fit_widths_to_headers(column_widths, headers)
    fmt = format_for(column_widths)

    puts_one_line_in_columns(headers, fmt, out)
    print(separator(column_widths), file=out)
    puts_in_columns(data_by_columns, len(rows), fmt, out)
