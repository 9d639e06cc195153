"""
Text rendering for matrices and their row/column views.

``describe`` produces the display form used by ``str(matrix)``: an aligned
block with bracket glyphs, e.g.

    ⎛   1  22 ⎞
    ⎝ 333   4 ⎠

``debug_describe`` produces the ``repr`` form, which round-trips through the
``Matrix(rows=...)`` constructor for elements whose repr does.
"""

from typing import Any, Iterable

import numpy as np

from .config import (
    BOTTOM_BRACKETS,
    COLUMN_SEPARATOR,
    EMPTY_DESCRIPTION,
    SIDE_BRACKETS,
    SINGLE_ROW_BRACKETS,
    TOP_BRACKETS,
)


def _unwrap(value: Any) -> Any:
    # numpy scalars render as np.int64(5) under repr; show the plain value
    if isinstance(value, np.generic):
        return value.item()
    return value


def format_value(value: Any) -> str:
    return str(_unwrap(value))


def format_sequence(values: Iterable[Any]) -> str:
    """Render a sequence as a bracketed, comma-separated list of element reprs."""
    return "[" + ", ".join(repr(_unwrap(v)) for v in values) + "]"


def _brackets_for(row_index: int, row_count: int):
    if row_index == 0:
        return TOP_BRACKETS
    if row_index == row_count - 1:
        return BOTTOM_BRACKETS
    return SIDE_BRACKETS


def describe(matrix) -> str:
    """Dense pretty-printed form of a matrix."""
    if matrix.row_count == 0 or matrix.column_count == 0:
        return EMPTY_DESCRIPTION

    if matrix.row_count == 1:
        opening, closing = SINGLE_ROW_BRACKETS
        return opening + COLUMN_SEPARATOR.join(format_value(v) for v in matrix.row(0)) + closing

    strings = matrix.map(format_value)
    widths = [max(len(s) for s in strings.column(j)) for j in strings.column_indices]

    lines = []
    for i in strings.row_indices:
        line = COLUMN_SEPARATOR.join(
            s.rjust(widths[j]) for j, s in enumerate(strings.row(i))
        )
        opening, closing = _brackets_for(i, matrix.row_count)
        lines.append(opening + line + closing)
    return "\n".join(lines)


def debug_describe(matrix) -> str:
    """Constructor-style representation listing every row."""
    rows = ", ".join(format_sequence(row) for row in matrix.rows)
    return f"{type(matrix).__name__}(rows=[{rows}])"
