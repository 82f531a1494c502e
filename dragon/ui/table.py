#!/usr/bin/env python3
# dragon/ui/table.py
from __future__ import annotations

from typing import List, Optional, Sequence

from .ansi import strip_ansi


def _column_widths(rows: Sequence[Sequence[str]], column_count: int) -> List[int]:
    """Compute visual widths ignoring ANSI sequences."""
    widths = [0] * column_count
    for row in rows:
        for col_idx, cell in enumerate(row):
            widths[col_idx] = max(widths[col_idx], len(strip_ansi(cell)))
    return widths


def format_table(
    rows: Sequence[Sequence[object]],
    headers: Optional[Sequence[object]] = None,
    *,
    padding: int = 1,
    border: bool = True,
    align_right: Sequence[int] = (),
) -> str:
    """
    Return an ASCII table string.

    Rows shorter than the header are padded with empty cells, so a column
    can be declared in `headers` and left unpopulated by some rows.
    `align_right` lists column indexes rendered right-aligned (numbers).
    """
    str_headers = [str(h) for h in headers] if headers is not None else None
    str_rows: List[List[str]] = [[str(cell) for cell in row] for row in rows]

    column_count = max(
        [len(str_headers or [])] + [len(row) for row in str_rows] or [0])
    for row in str_rows:
        row.extend([""] * (column_count - len(row)))

    all_rows = ([str_headers] if str_headers is not None else []) + str_rows
    widths = _column_widths(all_rows, column_count)
    pad = " " * padding

    def render_row(row: Sequence[str], *, is_header: bool = False) -> str:
        parts = []
        for i, cell in enumerate(row):
            gap = " " * (widths[i] - len(strip_ansi(cell)))
            if i in align_right and not is_header:
                parts.append(f"{pad}{gap}{cell}{pad}")
            else:
                parts.append(f"{pad}{cell}{gap}{pad}")
        return "|" + "|".join(parts) + "|"

    rule = "+" + "+".join("-" * (w + padding * 2) for w in widths) + "+"

    lines: List[str] = []
    if border:
        lines.append(rule)
    if str_headers is not None:
        lines.append(render_row(str_headers, is_header=True))
        lines.append(rule)
    for row in str_rows:
        lines.append(render_row(row))
    if border and str_rows:
        lines.append(rule)

    return "\n".join(lines)
