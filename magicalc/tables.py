"""
Text Tables
===========
Box-drawn tables for the REPL. Columns size themselves to their widest cell.
"""
from typing import Any, Sequence


def render_table(headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> str:
    """Render headers and rows as a box-drawn table. Numbers align right."""
    cells = [[str(c) for c in row] for row in rows]
    widths = [len(h) for h in headers]
    for row in cells:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def border(left: str, mid: str, right: str) -> str:
        return left + mid.join("═" * (w + 2) for w in widths) + right

    lines = [
        border("╔", "╦", "╗"),
        "║" + "║".join(f" {h.ljust(w)} " for h, w in zip(headers, widths)) + "║",
        border("╠", "╬", "╣"),
    ]
    for raw, row in zip(rows, cells):
        parts = []
        for value, cell, w in zip(raw, row, widths):
            aligned = cell.rjust(w) if isinstance(value, (int, float)) else cell.ljust(w)
            parts.append(f" {aligned} ")
        lines.append("║" + "║".join(parts) + "║")
    lines.append(border("╚", "╩", "╝"))
    return "\n".join(lines)
