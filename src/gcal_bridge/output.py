"""Output formatting: JSON or a rich table."""

from __future__ import annotations

import io
import json
from typing import Any


def format_json(data: Any, indent: int = 2) -> str:
    """Format data as JSON string."""
    return json.dumps(data, indent=indent, default=str, ensure_ascii=False)


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=str, ensure_ascii=False)
    return str(value)


def format_table(rows: list[dict[str, Any]], columns: list[str] | None = None) -> str:
    """Format rows as a pretty aligned table using rich."""
    if not rows:
        return "No results."
    from rich.console import Console
    from rich.table import Table

    if columns is None:
        columns = []
        for row in rows:
            columns.extend(k for k in row if k not in columns)
    table = Table(show_header=True, header_style="bold")
    for col in columns:
        is_id_col = col == "id" or col.endswith("Id")
        table.add_column(col, max_width=24 if is_id_col else None, no_wrap=col in ("title", "start", "end"))

    for row in rows:
        table.add_row(*[_cell(row.get(c)) for c in columns])

    buf = io.StringIO()
    console = Console(file=buf, force_terminal=False, width=160)
    console.print(table)
    return buf.getvalue()


def render(data: Any, fmt: str = "json", columns: list[str] | None = None) -> str:
    """Render data in the requested format."""
    if fmt == "table":
        rows = data if isinstance(data, list) else [data]
        return format_table(rows, columns=columns)
    return format_json(data)
