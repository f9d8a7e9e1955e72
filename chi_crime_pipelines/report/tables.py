# Rich rendering of summary tables

from typing import Optional

import pandas as pd
from rich.console import Console
from rich.table import Table

console = Console()


def format_cell(value) -> str:
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float):
        return f"{value:,.3f}"
    if isinstance(value, int):
        return f"{value:,}"
    return str(value)


def show_table(table: pd.DataFrame, title: str, max_rows: Optional[int] = None) -> Table:
    """Print a summary DataFrame as a rich Table and return it."""
    frame = table
    if not isinstance(frame.index, pd.RangeIndex):
        frame = frame.reset_index()
    if max_rows is not None:
        frame = frame.head(max_rows)

    rich_table = Table(title=title, show_header=True, header_style="bold magenta")
    for i, col in enumerate(frame.columns):
        rich_table.add_column(str(col), style="cyan" if i == 0 else None, justify="left" if i == 0 else "right")

    for row in frame.itertuples(index=False):
        rich_table.add_row(*[format_cell(v.item() if hasattr(v, "item") else v) for v in row])

    console.print(rich_table)
    return rich_table


__all__ = ["show_table"]
