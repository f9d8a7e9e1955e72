# Step log for the crime pipeline: table shape after each stage and
# how many crime rows the stage removed.

from typing import List, Dict, Any, Optional
import pandas as pd
from rich.console import Console
from rich.table import Table

console = Console()

pipeline_log: List[Dict[str, Any]] = []


def rows_removed(rows: int) -> Optional[int]:
    """Rows lost since the previous logged step; None for the first step."""
    if not pipeline_log:
        return None
    return pipeline_log[-1]["rows"] - rows


def log_step(step_name: str, df: pd.DataFrame) -> Dict[str, Any]:
    """
    Record the table a pipeline step produced.

    Parameters:
        step_name: Description of the pipeline step
        df: DataFrame produced by the step

    Returns:
        The log entry: step, rows, cols and removed (rows dropped
        relative to the previous step, None for the first one)
    """
    if not isinstance(df, pd.DataFrame):
        raise TypeError(f"{step_name}: expected a DataFrame, got {type(df).__name__}")

    rows, cols = (int(n) for n in df.shape)
    entry = {"step": step_name, "rows": rows, "cols": cols, "removed": rows_removed(rows)}
    pipeline_log.append(entry)

    removed = entry["removed"]
    detail = f" [yellow](-{removed:,} rows)[/yellow]" if removed else ""
    console.print(f"[green]{step_name}[/green] [cyan]shape: {rows:,} x {cols}[/cyan]{detail}")
    return dict(entry)


def show_pipeline_table() -> None:
    """Pretty-print the step log, with the rows each step removed."""
    if not pipeline_log:
        console.print("[red]No pipeline steps logged yet.[/red]")
        return

    table = Table(title="Crime Pipeline Summary", show_lines=True)
    table.add_column("Step", style="cyan", no_wrap=True)
    table.add_column("Rows", style="green", justify="right")
    table.add_column("Cols", style="yellow", justify="right")
    table.add_column("Removed", style="red", justify="right")

    for entry in pipeline_log:
        removed = entry["removed"]
        table.add_row(
            entry["step"],
            f"{entry['rows']:,}",
            str(entry["cols"]),
            "-" if removed is None else f"{removed:,}",
        )

    first, last = pipeline_log[0]["rows"], pipeline_log[-1]["rows"]
    console.print(table)
    console.print(f"[cyan]Rows kept overall:[/cyan] {last:,} of {first:,}")


def get_pipeline_log() -> List[Dict[str, Any]]:
    """Return a copy of the logged steps."""
    return [dict(entry) for entry in pipeline_log]


def clear_pipeline_log() -> None:
    pipeline_log.clear()


__all__ = ["log_step", "show_pipeline_table", "clear_pipeline_log", "get_pipeline_log", "rows_removed"]
