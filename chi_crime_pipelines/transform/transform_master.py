"""
transform_master.py

Orchestrates the load -> clean -> derive -> filter stages for the crime CSV.
"""

from pathlib import Path
from typing import Dict, Iterable, Sequence, Union

import pandas as pd
from rich.console import Console

from config import KEEP_COLUMNS, YEARS, TIMESTAMP_COL, PARSE_FAILURE_POLICY
from chi_crime_pipelines.errors import CrimePipelineError
from chi_crime_pipelines.ingestion.csv_loader import load_crime_csv
from chi_crime_pipelines.transform.cleaning import project_and_clean, coerce_types
from chi_crime_pipelines.transform.temporal import add_temporal_features
from chi_crime_pipelines.transform.filters import filter_years
from chi_crime_pipelines.utils.logging import show_pipeline_table, clear_pipeline_log
from chi_crime_pipelines.validate.core import run_validation_checks

console = Console()


def run_transforms(
    csv_path: Union[str, Path],
    columns: Sequence[str] = KEEP_COLUMNS,
    years: Iterable[int] = YEARS,
    on_parse_error: str = PARSE_FAILURE_POLICY,
) -> Dict[str, pd.DataFrame]:
    """
    Run complete transformation pipeline.

    Parameters:
        csv_path: Raw crime CSV
        columns: Columns to keep (standardized names)
        years: Admissible calendar years
        on_parse_error: "raise" or "drop" for malformed timestamps

    Returns:
        Dict with:
            - loaded: raw string table as read
            - cleaned: projected, complete, type-coerced table
            - crimes: cleaned + temporal features, restricted to `years`
    """
    console.print("\n[bold cyan]=== TRANSFORM PIPELINE START ===[/bold cyan]\n")
    clear_pipeline_log()

    try:
        loaded = load_crime_csv(csv_path)
        cleaned = project_and_clean(loaded, columns)
        cleaned = coerce_types(cleaned)
        run_validation_checks(cleaned, "Transform: After cleaning")

        derived = add_temporal_features(cleaned, ts_col=TIMESTAMP_COL, on_parse_error=on_parse_error)
        crimes = filter_years(derived, years)
    except CrimePipelineError as e:
        console.print(f"[bold red]Pipeline aborted ({type(e).__name__}):[/bold red] {e}")
        raise

    console.print("\n[green]Transformation completed successfully.[/green]\n")
    show_pipeline_table()

    return {
        "loaded": loaded,
        "cleaned": cleaned,
        "crimes": crimes,
    }
