# Row filters: admissible years and primary crime types

from numbers import Integral
from typing import Iterable

import pandas as pd
from rich.console import Console

from chi_crime_pipelines.errors import ConfigError
from chi_crime_pipelines.utils.logging import log_step

console = Console()


def filter_years(df: pd.DataFrame, years: Iterable[int]) -> pd.DataFrame:
    """Keep rows whose derived `year` is in the inclusive set `years`; index labels are kept."""
    admissible = list(years)
    if not admissible:
        raise ConfigError("Year range is empty.")

    bad = [y for y in admissible if isinstance(y, bool) or not isinstance(y, Integral)]
    if bad:
        raise ConfigError(f"Year range contains non-integer values: {bad}")

    if "year" not in df.columns:
        raise ConfigError("'year' column not found; derive temporal features first.")

    mask = df["year"].isin(set(int(y) for y in admissible))
    df_filtered = df[mask]

    console.print(
        f"[cyan]Years {min(admissible)}-{max(admissible)}:[/cyan] "
        f"kept {len(df_filtered):,}, removed {len(df) - len(df_filtered):,}"
    )
    log_step("Step 5: Filtered to admissible years", df_filtered)
    return df_filtered


def filter_primary_types(df: pd.DataFrame, types: Iterable[str]) -> pd.DataFrame:
    """Filter crime data to the given primary types (case-insensitive)."""
    wanted = {str(t).strip().upper() for t in types}
    if not wanted:
        raise ConfigError("No primary types requested.")
    if "primary_type" not in df.columns:
        raise ConfigError("'primary_type' column not found in crime data.")

    mask = df["primary_type"].astype(str).str.strip().str.upper().isin(wanted)
    return df[mask].reset_index(drop=True)


__all__ = ["filter_years", "filter_primary_types"]
