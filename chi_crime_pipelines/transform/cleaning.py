# Core cleaning transformations used before any feature engineering
import re
from typing import Any, List, Sequence

import pandas as pd
from rich.console import Console

from chi_crime_pipelines.errors import ConfigError, FormatError
from chi_crime_pipelines.utils.logging import log_step

console = Console()

TRUE_STRINGS = {"true"}
FALSE_STRINGS = {"false"}


def standardize_column_name(col: str) -> str:
    """Convert arbitrary crime CSV column names into clean_snake_case."""
    col = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", col)
    col = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", col)
    col = col.lower()
    col = re.sub(r"[\s\-\.\,\(\)\[\]\{\}]+", "_", col)
    col = re.sub(r"[^\w]", "", col)
    col = re.sub(r"_+", "_", col).strip("_")
    return col


def project_and_clean(df: pd.DataFrame, columns: Sequence[str]) -> pd.DataFrame:
    """
    Restrict the table to `columns` (in that order) and drop rows
    with a missing value in any of them.

    The input frame is left untouched; row order is preserved and the
    index keeps the loader's row numbers, so later errors point at the
    source row.
    """
    columns = list(columns)
    if not columns:
        raise ConfigError("No columns requested for projection.")
    if len(set(columns)) != len(columns):
        raise ConfigError(f"Duplicate columns requested: {columns}")

    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ConfigError(f"Columns not found in data: {missing}")

    total_rows = len(df)
    df_clean = df.loc[:, columns].dropna(how="any")
    dropped = total_rows - len(df_clean)

    console.print(f"[cyan]Kept columns:[/cyan] {len(columns)}")
    console.print(f"[yellow]Dropped rows with missing values:[/yellow] {dropped:,}")

    log_step("Step 2: Projected & dropped missing", df_clean)
    return df_clean


def parse_flag(value: Any, row: int, col: str) -> bool:
    """Parse a literal 'True'/'False' flag."""
    if isinstance(value, bool):
        return value

    s = str(value).strip().lower()
    if s in TRUE_STRINGS:
        return True
    if s in FALSE_STRINGS:
        return False
    raise FormatError(f"Column '{col}' row {row}: not a True/False flag: {value!r}", row=row, value=value)


def coerce_coordinates(series: pd.Series, col: str) -> pd.Series:
    """
    Convert a coordinate column to float, failing on the first bad value.
    The error carries the index label of the offending row.
    """
    values = pd.to_numeric(series, errors="coerce")
    bad = values.isna() & series.notna()
    if bad.any():
        pos = int(bad.to_numpy().nonzero()[0][0])
        row = series.index[pos]
        raw = series.iloc[pos]
        raise FormatError(f"Column '{col}' row {row}: not a number: {raw!r}", row=row, value=raw)
    return values.astype(float)


def coerce_types(df: pd.DataFrame) -> pd.DataFrame:
    """
    Convert raw strings to working types:
    - arrest -> bool
    - latitude / longitude -> float
    Absent columns are skipped.
    """
    df = df.copy()

    if "arrest" in df.columns:
        df["arrest"] = pd.Series(
            [parse_flag(v, i, "arrest") for i, v in df["arrest"].items()],
            index=df.index,
            dtype=bool,
        )

    for col in ("latitude", "longitude"):
        if col in df.columns:
            df[col] = coerce_coordinates(df[col], col)

    log_step("Step 3: Coerced arrest / coordinates", df)
    return df


__all__ = [
    "standardize_column_name",
    "project_and_clean",
    "parse_flag",
    "coerce_coordinates",
    "coerce_types",
]
