# Adds calendar / clock features derived from the raw incident timestamp

import pandas as pd
from rich.console import Console

from config import TIMESTAMP_COL, TIMESTAMP_FORMAT, PARSE_FAILURE_POLICY
from chi_crime_pipelines.errors import ConfigError, ParseError
from chi_crime_pipelines.utils.logging import log_step

console = Console()

# MM/DD/YYYY hh:mm:ss AM|PM
TIMESTAMP_PATTERN = r"\d{2}/\d{2}/\d{4} \d{2}:\d{2}:\d{2} [AP]M"

PARSE_POLICIES = ("raise", "drop")

DERIVED_COLUMNS = ["event_date", "weekday", "hour_of_day", "day", "month", "year"]


def parse_timestamps(raw: pd.Series, fmt: str = TIMESTAMP_FORMAT) -> pd.Series:
    """
    Parse raw timestamp strings strictly.
    Anything off-pattern (or an impossible date such as 02/30) becomes NaT.
    """
    s = raw.astype(str).str.strip()
    on_pattern = s.str.fullmatch(TIMESTAMP_PATTERN).astype(bool)
    parsed = pd.to_datetime(s.where(on_pattern), format=fmt, errors="coerce")
    return parsed


def add_temporal_features(
    df: pd.DataFrame,
    ts_col: str = TIMESTAMP_COL,
    on_parse_error: str = PARSE_FAILURE_POLICY,
) -> pd.DataFrame:
    """
    Add event_date, weekday, hour_of_day, day, month, year.

    on_parse_error:
        "raise" - abort with ParseError on the first malformed timestamp;
                  its row is the index label of that row
        "drop"  - remove malformed rows and report how many were dropped
    """
    if on_parse_error not in PARSE_POLICIES:
        raise ConfigError(f"Unknown parse failure policy '{on_parse_error}', expected one of {PARSE_POLICIES}.")
    if ts_col not in df.columns:
        raise ConfigError(f"'{ts_col}' column not found in crime data.")

    console.print(f"\n[bold cyan]Deriving temporal features from '{ts_col}'...[/bold cyan]")

    df = df.copy()
    ts = parse_timestamps(df[ts_col])

    invalid = ts.isna()
    n_invalid = int(invalid.sum())

    if n_invalid:
        if on_parse_error == "raise":
            pos = int(invalid.to_numpy().nonzero()[0][0])
            row = df.index[pos]
            raw = df[ts_col].iloc[pos]
            raise ParseError(
                f"Row {row}: timestamp {raw!r} does not match 'MM/DD/YYYY hh:mm:ss AM|PM' "
                f"({n_invalid:,} malformed rows in total).",
                row=row,
                value=raw,
                count=n_invalid,
            )

        console.print(f"[yellow]Dropped malformed timestamps: {n_invalid:,}[/yellow]")
        keep = ~invalid.to_numpy()
        df = df.loc[keep].copy()
        ts = ts.loc[keep]

    dt = ts.dt
    df["event_date"] = dt.date
    df["weekday"] = dt.day_name()
    df["hour_of_day"] = dt.hour.astype(int)
    df["day"] = dt.day.astype(int)
    df["month"] = dt.month.astype(int)
    df["year"] = dt.year.astype(int)

    console.print(f"[green]Parsed timestamps: {len(df):,}[/green]")
    log_step("Step 4: Temporal features added", df)
    return df


__all__ = ["add_temporal_features", "parse_timestamps", "DERIVED_COLUMNS", "TIMESTAMP_PATTERN"]
