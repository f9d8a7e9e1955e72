# Raw Data Ingestion from the Chicago Police Department crime export
import csv
from pathlib import Path
from typing import List, Union

import pandas as pd
from rich.console import Console

from chi_crime_pipelines.errors import InputFileError, FormatError
from chi_crime_pipelines.transform.cleaning import standardize_column_name
from chi_crime_pipelines.utils.logging import log_step

console = Console()


def standardize_header(header: List[str]) -> List[str]:
    """Standardize raw header cells; blank cells become unnamed_<position>."""
    if not header or not any(cell.strip() for cell in header):
        raise FormatError("CSV header is empty or blank.", row=None, value=header)

    names = []
    for pos, cell in enumerate(header):
        name = standardize_column_name(cell)
        names.append(name if name else f"unnamed_{pos}")

    seen = set()
    dupes = []
    for name in names:
        if name in seen:
            dupes.append(name)
        seen.add(name)
    if dupes:
        raise FormatError(f"CSV header has duplicate columns: {dupes}", row=None, value=dupes)

    return names


def check_row_shapes(path: Path) -> List[str]:
    """
    Stream the file once and verify every data row has as many fields as the header.
    Blank lines are skipped the same way pandas skips them.

    Returns the raw header cells.
    """
    with path.open(newline="", encoding="utf-8") as fh:
        reader = csv.reader(fh)
        header = next(reader, None)
        if header is None:
            raise FormatError(f"CSV file is empty: {path}")

        n_fields = len(header)
        row_idx = 0
        for row in reader:
            if not row:
                continue
            if len(row) != n_fields:
                raise FormatError(
                    f"Row {row_idx} has {len(row)} fields, header has {n_fields}.",
                    row=row_idx,
                    value=row,
                )
            row_idx += 1

    return header


def load_crime_csv(path: Union[str, Path]) -> pd.DataFrame:
    """
    Load the raw crime CSV into a DataFrame of raw strings.

    - Column names are standardized to snake_case
    - Row order is preserved
    - Only empty fields are treated as missing
    """
    path = Path(path)
    console.print(f"\n[bold cyan]Loading crime CSV:[/bold cyan] {path.name}")

    if not path.exists():
        raise InputFileError(f"Input file not found: {path}")
    if not path.is_file():
        raise InputFileError(f"Input path is not a file: {path}")

    try:
        header = check_row_shapes(path)
        columns = standardize_header(header)
        df = pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            na_values=[""],
            encoding="utf-8",
        )
    except OSError as e:
        raise InputFileError(f"Could not read input file {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise FormatError(f"Input file is not valid UTF-8: {path}") from e
    except pd.errors.ParserError as e:
        raise FormatError(f"Could not parse CSV {path}: {e}") from e

    df.columns = columns

    console.print(f"[cyan]Rows:[/cyan] {len(df):,}  [cyan]Columns:[/cyan] {len(columns)}")
    log_step("Step 1: Loaded raw CSV", df)
    return df


__all__ = ["load_crime_csv", "check_row_shapes", "standardize_header"]
