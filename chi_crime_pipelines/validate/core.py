# Core data validation checks for the crime pipeline

from typing import Any, Dict

import pandas as pd
from rich.console import Console

from config import CITY_BOUNDS

console = Console()


def run_validation_checks(df: pd.DataFrame, step_name: str) -> Dict[str, Any]:
    """
    Key integrity checks:
    - case_number repeats (multi-victim incidents, informational)
    - coordinate bounds (Chicago box)
    - core completeness

    Returns the computed figures.
    """
    lat_min, lon_min, lat_max, lon_max = CITY_BOUNDS
    results: Dict[str, Any] = {}

    if "case_number" in df.columns:
        repeated = int(df.duplicated(subset=["case_number"]).sum())
        results["repeated_case_numbers"] = repeated
        if repeated > 0:
            console.print(
                f"[cyan]INFO: {step_name} - {repeated:,} rows share a case_number "
                f"(counted once per victim).[/cyan]"
            )
        else:
            console.print(f"[green]PASS: {step_name} - case_number unique.[/green]")

    if all(c in df.columns for c in ["latitude", "longitude"]):
        lat = pd.to_numeric(df["latitude"], errors="coerce")
        lon = pd.to_numeric(df["longitude"], errors="coerce")
        out_of_bounds = int(
            ((lat < lat_min) | (lat > lat_max) | (lon < lon_min) | (lon > lon_max)).sum()
        )
        results["out_of_bounds"] = out_of_bounds
        if out_of_bounds > 0:
            console.print(
                f"[bold yellow]WARNING: {step_name} - {out_of_bounds:,} rows outside expected Chicago bounds.[/bold yellow]"
            )
        else:
            console.print(f"[green]PASS: {step_name} - coordinates within expected bounds.[/green]")

    core_cols = ["date", "primary_type"]
    for col in core_cols:
        if col in df.columns:
            missing_pct = df[col].isna().sum() / len(df) if len(df) else 0.0
            results[f"{col}_missing_pct"] = float(missing_pct)
            if missing_pct > 0.01:
                console.print(
                    f"[bold red]FAIL: {step_name} - '{col}' missing {missing_pct:.2%} (>1%).[/bold red]"
                )
            else:
                console.print(
                    f"[green]PASS: {step_name} - '{col}' completeness OK ({missing_pct:.2%} missing).[/green]"
                )

    return results


__all__ = ["run_validation_checks"]
