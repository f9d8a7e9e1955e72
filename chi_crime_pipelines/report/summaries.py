# Named summary tables rendered by the report

from typing import Dict, Iterable, List

import pandas as pd

from config import HOURS, MONTHS, WEEKDAY_ORDER, MIN_GROUP_COUNT, TOP_N, HOMICIDE_TYPES, YEARS
from chi_crime_pipelines.transform.aggregation import (
    VALUE_COL,
    aggregate,
    check_axis_order,
    cross_tab,
    rate_by,
    top_n,
)
from chi_crime_pipelines.transform.filters import filter_primary_types
from chi_crime_pipelines.utils.logging import log_step


def per_year(table: pd.DataFrame, years: List[int]) -> pd.DataFrame:
    """Reindex a per-year aggregate to every admissible year, zero-filled, in year order."""
    check_axis_order(pd.Index(table["year"]), years, "year")
    return (
        table.set_index("year")[VALUE_COL]
        .reindex(years, fill_value=0)
        .rename_axis("year")
        .reset_index()
    )


def build_summaries(
    df: pd.DataFrame,
    years: Iterable[int] = YEARS,
    min_group_count: int = MIN_GROUP_COUNT,
    top: int = TOP_N,
) -> Dict[str, pd.DataFrame]:
    """
    Build every table the report shows from the filtered crime table.

    Year axes cover every year in `years`, so a year with no rows
    shows up as zeros rather than disappearing.

    Homicide tables count one row per victim: a case_number shared by
    several rows contributes once per row.
    """
    year_list = [int(y) for y in years]
    homicides = filter_primary_types(df, HOMICIDE_TYPES)
    log_step("Report: homicide subset", homicides)

    summaries = {
        "by_primary_type": aggregate(df, "primary_type", min_value=min_group_count),
        "by_year": per_year(aggregate(df, "year"), year_list),
        "year_month": cross_tab(df, "year", "month", row_order=year_list, col_order=MONTHS),
        "weekday_hour": cross_tab(df, "weekday", "hour_of_day", row_order=WEEKDAY_ORDER, col_order=HOURS),
        "top_locations": top_n(aggregate(df, "location_description"), top),
        "arrest_rate_by_type": rate_by(df, "primary_type", flag_col="arrest"),
        "arrests_by_year": per_year(aggregate(df, "year", how="sum", value_col="arrest"), year_list),
        "by_district": aggregate(df, "district"),
        "homicide_by_district": top_n(aggregate(homicides, "district"), top),
        "homicide_year_month": cross_tab(homicides, "year", "month", row_order=year_list, col_order=MONTHS),
    }
    return summaries


__all__ = ["build_summaries", "per_year"]
