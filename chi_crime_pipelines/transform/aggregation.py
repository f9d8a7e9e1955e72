# Grouped counts / sums / rates feeding the report tables and charts

from numbers import Integral, Real
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union

import pandas as pd
from pandas.api.types import is_bool_dtype, is_numeric_dtype

from chi_crime_pipelines.errors import ConfigError

VALUE_COL = "value"
AGGREGATIONS = ("count", "sum")

Keys = Union[str, Sequence[str]]
Mask = Union[None, str, pd.Series, Sequence[bool]]


def as_key_list(keys: Keys) -> List[str]:
    """Normalize one key or a list of keys."""
    key_list = [keys] if isinstance(keys, str) else list(keys)
    if not key_list:
        raise ConfigError("At least one grouping key is required.")
    if len(set(key_list)) != len(key_list):
        raise ConfigError(f"Duplicate grouping keys: {key_list}")
    if VALUE_COL in key_list:
        raise ConfigError(f"'{VALUE_COL}' is reserved for the aggregate column.")
    return key_list


def require_columns(df: pd.DataFrame, columns: Iterable[str]) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ConfigError(f"Aggregation columns not found: {missing}")


def resolve_mask(df: pd.DataFrame, where: Mask) -> Optional[pd.Series]:
    """Turn a column name / boolean Series / boolean list into a row mask."""
    if where is None:
        return None

    if isinstance(where, str):
        require_columns(df, [where])
        mask = df[where]
    elif isinstance(where, pd.Series):
        if not where.index.equals(df.index):
            raise ConfigError("Row predicate is not aligned with the table index.")
        mask = where
    else:
        values = list(where)
        if len(values) != len(df):
            raise ConfigError(f"Row predicate has {len(values)} values, table has {len(df)} rows.")
        mask = pd.Series(values, index=df.index, dtype=bool if not values else None)

    if not is_bool_dtype(mask):
        raise ConfigError("Row predicate must be boolean.")
    return mask.astype(bool)


def check_axis_order(observed: pd.Index, order: List[Any], key: str) -> None:
    """An explicit axis order must cover every observed key, or counts would vanish."""
    allowed = set(order)
    outside = [k for k in observed if pd.isna(k) or k not in allowed]
    if outside:
        raise ConfigError(f"Observed '{key}' values outside the requested order: {outside}")


def order_by_value(table: pd.DataFrame, keys: List[str], value_col: str = VALUE_COL) -> pd.DataFrame:
    """
    Sort by aggregate descending, ties broken by key ascending.
    The result is independent of the input row order.
    """
    return table.sort_values(
        [value_col] + keys,
        ascending=[False] + [True] * len(keys),
        kind="mergesort",
    ).reset_index(drop=True)


def aggregate(
    df: pd.DataFrame,
    keys: Keys,
    how: str = "count",
    value_col: Optional[str] = None,
    where: Mask = None,
    min_value: Optional[float] = None,
) -> pd.DataFrame:
    """
    Group rows by `keys` and count them (how="count") or sum `value_col` (how="sum").

    Parameters:
        where: optional row predicate (column name or boolean Series) applied before grouping
        min_value: keep only groups whose aggregate is strictly above this threshold

    Returns:
        DataFrame with the key columns and a `value` column,
        ordered by value descending then key ascending.
    """
    key_list = as_key_list(keys)
    require_columns(df, key_list)

    if how not in AGGREGATIONS:
        raise ConfigError(f"Unknown aggregation '{how}', expected one of {AGGREGATIONS}.")
    if how == "sum":
        if value_col is None:
            raise ConfigError("how='sum' needs a value_col.")
        require_columns(df, [value_col])
        if not (is_numeric_dtype(df[value_col]) or is_bool_dtype(df[value_col])):
            raise ConfigError(f"Column '{value_col}' is not numeric or boolean.")
    if min_value is not None and (isinstance(min_value, bool) or not isinstance(min_value, Real)):
        raise ConfigError(f"Threshold must be a number, got {min_value!r}.")

    mask = resolve_mask(df, where)
    data = df if mask is None else df[mask]

    grouped = data.groupby(key_list, sort=False, dropna=False)
    if how == "count":
        result = grouped.size()
    else:
        result = grouped[value_col].sum()

    table = result.reset_index(name=VALUE_COL)
    if how == "sum" and is_bool_dtype(df[value_col]):
        table[VALUE_COL] = table[VALUE_COL].astype(int)

    if min_value is not None:
        table = table[table[VALUE_COL] > min_value]

    return order_by_value(table, key_list)


def to_pairs(table: pd.DataFrame, keys: Optional[Keys] = None, value_col: str = VALUE_COL) -> List[Tuple[Any, Any]]:
    """
    Ordered (key, value) pairs for presentation.
    A single key yields scalar keys, several keys yield tuples.
    """
    if keys is None:
        key_list = [c for c in table.columns if c != value_col]
    else:
        key_list = [keys] if isinstance(keys, str) else list(keys)
    require_columns(table, key_list + [value_col])

    values = table[value_col].tolist()
    if len(key_list) == 1:
        key_vals = table[key_list[0]].tolist()
    else:
        key_vals = list(zip(*(table[k].tolist() for k in key_list)))
    return list(zip(key_vals, values))


def cross_tab(
    df: pd.DataFrame,
    row_key: str,
    col_key: str,
    dense: bool = True,
    row_order: Optional[Iterable[Any]] = None,
    col_order: Optional[Iterable[Any]] = None,
    where: Mask = None,
) -> pd.DataFrame:
    """
    Two-key count table.

    dense=True: wide table (row_key x col_key) with explicit zeros for absent
        combinations; axes reindexed to row_order / col_order when given.
        An observed key missing from a given order raises ConfigError.
    dense=False: long table of observed combinations only
        (row_key, col_key, value), sorted by key.
    """
    if row_key == col_key:
        raise ConfigError("Cross-tab needs two different keys.")
    require_columns(df, [row_key, col_key])

    mask = resolve_mask(df, where)
    data = df if mask is None else df[mask]

    # Missing keys form their own group so every selected row is counted.
    counts = data.groupby([row_key, col_key], dropna=False).size()

    if not dense:
        long_table = counts.reset_index(name=VALUE_COL)
        return long_table.sort_values([row_key, col_key], kind="mergesort").reset_index(drop=True)

    if counts.empty:
        wide = pd.DataFrame(index=pd.Index([]), columns=pd.Index([]), dtype=int)
    else:
        wide = counts.unstack(col_key, fill_value=0)

    if row_order is not None:
        row_order = list(row_order)
        check_axis_order(wide.index, row_order, row_key)
        wide = wide.reindex(index=row_order, fill_value=0)
    if col_order is not None:
        col_order = list(col_order)
        check_axis_order(wide.columns, col_order, col_key)
        wide = wide.reindex(columns=col_order, fill_value=0)

    wide = wide.fillna(0).astype(int)
    wide.index.name = row_key
    wide.columns.name = col_key
    return wide


def top_n(
    table: pd.DataFrame,
    n: int,
    value_col: str = VALUE_COL,
    keys: Optional[Keys] = None,
) -> pd.DataFrame:
    """The n largest rows by `value_col`; ties go to the smaller key."""
    if isinstance(n, bool) or not isinstance(n, Integral) or n < 1:
        raise ConfigError(f"top_n needs a positive integer, got {n!r}.")

    if keys is None:
        key_list = [c for c in table.columns if c != value_col]
    else:
        key_list = [keys] if isinstance(keys, str) else list(keys)
    require_columns(table, key_list + [value_col])

    return order_by_value(table, key_list, value_col).head(int(n)).reset_index(drop=True)


def rate_by(df: pd.DataFrame, keys: Keys, flag_col: str = "arrest") -> pd.DataFrame:
    """
    Share of flagged rows per group.

    Returns:
        key columns + total, flagged, value (flagged / total),
        ordered by value descending then key ascending.
    """
    key_list = as_key_list(keys)
    require_columns(df, key_list + [flag_col])
    if not is_bool_dtype(df[flag_col]):
        raise ConfigError(f"Column '{flag_col}' must be boolean; coerce types first.")

    table = (
        df.groupby(key_list, sort=False)[flag_col]
        .agg(total="size", flagged="sum")
        .reset_index()
    )
    table["flagged"] = table["flagged"].astype(int)
    table[VALUE_COL] = table["flagged"] / table["total"]

    return order_by_value(table, key_list)


__all__ = [
    "VALUE_COL",
    "aggregate",
    "to_pairs",
    "cross_tab",
    "top_n",
    "rate_by",
    "order_by_value",
]
