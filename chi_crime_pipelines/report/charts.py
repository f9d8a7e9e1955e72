# Bar charts, heatmaps and the interactive monthly trend

from pathlib import Path
from typing import Any, Sequence, Tuple, Union

import matplotlib.pyplot as plt
import pandas as pd
import plotly.express as px
import seaborn as sns
from rich.console import Console

from config import MONTH_LABELS
from chi_crime_pipelines.errors import ConfigError

console = Console()

sns.set(style="whitegrid")


def save_figure(fig, out_path: Union[str, Path]) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    console.print(f"[dim cyan]  Saved: {out_path.name}[/dim cyan]")
    return out_path


def plot_bar(
    pairs: Sequence[Tuple[Any, Any]],
    title: str,
    xlabel: str,
    ylabel: str,
    out_path: Union[str, Path],
    horizontal: bool = False,
    color: str = "steelblue",
) -> Path:
    """Bar chart of ordered (key, value) pairs; the first pair is drawn first / on top."""
    if not pairs:
        raise ConfigError(f"Nothing to plot for '{title}'.")

    labels = [str(k) for k, _ in pairs]
    values = [v for _, v in pairs]

    if horizontal:
        fig, ax = plt.subplots(figsize=(12, max(4, 0.35 * len(pairs))))
        bars = ax.barh(labels[::-1], values[::-1], color=color, edgecolor="black")
        ax.set_xlabel(ylabel)
        ax.set_ylabel(xlabel)
        ax.grid(axis="x", alpha=0.3)
    else:
        fig, ax = plt.subplots(figsize=(12, 6))
        bars = ax.bar(labels, values, color=color, edgecolor="black")
        ax.set_xlabel(xlabel)
        ax.set_ylabel(ylabel)
        ax.grid(axis="y", alpha=0.3)
        ax.tick_params(axis="x", rotation=45)

    fmt = "{:,.2f}" if any(isinstance(v, float) for v in values) else "{:,}"
    ax.bar_label(bars, labels=[fmt.format(v) for v in (values[::-1] if horizontal else values)],
                 padding=3, fontsize=8)
    ax.set_title(title)
    return save_figure(fig, out_path)


def plot_heatmap(
    wide: pd.DataFrame,
    title: str,
    out_path: Union[str, Path],
    xlabel: str = "",
    ylabel: str = "",
    cmap: str = "mako",
    annot: bool = False,
) -> Path:
    """Heatmap of a dense cross-tab (explicit zeros expected)."""
    if wide.empty:
        raise ConfigError(f"Nothing to plot for '{title}'.")

    fig, ax = plt.subplots(figsize=(16, 6))
    sns.heatmap(
        wide,
        cmap=cmap,
        annot=annot,
        fmt="d",
        linewidths=0.3,
        linecolor="white",
        cbar_kws={"label": "Crime count"},
        ax=ax,
    )
    ax.set_title(title)
    ax.set_xlabel(xlabel or str(wide.columns.name or ""))
    ax.set_ylabel(ylabel or str(wide.index.name or ""))
    ax.set_yticklabels(ax.get_yticklabels(), rotation=0)
    return save_figure(fig, out_path)


def plot_monthly_trend(year_month: pd.DataFrame, out_path: Union[str, Path]) -> Path:
    """Interactive monthly line per year from a dense year x month cross-tab, written as HTML."""
    if year_month.empty:
        raise ConfigError("Nothing to plot for the monthly trend.")

    monthly = year_month.stack().reset_index(name="count")
    monthly.columns = ["year", "month", "count"]
    monthly["year"] = monthly["year"].astype(str)

    fig = px.line(
        monthly,
        x="month",
        y="count",
        color="year",
        title="Monthly Crime Trends by Year (Interactive)",
        labels={"month": "Month", "count": "Number of Crimes", "year": "Year"},
        markers=True,
    )
    fig.update_xaxes(
        tickmode="array",
        ticktext=MONTH_LABELS,
        tickvals=list(range(1, 13)),
    )
    fig.update_layout(hovermode="x unified", height=600)

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(str(out_path))
    console.print(f"[dim cyan]  Saved: {out_path.name}[/dim cyan]")
    return out_path


__all__ = ["plot_bar", "plot_heatmap", "plot_monthly_trend", "save_figure"]
