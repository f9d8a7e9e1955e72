"""
report_master.py

End-to-end report: transform pipeline -> summary tables -> figures.
"""

from pathlib import Path
from typing import Any, Dict, Union

from rich.console import Console
from rich.panel import Panel

from config import RAW_CRIMES_CSV, FIGURES_DIR, YEARS, PARSE_FAILURE_POLICY, CITY_BOUNDS, HOMICIDE_TYPES, TOP_N
from chi_crime_pipelines.transform.aggregation import to_pairs, top_n
from chi_crime_pipelines.transform.filters import filter_primary_types
from chi_crime_pipelines.transform.transform_master import run_transforms
from chi_crime_pipelines.report.summaries import build_summaries
from chi_crime_pipelines.report.tables import show_table
from chi_crime_pipelines.report.charts import plot_bar, plot_heatmap, plot_monthly_trend
from chi_crime_pipelines.report.maps import points_from_table, plot_hexbin_density, plot_kde_hotspots

console = Console()


def render_figures(summaries: Dict[str, Any], crimes, figures_dir: Path, basemap: bool = True) -> Dict[str, Path]:
    """Write every chart / map of the report into `figures_dir`."""
    figures_dir.mkdir(parents=True, exist_ok=True)
    s = summaries
    figures: Dict[str, Path] = {}

    bar_specs = [
        ("by_primary_type", "01_crimes_by_type.png", "Crimes by Primary Type", "Primary type", True),
        ("by_year", "02_crimes_by_year.png", "Total Crimes per Year", "Year", False),
        ("top_locations", "05_top_locations.png", f"Top {TOP_N} Crime Locations", "Location", True),
        ("arrests_by_year", "07_arrests_by_year.png", "Arrests per Year", "Year", False),
        ("by_district", "08_crimes_by_district.png", "Crimes by District", "District", False),
        ("homicide_by_district", "09_homicides_by_district.png",
         f"Top {TOP_N} Districts by Homicide Victims", "District", True),
    ]
    for name, filename, title, xlabel, horizontal in bar_specs:
        pairs = to_pairs(s[name])
        if not pairs:
            console.print(f"[yellow]Skipped {filename}: no rows.[/yellow]")
            continue
        figures[name] = plot_bar(pairs, title, xlabel, "Count", figures_dir / filename, horizontal=horizontal)

    rates = top_n(s["arrest_rate_by_type"][["primary_type", "value"]], TOP_N)
    if not rates.empty:
        figures["arrest_rate_by_type"] = plot_bar(
            to_pairs(rates), f"Arrest Rate, Top {TOP_N} Primary Types", "Primary type", "Arrest rate",
            figures_dir / "06_arrest_rate_by_type.png", horizontal=True,
        )

    heatmap_specs = [
        ("year_month", "03_heatmap_year_month.png", "Crimes: Year x Month", "YlOrRd"),
        ("weekday_hour", "04_heatmap_weekday_hour.png", "Crimes: Day of Week x Hour", "mako"),
        ("homicide_year_month", "10_heatmap_homicide_year_month.png", "Homicide Victims: Year x Month", "Reds"),
    ]
    for name, filename, title, cmap in heatmap_specs:
        if s[name].empty:
            console.print(f"[yellow]Skipped {filename}: no rows.[/yellow]")
            continue
        figures[name] = plot_heatmap(s[name], title, figures_dir / filename, cmap=cmap)

    if not s["year_month"].empty:
        figures["monthly_trend"] = plot_monthly_trend(s["year_month"], figures_dir / "11_monthly_trend.html")

    points = points_from_table(crimes)
    if points:
        figures["hexbin_density"] = plot_hexbin_density(
            points, figures_dir / "12_hexbin_density.png", bounds=CITY_BOUNDS,
            title="Crime density (hexbin)", basemap=basemap,
        )

    homicide_points = points_from_table(filter_primary_types(crimes, HOMICIDE_TYPES))
    if homicide_points:
        figures["homicide_hotspots"] = plot_kde_hotspots(
            homicide_points, figures_dir / "13_homicide_kde_hotspots.png", bounds=CITY_BOUNDS,
            title="Homicide hotspots (kernel density)", basemap=basemap,
        )

    return figures


def run_report(
    csv_path: Union[str, Path] = RAW_CRIMES_CSV,
    figures_dir: Union[str, Path] = FIGURES_DIR,
    years=YEARS,
    on_parse_error: str = PARSE_FAILURE_POLICY,
    basemap: bool = True,
) -> Dict[str, Any]:
    """Run the pipeline, print the summary tables and write all figures."""
    console.print(Panel.fit("[bold cyan]Chicago Crime Report[/bold cyan]", border_style="cyan"))

    transformed = run_transforms(csv_path, years=years, on_parse_error=on_parse_error)
    crimes = transformed["crimes"]

    summaries = build_summaries(crimes, years=years)
    show_table(summaries["by_primary_type"], "Crimes by Primary Type")
    show_table(summaries["top_locations"], f"Top {TOP_N} Locations")
    show_table(summaries["arrest_rate_by_type"], "Arrest Rate by Primary Type", max_rows=TOP_N)
    show_table(summaries["homicide_by_district"], f"Top {TOP_N} Districts by Homicide Victims")

    figures = render_figures(summaries, crimes, Path(figures_dir), basemap=basemap)

    console.print(f"\n[green]Report written: {len(figures)} figures in {figures_dir}[/green]\n")
    return {"crimes": crimes, "summaries": summaries, "figures": figures}


def main() -> None:
    run_report()


if __name__ == "__main__":
    main()
