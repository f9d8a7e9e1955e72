# Geographic density maps over a web-mercator basemap

from pathlib import Path
from typing import List, Sequence, Tuple, Union

import contextily as ctx
import geopandas as gpd
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from rich.console import Console
from shapely.geometry import Point
from sklearn.neighbors import KernelDensity

from config import CITY_BOUNDS
from chi_crime_pipelines.errors import ConfigError
from chi_crime_pipelines.report.charts import save_figure

console = Console()

LatLon = Tuple[float, float]
Bounds = Tuple[float, float, float, float]


def points_from_table(df: pd.DataFrame, lat_col: str = "latitude", lon_col: str = "longitude") -> List[LatLon]:
    """(latitude, longitude) pairs for rows with both coordinates."""
    for col in (lat_col, lon_col):
        if col not in df.columns:
            raise ConfigError(f"Expected coordinate column '{col}' not found.")

    coords = df[[lat_col, lon_col]].apply(pd.to_numeric, errors="coerce").dropna()
    return list(zip(coords[lat_col].tolist(), coords[lon_col].tolist()))


def project_points(points: Sequence[LatLon]) -> gpd.GeoSeries:
    """Project (lat, lon) pairs to EPSG:3857."""
    if len(points) == 0:
        raise ConfigError("No coordinates to map.")
    lats, lons = zip(*points)
    return gpd.GeoSeries(gpd.points_from_xy(lons, lats), crs="EPSG:4326").to_crs(epsg=3857)


def project_bounds(bounds: Bounds) -> Bounds:
    """(lat_min, lon_min, lat_max, lon_max) -> (xmin, ymin, xmax, ymax) in EPSG:3857."""
    lat_min, lon_min, lat_max, lon_max = bounds
    if lat_min >= lat_max or lon_min >= lon_max:
        raise ConfigError(f"Invalid map bounds: {bounds}")
    corners = gpd.GeoSeries(
        [Point(lon_min, lat_min), Point(lon_max, lat_max)], crs="EPSG:4326"
    ).to_crs(epsg=3857)
    return corners.iloc[0].x, corners.iloc[0].y, corners.iloc[1].x, corners.iloc[1].y


def finish_map(fig, ax, extent: Bounds, title: str, out_path: Union[str, Path], basemap: bool) -> Path:
    xmin, ymin, xmax, ymax = extent
    ax.set_xlim(xmin, xmax)
    ax.set_ylim(ymin, ymax)
    ax.set_title(title)
    ax.axis("off")
    if basemap:
        ctx.add_basemap(ax, source=ctx.providers.CartoDB.Positron)
    return save_figure(fig, out_path)


def plot_hexbin_density(
    points: Sequence[LatLon],
    out_path: Union[str, Path],
    bounds: Bounds = CITY_BOUNDS,
    title: str = "Hexbin crime density",
    gridsize: int = 70,
    basemap: bool = True,
) -> Path:
    """Hexbin point density map."""
    geo = project_points(points)
    xmin, ymin, xmax, ymax = project_bounds(bounds)

    fig, ax = plt.subplots(figsize=(12, 14))
    hb = ax.hexbin(
        geo.x,
        geo.y,
        gridsize=gridsize,
        cmap="Purples",
        mincnt=1,
        extent=[xmin, xmax, ymin, ymax],
        alpha=0.8,
    )
    fig.colorbar(hb, ax=ax, label="Crime count per hexagon", shrink=0.7)
    return finish_map(fig, ax, (xmin, ymin, xmax, ymax), title, out_path, basemap)


def plot_kde_hotspots(
    points: Sequence[LatLon],
    out_path: Union[str, Path],
    bounds: Bounds = CITY_BOUNDS,
    title: str = "Kernel density crime hotspot map",
    bandwidth: float = 400,
    grid_size: int = 200,
    max_points: int = 50_000,
    basemap: bool = True,
) -> Path:
    """
    Gaussian KDE hotspot map (bandwidth in metres).
    Large inputs are subsampled to `max_points` with a fixed seed.
    """
    geo = project_points(points)
    coords = np.vstack([geo.x.to_numpy(), geo.y.to_numpy()]).T
    if len(coords) > max_points:
        rng = np.random.default_rng(0)
        coords = coords[rng.choice(len(coords), size=max_points, replace=False)]

    kde = KernelDensity(bandwidth=bandwidth, kernel="gaussian").fit(coords)

    xmin, ymin, xmax, ymax = project_bounds(bounds)
    xx, yy = np.mgrid[xmin:xmax:complex(grid_size), ymin:ymax:complex(grid_size)]
    grid_points = np.vstack([xx.ravel(), yy.ravel()]).T
    z = np.exp(kde.score_samples(grid_points)).reshape(xx.shape)

    fig, ax = plt.subplots(figsize=(12, 14))
    im = ax.imshow(
        z.T,
        extent=[xmin, xmax, ymin, ymax],
        origin="lower",
        cmap="hot",
        alpha=0.7,
        vmin=z.max() * 0.3,
    )
    fig.colorbar(im, ax=ax, label="Crime density", shrink=0.7)
    return finish_map(fig, ax, (xmin, ymin, xmax, ymax), title, out_path, basemap)


__all__ = [
    "points_from_table",
    "project_points",
    "project_bounds",
    "plot_hexbin_density",
    "plot_kde_hotspots",
]
