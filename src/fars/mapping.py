"""
Plot the fatal crashes of one state and year on a map.
"""

import logging
from pathlib import Path
from typing import Any

import geopandas as gpd
import matplotlib.pyplot as plt

from fars.config import load_params
from fars.filenames import coerce_int, make_filename
from fars.logging_utils import get_logger, log_event
from fars.paths import paths, resolve_data_dir
from fars.qa import (
    LATITUDE_COLUMN,
    LONGITUDE_COLUMN,
    check_coordinate_sentinels,
    coordinate_bounds,
    mask_sentinel_coordinates,
    valid_coordinates,
)
from fars.reader import InvalidStateError, fars_read
from fars.schemas import SCHEMA_ACCIDENT, validate_schema

CRS_WGS84 = "EPSG:4326"

# Axis padding (degrees) when all points share one coordinate
_DEGENERATE_PAD = 0.5


def _load_boundaries(boundaries: Any) -> gpd.GeoDataFrame | None:
    """Accept a GeoDataFrame, a path readable by geopandas, or None."""
    if boundaries is None or isinstance(boundaries, gpd.GeoDataFrame):
        return boundaries
    return gpd.read_file(boundaries)


def _configured_boundaries(value: str | None) -> Path | None:
    if not value:
        return None
    path = Path(value)
    return path if path.is_absolute() else paths.root / path


def _limits(low: float, high: float) -> tuple[float, float]:
    if low == high:
        return low - _DEGENERATE_PAD, high + _DEGENERATE_PAD
    return low, high


def fars_map_state(
    state: Any,
    year: Any,
    data_dir: Path | str | None = None,
    ax: plt.Axes | None = None,
    boundaries: gpd.GeoDataFrame | Path | str | None = None,
) -> None:
    """
    Plot the location of every fatal crash in a state for one year.

    Sentinel coordinates (longitude above 900, latitude above 90) are treated
    as missing; crashes without both coordinates are not drawn, and the axis
    limits cover only the valid coordinates.

    Args:
        state: State number as used in the STATE column.
        year: Year of the accident file to read.
        data_dir: Directory holding the accident files.
        ax: Axes to draw on. When omitted a new pyplot figure is created
            but neither shown nor returned; call plt.show() (or
            plt.savefig()) afterwards to see it outside a notebook.
        boundaries: State outlines to draw underneath the points, as a
            GeoDataFrame or a file path. Defaults to map.boundaries from the
            params file; no outlines are drawn when neither is set.

    Raises:
        FileNotFoundError: If the year's file does not exist.
        SchemaValidationError: If STATE, LONGITUD or LATITUDE is unusable.
        InvalidStateError: If state does not occur in the year's data.
    """
    logger = get_logger(__name__)
    params = load_params()
    map_params = params["map"]

    directory = resolve_data_dir(data_dir, params["data"]["dir"])
    data = fars_read(directory / make_filename(year, params["data"]["filename_template"]))
    validate_schema(data, SCHEMA_ACCIDENT.subset(["STATE", LONGITUDE_COLUMN, LATITUDE_COLUMN]))

    state_num = coerce_int(state)
    if state_num is None or not data["STATE"].isin([state_num]).any():
        raise InvalidStateError(state)

    subset = data[data["STATE"] == state_num]
    if subset.empty:
        log_event(logger, logging.INFO, "no accidents to plot", "nothing_to_plot",
                  state=state_num, year=year)
        return None

    check_coordinate_sentinels(subset, logger)
    masked = mask_sentinel_coordinates(subset)
    located = valid_coordinates(masked)
    if located.empty:
        log_event(logger, logging.INFO, "no accidents to plot", "nothing_to_plot",
                  state=state_num, year=year, reason="no valid coordinates")
        return None

    bounds = coordinate_bounds(masked)
    points = gpd.GeoDataFrame(
        located,
        geometry=gpd.points_from_xy(located[LONGITUDE_COLUMN], located[LATITUDE_COLUMN]),
        crs=CRS_WGS84,
    )

    if ax is None:
        _, ax = plt.subplots(figsize=tuple(map_params["figsize"]))

    if boundaries is None:
        boundaries = _configured_boundaries(map_params["boundaries"])
    outlines = _load_boundaries(boundaries)
    if outlines is not None:
        if outlines.crs is not None and outlines.crs.to_epsg() != 4326:
            outlines = outlines.to_crs(CRS_WGS84)
        outlines.boundary.plot(ax=ax, color="black", linewidth=0.5)

    points.plot(ax=ax, marker=".", color="black", markersize=map_params["marker_size"])

    ax.set_xlim(*_limits(bounds["min_lon"], bounds["max_lon"]))
    ax.set_ylim(*_limits(bounds["min_lat"], bounds["max_lat"]))
    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")
    ax.set_title(f"FARS {coerce_int(year)}: state {state_num}")

    log_event(logger, logging.INFO, f"Plotted {len(points):,} accidents for state {state_num}",
              "map_plotted", state=state_num, year=year, n_points=len(points),
              n_missing=len(subset) - len(points))
    return None
