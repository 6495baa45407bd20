"""
Coordinate quality checks for FARS accident tables.

FARS encodes unavailable coordinates with out-of-range sentinel values
(for example 999.9999 for longitude and 99.9999 for latitude). This module
replaces them with NaN and reports how many rows were affected.
"""

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd

from fars.logging_utils import log_qa_check


# Values strictly above these are "not available"
LONGITUDE_SENTINEL_THRESHOLD = 900
LATITUDE_SENTINEL_THRESHOLD = 90

LONGITUDE_COLUMN = "LONGITUD"
LATITUDE_COLUMN = "LATITUDE"


@dataclass
class QAResult:
    """Result of a QA check."""
    check_name: str
    passed: bool
    message: str
    details: dict[str, Any] | None = None

    def __bool__(self) -> bool:
        return self.passed


def check_coordinate_sentinels(
    df: pd.DataFrame,
    logger: logging.Logger | None = None,
) -> QAResult:
    """
    Count rows whose longitude or latitude is a "not available" sentinel.

    Args:
        df: Accident table with LONGITUD and LATITUDE columns.
        logger: Optional logger for structured logging.

    Returns:
        QAResult; passes when no sentinel is present.
    """
    check_name = "coordinate_sentinels"

    lon_sentinels = int((df[LONGITUDE_COLUMN] > LONGITUDE_SENTINEL_THRESHOLD).sum())
    lat_sentinels = int((df[LATITUDE_COLUMN] > LATITUDE_SENTINEL_THRESHOLD).sum())
    details = {
        "total": len(df),
        "longitude_sentinels": lon_sentinels,
        "latitude_sentinels": lat_sentinels,
    }

    if lon_sentinels == 0 and lat_sentinels == 0:
        result = QAResult(
            check_name=check_name,
            passed=True,
            message=f"All {len(df)} coordinates are available",
            details=details,
        )
    else:
        result = QAResult(
            check_name=check_name,
            passed=False,
            message=(f"Found {lon_sentinels} unavailable longitudes and "
                     f"{lat_sentinels} unavailable latitudes"),
            details=details,
        )

    if logger:
        log_qa_check(logger, check_name, result.passed, result.message, **(result.details or {}))

    return result


def mask_sentinel_coordinates(df: pd.DataFrame) -> pd.DataFrame:
    """
    Replace sentinel coordinates with NaN.

    Args:
        df: Accident table with LONGITUD and LATITUDE columns.

    Returns:
        A copy of df with float coordinate columns.
    """
    masked = df.copy()
    lon = masked[LONGITUDE_COLUMN].astype("float64")
    lat = masked[LATITUDE_COLUMN].astype("float64")
    masked[LONGITUDE_COLUMN] = lon.mask(lon > LONGITUDE_SENTINEL_THRESHOLD, np.nan)
    masked[LATITUDE_COLUMN] = lat.mask(lat > LATITUDE_SENTINEL_THRESHOLD, np.nan)
    return masked


def valid_coordinates(df: pd.DataFrame) -> pd.DataFrame:
    """Rows of a masked table with both coordinates present."""
    return df.dropna(subset=[LONGITUDE_COLUMN, LATITUDE_COLUMN])


def coordinate_bounds(df: pd.DataFrame) -> dict[str, float]:
    """
    Bounding box of the non-missing coordinates.

    Longitude and latitude ranges are computed independently, so a row with
    only one valid coordinate still widens that axis.

    Returns:
        Dict with min_lon, max_lon, min_lat, max_lat (NaN when a column has
        no valid values).
    """
    return {
        "min_lon": float(df[LONGITUDE_COLUMN].min()),
        "max_lon": float(df[LONGITUDE_COLUMN].max()),
        "min_lat": float(df[LATITUDE_COLUMN].min()),
        "max_lat": float(df[LATITUDE_COLUMN].max()),
    }
