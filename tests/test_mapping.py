"""
Tests for fars.mapping module.

Tests cover:
- State validation against the year's data
- Sentinel coordinates excluded from the plotted points and axis limits
- Notice instead of a plot when nothing can be drawn
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import logging

import geopandas as gpd
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest
from shapely.geometry import box

from fars.logging_utils import get_logger
from fars.mapping import fars_map_state
from fars.reader import InvalidStateError
from fars.schemas import SchemaValidationError


pytestmark = pytest.mark.plotting


@pytest.fixture
def ax():
    """A fresh Axes, closed after the test."""
    fig, ax = plt.subplots()
    yield ax
    plt.close(fig)


def _plotted_points(ax) -> np.ndarray:
    offsets = np.asarray(ax.collections[-1].get_offsets())
    return offsets[np.lexsort((offsets[:, 1], offsets[:, 0]))]


class TestInvalidInput:
    """Errors raised before anything is drawn."""

    def test_unknown_state_raises(self, fars_data_dir, ax):
        """A state absent from the year's data is rejected."""
        with pytest.raises(InvalidStateError, match="invalid STATE number: 99") as exc_info:
            fars_map_state(99, 2013, data_dir=fars_data_dir, ax=ax)

        assert exc_info.value.state == 99
        assert len(ax.collections) == 0

    def test_non_numeric_state_raises(self, fars_data_dir, ax):
        with pytest.raises(InvalidStateError):
            fars_map_state("alabama", 2013, data_dir=fars_data_dir, ax=ax)

    def test_missing_year_file_raises(self, fars_data_dir, ax):
        with pytest.raises(FileNotFoundError, match="accident_2099.csv.bz2"):
            fars_map_state(1, 2099, data_dir=fars_data_dir, ax=ax)

    def test_missing_coordinate_columns_raise(self, tmp_path, ax):
        """Files without LONGITUD/LATITUDE fail schema validation."""
        pd.DataFrame({"STATE": [1], "MONTH": [1]}).to_csv(
            tmp_path / "accident_2012.csv.bz2", index=False, compression="bz2"
        )
        with pytest.raises(SchemaValidationError, match="LONGITUD"):
            fars_map_state(1, 2012, data_dir=tmp_path, ax=ax)


class TestPlotting:
    """Points and limits drawn for a valid state."""

    def test_returns_none(self, fars_data_dir, ax):
        assert fars_map_state(1, 2013, data_dir=fars_data_dir, ax=ax) is None

    def test_sentinel_coordinates_excluded(self, fars_data_dir, ax):
        """Only crashes with both coordinates available are drawn."""
        fars_map_state(1, 2013, data_dir=fars_data_dir, ax=ax)

        points = _plotted_points(ax)
        expected = np.array([[-87.29, 33.87], [-85.50, 31.20]])
        np.testing.assert_allclose(points, expected)

    def test_axis_limits_ignore_sentinels(self, fars_data_dir, ax):
        """Limits span the valid longitudes and latitudes of the state."""
        fars_map_state(1, 2013, data_dir=fars_data_dir, ax=ax)

        assert ax.get_xlim() == pytest.approx((-87.29, -85.50))
        assert ax.get_ylim() == pytest.approx((31.20, 33.87))

    def test_other_states_not_drawn(self, fars_data_dir, ax):
        fars_map_state(4, 2013, data_dir=fars_data_dir, ax=ax)

        np.testing.assert_allclose(_plotted_points(ax), [[-111.90, 33.45]])

    def test_creates_figure_without_axes(self, fars_data_dir):
        """A new figure is created when no Axes is passed."""
        before = set(plt.get_fignums())
        fars_map_state(1, 2014, data_dir=fars_data_dir)
        created = set(plt.get_fignums()) - before

        assert len(created) == 1
        for num in created:
            plt.close(num)

    def test_draws_boundaries_under_points(self, fars_data_dir, ax):
        """State outlines are drawn before the crash points."""
        outlines = gpd.GeoDataFrame(
            {"NAME": ["Alabama"]},
            geometry=[box(-88.5, 30.2, -84.9, 35.0)],
            crs="EPSG:4326",
        )
        fars_map_state(1, 2014, data_dir=fars_data_dir, ax=ax, boundaries=outlines)

        assert len(ax.collections) == 2
        assert len(_plotted_points(ax)) == 3


class TestNothingToPlot:
    """States whose crashes have no usable coordinates."""

    def test_notice_and_no_plot(self, fars_data_dir, ax, caplog):
        """Connecticut's only 2014 crash has no coordinates: notice, no points."""
        logger = get_logger("fars.mapping")
        logger.addHandler(caplog.handler)
        try:
            with caplog.at_level(logging.INFO, logger="fars.mapping"):
                result = fars_map_state(9, 2014, data_dir=fars_data_dir, ax=ax)
        finally:
            logger.removeHandler(caplog.handler)

        assert result is None
        assert len(ax.collections) == 0
        assert "no accidents to plot" in caplog.text


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
