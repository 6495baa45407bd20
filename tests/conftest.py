"""
Pytest configuration and shared fixtures.

Fixtures write small FARS-style accident files (bz2-compressed CSV) into a
temporary directory.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import matplotlib
matplotlib.use("Agg")

import pytest
import pandas as pd


@pytest.fixture(autouse=True)
def no_data_dir_env(monkeypatch):
    """Keep a developer's FARS_DATA_DIR from leaking into tests."""
    monkeypatch.delenv("FARS_DATA_DIR", raising=False)


@pytest.fixture
def accidents_2013():
    """Accident rows for 2013: Alabama (1) with sentinel coordinates, one Arizona (4) crash."""
    return pd.DataFrame({
        "ST_CASE": [10001, 10002, 10003, 10004, 40001],
        "STATE": [1, 1, 1, 1, 4],
        "MONTH": [1, 1, 2, 3, 2],
        "LONGITUD": [-87.29, 999.9999, -86.10, -85.50, -111.90],
        "LATITUDE": [33.87, 32.50, 99.9999, 31.20, 33.45],
    })


@pytest.fixture
def accidents_2014():
    """Accident rows for 2014: Alabama (1), California (6), and Connecticut (9) without coordinates."""
    return pd.DataFrame({
        "ST_CASE": [10001, 10002, 10003, 60001, 90001],
        "STATE": [1, 1, 1, 6, 9],
        "MONTH": [1, 2, 2, 12, 5],
        "LONGITUD": [-86.80, -86.70, -86.60, -118.20, 999.9999],
        "LATITUDE": [33.50, 33.40, 33.30, 34.00, 99.9999],
    })


@pytest.fixture
def fars_data_dir(tmp_path, accidents_2013, accidents_2014):
    """Directory holding accident_2013.csv.bz2 and accident_2014.csv.bz2."""
    data_dir = tmp_path / "fars"
    data_dir.mkdir()
    accidents_2013.to_csv(data_dir / "accident_2013.csv.bz2", index=False, compression="bz2")
    accidents_2014.to_csv(data_dir / "accident_2014.csv.bz2", index=False, compression="bz2")
    return data_dir


# Markers for test categorization
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "plotting: mark test as drawing with matplotlib"
    )
