"""
Parameter loading for the FARS toolkit.

Parameters live in configs/params.yml at the project root. Values from the
file are merged over DEFAULT_PARAMS, so a partial file (or no file at all)
is valid.
"""

import copy
from pathlib import Path
from typing import Any

from fars.io_utils import read_yaml
from fars.paths import paths


DEFAULT_PARAMS: dict[str, Any] = {
    "data": {
        # None means FARS_DATA_DIR or the current working directory
        "dir": None,
        "filename_template": "accident_{year}.csv.bz2",
    },
    "map": {
        # Path to a state boundary file readable by geopandas.read_file
        "boundaries": None,
        "marker_size": 1,
        "figsize": [8, 6],
    },
    "logging": {
        "console_level": "INFO",
        "jsonl": False,
    },
}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_params(path: Path | str | None = None) -> dict[str, Any]:
    """
    Load parameters, falling back to defaults for anything not configured.

    Args:
        path: Optional explicit params file. When omitted, configs/params.yml
            under the project root is used if it can be found.

    Returns:
        Parameter dictionary with the same shape as DEFAULT_PARAMS.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
        ValueError: If the file does not contain a mapping.
    """
    if path is None:
        try:
            path = paths.params_yml
        except FileNotFoundError:
            return copy.deepcopy(DEFAULT_PARAMS)
        if not path.exists():
            return copy.deepcopy(DEFAULT_PARAMS)

    loaded = read_yaml(path) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Expected a mapping in {path}, got {type(loaded).__name__}")

    return _deep_merge(DEFAULT_PARAMS, loaded)
