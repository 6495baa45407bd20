"""
Read helpers for delimited tables and YAML configuration.
"""

from pathlib import Path
from typing import Any

import pandas as pd
import yaml


def read_csv_table(file_path: Path | str, **kwargs) -> pd.DataFrame:
    """
    Read a (possibly compressed) comma-delimited file into a DataFrame.

    Compression is inferred from the file suffix. Column dtypes are inferred
    over the whole file, so mixed-type columns do not raise DtypeWarning.

    Args:
        file_path: Path to the CSV file.
        **kwargs: Additional keyword arguments passed to pandas.read_csv.

    Returns:
        DataFrame.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"file '{file_path}' does not exist")

    kwargs.setdefault("compression", "infer")
    kwargs.setdefault("low_memory", False)
    return pd.read_csv(file_path, **kwargs)


def read_yaml(file_path: Path | str) -> Any:
    """
    Read a YAML file.

    Args:
        file_path: Path to the YAML file.

    Returns:
        Parsed YAML data.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"YAML file not found: {file_path}")
    with open(file_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)
