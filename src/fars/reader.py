"""
Reading and summarizing yearly FARS accident files.

fars_read() loads one file. read_year_results() loads several years and
records, per year, either the (MONTH, year) table or the reason it is
missing; fars_read_years() and fars_summarize_years() are built on it.
A year that fails to load produces an InvalidYearWarning and is left out;
only a request where every year fails is an error.
"""

import logging
import warnings
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from fars.config import load_params
from fars.filenames import coerce_int, make_filename
from fars.io_utils import read_csv_table
from fars.logging_utils import get_logger, log_event, log_step_start, log_step_end
from fars.paths import resolve_data_dir
from fars.schemas import (
    SCHEMA_ACCIDENT,
    SCHEMA_YEAR_MONTH,
    SchemaValidationError,
    validate_schema,
)


# =============================================================================
# Errors
# =============================================================================

class FarsError(Exception):
    """Base class for FARS toolkit errors."""
    pass


class NoValidYearsError(FarsError, ValueError):
    """Raised when none of the requested years could be loaded."""

    def __init__(self, years: list[Any]):
        self.years = list(years)
        super().__init__(f"no valid years to summarize among {self.years}")


class InvalidStateError(FarsError, ValueError):
    """Raised when a state number does not occur in the accident table."""

    def __init__(self, state: Any):
        self.state = state
        super().__init__(f"invalid STATE number: {state}")


class InvalidYearWarning(UserWarning):
    """Emitted when one year of a multi-year request cannot be loaded."""
    pass


# One warning per skipped year, on every call
warnings.simplefilter("always", InvalidYearWarning)


# Failures that skip a single year instead of aborting the request
_YEAR_ERRORS = (OSError, EOFError, ValueError, SchemaValidationError)


@dataclass
class YearResult:
    """Outcome of loading one requested year."""
    year: Any
    table: pd.DataFrame | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.table is not None


# =============================================================================
# Single file
# =============================================================================

def fars_read(filename: Path | str) -> pd.DataFrame:
    """
    Read a FARS accident file into a DataFrame.

    Args:
        filename: Path to a CSV file, optionally compressed (.bz2, .gz, .xz,
            .zip).

    Returns:
        DataFrame with every column of the file.

    Raises:
        FileNotFoundError: If filename does not exist.
    """
    logger = get_logger(__name__)
    table = read_csv_table(filename)
    log_event(logger, logging.DEBUG, f"Read {len(table):,} rows from {filename}",
              "table_read", path=str(filename), row_count=len(table))
    return table


# =============================================================================
# Multiple years
# =============================================================================

def _as_year_list(years: Any) -> list[Any]:
    """Treat a scalar year as a one-element request."""
    if isinstance(years, (str, bytes)) or not isinstance(years, Iterable):
        return [years]
    return list(years)


def _read_year_table(path: Path, year: Any) -> pd.DataFrame:
    """Load one year's file and project it to (MONTH, year)."""
    coerced = coerce_int(year)
    if coerced is None:
        raise ValueError(f"cannot interpret {year!r} as a year")

    table = fars_read(path)
    if table.empty and "MONTH" in table.columns:
        # Header-only files parse every column as object
        table = table.astype({"MONTH": "int64"})
    validate_schema(table, SCHEMA_ACCIDENT.subset(["MONTH"]))

    tagged = table[["MONTH"]].assign(year=coerced)
    validate_schema(tagged, SCHEMA_YEAR_MONTH, strict=True)
    return tagged


def read_year_results(
    years: Any,
    data_dir: Path | str | None = None,
) -> list[YearResult]:
    """
    Load the (MONTH, year) table of each requested year.

    Years are processed in input order. A year whose file is missing,
    unreadable or lacks a usable MONTH column gets a YearResult without a
    table, and one InvalidYearWarning ("invalid year: <year>") is emitted
    for it.

    Args:
        years: A year or an iterable of years.
        data_dir: Directory holding the accident files. Defaults to
            FARS_DATA_DIR, the configured data directory, or the current
            working directory.

    Returns:
        One YearResult per requested year.
    """
    logger = get_logger(__name__)
    params = load_params()["data"]
    directory = resolve_data_dir(data_dir, params["dir"])
    template = params["filename_template"]

    results = []
    for year in _as_year_list(years):
        path = directory / make_filename(year, template)
        try:
            results.append(YearResult(year=year, table=_read_year_table(path, year)))
        except _YEAR_ERRORS as exc:
            warnings.warn(f"invalid year: {year}", InvalidYearWarning, stacklevel=2)
            log_event(logger, logging.WARNING, f"invalid year: {year}", "year_skipped",
                      year=year, path=str(path), error=str(exc))
            results.append(YearResult(year=year, error=exc))

    return results


def fars_read_years(
    years: Any,
    data_dir: Path | str | None = None,
) -> list[pd.DataFrame | None]:
    """
    Load month and year columns for several years.

    Returns:
        A list aligned with years: a DataFrame with columns MONTH and year
        for each loaded year, None for each year that could not be loaded.
    """
    return [result.table for result in read_year_results(years, data_dir)]


def fars_summarize_years(
    years: Any,
    data_dir: Path | str | None = None,
) -> pd.DataFrame:
    """
    Count fatal crashes per month for each of the requested years.

    Args:
        years: A year or an iterable of years.
        data_dir: Directory holding the accident files.

    Returns:
        DataFrame indexed by MONTH with one Int64 column per loaded year;
        months not observed in a year are <NA>.

    Raises:
        NoValidYearsError: If none of the years could be loaded.
    """
    logger = get_logger(__name__)
    requested = _as_year_list(years)
    log_step_start(logger, "summarize_years", years=requested)

    tables = [result.table for result in read_year_results(requested, data_dir) if result.ok]
    if not tables:
        raise NoValidYearsError(requested)

    combined = pd.concat(tables, ignore_index=True)
    summary = (
        combined.groupby(["year", "MONTH"])
        .size()
        .unstack("year")
        .sort_index()
        .astype("Int64")
    )

    log_step_end(logger, "summarize_years", n_years=summary.shape[1], n_months=len(summary))
    return summary
