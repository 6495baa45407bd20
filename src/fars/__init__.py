"""
FARS toolkit

Read yearly NHTSA Fatality Analysis Reporting System (FARS) accident files,
count fatal crashes by month and year, and map the crashes of one state.

Core modules:
    - filenames: Year coercion and accident_<year>.csv.bz2 naming
    - reader: Single- and multi-year reading, monthly summaries
    - mapping: State crash maps
    - schemas: Column schemas validated where tables enter the package
    - qa: Sentinel coordinate checks
    - config: configs/params.yml loading
    - paths: Canonical root and path resolution
    - logging_utils: Console and JSONL structured logging
"""

from fars.filenames import make_filename
from fars.mapping import fars_map_state
from fars.reader import (
    FarsError,
    InvalidStateError,
    InvalidYearWarning,
    NoValidYearsError,
    fars_read,
    fars_read_years,
    fars_summarize_years,
)

__version__ = "0.1.0"
__author__ = "FARS Toolkit Team"

__all__ = [
    "make_filename",
    "fars_read",
    "fars_read_years",
    "fars_summarize_years",
    "fars_map_state",
    "FarsError",
    "InvalidStateError",
    "InvalidYearWarning",
    "NoValidYearsError",
]
