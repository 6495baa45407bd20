"""
Year coercion and FARS file naming.

Yearly accident files follow the NHTSA naming convention
accident_<year>.csv.bz2. Years that cannot be read as an integer are
rendered as NA in the file name rather than rejected.
"""

import math
import numbers
from typing import Any

FILENAME_TEMPLATE = "accident_{year}.csv.bz2"

# Rendered in place of a year that could not be coerced
MISSING_YEAR = "NA"


def coerce_int(value: Any) -> int | None:
    """
    Coerce a year-like (or state-like) value to an integer.

    Integers pass through, finite reals are truncated toward zero and numeric
    strings are parsed ("2013", " 2013 ", "2013.0").

    Args:
        value: Any year-like value.

    Returns:
        The year as int, or None when the value cannot be coerced (booleans,
        None, NaN, infinities, non-numeric strings, other types).
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, numbers.Integral):
        return int(value)

    if isinstance(value, numbers.Real):
        if not math.isfinite(value):
            return None
        return int(value)

    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return int(number) if math.isfinite(number) else None

    return None


def make_filename(year: Any, template: str = FILENAME_TEMPLATE) -> str:
    """
    Build the file name (without directory) of a yearly FARS accident file.

    Example:
        >>> make_filename(2013)
        'accident_2013.csv.bz2'
        >>> make_filename("ab")
        'accident_NA.csv.bz2'
    """
    coerced = coerce_int(year)
    return template.format(year=MISSING_YEAR if coerced is None else coerced)
