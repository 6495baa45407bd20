"""
Schema validation for FARS tables.

FARS files carry dozens of columns; the schemas here only name the columns
this package relies on. Validation happens where a table enters the package
(after reading), never on the raw parse.
"""

from dataclasses import dataclass

import pandas as pd


class SchemaValidationError(Exception):
    """Raised when data does not conform to expected schema."""
    pass


@dataclass
class ColumnSpec:
    """Specification for a single column."""
    name: str
    dtype: str  # pandas dtype string (e.g., "int64", "float64", "object")
    required: bool = True
    nullable: bool = False
    description: str = ""


@dataclass
class TableSchema:
    """Schema definition for a table."""
    name: str
    description: str
    columns: list[ColumnSpec]

    def all_columns(self) -> list[str]:
        """Get list of all column names."""
        return [c.name for c in self.columns]

    def subset(self, names: list[str]) -> "TableSchema":
        """Return a schema restricted to the named columns."""
        return TableSchema(
            name=self.name,
            description=self.description,
            columns=[c for c in self.columns if c.name in names],
        )


# =============================================================================
# Schema definitions
# =============================================================================

SCHEMA_ACCIDENT = TableSchema(
    name="accident",
    description="One row per fatal crash from a yearly FARS accident file",
    columns=[
        ColumnSpec("MONTH", "int64", required=True, nullable=False,
                   description="Month of the crash (1-12)"),
        ColumnSpec("STATE", "int64", required=True, nullable=False,
                   description="FIPS-style state number"),
        ColumnSpec("LONGITUD", "float64", required=True, nullable=True,
                   description="Longitude; values above 900 mean not available"),
        ColumnSpec("LATITUDE", "float64", required=True, nullable=True,
                   description="Latitude; values above 90 mean not available"),
    ]
)

SCHEMA_YEAR_MONTH = TableSchema(
    name="year_month",
    description="Crash months tagged with the year of the file they came from",
    columns=[
        ColumnSpec("MONTH", "int64", required=True, nullable=False,
                   description="Month of the crash (1-12)"),
        ColumnSpec("year", "int64", required=True, nullable=False,
                   description="Year tag taken from the requested year"),
    ]
)

# Registry of all schemas
SCHEMA_REGISTRY: dict[str, TableSchema] = {
    "accident": SCHEMA_ACCIDENT,
    "year_month": SCHEMA_YEAR_MONTH,
}


# =============================================================================
# Validation functions
# =============================================================================

def _dtype_compatible(expected_dtype: str, actual_dtype: str) -> bool:
    """Check a pandas dtype string against the expected one, allowing widening."""
    if expected_dtype == actual_dtype:
        return True
    if expected_dtype == "object":
        return actual_dtype in ("object", "str", "string", "category")
    if expected_dtype == "int64":
        return actual_dtype in ("int64", "int32", "int16", "int8", "Int64", "Int32")
    if expected_dtype == "float64":
        # Integer coordinates are still valid coordinates
        return actual_dtype in ("float64", "float32", "Float64",
                                "int64", "int32", "Int64", "Int32")
    return False


def validate_schema(
    df: pd.DataFrame,
    schema: TableSchema | str,
    strict: bool = False,
) -> list[str]:
    """
    Validate a DataFrame against a schema.

    Args:
        df: DataFrame to validate.
        schema: TableSchema object or schema name from registry.
        strict: If True, fail on extra columns not in schema.

    Returns:
        List of validation error messages (empty if valid).

    Raises:
        SchemaValidationError: If validation fails.
    """
    if isinstance(schema, str):
        schema = get_schema(schema)

    errors = []

    for col in schema.columns:
        if col.required and col.name not in df.columns:
            errors.append(f"Missing required column: {col.name}")

    if strict:
        schema_cols = set(schema.all_columns())
        extra_cols = set(df.columns) - schema_cols
        if extra_cols:
            errors.append(f"Unexpected columns: {sorted(extra_cols)}")

    for col in schema.columns:
        if col.name not in df.columns:
            continue

        series = df[col.name]

        if not col.nullable and series.isna().any():
            null_count = series.isna().sum()
            errors.append(f"Column '{col.name}' has {null_count} null values but is not nullable")

        actual_dtype = str(series.dtype)
        if not _dtype_compatible(col.dtype, actual_dtype):
            errors.append(f"Column '{col.name}' has dtype '{actual_dtype}', expected '{col.dtype}'")

    if errors:
        error_msg = f"Schema validation failed for '{schema.name}':\n" + "\n".join(f"  - {e}" for e in errors)
        raise SchemaValidationError(error_msg)

    return errors


def get_schema(name: str) -> TableSchema:
    """
    Get a schema by name from the registry.

    Raises:
        ValueError: If schema not found.
    """
    if name not in SCHEMA_REGISTRY:
        raise ValueError(f"Unknown schema: {name}. Available: {list(SCHEMA_REGISTRY.keys())}")
    return SCHEMA_REGISTRY[name]
