"""Data loading, precipitation normalization and dataset preparation."""
import logging

import numpy as np
import pandas as pd

from weather_knn.constants import (
    RAW_COLUMNS, DATASET_COLS, NUMERIC_COLS, TIMESTAMP_COL, TARGET_COL,
    TRACE_MARKER, TRACE_VALUE, SNOW_MARKER, MISSING_VALUE, PARSE_ERROR_POLICIES,
)
from weather_knn.errors import SchemaError, ParseError

logger = logging.getLogger(__name__)


def load_data(path, column_map=None, **read_csv_kwargs):
    """Read a delimited NOAA export, keeping the precipitation field as text."""
    column_map = column_map or RAW_COLUMNS
    precip_col = next(src for src, dst in column_map.items() if dst == TARGET_COL)
    read_csv_kwargs.setdefault("low_memory", False)
    dtype = {precip_col: str, **read_csv_kwargs.pop("dtype", {})}
    df = pd.read_csv(path, dtype=dtype, **read_csv_kwargs)
    logger.info("Loaded %d rows x %d columns from %s", len(df), df.shape[1], path)
    return df


def substitute_precip_text(value):
    """Apply the trace, snow-marker and missing-value substitutions; return text.

    A field that is empty once the snow marker is stripped (e.g. "s") counts
    as missing.
    """
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return MISSING_VALUE
    text = str(value).strip().replace(TRACE_MARKER, TRACE_VALUE)
    if text.endswith(SNOW_MARKER):
        text = text[:-len(SNOW_MARKER)]
    return text or MISSING_VALUE


def normalize_precip(value, row=None):
    """Convert a raw precipitation field to a float.

    Trace markers become 0.0, a trailing snow marker is stripped and missing
    values count as 0.0. Anything that still is not a finite, non-negative
    number raises ParseError.
    """
    text = substitute_precip_text(value)
    try:
        number = float(text)
    except ValueError:
        raise ParseError(value, row=row) from None
    if not np.isfinite(number):
        raise ParseError(value, row=row, reason="not finite")
    if number < 0:
        raise ParseError(value, row=row, reason="negative amount")
    return number


def _normalize_values(series, skip_invalid=False):
    values, bad_rows = [], []
    for idx, raw_value in series.items():
        try:
            values.append(normalize_precip(raw_value, row=idx))
        except ParseError:
            if not skip_invalid:
                raise
            bad_rows.append(idx)
            values.append(np.nan)
    return pd.Series(values, index=series.index, name=series.name, dtype=float), bad_rows


def normalize_precip_column(series):
    """Apply normalize_precip to every element; the first bad value raises."""
    normalized, _ = _normalize_values(series)
    return normalized


def check_schema(raw, column_map=None):
    """Raise SchemaError unless every source column in column_map is present."""
    column_map = column_map or RAW_COLUMNS
    missing = [col for col in column_map if col not in raw.columns]
    if missing:
        raise SchemaError(missing)


def prepare_dataset(raw, column_map=None, on_parse_error="raise"):
    """Select, rename and clean the analysis columns; return a new DataFrame.

    on_parse_error="raise" aborts on the first unparseable precipitation value,
    "drop" discards those rows with a warning.
    """
    if on_parse_error not in PARSE_ERROR_POLICIES:
        raise ValueError(f"on_parse_error must be one of {PARSE_ERROR_POLICIES}, got {on_parse_error!r}")
    column_map = column_map or RAW_COLUMNS
    check_schema(raw, column_map)

    df = raw[list(column_map)].rename(columns=column_map)
    df[TIMESTAMP_COL] = pd.to_datetime(df[TIMESTAMP_COL], errors="coerce")

    precip, bad_rows = _normalize_values(df[TARGET_COL], skip_invalid=on_parse_error == "drop")
    if bad_rows:
        logger.warning("Dropping %d row(s) with unparseable precipitation: %s",
                       len(bad_rows), bad_rows[:10])
    df[TARGET_COL] = precip

    for col in NUMERIC_COLS:
        if col != TARGET_COL:
            df[col] = pd.to_numeric(df[col], errors="coerce")

    before = len(df)
    df = df[DATASET_COLS].dropna().reset_index(drop=True)
    logger.info("Prepared dataset: %d -> %d rows after dropping incomplete rows", before, len(df))
    return df


def load_dataset(path, column_map=None, on_parse_error="raise", **read_csv_kwargs):
    """Load a NOAA export from disk and return the prepared dataset."""
    raw = load_data(path, column_map=column_map, **read_csv_kwargs)
    return prepare_dataset(raw, column_map=column_map, on_parse_error=on_parse_error)
