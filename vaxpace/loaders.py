"""Readers for already-resolved rolling-average series files."""

import json
import logging

import pandas as pd

logger = logging.getLogger(__name__)


def load_series_json(path):
    """
    Load a JSON object of country code -> samples (most recent first).

    Args:
        path: Path to the JSON file

    Returns:
        Dict of country code -> list of floats
    """
    with open(path, 'r') as f:
        raw = json.load(f)
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a JSON object keyed by country code")

    series = {code: [float(v) for v in values] for code, values in raw.items()}
    logger.info(f"Loaded {len(series)} series from {path}")
    return series


def load_series_csv(path, country_col='country', date_col='date', value_col='value'):
    """
    Load a long-format CSV (one row per country and day) into a series map.

    Rows are grouped by country and ordered newest first; rows without a
    value are skipped.

    Args:
        path: Path to the CSV file
        country_col: Column holding the country code
        date_col: Column holding the sample date
        value_col: Column holding the rolling average

    Returns:
        Dict of country code -> list of floats, most recent first
    """
    df = pd.read_csv(path)
    missing = {country_col, date_col, value_col} - set(df.columns)
    if missing:
        raise ValueError(f"{path}: missing columns {sorted(missing)}")

    df[date_col] = pd.to_datetime(df[date_col])
    df[value_col] = pd.to_numeric(df[value_col], errors='coerce')
    df = df.dropna(subset=[value_col])

    series = {}
    for code, group in df.groupby(country_col, sort=False):
        ordered = group.sort_values(date_col, ascending=False)
        series[str(code)] = ordered[value_col].astype(float).tolist()

    logger.info(f"Loaded {len(series)} series from {path}")
    return series


def load_series(path):
    """Load a series file, picking the reader from the file extension."""
    if str(path).lower().endswith('.csv'):
        return load_series_csv(path)
    return load_series_json(path)
