"""Data transformation functions turning raw per-country series into chart records."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Mapping, Sequence

import pandas as pd

from .config import DEFAULT_CHART_CONFIG
from .metadata import CountryMeta, MetadataClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeriesRecord:
    """A country's samples in chronological order (oldest first, last is "now")."""
    country: CountryMeta
    samples: tuple[float, ...]
    peak: float
    latest: float
    length: int

    @property
    def code(self) -> str:
        return self.country.code


@dataclass(frozen=True)
class PlotPoint:
    """
    One (country, time step) sample of the point cloud.

    ``record_index`` points into the draw's record tuple. ``alignment_index``
    counts steps back from the most recent sample, so 0 is "now".
    """
    record_index: int
    country_code: str
    sample_value: float
    alignment_index: int


def prepare_series(code, samples, country, peak_threshold=DEFAULT_CHART_CONFIG['peak_threshold']):
    """
    Build a SeriesRecord for one country, or None if the series is excluded.

    Args:
        code: Country code the samples were keyed by
        samples: Samples ordered newest first
        country: Resolved CountryMeta
        peak_threshold: Series whose peak does not exceed this are dropped

    Returns:
        SeriesRecord or None
    """
    values = [float(v) for v in samples]
    if not values:
        logger.debug(f"Dropping {code}: no samples")
        return None
    if not all(math.isfinite(v) for v in values):
        logger.debug(f"Dropping {code}: non-finite samples")
        return None

    values.reverse()
    peak = max(values)
    if peak <= peak_threshold:
        logger.debug(f"Dropping {code}: peak {peak:g} <= {peak_threshold:g}")
        return None

    return SeriesRecord(
        country=country,
        samples=tuple(values),
        peak=peak,
        latest=values[-1],
        length=len(values),
    )


def normalize_series_map(
    raw: Mapping[str, Sequence[float]],
    metadata: MetadataClient,
    population_threshold: float = DEFAULT_CHART_CONFIG['population_threshold'],
    peak_threshold: float = DEFAULT_CHART_CONFIG['peak_threshold'],
) -> tuple[SeriesRecord, ...]:
    """
    Filter and reshape raw series into chart records.

    A country is kept iff its population is known and at least
    ``population_threshold`` and its peak sample exceeds ``peak_threshold``.
    Output order follows the input key order.

    Args:
        raw: Country code -> samples, most recent first
        metadata: Client resolving codes to CountryMeta
        population_threshold: Minimum population to keep a country
        peak_threshold: Minimum (exclusive) peak value to keep a country

    Returns:
        Tuple of SeriesRecord
    """
    records = []
    for code, samples in raw.items():
        country = metadata.resolve(code)
        if country is None or country.population is None:
            logger.debug(f"Dropping {code}: population unknown")
            continue
        if country.population < population_threshold:
            logger.debug(f"Dropping {code}: population {country.population:,.0f} below threshold")
            continue

        record = prepare_series(code, samples, country, peak_threshold)
        if record is not None:
            records.append(record)

    logger.info(f"Normalized {len(records)} of {len(raw)} series")
    return tuple(records)


def flatten_points(records: Sequence[SeriesRecord]) -> tuple[PlotPoint, ...]:
    """Flatten all records into one PlotPoint per sample (record order, then chronological)."""
    points = []
    for record_index, record in enumerate(records):
        for i, value in enumerate(record.samples):
            points.append(PlotPoint(
                record_index=record_index,
                country_code=record.code,
                sample_value=value,
                alignment_index=record.length - 1 - i,
            ))
    return tuple(points)


def records_to_frame(records: Sequence[SeriesRecord]) -> pd.DataFrame:
    """
    Summarize records in a DataFrame, sorted by latest value (leaders first).

    Columns: code, name, population, peak, latest, length
    """
    columns = ['code', 'name', 'population', 'peak', 'latest', 'length']
    rows = [
        {
            'code': r.code,
            'name': r.country.name,
            'population': r.country.population,
            'peak': r.peak,
            'latest': r.latest,
            'length': r.length,
        }
        for r in records
    ]
    df = pd.DataFrame(rows, columns=columns)
    return df.sort_values('latest', ascending=False, kind='stable').reset_index(drop=True)


def print_series_summary(records):
    """Print a summary of the normalized series."""
    df = records_to_frame(records)
    print("\n" + "=" * 70)
    print("Series Summary")
    print("=" * 70)
    if df.empty:
        print("  No series passed the population and peak filters")
        return
    for row in df.itertuples(index=False):
        print(f"  {row.name:24s} latest {row.latest:12,.0f}  peak {row.peak:12,.0f}  ({row.length} days)")
