"""Build annual observation series from raw volume input

Users type the most recent year's volume first, so the token at position
``i`` belongs to ``anchor_year - i``. The resulting series is always sorted
oldest-first, which is the order every model and table works with.
"""

import math
import numbers
import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

import pandas as pd

from traffic_trends.utils.logging_config import get_logger


logger = get_logger(__name__)

# Leading numeric part of a token, same rules as a lenient float parse
_NUMBER_PREFIX = re.compile(r'^[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)')


class Direction(str, Enum):
    """Traffic direction of a counting station"""
    S1 = 'S1'
    S2 = 'S2'
    S0 = 'S0'  # both directions combined


@dataclass(frozen=True)
class StationInfo:
    """Descriptive metadata of the counting station being analysed"""
    road: str = ''
    section: str = ''
    station: str = ''
    km: str = ''
    direction: Direction = Direction.S1


@dataclass(frozen=True)
class Observation:
    """
    One year of measured traffic volume

    Attributes:
        year: Calendar year of the measurement
        volume: Measured volume (vehicles/day)
        growth_rate: Percent change from the previous year (0 for the first year)
    """
    year: int
    volume: float
    growth_rate: float = 0.0


ObservationSeries = Tuple[Observation, ...]


def _parse_token(token: str) -> float:
    """Parse the leading number of a token, NaN if there is none"""
    match = _NUMBER_PREFIX.match(token)
    if not match:
        return math.nan

    text = match.group(0)
    if text.lstrip('+-') == 'Infinity':
        return -math.inf if text.startswith('-') else math.inf

    return float(text)


def parse_volumes(raw_text: str) -> List[float]:
    """
    Split raw input on whitespace and parse every token as a number

    Tokens without a numeric value are dropped silently. ``Infinity`` and
    out-of-range tokens such as ``1e999`` are kept as infinite volumes (a
    warning is logged); any model fitted over them has NaN parameters.

    Args:
        raw_text: Free-form text (tabs, spaces or newlines between values)

    Returns:
        Parsed volumes in input order
    """
    if not raw_text:
        return []

    volumes = []
    for token in raw_text.split():
        value = _parse_token(token)
        if math.isnan(value):
            logger.debug(f"Skipping non-numeric token: {token!r}")
            continue
        if math.isinf(value):
            logger.warning(f"⚠️  Token {token!r} parsed as an infinite volume")
        volumes.append(value)

    return volumes


def parse_series(anchor_year: int, raw_text: str) -> ObservationSeries:
    """
    Build an oldest-first observation series from newest-first raw input

    Args:
        anchor_year: Year of the first (most recent) value in ``raw_text``
        raw_text: Whitespace-separated volumes, newest first

    Returns:
        Tuple of observations sorted by year, with year-over-year growth rates.
        Empty when the input holds no numeric tokens.

    Examples:
        >>> [(o.year, o.volume) for o in parse_series(2024, "5000 4800")]
        [(2023, 4800.0), (2024, 5000.0)]
    """
    if isinstance(anchor_year, bool) or not isinstance(anchor_year, numbers.Integral):
        raise TypeError(f"anchor_year must be an integer, got {type(anchor_year).__name__}")

    volumes = parse_volumes(raw_text)
    if not volumes:
        return ()

    dated = sorted(
        ((int(anchor_year) - i, volume) for i, volume in enumerate(volumes)),
        key=lambda item: item[0]
    )

    series = []
    for i, (year, volume) in enumerate(dated):
        growth_rate = 0.0
        if i > 0:
            previous = dated[i - 1][1]
            if previous != 0:
                growth_rate = (volume - previous) / previous * 100
        series.append(Observation(year=year, volume=volume, growth_rate=growth_rate))

    logger.debug(f"Parsed {len(series)} observations ({series[0].year}-{series[-1].year})")

    return tuple(series)


def series_to_frame(series: ObservationSeries) -> pd.DataFrame:
    """
    Convert an observation series to a DataFrame

    Returns:
        DataFrame with columns [year, volume, growth_rate]
    """
    return pd.DataFrame(
        [(o.year, o.volume, o.growth_rate) for o in series],
        columns=['year', 'volume', 'growth_rate']
    )
