"""Observation series building and validation"""

from .series import (
    Direction,
    Observation,
    StationInfo,
    parse_series,
    parse_volumes,
    series_to_frame
)
from .validators import SeriesValidator

__all__ = [
    'Direction',
    'Observation',
    'StationInfo',
    'parse_series',
    'parse_volumes',
    'series_to_frame',
    'SeriesValidator'
]
