"""
Traffic Trends

Growth-trend analysis for annual traffic-volume counts (TDPA).
Fits linear, exponential and logarithmic models to a short yearly series
and reports fit quality and annualized growth rates.
"""

from .data.series import Observation, StationInfo, Direction, parse_series
from .models import fit_linear, fit_exponential, fit_logarithmic
from .analysis import TrendAnalysis

__version__ = "1.0.0"
__author__ = "Traffic Trends Team"

__all__ = [
    'Observation',
    'StationInfo',
    'Direction',
    'parse_series',
    'fit_linear',
    'fit_exponential',
    'fit_logarithmic',
    'TrendAnalysis'
]
