"""Data quality checks for observation series"""

import math
from typing import Dict, Optional, Sequence

from traffic_trends.data.series import Observation
from traffic_trends.utils.logging_config import get_logger


logger = get_logger(__name__)


class SeriesValidator:
    """
    Validate an observation series before modelling

    Checks are advisory: nothing is removed or rejected, the report only
    tells the caller which models can be expected to fit.

    Performs checks on:
    - Number of observations
    - Negative and zero volumes
    - Year continuity (one observation per consecutive year)
    """

    def __init__(self, config: Optional[dict] = None):
        """
        Initialize validator

        Args:
            config: Validation settings (``min_points``)
        """
        self.config = config if config else {}
        self.min_points = int(self.config.get('min_points', 2))
        self.validation_results = {}

    def validate(self, series: Sequence[Observation]) -> Dict:
        """
        Run all checks on a series

        Args:
            series: Oldest-first observation series

        Returns:
            Validation report dict with overall ``status`` of
            'pass', 'warning' or 'fail'
        """
        logger.info(f"Validating series of {len(series)} observations...")

        volumes = [o.volume for o in series]
        years = [o.year for o in series]

        negative = [o.year for o in series if o.volume < 0]
        zero = [o.year for o in series if o.volume == 0]
        infinite = [o.year for o in series if math.isinf(o.volume)]
        gaps = [
            (prev, curr) for prev, curr in zip(years, years[1:])
            if curr - prev != 1
        ]

        report = {
            'status': 'pass',
            'n_points': len(series),
            'year_range': (years[0], years[-1]) if years else None,
            'negative_years': negative,
            'zero_years': zero,
            'infinite_years': infinite,
            'year_gaps': gaps,
            'min_volume': min(volumes) if volumes else None,
            'max_volume': max(volumes) if volumes else None,
            'exponential_feasible': (
                len(series) >= self.min_points and not negative and not zero and not infinite
            )
        }

        if len(series) < self.min_points:
            report['status'] = 'fail'
            logger.error(
                f"❌ Insufficient data: {len(series)} observations "
                f"(need at least {self.min_points})"
            )
        else:
            logger.info(f"✅ {len(series)} observations ({years[0]}-{years[-1]})")

        if negative:
            self._warn(report, f"⚠️  Negative volumes in years: {negative}")

        if zero:
            self._warn(report, f"⚠️  Zero volumes in years: {zero} (exponential model unavailable)")

        if infinite:
            self._warn(report, f"⚠️  Infinite volumes in years: {infinite} (model parameters will be NaN)")

        if gaps:
            self._warn(report, f"⚠️  Non-consecutive years: {gaps}")

        self.validation_results['series'] = report
        return report

    def _warn(self, report: Dict, message: str):
        """Log a warning and downgrade a passing report"""
        logger.warning(message)
        if report['status'] == 'pass':
            report['status'] = 'warning'
