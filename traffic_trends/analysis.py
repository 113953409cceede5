"""Trend analysis orchestration

TrendAnalysis holds the state of one analysis session (station, series,
model results) and rebuilds all of it on every ``run``. The parsing and
fitting it delegates to are pure functions.
"""

from typing import Dict, Optional, Sequence

import pandas as pd

from traffic_trends.data import Direction, SeriesValidator, StationInfo, parse_series, series_to_frame
from traffic_trends.data.series import Observation, ObservationSeries
from traffic_trends.models import MODEL_REGISTRY, RegressionResult, get_model
from traffic_trends.utils.config import ConfigLoader
from traffic_trends.utils.logging_config import get_logger


logger = get_logger(__name__)


def fit_all(series: Sequence[Observation]) -> Dict[str, RegressionResult]:
    """
    Fit every registered model family to the same series

    Returns:
        Dict of registry name -> RegressionResult
    """
    return {name: get_model(name).fit(series) for name in MODEL_REGISTRY}


def classify_fit_quality(r2: float, good: float = 0.8, fair: float = 0.5) -> str:
    """Label an R² value as 'good', 'fair' or 'poor'"""
    if r2 >= good:
        return 'good'
    if r2 >= fair:
        return 'fair'
    return 'poor'


def default_station(config: ConfigLoader) -> StationInfo:
    """Station metadata from the ``station`` config section"""
    return StationInfo(
        road=config.get('station.road', ''),
        section=config.get('station.section', ''),
        station=config.get('station.station', ''),
        km=config.get('station.km', ''),
        direction=Direction(config.get('station.direction', 'S1'))
    )


class TrendAnalysis:
    """
    One traffic-volume growth analysis

    Steps of ``run``:
    1. Parse raw volumes into an oldest-first series
    2. Validate the series (advisory)
    3. Fit linear, exponential and logarithmic models
    """

    def __init__(
        self,
        config: Optional[ConfigLoader] = None,
        station: Optional[StationInfo] = None
    ):
        """
        Initialize analysis session

        Args:
            config: Configuration loader (defaults to config/config.yaml)
            station: Station metadata (defaults to the configured station)
        """
        self.config = config if config else ConfigLoader()
        self.station = station if station else default_station(self.config)

        self.good_threshold = float(self.config.get('analysis.fit_quality.good', 0.8))
        self.fair_threshold = float(self.config.get('analysis.fit_quality.fair', 0.5))
        self.projection_horizon = int(self.config.get('analysis.projection_horizon', 10))

        self.validator = SeriesValidator({
            'min_points': self.config.get('analysis.min_points', 2)
        })

        self.anchor_year: Optional[int] = None
        self.series: ObservationSeries = ()
        self.results: Dict[str, RegressionResult] = {}
        self.validation_report: Dict = {}

    def run(self, anchor_year: int, raw_text: str) -> Dict[str, RegressionResult]:
        """
        Run the complete analysis for a new input

        Args:
            anchor_year: Year of the first (most recent) value
            raw_text: Whitespace-separated volumes, newest first

        Returns:
            Dict of model name -> RegressionResult
        """
        logger.info(f"Analysing {self.station.road or 'station'} {self.station.station} (latest year {anchor_year})")

        self.anchor_year = anchor_year
        self.series = parse_series(anchor_year, raw_text)

        if not self.series:
            logger.warning("⚠️  No valid volumes in input")

        self.validation_report = self.validator.validate(self.series)
        self.results = fit_all(self.series)

        for name, result in self.results.items():
            if result.is_fitted:
                logger.info(
                    f"  {result.model.value}: R²={result.r_squared:.4f}, "
                    f"growth={result.growth_rate:.2f}%"
                )
            else:
                logger.info(f"  {result.model.value}: not fitted ({result.status.value})")

        return self.results

    def fit_quality(self, result: RegressionResult) -> str:
        """Quality label for a result ('n/a' when not fitted)"""
        if not result.is_fitted:
            return 'n/a'
        return classify_fit_quality(result.r_squared, self.good_threshold, self.fair_threshold)

    def best_model(self) -> Optional[RegressionResult]:
        """
        Fitted result with the highest R²

        Returns:
            Best RegressionResult, or None when no model could be fitted
        """
        fitted = [r for r in self.results.values() if r.is_fitted]
        if not fitted:
            return None
        return max(fitted, key=lambda r: r.r_squared)

    def summary(self) -> pd.DataFrame:
        """
        One row per model

        Returns:
            DataFrame with columns [model, status, formula, r_squared,
            growth_rate, quality, is_best]
        """
        best = self.best_model()
        rows = []
        for result in self.results.values():
            rows.append({
                'model': result.model.value,
                'status': result.status.value,
                'formula': result.formula,
                'r_squared': result.r_squared,
                'growth_rate': result.growth_rate,
                'quality': self.fit_quality(result),
                'is_best': best is not None and result.model == best.model
            })

        return pd.DataFrame(
            rows,
            columns=['model', 'status', 'formula', 'r_squared', 'growth_rate', 'quality', 'is_best']
        )

    def series_frame(self) -> pd.DataFrame:
        """Current series as a DataFrame"""
        return series_to_frame(self.series)

    def project(self, horizon: Optional[int] = None) -> pd.DataFrame:
        """
        Extrapolate every fitted model past the last observed year

        Args:
            horizon: Number of years to project (defaults to config)

        Returns:
            DataFrame with a 'year' column and one column per fitted model
        """
        horizon = self.projection_horizon if horizon is None else horizon

        if not self.series or horizon <= 0:
            return pd.DataFrame(columns=['year'])

        last_year = self.series[-1].year
        df = pd.DataFrame({'year': range(last_year + 1, last_year + horizon + 1)})

        for name, result in self.results.items():
            if result.is_fitted:
                df[name] = [result.predict(year) for year in df['year']]

        logger.debug(f"Projected {horizon} years after {last_year}")

        return df

    def __repr__(self) -> str:
        return f"TrendAnalysis(station='{self.station.station}', n_points={len(self.series)})"
