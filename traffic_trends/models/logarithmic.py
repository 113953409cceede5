"""Logarithmic trend model: y = a + b·ln(x)"""

from typing import Sequence, Tuple

import numpy as np

from traffic_trends.data.series import Observation
from traffic_trends.models.base import BaseTrendModel, ModelType, RegressionResult


class LogarithmicTrendModel(BaseTrendModel):
    """
    Decelerating growth

    x is the calendar year itself, always positive, so ln(x) needs no guard.
    """

    model_type = ModelType.LOGARITHMIC

    def transform_x(self, x: np.ndarray) -> np.ndarray:
        return np.log(x)

    def to_params(self, slope: float, intercept: float) -> Tuple[float, float]:
        return intercept, slope

    def format_formula(self, a: float, b: float) -> str:
        return f"y = {a:.2f} + {b:.2f} * ln(x)"


def fit_logarithmic(series: Sequence[Observation]) -> RegressionResult:
    """Fit a logarithmic trend to an oldest-first series"""
    return LogarithmicTrendModel().fit(series)
