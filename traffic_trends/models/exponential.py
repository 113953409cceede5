"""Exponential trend model: y = A·e^(B·x)"""

from typing import Optional, Sequence, Tuple

import numpy as np

from traffic_trends.data.series import Observation
from traffic_trends.models.base import BaseTrendModel, ModelType, RegressionResult


class ExponentialTrendModel(BaseTrendModel):
    """
    Constant relative growth

    Linearized as ln(y) = ln(A) + B·x. Every volume must be strictly
    positive; a single zero or negative value means no fit at all.

    With calendar years as x, A is far outside float range for steep
    series, so predictions use ln(A) from the fitted line and A itself is
    only shown in the formula.
    """

    model_type = ModelType.EXPONENTIAL

    def check_domain(self, x: np.ndarray, y: np.ndarray) -> Optional[str]:
        if np.any(y <= 0):
            return f"{int(np.sum(y <= 0))} non-positive volume(s), ln(y) undefined"
        return None

    def transform_y(self, y: np.ndarray) -> np.ndarray:
        return np.log(y)

    def to_params(self, slope: float, intercept: float) -> Tuple[float, float]:
        with np.errstate(over='ignore', under='ignore'):
            return float(np.exp(intercept)), slope

    def format_formula(self, a: float, b: float) -> str:
        return f"y = {a:.4e} * e^({b:.5f}x)"

    def growth_rate(self, slope: float, intercept: float, x: np.ndarray) -> float:
        # Same relative growth every year
        return float((np.exp(slope) - 1) * 100)


def fit_exponential(series: Sequence[Observation]) -> RegressionResult:
    """Fit an exponential trend to an oldest-first series"""
    return ExponentialTrendModel().fit(series)
