"""Linear trend model: y = m·x + b"""

from typing import Sequence, Tuple

from traffic_trends.data.series import Observation
from traffic_trends.models.base import BaseTrendModel, ModelType, RegressionResult


class LinearTrendModel(BaseTrendModel):
    """
    Constant absolute growth

    Fits y = m·x + b over (year, volume). Params are stored as
    a = intercept b, b = slope m. The growth rate is the geometric mean
    rate between the trend line's endpoints so it compares directly with
    the exponential model's rate.
    """

    model_type = ModelType.LINEAR

    def to_params(self, slope: float, intercept: float) -> Tuple[float, float]:
        return intercept, slope

    def format_formula(self, a: float, b: float) -> str:
        sign = '+' if a >= 0 else '-'
        return f"y = {b:.2f}x {sign} {abs(a):.2f}"


def fit_linear(series: Sequence[Observation]) -> RegressionResult:
    """Fit a linear trend to an oldest-first series"""
    return LinearTrendModel().fit(series)
