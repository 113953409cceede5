"""Shared regression machinery for all trend models

Every model is an ordinary least squares fit of a straight line after
transforming x and/or y:

    linear       (x,     y)
    exponential  (x,     ln y)
    logarithmic  (ln x,  y)

``least_squares`` and ``r_squared`` are the single implementations used
by all three.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from traffic_trends.data.series import Observation
from traffic_trends.utils.logging_config import get_logger


logger = get_logger(__name__)

EMPTY_FORMULA = 'N/A'


class ModelType(str, Enum):
    """Supported trend model families"""
    LINEAR = 'Linear'
    EXPONENTIAL = 'Exponential'
    LOGARITHMIC = 'Logarithmic'


class FitStatus(str, Enum):
    """Outcome of a fit attempt"""
    OK = 'ok'
    INSUFFICIENT_DATA = 'insufficient_data'   # fewer than 2 observations
    DOMAIN_VIOLATION = 'domain_violation'     # e.g. volume <= 0 for ln(y)
    DEGENERATE = 'degenerate'                 # zero OLS denominator


# y as a function of x for each family, in terms of the OLS line
# (slope, intercept) fitted to the transformed data. The exponential curve
# stays in log space so steep series don't overflow e^(B·x).
_CURVES = {
    ModelType.LINEAR: lambda slope, intercept, x: intercept + slope * x,
    ModelType.EXPONENTIAL: lambda slope, intercept, x: np.exp(intercept + slope * x),
    ModelType.LOGARITHMIC: lambda slope, intercept, x: intercept + slope * np.log(x),
}


@dataclass(frozen=True)
class FittedPoint:
    """Observed and predicted volume for one year"""
    x: int
    y_actual: float
    y_predicted: float


@dataclass(frozen=True)
class Params:
    """
    Model parameters as shown in the formula

    linear a = intercept, b = slope; exponential a = A, b = B;
    logarithmic a, b. Supports ``params['a']`` lookups.
    """
    a: float = 0.0
    b: float = 0.0

    def __getitem__(self, key: str) -> float:
        if key not in ('a', 'b'):
            raise KeyError(key)
        return getattr(self, key)

    def to_dict(self) -> Dict[str, float]:
        return {'a': self.a, 'b': self.b}


@dataclass(frozen=True)
class RegressionResult:
    """
    Result of fitting one model family to a series

    A failed fit keeps the classic empty shape (formula 'N/A', zero metrics,
    no points, zero params) and carries the reason in ``status``.
    Check ``is_fitted`` rather than comparing fields to zero.

    ``line`` is the (slope, intercept) of the least squares line on the
    transformed data; predictions are computed from it, ``params`` is for display.
    """
    model: ModelType
    formula: str = EMPTY_FORMULA
    r_squared: float = 0.0
    growth_rate: float = 0.0
    points: Tuple[FittedPoint, ...] = ()
    params: Params = Params()
    status: FitStatus = FitStatus.OK
    line: Tuple[float, float] = (0.0, 0.0)

    @classmethod
    def empty(cls, model: ModelType, status: FitStatus) -> 'RegressionResult':
        """Sentinel result for a model that could not be fitted"""
        return cls(model=model, status=status)

    @property
    def is_fitted(self) -> bool:
        return self.status == FitStatus.OK

    def predict(self, year: float) -> float:
        """
        Evaluate the fitted curve at any year, including outside the observed range

        Args:
            year: Calendar year

        Returns:
            Predicted volume
        """
        if not self.is_fitted:
            raise ValueError(
                f"{self.model.value} model was not fitted ({self.status.value}); "
                f"cannot make predictions"
            )

        slope, intercept = self.line
        return float(_CURVES[self.model](slope, intercept, float(year)))

    def to_frame(self) -> pd.DataFrame:
        """
        Fitted points as a DataFrame

        Returns:
            DataFrame with columns [year, actual, predicted, residual]
        """
        df = pd.DataFrame(
            [(p.x, p.y_actual, p.y_predicted) for p in self.points],
            columns=['year', 'actual', 'predicted']
        )
        df['residual'] = df['actual'] - df['predicted']
        return df

    def to_dict(self) -> Dict:
        """Plain-dict view, suitable for JSON"""
        return {
            'model': self.model.value,
            'status': self.status.value,
            'formula': self.formula,
            'r_squared': self.r_squared,
            'growth_rate': self.growth_rate,
            'params': self.params.to_dict(),
            'points': [
                {'x': p.x, 'y_actual': p.y_actual, 'y_predicted': p.y_predicted}
                for p in self.points
            ]
        }


def r_squared(actual: Sequence[float], predicted: Sequence[float]) -> float:
    """
    Coefficient of determination, 1 - SS_res / SS_tot

    Returns 0 when all actual values are identical (SS_tot == 0) instead of
    a non-finite value. Can be negative for a fit worse than the mean.
    """
    actual = np.asarray(actual, dtype=float)
    predicted = np.asarray(predicted, dtype=float)

    if len(actual) == 0 or np.all(actual == actual[0]):
        return 0.0

    ss_tot = np.sum((actual - np.mean(actual)) ** 2)
    ss_res = np.sum((actual - predicted) ** 2)

    if ss_tot == 0:
        return 0.0

    return float(1 - ss_res / ss_tot)


def least_squares(x: Sequence[float], y: Sequence[float]) -> Optional[Tuple[float, float]]:
    """
    Closed-form simple linear regression of y on x

    Returns:
        (slope, intercept), or None when the denominator
        n·Σx² − (Σx)² is exactly zero (all x identical)
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    n = len(x)

    sum_x = np.sum(x)
    sum_y = np.sum(y)
    sum_xy = np.sum(x * y)
    sum_xx = np.sum(x * x)

    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0:
        return None

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n

    return float(slope), float(intercept)


def annualized_growth_rate(start_value: float, end_value: float, years: float) -> float:
    """
    Geometric mean yearly growth between two trend values, in percent

    Returns 0 unless ``years`` > 0 and both values are strictly positive.
    """
    if years > 0 and start_value > 0 and end_value > 0:
        return (math.pow(end_value / start_value, 1 / years) - 1) * 100
    return 0.0


class BaseTrendModel(ABC):
    """
    Abstract base class for trend models

    A model is stateless: ``fit`` takes a series and returns a new
    RegressionResult without touching the input. Subclasses define the
    transforms, the parameter mapping and the formula text.
    """

    model_type: ModelType

    def __init__(self):
        self.model_name = self.model_type.value

    def fit(self, series: Sequence[Observation]) -> RegressionResult:
        """
        Fit the model to an oldest-first observation series

        Args:
            series: Observations (at least 2 for a fit)

        Returns:
            RegressionResult; ``status`` tells whether the fit succeeded
        """
        n = len(series)
        if n < 2:
            return self._fail(FitStatus.INSUFFICIENT_DATA, f"{n} observation(s), need at least 2")

        x = np.array([o.year for o in series], dtype=float)
        y = np.array([o.volume for o in series], dtype=float)

        problem = self.check_domain(x, y)
        if problem:
            return self._fail(FitStatus.DOMAIN_VIOLATION, problem)

        coefficients = least_squares(self.transform_x(x), self.transform_y(y))
        if coefficients is None:
            return self._fail(FitStatus.DEGENERATE, "zero denominator (all years identical)")

        slope, intercept = coefficients
        a, b = self.to_params(slope, intercept)
        y_pred = _CURVES[self.model_type](slope, intercept, x)

        result = RegressionResult(
            model=self.model_type,
            formula=self.format_formula(a, b),
            r_squared=r_squared(y, y_pred),
            growth_rate=float(self.growth_rate(slope, intercept, x)),
            points=tuple(
                FittedPoint(x=o.year, y_actual=o.volume, y_predicted=float(pred))
                for o, pred in zip(series, y_pred)
            ),
            params=Params(a=float(a), b=float(b)),
            status=FitStatus.OK,
            line=(slope, intercept)
        )

        logger.debug(
            f"✅ {self.model_name} fitted: {result.formula} "
            f"(R²={result.r_squared:.4f}, growth={result.growth_rate:.2f}%)"
        )

        return result

    def check_domain(self, x: np.ndarray, y: np.ndarray) -> Optional[str]:
        """Return a description of why the data cannot be modelled, or None"""
        return None

    def transform_x(self, x: np.ndarray) -> np.ndarray:
        return x

    def transform_y(self, y: np.ndarray) -> np.ndarray:
        return y

    @abstractmethod
    def to_params(self, slope: float, intercept: float) -> Tuple[float, float]:
        """Map the OLS line of the transformed data to model params (a, b)"""
        pass

    @abstractmethod
    def format_formula(self, a: float, b: float) -> str:
        pass

    def growth_rate(self, slope: float, intercept: float, x: np.ndarray) -> float:
        """
        Annualized growth rate from the trend's first and last predicted values

        Args:
            slope, intercept: Least squares line on the transformed data
            x: Observed years, oldest first

        Returns:
            Growth rate in percent (0 when the endpoints are not both positive)
        """
        curve = _CURVES[self.model_type]
        start_value = float(curve(slope, intercept, x[0]))
        end_value = float(curve(slope, intercept, x[-1]))
        return annualized_growth_rate(start_value, end_value, float(x[-1] - x[0]))

    def _fail(self, status: FitStatus, reason: str) -> RegressionResult:
        logger.debug(f"{self.model_name} not fitted ({status.value}): {reason}")
        return RegressionResult.empty(self.model_type, status)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(model_name='{self.model_name}')"
