"""Trend models"""

from .base import (
    BaseTrendModel,
    FitStatus,
    FittedPoint,
    ModelType,
    Params,
    RegressionResult,
    annualized_growth_rate,
    least_squares,
    r_squared
)
from .linear import LinearTrendModel, fit_linear
from .exponential import ExponentialTrendModel, fit_exponential
from .logarithmic import LogarithmicTrendModel, fit_logarithmic


MODEL_REGISTRY = {
    'linear': LinearTrendModel,
    'exponential': ExponentialTrendModel,
    'logarithmic': LogarithmicTrendModel
}


def get_model(name: str) -> BaseTrendModel:
    """
    Create a trend model by registry name

    Args:
        name: 'linear', 'exponential' or 'logarithmic'

    Returns:
        Model instance
    """
    key = name.lower()
    if key not in MODEL_REGISTRY:
        raise ValueError(f"Unknown model: {name}. Available: {list(MODEL_REGISTRY)}")
    return MODEL_REGISTRY[key]()


__all__ = [
    'BaseTrendModel',
    'FitStatus',
    'FittedPoint',
    'ModelType',
    'Params',
    'RegressionResult',
    'annualized_growth_rate',
    'least_squares',
    'r_squared',
    'LinearTrendModel',
    'ExponentialTrendModel',
    'LogarithmicTrendModel',
    'fit_linear',
    'fit_exponential',
    'fit_logarithmic',
    'MODEL_REGISTRY',
    'get_model'
]
