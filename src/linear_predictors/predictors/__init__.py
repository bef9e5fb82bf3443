from linear_predictors.predictors.base import Predictor
from linear_predictors.predictors.linear import LinearPredictor
from linear_predictors.predictors.registry import PredictorRegistry, default_registry

__all__ = [
    "LinearPredictor",
    "Predictor",
    "PredictorRegistry",
    "default_registry",
]
