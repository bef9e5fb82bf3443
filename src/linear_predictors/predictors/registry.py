"""Registry mapping archive type names to predictor factories."""

from __future__ import annotations

from typing import Callable, Dict

from linear_predictors.predictors.base import Predictor
from linear_predictors.predictors.linear import LinearPredictor
from linear_predictors.utils.archive import ArchiveError, Unarchiver
from linear_predictors.utils.logging import get_logger

logger = get_logger(__name__)


class PredictorRegistry:
    """Pluggable registry for predictor factories keyed by runtime type name."""

    def __init__(self) -> None:
        self._registry: Dict[str, Callable[..., Predictor]] = {}

    def register(self, type_name: str, factory: Callable[..., Predictor]) -> None:
        if type_name in self._registry:
            raise ValueError(f"Predictor '{type_name}' already registered")
        self._registry[type_name] = factory
        logger.debug("Registered predictor type '%s'", type_name)

    def __contains__(self, type_name: str) -> bool:
        return type_name in self._registry

    def create(self, type_name: str, **kwargs) -> Predictor:
        if type_name not in self._registry:
            raise ValueError(f"Unknown predictor '{type_name}'")
        return self._registry[type_name](**kwargs)

    def read(self, unarchiver: Unarchiver) -> Predictor:
        """Create a default instance of the archived type and load its state."""
        type_name = unarchiver.type_name
        if type_name not in self._registry:
            raise ArchiveError(f"Unknown predictor type '{type_name}' in archive")
        predictor = self._registry[type_name]()
        predictor.read_from_archive(unarchiver)
        return predictor


def default_registry() -> PredictorRegistry:
    registry = PredictorRegistry()
    registry.register(LinearPredictor.get_type_name(), LinearPredictor)
    return registry
