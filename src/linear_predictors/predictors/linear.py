"""Linear binary predictor: a weight vector plus a bias."""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

from linear_predictors.data.vectors import DataVector, as_data_vector
from linear_predictors.predictors.base import Predictor
from linear_predictors.utils.archive import Archiver, Unarchiver
from linear_predictors.utils.logging import get_logger, predictor_fields

logger = get_logger(__name__)


class LinearPredictor(Predictor):
    """
    Scores a feature vector as ``bias + sum(w[i] * x[i])``.

    Feature indices at or past ``dimension`` are ignored. The weight array
    returned by :attr:`weights` is the live storage: in-place edits change
    subsequent predictions. The instance does no locking; callers must not
    mutate it while other threads are predicting.
    """

    def __init__(self, dimension: int = 0) -> None:
        dimension = int(dimension)
        if dimension < 0:
            raise ValueError("Predictor dimension must be non-negative")
        self._w = np.zeros(dimension, dtype=np.float64)
        self._b = 0.0

    @classmethod
    def from_weights(
        cls, weights: Union[Sequence[float], np.ndarray], bias: float = 0.0
    ) -> "LinearPredictor":
        predictor = cls()
        predictor._w = np.array(weights, dtype=np.float64).reshape(-1)
        predictor._b = float(bias)
        return predictor

    @property
    def weights(self) -> np.ndarray:
        return self._w

    @weights.setter
    def weights(self, values: Union[Sequence[float], np.ndarray]) -> None:
        arr = np.asarray(values, dtype=np.float64).reshape(-1)
        if arr.size != self._w.size:
            raise ValueError(
                f"Weight length mismatch: expected {self._w.size}, got {arr.size}"
            )
        self._w[:] = arr

    @property
    def bias(self) -> float:
        return self._b

    @bias.setter
    def bias(self, value: float) -> None:
        self._b = float(value)

    @property
    def dimension(self) -> int:
        return int(self._w.size)

    def predict(self, data_vector: DataVector) -> float:
        return as_data_vector(data_vector).dot(self._w) + self._b

    def get_weighted_elements(self, data_vector: DataVector) -> DataVector:
        """Per-feature contributions ``w[i] * x[i]``; they sum to ``predict(x) - bias``."""
        return as_data_vector(data_vector).weighted_by(self._w)

    def scale(self, scalar: float) -> None:
        scalar = float(scalar)
        self._w *= scalar
        self._b *= scalar
        logger.debug("Scaled linear predictor by %g", scalar, extra=self._log_fields())

    def reset(self) -> None:
        self._w.fill(0.0)
        self._b = 0.0
        logger.debug("Reset linear predictor", extra=self._log_fields())

    @classmethod
    def get_type_name(cls) -> str:
        return "LinearPredictor"

    def write_to_archive(self, archiver: Archiver) -> None:
        archiver.write("w", self._w.tolist())
        archiver.write("b", float(self._b))

    def read_from_archive(self, unarchiver: Unarchiver) -> None:
        # Read both fields before touching state so a bad record leaves it intact.
        weights = unarchiver.read_float_list("w")
        bias = unarchiver.read_float("b")
        self._w = np.array(weights, dtype=np.float64)
        self._b = bias
        logger.debug("Read linear predictor from archive", extra=self._log_fields())

    def _log_fields(self) -> dict:
        return predictor_fields(self.get_type_name(), self.dimension)

    def __repr__(self) -> str:
        return f"LinearPredictor(dimension={self.dimension}, bias={self._b!r})"
