import json
import numbers
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from linear_predictors.predictors.linear import LinearPredictor
from linear_predictors.utils import archive

ARCHIVE_PATH_ENV_VAR = "LINEAR_PREDICTOR_ARCHIVE"
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _is_real(value: object) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _read_mapping(path: Path) -> Dict:
    text = Path(path).read_text()
    if path.suffix.lower() in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML config at {path}: {exc}") from exc
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON config at {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config at {path} must be a mapping")
    return data


@dataclass
class PredictorConfig:
    dimension: int = 0
    bias: float = 0.0
    weights: Optional[List[float]] = None
    archive_path: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_file(cls, path: Path) -> "PredictorConfig":
        path = Path(path)
        data = _read_mapping(path)
        file_archive = data.get("archive_path")
        if file_archive and not Path(str(file_archive)).is_absolute():
            # Relative archive paths in the file are resolved against the file's directory.
            data = dict(data, archive_path=str((path.parent / str(file_archive)).resolve()))
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict) -> "PredictorConfig":
        dimension = data.get("dimension", 0)
        if isinstance(dimension, bool) or not isinstance(dimension, int):
            raise ValueError(f"Predictor field 'dimension' must be an integer, got {dimension!r}")
        if dimension < 0:
            raise ValueError("Predictor field 'dimension' must be non-negative")
        bias = data.get("bias", 0.0)
        if not _is_real(bias):
            raise ValueError(f"Predictor field 'bias' must be a number, got {bias!r}")
        weights: Optional[List[float]] = None
        if data.get("weights") is not None:
            raw_weights = data["weights"]
            if not isinstance(raw_weights, (list, tuple)):
                raise ValueError(
                    f"Predictor field 'weights' must be a list, got {type(raw_weights).__name__}"
                )
            for position, w in enumerate(raw_weights):
                if not _is_real(w):
                    raise ValueError(
                        f"Predictor field 'weights' item {position} must be a number, got {w!r}"
                    )
            weights = [float(w) for w in raw_weights]
            if "dimension" in data and len(weights) != dimension:
                raise ValueError(
                    f"Predictor weights length {len(weights)} does not match dimension {dimension}"
                )
            dimension = len(weights)
        log_level = str(data.get("log_level", "INFO")).upper()
        if log_level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level '{log_level}'")
        archive_path = os.getenv(ARCHIVE_PATH_ENV_VAR) or data.get("archive_path")
        return cls(
            dimension=dimension,
            bias=float(bias),
            weights=weights,
            archive_path=str(archive_path) if archive_path else None,
            log_level=log_level,
        )

    def build(self) -> LinearPredictor:
        """Load the predictor from ``archive_path`` or construct it from inline values."""
        if self.archive_path:
            predictor = archive.load(self.archive_path)
            if not isinstance(predictor, LinearPredictor):
                raise ValueError(
                    f"Archive at {self.archive_path} holds a {predictor.runtime_type_name}, "
                    "not a LinearPredictor"
                )
            return predictor
        if self.weights is not None:
            return LinearPredictor.from_weights(self.weights, self.bias)
        predictor = LinearPredictor(self.dimension)
        predictor.bias = self.bias
        return predictor
