"""
JSON archive records for predictors.

An object is written as a flat record tagged with its runtime type name::

    {"_type": "LinearPredictor", "w": [1.0, 2.0], "b": 0.5}

JSON floats are emitted with ``repr`` precision, so finite values survive a
write/read cycle bit for bit.
"""

from __future__ import annotations

import json
import numbers
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Union

from linear_predictors.utils.logging import get_logger, predictor_fields

if TYPE_CHECKING:  # pragma: no cover
    from linear_predictors.predictors.base import Predictor
    from linear_predictors.predictors.registry import PredictorRegistry

logger = get_logger(__name__)

TYPE_FIELD = "_type"


class ArchiveError(ValueError):
    """Raised when a persisted record is missing fields or holds ill-typed content."""


def _is_real(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


class Archiver:
    """Collects named fields for a single typed record."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        self._fields: Dict[str, Any] = {}

    def write(self, name: str, value: Any) -> None:
        if name == TYPE_FIELD:
            raise ValueError(f"Field name '{TYPE_FIELD}' is reserved")
        self._fields[name] = value

    def to_record(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {TYPE_FIELD: self.type_name}
        record.update(self._fields)
        return record


class Unarchiver:
    """Typed read access to a record produced by :class:`Archiver`."""

    def __init__(self, record: Mapping[str, Any]) -> None:
        if not isinstance(record, Mapping):
            raise ArchiveError(f"Archive record must be an object, got {type(record).__name__}")
        self._record = record

    @property
    def type_name(self) -> str:
        type_name = self._record.get(TYPE_FIELD)
        if not isinstance(type_name, str) or not type_name:
            raise ArchiveError(f"Archive record is missing its '{TYPE_FIELD}' tag")
        return type_name

    def _get(self, name: str) -> Any:
        try:
            return self._record[name]
        except KeyError as exc:
            raise ArchiveError(f"Archive record missing required field {exc}") from exc

    @staticmethod
    def _to_float(value: Any, label: str) -> float:
        if not _is_real(value):
            raise ArchiveError(f"{label} must be a number, got {type(value).__name__}")
        try:
            return float(value)
        except OverflowError as exc:
            raise ArchiveError(f"{label} is out of range for a float") from exc

    def read_float(self, name: str) -> float:
        return self._to_float(self._get(name), f"Field '{name}'")

    def read_float_list(self, name: str) -> List[float]:
        value = self._get(name)
        if not isinstance(value, list):
            raise ArchiveError(f"Field '{name}' must be a list, got {type(value).__name__}")
        return [
            self._to_float(item, f"Field '{name}' item {position}")
            for position, item in enumerate(value)
        ]


def archive_object(obj: "Predictor") -> Dict[str, Any]:
    """Write ``obj`` into a fresh record."""
    archiver = Archiver(obj.runtime_type_name)
    obj.write_to_archive(archiver)
    return archiver.to_record()


def unarchive_object(
    record: Mapping[str, Any], registry: Optional["PredictorRegistry"] = None
) -> "Predictor":
    """Reconstruct an object from a record, dispatching on its type tag."""
    if registry is None:
        from linear_predictors.predictors.registry import default_registry

        registry = default_registry()
    return registry.read(Unarchiver(record))


def dumps(obj: "Predictor", indent: Optional[int] = None) -> str:
    return json.dumps(archive_object(obj), indent=indent)


def loads(text: str, registry: Optional["PredictorRegistry"] = None) -> "Predictor":
    try:
        record = json.loads(text)
    except ValueError as exc:
        # JSONDecodeError, and integers past the interpreter's digit limit.
        raise ArchiveError(f"Invalid archive JSON: {exc}") from exc
    return unarchive_object(record, registry)


def save(obj: "Predictor", path: Union[str, Path]) -> Path:
    """Write ``obj`` as a JSON archive file and return the resolved path."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(dumps(obj, indent=2))
    logger.info(
        "Saved %s archive to %s",
        obj.runtime_type_name,
        target,
        extra=predictor_fields(obj.runtime_type_name, getattr(obj, "dimension", 0)),
    )
    return target.resolve()


def load(path: Union[str, Path], registry: Optional["PredictorRegistry"] = None) -> "Predictor":
    source = Path(path)
    try:
        predictor = loads(source.read_text(), registry)
    except ArchiveError as exc:
        raise ArchiveError(f"{source}: {exc}") from exc
    logger.info(
        "Loaded %s archive from %s",
        predictor.runtime_type_name,
        source,
        extra=predictor_fields(predictor.runtime_type_name, getattr(predictor, "dimension", 0)),
    )
    return predictor
