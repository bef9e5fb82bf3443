"""
Feature vector encodings consumed by predictors.

Every encoding exposes the same capability: iterate its non-zero
``(index, value)`` pairs in increasing index order. Dense, sparse and binary
encodings override ``dot`` and ``weighted_by`` with vectorised versions that
agree with the generic iteration-based definitions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Iterator, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

IndexValue = Tuple[int, float]

# Below this fraction of non-zeros the sparse encoding is more compact.
SPARSE_DENSITY_THRESHOLD = 1.0 / 3.0


def _as_indices(indices: Union[Sequence[int], np.ndarray]) -> np.ndarray:
    """Flatten ``indices`` to int64, rejecting non-integer or negative entries."""
    raw = np.asarray(indices).reshape(-1)
    if raw.size == 0:
        return np.zeros(0, dtype=np.int64)
    if raw.dtype.kind not in "iu":
        raise ValueError(f"Feature indices must be integers, got dtype {raw.dtype}")
    if raw.dtype.kind == "i" and raw.min() < 0:
        raise ValueError("Feature indices must be non-negative")
    return raw.astype(np.int64)


class DataVector(ABC):
    """Read-only real-valued vector indexed by non-negative integers."""

    @abstractmethod
    def iter_nonzero(self) -> Iterator[IndexValue]:
        """Yield (index, value) pairs for the non-zero entries."""

    @property
    @abstractmethod
    def prefix_length(self) -> int:
        """One past the largest index that may hold a non-zero."""

    @property
    def num_nonzeros(self) -> int:
        return sum(1 for _ in self.iter_nonzero())

    def dot(self, weights: np.ndarray) -> float:
        """Inner product with ``weights``; indices past its end contribute nothing."""
        size = len(weights)
        total = 0.0
        for index, value in self.iter_nonzero():
            if index < size:
                total += float(weights[index]) * value
        return total

    def weighted_by(self, weights: np.ndarray) -> DataVector:
        """Elementwise product with ``weights``, dropping indices past its end."""
        size = len(weights)
        pairs = [
            (index, float(weights[index]) * value)
            for index, value in self.iter_nonzero()
            if index < size
        ]
        return SparseDataVector.from_pairs(pairs)

    def norm2_squared(self) -> float:
        return sum(value * value for _, value in self.iter_nonzero())

    def to_array(self, size: Optional[int] = None) -> np.ndarray:
        """Dense copy of length ``size`` (defaults to ``prefix_length``)."""
        length = self.prefix_length if size is None else size
        out = np.zeros(length, dtype=np.float64)
        for index, value in self.iter_nonzero():
            if index < length:
                out[index] = value
        return out

    def __iter__(self) -> Iterator[IndexValue]:
        return self.iter_nonzero()

    def __repr__(self) -> str:
        entries = ", ".join(f"{i}:{v:g}" for i, v in self.iter_nonzero())
        return f"{type(self).__name__}({{{entries}}})"


class DenseDataVector(DataVector):
    """Stores every entry, zeros included."""

    def __init__(self, values: Union[Sequence[float], np.ndarray] = ()) -> None:
        arr = np.array(values, dtype=np.float64)
        if arr.ndim != 1:
            raise ValueError(f"Dense vector values must be one-dimensional, got shape {arr.shape}")
        self.values = arr

    @property
    def prefix_length(self) -> int:
        return int(self.values.size)

    @property
    def num_nonzeros(self) -> int:
        return int(np.count_nonzero(self.values))

    def iter_nonzero(self) -> Iterator[IndexValue]:
        for index in np.flatnonzero(self.values):
            yield int(index), float(self.values[index])

    def dot(self, weights: np.ndarray) -> float:
        # Zero entries are skipped so they never meet a non-finite weight.
        size = min(self.values.size, len(weights))
        nonzero = np.flatnonzero(self.values[:size])
        return float(np.dot(self.values[nonzero], weights[nonzero]))

    def weighted_by(self, weights: np.ndarray) -> DenseDataVector:
        size = min(self.values.size, len(weights))
        head = self.values[:size]
        out = np.zeros(size, dtype=np.float64)
        nonzero = np.flatnonzero(head)
        out[nonzero] = head[nonzero] * weights[nonzero]
        return DenseDataVector(out)

    def norm2_squared(self) -> float:
        return float(np.dot(self.values, self.values))

    def to_array(self, size: Optional[int] = None) -> np.ndarray:
        if size is None:
            return self.values.copy()
        out = np.zeros(size, dtype=np.float64)
        count = min(size, self.values.size)
        out[:count] = self.values[:count]
        return out


class SparseDataVector(DataVector):
    """Sorted index array paired with a value array; explicit zeros are dropped."""

    def __init__(
        self,
        indices: Union[Sequence[int], np.ndarray] = (),
        values: Union[Sequence[float], np.ndarray] = (),
    ) -> None:
        idx = _as_indices(indices)
        vals = np.array(values, dtype=np.float64).reshape(-1)
        if idx.size != vals.size:
            raise ValueError("Sparse vector indices and values must have the same length")
        order = np.argsort(idx, kind="stable")
        idx, vals = idx[order], vals[order]
        if idx.size > 1 and np.any(idx[1:] == idx[:-1]):
            raise ValueError("Sparse vector indices must be unique")
        keep = vals != 0.0
        self.indices = idx[keep]
        self.values = vals[keep]

    @classmethod
    def from_pairs(cls, pairs: Iterable[IndexValue]) -> SparseDataVector:
        pairs = list(pairs)
        return cls([i for i, _ in pairs], [v for _, v in pairs])

    @classmethod
    def from_mapping(cls, entries: Mapping[int, float]) -> SparseDataVector:
        return cls(list(entries.keys()), list(entries.values()))

    @property
    def prefix_length(self) -> int:
        return int(self.indices[-1]) + 1 if self.indices.size else 0

    @property
    def num_nonzeros(self) -> int:
        return int(self.indices.size)

    def iter_nonzero(self) -> Iterator[IndexValue]:
        for index, value in zip(self.indices, self.values):
            yield int(index), float(value)

    def dot(self, weights: np.ndarray) -> float:
        mask = self.indices < len(weights)
        return float(np.dot(self.values[mask], weights[self.indices[mask]]))

    def weighted_by(self, weights: np.ndarray) -> SparseDataVector:
        mask = self.indices < len(weights)
        kept = self.indices[mask]
        return SparseDataVector(kept, self.values[mask] * weights[kept])

    def norm2_squared(self) -> float:
        return float(np.dot(self.values, self.values))


class BinaryDataVector(DataVector):
    """Indicator vector: the listed indices hold 1.0, everything else 0.0."""

    def __init__(self, indices: Union[Sequence[int], np.ndarray] = ()) -> None:
        self.indices = np.unique(_as_indices(indices))

    @property
    def prefix_length(self) -> int:
        return int(self.indices[-1]) + 1 if self.indices.size else 0

    @property
    def num_nonzeros(self) -> int:
        return int(self.indices.size)

    def iter_nonzero(self) -> Iterator[IndexValue]:
        for index in self.indices:
            yield int(index), 1.0

    def dot(self, weights: np.ndarray) -> float:
        kept = self.indices[self.indices < len(weights)]
        return float(np.sum(weights[kept]))

    def weighted_by(self, weights: np.ndarray) -> SparseDataVector:
        kept = self.indices[self.indices < len(weights)]
        return SparseDataVector(kept, weights[kept])

    def norm2_squared(self) -> float:
        return float(self.indices.size)


def auto_data_vector(values: Union[Sequence[float], np.ndarray]) -> DataVector:
    """Pick the most compact encoding for a dense sequence of values."""
    arr = DenseDataVector(values).values
    nonzero = np.flatnonzero(arr)
    if nonzero.size and np.all(arr[nonzero] == 1.0):
        return BinaryDataVector(nonzero)
    if arr.size and nonzero.size < SPARSE_DENSITY_THRESHOLD * arr.size:
        return SparseDataVector(nonzero, arr[nonzero])
    return DenseDataVector(arr)


def _is_pair(item: object) -> bool:
    return isinstance(item, tuple) and len(item) == 2


def as_data_vector(obj: object) -> DataVector:
    """
    Coerce plain Python inputs into a ``DataVector``.

    Mappings (index -> value) and sequences of ``(index, value)`` tuples become
    sparse vectors; other sequences and 1-d arrays are dense values.
    """
    if isinstance(obj, DataVector):
        return obj
    if isinstance(obj, Mapping):
        return SparseDataVector.from_mapping(obj)
    if isinstance(obj, np.ndarray):
        return DenseDataVector(obj)
    if isinstance(obj, Sequence) and not isinstance(obj, (str, bytes)):
        if obj and all(_is_pair(item) for item in obj):
            return SparseDataVector.from_pairs(obj)
        return DenseDataVector(obj)
    raise TypeError(f"Cannot interpret {type(obj).__name__} as a feature vector")
