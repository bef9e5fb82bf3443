"""Abstract predictor interface."""

from abc import ABC, abstractmethod

from linear_predictors.data.vectors import DataVector
from linear_predictors.utils.archive import Archiver, Unarchiver


class Predictor(ABC):
    """A scalar-output predictor that can be persisted as a typed archive record."""

    @abstractmethod
    def predict(self, data_vector: DataVector) -> float:
        """Return the output of the predictor for ``data_vector``."""

    @classmethod
    @abstractmethod
    def get_type_name(cls) -> str:
        """Name used to tag archive records of this type."""

    @property
    def runtime_type_name(self) -> str:
        return self.get_type_name()

    @abstractmethod
    def write_to_archive(self, archiver: Archiver) -> None:
        """Add this object's fields to ``archiver``."""

    @abstractmethod
    def read_from_archive(self, unarchiver: Unarchiver) -> None:
        """Replace this object's state with the fields held by ``unarchiver``."""
