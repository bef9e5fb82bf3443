from .logging import configure_logging, get_logger, predictor_fields
from .archive import ArchiveError, Archiver, Unarchiver

__all__ = [
    "ArchiveError",
    "Archiver",
    "Unarchiver",
    "configure_logging",
    "get_logger",
    "predictor_fields",
]
