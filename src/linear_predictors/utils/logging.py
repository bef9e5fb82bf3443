"""
Logging for the ``linear_predictors`` package.

Every module logs under the ``linear_predictors`` namespace, and
``configure_logging`` installs handlers on that package logger only, so an
application embedding the predictors keeps control of the root logger.
Predictor modules attach ``predictor_type`` and ``dimension`` as record extras;
the JSON formatter emits them as fields.
"""

import json
import logging
import os
import sys
from logging import Logger
from typing import Any, Dict, List, Optional

PACKAGE_LOGGER = "linear_predictors"
LOG_LEVEL_ENV_VAR = "LOG_LEVEL"
PREDICTOR_FIELDS = ("predictor_type", "dimension")

_INSTALLED_ATTR = "_linear_predictors_installed"


class JsonFormatter(logging.Formatter):
    """One JSON object per record, including predictor extras when present."""

    def format(self, record: logging.LogRecord) -> str:
        log: Dict[str, Any] = {
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "time": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%SZ"),
        }
        for field in PREDICTOR_FIELDS:
            if hasattr(record, field):
                log[field] = getattr(record, field)
        if record.exc_info:
            log["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log)


def predictor_fields(predictor_type: str, dimension: int) -> Dict[str, Any]:
    """``extra=`` mapping carrying the predictor identity onto a log record."""
    return {"predictor_type": predictor_type, "dimension": int(dimension)}


def get_logger(name: str) -> Logger:
    """Logger inside the package namespace; dotted module names already in it are kept."""
    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


def configure_logging(
    level: Optional[str] = None, json_output: bool = False, log_file: Optional[str] = None
) -> Logger:
    """
    Configure the package logger. Uses stdout by default; can additionally tee to a file.

    The level comes from ``level``, then the LOG_LEVEL environment variable, then INFO.
    Calling it again replaces the handlers installed by the previous call.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if getattr(handler, _INSTALLED_ATTR, False):
            package_logger.removeHandler(handler)
            handler.close()

    effective_level = level or os.getenv(LOG_LEVEL_ENV_VAR) or "INFO"
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    formatter: logging.Formatter
    if json_output:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s | %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _INSTALLED_ATTR, True)
        package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, effective_level.upper(), logging.INFO))
    package_logger.propagate = False
    return package_logger
