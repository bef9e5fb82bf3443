from linear_predictors.config.models import ARCHIVE_PATH_ENV_VAR, PredictorConfig

__all__ = ["ARCHIVE_PATH_ENV_VAR", "PredictorConfig"]
