#!/usr/bin/env python3
"""
Score feature vectors with a linear predictor.

Usage:
  pip install -e .
  python scripts/score_features.py --config config/predictor.yaml --features features.jsonl

Each line of the features file is a JSON object mapping feature index to value,
e.g. {"1": 1.0, "7": 0.25}.
"""

import argparse
import json
from pathlib import Path

from linear_predictors.config import PredictorConfig
from linear_predictors.utils import configure_logging, get_logger


def main() -> None:
    parser = argparse.ArgumentParser(description="Score feature vectors with a linear predictor")
    parser.add_argument("--config", type=Path, required=True, help="Predictor config (JSON or YAML)")
    parser.add_argument("--features", type=Path, required=True, help="JSON-lines file of feature vectors")
    parser.add_argument(
        "--explain",
        action="store_true",
        help="Also print the per-feature weighted contributions",
    )
    args = parser.parse_args()

    cfg = PredictorConfig.from_file(args.config)
    configure_logging(cfg.log_level)
    logger = get_logger("score_features")
    predictor = cfg.build()
    logger.info(f"Loaded {predictor!r}")

    with args.features.open() as handle:
        for line_no, line in enumerate(handle, start=1):
            line = line.strip()
            if not line:
                continue
            features = {int(k): float(v) for k, v in json.loads(line).items()}
            result = {"line": line_no, "score": predictor.predict(features)}
            if args.explain:
                contributions = predictor.get_weighted_elements(features)
                result["contributions"] = {str(i): v for i, v in contributions.iter_nonzero()}
            print(json.dumps(result))


if __name__ == "__main__":
    main()
