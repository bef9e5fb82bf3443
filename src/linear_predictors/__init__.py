"""
Linear predictors: sparse-aware scoring, feature vectors, and archive helpers.

Components:
- Feature vector encodings (dense, sparse, binary)
- Linear predictor with weighted-element decomposition
- Typed JSON archives and a predictor registry
- Config loading
"""

__all__ = ["config", "data", "predictors", "utils"]
