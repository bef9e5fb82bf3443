from linear_predictors.data.vectors import (
    BinaryDataVector,
    DataVector,
    DenseDataVector,
    SparseDataVector,
    as_data_vector,
    auto_data_vector,
)

__all__ = [
    "BinaryDataVector",
    "DataVector",
    "DenseDataVector",
    "SparseDataVector",
    "as_data_vector",
    "auto_data_vector",
]
