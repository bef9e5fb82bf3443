import numpy as np
import pytest

from linear_predictors.data import (
    BinaryDataVector,
    DenseDataVector,
    SparseDataVector,
    as_data_vector,
    auto_data_vector,
)


class TestEncodings:
    """Each encoding enumerates only its non-zero entries, in index order."""

    def test_dense_skips_zeros(self) -> None:
        vec = DenseDataVector([0.0, 2.0, 0.0, -1.5])
        assert list(vec.iter_nonzero()) == [(1, 2.0), (3, -1.5)]
        assert vec.prefix_length == 4
        assert vec.num_nonzeros == 2

    def test_sparse_sorts_and_drops_explicit_zeros(self) -> None:
        vec = SparseDataVector([7, 2, 4], [1.0, 3.0, 0.0])
        assert list(vec.iter_nonzero()) == [(2, 3.0), (7, 1.0)]
        assert vec.prefix_length == 8

    def test_sparse_rejects_bad_input(self) -> None:
        with pytest.raises(ValueError):
            SparseDataVector([1, 1], [1.0, 2.0])
        with pytest.raises(ValueError):
            SparseDataVector([-1], [1.0])
        with pytest.raises(ValueError):
            SparseDataVector([0, 1], [1.0])

    def test_binary_values_are_one(self) -> None:
        vec = BinaryDataVector([5, 0, 5])
        assert list(vec) == [(0, 1.0), (5, 1.0)]
        assert vec.norm2_squared() == 2.0

    def test_empty_vectors(self) -> None:
        for vec in (DenseDataVector(), SparseDataVector(), BinaryDataVector()):
            assert list(vec.iter_nonzero()) == []
            assert vec.prefix_length == 0
            assert vec.dot(np.array([1.0, 2.0])) == 0.0

    def test_to_array_pads_and_truncates(self) -> None:
        vec = SparseDataVector([1, 4], [2.0, 3.0])
        np.testing.assert_array_equal(vec.to_array(), [0.0, 2.0, 0.0, 0.0, 3.0])
        np.testing.assert_array_equal(vec.to_array(3), [0.0, 2.0, 0.0])
        np.testing.assert_array_equal(DenseDataVector([1.0, 2.0]).to_array(4), [1.0, 2.0, 0.0, 0.0])


class TestDotAndWeighting:
    """Vectorised overrides agree with the generic iteration-based definitions."""

    weights = np.array([0.5, -1.0, 2.0, 4.0])

    @pytest.mark.parametrize(
        "vec",
        [
            DenseDataVector([1.0, 0.0, 3.0, 0.0, 0.0, 9.0]),
            SparseDataVector([0, 2, 10], [1.0, 3.0, 9.0]),
            BinaryDataVector([1, 3, 12]),
        ],
    )
    def test_matches_generic_definition(self, vec) -> None:
        generic = sum(
            self.weights[i] * v for i, v in vec.iter_nonzero() if i < len(self.weights)
        )
        assert vec.dot(self.weights) == pytest.approx(generic)
        weighted = vec.weighted_by(self.weights)
        assert sum(v for _, v in weighted.iter_nonzero()) == pytest.approx(generic)
        assert all(i < len(self.weights) for i, _ in weighted.iter_nonzero())

    def test_dense_weighting_keeps_pattern(self) -> None:
        weighted = DenseDataVector([1.0, 0.0, 3.0, 0.0, 0.0, 9.0]).weighted_by(self.weights)
        assert isinstance(weighted, DenseDataVector)
        assert list(weighted.iter_nonzero()) == [(0, 0.5), (2, 6.0)]

    def test_zero_entries_do_not_meet_infinite_weights(self) -> None:
        weights = np.array([np.inf, 1.0])
        assert DenseDataVector([0.0, 2.0]).dot(weights) == 2.0


class TestFactories:
    def test_auto_picks_binary(self) -> None:
        assert isinstance(auto_data_vector([0, 1, 0, 1]), BinaryDataVector)

    def test_auto_picks_sparse(self) -> None:
        vec = auto_data_vector([0.0] * 9 + [2.5])
        assert isinstance(vec, SparseDataVector)
        assert list(vec) == [(9, 2.5)]

    def test_auto_picks_dense(self) -> None:
        assert isinstance(auto_data_vector([1.0, 2.0, 0.0]), DenseDataVector)

    def test_as_data_vector_coercions(self) -> None:
        sparse = SparseDataVector([1], [2.0])
        assert as_data_vector(sparse) is sparse
        assert list(as_data_vector({3: 1.5, 0: 2.0})) == [(0, 2.0), (3, 1.5)]
        assert isinstance(as_data_vector([1.0, 2.0]), DenseDataVector)
        assert isinstance(as_data_vector(np.array([1.0])), DenseDataVector)
        with pytest.raises(TypeError):
            as_data_vector("1,2,3")


class TestInputValidation:
    def test_dense_rejects_nested_values(self) -> None:
        with pytest.raises(ValueError):
            DenseDataVector([[1.0, 2.0], [3.0, 4.0]])
        with pytest.raises(ValueError):
            DenseDataVector(np.ones((1, 3)))
        with pytest.raises(ValueError):
            auto_data_vector([[0.0, 1.0]])

    def test_pair_sequences_become_sparse(self) -> None:
        vec = as_data_vector([(3, 0.5), (1, 1.0)])
        assert isinstance(vec, SparseDataVector)
        assert list(vec) == [(1, 1.0), (3, 0.5)]

    @pytest.mark.parametrize("indices", [[1.9], [1.0], [True]])
    def test_non_integer_indices_rejected(self, indices) -> None:
        with pytest.raises(ValueError):
            SparseDataVector(indices, [1.0])
        with pytest.raises(ValueError):
            BinaryDataVector(indices)

    def test_non_integer_mapping_keys_rejected(self) -> None:
        with pytest.raises(ValueError):
            as_data_vector({1.9: 1.0})
        with pytest.raises(ValueError):
            as_data_vector([(0.5, 1.0)])

    def test_unsigned_indices_accepted(self) -> None:
        vec = SparseDataVector(np.array([4, 2], dtype=np.uint32), [1.0, 2.0])
        assert list(vec) == [(2, 2.0), (4, 1.0)]
