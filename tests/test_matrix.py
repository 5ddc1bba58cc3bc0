"""
Sparse matrix / vector helper tests: arith/matrix.py
"""
import pytest

from arith.errors import DimensionError, DomainError, ModulusMismatchError
from arith.field import FR
from arith.matrix import (
    SparseMatrix,
    hadamard,
    is_zero_vector,
    nonzero_positions,
    ones,
    vector_add,
    vector_scale,
    zeros,
)


class TestSparseMatrix:
    def test_from_dense(self):
        M = SparseMatrix.from_dense([[1, 0, 2], [0, 0, 3]])
        assert M.shape == (2, 3)
        assert M.nnz == 3
        assert M.get(0, 2) == FR(2)
        assert M.get(1, 0) == FR(0)
        assert M.field is FR

    def test_to_dense_roundtrip(self):
        dense = [[1, 0], [0, 5], [7, 0]]
        assert SparseMatrix.from_dense(dense).to_dense() == [[FR(v) for v in row] for row in dense]

    def test_jagged_rows_rejected(self):
        """길이가 다른 행은 조용히 받아들이지 않는다."""
        with pytest.raises(DimensionError) as exc:
            SparseMatrix.from_dense([[1, 0], [1]])
        assert exc.value.name == "row[1]"
        assert exc.value.expected == 2
        assert exc.value.actual == 1

    def test_empty(self):
        M = SparseMatrix.from_dense([], cols=3)
        assert M.shape == (0, 3)
        assert M.mul_vector([FR(1), FR(2), FR(3)]) == []

    def test_entries_out_of_range(self):
        with pytest.raises(DomainError):
            SparseMatrix(2, 2, [(2, 0, 1)])

    def test_negative_shape(self):
        with pytest.raises(DimensionError):
            SparseMatrix(-1, 2)

    def test_duplicate_entries_summed(self, F5):
        M = SparseMatrix(1, 2, [(0, 0, 2), (0, 0, 3), (0, 1, 1), (0, 1, 1)], F5)
        # 2 + 3 = 5 = 0 (mod 5) 이므로 저장되지 않는다
        assert M.nnz == 1
        assert list(M.entries()) == [(0, 1, F5(2))]

    def test_mul_vector(self):
        M = SparseMatrix.from_dense([[1, 0], [0, 2], [3, 4]])
        assert M.mul_vector([FR(3), FR(4)]) == [FR(3), FR(8), FR(25)]

    def test_mul_vector_length_mismatch(self):
        M = SparseMatrix.from_dense([[1, 0], [0, 2]])
        with pytest.raises(DimensionError) as exc:
            M.mul_vector([FR(1), FR(2), FR(3)])
        assert exc.value.name == "z"

    def test_coerce_checks_field(self, F5):
        M = SparseMatrix.from_dense([[1]], F5)
        assert SparseMatrix.coerce(M, F5) is M
        with pytest.raises(ModulusMismatchError):
            SparseMatrix.coerce(M, FR)

    def test_copy_is_equal(self):
        M = SparseMatrix.from_dense([[1, 2], [3, 4]])
        assert M.copy() == M
        assert M.copy() is not M
        assert hash(M.copy()) == hash(M)

    def test_row(self):
        M = SparseMatrix.from_dense([[0, 7, 0, 9]])
        assert M.row(0) == ((1, FR(7)), (3, FR(9)))


class TestVectorOps:
    def test_hadamard(self):
        assert hadamard([FR(2), FR(3)], [FR(4), FR(5)]) == [FR(8), FR(15)]

    def test_hadamard_length_mismatch(self):
        """zip처럼 잘라내지 않는다."""
        with pytest.raises(DimensionError):
            hadamard([FR(1), FR(2)], [FR(1)])

    def test_vector_add(self):
        assert vector_add([FR(1), FR(2)], [FR(3), FR(4)]) == [FR(4), FR(6)]
        with pytest.raises(DimensionError):
            vector_add([FR(1)], [])

    def test_vector_scale(self):
        assert vector_scale([FR(1), FR(2)], FR(3)) == [FR(3), FR(6)]

    def test_ones_zeros(self, F5):
        assert ones(3, F5) == [F5(1)] * 3
        assert is_zero_vector(zeros(4, F5))
        assert not is_zero_vector(ones(1))

    def test_nonzero_positions(self):
        assert nonzero_positions([FR(0), FR(2), FR(0), FR(1)]) == [1, 3]
