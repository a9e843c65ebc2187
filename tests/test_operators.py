"""Tests for the matrix-free operator wrapper."""

import numpy as np
import pytest
from scipy.sparse.linalg import eigsh

from symop.algebra.dense import SymmetricDenseOperator, Uplo
from symop.algebra.operators import MatrixFreeOperator
from symop.algebra.protocols import MatrixOperator


class DiagonalOperator:
    """Diagonal matrix satisfying the operator protocol."""

    def __init__(self, d):
        self.d = np.asarray(d, dtype=float)

    def rows(self):
        return self.d.size

    def cols(self):
        return self.d.size

    def perform_op(self, x, y):
        np.multiply(self.d, x, out=y)


class ShiftOperator:
    """Non-symmetric cyclic shift: (A x)[i] = x[i - 1]."""

    def __init__(self, n):
        self.n = n

    def rows(self):
        return self.n

    def cols(self):
        return self.n

    def perform_op(self, x, y):
        y[:] = np.roll(x, 1)


def laplacian_1d(n):
    """Lower triangle of the 1-D Laplacian; the upper triangle is zero."""
    return 2.0 * np.eye(n) - np.eye(n, k=-1)


def test_custom_operator_satisfies_protocol():
    assert isinstance(DiagonalOperator([1.0, 2.0]), MatrixOperator)


def test_matvec():
    A = np.array([[4.0, 1.0], [1.0, 3.0]])
    wrapper = MatrixFreeOperator(SymmetricDenseOperator(A))

    assert wrapper.shape == (2, 2)
    assert wrapper.dtype == np.float64
    assert np.allclose(wrapper.matvec([1.0, 2.0]), [6.0, 7.0])


def test_matmul_vector_and_matrix():
    A = laplacian_1d(5)
    full = 2.0 * np.eye(5) - np.eye(5, k=-1) - np.eye(5, k=1)
    wrapper = MatrixFreeOperator(SymmetricDenseOperator(A))
    X = np.random.randn(5, 3)

    assert np.allclose(wrapper @ X[:, 0], full @ X[:, 0])
    assert np.allclose(wrapper @ X, full @ X)


def test_matmul_rejects_higher_rank():
    wrapper = MatrixFreeOperator(SymmetricDenseOperator(np.eye(2)))

    with pytest.raises(ValueError):
        wrapper @ np.ones((2, 2, 2))


def test_rmatvec_symmetric():
    A = laplacian_1d(4)
    wrapper = MatrixFreeOperator(SymmetricDenseOperator(A))
    x = np.arange(4.0)

    assert wrapper.symmetric
    assert np.allclose(wrapper.rmatvec(x), wrapper.matvec(x))


def test_rmatvec_not_provided():
    wrapper = MatrixFreeOperator(ShiftOperator(3))

    assert np.allclose(wrapper.matvec([1.0, 2.0, 3.0]), [3.0, 1.0, 2.0])
    with pytest.raises(NotImplementedError):
        wrapper.rmatvec(np.ones(3))


def test_dtype_follows_operator():
    A = np.eye(3, dtype=np.float32)
    wrapper = MatrixFreeOperator(SymmetricDenseOperator(A))

    assert wrapper.dtype == np.float32
    assert wrapper.matvec(np.ones(3)).dtype == np.float32


def test_dtype_default_for_custom_operator():
    wrapper = MatrixFreeOperator(DiagonalOperator([1.0, 2.0, 3.0]), symmetric=True)

    assert wrapper.dtype == np.float64
    assert np.allclose(wrapper @ np.ones(3), [1.0, 2.0, 3.0])


def test_scipy_linear_operator():
    A = laplacian_1d(6)
    full = 2.0 * np.eye(6) - np.eye(6, k=-1) - np.eye(6, k=1)
    linop = MatrixFreeOperator(SymmetricDenseOperator(A)).to_scipy()
    x = np.random.randn(6)

    assert linop.shape == (6, 6)
    assert np.allclose(linop.matvec(x), full @ x)
    assert np.allclose(linop.rmatvec(x), full @ x)


@pytest.mark.parametrize("uplo", [Uplo.LOWER, Uplo.UPPER])
def test_eigsh_matches_dense_eigenvalues(uplo):
    """Lanczos on the operator recovers the dense spectrum."""
    n, k = 40, 4
    rng = np.random.default_rng(0)
    M = rng.standard_normal((n, n))
    A = M + M.T
    stored = np.tril(A) if uplo is Uplo.LOWER else np.triu(A)

    op = SymmetricDenseOperator(stored, uplo=uplo)
    vals = eigsh(MatrixFreeOperator(op).to_scipy(), k=k, which="LA",
                 return_eigenvectors=False)

    expected = np.linalg.eigvalsh(A)[-k:]
    assert np.allclose(np.sort(vals), expected, atol=1e-8)
