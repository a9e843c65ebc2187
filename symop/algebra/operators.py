"""Matrix-free operator wrappers."""

from typing import Optional
import numpy as np
from numpy.typing import DTypeLike, NDArray
import scipy.sparse.linalg

from symop.algebra.dense import SymmetricDenseOperator
from symop.algebra.protocols import MatrixOperator


class MatrixFreeOperator:
    """
    Allocating wrapper around a MatrixOperator.
    Useful where callers expect ``A @ x`` instead of an output buffer.
    """

    def __init__(
        self,
        op: MatrixOperator,
        dtype: Optional[DTypeLike] = None,
        symmetric: bool = False,
    ):
        """
        Initialize the wrapper.

        Args:
            op: Operator providing rows(), cols() and perform_op(x, y)
            dtype: Scalar type of results (default: op.dtype or float64)
            symmetric: Whether A.T @ x may be computed as A @ x
        """
        if dtype is None:
            dtype = getattr(op, "dtype", np.float64)
        self.op = op
        self.shape = (op.rows(), op.cols())
        self.dtype = np.dtype(dtype)
        self.symmetric = symmetric or isinstance(op, SymmetricDenseOperator)

    def matvec(self, x: NDArray) -> NDArray:
        """Compute A @ x into a new array."""
        y = np.empty(self.shape[0], dtype=self.dtype)
        self.op.perform_op(np.asarray(x, dtype=self.dtype), y)
        return y

    def rmatvec(self, x: NDArray) -> NDArray:
        """Compute A.T @ x."""
        if not self.symmetric:
            raise NotImplementedError("Transpose operation not provided")
        return self.matvec(x)

    def matmat(self, X: NDArray) -> NDArray:
        """Compute A @ X column by column."""
        X = np.asarray(X, dtype=self.dtype)
        Y = np.empty((self.shape[0], X.shape[1]), dtype=self.dtype)
        y = np.empty(self.shape[0], dtype=self.dtype)

        for k in range(X.shape[1]):
            self.op.perform_op(np.ascontiguousarray(X[:, k]), y)
            Y[:, k] = y

        return Y

    def __matmul__(self, x: NDArray) -> NDArray:
        """Support A @ x syntax."""
        x = np.asarray(x)
        if x.ndim == 1:
            return self.matvec(x)
        if x.ndim == 2:
            return self.matmat(x)
        raise ValueError(f"Expected a vector or matrix, got shape {x.shape}")

    def to_scipy(self) -> scipy.sparse.linalg.LinearOperator:
        """
        Expose the operator to scipy.sparse.linalg solvers such as eigsh.

        Returns:
            scipy LinearOperator with the same shape and dtype
        """
        rmatvec = self.rmatvec if self.symmetric else None
        return scipy.sparse.linalg.LinearOperator(
            self.shape,
            matvec=self.matvec,
            rmatvec=rmatvec,
            matmat=self.matmat,
            dtype=self.dtype,
        )
