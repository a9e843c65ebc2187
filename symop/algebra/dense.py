"""Dense symmetric matrix operator backed by BLAS symv."""

import logging
from enum import Enum
from typing import Union
import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.linalg.blas import get_blas_funcs

from symop.utils.triangular import symv_columns

logger = logging.getLogger(__name__)

_BLAS_DTYPES = (np.dtype(np.float32), np.dtype(np.float64))


class Uplo(Enum):
    """Triangle of a symmetric matrix that holds the authoritative values."""
    LOWER = "L"   # A[i, j] for i >= j
    UPPER = "U"   # A[i, j] for i <= j


class SymmetricDenseOperator:
    """
    Matrix-vector product y = A x for a real symmetric dense matrix.

    The operator holds a read-only view of the caller's array and never
    copies it, so the array must stay alive and unchanged while the
    operator is in use. Only the triangle selected by ``uplo`` (diagonal
    included) is read; the other triangle may hold anything.

    Element (i, j) of the matrix is ``mat[i, j]`` for any memory order.
    Fortran- and C-contiguous float32/float64 arrays are multiplied with
    BLAS ``?symv``. A C-contiguous array is passed as its transpose with
    the triangle flag flipped, since the lower triangle of a row-major
    buffer is the upper triangle of the same buffer read column-major.
    Strided views and other floating dtypes fall back to a column loop
    in the storage dtype.
    """

    def __init__(self, mat: ArrayLike, uplo: Union[Uplo, str] = Uplo.LOWER):
        """
        Bind the operator to a square matrix.

        Args:
            mat: Square (n, n) real floating array
            uplo: Triangle to read, Uplo or "L"/"U"

        Raises:
            ValueError: If mat is not a square real floating matrix or
                uplo is not a known triangle
        """
        mat = np.asarray(mat)
        if mat.ndim != 2:
            raise ValueError(f"Expected a 2-D matrix, got shape {mat.shape}")
        if mat.shape[0] != mat.shape[1]:
            raise ValueError(f"Matrix must be square, got shape {mat.shape}")
        if not np.issubdtype(mat.dtype, np.floating):
            raise ValueError(f"Matrix must be real floating, got {mat.dtype}")

        try:
            self._uplo = Uplo(uplo)
        except ValueError:
            raise ValueError(f"Unknown triangle {uplo!r}, expected 'L' or 'U'") from None

        self._mat = mat.view()
        self._mat.flags.writeable = False
        self._n = mat.shape[0]
        self._select_kernel()

        logger.debug(
            "SymmetricDenseOperator n=%d dtype=%s uplo=%s kernel=%s",
            self._n, self._mat.dtype, self._uplo.name, self.kernel,
        )

    def _select_kernel(self) -> None:
        """Pick the BLAS or loop path once, based on dtype and layout."""
        lower = self._uplo is Uplo.LOWER
        mat = self._mat

        self._symv = None
        if self._n > 0 and mat.dtype in _BLAS_DTYPES:
            if mat.flags.f_contiguous:
                self._symv = get_blas_funcs("symv", (mat,))
                self._blas_mat = mat
                self._blas_lower = int(lower)
            elif mat.flags.c_contiguous:
                self._symv = get_blas_funcs("symv", (mat,))
                self._blas_mat = mat.T
                self._blas_lower = int(not lower)

        self._lower = lower

    @property
    def kernel(self) -> str:
        """Name of the multiplication path, "blas" or "loop"."""
        return "loop" if self._symv is None else "blas"

    @property
    def uplo(self) -> Uplo:
        """Triangle that is read."""
        return self._uplo

    @property
    def matrix(self) -> NDArray:
        """Read-only view of the bound matrix."""
        return self._mat

    @property
    def dtype(self) -> np.dtype:
        """Scalar type of the bound matrix."""
        return self._mat.dtype

    @property
    def shape(self) -> tuple[int, int]:
        """(rows, cols)."""
        return (self._n, self._n)

    def rows(self) -> int:
        """Number of rows of the underlying matrix."""
        return self._n

    def cols(self) -> int:
        """Number of columns of the underlying matrix."""
        return self._n

    def perform_op(self, x: NDArray, y: NDArray) -> None:
        """
        Compute y = A @ x using the selected triangle of A.

        y is overwritten without being read. Buffer lengths are only
        checked by assertions.

        Args:
            x: Vector of length cols()
            y: Output vector of length rows()
        """
        assert x.shape == (self._n,), f"x has shape {x.shape}, expected ({self._n},)"
        assert y.shape == (self._n,), f"y has shape {y.shape}, expected ({self._n},)"

        if self._symv is None:
            symv_columns(self._mat, x, y, lower=self._lower)
            return

        # beta=0 does not clear NaN/Inf in y under every BLAS build
        y.fill(0)
        out = self._symv(
            1.0, self._blas_mat, x,
            beta=0.0, y=y, overwrite_y=1, lower=self._blas_lower,
        )
        if out is not y:
            y[...] = out

    def __repr__(self) -> str:
        return (
            f"SymmetricDenseOperator(n={self._n}, dtype={self._mat.dtype}, "
            f"uplo={self._uplo.name})"
        )
