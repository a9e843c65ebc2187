"""Triangular-storage utilities for symmetric matrices."""

import numpy as np
from numpy.typing import NDArray


def symv_columns(
    a: NDArray, x: NDArray, y: NDArray, lower: bool = True
) -> NDArray:
    """
    Compute y = A @ x reading only one triangle of A.

    Column j of the stored triangle contributes to y[j] through its dot
    product with x, and to the mirrored entries through a[:, j] * x[j].
    Columns are visited in increasing order.

    Args:
        a: Square matrix (n, n), only one triangle is read
        x: Vector of length n
        y: Output vector of length n, overwritten
        lower: Read the lower triangle if True, else the upper

    Returns:
        y
    """
    n = a.shape[0]
    y[...] = 0

    for j in range(n):
        if lower:
            col = a[j + 1:, j]
            y[j] += a[j, j] * x[j] + col @ x[j + 1:]
            y[j + 1:] += col * x[j]
        else:
            col = a[:j, j]
            y[j] += col @ x[:j] + a[j, j] * x[j]
            y[:j] += col * x[j]

    return y


def symmetrize(a: NDArray, lower: bool = True) -> NDArray:
    """
    Rebuild the full symmetric matrix from one triangle.

    Args:
        a: Square matrix (n, n)
        lower: Mirror the lower triangle if True, else the upper

    Returns:
        New (n, n) symmetric matrix
    """
    tri = np.tril(a) if lower else np.triu(a)
    return tri + tri.T - np.diag(np.diag(a))
