"""
Symop: matrix operators for matrix-free iterative eigensolvers.

This library exposes the matrix-vector product primitive that Krylov
methods such as implicitly restarted Lanczos consume:
- An operator protocol (rows, cols, perform_op)
- A dense symmetric operator that reads one triangle only
- A wrapper bridging operators to scipy.sparse.linalg
"""

__version__ = "0.1.0"

from symop.algebra.protocols import MatrixOperator
from symop.algebra.dense import SymmetricDenseOperator, Uplo
from symop.algebra.operators import MatrixFreeOperator

__all__ = [
    "MatrixOperator",
    "SymmetricDenseOperator",
    "Uplo",
    "MatrixFreeOperator",
]
