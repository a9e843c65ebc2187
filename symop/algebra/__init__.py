"""Matrix operator abstractions."""

from symop.algebra.protocols import MatrixOperator
from symop.algebra.dense import SymmetricDenseOperator, Uplo
from symop.algebra.operators import MatrixFreeOperator

__all__ = [
    "MatrixOperator",
    "SymmetricDenseOperator",
    "Uplo",
    "MatrixFreeOperator",
]
