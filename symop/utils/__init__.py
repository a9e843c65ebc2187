"""Helper kernels."""

from symop.utils.triangular import symv_columns, symmetrize

__all__ = [
    "symv_columns",
    "symmetrize",
]
