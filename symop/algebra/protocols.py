"""Matrix operator protocol."""

from typing import Protocol, runtime_checkable
from numpy.typing import NDArray


@runtime_checkable
class MatrixOperator(Protocol):
    """
    Protocol for matrix-vector products used by iterative eigensolvers.
    Allows swapping between dense, sparse, shift-inverted implementations.
    """

    def rows(self) -> int:
        """Number of rows of the underlying matrix."""
        ...

    def cols(self) -> int:
        """Number of columns of the underlying matrix."""
        ...

    def perform_op(self, x: NDArray, y: NDArray) -> None:
        """
        Compute y = A @ x.

        Args:
            x: Input vector of length cols()
            y: Output buffer of length rows(), overwritten in place
        """
        ...
