"""Square matrices with determinant and inverse support.

This module provides a Matrix type for the 2x2, 3x3 and 4x4 sizes used by
the ray tracer. Storage is a NumPy float64 array; the determinant and
inverse are computed by cofactor expansion for every supported size.

The inverse is the adjugate divided by the determinant. Note the index
transposition: element (col, row) of the result is cofactor(row, col) / det.

Example:
    >>> from src.phongtrace.core.matrix import Matrix
    >>> from src.phongtrace.core.tuples import Point
    >>> m = Matrix.identity().translate(5.0, -3.0, 2.0)
    >>> m @ Point(-3.0, 4.0, 5.0)
    Point(x=2.0, y=1.0, z=7.0)
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from src.phongtrace.core.tuples import EPSILON, Tuple, make_tuple

# Matrix sizes supported by the cofactor recursion
SUPPORTED_SIZES = (2, 3, 4)


class NotInvertibleError(ArithmeticError):
    """Raised when inverting a matrix whose determinant is (near) zero."""


class Matrix:
    """An N x N matrix of floats, N in {2, 3, 4}.

    Matrices are treated as immutable values: every operation returns a new
    Matrix and the backing array is never exposed for writing.

    Attributes:
        size: The dimension N.
    """

    def __init__(self, rows: Sequence[Sequence[float]] | npt.NDArray[np.float64]) -> None:
        """Create a matrix from row data.

        Args:
            rows: N rows of N numbers each.

        Raises:
            ValueError: If the data is not square or N is unsupported.
        """
        data = np.array(rows, dtype=np.float64)
        if data.ndim != 2 or data.shape[0] != data.shape[1]:
            raise ValueError(f"Matrix data must be square, got shape {data.shape}")
        if data.shape[0] not in SUPPORTED_SIZES:
            raise ValueError(
                f"Unsupported matrix size {data.shape[0]} (supported: {SUPPORTED_SIZES})"
            )
        data.setflags(write=False)
        self._data = data

    @classmethod
    def identity(cls, size: int = 4) -> Matrix:
        return cls(np.identity(size, dtype=np.float64))

    @classmethod
    def zero(cls, size: int = 4) -> Matrix:
        return cls(np.zeros((size, size), dtype=np.float64))

    @property
    def size(self) -> int:
        return int(self._data.shape[0])

    def at(self, row: int, col: int) -> float:
        return float(self._data[row, col])

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, col = index
        return self.at(row, col)

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Get a writable copy of the matrix data."""
        return self._data.copy()

    def to_list(self) -> list[list[float]]:
        return self._data.tolist()

    # =========================================================================
    # Comparison
    # =========================================================================

    def approx_eq(self, other: Matrix) -> bool:
        """Element-wise comparison within EPSILON."""
        if self.size != other.size:
            return False
        return bool(np.all(np.abs(self._data - other._data) < EPSILON))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.approx_eq(other)

    def __repr__(self) -> str:
        return f"Matrix({self.to_list()})"

    # =========================================================================
    # Products
    # =========================================================================

    def multiply(self, other: Matrix) -> Matrix:
        """Row-by-column product self x other (not commutative)."""
        if self.size != other.size:
            raise ValueError(f"Cannot multiply {self.size}x{self.size} by {other.size}x{other.size}")
        return Matrix(self._data @ other._data)

    def apply(self, t: Tuple) -> Tuple:
        """Multiply a 4x4 matrix by a tuple.

        The result type follows its w component, so affine transforms map
        points to points and vectors to vectors.
        """
        if self.size != 4:
            raise ValueError(f"Only 4x4 matrices can be applied to tuples, got {self.size}x{self.size}")
        x, y, z, w = self._data @ np.array(t.as_tuple(), dtype=np.float64)
        return make_tuple(float(x), float(y), float(z), float(w))

    def __matmul__(self, other: Matrix | Tuple) -> Matrix | Tuple:
        if isinstance(other, Matrix):
            return self.multiply(other)
        if isinstance(other, Tuple):
            return self.apply(other)
        return NotImplemented

    def transpose(self) -> Matrix:
        return Matrix(self._data.T)

    # =========================================================================
    # Determinant and Inverse
    # =========================================================================

    def determinant(self) -> float:
        """Determinant by cofactor expansion along the first row."""
        if self.size == 2:
            return self.at(0, 0) * self.at(1, 1) - self.at(0, 1) * self.at(1, 0)
        return sum(self.at(0, col) * self.cofactor(0, col) for col in range(self.size))

    def submatrix(self, row: int, col: int) -> Matrix:
        """Remove the given row and column.

        Raises:
            ValueError: If called on a 2x2 matrix.
        """
        if self.size <= 2:
            raise ValueError("Cannot take a submatrix of a 2x2 matrix")
        reduced = np.delete(np.delete(self._data, row, axis=0), col, axis=1)
        return Matrix(reduced)

    def minor(self, row: int, col: int) -> float:
        """Determinant of the submatrix. For 2x2 it is the opposite element."""
        if self.size == 2:
            return self.at(1 - row, 1 - col)
        return self.submatrix(row, col).determinant()

    def cofactor(self, row: int, col: int) -> float:
        """Signed minor: minor * (-1)^(row + col)."""
        minor = self.minor(row, col)
        return minor if (row + col) % 2 == 0 else -minor

    def invertible(self) -> bool:
        return abs(self.determinant()) > EPSILON

    def inverse(self) -> Matrix:
        """Compute the inverse as adjugate / determinant.

        Raises:
            NotInvertibleError: If |determinant| <= EPSILON.
        """
        det = self.determinant()
        if abs(det) <= EPSILON:
            raise NotInvertibleError(f"Matrix is not invertible (determinant={det})")

        out = np.zeros_like(self._data)
        for row in range(self.size):
            for col in range(self.size):
                # Transposed store: this is what turns cofactors into the adjugate
                out[col, row] = self.cofactor(row, col) / det
        return Matrix(out)

    # =========================================================================
    # Fluent Transformation Builders
    # =========================================================================
    # Each builder returns T @ self, so a chain reads in application order:
    # identity().rotate_x(a).scale(...).translate(...) rotates first.

    def translate(self, x: float, y: float, z: float) -> Matrix:
        from src.phongtrace.core.transformations import translation

        return translation(x, y, z).multiply(self)

    def scale(self, x: float, y: float, z: float) -> Matrix:
        from src.phongtrace.core.transformations import scaling

        return scaling(x, y, z).multiply(self)

    def rotate_x(self, radians: float) -> Matrix:
        from src.phongtrace.core.transformations import rotation_x

        return rotation_x(radians).multiply(self)

    def rotate_y(self, radians: float) -> Matrix:
        from src.phongtrace.core.transformations import rotation_y

        return rotation_y(radians).multiply(self)

    def rotate_z(self, radians: float) -> Matrix:
        from src.phongtrace.core.transformations import rotation_z

        return rotation_z(radians).multiply(self)

    def shear(
        self, x_y: float, x_z: float, y_x: float, y_z: float, z_x: float, z_y: float
    ) -> Matrix:
        from src.phongtrace.core.transformations import shearing

        return shearing(x_y, x_z, y_x, y_z, z_x, z_y).multiply(self)
