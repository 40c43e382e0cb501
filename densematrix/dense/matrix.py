"""
Dense row-major matrix with value semantics.

Matrix owns a single flat buffer of rows*cols elements. Element (r, c)
lives at offset r*cols + c. A matrix with zero rows or zero columns is
always normalized to the canonical empty state: 0 x 0 with no buffer.

Copies are always deep. Assignment copies into a temporary first and
swaps it in, so a failure while copying leaves the target unchanged.

Construction:
    Matrix()                                  # canonical empty
    Matrix(2, 3)                              # 2x3 of float()
    Matrix(2, 3, element_type=Fraction)       # 2x3 of Fraction()
    Matrix.from_rows([[1, 2], [3, 4]])        # literal, element type int
    Matrix.identity(3)
    Matrix.from_numpy(np.eye(2))
"""

from __future__ import annotations

import copy as _copy
import logging
from collections.abc import Sequence
from typing import Any, Callable, Generic, Iterator

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from densematrix.core.protocols import T
from densematrix.core.tolerances import DEFAULT_TIER, ToleranceTier
from densematrix.core.validation import (
    check_array,
    check_dimension,
    check_element_type,
    check_index,
    check_rectangular,
)
from densematrix.dense import _algorithms as algo
from densematrix.dense import arithmetic
from densematrix.dense.cursors import AccessMode, Cursor, CursorRange

logger = logging.getLogger(__name__)

DEFAULT_ELEMENT_TYPE: Callable[..., Any] = float


class Matrix(Generic[T]):
    """
    Generic dense matrix over element type T.

    Attributes:
        element_type: Type used to default-construct elements and to build
            the additive zero for products. Must satisfy the Scalar protocol.
    """

    __slots__ = ('_rows', '_cols', '_buffer', '_element_type')

    # Mutable container
    __hash__ = None  # type: ignore[assignment]

    # Make numpy defer binary operators (np.float64(2) * m) to Matrix.
    __array_ufunc__ = None

    def __init__(
        self,
        rows: int = 0,
        cols: int = 0,
        *,
        element_type: Callable[..., T] = DEFAULT_ELEMENT_TYPE,
    ):
        rows = check_dimension(rows, 'rows')
        cols = check_dimension(cols, 'cols')
        check_element_type(element_type, 'element_type')
        self._element_type = element_type
        if rows * cols == 0:
            self._rows = 0
            self._cols = 0
            self._buffer: list[T] | None = None
        else:
            self._rows = rows
            self._cols = cols
            self._buffer = _allocate(rows * cols, element_type)

    # === Factories ===

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[Any]],
        element_type: Callable[..., Any] | None = None,
    ) -> Matrix:
        """
        Build a matrix from a rectangular nested-row literal.

        Args:
            rows: Sequence of equal-length row sequences
            element_type: Element type; defaults to the type of rows[0][0].
                When given, every value is converted with element_type(value).

        Returns:
            New matrix with the literal's shape, or canonical empty if the
            literal has no elements

        Raises:
            DimensionError: If the literal is ragged
        """
        n_rows, n_cols = check_rectangular(rows, 'rows')
        explicit = element_type is not None
        if not explicit:
            element_type = type(rows[0][0]) if n_rows * n_cols else DEFAULT_ELEMENT_TYPE
        check_element_type(element_type, 'element_type')
        if n_rows * n_cols == 0:
            return cls._adopt(0, 0, None, element_type)
        if explicit:
            buffer = [element_type(value) for row in rows for value in row]
        else:
            buffer = [value for row in rows for value in row]
        return cls._adopt(n_rows, n_cols, buffer, element_type)

    @classmethod
    def identity(cls, n: int, element_type: Callable[..., Any] = DEFAULT_ELEMENT_TYPE) -> Matrix:
        """n x n matrix with element_type(1) on the diagonal."""
        result = cls(n, n, element_type=element_type)
        one = element_type(1)
        for i in range(result.rows()):
            result.set_at(i, i, one)
        return result

    @classmethod
    def from_numpy(cls, array: ArrayLike) -> Matrix:
        """
        Copy a 2-D numeric array into a new matrix.

        Elements are converted to Python scalars, so an int64 array gives
        a matrix of int and a float64 array a matrix of float.
        """
        return cls.from_rows(check_array(array, 'array').tolist())

    @classmethod
    def _adopt(
        cls,
        rows: int,
        cols: int,
        buffer: list[Any] | None,
        element_type: Callable[..., Any],
    ) -> Matrix:
        """Wrap an already-built buffer without validation or copying."""
        obj = cls.__new__(cls)
        obj._rows = rows
        obj._cols = cols
        obj._buffer = buffer
        obj._element_type = element_type
        return obj

    # === Lifecycle ===

    def copy(self) -> Matrix:
        """Deep copy into a fresh buffer."""
        buffer = None if self._buffer is None else [None] * len(self._buffer)
        result = self._adopt(self._rows, self._cols, buffer, self._element_type)
        algo.copy_range(self.begin(read_only=True), self.end(read_only=True), result.begin())
        return result

    def __copy__(self) -> Matrix:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Matrix:
        result = self._adopt(self._rows, self._cols, None, self._element_type)
        memo[id(self)] = result
        if self._buffer is not None:
            result._buffer = _copy.deepcopy(self._buffer, memo)
        return result

    def assign(self, other: Matrix) -> Matrix:
        """
        Replace this matrix's contents with a copy of other.

        The copy is completed before anything in self changes.
        """
        if other is not self:
            other.copy().swap(self)
        return self

    def swap(self, other: Matrix) -> None:
        """Exchange shape, buffer and element type with other."""
        self._rows, other._rows = other._rows, self._rows
        self._cols, other._cols = other._cols, self._cols
        self._buffer, other._buffer = other._buffer, self._buffer
        self._element_type, other._element_type = other._element_type, self._element_type

    # === Shape ===

    def rows(self) -> int:
        return self._rows

    def cols(self) -> int:
        return self._cols

    def size(self) -> int:
        return self._rows * self._cols

    def empty(self) -> bool:
        return self.size() == 0

    @property
    def shape(self) -> tuple[int, int]:
        """(rows, cols)."""
        return self._rows, self._cols

    @property
    def element_type(self) -> Callable[..., T]:
        return self._element_type

    def __len__(self) -> int:
        return self.size()

    def __bool__(self) -> bool:
        return not self.empty()

    # === Element access ===

    def at(self, row: int, col: int) -> T:
        """
        Element at (row, col).

        Raises:
            IndexOutOfRangeError: If row >= rows() or col >= cols()
        """
        return self._buffer[self._offset(row, col)]

    def set_at(self, row: int, col: int, value: T) -> None:
        """Overwrite the element at (row, col)."""
        self._buffer[self._offset(row, col)] = value

    def __getitem__(self, key: tuple[int, int]) -> T:
        row, col = _unpack_key(key)
        return self.at(row, col)

    def __setitem__(self, key: tuple[int, int], value: T) -> None:
        row, col = _unpack_key(key)
        self.set_at(row, col, value)

    def data(self) -> list[T] | None:
        """
        The live row-major buffer, or None for the canonical empty matrix.

        Writes are visible through the matrix. Do not resize it.
        """
        return self._buffer

    # === Cursors ===

    def begin(self, read_only: bool = False) -> Cursor[T]:
        return Cursor(self._buffer, 0, 1, 0, _mode(read_only))

    def end(self, read_only: bool = False) -> Cursor[T]:
        return self.begin(read_only) + self.size()

    def row_begin(self, row: int, read_only: bool = False) -> Cursor[T]:
        row = check_index(row, self._rows, 'row')
        return self.begin(read_only) + row * self._cols

    def row_end(self, row: int, read_only: bool = False) -> Cursor[T]:
        return self.row_begin(row, read_only) + self._cols

    def col_begin(self, col: int, read_only: bool = False) -> Cursor[T]:
        col = check_index(col, self._cols, 'col')
        return Cursor(self._buffer, 0, self._cols, col, _mode(read_only))

    def col_end(self, col: int, read_only: bool = False) -> Cursor[T]:
        return self.col_begin(col, read_only) + self._rows

    # === Ranges ===

    def linear(self, read_only: bool = False) -> CursorRange[T]:
        """All elements in row-major order."""
        return CursorRange(self.begin(read_only), self.end(read_only))

    def row(self, row: int, read_only: bool = False) -> CursorRange[T]:
        return CursorRange(self.row_begin(row, read_only), self.row_end(row, read_only))

    def col(self, col: int, read_only: bool = False) -> CursorRange[T]:
        return CursorRange(self.col_begin(col, read_only), self.col_end(col, read_only))

    def iter_rows(self, read_only: bool = False) -> Iterator[CursorRange[T]]:
        for r in range(self._rows):
            yield self.row(r, read_only)

    def iter_cols(self, read_only: bool = False) -> Iterator[CursorRange[T]]:
        for c in range(self._cols):
            yield self.col(c, read_only)

    def __iter__(self) -> Iterator[T]:
        return iter(self.linear(read_only=True))

    # === Comparison ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return arithmetic.equal(self, other)

    def allclose(self, other: Matrix, tier: ToleranceTier | str = DEFAULT_TIER) -> bool:
        """Same shape and every element within tier's tolerance of other's."""
        return arithmetic.allclose(self, other, tier)

    # === Arithmetic ===

    def add(self, other: Matrix) -> Matrix:
        return arithmetic.add(self, other)

    def subtract(self, other: Matrix) -> Matrix:
        return arithmetic.subtract(self, other)

    def scale(self, factor: Any) -> Matrix:
        return arithmetic.scale(self, factor)

    def multiply(self, other: Matrix) -> Matrix:
        return arithmetic.multiply(self, other)

    def __add__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other: Any) -> Matrix:
        if isinstance(other, Matrix):
            return self.multiply(other)
        return self.scale(other)

    def __rmul__(self, other: Any) -> Matrix:
        return self.scale(other)

    def __matmul__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.multiply(other)

    def __neg__(self) -> Matrix:
        return self.scale(-1)

    def __iadd__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return arithmetic.add_inplace(self, other)

    def __isub__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return arithmetic.subtract_inplace(self, other)

    def __imul__(self, other: Any) -> Matrix:
        if isinstance(other, Matrix):
            return arithmetic.multiply_inplace(self, other)
        return arithmetic.scale_inplace(self, other)

    def __imatmul__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return arithmetic.multiply_inplace(self, other)

    # === Interop ===

    def tolist(self) -> list[list[T]]:
        """Nested row lists."""
        return [row.tolist() for row in self.iter_rows(read_only=True)]

    def to_numpy(self, dtype: DTypeLike | None = None) -> NDArray[Any]:
        """Copy into a new (rows, cols) ndarray."""
        if self._buffer is None:
            return np.empty((0, 0), dtype=dtype)
        return np.array(self._buffer, dtype=dtype).reshape(self._rows, self._cols)

    def __array__(self, dtype: DTypeLike | None = None, copy: bool | None = None) -> NDArray[Any]:
        return self.to_numpy(dtype)

    def __repr__(self) -> str:
        if self.empty():
            return f"{type(self).__name__}()"
        return f"{type(self).__name__}.from_rows({self.tolist()!r})"

    # === Internal ===

    def _offset(self, row: int, col: int) -> int:
        row = check_index(row, self._rows, 'row')
        col = check_index(col, self._cols, 'col')
        return row * self._cols + col


def _allocate(n: int, element_type: Callable[..., Any]) -> list[Any]:
    logger.debug("allocating buffer of %d %s elements", n, getattr(element_type, '__name__', element_type))
    return [element_type() for _ in range(n)]


def _mode(read_only: bool) -> AccessMode:
    return AccessMode.READ_ONLY if read_only else AccessMode.MUTABLE


def _unpack_key(key: Any) -> tuple[int, int]:
    if not isinstance(key, tuple) or len(key) != 2:
        raise TypeError(f"Matrix indices must be a (row, col) tuple, got {key!r}")
    return key
