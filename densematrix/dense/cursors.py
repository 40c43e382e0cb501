"""
Random-access cursors over a row-major matrix buffer.

A cursor is an immutable (position, stride, offset) triple bound to one
buffer. The element it refers to lives at ``position + offset``; moving by
one logical step adds ``stride`` to ``position``.

    linear / row cursor:  stride = 1,    offset = 0
    column cursor:        stride = cols, offset = column index,
                          position = start of the current row

Cursors are values: ``a + 1`` returns a new cursor and ``a += 1`` rebinds
``a`` without affecting other names bound to the same cursor.

Mutable cursors can be converted to read-only ones with ``as_read_only()``.
There is no conversion in the other direction.
"""

from __future__ import annotations

from enum import Enum
from numbers import Integral
from typing import Any, Generic, Iterator

from densematrix.core.exceptions import CursorMismatchError, ReadOnlyCursorError
from densematrix.core.protocols import T
from densematrix.core.validation import check_index


class AccessMode(Enum):
    """Whether a cursor may write through to the buffer."""
    MUTABLE = 'mutable'
    READ_ONLY = 'read_only'


class Cursor(Generic[T]):
    """
    Strided random-access cursor.

    Attributes:
        position: Raw buffer index of the current step (row start for columns)
        stride: Raw buffer slots per logical step
        offset: Constant added to position on dereference (column index)
        mode: AccessMode.MUTABLE or AccessMode.READ_ONLY
    """

    __slots__ = ('_buffer', '_position', '_stride', '_offset', '_mode')

    def __init__(
        self,
        buffer: list[T] | None,
        position: int = 0,
        stride: int = 1,
        offset: int = 0,
        mode: AccessMode = AccessMode.MUTABLE,
    ):
        self._buffer = buffer
        self._position = position
        self._stride = stride
        self._offset = offset
        self._mode = mode

    # === Properties ===

    @property
    def position(self) -> int:
        return self._position

    @property
    def stride(self) -> int:
        return self._stride

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def mode(self) -> AccessMode:
        return self._mode

    @property
    def read_only(self) -> bool:
        return self._mode is AccessMode.READ_ONLY

    @property
    def index(self) -> int:
        """Raw buffer index of the referenced element."""
        return self._position + self._offset

    # === Element access ===

    def get(self) -> T:
        """Dereference: the element at the current step."""
        return self._buffer[self._position + self._offset]

    def set(self, value: T) -> None:
        """Write the element at the current step."""
        self._check_writable()
        self._buffer[self._position + self._offset] = value

    @property
    def value(self) -> T:
        return self.get()

    @value.setter
    def value(self, value: T) -> None:
        self.set(value)

    def __getitem__(self, steps: int) -> T:
        """Element ``steps`` logical steps away, i.e. ``(self + steps).get()``."""
        return self._buffer[self._position + steps * self._stride + self._offset]

    def __setitem__(self, steps: int, value: T) -> None:
        self._check_writable()
        self._buffer[self._position + steps * self._stride + self._offset] = value

    # === Movement ===

    def next(self) -> Cursor[T]:
        """One step forward."""
        return self._moved(self._stride)

    def prev(self) -> Cursor[T]:
        """One step back."""
        return self._moved(-self._stride)

    def __add__(self, steps: int) -> Cursor[T]:
        if not isinstance(steps, Integral):
            return NotImplemented
        return self._moved(int(steps) * self._stride)

    def __radd__(self, steps: int) -> Cursor[T]:
        return self.__add__(steps)

    def __sub__(self, other: Cursor[T] | int) -> Any:
        """
        ``cursor - k`` moves back k steps; ``cursor - cursor`` is the
        number of logical steps between two cursors.

        Raises:
            CursorMismatchError: If the cursors walk different buffers
                or use different strides
        """
        if isinstance(other, Cursor):
            self._check_compatible(other, 'distance')
            if self._stride != other._stride:
                raise CursorMismatchError(
                    f"distance: cursors have different strides "
                    f"({self._stride} vs {other._stride})"
                )
            return (self._position - other._position) // self._stride
        if isinstance(other, Integral):
            return self._moved(-int(other) * self._stride)
        return NotImplemented

    # === Conversion ===

    def as_read_only(self) -> Cursor[T]:
        """Read-only cursor at the same step."""
        if self.read_only:
            return self
        return Cursor(
            self._buffer, self._position, self._stride, self._offset, AccessMode.READ_ONLY
        )

    # === Comparison ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        return (
            self._buffer is other._buffer
            and self._position == other._position
            and self._offset == other._offset
        )

    def __hash__(self) -> int:
        return hash((id(self._buffer), self._position, self._offset))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        self._check_compatible(other, 'compare')
        return self._position < other._position

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        self._check_compatible(other, 'compare')
        return self._position > other._position

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        return not self > other

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        return not self < other

    def __repr__(self) -> str:
        return (
            f"Cursor(position={self._position}, stride={self._stride}, "
            f"offset={self._offset}, mode={self._mode.value})"
        )

    # === Internal ===

    def _moved(self, delta: int) -> Cursor[T]:
        return Cursor(
            self._buffer, self._position + delta, self._stride, self._offset, self._mode
        )

    def _check_writable(self) -> None:
        if self._mode is AccessMode.READ_ONLY:
            raise ReadOnlyCursorError("cannot write through a read-only cursor")

    def _check_compatible(self, other: Cursor[T], operation: str) -> None:
        if self._buffer is not other._buffer:
            raise CursorMismatchError(f"{operation}: cursors walk different buffers")


class CursorRange(Generic[T]):
    """
    Half-open range [first, last) of cursors, usable as a Python sequence.

    Iterating yields element values. Indexing is relative to ``first`` and
    bounds-checked; assignment requires a mutable range.
    """

    __slots__ = ('_first', '_last')

    def __init__(self, first: Cursor[T], last: Cursor[T]):
        self._first = first
        self._last = last

    @property
    def first(self) -> Cursor[T]:
        return self._first

    @property
    def last(self) -> Cursor[T]:
        return self._last

    @property
    def read_only(self) -> bool:
        return self._first.read_only

    def __len__(self) -> int:
        return self._last - self._first

    def __iter__(self) -> Iterator[T]:
        cursor = self._first
        while cursor != self._last:
            yield cursor.get()
            cursor = cursor.next()

    def __getitem__(self, i: int) -> T:
        return self._first[check_index(i, len(self), 'range')]

    def __setitem__(self, i: int, value: T) -> None:
        self._first[check_index(i, len(self), 'range')] = value

    def as_read_only(self) -> CursorRange[T]:
        return CursorRange(self._first.as_read_only(), self._last.as_read_only())

    def tolist(self) -> list[T]:
        return list(self)

    def __repr__(self) -> str:
        return f"CursorRange({self.tolist()!r})"
