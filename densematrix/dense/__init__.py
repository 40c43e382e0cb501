"""
Dense row-major matrices.

Public API:
    Matrix: the container
    Cursor, CursorRange, AccessMode: linear, row and strided column iteration

Example:
    >>> from densematrix.dense import Matrix
    >>> a = Matrix.from_rows([[1, 2], [3, 4]])
    >>> (a * a).tolist()
    [[7, 10], [15, 22]]
    >>> list(a.col(1))
    [2, 4]
"""

from densematrix.dense.cursors import AccessMode, Cursor, CursorRange
from densematrix.dense.matrix import Matrix

__all__ = [
    "Matrix",
    "Cursor",
    "CursorRange",
    "AccessMode",
]
