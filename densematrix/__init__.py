"""
densematrix: generic dense row-major matrices for Python.

A value-semantics matrix container over any element type supporting
+, - and *, with linear, row and strided column cursors.

Submodules:
    dense: Matrix and its cursors
    core: exceptions, protocols, validation, tolerances
"""

__version__ = "0.1.0"

from densematrix import core
from densematrix import dense
from densematrix.dense import Matrix, Cursor, CursorRange, AccessMode

__all__ = [
    "__version__",
    "core",
    "dense",
    "Matrix",
    "Cursor",
    "CursorRange",
    "AccessMode",
]
