"""
Core infrastructure for densematrix.

Shared abstractions used by the dense matrix implementation.

Key components:
    protocols: Scalar element-type protocol
    exceptions: Exception hierarchy
    validation: Input validators
    tolerances: Tolerance tiers for approximate comparison
"""

from densematrix.core.protocols import Scalar
from densematrix.core.tolerances import ToleranceTier, EXACT, FP64, FP32
from densematrix.core.exceptions import (
    DenseMatrixError,
    ValidationError,
    DimensionError,
    ShapeMismatchError,
    IndexOutOfRangeError,
    CursorError,
    ReadOnlyCursorError,
    CursorMismatchError,
)

__all__ = [
    # Protocols
    "Scalar",
    # Tolerances
    "ToleranceTier",
    "EXACT",
    "FP64",
    "FP32",
    # Exceptions
    "DenseMatrixError",
    "ValidationError",
    "DimensionError",
    "ShapeMismatchError",
    "IndexOutOfRangeError",
    "CursorError",
    "ReadOnlyCursorError",
    "CursorMismatchError",
]
