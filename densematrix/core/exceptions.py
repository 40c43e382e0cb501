"""
Exception hierarchy for densematrix.

All exceptions inherit from DenseMatrixError to allow catching any
library-specific error. Some also inherit from the closest builtin
(IndexError, TypeError, ValueError) so generic Python code keeps working.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class DenseMatrixError(Exception):
    """Base exception for all densematrix errors."""
    pass


class ValidationError(DenseMatrixError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Dimensions are incorrect or inconsistent.

    Raised for negative or non-integer dimensions and for ragged
    nested-row literals.
    """
    pass


class ShapeMismatchError(DimensionError):
    """
    Operand shapes are incompatible for an arithmetic operation.

    Attributes:
        operation: Name of the operation ('add', 'subtract', 'multiply')
        left_shape: (rows, cols) of the left operand
        right_shape: (rows, cols) of the right operand
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        left_shape: tuple[int, int] | None = None,
        right_shape: tuple[int, int] | None = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.left_shape = left_shape
        self.right_shape = right_shape


class IndexOutOfRangeError(ValidationError, IndexError):
    """
    Row or column index outside the matrix bounds.

    Attributes:
        axis: 'row' or 'col'
        index: The offending index
        bound: The exclusive upper bound that was violated
    """

    def __init__(
        self,
        message: str,
        axis: str | None = None,
        index: int | None = None,
        bound: int | None = None,
    ):
        super().__init__(message)
        self.axis = axis
        self.index = index
        self.bound = bound


class CursorError(DenseMatrixError):
    """Base class for misuse of matrix cursors."""
    pass


class ReadOnlyCursorError(CursorError, TypeError):
    """Write attempted through a read-only cursor or range."""
    pass


class CursorMismatchError(CursorError, ValueError):
    """
    Two cursors cannot be combined.

    Raised when taking the distance between cursors that walk different
    buffers or use different strides.
    """
    pass
