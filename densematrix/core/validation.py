"""
Input validation utilities for densematrix.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No negative-index wraparound
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from collections.abc import Sequence
from typing import Any, Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from densematrix.core.exceptions import (
    DimensionError,
    IndexOutOfRangeError,
    ShapeMismatchError,
    ValidationError,
)
from densematrix.core.protocols import Scalar


def check_dimension(value: Any, name: str) -> int:
    """
    Validate a matrix dimension.

    Args:
        value: Candidate row or column count
        name: Parameter name for error messages

    Returns:
        The dimension as a plain int

    Raises:
        DimensionError: If value is not a non-negative integer
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise DimensionError(
            f"{name}: expected non-negative integer, got {type(value).__name__} {value!r}"
        )
    if value < 0:
        raise DimensionError(f"{name}: expected non-negative integer, got {value}")
    return int(value)


def check_index(index: Any, bound: int, axis: str) -> int:
    """
    Verify 0 <= index < bound.

    Args:
        index: Row or column index
        bound: Exclusive upper bound (row or column count)
        axis: 'row' or 'col', used in the error message

    Returns:
        The index as a plain int

    Raises:
        IndexOutOfRangeError: If index is not an integer or is out of range
    """
    if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
        raise IndexOutOfRangeError(
            f"{axis}: index must be an integer, got {type(index).__name__}",
            axis=axis,
            bound=bound,
        )
    if not 0 <= index < bound:
        raise IndexOutOfRangeError(
            f"{axis}: index {index} out of range [0, {bound})",
            axis=axis,
            index=int(index),
            bound=bound,
        )
    return int(index)


def check_same_shape(
    left_shape: tuple[int, int],
    right_shape: tuple[int, int],
    operation: str,
) -> None:
    """
    Verify two operands of an elementwise operation have the same shape.

    Raises:
        ShapeMismatchError: If the shapes differ
    """
    if left_shape != right_shape:
        raise ShapeMismatchError(
            f"{operation}: operand shapes differ, left={left_shape}, right={right_shape}",
            operation=operation,
            left_shape=left_shape,
            right_shape=right_shape,
        )


def check_inner_dimension(
    left_shape: tuple[int, int],
    right_shape: tuple[int, int],
) -> None:
    """
    Verify left columns equal right rows for matrix multiplication.

    Raises:
        ShapeMismatchError: If the inner dimensions differ
    """
    if left_shape[1] != right_shape[0]:
        raise ShapeMismatchError(
            f"multiply: inner dimensions differ, left={left_shape} has "
            f"{left_shape[1]} columns, right={right_shape} has {right_shape[0]} rows",
            operation='multiply',
            left_shape=left_shape,
            right_shape=right_shape,
        )


def check_element_type(element_type: Callable[..., Any], name: str) -> None:
    """
    Verify an element type can be default-constructed, built from zero,
    and produces values satisfying the Scalar protocol.

    Args:
        element_type: Type (or factory) used to create elements
        name: Parameter name for error messages

    Raises:
        ValidationError: If any capability is missing
    """
    if not callable(element_type):
        raise ValidationError(f"{name}: expected a type or factory, got {element_type!r}")
    samples = []
    for args in ((), (0,)):
        try:
            samples.append(element_type(*args))
        except (TypeError, ValueError) as e:
            call = f"{_type_name(element_type)}({', '.join(map(str, args))})"
            raise ValidationError(f"{name}: {call} failed: {e}") from e
    for sample in samples:
        if not isinstance(sample, Scalar):
            raise ValidationError(
                f"{name}: {_type_name(element_type)} instances do not support +, - and *"
            )


def check_rectangular(rows: Sequence[Sequence[Any]], name: str) -> tuple[int, int]:
    """
    Verify a nested-row literal is rectangular.

    Args:
        rows: Sequence of row sequences
        name: Parameter name for error messages

    Returns:
        (n_rows, n_cols) of the literal

    Raises:
        DimensionError: If rows is not a sequence of sequences or is ragged
    """
    if isinstance(rows, (str, bytes)) or not isinstance(rows, Sequence):
        raise DimensionError(f"{name}: expected a sequence of rows, got {type(rows).__name__}")
    n_rows = len(rows)
    if n_rows == 0:
        return 0, 0
    lengths = []
    for i, row in enumerate(rows):
        if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
            raise DimensionError(f"{name}: row {i} is {type(row).__name__}, expected a sequence")
        lengths.append(len(row))
    if len(set(lengths)) > 1:
        raise DimensionError(f"{name}: ragged rows, lengths {lengths}")
    return n_rows, lengths[0]


def check_array(array: ArrayLike, name: str) -> NDArray[Any]:
    """
    Validate and convert input to a 2-D numeric numpy array.

    Unlike most callers in numerical code this keeps the input dtype;
    integer arrays stay integer.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with numeric dtype and ndim == 2

    Raises:
        ValidationError: If input cannot be converted to a numeric array
        DimensionError: If the array is not 2-D
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if result.ndim != 2:
        raise DimensionError(
            f"{name}: expected 2D array, got {result.ndim}D with shape {result.shape}"
        )

    return result


def _type_name(element_type: Callable[..., Any]) -> str:
    return getattr(element_type, '__name__', repr(element_type))
