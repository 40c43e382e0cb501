"""
Matrix arithmetic.

Elementwise add/subtract, scalar scaling, matrix multiplication, equality
and approximate equality. Each operation is written against the cursor
algorithms in ``_algorithms`` and never touches a buffer directly.

Operand shapes are validated up front; mismatches raise
ShapeMismatchError before any element is written.

The in-place forms (``*_inplace``) mutate and return their first argument.
The others return a new matrix and leave both operands untouched.
"""

from __future__ import annotations

import logging
import operator
from typing import TYPE_CHECKING, Any

from densematrix.core.tolerances import DEFAULT_TIER, ToleranceTier, get_tolerance
from densematrix.core.validation import check_inner_dimension, check_same_shape
from densematrix.dense import _algorithms as algo

if TYPE_CHECKING:
    from densematrix.dense.matrix import Matrix

logger = logging.getLogger(__name__)


def add_inplace(target: Matrix, other: Matrix) -> Matrix:
    """target += other, elementwise."""
    check_same_shape(target.shape, other.shape, 'add')
    algo.transform_pairs(
        target.begin(), target.end(), other.begin(read_only=True), target.begin(), operator.add
    )
    return target


def subtract_inplace(target: Matrix, other: Matrix) -> Matrix:
    """target -= other, elementwise."""
    check_same_shape(target.shape, other.shape, 'subtract')
    algo.transform_pairs(
        target.begin(), target.end(), other.begin(read_only=True), target.begin(), operator.sub
    )
    return target


def scale_inplace(target: Matrix, factor: Any) -> Matrix:
    """Multiply every element of target by factor."""
    algo.transform(target.begin(), target.end(), target.begin(), lambda elem: elem * factor)
    return target


def multiply_inplace(target: Matrix, other: Matrix) -> Matrix:
    """
    target = target * other.

    The product is built in a temporary and swapped in, since rows of
    target are still being read while earlier result cells are written.
    """
    multiply(target, other).swap(target)
    return target


def add(left: Matrix, right: Matrix) -> Matrix:
    """Elementwise sum; shape of left."""
    return add_inplace(left.copy(), right)


def subtract(left: Matrix, right: Matrix) -> Matrix:
    """Elementwise difference; shape of left."""
    return subtract_inplace(left.copy(), right)


def scale(matrix: Matrix, factor: Any) -> Matrix:
    """New matrix with every element multiplied by factor."""
    return scale_inplace(matrix.copy(), factor)


def multiply(left: Matrix, right: Matrix) -> Matrix:
    """
    Matrix product.

    For left of shape (m, k) and right of shape (k, n) returns the (m, n)
    matrix whose (i, j) element is the inner product of left row i and
    right column j, accumulated from ``left.element_type(0)``.

    Args:
        left: (m, k) matrix
        right: (k, n) matrix

    Returns:
        New (m, n) matrix with left's element type

    Raises:
        ShapeMismatchError: If left.cols() != right.rows()
    """
    check_inner_dimension(left.shape, right.shape)
    logger.debug("multiply: %s x %s", left.shape, right.shape)

    result = type(left)(left.rows(), right.cols(), element_type=left.element_type)
    zero = left.element_type(0)
    out = result.begin()
    for r in range(left.rows()):
        row_first = left.row_begin(r, read_only=True)
        row_last = left.row_end(r, read_only=True)
        for c in range(right.cols()):
            out.set(algo.inner_product(row_first, row_last, right.col_begin(c, read_only=True), zero))
            out = out.next()
    return result


def equal(left: Matrix, right: Matrix) -> bool:
    """Same shape and every element equal in row-major order."""
    if left.shape != right.shape:
        return False
    return algo.equal(
        left.begin(read_only=True), left.end(read_only=True), right.begin(read_only=True)
    )


def allclose(
    left: Matrix,
    right: Matrix,
    tier: ToleranceTier | str = DEFAULT_TIER,
) -> bool:
    """
    Same shape and |a - b| <= atol + rtol * |b| for every element pair.

    Args:
        left: First matrix
        right: Second matrix (the reference, as in numpy.isclose)
        tier: Tolerance tier supplying rtol and atol, or its name
            ('exact', 'fp64', 'fp32')

    Returns:
        True if all elements are within tolerance

    Raises:
        ValueError: If tier is an unknown name
    """
    if isinstance(tier, str):
        tier = get_tolerance(tier)
    if left.shape != right.shape:
        return False
    return all(
        abs(a - b) <= tier.atol + tier.rtol * abs(b)
        for a, b in zip(left.linear(read_only=True), right.linear(read_only=True))
    )
