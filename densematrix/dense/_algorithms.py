"""
Generic algorithms over cursor ranges.

Every function takes half-open ranges as (first, last) cursor pairs plus
the first cursor of any secondary range, which is assumed to be at least
as long. The same code runs over the linear buffer, a single row or a
strided column.
"""

from typing import Any, Callable

from densematrix.dense.cursors import Cursor


def copy_range(first: Cursor, last: Cursor, out: Cursor) -> Cursor:
    """Copy [first, last) to out. Returns the cursor one past the last write."""
    n = last - first
    for k in range(n):
        out[k] = first[k]
    return out + n


def transform(
    first: Cursor,
    last: Cursor,
    out: Cursor,
    op: Callable[[Any], Any],
) -> Cursor:
    """out[k] = op(first[k]) for each k in [0, last - first)."""
    n = last - first
    for k in range(n):
        out[k] = op(first[k])
    return out + n


def transform_pairs(
    first: Cursor,
    last: Cursor,
    other: Cursor,
    out: Cursor,
    op: Callable[[Any, Any], Any],
) -> Cursor:
    """out[k] = op(first[k], other[k]) for each k in [0, last - first)."""
    n = last - first
    for k in range(n):
        out[k] = op(first[k], other[k])
    return out + n


def inner_product(first: Cursor, last: Cursor, other: Cursor, init: Any) -> Any:
    """
    Sum of first[k] * other[k] over the range, accumulated onto init.

    Accumulation is left to right: ((init + a0*b0) + a1*b1) + ...
    """
    total = init
    while first != last:
        total = total + first.get() * other.get()
        first = first.next()
        other = other.next()
    return total


def equal(first: Cursor, last: Cursor, other: Cursor) -> bool:
    """True if every element of [first, last) equals its counterpart."""
    return all(first[k] == other[k] for k in range(last - first))
