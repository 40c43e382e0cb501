"""
Core protocols for densematrix.

These define the structural interfaces element types must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so
that int, float, complex, Fraction, Decimal and numpy scalars all qualify
without registration.

Design Principles:
    - Minimal contracts: prescribe only the operators the matrix composes
    - Runtime checkable: element types are verified once, at construction
"""

from typing import Any, Protocol, TypeVar, runtime_checkable


@runtime_checkable
class Scalar(Protocol):
    """
    Capability bound for matrix elements.

    An element type qualifies if its instances support addition,
    subtraction and multiplication. Equality is inherited from object and
    not listed. Default construction (``T()``) and construction from zero
    (``T(0)``) are checked separately by ``check_element_type`` since they
    are properties of the type, not of its instances.
    """

    def __add__(self, other: Any) -> Any:
        ...

    def __sub__(self, other: Any) -> Any:
        ...

    def __mul__(self, other: Any) -> Any:
        ...


T = TypeVar('T', bound=Scalar)  # Element type of Matrix, Cursor and CursorRange
