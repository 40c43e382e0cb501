"""
Tolerance tiers for approximate matrix comparison.

Defines precision expectations for ``Matrix.allclose``:
- EXACT: no slack, equivalent to == for exact element types
- FP64: double precision rounding slack
- FP32: single precision rounding slack

Comparison follows numpy.isclose: |a - b| <= atol + rtol * |b|.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


EXACT = ToleranceTier(
    rtol=0.0,
    atol=0.0,
    name='exact',
    description='Exact match — integer, Fraction and Decimal elements',
)

FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='fp64',
    description='Double precision — reassociated sums and products',
)

FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='fp32',
    description='Single precision — numpy float32 elements',
)

DEFAULT_TIER = FP64


def get_tolerance(name: str) -> ToleranceTier:
    """
    Look up a tolerance tier by name.

    Args:
        name: Tier name ('exact', 'fp64', 'fp32')

    Returns:
        ToleranceTier

    Raises:
        ValueError: If name is not recognized
    """
    tiers = {t.name: t for t in (EXACT, FP64, FP32)}
    if name not in tiers:
        raise ValueError(
            f"Unknown tolerance tier: {name!r}. Available: {sorted(tiers.keys())}"
        )
    return tiers[name]
