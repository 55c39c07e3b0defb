"""
Tolerance tiers and iteration budgets.

Defines precision expectations for each working precision and the
defaults that bound the iterative algorithms:
- FP64: tight agreement (native vs LAPACK, reconstruction identities)
- FP32: relaxed for single-precision arithmetic
- Ill-conditioned variants of both

Used by the test suite, the backends' conditioning warnings, and the
default arguments of the eigen and SVD solvers.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-10,
    name='fp64',
    description='Double precision, reconstruction to ~machine precision',
)

FP64_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-6,
    atol=1e-6,
    name='fp64_ill_conditioned',
    description='Double precision, ill-conditioned (cond > 1e4)',
)

FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-4,
    name='fp32',
    description='Single precision',
)

FP32_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-2,
    atol=1e-2,
    name='fp32_ill_conditioned',
    description='Single precision, ill-conditioned',
)

# Condition estimate (from triangular pivots) above which a solve
# attaches a warning to its Result.
ILL_CONDITION_THRESHOLD = 1e12

# 'auto' backend uses the native algorithms up to this many rows/columns
# and delegates to LAPACK above it.
NATIVE_SIZE_LIMIT = 64

# Francis iteration budget per eigenvalue (LAPACK's hqr uses 30).
EIGEN_ITERATIONS_PER_VALUE = 30

# SVD sweep budget is SVD_SWEEPS_FACTOR * n**2 sweeps.
SVD_SWEEPS_FACTOR = 500

# Inverse-iteration refinements per eigenvector.
INVERSE_ITERATION_STEPS = 3


def select_tolerance(
    dtype: np.dtype | type,
    is_ill_conditioned: bool = False,
) -> ToleranceTier:
    """Select appropriate tolerance tier for a working dtype."""
    single = np.finfo(dtype).dtype == np.dtype(np.float32)
    if single:
        return FP32_ILL_CONDITIONED if is_ill_conditioned else FP32
    return FP64_ILL_CONDITIONED if is_ill_conditioned else FP64
