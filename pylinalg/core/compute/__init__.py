"""
Shared compute infrastructure for pylinalg.

IMPORTANT: This is NOT where backends live. Those go in
pylinalg/decomposition/backends/. This module contains shared NUMERIC
infrastructure.

Submodules:
    timing: Execution timing utilities
    precision: Machine epsilon and approximate-equality helpers
    tolerances: Tolerance tiers and iteration budgets
    linalg: Array-level decomposition kernels
"""

from pylinalg.core.compute.timing import Timer, timed

__all__ = [
    "Timer",
    "timed",
]
