"""
Generic result container for all pylinalg computations.

Every backend operation returns a Result envelope around its payload
(an LUDec, a solved Matrix, a determinant, ...). The envelope carries
what the payload itself should not: which backend produced it, how
long each phase took, and any non-fatal issues worth reporting.

Design decisions:
    - Generic over payload P for type safety
    - info dict for flexible metadata (method, iterations, swap counts)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) so a decomposition is produced exactly once
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for linear algebra operations.

    Type Parameters:
        P: The payload type (decomposition aggregate, Matrix, or scalar)

    Attributes:
        params: The computed payload
        info: Structured metadata (method, convergence, diagnostics)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> # Direct method (no convergence notion)
        >>> Result(
        ...     params=LUDec(l=l, u=u, p=p, n_swaps=2),
        ...     info={'method': 'lu_partial_pivoting', 'n_swaps': 2},
        ...     timing={'total_seconds': 0.001},
        ...     backend_name='native'
        ... )

        >>> # Iterative method
        >>> Result(
        ...     params=EigenDec(eigenvalues=values, eigenvectors=vectors),
        ...     info={'method': 'francis_double_shift', 'iterations': 7},
        ...     timing={'total_seconds': 0.02, 'schur': 0.015},
        ...     backend_name='native'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
