"""
Matrix decompositions and linear solves.

Public API:
    dec_lu, dec_cholesky, dec_qr, dec_hessenberg, dec_eigen, dec_sv
    solve, inv, det, pinv, substitute_forward, substitute_backward

Every function returns a Result envelope and takes a backend= keyword
('auto', 'native', 'lapack'). The same operations are available as
Matrix methods, which return the payload directly.

Example:
    >>> from pylinalg.decomposition import dec_lu
    >>> result = dec_lu([[1.0, -2.0, 3.0], [2.0, -5.0, 12.0], [0.0, 2.0, -10.0]])
    >>> l, u, p = result.params.lup()
    >>> result.info['n_swaps']
    2
"""

from pylinalg.decomposition.solution import (
    LUDec,
    CholeskyDec,
    QRDec,
    HessenbergDec,
    EigenDec,
    SVDec,
)
from pylinalg.decomposition.solvers import (
    dec_lu,
    dec_cholesky,
    dec_qr,
    dec_hessenberg,
    dec_eigen,
    dec_sv,
    solve,
    inv,
    det,
    pinv,
    substitute_forward,
    substitute_backward,
)

__all__ = [
    # Result types
    "LUDec",
    "CholeskyDec",
    "QRDec",
    "HessenbergDec",
    "EigenDec",
    "SVDec",
    # Operations
    "dec_lu",
    "dec_cholesky",
    "dec_qr",
    "dec_hessenberg",
    "dec_eigen",
    "dec_sv",
    "solve",
    "inv",
    "det",
    "pinv",
    "substitute_forward",
    "substitute_backward",
]
