"""
Decomposition backends.

Available backends:
    NativeBackend: this package's own algorithms (reference fixtures)
    LapackBackend: LAPACK via scipy.linalg
"""

from pylinalg.decomposition.backends.native import NativeBackend
from pylinalg.decomposition.backends.lapack import LapackBackend

__all__ = [
    "NativeBackend",
    "LapackBackend",
]
