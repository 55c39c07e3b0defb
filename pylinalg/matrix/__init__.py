"""
Dense matrix container.

Usage:
    from pylinalg.matrix import Matrix

    a = Matrix.from_rows([[6.0, 2.0, -1.0], [-3.0, 5.0, 3.0], [-2.0, 1.0, 3.0]])
    x = a.solve([48.0, 49.0, 24.0])
"""

from pylinalg.matrix.matrix import Matrix

__all__ = ["Matrix"]
