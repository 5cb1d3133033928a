"""
Axiomatic Values Package.

Concrete algebraic value types: Complex[T] and List[T, N].
"""

from axiomatic.values.base import AlgebraicValue, allclose, leaves
from axiomatic.values.complex import Complex
from axiomatic.values.list import List

__all__ = [
    "AlgebraicValue",
    "Complex",
    "List",
    "allclose",
    "leaves",
]
