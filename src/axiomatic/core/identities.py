"""
Additive and multiplicative identity constants ("Zero" and "One").

Primitives carry literal constants; Complex and List derive theirs from the
component or element type, so the constants recurse through nested wrappers:

    zero(Complex[F64])        -> (0.0 + 0.0i)
    one(List[Complex[I32], 2]) -> [(1 + 1i), (1 + 1i)]
"""

from __future__ import annotations

from typing import Any

from axiomatic.core.types import ComplexType, ListType, PrimitiveType, Type, as_type
from axiomatic.utils.errors import TypeMismatchError


def has_zero(t: Type) -> bool:
    """Check whether a type has an additive identity constant."""
    t = as_type(t)
    if isinstance(t, PrimitiveType):
        return True
    if isinstance(t, ComplexType):
        return has_zero(t.component)
    if isinstance(t, ListType):
        return has_zero(t.element)
    return False


def has_one(t: Type) -> bool:
    """Check whether a type has a multiplicative identity constant."""
    t = as_type(t)
    if isinstance(t, PrimitiveType):
        return True
    if isinstance(t, ComplexType):
        return has_one(t.component)
    if isinstance(t, ListType):
        return has_one(t.element)
    return False


def zero(t: Type) -> Any:
    """Return the additive identity of a type."""
    t = as_type(t)
    if isinstance(t, PrimitiveType):
        return t.zero
    if isinstance(t, ComplexType):
        from axiomatic.values.complex import Complex

        return Complex(zero(t.component), zero(t.component))
    if isinstance(t, ListType):
        from axiomatic.values.list import List

        return List([zero(t.element) for _ in range(t.length)], element_type=t.element)
    raise TypeMismatchError(f"`{t}` has no Zero constant")


def one(t: Type) -> Any:
    """Return the multiplicative identity of a type."""
    t = as_type(t)
    if isinstance(t, PrimitiveType):
        return t.one
    if isinstance(t, ComplexType):
        from axiomatic.values.complex import Complex

        return Complex(one(t.component), one(t.component))
    if isinstance(t, ListType):
        from axiomatic.values.list import List

        return List([one(t.element) for _ in range(t.length)], element_type=t.element)
    raise TypeMismatchError(f"`{t}` has no One constant")
