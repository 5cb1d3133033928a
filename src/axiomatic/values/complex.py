"""
Complex numbers over an arbitrary component type.

``Complex(a, b)`` represents ``a + b·i``. The component type T can be any
algebraic type, including another Complex or a List, and every operator
is available exactly when T provides what the operator needs:

    +        T: Add
    unary -  T: Neg
    -        T: Neg + Add            (a - b is a + (-b))
    *        T: Mul + Sub + Add      ((a, b)(c, d) = (ac - bd, ad + bc))
    /        T: Mul + Div + Add + Sub + One

``inverse()`` is the component-wise reciprocal (1/a, 1/b), not the true
complex inverse conj(z)/|z|²; division inherits it.
"""

from __future__ import annotations

from typing import Any

from axiomatic.core.identities import has_one, one
from axiomatic.core.operators import supports
from axiomatic.core.primitives import divide
from axiomatic.core.types import ComplexType, Type, as_type, type_of
from axiomatic.utils.errors import OperatorNotSupportedError, TypeMismatchError
from axiomatic.values.base import AlgebraicValue, leaf_repr, leaves


class Complex(AlgebraicValue):
    """
    An immutable complex number ``a + b·i``.

    Both components must have the same algebraic type. Subscripting the
    class gives the type descriptor: ``Complex[F64]`` is ``Complex[f64]``.
    """

    __slots__ = ("_a", "_b", "_type")

    def __init__(self, a: Any, b: Any) -> None:
        component = type_of(a)
        other = type_of(b)
        if component != other:
            raise TypeMismatchError(
                f"Complex components must share a type, found `{component}` and `{other}`"
            )
        self._init_slot("_a", component.coerce(a))
        self._init_slot("_b", component.coerce(b))
        self._init_slot("_type", ComplexType(component))

    def __class_getitem__(cls, component: Any) -> ComplexType:
        return ComplexType(as_type(component))

    @property
    def type(self) -> ComplexType:
        return self._type

    @property
    def real(self) -> Any:
        return self._a

    @property
    def imag(self) -> Any:
        return self._b

    def components(self) -> tuple[Any, ...]:
        return leaves(self._a) + leaves(self._b)

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def __add__(self, other: Any) -> Complex:
        if not isinstance(other, Complex):
            return NotImplemented
        self._require_same_type(other)
        self._require("Add")
        return Complex(self._a + other._a, self._b + other._b)

    def __neg__(self) -> Complex:
        self._require("Neg")
        return Complex(-self._a, -self._b)

    def __sub__(self, other: Any) -> Complex:
        if not isinstance(other, Complex):
            return NotImplemented
        self._require_same_type(other)
        self._require("Sub")
        return self + (-other)

    def __mul__(self, other: Any) -> Complex:
        if not isinstance(other, Complex):
            return NotImplemented
        self._require_same_type(other)
        self._require("Mul")
        a, b, c, d = self._a, self._b, other._a, other._b
        return Complex((a * c) - (b * d), (a * d) + (b * c))

    def inverse(self) -> Complex:
        """
        Component-wise reciprocal ``(1/a, 1/b)``.

        Zero components follow the component type's division: integer types
        raise ZeroDivisionError, float types produce inf.
        """
        component: Type = self._type.component
        if not (supports(component, "Div") and has_one(component)):
            raise OperatorNotSupportedError(f"`{self._type}` has no inverse: `{component}` needs Div and One")
        unit = one(component)
        return Complex(divide(unit, self._a), divide(unit, self._b))

    def __truediv__(self, other: Any) -> Complex:
        if not isinstance(other, Complex):
            return NotImplemented
        self._require_same_type(other)
        self._require("Div")
        return self * other.inverse()

    def conjugate(self) -> Complex:
        """The complex conjugate ``a - b·i``."""
        if not supports(self._type.component, "Neg"):
            raise OperatorNotSupportedError(f"`{self._type}` has no conjugate: `{self._type.component}` lacks Neg")
        return Complex(self._a, -self._b)

    # -------------------------------------------------------------------------
    # Comparison and display
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Complex) or other._type != self._type:
            return False
        return bool(self._a == other._a) and bool(self._b == other._b)

    def __hash__(self) -> int:
        return hash(("Complex", self._a, self._b))

    def __str__(self) -> str:
        return f"({self._a} + {self._b}i)"

    def __repr__(self) -> str:
        return f"({leaf_repr(self._a)} + {leaf_repr(self._b)}i)"
