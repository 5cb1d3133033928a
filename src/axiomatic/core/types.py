"""
Type descriptors for the Axiomatic capability system.

Every algebraic type is described by an immutable, hashable descriptor:

- PrimitiveType: built-in scalars (usize, isize, u32, i32, f32, f64)
- ComplexType:   Complex[T] for any component type T
- ListType:      List[T, N] with the length N part of the type
- TypeVariable:  a generic parameter in a bounded generic function

Capabilities are resolved against descriptors only, never against values,
so a bound can be checked before any value of the type exists.
"""

from __future__ import annotations

import numbers
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable

import numpy as np

from axiomatic.utils.errors import TypeMismatchError

if TYPE_CHECKING:
    from axiomatic.values.complex import Complex
    from axiomatic.values.list import List


# =============================================================================
# Type System Representation
# =============================================================================


class Type(ABC):
    """
    Base class for all types in the Axiomatic type system.

    Types are immutable and support structural equality.
    """

    @abstractmethod
    def __str__(self) -> str:
        """Return a human-readable string representation of the type."""
        pass

    @abstractmethod
    def __eq__(self, other: object) -> bool:
        """Check structural equality between types."""
        pass

    @abstractmethod
    def __hash__(self) -> int:
        """Return hash for use in dictionaries and sets."""
        pass

    def coerce(self, value: Any) -> Any:
        """
        Convert a value to this type, or raise TypeMismatchError.

        The default accepts only values whose inferred type is this type.
        """
        actual = type_of(value)
        if actual != self:
            raise TypeMismatchError(f"expected a value of type `{self}`, found `{actual}`")
        return value


class ScalarKind:
    """Classification of primitive scalar types."""

    UNSIGNED = "unsigned"
    SIGNED = "signed"
    FLOAT = "float"


@dataclass(frozen=True)
class PrimitiveType(Type):
    """
    A primitive (built-in) scalar type backed by a numpy scalar type.

    Attributes:
        name: Display name, e.g. "f64"
        scalar_type: The numpy scalar type used for values and constants
        kind: One of the ScalarKind values
        operators: Operator traits the type supports ("Add", "Neg", ...)
    """

    name: str
    scalar_type: type
    kind: str
    operators: frozenset[str]

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"PrimitiveType({self.name})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PrimitiveType):
            return False
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(("primitive", self.name))

    @property
    def zero(self) -> Any:
        """The additive identity of this type."""
        return self.scalar_type(0)

    @property
    def one(self) -> Any:
        """The multiplicative identity of this type."""
        return self.scalar_type(1)

    @property
    def is_integral(self) -> bool:
        return self.kind in (ScalarKind.UNSIGNED, ScalarKind.SIGNED)

    def coerce(self, value: Any) -> Any:
        if isinstance(value, (bool, np.bool_)) or not isinstance(
            value, (numbers.Number, np.generic)
        ):
            raise TypeMismatchError(
                f"expected a `{self.name}` scalar, found `{type(value).__name__}`"
            )
        if self.is_integral and isinstance(value, (float, np.floating)):
            if not float(value).is_integer():
                raise TypeMismatchError(f"cannot convert {value!r} to `{self.name}` without loss")
        if self.kind == ScalarKind.UNSIGNED and value < 0:
            raise TypeMismatchError(f"cannot convert negative {value!r} to `{self.name}`")
        return self.scalar_type(value)

    def divide(self, a: Any, b: Any) -> Any:
        """
        Divide two values of this type.

        Integer types truncate toward zero and raise ZeroDivisionError on a
        zero divisor. Float types follow IEEE semantics and return inf/nan.
        """
        if self.is_integral:
            numerator, denominator = int(a), int(b)
            if denominator == 0:
                raise ZeroDivisionError(f"attempt to divide `{self.name}` by zero")
            quotient = abs(numerator) // abs(denominator)
            if (numerator < 0) != (denominator < 0):
                quotient = -quotient
            return type(a)(quotient)
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            result = self.scalar_type(a) / self.scalar_type(b)
        return type(a)(result)


@dataclass(frozen=True)
class ComplexType(Type):
    """
    The type Complex[T] of complex numbers over a component type T.

    Calling the descriptor constructs a value with coerced components:
        Complex[F64](1, 2)  ->  (1.0 + 2.0i)
    """

    component: Type

    def __str__(self) -> str:
        return f"Complex[{self.component}]"

    def __repr__(self) -> str:
        return f"ComplexType({self.component})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComplexType):
            return False
        return self.component == other.component

    def __hash__(self) -> int:
        return hash(("complex", self.component))

    def __call__(self, a: Any, b: Any) -> Complex:
        from axiomatic.values.complex import Complex

        return Complex(self.component.coerce(a), self.component.coerce(b))


@dataclass(frozen=True)
class ListType(Type):
    """
    The type List[T, N] of fixed-length sequences.

    The length is part of the type: List[f64, 2] and List[f64, 3] are
    unrelated types.
    """

    element: Type
    length: int

    def __post_init__(self) -> None:
        if isinstance(self.length, bool) or not isinstance(self.length, int) or self.length < 0:
            raise TypeMismatchError(f"List length must be a non-negative int, got {self.length!r}")

    def __str__(self) -> str:
        return f"List[{self.element}, {self.length}]"

    def __repr__(self) -> str:
        return f"ListType({self.element}, {self.length})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ListType):
            return False
        return self.element == other.element and self.length == other.length

    def __hash__(self) -> int:
        return hash(("list", self.element, self.length))

    def __call__(self, elements: Iterable[Any]) -> List:
        from axiomatic.values.list import List

        elems = tuple(elements)
        if len(elems) != self.length:
            raise TypeMismatchError(
                f"`{self}` requires exactly {self.length} elements, found {len(elems)}"
            )
        return List(elems, element_type=self.element)


# =============================================================================
# Generic Type Variables
# =============================================================================


class TypeVariable(Type):
    """
    A type variable representing a generic type parameter.

    Type variables annotate parameters of bounded generic functions and are
    bound to concrete types during instantiation.

    Examples:
        V = TypeVariable("V")
        F = TypeVariable("F")

        @generic(where={V: VECTOR_SPACE(F)})
        def axpy(a: F, x: V, y: V) -> V: ...
    """

    _next_id = 0

    def __init__(self, name: str) -> None:
        self.name = name
        TypeVariable._next_id += 1
        self.id = TypeVariable._next_id

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"TypeVariable({self.name})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TypeVariable):
            return self.name == other.name and self.id == other.id
        return False

    def __hash__(self) -> int:
        return hash((self.name, self.id))

    def coerce(self, value: Any) -> Any:
        raise TypeMismatchError(f"type variable `{self.name}` has no values until instantiated")


# =============================================================================
# Type Lookup
# =============================================================================


def as_type(obj: Any) -> Type:
    """
    Convert a type-like object into a Type descriptor.

    Accepts descriptors, Python ``int``/``float``, numpy scalar types, numpy
    dtypes and primitive names such as ``"f64"``.
    """
    from axiomatic.core import primitives

    if isinstance(obj, Type):
        return obj
    if isinstance(obj, str):
        return primitives.primitive_named(obj)
    if isinstance(obj, np.dtype):
        return primitives.primitive_for(obj.type)
    if isinstance(obj, type):
        return primitives.primitive_for(obj)
    raise TypeMismatchError(f"`{obj!r}` is not a type")


def type_of(value: Any) -> Type:
    """
    Infer the algebraic type of a value.

    Python ``int`` is ``isize`` and ``float`` is ``f64``; numpy scalars map by
    their scalar type; Complex and List values carry their own type.
    """
    from axiomatic.core import primitives
    from axiomatic.values.base import AlgebraicValue

    if isinstance(value, AlgebraicValue):
        return value.type
    if isinstance(value, (bool, np.bool_)):
        raise TypeMismatchError("`bool` is not an algebraic type")
    return primitives.primitive_for(type(value))
