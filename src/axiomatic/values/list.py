"""
Fixed-length homogeneous sequences.

``List[T, N]`` holds exactly N elements of type T. The length is part of
the type, so lists of different lengths never combine. Arithmetic is
element-wise; multiplication and division are by a single scalar of the
element type.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Optional

from axiomatic.core.identities import zero
from axiomatic.core.operators import supports
from axiomatic.core.primitives import divide
from axiomatic.core.types import ListType, Type, as_type, type_of
from axiomatic.utils.diagnostics import create_unsupported_operator_diagnostic
from axiomatic.utils.errors import OperatorNotSupportedError, TypeMismatchError
from axiomatic.values.base import AlgebraicValue, leaf_repr, leaves


class List(AlgebraicValue):
    """
    An immutable fixed-length vector.

    The element type is inferred from the elements unless ``element_type``
    is given, in which case every element is coerced to it. Subscripting the
    class gives the type descriptor: ``List[F64, 3]`` is ``List[f64, 3]``.
    """

    __slots__ = ("_elems", "_type")

    def __init__(self, elements: Iterable[Any], element_type: Optional[Type] = None) -> None:
        elems = tuple(elements)
        if element_type is not None:
            element_type = as_type(element_type)
            elems = tuple(element_type.coerce(e) for e in elems)
        elif not elems:
            raise TypeMismatchError("cannot infer the element type of an empty List")
        else:
            element_type = type_of(elems[0])
            for e in elems[1:]:
                actual = type_of(e)
                if actual != element_type:
                    raise TypeMismatchError(
                        f"List elements must share a type, found `{element_type}` and `{actual}`"
                    )
            # Python int and float become isize and f64 scalars
            elems = tuple(element_type.coerce(e) for e in elems)
        self._init_slot("_elems", elems)
        self._init_slot("_type", ListType(element_type, len(elems)))

    def __class_getitem__(cls, params: Any) -> ListType:
        if not isinstance(params, tuple) or len(params) != 2:
            raise TypeMismatchError("List takes an element type and a length: List[T, N]")
        element, length = params
        return ListType(as_type(element), length)

    @classmethod
    def _from_elements(cls, elems: Iterable[Any], element_type: Type) -> List:
        # Elements produced by arithmetic already have the element type
        result = object.__new__(cls)
        elems = tuple(elems)
        result._init_slot("_elems", elems)
        result._init_slot("_type", ListType(element_type, len(elems)))
        return result

    @property
    def type(self) -> ListType:
        return self._type

    @property
    def element_type(self) -> Type:
        return self._type.element

    def components(self) -> tuple[Any, ...]:
        return tuple(leaf for e in self._elems for leaf in leaves(e))

    # -------------------------------------------------------------------------
    # Sequence access
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._elems)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._elems)

    def __getitem__(self, index: Any) -> Any:
        # Out-of-range indices raise IndexError from the underlying tuple
        return self._elems[index]

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def __add__(self, other: Any) -> List:
        if not isinstance(other, List):
            return NotImplemented
        self._require_same_type(other)
        self._require("Add")
        return List._from_elements(
            (a + b for a, b in zip(self._elems, other._elems)), self.element_type
        )

    def __neg__(self) -> List:
        self._require("Neg")
        return List._from_elements((-a for a in self._elems), self.element_type)

    def __sub__(self, other: Any) -> List:
        if not isinstance(other, List):
            return NotImplemented
        self._require_same_type(other)
        self._require("Sub")
        return self + (-other)

    def _scalar_type(self, scalar: Any) -> Optional[Type]:
        if isinstance(scalar, List):
            return None
        try:
            return type_of(scalar)
        except TypeMismatchError:
            return None

    def __mul__(self, scalar: Any) -> List:
        scalar_type = self._scalar_type(scalar)
        if scalar_type is None:
            return NotImplemented
        if scalar_type != self.element_type:
            raise TypeMismatchError(
                f"cannot scale `{self._type}` by `{scalar_type}`: expected `{self.element_type}`"
            )
        self._require("Mul", scalar_type)
        return List._from_elements((a * scalar for a in self._elems), self.element_type)

    def __rmul__(self, scalar: Any) -> List:
        return self.__mul__(scalar)

    def __truediv__(self, scalar: Any) -> List:
        scalar_type = self._scalar_type(scalar)
        if scalar_type is None:
            return NotImplemented
        if scalar_type != self.element_type:
            raise TypeMismatchError(
                f"cannot divide `{self._type}` by `{scalar_type}`: expected `{self.element_type}`"
            )
        self._require("Div", scalar_type)
        return List._from_elements((divide(a, scalar) for a in self._elems), self.element_type)

    def dot(self, other: List) -> Any:
        """Sum of element-wise products, starting from the element type's Zero."""
        self._require_same_type(other)
        self._require("Add")
        element = self.element_type
        if not supports(element, "Mul"):
            diagnostic = create_unsupported_operator_diagnostic("*", str(element), str(element))
            raise OperatorNotSupportedError(diagnostic.message, diagnostic)
        total = zero(element)
        for a, b in zip(self._elems, other._elems):
            total = total + a * b
        return total

    # -------------------------------------------------------------------------
    # Comparison and display
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, List) or other._type != self._type:
            return False
        return all(bool(a == b) for a, b in zip(self._elems, other._elems))

    def __hash__(self) -> int:
        return hash(("List", self._elems))

    def __str__(self) -> str:
        return "[" + ", ".join(str(e) for e in self._elems) + "]"

    def __repr__(self) -> str:
        return "List([" + ", ".join(leaf_repr(e) for e in self._elems) + "])"
