"""
Base class for algebraic values and approximate comparison.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

import numpy as np

from axiomatic.core.operators import OPERATOR_TRAITS, OperatorKind, supports
from axiomatic.core.types import Type, type_of
from axiomatic.utils.diagnostics import create_unsupported_operator_diagnostic
from axiomatic.utils.errors import OperatorNotSupportedError, TypeMismatchError


class AlgebraicValue(ABC):
    """
    An immutable value whose type is a wrapper descriptor (Complex, List).

    Operators check the structural precondition against the descriptor
    before computing, so an operator a type does not support fails the same
    way for every value of that type.
    """

    __slots__ = ()

    # Keep numpy scalars from broadcasting over our values in reflected ops
    __array_ufunc__ = None

    @property
    @abstractmethod
    def type(self) -> Type:
        """The type descriptor of this value."""
        pass

    @abstractmethod
    def components(self) -> tuple[Any, ...]:
        """All primitive leaves of this value, in order."""
        pass

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} values are immutable")

    def _init_slot(self, name: str, value: Any) -> None:
        object.__setattr__(self, name, value)

    def _require(self, trait: str, rhs: Optional[Type] = None) -> None:
        if supports(self.type, trait, rhs):
            return
        symbol = OPERATOR_TRAITS[trait].symbol
        if OPERATOR_TRAITS[trait].kind == OperatorKind.BINARY:
            right = self.type if rhs is None else rhs
            diagnostic = create_unsupported_operator_diagnostic(symbol, str(self.type), str(right))
        else:
            diagnostic = create_unsupported_operator_diagnostic(symbol, str(self.type))
        raise OperatorNotSupportedError(diagnostic.message, diagnostic)

    def _require_same_type(self, other: AlgebraicValue) -> None:
        if other.type != self.type:
            raise TypeMismatchError(f"mismatched types: expected `{self.type}`, found `{other.type}`")


def leaves(value: Any) -> tuple[Any, ...]:
    """Flatten a value into its primitive leaves."""
    if isinstance(value, AlgebraicValue):
        return value.components()
    return (value,)


def leaf_repr(value: Any) -> str:
    """Repr of a component, with numpy scalars shown as plain numbers."""
    if isinstance(value, np.generic):
        return repr(value.item())
    return repr(value)


def allclose(a: Any, b: Any, rtol: Optional[float] = None, atol: Optional[float] = None) -> bool:
    """
    Compare two values of the same type with floating point tolerance.

    Values of different types are never close. Tolerances default to the
    active settings.
    """
    from axiomatic.config import get_settings

    if type_of(a) != type_of(b):
        return False
    settings = get_settings()
    left = np.asarray(leaves(a), dtype=np.float64)
    right = np.asarray(leaves(b), dtype=np.float64)
    return bool(
        np.allclose(
            left,
            right,
            rtol=settings.rtol if rtol is None else rtol,
            atol=settings.atol if atol is None else atol,
        )
    )
