"""
Built-in primitive scalar types.

Each primitive is backed by a numpy scalar type, which fixes its Zero/One
constants and its overflow behaviour. Python ``int`` and ``float`` values
are treated as ``isize`` and ``f64``.

Unsigned primitives do not support negation, so they never satisfy
AdditiveInverse and therefore never form a Field.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

import numpy as np

from axiomatic.core.types import PrimitiveType, ScalarKind
from axiomatic.utils.diagnostics import suggest_similar
from axiomatic.utils.errors import TypeMismatchError

_UNSIGNED_OPERATORS = frozenset({"Add", "Sub", "Mul", "Div"})
_SIGNED_OPERATORS = _UNSIGNED_OPERATORS | {"Neg"}

_BY_NAME: dict[str, PrimitiveType] = {}
_BY_SCALAR_TYPE: dict[type, PrimitiveType] = {}


def register_primitive(
    name: str,
    scalar_type: type,
    kind: str,
    python_types: Iterable[type] = (),
    operators: Optional[Iterable[str]] = None,
) -> PrimitiveType:
    """
    Register a primitive scalar type.

    Args:
        name: Display name, unique among primitives
        scalar_type: numpy scalar type backing the primitive
        kind: One of the ScalarKind values
        python_types: Extra Python types whose values map to this primitive
        operators: Supported operator traits; defaults by kind

    Returns:
        The registered PrimitiveType
    """
    if name in _BY_NAME:
        raise ValueError(f"primitive `{name}` is already registered")

    if operators is None:
        operators = _UNSIGNED_OPERATORS if kind == ScalarKind.UNSIGNED else _SIGNED_OPERATORS

    primitive = PrimitiveType(name, scalar_type, kind, frozenset(operators))
    _BY_NAME[name] = primitive
    for py_type in (scalar_type, *python_types):
        _BY_SCALAR_TYPE.setdefault(py_type, primitive)
    return primitive


def unregister_primitive(name: str) -> None:
    """
    Remove a primitive registered with ``register_primitive``.

    Built-in primitives cannot be removed.
    """
    if name in {p.name for p in BUILTIN_PRIMITIVES}:
        raise ValueError(f"built-in primitive `{name}` cannot be unregistered")
    primitive = _BY_NAME.pop(name, None)
    if primitive is None:
        raise TypeMismatchError(f"unknown primitive type `{name}`")
    for py_type in [t for t, p in _BY_SCALAR_TYPE.items() if p is primitive]:
        del _BY_SCALAR_TYPE[py_type]


def primitive_for(py_type: type) -> PrimitiveType:
    """Look up the primitive for a Python or numpy scalar type."""
    primitive = _BY_SCALAR_TYPE.get(py_type)
    if primitive is None:
        raise TypeMismatchError(f"`{py_type.__name__}` is not an algebraic type")
    return primitive


def primitive_named(name: str) -> PrimitiveType:
    """Look up a primitive by its display name."""
    primitive = _BY_NAME.get(name)
    if primitive is None:
        similar = suggest_similar(name, list(_BY_NAME), max_distance=1)
        hint = f"; did you mean `{similar[0]}`?" if similar else ""
        raise TypeMismatchError(f"unknown primitive type `{name}`{hint}")
    return primitive


def all_primitives() -> list[PrimitiveType]:
    """All registered primitives in registration order."""
    return list(_BY_NAME.values())


def divide(a: Any, b: Any) -> Any:
    """
    Divide ``a`` by ``b`` with the semantics of the operands' type.

    Algebraic values use their own ``/``; primitives use
    PrimitiveType.divide so that integers stay integers.
    """
    from axiomatic.core.types import type_of

    kind = type_of(a)
    if isinstance(kind, PrimitiveType):
        return kind.divide(a, b)
    return a / b


USIZE = register_primitive("usize", np.uint64, ScalarKind.UNSIGNED)
ISIZE = register_primitive("isize", np.int64, ScalarKind.SIGNED, python_types=(int,))
U32 = register_primitive("u32", np.uint32, ScalarKind.UNSIGNED)
I32 = register_primitive("i32", np.int32, ScalarKind.SIGNED)
F32 = register_primitive("f32", np.float32, ScalarKind.FLOAT)
F64 = register_primitive("f64", np.float64, ScalarKind.FLOAT, python_types=(float,))

# The primitives that carry the scalar axioms in every built-in registry
BUILTIN_PRIMITIVES: tuple[PrimitiveType, ...] = (USIZE, ISIZE, U32, I32, F32, F64)
