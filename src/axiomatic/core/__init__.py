"""
Axiomatic Core Package.

Type descriptors, primitive scalars, identity constants and operator support.
"""

from axiomatic.core.identities import has_one, has_zero, one, zero
from axiomatic.core.operators import (
    OPERATOR_TRAITS,
    OperatorKind,
    OperatorTraitInfo,
    register_operator_rule,
    supports,
)
from axiomatic.core.primitives import (
    F32,
    F64,
    I32,
    ISIZE,
    U32,
    USIZE,
    BUILTIN_PRIMITIVES,
    all_primitives,
    divide,
    primitive_for,
    primitive_named,
    register_primitive,
    unregister_primitive,
)
from axiomatic.core.types import (
    ComplexType,
    ListType,
    PrimitiveType,
    ScalarKind,
    Type,
    TypeVariable,
    as_type,
    type_of,
)

__all__ = [
    # Types
    "Type",
    "PrimitiveType",
    "ComplexType",
    "ListType",
    "TypeVariable",
    "ScalarKind",
    "as_type",
    "type_of",
    # Primitives
    "USIZE",
    "ISIZE",
    "U32",
    "I32",
    "F32",
    "F64",
    "register_primitive",
    "primitive_for",
    "primitive_named",
    "all_primitives",
    "BUILTIN_PRIMITIVES",
    "unregister_primitive",
    "divide",
    # Identities
    "zero",
    "one",
    "has_zero",
    "has_one",
    # Operators
    "OPERATOR_TRAITS",
    "OperatorKind",
    "OperatorTraitInfo",
    "register_operator_rule",
    "supports",
]
