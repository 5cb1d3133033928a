"""
Axiomatic - algebraic structures as composable capabilities.

Atomic axioms (commutativity, associativity, identities, inverses,
distributivity) are attached to numeric types as capabilities. Complex
numbers and fixed-length vectors inherit them from their component types,
and composite structures such as Field and VectorSpace are derived as the
conjunction of their axioms. Generic functions state capability bounds and
reject invalid instantiations before running.
"""

from axiomatic.algebra import (
    ADDITIVE_IDENTITY,
    ADDITIVE_INVERSE,
    ASSOCIATIVE,
    COMMUTATIVE,
    DISTRIBUTIVE,
    FIELD,
    MULTIPLICATIVE_IDENTITY,
    ONE,
    VECTOR_SPACE,
    ZERO,
    CapabilityRegistry,
    explain,
    generic,
    get_default_registry,
    implements,
    require,
)
from axiomatic.config import Settings, configure_logging, get_settings, set_settings
from axiomatic.core import (
    F32,
    F64,
    I32,
    ISIZE,
    U32,
    USIZE,
    TypeVariable,
    as_type,
    one,
    type_of,
    zero,
)
from axiomatic.utils.errors import (
    AxiomaticError,
    CapabilityError,
    OperatorNotSupportedError,
    TypeMismatchError,
    UnknownCapabilityError,
)
from axiomatic.values import Complex, List, allclose

__version__ = "0.1.0"
__all__ = [
    # Values
    "Complex",
    "List",
    "allclose",
    # Types
    "USIZE",
    "ISIZE",
    "U32",
    "I32",
    "F32",
    "F64",
    "TypeVariable",
    "as_type",
    "type_of",
    "zero",
    "one",
    # Capabilities and structures
    "COMMUTATIVE",
    "ASSOCIATIVE",
    "ADDITIVE_IDENTITY",
    "ADDITIVE_INVERSE",
    "MULTIPLICATIVE_IDENTITY",
    "DISTRIBUTIVE",
    "ZERO",
    "ONE",
    "FIELD",
    "VECTOR_SPACE",
    "CapabilityRegistry",
    "get_default_registry",
    "implements",
    "require",
    "explain",
    "generic",
    # Configuration
    "Settings",
    "get_settings",
    "set_settings",
    "configure_logging",
    # Errors
    "AxiomaticError",
    "CapabilityError",
    "OperatorNotSupportedError",
    "TypeMismatchError",
    "UnknownCapabilityError",
]
