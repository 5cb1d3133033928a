"""
Axiomatic Algebra Package.

Atomic capabilities, composite structures and bounded generic functions.
"""

from axiomatic.algebra.capabilities import (
    ADDITIVE_IDENTITY,
    ADDITIVE_INVERSE,
    ASSOCIATIVE,
    ATOMIC_CAPABILITIES,
    COMMUTATIVE,
    DISTRIBUTIVE,
    MULTIPLICATIVE_IDENTITY,
    ONE,
    ZERO,
    Bound,
    Capability,
    CapabilityRegistry,
    Constraint,
    Impl,
    Obligation,
    Resolution,
    declare_scalar_axioms,
    explain,
    get_default_registry,
    implements,
    install_builtin_rules,
    require,
)
from axiomatic.algebra.generics import GenericFunction, Instantiation, generic
from axiomatic.algebra.structures import FIELD, VECTOR_SPACE, Requirement, Structure

__all__ = [
    # Capabilities
    "Capability",
    "Constraint",
    "Bound",
    "Obligation",
    "Resolution",
    "Impl",
    "CapabilityRegistry",
    "COMMUTATIVE",
    "ASSOCIATIVE",
    "ADDITIVE_IDENTITY",
    "ADDITIVE_INVERSE",
    "MULTIPLICATIVE_IDENTITY",
    "DISTRIBUTIVE",
    "ZERO",
    "ONE",
    "ATOMIC_CAPABILITIES",
    "declare_scalar_axioms",
    "install_builtin_rules",
    "get_default_registry",
    "implements",
    "require",
    "explain",
    # Structures
    "Structure",
    "Requirement",
    "FIELD",
    "VECTOR_SPACE",
    # Generics
    "generic",
    "GenericFunction",
    "Instantiation",
]
