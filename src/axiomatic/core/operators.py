"""
Operator traits and structural operator support.

This module answers "does type V support operator X with right operand R?"
purely from type descriptors. It is the structural precondition layer the
algebraic capabilities are built on.

Each operator trait maps to:
- The operator symbol used in messages (e.g., "+" for Add)
- The Python magic method name (e.g., "__add__")
- Its kind (binary, unary or index)

Support rules are registered per descriptor class, so each wrapper type has
exactly one generic rule conditioned on its component type.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from functools import lru_cache
from typing import Callable, Optional

from axiomatic.core.identities import has_one
from axiomatic.core.types import ComplexType, ListType, PrimitiveType, Type


class OperatorKind(Enum):
    """Classification of operator types."""

    BINARY = auto()
    UNARY = auto()
    INDEX = auto()


@dataclass(frozen=True)
class OperatorTraitInfo:
    """
    Information about an operator trait.

    Attributes:
        symbol: The operator symbol, used in diagnostics
        python_magic: The Python magic method name (e.g., "__add__")
        kind: The kind of operator (binary, unary, index)
    """

    symbol: str
    python_magic: str
    kind: OperatorKind


OPERATOR_TRAITS: dict[str, OperatorTraitInfo] = {
    "Add": OperatorTraitInfo("+", "__add__", OperatorKind.BINARY),
    "Sub": OperatorTraitInfo("-", "__sub__", OperatorKind.BINARY),
    "Mul": OperatorTraitInfo("*", "__mul__", OperatorKind.BINARY),
    "Div": OperatorTraitInfo("/", "__truediv__", OperatorKind.BINARY),
    "Neg": OperatorTraitInfo("-", "__neg__", OperatorKind.UNARY),
    "Index": OperatorTraitInfo("[]", "__getitem__", OperatorKind.INDEX),
}


def is_operator_trait(trait_name: str) -> bool:
    """Check if a trait name is an operator trait."""
    return trait_name in OPERATOR_TRAITS


def operator_symbol(trait_name: str) -> str:
    """Get the operator symbol for an operator trait."""
    return OPERATOR_TRAITS[trait_name].symbol


# =============================================================================
# Support Rules
# =============================================================================

SupportRule = Callable[[Type, str, Type], bool]

_RULES: dict[type, SupportRule] = {}


def register_operator_rule(descriptor_class: type) -> Callable[[SupportRule], SupportRule]:
    """
    Register the operator support rule for a descriptor class.

    The rule receives (subject, trait, rhs) and returns whether the operator
    is defined. For unary and index traits rhs is the subject itself.
    """

    def decorator(rule: SupportRule) -> SupportRule:
        _RULES[descriptor_class] = rule
        supports.cache_clear()
        return rule

    return decorator


@lru_cache(maxsize=None)
def supports(subject: Type, trait: str, rhs: Optional[Type] = None) -> bool:
    """
    Check whether ``subject`` supports an operator trait.

    Args:
        subject: Left operand type (or the operand of a unary operator)
        trait: Operator trait name, e.g. "Mul"
        rhs: Right operand type; defaults to ``subject``

    Returns:
        True if ``subject <op> rhs`` is defined
    """
    if trait not in OPERATOR_TRAITS:
        raise KeyError(f"unknown operator trait `{trait}`")
    rule = _RULES.get(type(subject))
    if rule is None:
        return False
    return rule(subject, trait, subject if rhs is None else rhs)


@register_operator_rule(PrimitiveType)
def _primitive_rule(subject: Type, trait: str, rhs: Type) -> bool:
    assert isinstance(subject, PrimitiveType)
    if trait not in subject.operators:
        return False
    if OPERATOR_TRAITS[trait].kind == OperatorKind.BINARY:
        return rhs == subject
    return True


@register_operator_rule(ComplexType)
def _complex_rule(subject: Type, trait: str, rhs: Type) -> bool:
    assert isinstance(subject, ComplexType)
    t = subject.component
    # Complex numbers only combine with complex numbers of the same type
    if OPERATOR_TRAITS[trait].kind == OperatorKind.BINARY and rhs != subject:
        return False
    if trait == "Add":
        return supports(t, "Add")
    if trait == "Neg":
        return supports(t, "Neg")
    if trait == "Sub":
        return supports(t, "Neg") and supports(t, "Add")
    if trait == "Mul":
        return all(supports(t, op) for op in ("Mul", "Sub", "Add"))
    if trait == "Div":
        return all(supports(t, op) for op in ("Mul", "Div", "Add", "Sub")) and has_one(t)
    return False


@register_operator_rule(ListType)
def _list_rule(subject: Type, trait: str, rhs: Type) -> bool:
    assert isinstance(subject, ListType)
    t = subject.element
    if trait == "Index":
        return True
    if trait == "Neg":
        return supports(t, "Neg")
    if trait == "Add":
        return rhs == subject and supports(t, "Add")
    if trait == "Sub":
        return rhs == subject and supports(t, "Add") and supports(t, "Neg")
    # Mul and Div are scalar operations by the element type
    if trait in ("Mul", "Div"):
        return rhs == t and supports(t, trait)
    return False
