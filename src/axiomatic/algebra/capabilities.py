"""
Atomic algebraic capabilities and the registry that resolves them.

A capability certifies one algebraic law for a type, optionally relative to
a scalar type:

    Commutative                 a + b == b + a
    Associative                 (a + b) + c == a + (b + c)
    AdditiveIdentity            a + 0 == a
    AdditiveInverse             a + (-a) == 0
    MultiplicativeIdentity[X]   a * 1 == a, with 1 of type X
    Distributive[X]             (a + b) * x == a * x + b * x

Laws are asserted, never checked at runtime. Each capability has a
structural precondition (the operators the type must already support) and
is granted by implementation rules stored in a CapabilityRegistry:

- declared impls for one concrete type ("f64 is Commutative")
- blanket impls for a descriptor class with ``where`` obligations
  ("Complex[T] is Commutative where T is Commutative")

Resolution builds a Resolution tree. A failed tree lists, via
``missing()``, exactly which leaf axioms are absent and why.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional, Sequence

from axiomatic.core.identities import has_one, has_zero
from axiomatic.core.operators import supports
from axiomatic.core.primitives import BUILTIN_PRIMITIVES
from axiomatic.core.types import ComplexType, ListType, PrimitiveType, Type, TypeVariable, as_type
from axiomatic.utils.diagnostics import (
    create_unknown_capability_diagnostic,
    create_unsatisfied_bound_diagnostic,
    suggest_similar,
)
from axiomatic.utils.errors import CapabilityError, TypeMismatchError, UnknownCapabilityError

logger = logging.getLogger("axiomatic.capabilities")


# =============================================================================
# Constraints, Bounds and Obligations
# =============================================================================


class Constraint(ABC):
    """
    Anything a type can be required to satisfy: an atomic capability or a
    composite structure.

    Parametric constraints are relative to a scalar type and are written
    ``Name[X]``. Calling a constraint produces a Bound for generic functions:
    ``VECTOR_SPACE(F)``.
    """

    name: str
    parametric: bool
    description: str

    def render(self, scalar: Optional[Any] = None) -> str:
        if self.parametric and scalar is not None:
            return f"{self.name}[{scalar}]"
        return self.name

    def __call__(self, scalar: Optional[Any] = None) -> Bound:
        return Bound(self, scalar)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"

    @abstractmethod
    def resolve(self, registry: CapabilityRegistry, obligation: Obligation) -> Resolution:
        """Resolve an obligation for this constraint against a registry."""
        pass


@dataclass(frozen=True)
class Bound:
    """
    A constraint applied to a scalar, as written in a generic ``where`` clause.

    The scalar may be a concrete type or a TypeVariable bound at
    instantiation time.
    """

    constraint: Constraint
    scalar: Optional[Any] = None

    def __post_init__(self) -> None:
        if self.constraint.parametric and self.scalar is None:
            raise TypeMismatchError(f"`{self.constraint.name}` requires a scalar type: {self.constraint.name}[X]")
        if not self.constraint.parametric and self.scalar is not None:
            raise TypeMismatchError(f"`{self.constraint.name}` takes no scalar type")
        if self.scalar is not None and not isinstance(self.scalar, TypeVariable):
            object.__setattr__(self, "scalar", as_type(self.scalar))

    def __str__(self) -> str:
        return self.constraint.render(self.scalar)

    def substitute(self, type_args: dict[str, Type]) -> Optional[Type]:
        """The concrete scalar type under a type-variable assignment."""
        if isinstance(self.scalar, TypeVariable):
            return type_args[self.scalar.name]
        return self.scalar


@dataclass(frozen=True)
class Obligation:
    """A single proof goal: ``subject`` satisfies ``constraint`` over ``scalar``."""

    constraint: Constraint
    subject: Type
    scalar: Optional[Type] = None

    def __str__(self) -> str:
        return f"{self.subject}: {self.constraint.render(self.scalar)}"


@dataclass
class Resolution:
    """
    The outcome of resolving an obligation.

    Attributes:
        obligation: What was being proven
        holds: Whether it was proven
        reason: Why it failed at this node (empty when a child failed)
        via: Label of the impl rule used or attempted
        children: Resolutions of the sub-obligations
    """

    obligation: Obligation
    holds: bool
    reason: str = ""
    via: str = ""
    children: tuple[Resolution, ...] = field(default_factory=tuple)

    def __bool__(self) -> bool:
        return self.holds

    def missing(self) -> list[Resolution]:
        """The failed leaves of this tree, deduplicated, in discovery order."""
        if self.holds:
            return []
        failed = [child for child in self.children if not child.holds]
        if not failed:
            return [self]
        seen: set[Obligation] = set()
        result: list[Resolution] = []
        for child in failed:
            for leaf in child.missing():
                if leaf.obligation not in seen:
                    seen.add(leaf.obligation)
                    result.append(leaf)
        return result

    def explain(self, indent: int = 0) -> str:
        """Render the resolution tree, one obligation per line."""
        mark = "✓" if self.holds else "✗"
        line = f"{'  ' * indent}{mark} {self.obligation}"
        if self.via:
            line += f"  [{self.via}]"
        if self.reason:
            line += f"  ({self.reason})"
        lines = [line]
        for child in self.children:
            lines.append(child.explain(indent + 1))
        return "\n".join(lines)


# =============================================================================
# Atomic Capabilities
# =============================================================================

Precondition = Callable[[Type, Optional[Type]], Optional[str]]


class Capability(Constraint):
    """
    An atomic algebraic capability.

    Attributes:
        name: Capability name, e.g. "Commutative"
        description: The law it certifies
        parametric: Whether it is relative to a scalar type
        precondition: Returns a failure reason, or None when the type has the
            operators the law talks about
    """

    def __init__(
        self,
        name: str,
        description: str,
        precondition: Precondition,
        parametric: bool = False,
    ) -> None:
        self.name = name
        self.description = description
        self.precondition = precondition
        self.parametric = parametric

    def resolve(self, registry: CapabilityRegistry, obligation: Obligation) -> Resolution:
        return registry._resolve_capability(obligation)


def _requires_add(subject: Type, scalar: Optional[Type]) -> Optional[str]:
    if not supports(subject, "Add"):
        return f"`{subject}` does not support `+`"
    return None


def _requires_zero(subject: Type, scalar: Optional[Type]) -> Optional[str]:
    reason = _requires_add(subject, scalar)
    if reason is None and not has_zero(subject):
        reason = f"`{subject}` has no Zero constant"
    return reason


def _requires_neg(subject: Type, scalar: Optional[Type]) -> Optional[str]:
    reason = _requires_add(subject, scalar)
    if reason is None and not supports(subject, "Neg"):
        reason = f"`{subject}` does not support unary `-`"
    return reason


def _requires_scalar_mul(subject: Type, scalar: Optional[Type]) -> Optional[str]:
    if not supports(subject, "Mul", scalar):
        return f"`{subject}` does not support `* {scalar}`"
    return None


def _requires_scalar_one(subject: Type, scalar: Optional[Type]) -> Optional[str]:
    reason = _requires_scalar_mul(subject, scalar)
    if reason is None and not has_one(scalar):
        reason = f"`{scalar}` has no One constant"
    return reason


def _requires_own_zero(subject: Type, scalar: Optional[Type]) -> Optional[str]:
    return None if has_zero(subject) else f"`{subject}` has no Zero constant"


def _requires_own_one(subject: Type, scalar: Optional[Type]) -> Optional[str]:
    return None if has_one(subject) else f"`{subject}` has no One constant"


COMMUTATIVE = Capability("Commutative", "a + b == b + a", _requires_add)
ASSOCIATIVE = Capability("Associative", "(a + b) + c == a + (b + c)", _requires_add)
ADDITIVE_IDENTITY = Capability("AdditiveIdentity", "a + 0 == a", _requires_zero)
ADDITIVE_INVERSE = Capability("AdditiveInverse", "a + (-a) == 0", _requires_neg)
MULTIPLICATIVE_IDENTITY = Capability(
    "MultiplicativeIdentity", "a * 1 == a", _requires_scalar_one, parametric=True
)
DISTRIBUTIVE = Capability(
    "Distributive", "(a + b) * x == a * x + b * x", _requires_scalar_mul, parametric=True
)

# Identity constants exposed as capabilities so bounds can demand them
ZERO = Capability("Zero", "has an additive identity constant", _requires_own_zero)
ONE = Capability("One", "has a multiplicative identity constant", _requires_own_one)

ATOMIC_CAPABILITIES: tuple[Capability, ...] = (
    COMMUTATIVE,
    ASSOCIATIVE,
    ADDITIVE_IDENTITY,
    ADDITIVE_INVERSE,
    MULTIPLICATIVE_IDENTITY,
    DISTRIBUTIVE,
)

# Capabilities that Complex and List inherit from their component type
PROPAGATED_CAPABILITIES: tuple[Capability, ...] = (
    COMMUTATIVE,
    ASSOCIATIVE,
    ADDITIVE_IDENTITY,
    ADDITIVE_INVERSE,
)


# =============================================================================
# Implementation Rules
# =============================================================================

Matcher = Callable[[Type, Optional[Type]], bool]
WhereClause = Callable[[Type, Optional[Type]], Sequence[Obligation]]


def _no_obligations(subject: Type, scalar: Optional[Type]) -> Sequence[Obligation]:
    return ()


@dataclass(frozen=True)
class Impl:
    """
    An implementation rule granting a capability.

    Attributes:
        capability: The capability granted
        matches: Whether the rule applies to (subject, scalar)
        where: Sub-obligations that must hold for the rule to apply
        label: Human-readable rule name used in explanations
    """

    capability: Capability
    matches: Matcher
    where: WhereClause = _no_obligations
    label: str = ""


class CapabilityRegistry:
    """
    Stores implementation rules and resolves obligations against them.

    Results are memoised per obligation; adding a rule clears the cache.

    Usage:
        registry = CapabilityRegistry.with_builtins()
        registry.implements(VECTOR_SPACE, List[F64, 3], F64)   # True
        registry.require(FIELD, Complex[F64], F64)             # raises CapabilityError
    """

    def __init__(self) -> None:
        self._impls: dict[Capability, list[Impl]] = {}
        self._constraints: dict[str, Constraint] = {}
        self._cache: dict[Obligation, Resolution] = {}
        self._in_progress: set[Obligation] = set()

    @classmethod
    def with_builtins(cls) -> CapabilityRegistry:
        """A registry with all built-in capabilities, structures and rules."""
        registry = cls()
        install_builtin_rules(registry)
        return registry

    def copy(self) -> CapabilityRegistry:
        """An independent registry with the same rules."""
        clone = CapabilityRegistry()
        clone._impls = {cap: list(impls) for cap, impls in self._impls.items()}
        clone._constraints = dict(self._constraints)
        return clone

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register_constraint(self, constraint: Constraint) -> None:
        """Make a constraint available to ``lookup`` by name."""
        self._constraints[constraint.name] = constraint

    def lookup(self, name: str) -> Constraint:
        """Find a registered constraint by name."""
        constraint = self._constraints.get(name)
        if constraint is None:
            candidates = list(self._constraints)
            diagnostic = create_unknown_capability_diagnostic(name, candidates)
            raise UnknownCapabilityError(
                diagnostic.message, diagnostic, suggestions=suggest_similar(name, candidates)
            )
        return constraint

    @property
    def constraints(self) -> list[Constraint]:
        return list(self._constraints.values())

    def add_impl(self, impl: Impl) -> None:
        """Add an implementation rule."""
        self.register_constraint(impl.capability)
        self._impls.setdefault(impl.capability, []).append(impl)
        self._cache.clear()
        logger.debug(f"Registered impl {impl.label or impl.capability.name}")

    def declare(self, capability: Capability, subject: Any, scalar: Optional[Any] = None) -> None:
        """
        Declare that a concrete type holds a capability.

        The author asserts the law; it is never verified. The structural
        precondition is still enforced at resolution time.
        """
        subject_type = as_type(subject)
        scalar_type = as_type(scalar) if scalar is not None else None
        label = f"declared {Obligation(capability, subject_type, scalar_type)}"

        def matches(t: Type, x: Optional[Type]) -> bool:
            return t == subject_type and (scalar_type is None or x == scalar_type)

        self.add_impl(Impl(capability, matches, label=label))

    def blanket(
        self,
        capability: Capability,
        descriptor_class: type,
        where: WhereClause = _no_obligations,
        label: Optional[str] = None,
    ) -> None:
        """
        Grant a capability to every type described by ``descriptor_class``
        whose ``where`` obligations hold.
        """

        def matches(t: Type, x: Optional[Type]) -> bool:
            return isinstance(t, descriptor_class)

        label = label or f"{capability.name} for {descriptor_class.__name__}"
        self.add_impl(Impl(capability, matches, where, label))

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def obligation(self, constraint: Constraint, subject: Any, scalar: Optional[Any] = None) -> Obligation:
        """Build a normalised obligation from type-like arguments."""
        subject_type = as_type(subject)
        if constraint.parametric:
            if scalar is None:
                raise TypeMismatchError(
                    f"`{constraint.name}` requires a scalar type: {constraint.name}[X]"
                )
            return Obligation(constraint, subject_type, as_type(scalar))
        return Obligation(constraint, subject_type, None)

    def resolve(self, constraint: Constraint, subject: Any, scalar: Optional[Any] = None) -> Resolution:
        """Resolve whether ``subject`` satisfies ``constraint`` over ``scalar``."""
        return self.resolve_obligation(self.obligation(constraint, subject, scalar))

    def resolve_obligation(self, obligation: Obligation) -> Resolution:
        cached = self._cache.get(obligation)
        if cached is not None:
            return cached
        resolution = obligation.constraint.resolve(self, obligation)
        self._cache[obligation] = resolution
        logger.debug(f"Resolved {obligation}: {'holds' if resolution.holds else 'missing'}")
        return resolution

    def _resolve_capability(self, obligation: Obligation) -> Resolution:
        capability = obligation.constraint
        assert isinstance(capability, Capability)

        if obligation in self._in_progress:
            return Resolution(obligation, False, reason="cyclic obligation")

        reason = capability.precondition(obligation.subject, obligation.scalar)
        if reason:
            return Resolution(obligation, False, reason=reason)

        candidates = [
            impl
            for impl in self._impls.get(capability, [])
            if impl.matches(obligation.subject, obligation.scalar)
        ]
        if not candidates:
            return Resolution(
                obligation,
                False,
                reason=f"no implementation of `{capability.render(obligation.scalar)}` for `{obligation.subject}`",
            )

        self._in_progress.add(obligation)
        try:
            first_failure: Optional[Resolution] = None
            for impl in candidates:
                children = tuple(self.resolve_obligation(o) for o in impl.where(obligation.subject, obligation.scalar))
                if all(children):
                    return Resolution(obligation, True, via=impl.label, children=children)
                if first_failure is None:
                    first_failure = Resolution(obligation, False, via=impl.label, children=children)
            assert first_failure is not None
            return first_failure
        finally:
            self._in_progress.discard(obligation)

    def implements(self, constraint: Constraint, subject: Any, scalar: Optional[Any] = None) -> bool:
        """Check whether ``subject`` satisfies ``constraint`` over ``scalar``."""
        return self.resolve(constraint, subject, scalar).holds

    def require(
        self,
        constraint: Constraint,
        subject: Any,
        scalar: Optional[Any] = None,
        required_by: Optional[str] = None,
    ) -> Resolution:
        """
        Resolve a bound or raise CapabilityError naming every missing axiom.

        Args:
            constraint: The capability or structure required
            subject: The type that must satisfy it
            scalar: The scalar type, for parametric constraints
            required_by: Where the bound was written, for the diagnostic

        Returns:
            The successful Resolution
        """
        resolution = self.resolve(constraint, subject, scalar)
        if resolution.holds:
            return resolution

        missing = resolution.missing()
        diagnostic = create_unsatisfied_bound_diagnostic(
            str(resolution.obligation),
            [(str(leaf.obligation), leaf.reason) for leaf in missing],
            required_by,
        )
        logger.info(
            f"Rejected {resolution.obligation}: missing "
            + ", ".join(str(leaf.obligation) for leaf in missing)
        )
        raise CapabilityError(
            diagnostic.message, diagnostic, missing=[leaf.obligation for leaf in missing]
        )


# =============================================================================
# Built-in Rules
# =============================================================================


def declare_scalar_axioms(registry: CapabilityRegistry, primitive: PrimitiveType) -> None:
    """
    Declare the additive axioms for a primitive scalar type.

    AdditiveInverse is only declared when the primitive supports negation.
    MultiplicativeIdentity and Distributive come from the reflexive and
    universal rules.
    """
    for capability in (COMMUTATIVE, ASSOCIATIVE, ADDITIVE_IDENTITY):
        registry.declare(capability, primitive)
    if "Neg" in primitive.operators:
        registry.declare(ADDITIVE_INVERSE, primitive)


def _inherit_from_component(capability: Capability) -> WhereClause:
    def where(subject: Type, scalar: Optional[Type]) -> Sequence[Obligation]:
        assert isinstance(subject, ComplexType)
        return (Obligation(capability, subject.component),)

    return where


def _inherit_from_element(capability: Capability) -> WhereClause:
    def where(subject: Type, scalar: Optional[Type]) -> Sequence[Obligation]:
        assert isinstance(subject, ListType)
        return (Obligation(capability, subject.element),)

    return where


def _component_has_own_identity(subject: Type, scalar: Optional[Type]) -> Sequence[Obligation]:
    assert isinstance(subject, ComplexType)
    return (Obligation(MULTIPLICATIVE_IDENTITY, subject.component, subject.component),)


def _element_has_own_identity(subject: Type, scalar: Optional[Type]) -> Sequence[Obligation]:
    assert isinstance(subject, ListType)
    return (Obligation(MULTIPLICATIVE_IDENTITY, subject.element, subject.element),)


def _any_type(subject: Type, scalar: Optional[Type]) -> bool:
    return True


def _reflexive_primitive(subject: Type, scalar: Optional[Type]) -> bool:
    return isinstance(subject, PrimitiveType) and scalar == subject


def install_builtin_rules(registry: CapabilityRegistry, primitives: Optional[Iterable[PrimitiveType]] = None) -> None:
    """
    Install the built-in capabilities, structures and impl rules.

    - additive axioms declared on the built-in primitives (or ``primitives``);
      primitives registered later opt in through declare_scalar_axioms
    - Complex[T] and List[T, N] inherit the additive axioms from T
    - primitives are MultiplicativeIdentity over themselves
    - Complex[T] and List[T, N] are MultiplicativeIdentity[X] where T is
      MultiplicativeIdentity over itself; the precondition fixes which X
    - Distributive[X] holds for every type multipliable by X
    - Zero and One hold wherever the constant exists
    """
    from axiomatic.algebra.structures import FIELD, VECTOR_SPACE

    for constraint in (*ATOMIC_CAPABILITIES, ZERO, ONE, FIELD, VECTOR_SPACE):
        registry.register_constraint(constraint)

    for primitive in primitives if primitives is not None else BUILTIN_PRIMITIVES:
        declare_scalar_axioms(registry, primitive)

    for capability in PROPAGATED_CAPABILITIES:
        registry.blanket(
            capability,
            ComplexType,
            _inherit_from_component(capability),
            label=f"{capability.name} for Complex[T] where T: {capability.name}",
        )
        registry.blanket(
            capability,
            ListType,
            _inherit_from_element(capability),
            label=f"{capability.name} for List[T, N] where T: {capability.name}",
        )

    registry.add_impl(
        Impl(MULTIPLICATIVE_IDENTITY, _reflexive_primitive, label="MultiplicativeIdentity[T] for primitive T")
    )
    registry.blanket(
        MULTIPLICATIVE_IDENTITY,
        ComplexType,
        _component_has_own_identity,
        label="MultiplicativeIdentity[X] for Complex[T] where T: MultiplicativeIdentity[T]",
    )
    registry.blanket(
        MULTIPLICATIVE_IDENTITY,
        ListType,
        _element_has_own_identity,
        label="MultiplicativeIdentity[X] for List[T, N] where T: MultiplicativeIdentity[T]",
    )

    registry.add_impl(Impl(DISTRIBUTIVE, _any_type, label="Distributive[X] for any V: Mul[X]"))
    registry.add_impl(Impl(ZERO, _any_type, label="Zero constant"))
    registry.add_impl(Impl(ONE, _any_type, label="One constant"))


# =============================================================================
# Default Registry
# =============================================================================

_default_registry: Optional[CapabilityRegistry] = None


def get_default_registry() -> CapabilityRegistry:
    """The process-wide registry with built-in rules, created on first use."""
    global _default_registry
    if _default_registry is None:
        _default_registry = CapabilityRegistry.with_builtins()
    return _default_registry


def _named(constraint: Any, registry: CapabilityRegistry) -> Constraint:
    if isinstance(constraint, str):
        return registry.lookup(constraint)
    return constraint


def implements(
    subject: Any,
    constraint: Any,
    scalar: Optional[Any] = None,
    registry: Optional[CapabilityRegistry] = None,
) -> bool:
    """
    Check whether a type satisfies a capability or structure.

    Examples:
        >>> implements(List[F64, 3], VECTOR_SPACE, F64)
        True
        >>> implements(Complex[F64], "VectorSpace", F64)
        False
    """
    registry = registry or get_default_registry()
    return registry.implements(_named(constraint, registry), subject, scalar)


def require(
    subject: Any,
    constraint: Any,
    scalar: Optional[Any] = None,
    registry: Optional[CapabilityRegistry] = None,
) -> Resolution:
    """Like ``implements`` but raises CapabilityError on failure."""
    registry = registry or get_default_registry()
    return registry.require(_named(constraint, registry), subject, scalar)


def explain(
    subject: Any,
    constraint: Any,
    scalar: Optional[Any] = None,
    registry: Optional[CapabilityRegistry] = None,
) -> str:
    """Render the resolution tree for a type and constraint."""
    registry = registry or get_default_registry()
    return registry.resolve(_named(constraint, registry), subject, scalar).explain()
