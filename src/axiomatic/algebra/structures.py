"""
Composite algebraic structures.

A structure is a conjunction of requirements and is never implemented
directly: a type satisfies it exactly when every requirement resolves.

    Field[F]        Commutative, Associative, AdditiveIdentity,
                    AdditiveInverse, MultiplicativeIdentity[F], Distributive[F]
    VectorSpace[F]  Field[F], and F has a One constant
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from axiomatic.algebra.capabilities import (
    ADDITIVE_IDENTITY,
    ADDITIVE_INVERSE,
    ASSOCIATIVE,
    COMMUTATIVE,
    DISTRIBUTIVE,
    MULTIPLICATIVE_IDENTITY,
    ONE,
    CapabilityRegistry,
    Constraint,
    Obligation,
    Resolution,
)


@dataclass(frozen=True)
class Requirement:
    """
    One conjunct of a structure.

    Attributes:
        constraint: The capability or structure required
        on_scalar: Apply to the scalar type F instead of the subject V
    """

    constraint: Constraint
    on_scalar: bool = False


class Structure(Constraint):
    """A named conjunction of requirements, parameterised over a scalar type."""

    def __init__(
        self,
        name: str,
        requirements: Iterable[Union[Requirement, Constraint]],
        description: str = "",
    ) -> None:
        self.name = name
        self.description = description
        self.parametric = True
        self.requirements = tuple(
            r if isinstance(r, Requirement) else Requirement(r) for r in requirements
        )

    def obligations(self, obligation: Obligation) -> tuple[Obligation, ...]:
        """The sub-obligations of this structure for one subject and scalar."""
        result = []
        for requirement in self.requirements:
            target = obligation.scalar if requirement.on_scalar else obligation.subject
            scalar = obligation.scalar if requirement.constraint.parametric else None
            result.append(Obligation(requirement.constraint, target, scalar))
        return tuple(result)

    def resolve(self, registry: CapabilityRegistry, obligation: Obligation) -> Resolution:
        children = tuple(registry.resolve_obligation(o) for o in self.obligations(obligation))
        return Resolution(obligation, all(children), via=f"{self.name} conjunction", children=children)


FIELD = Structure(
    "Field",
    (
        COMMUTATIVE,
        ASSOCIATIVE,
        ADDITIVE_IDENTITY,
        ADDITIVE_INVERSE,
        MULTIPLICATIVE_IDENTITY,
        DISTRIBUTIVE,
    ),
    description="all six atomic axioms over the scalar F",
)

VECTOR_SPACE = Structure(
    "VectorSpace",
    (FIELD, Requirement(ONE, on_scalar=True)),
    description="Field[F] where the scalar F has a One constant",
)
