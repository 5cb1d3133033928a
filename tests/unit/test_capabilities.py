"""
Unit tests for atomic capabilities and the capability registry.
"""

import pytest

from axiomatic.algebra.capabilities import (
    ADDITIVE_IDENTITY,
    ADDITIVE_INVERSE,
    ASSOCIATIVE,
    COMMUTATIVE,
    DISTRIBUTIVE,
    MULTIPLICATIVE_IDENTITY,
    ONE,
    ZERO,
    Bound,
    CapabilityRegistry,
    Impl,
    declare_scalar_axioms,
    explain,
    implements,
    install_builtin_rules,
    require,
)
from axiomatic.algebra.structures import FIELD
from axiomatic.core.primitives import BUILTIN_PRIMITIVES, F32, F64, I32, ISIZE, USIZE
from axiomatic.utils.errors import CapabilityError, TypeMismatchError, UnknownCapabilityError
from axiomatic.values import Complex, List


class TestPrimitiveCapabilities:
    """Tests for capabilities declared on primitives."""

    @pytest.mark.parametrize("primitive", [USIZE, ISIZE, I32, F32, F64])
    @pytest.mark.parametrize("capability", [COMMUTATIVE, ASSOCIATIVE, ADDITIVE_IDENTITY])
    def test_additive_axioms_on_all_primitives(self, registry, primitive, capability):
        """Test every primitive holds the additive axioms."""
        assert registry.implements(capability, primitive)

    def test_additive_inverse_needs_negation(self, registry):
        """Test unsigned primitives lack AdditiveInverse."""
        assert registry.implements(ADDITIVE_INVERSE, ISIZE)
        assert registry.implements(ADDITIVE_INVERSE, F64)
        assert not registry.implements(ADDITIVE_INVERSE, USIZE)

    def test_multiplicative_identity_is_reflexive(self, registry):
        """Test a primitive is MultiplicativeIdentity over itself only."""
        assert registry.implements(MULTIPLICATIVE_IDENTITY, F64, F64)
        assert registry.implements(MULTIPLICATIVE_IDENTITY, USIZE, USIZE)
        assert not registry.implements(MULTIPLICATIVE_IDENTITY, F64, F32)

    def test_distributive_follows_scalar_multiplication(self, registry):
        """Test Distributive[X] holds exactly where V * X exists."""
        assert registry.implements(DISTRIBUTIVE, ISIZE, ISIZE)
        assert not registry.implements(DISTRIBUTIVE, ISIZE, F64)

    def test_identity_constant_capabilities(self, registry, opaque_type):
        """Test Zero and One hold where the constants exist."""
        assert registry.implements(ZERO, F64)
        assert registry.implements(ONE, Complex[ISIZE])
        assert not registry.implements(ONE, opaque_type)


class TestPropagation:
    """Tests for capabilities inherited through Complex and List."""

    @pytest.mark.parametrize(
        "capability", [COMMUTATIVE, ASSOCIATIVE, ADDITIVE_IDENTITY, ADDITIVE_INVERSE]
    )
    def test_complex_inherits(self, registry, capability):
        """Test Complex[T] holds what T holds."""
        resolution = registry.resolve(capability, Complex[F64])
        assert resolution.holds
        assert "Complex[T]" in resolution.via
        assert resolution.children[0].obligation.subject == F64

    @pytest.mark.parametrize(
        "capability", [COMMUTATIVE, ASSOCIATIVE, ADDITIVE_IDENTITY, ADDITIVE_INVERSE]
    )
    def test_list_inherits(self, registry, capability):
        """Test List[T, N] holds what T holds."""
        assert registry.implements(capability, List[ISIZE, 4])

    def test_nested_generic_parameters(self, registry):
        """Test propagation through several wrapper layers."""
        nested = List[Complex[Complex[F64]], 2]
        assert registry.implements(ADDITIVE_INVERSE, nested)
        assert registry.implements(MULTIPLICATIVE_IDENTITY, nested, Complex[Complex[F64]])

    def test_missing_capability_propagates(self, registry):
        """Test a wrapper over usize lacks AdditiveInverse."""
        assert not registry.implements(ADDITIVE_INVERSE, Complex[USIZE])
        assert not registry.implements(ADDITIVE_INVERSE, List[Complex[USIZE], 3])

    def test_complex_identity_only_over_itself(self, registry):
        """Test Complex[T] is not MultiplicativeIdentity over T."""
        assert registry.implements(MULTIPLICATIVE_IDENTITY, Complex[F64], Complex[F64])
        assert not registry.implements(MULTIPLICATIVE_IDENTITY, Complex[F64], F64)

    def test_list_identity_over_element(self, registry):
        """Test List[T, N] is MultiplicativeIdentity over T."""
        assert registry.implements(MULTIPLICATIVE_IDENTITY, List[F64, 3], F64)
        assert not registry.implements(MULTIPLICATIVE_IDENTITY, List[F64, 3], List[F64, 3])


class TestResolution:
    """Tests for resolution trees and failure reasons."""

    def test_precondition_reason(self, registry):
        """Test a failed precondition names the missing operator."""
        resolution = registry.resolve(ADDITIVE_INVERSE, USIZE)
        assert not resolution
        assert resolution.reason == "`usize` does not support unary `-`"

    def test_scalar_multiplication_reason(self, registry):
        """Test the reason for a missing scalar product."""
        resolution = registry.resolve(DISTRIBUTIVE, Complex[F64], F64)
        assert resolution.reason == "`Complex[f64]` does not support `* f64`"

    def test_missing_leaves(self, registry):
        """Test missing() returns the failed leaves only."""
        resolution = registry.resolve(FIELD, List[USIZE, 3], USIZE)
        missing = resolution.missing()
        assert [str(leaf.obligation) for leaf in missing] == ["List[usize, 3]: AdditiveInverse"]

    def test_explain_renders_tree(self, registry):
        """Test the explanation lists every obligation."""
        text = registry.resolve(FIELD, Complex[F64], F64).explain()
        assert "✗ Complex[f64]: Field[f64]" in text
        assert "✓ Complex[f64]: Commutative" in text
        assert "✓ f64: Commutative" in text
        assert "✗ Complex[f64]: Distributive[f64]" in text

    def test_parametric_requires_scalar(self, registry):
        """Test parametric capabilities need a scalar type."""
        with pytest.raises(TypeMismatchError):
            registry.resolve(MULTIPLICATIVE_IDENTITY, F64)

    def test_non_parametric_ignores_scalar(self, registry):
        """Test a scalar passed to a non-parametric capability is dropped."""
        assert registry.resolve(COMMUTATIVE, F64, F64).obligation.scalar is None

    def test_results_are_cached(self, registry):
        """Test repeated resolution returns the same result."""
        first = registry.resolve(FIELD, F64, F64)
        assert registry.resolve(FIELD, F64, F64) is first


class TestBounds:
    """Tests for Bound construction."""

    def test_parametric_bound(self):
        """Test calling a parametric capability builds a bound."""
        bound = MULTIPLICATIVE_IDENTITY(F64)
        assert isinstance(bound, Bound)
        assert str(bound) == "MultiplicativeIdentity[f64]"

    def test_parametric_bound_needs_scalar(self):
        """Test a parametric bound without scalar is rejected."""
        with pytest.raises(TypeMismatchError):
            MULTIPLICATIVE_IDENTITY()

    def test_plain_bound_takes_no_scalar(self):
        """Test a non-parametric bound with a scalar is rejected."""
        with pytest.raises(TypeMismatchError):
            COMMUTATIVE(F64)


class TestRegistry:
    """Tests for declaring rules on a registry."""

    def test_empty_registry_has_no_impls(self, empty_registry):
        """Test nothing holds without rules."""
        resolution = empty_registry.resolve(COMMUTATIVE, F64)
        assert not resolution
        assert "no implementation" in resolution.reason

    def test_declare_clears_cache(self, empty_registry):
        """Test declaring an impl updates earlier answers."""
        assert not empty_registry.implements(COMMUTATIVE, F64)
        empty_registry.declare(COMMUTATIVE, F64)
        assert empty_registry.implements(COMMUTATIVE, F64)

    def test_declare_does_not_bypass_precondition(self, empty_registry):
        """Test a declared axiom still needs its operators."""
        empty_registry.declare(ADDITIVE_INVERSE, USIZE)
        assert not empty_registry.implements(ADDITIVE_INVERSE, USIZE)

    def test_blanket_rule(self, empty_registry):
        """Test a blanket rule with a where clause."""
        from axiomatic.algebra.capabilities import Obligation
        from axiomatic.core.types import ComplexType

        empty_registry.declare(COMMUTATIVE, I32)
        empty_registry.blanket(
            COMMUTATIVE,
            ComplexType,
            lambda t, x: [Obligation(COMMUTATIVE, t.component)],
        )
        assert empty_registry.implements(COMMUTATIVE, Complex[I32])
        assert not empty_registry.implements(COMMUTATIVE, Complex[F64])

    def test_custom_impl(self, empty_registry):
        """Test adding a raw Impl."""
        empty_registry.add_impl(Impl(ASSOCIATIVE, lambda t, x: t == F64, label="f64 only"))
        assert empty_registry.resolve(ASSOCIATIVE, F64).via == "f64 only"

    def test_new_primitive_opts_in(self, i16):
        """Test a newly registered primitive joins by declaring its axioms."""
        registry = CapabilityRegistry.with_builtins()
        assert not registry.implements(FIELD, i16, i16)
        declare_scalar_axioms(registry, i16)
        assert registry.implements(FIELD, i16, i16)
        assert registry.implements(FIELD, Complex[i16], Complex[i16])

    def test_registration_order_does_not_grant_axioms(self, i16):
        """Test registries built after register_primitive still exclude it."""
        assert not CapabilityRegistry.with_builtins().implements(COMMUTATIVE, i16)
        assert not implements(i16, COMMUTATIVE)
        assert not implements(i16, FIELD, i16)

    def test_builtins_cover_default_primitives(self, registry):
        """Test every built-in primitive carries the additive axioms."""
        for primitive in BUILTIN_PRIMITIVES:
            assert registry.implements(ASSOCIATIVE, primitive)

    def test_copy_is_independent(self):
        """Test rules added to a copy stay in the copy."""
        base = CapabilityRegistry()
        install_builtin_rules(base, primitives=[F64])
        clone = base.copy()
        declare_scalar_axioms(clone, I32)
        assert clone.implements(COMMUTATIVE, I32)
        assert clone.implements(COMMUTATIVE, F64)
        assert not base.implements(COMMUTATIVE, I32)

    def test_lookup_by_name(self, registry):
        """Test constraints are found by name."""
        assert registry.lookup("Commutative") is COMMUTATIVE
        assert registry.lookup("Field") is FIELD

    def test_lookup_suggests(self, registry):
        """Test a misspelt name gets suggestions."""
        with pytest.raises(UnknownCapabilityError) as exc_info:
            registry.lookup("Comutative")
        assert exc_info.value.suggestions == ["Commutative"]
        assert "did you mean `Commutative`?" in str(exc_info.value)


class TestModuleFunctions:
    """Tests for the default-registry helpers."""

    def test_implements_by_name(self):
        """Test constraints can be named by string."""
        assert implements(List[F64, 3], "VectorSpace", F64)
        assert not implements(Complex[F64], "VectorSpace", F64)

    def test_require_raises(self):
        """Test require raises with the missing axioms."""
        with pytest.raises(CapabilityError) as exc_info:
            require(USIZE, ADDITIVE_INVERSE)
        assert [str(o) for o in exc_info.value.missing] == ["usize: AdditiveInverse"]

    def test_explain(self):
        """Test explain returns the rendered tree."""
        assert explain(F64, COMMUTATIVE).startswith("✓ f64: Commutative")
