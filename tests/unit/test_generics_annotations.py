"""
Unit tests for generic functions declared in modules with postponed annotations.
"""

from __future__ import annotations

import pytest

from axiomatic.algebra.capabilities import COMMUTATIVE
from axiomatic.algebra.generics import generic
from axiomatic.algebra.structures import VECTOR_SPACE
from axiomatic.core.primitives import F64
from axiomatic.core.types import TypeVariable
from axiomatic.utils.errors import TypeMismatchError
from axiomatic.values import List

V = TypeVariable("V")
F = TypeVariable("F")


@generic(where={V: VECTOR_SPACE(F)})
def scale(a: F, x: V) -> V:
    return x * a


def make_total():
    W = TypeVariable("W")

    @generic(where={W: COMMUTATIVE})
    def total(x: W, y: W) -> W:
        return x + y

    return total


class TestStringAnnotations:
    """Tests for annotations stored as strings."""

    def test_module_level_variables(self):
        """Test module-level type variables are found in string annotations."""
        assert [var.name for var in scale.type_params] == ["V", "F"]
        assert scale.infer(2.0, List([1.0, 2.0])) == {"F": F64, "V": List[F64, 2]}
        assert scale(2.0, List([1.0, 2.0])) == List([2.0, 4.0])

    def test_function_local_variables(self):
        """Test a type variable defined inside a function is resolved."""
        total = make_total()
        assert [var.name for var in total.type_params] == ["W"]
        assert total(List([1, 2]), List([3, 4])) == List([4, 6])

    def test_function_local_variables_infer(self):
        """Test local type variables still take part in inference."""
        total = make_total()
        with pytest.raises(TypeMismatchError, match="conflicting types"):
            total(1, 2.0)

    def test_unresolvable_annotation_ignored(self):
        """Test a name that cannot be evaluated does not drive inference."""

        @generic(where={V: COMMUTATIVE})
        def tagged(x: V, label: Undefined) -> V:  # noqa: F821
            return x

        assert [var.name for var in tagged.type_params] == ["V"]
        assert tagged(3, "three") == 3
