"""
Unit tests for List[T, N].
"""

import numpy as np
import pytest

from axiomatic.core.identities import one, zero
from axiomatic.core.primitives import F64, I32, ISIZE, USIZE
from axiomatic.core.types import ListType
from axiomatic.utils.errors import OperatorNotSupportedError, TypeMismatchError
from axiomatic.values import Complex, List, allclose


class TestConstruction:
    """Tests for building lists."""

    def test_length_is_part_of_type(self):
        """Test the type records element type and length."""
        assert List([1, 2, 3]).type == ListType(ISIZE, 3)
        assert List([1.0, 2.0]).type == List[F64, 2]

    def test_descriptor_call_requires_exact_length(self):
        """Test List[T, N] accepts exactly N elements."""
        assert List[F64, 3]([1, 2, 3]) == List([1.0, 2.0, 3.0])
        with pytest.raises(TypeMismatchError):
            List[F64, 3]([1, 2])

    def test_mixed_elements_rejected(self):
        """Test elements must share a type."""
        with pytest.raises(TypeMismatchError):
            List([1, 2.0])

    def test_empty_needs_element_type(self):
        """Test an empty list cannot infer its element type."""
        with pytest.raises(TypeMismatchError):
            List([])
        assert len(List([], element_type=F64)) == 0

    def test_subscript_requires_two_params(self):
        """Test List[T] without a length is rejected."""
        with pytest.raises(TypeMismatchError):
            List[F64]

    def test_list_of_complex(self):
        """Test lists over complex numbers."""
        values = List([Complex(1, 2), Complex(3, 4)])
        assert values.type == List[Complex[ISIZE], 2]

    def test_inferred_elements_are_primitive_scalars(self):
        """Test Python numbers are stored as their primitive's scalars."""
        assert isinstance(List([1, 2])[0], np.int64)
        assert isinstance(List([1.0, 2.0])[1], np.float64)
        assert repr(List([1.5, 2.0])) == "List([1.5, 2.0])"


class TestArithmetic:
    """Tests for element-wise arithmetic."""

    def test_addition(self):
        """Test pairwise addition."""
        assert List([1, 2, 3]) + List([10, 20, 30]) == List([11, 22, 33])

    def test_scalar_multiplication(self):
        """Test every element is multiplied by the scalar."""
        assert List([1, 1, 1]) * 5 == List([5, 5, 5])

    def test_reflected_scalar_multiplication(self):
        """Test scalar * list is the same operation."""
        assert 5 * List([1, 2, 3]) == List([5, 10, 15])

    def test_complex_scalar_multiplication(self):
        """Test scaling a list of complex numbers by a complex scalar."""
        values = List([Complex(1, 2), Complex(3, 4)])
        assert values * Complex(0, 1) == List([Complex(-2, 1), Complex(-4, 3)])

    def test_negation_and_double_negation(self):
        """Test -(-x) == x."""
        x = List([1, -2, 3])
        assert -x == List([-1, 2, -3])
        assert -(-x) == x

    def test_subtraction(self):
        """Test a - b == a + (-b)."""
        a, b = List([5, 5]), List([2, 3])
        assert a - b == a + (-b)
        assert a - b == List([3, 2])

    def test_scalar_division(self):
        """Test element-wise division by a scalar."""
        assert List([1.0, 2.0]) / 2.0 == List([0.5, 1.0])
        assert List([7, -7]) / 2 == List([3, -3])

    def test_dot(self):
        """Test the dot product."""
        assert List([1, 2, 3]).dot(List([4, 5, 6])) == 32

    def test_dot_needs_element_multiplication(self):
        """Test dot is rejected when elements cannot be multiplied."""
        nested = List([List([1.0, 2.0]), List([3.0, 4.0])])
        with pytest.raises(OperatorNotSupportedError, match="E0369"):
            nested.dot(nested)

    def test_length_mismatch_rejected(self):
        """Test lists of different lengths do not combine."""
        with pytest.raises(TypeMismatchError):
            List([1, 2, 3]) + List([1, 2])

    def test_scalar_type_mismatch_rejected(self):
        """Test the scalar must have the element type."""
        with pytest.raises(TypeMismatchError):
            List([1, 2]) * 2.0

    def test_list_times_list_unsupported(self):
        """Test there is no list-by-list product."""
        with pytest.raises(TypeError):
            List([1, 2]) * List([1, 2])

    def test_unsigned_negation_rejected(self):
        """Test negation needs the element type to negate."""
        with pytest.raises(OperatorNotSupportedError):
            -List[USIZE, 2]([1, 2])


class TestIndexing:
    """Tests for positional and range access."""

    def test_position(self):
        """Test indexing by position."""
        values = List([10, 20, 30])
        assert values[0] == 10
        assert values[-1] == 30

    def test_range(self):
        """Test indexing by slice returns the elements."""
        assert List([10, 20, 30])[0:2] == (10, 20)

    def test_out_of_range(self):
        """Test out-of-range access is an IndexError."""
        with pytest.raises(IndexError):
            List([1, 2, 3])[3]

    def test_iteration_and_length(self):
        """Test len and iteration."""
        values = List([1, 2, 3])
        assert len(values) == 3
        assert list(values) == [1, 2, 3]


class TestIdentities:
    """Tests for Zero and One of list types."""

    def test_zero(self):
        """Test Zero is N copies of the element Zero."""
        assert zero(List[ISIZE, 3]) == List([0, 0, 0])

    def test_one(self):
        """Test One is N copies of the element One."""
        assert one(List[I32, 2]) == List[I32, 2]([1, 1])

    def test_nested_identities(self):
        """Test identities recurse through complex elements."""
        assert zero(List[Complex[F64], 2]) == List([Complex(0.0, 0.0), Complex(0.0, 0.0)])

    def test_additive_identity(self):
        """Test x + Zero == x."""
        x = List([4, 5, 6])
        assert x + zero(x.type) == x


class TestDisplayAndEquality:
    """Tests for rendering and value semantics."""

    def test_str_and_repr(self):
        """Test textual rendering."""
        assert str(List([1, 2, 3])) == "[1, 2, 3]"
        assert repr(List([1, 2, 3])) == "List([1, 2, 3])"
        assert str(List([Complex(1, 2)])) == "[(1 + 2i)]"

    def test_hashable(self):
        """Test equal lists hash equal."""
        assert len({List([1, 2]), List([1, 2])}) == 1

    def test_immutable(self):
        """Test lists cannot be modified."""
        values = List([1, 2])
        with pytest.raises(AttributeError):
            values._elems = (3, 4)
        with pytest.raises(TypeError):
            values[0] = 5

    def test_allclose(self):
        """Test approximate comparison."""
        assert allclose(List([0.1 + 0.2, 1.0]), List([0.3, 1.0]))
        assert not allclose(List([0.3, 1.0]), List([0.3, 1.0, 2.0]))
