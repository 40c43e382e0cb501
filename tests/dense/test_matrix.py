"""
Tests for Matrix storage and lifecycle.

Validates:
    - Canonical empty state for every construction path
    - Default-initialized elements and element types
    - Literal, identity and numpy factories
    - Deep-copy value semantics (copy, copy.copy, copy.deepcopy, assign)
    - Strong failure safety of assign
    - swap
    - Element access, raw buffer access and numpy interop
"""

import copy
import typing
from fractions import Fraction

import numpy as np
import pytest

from densematrix import Cursor, CursorRange, Matrix
from densematrix.core.exceptions import (
    DimensionError,
    IndexOutOfRangeError,
    ValidationError,
)
from densematrix.core.protocols import Scalar, T


# ═══════════════════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════════════════


class TestConstruction:
    """Dimensioned construction and the canonical empty state."""

    def test_default_is_empty(self):
        m = Matrix()
        assert m.rows() == 0
        assert m.cols() == 0
        assert m.size() == 0
        assert m.empty()
        assert m.data() is None

    @pytest.mark.parametrize("rows, cols", [(0, 0), (0, 5), (5, 0), (0, 1)])
    def test_zero_size_collapses(self, rows, cols):
        m = Matrix(rows, cols)
        assert m.rows() == 0
        assert m.cols() == 0
        assert m.empty()
        assert m.data() is None

    def test_dimensions(self):
        m = Matrix(2, 3)
        assert m.rows() == 2
        assert m.cols() == 3
        assert m.size() == 6
        assert m.shape == (2, 3)
        assert len(m) == 6
        assert not m.empty()
        assert m

    def test_default_elements_are_zero_floats(self):
        m = Matrix(2, 2)
        assert m.tolist() == [[0.0, 0.0], [0.0, 0.0]]
        assert all(type(v) is float for v in m)

    def test_custom_element_type(self):
        m = Matrix(2, 2, element_type=Fraction)
        assert m.element_type is Fraction
        assert all(v == Fraction(0) and type(v) is Fraction for v in m)

    def test_buffer_length(self):
        assert len(Matrix(3, 4).data()) == 12

    def test_negative_dimension_rejected(self):
        with pytest.raises(DimensionError):
            Matrix(-1, 2)

    def test_non_integer_dimension_rejected(self):
        with pytest.raises(DimensionError):
            Matrix(2.5, 2)

    def test_bad_element_type_rejected(self):
        with pytest.raises(ValidationError):
            Matrix(2, 2, element_type=str)

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Matrix(1, 1))


# ═══════════════════════════════════════════════════════════════════════
# Factories
# ═══════════════════════════════════════════════════════════════════════


class TestFromRows:
    """Fixed-shape literal construction."""

    def test_row_major_copy(self, rect):
        assert rect.shape == (2, 3)
        assert rect.data() == [1, 2, 3, 4, 5, 6]

    def test_element_type_inferred(self, a):
        assert a.element_type is int

    def test_element_type_explicit(self):
        m = Matrix.from_rows([[1, 2]], element_type=float)
        assert m.element_type is float
        assert all(type(v) is float for v in m)
        assert m.to_numpy().dtype == np.float64

    def test_element_type_explicit_converts_values(self):
        m = Matrix.from_rows([[1, 2], [3, 4]], element_type=Fraction)
        assert all(type(v) is Fraction for v in m)
        assert (m * Fraction(1, 2)).at(0, 0) == Fraction(1, 2)

    def test_literal_is_copied(self):
        rows = [[1, 2], [3, 4]]
        m = Matrix.from_rows(rows)
        rows[0][0] = 99
        assert m.at(0, 0) == 1

    @pytest.mark.parametrize("literal", [[], [[]], [[], [], []]])
    def test_empty_literal_is_canonical(self, literal):
        m = Matrix.from_rows(literal)
        assert m.shape == (0, 0)
        assert m.data() is None

    def test_ragged_rejected(self):
        with pytest.raises(DimensionError, match="ragged"):
            Matrix.from_rows([[1, 2], [3]])


class TestIdentity:
    """Identity factory."""

    def test_identity(self):
        assert Matrix.identity(3).tolist() == [
            [1.0, 0.0, 0.0],
            [0.0, 1.0, 0.0],
            [0.0, 0.0, 1.0],
        ]

    def test_identity_element_type(self):
        eye = Matrix.identity(2, element_type=int)
        assert eye.tolist() == [[1, 0], [0, 1]]
        assert eye.element_type is int

    def test_identity_zero(self):
        assert Matrix.identity(0).empty()


class TestFromNumpy:
    """Copying ndarrays into matrices."""

    def test_float_array(self):
        m = Matrix.from_numpy(np.array([[1.5, 2.5], [3.5, 4.5]]))
        assert m.tolist() == [[1.5, 2.5], [3.5, 4.5]]
        assert m.element_type is float

    def test_int_array_gives_int_elements(self):
        m = Matrix.from_numpy(np.arange(6).reshape(2, 3))
        assert m.element_type is int
        assert m.data() == [0, 1, 2, 3, 4, 5]

    def test_array_is_copied(self):
        arr = np.zeros((2, 2))
        m = Matrix.from_numpy(arr)
        arr[0, 0] = 7.0
        assert m.at(0, 0) == 0.0

    def test_zero_column_array_is_canonical(self):
        m = Matrix.from_numpy(np.zeros((3, 0)))
        assert m.shape == (0, 0)

    def test_1d_rejected(self):
        with pytest.raises(DimensionError):
            Matrix.from_numpy(np.arange(3))


# ═══════════════════════════════════════════════════════════════════════
# Value semantics
# ═══════════════════════════════════════════════════════════════════════


class TestCopy:
    """Copies never share a buffer with the original."""

    @pytest.mark.parametrize("copier", [
        lambda m: m.copy(),
        copy.copy,
        copy.deepcopy,
    ])
    def test_copy_equal_and_independent(self, a, copier):
        c = copier(a)
        assert c == a
        assert c.data() is not a.data()
        c.set_at(0, 0, 100)
        assert a.at(0, 0) == 1
        assert c != a

    def test_copy_of_empty(self):
        c = Matrix().copy()
        assert c.empty()
        assert c.data() is None

    def test_copy_keeps_element_type(self):
        m = Matrix(1, 1, element_type=Fraction)
        assert m.copy().element_type is Fraction

    def test_deepcopy_preserves_aliasing(self, a):
        first, second = copy.deepcopy([a, a])
        assert first is second
        assert first is not a
        assert first == a

    def test_deepcopy_registers_in_memo(self, a):
        memo = {}
        c = copy.deepcopy(a, memo)
        assert memo[id(a)] is c
        assert copy.deepcopy(a, memo) is c

    def test_deepcopy_of_empty(self):
        c = copy.deepcopy(Matrix())
        assert c.empty()
        assert c.data() is None


class TestAssign:
    """Copy-then-swap assignment."""

    def test_assign_replaces_contents(self, a, rect):
        a.assign(rect)
        assert a == rect
        assert a.shape == (2, 3)
        assert a.data() is not rect.data()

    def test_assign_independent(self, a, b):
        a.assign(b)
        a.set_at(0, 0, 0)
        assert b.at(0, 0) == 5

    def test_self_assign_is_noop(self, a):
        buf = a.data()
        assert a.assign(a) is a
        assert a.data() is buf

    def test_failed_copy_leaves_target_unchanged(self, a, b, monkeypatch):
        def fail(self):
            raise MemoryError("out of memory")

        monkeypatch.setattr(Matrix, "copy", fail)
        with pytest.raises(MemoryError):
            a.assign(b)
        monkeypatch.undo()
        assert a.tolist() == [[1, 2], [3, 4]]


class TestSwap:
    """swap exchanges shape, buffer and element type."""

    def test_swap_shapes_and_values(self):
        a = Matrix.from_rows([[1, 2, 3], [4, 5, 6]])
        b = Matrix.from_rows([[7], [8], [9]])
        a.swap(b)
        assert a.rows() == 3 and a.cols() == 1
        assert b.rows() == 2 and b.cols() == 3
        assert a.tolist() == [[7], [8], [9]]
        assert b.tolist() == [[1, 2, 3], [4, 5, 6]]

    def test_swap_moves_buffers(self, a, b):
        buf_a, buf_b = a.data(), b.data()
        a.swap(b)
        assert a.data() is buf_b
        assert b.data() is buf_a

    def test_swap_with_empty(self, a):
        e = Matrix()
        a.swap(e)
        assert a.empty()
        assert e.shape == (2, 2)

    def test_swap_element_type(self):
        f = Matrix(1, 1, element_type=Fraction)
        i = Matrix(1, 1, element_type=int)
        f.swap(i)
        assert f.element_type is int
        assert i.element_type is Fraction


# ═══════════════════════════════════════════════════════════════════════
# Element access
# ═══════════════════════════════════════════════════════════════════════


class TestElementAccess:
    """at, set_at and (row, col) indexing."""

    def test_at_row_major(self, rect):
        assert rect.at(0, 0) == 1
        assert rect.at(0, 2) == 3
        assert rect.at(1, 0) == 4
        assert rect.at(1, 2) == 6

    def test_offset_formula(self, rect):
        buf = rect.data()
        for r in range(rect.rows()):
            for c in range(rect.cols()):
                assert rect.at(r, c) == buf[r * rect.cols() + c]

    def test_set_at(self, rect):
        rect.set_at(1, 1, 50)
        assert rect.at(1, 1) == 50
        assert rect.data()[4] == 50

    def test_subscript(self, rect):
        assert rect[1, 2] == 6
        rect[0, 1] = 20
        assert rect.at(0, 1) == 20

    def test_subscript_needs_pair(self, rect):
        with pytest.raises(TypeError):
            rect[0]

    @pytest.mark.parametrize("row, col", [(2, 0), (0, 3), (-1, 0)])
    def test_out_of_range(self, rect, row, col):
        with pytest.raises(IndexOutOfRangeError):
            rect.at(row, col)

    def test_empty_has_no_elements(self):
        with pytest.raises(IndexOutOfRangeError):
            Matrix().at(0, 0)

    def test_data_is_live(self, a):
        a.data()[3] = 40
        assert a.at(1, 1) == 40


# ═══════════════════════════════════════════════════════════════════════
# Interop
# ═══════════════════════════════════════════════════════════════════════


class TestInterop:
    """numpy conversion, tolist and repr."""

    def test_to_numpy(self, rect):
        arr = rect.to_numpy()
        assert arr.shape == (2, 3)
        np.testing.assert_array_equal(arr, [[1, 2, 3], [4, 5, 6]])

    def test_to_numpy_dtype(self, a):
        assert a.to_numpy(dtype=np.float32).dtype == np.float32

    def test_to_numpy_is_copy(self, a):
        arr = a.to_numpy()
        arr[0, 0] = 99
        assert a.at(0, 0) == 1

    def test_to_numpy_empty(self):
        assert Matrix().to_numpy().shape == (0, 0)

    def test_asarray(self, a):
        np.testing.assert_array_equal(np.asarray(a), [[1, 2], [3, 4]])

    def test_numpy_roundtrip(self, rng):
        arr = rng.standard_normal((3, 4))
        np.testing.assert_array_equal(Matrix.from_numpy(arr).to_numpy(), arr)

    def test_tolist(self, rect):
        assert rect.tolist() == [[1, 2, 3], [4, 5, 6]]

    def test_repr(self, a):
        assert repr(a) == "Matrix.from_rows([[1, 2], [3, 4]])"
        assert repr(Matrix()) == "Matrix()"

    def test_iteration_is_row_major(self, rect):
        assert list(rect) == [1, 2, 3, 4, 5, 6]


# ═══════════════════════════════════════════════════════════════════════
# Generic typing
# ═══════════════════════════════════════════════════════════════════════


class TestGenericTyping:
    """Matrix, Cursor and CursorRange are parameterized by a Scalar-bound T."""

    def test_element_typevar_bound(self):
        assert T.__bound__ is Scalar

    @pytest.mark.parametrize("cls", [Matrix, Cursor, CursorRange])
    def test_parameterized_by_element_type(self, cls):
        assert cls.__parameters__ == (T,)
        assert typing.get_origin(cls[int]) is cls
        assert typing.get_args(cls[Fraction]) == (Fraction,)

    def test_subscripted_class_constructs(self):
        m = Matrix[Fraction](2, 2, element_type=Fraction)
        assert type(m) is Matrix
        assert m.at(1, 1) == Fraction(0)
