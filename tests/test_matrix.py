import mpmath
import numpy as np
import pytest

from robustgeom.matrix import (
    Matrix3,
    RotationMatrix3,
    determinant,
    identity,
    is_equal_matrix,
    make_rotation,
    multiply,
    transpose,
)
from robustgeom.precision import SINGLE
from robustgeom.vectors import Point3, UnitVector3, Vector3
## unit tests for robustgeom matrix.py

A = [[1, 2, 3], [4, 5, 6], [7, 8, 10]]


def _close(prec, a, b, scale=1000):
    tol = scale * prec.epsilon()
    return all(abs(float(x) - float(y)) <= tol for x, y in zip(a, b))


class TestMatrix3:
    """unit tests for robustgeom matrix construction and access"""

    def test_identity(self):
        i = Matrix3()
        assert i.get(0, 0) == 1 and i.get(1, 1) == 1 and i.get(2, 2) == 1
        assert i.get(0, 1) == 0 and i.get(2, 0) == 0
        assert i == identity()
        assert i.is_valid() and not i.is_degenerate()

    def test_nested_and_flat(self):
        assert Matrix3(A) == Matrix3([1, 2, 3, 4, 5, 6, 7, 8, 10])
        assert Matrix3(Matrix3(A)) == Matrix3(A)

    @pytest.mark.parametrize('itype', [np.int64, np.int32, np.int8])
    def test_numpy_integers(self, itype):
        m = Matrix3([[itype(x) for x in r] for r in A])
        assert m == Matrix3(A)
        assert m.is_valid()
        assert multiply(m, itype(2)) == multiply(Matrix3(A), 2)

    def test_bool_rejected(self):
        with pytest.raises(ValueError):
            Matrix3([True, False, False, False, True, False, False, False, True])
        with pytest.raises(ValueError):
            Matrix3([np.bool_(True)] * 9)

    def test_access(self):
        m = Matrix3(A)
        assert m.get(1, 2) == 6
        assert m.row(2) == (7, 8, 10)
        assert m.column(0) == (1, 4, 7)
        assert m.rows() == ((1, 2, 3), (4, 5, 6), (7, 8, 10))

    @pytest.mark.parametrize('bad', [[1, 2, 3], [[1, 2], [3, 4]], 'abcdefghi',
                                     [1, 2, 3, 4, 5, 6, 7, 8, 'x'],
                                     [[1, 2, 3], [4, 5, 6], [7, 8]]])
    def test_bad_shapes(self, bad):
        with pytest.raises(ValueError):
            Matrix3(bad)

    def test_bad_index(self):
        m = Matrix3()
        with pytest.raises(ValueError):
            m.get(3, 0)
        with pytest.raises(ValueError):
            m.row(-1)
        with pytest.raises(ValueError):
            m.column(3)

    def test_max_magnitude(self):
        assert Matrix3([[1, -7, 2], [0, 0, 0], [3, 4, 5]]).max_magnitude == 7

    def test_invalid(self, prec):
        m = Matrix3([1, 0, 0, 0, np.inf, 0, 0, 0, 1], dtype=prec)
        assert not m.is_valid()
        assert m.is_degenerate()
        assert np.isinf(m.max_magnitude)

    def test_width(self):
        m = Matrix3(A, dtype=np.float32)
        assert m.precision is SINGLE
        assert isinstance(m.get(0, 0), np.float32)

    def test_subnormal(self, prec):
        m = Matrix3([1, 0, 0, 0, prec.smallest_normal() / 2, 0, 0, 0, 1], dtype=prec)
        assert m.is_valid() and m.is_subnormal()

    def test_immutable(self):
        m = Matrix3()
        with pytest.raises(AttributeError):
            m.max_magnitude = 3


class TestOperations:

    def test_determinant(self, prec):
        assert determinant(Matrix3(A, dtype=prec)) == -3
        assert determinant(identity(prec.dtype)) == 1

    def test_transpose(self):
        m = Matrix3(A)
        t = transpose(m)
        assert t.row(0) == m.column(0)
        assert t.column(2) == m.row(2)
        assert transpose(t) == m

    def test_multiply_matrix(self):
        m = Matrix3(A)
        assert multiply(m, identity()) == m
        assert multiply(identity(), m) == m
        assert m @ Matrix3([[0, 0, 1], [0, 1, 0], [1, 0, 0]]) == \
            Matrix3([[3, 2, 1], [6, 5, 4], [10, 8, 7]])

    def test_multiply_vector_and_point(self):
        m = Matrix3(A)
        v = multiply(m, Vector3(1, 0, 0))
        assert isinstance(v, Vector3) and v == Vector3(1, 4, 7)
        p = m @ Point3(0, 1, 1)
        assert isinstance(p, Point3) and p == Point3(5, 11, 18)
        assert isinstance(m @ UnitVector3(0, 0, 1), Vector3)

    def test_multiply_scalar(self):
        assert multiply(Matrix3(A), 2) == Matrix3([[2, 4, 6], [8, 10, 12], [14, 16, 20]])

    def test_multiply_bad(self):
        with pytest.raises(ValueError):
            multiply(Matrix3(), 'x')
        with pytest.raises(ValueError):
            multiply(Vector3(), Matrix3())

    def test_is_equal_matrix(self, prec):
        a = Matrix3(A, dtype=prec)
        nudged = Matrix3([x + x * prec.epsilon() / 2 for r in A for x in r], dtype=prec)
        assert is_equal_matrix(a, nudged)
        assert not is_equal_matrix(a, identity(prec.dtype))


class TestRotationMatrix3:

    def test_identity(self):
        r = RotationMatrix3()
        assert r.is_valid() and not r.is_degenerate()
        assert r.matrix == identity()
        assert r.max_magnitude == 1

    def test_columns(self):
        r = RotationMatrix3(UnitVector3(0, 1, 0), UnitVector3(-1, 0, 0), UnitVector3(0, 0, 1))
        assert not r.is_degenerate()
        assert r.column(0) == (0, 1, 0)
        assert r.row(0) == (0, -1, 0)
        assert r.get(1, 0) == 1

    def test_not_orthogonal(self):
        r = RotationMatrix3(UnitVector3(1, 0, 0), UnitVector3(1, 1, 0), UnitVector3(0, 0, 1))
        assert r.is_valid()
        assert r.is_degenerate()

    def test_reflection(self):
        ## orthonormal, but the determinant is -1
        r = RotationMatrix3(UnitVector3(1, 0, 0), UnitVector3(0, 1, 0), UnitVector3(0, 0, -1))
        assert r.is_valid()
        assert r.is_degenerate()

    def test_degenerate_column(self):
        r = RotationMatrix3(UnitVector3(0, 0, 0), UnitVector3(0, 1, 0), UnitVector3(0, 0, 1))
        assert r.is_valid() and r.is_degenerate()

    def test_invalid_column(self):
        r = RotationMatrix3(UnitVector3(np.nan, 0, 0), UnitVector3(0, 1, 0), UnitVector3(0, 0, 1))
        assert not r.is_valid()

    def test_bad_column(self):
        with pytest.raises(ValueError):
            RotationMatrix3(Vector3(1, 0, 0), UnitVector3(0, 1, 0), UnitVector3(0, 0, 1))


class TestRotation:
    """rotations built from an axis and an angle in degrees"""

    def test_quarter_turn(self, prec):
        r = make_rotation(Vector3(0, 0, 1, dtype=prec), 90)
        assert isinstance(r, RotationMatrix3)
        assert r.precision is prec
        assert r.is_valid() and not r.is_degenerate()
        v = r @ Vector3(1, 0, 0, dtype=prec)
        assert _close(prec, v, (0, 1, 0))

    def test_permutation(self, prec):
        ## a third of a turn about (1,1,1) cycles the axes
        r = make_rotation(UnitVector3(1, 1, 1, dtype=prec), 120)
        assert not r.is_degenerate()
        assert _close(prec, r @ Vector3(1, 0, 0, dtype=prec), (0, 1, 0))
        assert _close(prec, r @ Vector3(0, 1, 0, dtype=prec), (0, 0, 1))

    def test_against_high_precision(self):
        r = make_rotation(Vector3(0, 0, 1), 30)
        with mpmath.workdps(50):
            c = mpmath.cos(mpmath.radians(30))
            s = mpmath.sin(mpmath.radians(30))
            want = [[float(c), float(-s), 0.0], [float(s), float(c), 0.0], [0.0, 0.0, 1.0]]
        assert is_equal_matrix(r, Matrix3(want), scale=4)

    def test_inverse_is_transpose(self, prec):
        r = make_rotation(Vector3(1, -2, 0.5, dtype=prec), 37.5)
        t = transpose(r)
        assert isinstance(t, RotationMatrix3)
        assert not t.is_degenerate()
        assert is_equal_matrix(r @ t, identity(prec.dtype), scale=16)

    def test_composition_is_rotation(self):
        a = make_rotation(Vector3(0, 0, 1), 30)
        b = make_rotation(Vector3(0, 0, 1), 60)
        ab = multiply(a, b)
        assert isinstance(ab, RotationMatrix3)
        ## entries that should be zero are only near zero, so compare absolutely
        quarter = make_rotation(Vector3(0, 0, 1), 90)
        for i in range(3):
            assert _close(ab.precision, ab.row(i), quarter.row(i))

    def test_degenerate_axis(self, prec):
        r = make_rotation(Vector3(0, 0, 0, dtype=prec), 45)
        assert r.is_valid()
        assert r.is_degenerate()

    def test_invalid_axis(self, prec):
        r = make_rotation(Vector3(np.nan, 0, 1, dtype=prec), 45)
        assert not r.is_valid()

    def test_bad_axis(self):
        with pytest.raises(ValueError):
            make_rotation(Point3(0, 0, 1), 45)
