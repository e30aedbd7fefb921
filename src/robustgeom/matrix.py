## robustgeom matrices and rotations
## =====================================

## Copyright (c) 2021 robustgeom contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
# 
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
# 
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""3x3 matrices and rotation matrices for **robustgeom**

A ``Matrix3`` holds nine scalars in row-major order, and caches the
largest element magnitude for use in scaled epsilon comparisons.  A
matrix is invalid if any element is not finite; it is never otherwise
degenerate.

A ``RotationMatrix3`` is built from three ``UnitVector3`` columns.  It
is degenerate if any column is degenerate, if ``M * M^T`` is not the
identity to within a fixed absolute tolerance (see
``robustgeom.constants.ROTATION_IDENTITY_TOLERANCE``), or if the
determinant differs from one by more than
``DETERMINANT_SCALE * max|m_ij| * epsilon``.

``multiply()`` is the general product, respecting operand types:

- matrix x matrix -> Matrix3 (RotationMatrix3 if both are rotations)
- matrix x Vector3 or UnitVector3 -> Vector3
- matrix x Point3 -> Point3
- matrix x scalar -> Matrix3

The ``@`` operator is sugar for ``multiply()``.

"""

from __future__ import annotations

import numbers

import numpy as np

from robustgeom.classification import Classification, Classified, classify_scalars
from robustgeom.constants import DETERMINANT_SCALE
from robustgeom.precision import precision_for, quiet, resolve_precision
from robustgeom.vectors import Point3, UnitVector3, Vector3, invalid_unit_vector3


def _isnum(x):
    return (not isinstance(x, (bool, np.bool_))) and isinstance(x, (numbers.Real, np.integer))


def _flatten(a):
    if isinstance(a, (tuple, list)):
        if len(a) == 3 and all(isinstance(r, (tuple, list)) and len(r) == 3 for r in a):
            flat = [x for r in a for x in r]
        elif len(a) == 9:
            flat = list(a)
        else:
            raise ValueError('bad thing used in attempt to initialize matrix: {}'.format(a))
        for x in flat:
            if not _isnum(x):
                raise ValueError('bad element in matrix initialization: {}'.format(x))
        return flat
    raise ValueError('bad thing used in attempt to initialize matrix: {}'.format(a))


def _check_index(i, what):
    if i < 0 or i > 2:
        raise ValueError('bad {} index: {}'.format(what, i))


class Matrix3(Classified):
    """3x3 matrix of scalars of one width"""

    __slots__ = ('_m', 'max_magnitude', 'precision', 'classification')

    @quiet
    def __init__(self, a=None, dtype=None):
        if a is None:
            flat = [1, 0, 0, 0, 1, 0, 0, 0, 1]
        elif isinstance(a, Matrix3):
            flat = list(a._m)
        else:
            flat = _flatten(a)
        if dtype is None:
            prec = precision_for(*flat)
        else:
            prec = resolve_precision(dtype)
        m = tuple(prec.scalar(x) for x in flat)
        self._set('precision', prec)
        self._set('_m', m)

        cls = classify_scalars(prec, m)
        if cls.invalid:
            mx = prec.infinity()
        else:
            mx = max(abs(x) for x in m)
        self._set('max_magnitude', mx)
        self._set('classification', cls)

    def __repr__(self):
        return 'Matrix3({}, dtype={})'.format([[float(x) for x in r] for r in self.rows()],
                                              self.precision.name)

    def __eq__(self, other):
        if not isinstance(other, Matrix3):
            return NotImplemented
        return self._m == other._m

    def __hash__(self):
        return hash(tuple(float(x) for x in self._m))

    def __matmul__(self, x):
        return multiply(self, x)

    def get(self, i, j):
        _check_index(i, 'row')
        _check_index(j, 'column')
        return self._m[i * 3 + j]

    def row(self, i):
        _check_index(i, 'row')
        return self._m[i * 3:i * 3 + 3]

    def column(self, j):
        _check_index(j, 'column')
        return self._m[j::3]

    def rows(self):
        return (self.row(0), self.row(1), self.row(2))


class RotationMatrix3(Classified):
    """proper rotation, defined by three unit vector columns"""

    __slots__ = ('columns', 'matrix', 'precision', 'classification')

    @quiet
    def __init__(self, c1=None, c2=None, c3=None):
        if c1 is None and c2 is None and c3 is None:
            c1 = UnitVector3(1.0, 0.0, 0.0)
            c2 = UnitVector3(0.0, 1.0, 0.0)
            c3 = UnitVector3(0.0, 0.0, 1.0)
        cols = (c1, c2, c3)
        for c in cols:
            if not isinstance(c, UnitVector3):
                raise ValueError('bad column passed to RotationMatrix3: {}'.format(c))
        prec = precision_for(*cols)
        matrix = Matrix3([[c1.x, c2.x, c3.x],
                          [c1.y, c2.y, c3.y],
                          [c1.z, c2.z, c3.z]], dtype=prec)
        self._set('columns', cols)
        self._set('matrix', matrix)
        self._set('precision', prec)

        cls = Classification().combine(*(c.classification for c in cols))
        if cls.is_valid and not cls.is_degenerate:
            degenerate = not _is_orthonormal(matrix) or not prec.is_equal_scaled(
                determinant(matrix), 1, DETERMINANT_SCALE * matrix.max_magnitude)
            cls = Classification(degenerate=degenerate,
                                 subnormal=cls.subnormal or matrix.is_subnormal())
        self._set('classification', cls)

    def __repr__(self):
        return 'RotationMatrix3({}, {}, {})'.format(*self.columns)

    def __eq__(self, other):
        if not isinstance(other, RotationMatrix3):
            return NotImplemented
        return self.matrix == other.matrix

    def __hash__(self):
        return hash(self.matrix)

    def __matmul__(self, x):
        return multiply(self, x)

    @property
    def max_magnitude(self):
        return self.matrix.max_magnitude

    def get(self, i, j):
        return self.matrix.get(i, j)

    def row(self, i):
        return self.matrix.row(i)

    def column(self, j):
        return self.matrix.column(j)

    def rows(self):
        return self.matrix.rows()


def _as_matrix(m):
    if isinstance(m, RotationMatrix3):
        return m.matrix
    if isinstance(m, Matrix3):
        return m
    raise ValueError('bad matrix: {}'.format(m))


def _is_orthonormal(m):
    """is ``m * m^T`` the identity to within the fixed absolute tolerance"""
    tol = m.precision.rotation_tolerance
    for i in range(3):
        ri = m.row(i)
        for j in range(3):
            rj = m.row(j)
            v = ri[0] * rj[0] + ri[1] * rj[1] + ri[2] * rj[2]
            target = 1 if i == j else 0
            if not abs(v - target) <= tol:
                return False
    return True


def identity(dtype=None):
    """the 3x3 identity matrix"""
    return Matrix3(None, dtype=dtype)


def transpose(m):
    """transpose of ``m``.  The transpose of a rotation is its inverse,
    and is returned as a rotation."""
    if isinstance(m, RotationMatrix3):
        return RotationMatrix3(*(UnitVector3(*m.row(i), dtype=m.precision) for i in range(3)))
    m = _as_matrix(m)
    return Matrix3([m.column(0), m.column(1), m.column(2)], dtype=m.precision)


@quiet
def determinant(m):
    """determinant by cofactor expansion along the first row"""
    m = _as_matrix(m)
    a, b, c = m.row(0)
    d, e, f = m.row(1)
    g, h, i = m.row(2)
    return a * (e * i - f * h) - b * (d * i - f * g) + c * (d * h - e * g)


def _mul_rows(m, x, y, z):
    return tuple(r[0] * x + r[1] * y + r[2] * z for r in m.rows())


@quiet
def multiply(m, x):
    """matrix product ``m * x``; see the module documentation for the
    supported operand types"""
    mm = _as_matrix(m)
    if isinstance(x, (Matrix3, RotationMatrix3)):
        xm = _as_matrix(x)
        prod = [[sum(mm.get(i, k) * xm.get(k, j) for k in range(3)) for j in range(3)]
                for i in range(3)]
        if isinstance(m, RotationMatrix3) and isinstance(x, RotationMatrix3):
            return RotationMatrix3(*(UnitVector3(prod[0][j], prod[1][j], prod[2][j])
                                     for j in range(3)))
        return Matrix3(prod, dtype=precision_for(mm, xm))
    if isinstance(x, (Vector3, UnitVector3)):
        return Vector3(*_mul_rows(mm, x.x, x.y, x.z))
    if isinstance(x, Point3):
        return Point3(*_mul_rows(mm, x.x, x.y, x.z))
    if _isnum(x):
        s = mm.precision.scalar(x)
        return Matrix3([v * s for v in mm._m], dtype=mm.precision)
    raise ValueError('bad thing passed to multiply(): {}'.format(x))


def is_equal_matrix(a, b, scale=None) -> bool:
    """element-wise scaled epsilon equality of two matrices"""
    a = _as_matrix(a)
    b = _as_matrix(b)
    prec = precision_for(a, b)
    if scale is None:
        scale = max(1, a.max_magnitude, b.max_magnitude)
    return all(prec.is_equal_scaled(a.get(i, j), b.get(i, j), scale)
               for i in range(3) for j in range(3))


## return the rotation by ``angle`` degrees about ``axis``, following
## the right-hand rule.  A degenerate axis yields a degenerate
## rotation; an invalid axis yields an invalid one.
@quiet
def make_rotation(axis, angle):
    """Rotation matrix for ``angle`` degrees about ``axis``"""
    if not isinstance(axis, (Vector3, UnitVector3)):
        raise ValueError('bad axis passed to make_rotation: {}'.format(axis))
    prec = axis.precision
    if not axis.is_valid():
        bad = invalid_unit_vector3(prec)
        return RotationMatrix3(bad, bad, bad)
    u = UnitVector3(axis.x, axis.y, axis.z, dtype=prec)
    if u.is_degenerate():
        zero = UnitVector3(0, 0, 0, dtype=prec)
        return RotationMatrix3(zero, zero, zero)

    rad = prec.scalar((angle % 360.0) * np.pi / 180.0)
    ux, uy, uz = u.x, u.y, u.z
    cang = np.cos(rad)
    sang = np.sin(rad)
    cmin = 1 - cang

    # see http://www.opengl-tutorial.org/assets/faq_quaternions/index.html#Q38
    R = [[cang + ux * ux * cmin, ux * uy * cmin - uz * sang, ux * uz * cmin + uy * sang],
         [uy * ux * cmin + uz * sang, cang + uy * uy * cmin, uy * uz * cmin - ux * sang],
         [uz * ux * cmin - uy * sang, uz * uy * cmin + ux * sang, cang + uz * uz * cmin]]

    return RotationMatrix3(*(UnitVector3(R[0][j], R[1][j], R[2][j], dtype=prec)
                             for j in range(3)))


__all__ = [
    'Matrix3',
    'RotationMatrix3',
    'identity',
    'transpose',
    'determinant',
    'multiply',
    'is_equal_matrix',
    'make_rotation',
]
