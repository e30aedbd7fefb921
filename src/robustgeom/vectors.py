## robustgeom points and vectors
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

"""points, vectors and unit vectors for **robustgeom**

=========
OVERVIEW
=========

``Point3``, ``Vector3`` and ``UnitVector3`` are the leaf value types of
robustgeom.  Each is immutable and classifies itself exactly once, at
construction time:

- a ``Point3`` is invalid if any coordinate is NaN or infinite, and is
  never otherwise degenerate
- a ``Vector3`` caches its magnitude.  An invalid vector has an
  infinite magnitude; so does a valid vector whose magnitude overflows,
  but such a vector is still not degenerate
- a ``UnitVector3`` normalizes its input.  It is degenerate if the
  input length is ~0 or not finite, in which case all three components
  are frozen to infinity.  The raw input is kept as ``source``.

The width of the scalars is taken from the ``dtype`` argument if
given, otherwise inferred from the arguments (see
``robustgeom.precision.precision_for()``).

The python operators ``+``, ``-`` and ``*`` are sugar for the functions
in ``robustgeom.vecmath``.

"""

from __future__ import annotations

from robustgeom.classification import (
    Classification,
    Classified,
    classify_scalars,
)
from robustgeom.precision import precision_for, quiet, resolve_precision


def _precision(dtype, *values):
    if dtype is None:
        return precision_for(*values)
    return resolve_precision(dtype)


class _Triple(Classified):
    """shared behaviour of the three-component value types"""

    __slots__ = ()

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return (self.x, self.y, self.z) == (other.x, other.y, other.z)

    def __hash__(self):
        return hash((type(self).__name__, float(self.x), float(self.y), float(self.z)))

    def __repr__(self):
        return '{}({}, {}, {}, dtype={})'.format(type(self).__name__,
                                                 float(self.x), float(self.y), float(self.z),
                                                 self.precision.name)


class Point3(_Triple):
    """a location in 3-space"""

    __slots__ = ('x', 'y', 'z', 'precision', 'classification')

    @quiet
    def __init__(self, x=0.0, y=0.0, z=0.0, dtype=None):
        prec = _precision(dtype, x, y, z)
        self._set('precision', prec)
        self._set('x', prec.scalar(x))
        self._set('y', prec.scalar(y))
        self._set('z', prec.scalar(z))
        self._set('classification', classify_scalars(prec, (self.x, self.y, self.z)))

    def __add__(self, other):
        from robustgeom import vecmath
        return vecmath.add(self, other)

    def __sub__(self, other):
        from robustgeom import vecmath
        return vecmath.subtract(self, other)


class Vector3(_Triple):
    """a free vector, with cached magnitude"""

    __slots__ = ('x', 'y', 'z', 'magnitude', 'precision', 'classification')

    @quiet
    def __init__(self, x=0.0, y=0.0, z=0.0, dtype=None):
        prec = _precision(dtype, x, y, z)
        self._set('precision', prec)
        self._set('x', prec.scalar(x))
        self._set('y', prec.scalar(y))
        self._set('z', prec.scalar(z))

        cls = classify_scalars(prec, (self.x, self.y, self.z))
        if cls.invalid:
            mag = prec.infinity()
        else:
            # hypot overflows to infinity, which is still a valid vector
            mag = prec.hypot3(self.x, self.y, self.z)
            if prec.is_subnormal(mag):
                cls = Classification(subnormal=True)
        self._set('magnitude', mag)
        self._set('classification', cls)

    def __add__(self, other):
        from robustgeom import vecmath
        return vecmath.add(self, other)

    def __sub__(self, other):
        from robustgeom import vecmath
        return vecmath.subtract(self, other)

    def __mul__(self, m):
        from robustgeom import vecmath
        return vecmath.multiply(self, m)

    __rmul__ = __mul__


class UnitVector3(_Triple):
    """a direction; the input is normalized on construction"""

    __slots__ = ('x', 'y', 'z', 'source', 'precision', 'classification')

    @quiet
    def __init__(self, x=0.0, y=1.0, z=0.0, dtype=None):
        prec = _precision(dtype, x, y, z)
        self._set('precision', prec)
        raw = (prec.scalar(x), prec.scalar(y), prec.scalar(z))
        self._set('source', raw)

        inf = prec.infinity()
        cls = classify_scalars(prec, raw)
        comps = (inf, inf, inf)
        if not cls.invalid:
            length = prec.hypot3(*raw)
            if not prec.is_valid(length) or prec.is_equal(length, 0):
                cls = Classification(degenerate=True, subnormal=cls.subnormal)
            else:
                comps = tuple(c / length for c in raw)
                # division can produce subnormal results from normal input
                if any(prec.is_subnormal(c) for c in comps):
                    cls = Classification(subnormal=True)

        self._set('x', comps[0])
        self._set('y', comps[1])
        self._set('z', comps[2])
        self._set('classification', cls)

    def __mul__(self, m):
        from robustgeom import vecmath
        return vecmath.multiply(self, m)

    __rmul__ = __mul__


## special invalid entity instances
## --------------------------------

def invalid_value(dtype=None):
    """the sentinel used for invalid scalars (positive infinity)"""
    return _precision(dtype).infinity()


def invalid_point3(dtype=None) -> Point3:
    prec = _precision(dtype)
    inf = prec.infinity()
    return Point3(inf, inf, inf, dtype=prec)


def invalid_vector3(dtype=None) -> Vector3:
    prec = _precision(dtype)
    inf = prec.infinity()
    return Vector3(inf, inf, inf, dtype=prec)


def invalid_unit_vector3(dtype=None) -> UnitVector3:
    prec = _precision(dtype)
    inf = prec.infinity()
    return UnitVector3(inf, inf, inf, dtype=prec)


## creation functions, alternates to the constructors
## --------------------------------------------------

def make_vector3(a, b=None) -> Vector3:
    """``make_vector3(unit)`` lifts a unit vector to a vector;
    ``make_vector3(frm, to)`` is the vector from point ``frm`` to point ``to``.
    """
    if b is None and isinstance(a, UnitVector3):
        return Vector3(a.x, a.y, a.z, dtype=a.precision)
    if isinstance(a, Point3) and isinstance(b, Point3):
        from robustgeom import vecmath
        return vecmath.subtract(b, a)
    raise ValueError('bad arguments passed to make_vector3: {}, {}'.format(a, b))


def make_unit_vector3(a, b=None) -> UnitVector3:
    """``make_unit_vector3(v)`` normalizes vector ``v``;
    ``make_unit_vector3(frm, to)`` is the direction from ``frm`` to ``to``.
    """
    if b is None and isinstance(a, (Vector3, UnitVector3)):
        return UnitVector3(a.x, a.y, a.z, dtype=a.precision)
    if isinstance(a, Point3) and isinstance(b, Point3):
        v = make_vector3(a, b)
        return UnitVector3(v.x, v.y, v.z, dtype=v.precision)
    raise ValueError('bad arguments passed to make_unit_vector3: {}, {}'.format(a, b))


__all__ = [
    'Point3',
    'Vector3',
    'UnitVector3',
    'invalid_value',
    'invalid_point3',
    'invalid_vector3',
    'invalid_unit_vector3',
    'make_vector3',
    'make_unit_vector3',
]
