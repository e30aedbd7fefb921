## robustgeom vector algebra
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

"""vector algebra over robustgeom points and vectors

The operand type combinations are fixed:

- ``add``: Vector3 + Vector3 -> Vector3, Point3 + Vector3 -> Point3
- ``subtract``: Vector3 - Vector3 -> Vector3, Point3 - Vector3 -> Point3,
  Point3 - Point3 -> Vector3
- ``multiply``: Vector3 * scalar -> Vector3, UnitVector3 * scalar -> Vector3
- ``dot_product``: any pair of Vector3/UnitVector3 -> scalar
- ``cross_product``: UnitVector3 x UnitVector3 -> UnitVector3, any other
  pair of Vector3/UnitVector3 -> Vector3

Wherever a Vector3 is accepted, a UnitVector3 may be used in its place.
Results are constructed through the ordinary constructors, so they
classify themselves; nothing here raises for numerical reasons.

"""

from robustgeom.precision import precision_for, quiet
from robustgeom.vectors import Point3, UnitVector3, Vector3

_VECTORS = (Vector3, UnitVector3)


## R^3 -> R^3 functions
## --------------------

@quiet
def add(a, b):
    """``a + b``"""
    if isinstance(b, _VECTORS):
        if isinstance(a, Point3):
            return Point3(a.x + b.x, a.y + b.y, a.z + b.z)
        if isinstance(a, _VECTORS):
            return Vector3(a.x + b.x, a.y + b.y, a.z + b.z)
    raise ValueError('bad arguments passed to add: {}, {}'.format(a, b))


@quiet
def subtract(a, b):
    """``a - b``"""
    if isinstance(a, Point3):
        if isinstance(b, Point3):
            return Vector3(a.x - b.x, a.y - b.y, a.z - b.z)
        if isinstance(b, _VECTORS):
            return Point3(a.x - b.x, a.y - b.y, a.z - b.z)
    elif isinstance(a, _VECTORS) and isinstance(b, _VECTORS):
        return Vector3(a.x - b.x, a.y - b.y, a.z - b.z)
    raise ValueError('bad arguments passed to subtract: {}, {}'.format(a, b))


@quiet
def multiply(v, m):
    """vector ``v`` times scalar ``m``"""
    if not isinstance(v, _VECTORS):
        raise ValueError('bad vector passed to multiply: {}'.format(v))
    m = v.precision.scalar(m)
    return Vector3(v.x * m, v.y * m, v.z * m)


## compute the cross product a x b.  Crossing two unit vectors yields
## a unit vector, which is degenerate when the inputs are parallel.
@quiet
def cross_product(a, b):
    """cross product ``a x b``"""
    if not (isinstance(a, _VECTORS) and isinstance(b, _VECTORS)):
        raise ValueError('bad arguments passed to cross_product: {}, {}'.format(a, b))
    x = a.y * b.z - a.z * b.y
    y = a.z * b.x - a.x * b.z
    z = a.x * b.y - a.y * b.x
    if isinstance(a, UnitVector3) and isinstance(b, UnitVector3):
        return UnitVector3(x, y, z)
    return Vector3(x, y, z)


## R^3 -> R functions
## ------------------

@quiet
def dot_product(a, b):
    """``a . b``"""
    if not (isinstance(a, _VECTORS) and isinstance(b, _VECTORS)):
        raise ValueError('bad arguments passed to dot_product: {}, {}'.format(a, b))
    return a.x * b.x + a.y * b.y + a.z * b.z


@quiet
def point_distance(p1, p2):
    """euclidean distance between points; infinity if not representable"""
    if not (isinstance(p1, Point3) and isinstance(p2, Point3)):
        raise ValueError('bad arguments passed to point_distance: {}, {}'.format(p1, p2))
    dx = p1.x - p2.x
    dy = p1.y - p2.y
    dz = p1.z - p2.z
    prec = precision_for(p1, p2)
    d = prec.hypot3(dx, dy, dz)
    # NaN in, infinity out
    if not prec.is_valid(d):
        return prec.infinity()
    return d


def magnitude(v):
    """length of a vector.  Invalid vectors, and degenerate unit vectors,
    have infinite magnitude."""
    if isinstance(v, Vector3):
        return v.magnitude
    if isinstance(v, UnitVector3):
        if v.is_degenerate():
            return v.precision.infinity()
        return v.precision.scalar(1.0)
    raise ValueError('bad argument passed to magnitude: {}'.format(v))


__all__ = [
    'add',
    'subtract',
    'multiply',
    'cross_product',
    'dot_product',
    'point_distance',
    'magnitude',
]
