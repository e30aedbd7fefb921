## robustgeom derived measurements
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

"""distance, area, normals and closest points

None of these raise for numerical reasons.  Results that cannot be
computed are returned as the invalid sentinel of the right type: an
infinite scalar, ``invalid_point3()`` or ``invalid_unit_vector3()``.
"""

from __future__ import annotations

from robustgeom.precision import precision_for, quiet
from robustgeom.shapes import Line3, Plane, Triangle3
from robustgeom.vecmath import (
    add,
    cross_product,
    dot_product,
    magnitude,
    multiply,
    point_distance,
    subtract,
)
from robustgeom.vectors import (
    Point3,
    invalid_point3,
    invalid_unit_vector3,
    make_unit_vector3,
)


@quiet
def _signed_distance(point, plane):
    prec = precision_for(point, plane)
    d = dot_product(plane.up, subtract(point, plane.base))
    if not prec.is_valid(d):
        return prec.infinity()
    return d


def distance(a, b):
    """distance between two points, or the signed distance between a
    point and a plane (positive on the side ``up`` points to).  Either
    argument order is accepted for the point/plane case."""
    if isinstance(a, Point3) and isinstance(b, Point3):
        return point_distance(a, b)
    if isinstance(a, Point3) and isinstance(b, Plane):
        return _signed_distance(a, b)
    if isinstance(a, Plane) and isinstance(b, Point3):
        return _signed_distance(b, a)
    raise ValueError('bad arguments passed to distance: {}, {}'.format(a, b))


@quiet
def area(tri):
    """area of a triangle.  An invalid triangle has infinite area; a
    degenerate but valid one has zero area."""
    if not isinstance(tri, Triangle3):
        raise ValueError('bad argument passed to area: {}'.format(tri))
    prec = tri.precision
    if not tri.is_valid():
        return prec.infinity()
    if tri.is_degenerate():
        return prec.scalar(0.0)
    n = cross_product(subtract(tri.p2, tri.p1), subtract(tri.p3, tri.p1))
    return n.magnitude * prec.scalar(0.5)


@quiet
def centroid(tri):
    """mean of the three vertices.  Degenerate triangles still have a
    centroid, invalid ones do not."""
    if not isinstance(tri, Triangle3):
        raise ValueError('bad argument passed to centroid: {}'.format(tri))
    prec = tri.precision
    if not tri.is_valid():
        return invalid_point3(prec)
    three = prec.scalar(3.0)
    return Point3((tri.p1.x + tri.p2.x + tri.p3.x) / three,
                  (tri.p1.y + tri.p2.y + tri.p3.y) / three,
                  (tri.p1.z + tri.p2.z + tri.p3.z) / three,
                  dtype=prec)


def unit_normal(tri):
    """unit normal ``(p2-p1) x (p3-p1)``, following the winding order.

    Degenerate triangles have no normal, and yield the invalid unit
    vector.  The normal of a valid triangle can still be degenerate if
    the cross product overflows; callers should check.
    """
    if not isinstance(tri, Triangle3):
        raise ValueError('bad argument passed to unit_normal: {}'.format(tri))
    if tri.is_degenerate():
        return invalid_unit_vector3(tri.precision)
    n = cross_product(subtract(tri.p2, tri.p1), subtract(tri.p3, tri.p1))
    if not n.is_valid():
        return invalid_unit_vector3(tri.precision)
    return make_unit_vector3(n)


def _closest_on_line(line, point):
    prec = precision_for(line, point)
    if line.is_degenerate() or not point.is_valid():
        return invalid_point3(prec)
    f = dot_product(line.direction, subtract(point, line.base))
    return add(line.base, multiply(line.direction, f))


def _closest_on_plane(plane, point):
    prec = precision_for(plane, point)
    if plane.is_degenerate() or not point.is_valid():
        return invalid_point3(prec)
    d = dot_product(subtract(point, plane.base), plane.up)
    return subtract(point, multiply(plane.up, d))


def closest_point(a, b):
    """the point on a line or plane closest to a given point.  Either
    argument order is accepted."""
    if isinstance(b, Point3):
        shape, point = a, b
    elif isinstance(a, Point3):
        shape, point = b, a
    else:
        raise ValueError('bad arguments passed to closest_point: {}, {}'.format(a, b))
    if isinstance(shape, Line3):
        return _closest_on_line(shape, point)
    if isinstance(shape, Plane):
        return _closest_on_plane(shape, point)
    raise ValueError('bad arguments passed to closest_point: {}, {}'.format(a, b))


__all__ = [
    'distance',
    'magnitude',
    'area',
    'centroid',
    'unit_normal',
    'closest_point',
]
