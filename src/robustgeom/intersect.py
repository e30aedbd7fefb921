## robustgeom intersection tests
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

"""pairwise intersection tests for **robustgeom**

=========
OVERVIEW
=========

Every test returns an ``Intersection``: a ``ResultCode`` plus, for the
tests that compute one, the intersection point.  Geometric failure is
never an exception.

- if either input is degenerate (or invalid) the result is
  ``DEGENERATE`` and no arithmetic is attempted
- a line, ray or segment whose direction lies in a plane is
  ``COPLANAR`` if its base point is on the plane, else ``PARALLEL``.
  Against a triangle, a direction in the triangle's plane is always
  reported as ``COPLANAR``
- ``OVERFLOW`` is reported when the arithmetic produced a non-finite
  result.  The overflowed point is kept on the result
- ``NO_INTERSECTION`` otherwise, when there is no hit

Boundary conventions:

- a ray or segment touching the plane exactly at its base point
  (``d == 0``) intersects.  The comparison is exact, there is no
  epsilon band below zero
- the barycentric bounds of the triangle tests are epsilon-inclusive,
  so hits on a triangle edge or vertex count, and the parametric
  distance of a ray hit need only be ``>= 0`` to within epsilon
- a segment hits a triangle only if the hit is no farther from the
  segment base than the segment target is

``intersect(a, b)`` dispatches on the types of its arguments.  For
pairs of different types the arguments are put in resolver order
first, so ``intersect(b, a)`` gives the same answer.  Two triangles
are passed through in the order given, and the triangle/triangle test
can answer differently for the two orders when the triangles only
touch (see ``robustgeom.tritri``).

"""

from __future__ import annotations

from robustgeom.logging_utils import get_logger
from robustgeom.measure import distance
from robustgeom.precision import precision_for, quiet
from robustgeom.result import Intersection, ResultCode
from robustgeom.shapes import Line3, Plane, Ray3, Segment3, Triangle3
from robustgeom.tritri import triangle_overlap
from robustgeom.vecmath import add, cross_product, dot_product, multiply, point_distance, subtract
from robustgeom.vectors import invalid_point3, make_unit_vector3

logger = get_logger(__name__)


def _check(a, kind_a, b, kind_b, where):
    if not (isinstance(a, kind_a) and isinstance(b, kind_b)):
        raise ValueError('bad arguments passed to {}: {}, {}'.format(where, a, b))


def _miss(code, prec):
    return Intersection(code, invalid_point3(prec))


def _degenerate(a, b):
    if a.is_degenerate() or b.is_degenerate():
        logger.debug('degenerate input: %s, %s', a, b)
        return True
    return False


def _overflow(a, b, point):
    logger.debug('intersection of %s and %s overflowed: %s', a, b, point)
    return Intersection(ResultCode.OVERFLOW, point)


## plane against a line, ray or segment
## ------------------------------------

@quiet
def _plane_hit(plane, other, base, direction, length=None, ray=False):
    prec = precision_for(plane, other)
    zero = prec.scalar(0.0)

    dp = dot_product(direction, plane.up)
    if prec.is_equal(dp, zero):
        if prec.is_equal(distance(base, plane), zero):
            return _miss(ResultCode.COPLANAR, prec)
        return _miss(ResultCode.PARALLEL, prec)

    # see https://en.wikipedia.org/wiki/Line%E2%80%93plane_intersection
    d = dot_product(subtract(plane.base, base), plane.up) / dp

    ## d == 0 is touching, which counts as a hit
    if (ray or length is not None) and d < 0:
        return _miss(ResultCode.NO_INTERSECTION, prec)
    if length is not None and d > length:
        return _miss(ResultCode.NO_INTERSECTION, prec)

    hit = add(base, multiply(direction, d))
    if not hit.is_valid():
        return _overflow(plane, other, hit)
    return Intersection(ResultCode.OK, hit)


def intersect_plane_line(plane, line):
    """intersection of a plane and an infinite line"""
    _check(plane, Plane, line, Line3, 'intersect_plane_line')
    if _degenerate(plane, line):
        return _miss(ResultCode.DEGENERATE, precision_for(plane, line))
    return _plane_hit(plane, line, line.base, line.direction)


def intersect_plane_ray(plane, ray):
    """intersection of a plane and a ray"""
    _check(plane, Plane, ray, Ray3, 'intersect_plane_ray')
    if _degenerate(plane, ray):
        return _miss(ResultCode.DEGENERATE, precision_for(plane, ray))
    return _plane_hit(plane, ray, ray.base, ray.direction, ray=True)


def intersect_plane_segment(plane, segment):
    """intersection of a plane and a segment"""
    _check(plane, Plane, segment, Segment3, 'intersect_plane_segment')
    if _degenerate(plane, segment):
        return _miss(ResultCode.DEGENERATE, precision_for(plane, segment))
    direction = make_unit_vector3(segment.base, segment.target)
    return _plane_hit(plane, segment, segment.base, direction,
                      length=point_distance(segment.base, segment.target))


## triangle against a line, ray or segment
## ---------------------------------------

## Moller-Trumbore barycentric test, see
## https://fileadmin.cs.lth.se/cs/Personal/Tomas_Akenine-Moller/raytri/raytri.c
## Edges are always p2-p1 and p3-p1.  Returns either a finished
## Intersection, or the parametric distance t along ``direction``.
@quiet
def _barycentric(tri, base, direction, prec):
    zero = prec.scalar(0.0)
    one = prec.scalar(1.0)

    edge1 = subtract(tri.p2, tri.p1)
    edge2 = subtract(tri.p3, tri.p1)

    pvec = cross_product(direction, edge2)
    det = dot_product(edge1, pvec)
    if prec.is_equal(det, zero):
        return _miss(ResultCode.COPLANAR, prec)

    tvec = subtract(base, tri.p1)
    u = dot_product(tvec, pvec) / det
    if not (prec.is_greater_or_equal(u, zero) and prec.is_less_or_equal(u, one)):
        return _miss(ResultCode.NO_INTERSECTION, prec)

    qvec = cross_product(tvec, edge1)
    v = dot_product(direction, qvec) / det
    if not (prec.is_greater_or_equal(v, zero) and prec.is_less_or_equal(u + v, one)):
        return _miss(ResultCode.NO_INTERSECTION, prec)

    return dot_product(edge2, qvec) / det


@quiet
def intersect_triangle_ray(tri, ray):
    """intersection of a triangle and a ray"""
    _check(tri, Triangle3, ray, Ray3, 'intersect_triangle_ray')
    prec = precision_for(tri, ray)
    if _degenerate(tri, ray):
        return _miss(ResultCode.DEGENERATE, prec)

    t = _barycentric(tri, ray.base, ray.direction, prec)
    if isinstance(t, Intersection):
        return t
    if not prec.is_greater_or_equal(t, prec.scalar(0.0)):
        return _miss(ResultCode.NO_INTERSECTION, prec)

    hit = add(ray.base, multiply(ray.direction, t))
    if not hit.is_valid():
        return _overflow(tri, ray, hit)
    return Intersection(ResultCode.OK, hit)


@quiet
def intersect_triangle_line(tri, line):
    """intersection of a triangle and an infinite line"""
    _check(tri, Triangle3, line, Line3, 'intersect_triangle_line')
    prec = precision_for(tri, line)
    if _degenerate(tri, line):
        return _miss(ResultCode.DEGENERATE, prec)

    t = _barycentric(tri, line.base, line.direction, prec)
    if isinstance(t, Intersection):
        return t

    hit = add(line.base, multiply(line.direction, t))
    if not hit.is_valid():
        return _overflow(tri, line, hit)
    return Intersection(ResultCode.OK, hit)


@quiet
def intersect_triangle_segment(tri, segment):
    """intersection of a triangle and a segment"""
    _check(tri, Triangle3, segment, Segment3, 'intersect_triangle_segment')
    prec = precision_for(tri, segment)
    if _degenerate(tri, segment):
        return _miss(ResultCode.DEGENERATE, prec)

    direction = make_unit_vector3(segment.base, segment.target)
    t = _barycentric(tri, segment.base, direction, prec)
    if isinstance(t, Intersection):
        return t
    if not prec.is_valid(t):
        logger.debug('parametric distance overflowed: %s, %s', tri, segment)
        return _miss(ResultCode.OVERFLOW, prec)
    ## t == 0 is touching, which counts as a hit
    if t < 0:
        return _miss(ResultCode.NO_INTERSECTION, prec)

    hit = add(segment.base, multiply(direction, t))
    if not hit.is_valid():
        return _overflow(tri, segment, hit)

    ## the direction is a derived unit vector, so bound the hit by distance
    if point_distance(hit, segment.base) > point_distance(segment.base, segment.target):
        return _miss(ResultCode.NO_INTERSECTION, prec)
    return Intersection(ResultCode.OK, hit)


## triangle against a plane or a triangle
## --------------------------------------

def edge_codes_to_code(codes):
    """merge the codes of the three edge/plane tests of a triangle: any
    hit wins, then any overflow.  Only if every edge agrees is the
    triangle coplanar with, or parallel to, the plane."""
    if ResultCode.OK in codes:
        return ResultCode.OK
    if ResultCode.OVERFLOW in codes:
        return ResultCode.OVERFLOW
    if all(c is ResultCode.COPLANAR for c in codes):
        return ResultCode.COPLANAR
    if all(c is ResultCode.PARALLEL for c in codes):
        return ResultCode.PARALLEL
    return ResultCode.NO_INTERSECTION


def intersect_triangle_plane(tri, plane):
    """does a triangle meet a plane.  Each edge is tested as a segment,
    see ``edge_codes_to_code()``."""
    _check(tri, Triangle3, plane, Plane, 'intersect_triangle_plane')
    if _degenerate(tri, plane):
        return Intersection(ResultCode.DEGENERATE)

    codes = [intersect_plane_segment(plane, edge).code for edge in tri.edges()]
    return Intersection(edge_codes_to_code(codes))


def intersect_triangle_triangle(tri1, tri2):
    """do two triangles overlap; see ``robustgeom.tritri``"""
    _check(tri1, Triangle3, tri2, Triangle3, 'intersect_triangle_triangle')
    if _degenerate(tri1, tri2):
        return Intersection(ResultCode.DEGENERATE)
    return Intersection(triangle_overlap(tri1, tri2))


## dispatch on argument types
## -----------------------------

_RESOLVERS = {
    (Plane, Line3): intersect_plane_line,
    (Plane, Ray3): intersect_plane_ray,
    (Plane, Segment3): intersect_plane_segment,
    (Triangle3, Ray3): intersect_triangle_ray,
    (Triangle3, Line3): intersect_triangle_line,
    (Triangle3, Segment3): intersect_triangle_segment,
    (Triangle3, Plane): intersect_triangle_plane,
    (Triangle3, Triangle3): intersect_triangle_triangle,
}


def intersect(a, b):
    """intersect any supported pair of entities.  Mixed-type pairs may be
    given in either order; two triangles are tested in the order given."""
    resolver = _RESOLVERS.get((type(a), type(b)))
    if resolver is not None:
        return resolver(a, b)
    resolver = _RESOLVERS.get((type(b), type(a)))
    if resolver is not None:
        return resolver(b, a)
    raise ValueError('no intersection test for {} and {}'.format(type(a).__name__,
                                                                  type(b).__name__))


__all__ = [
    'ResultCode',
    'Intersection',
    'intersect',
    'intersect_plane_line',
    'intersect_plane_ray',
    'intersect_plane_segment',
    'intersect_triangle_ray',
    'intersect_triangle_line',
    'intersect_triangle_segment',
    'intersect_triangle_plane',
    'edge_codes_to_code',
    'intersect_triangle_triangle',
]
