## robustgeom lines, planes and triangles
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

"""lines, planes, rays, segments and triangles for **robustgeom**

=========
OVERVIEW
=========

These entities are built from ``Point3`` and ``UnitVector3`` values.
Their defining points are always stored verbatim, even when the entity
turns out to be invalid or degenerate, so the caller can inspect what
went wrong.  Only derived data (a line's cached directions) is frozen
to the infinity sentinel.

An entity built from an invalid sub-entity is invalid.  Beyond that:

- ``Line3`` is degenerate if its base and target coincide to within
  epsilon, if their distance is not finite, or if either of its cached
  directions is degenerate
- ``Segment3`` uses the same coincidence test, but caches no direction
- ``Plane`` and ``Ray3`` are degenerate if their unit vector is
- ``Triangle3`` is degenerate if any edge length is ~0 or not finite,
  if its area is ~0 (or not finite), or if any of the three pairwise
  edge cross products is ~(0,0,0).  Every test is evaluated, and the
  names of the failing tests are kept in ``degeneracy_reasons``.

"""

from __future__ import annotations

from robustgeom.classification import Classification, Classified
from robustgeom.precision import precision_for, quiet
from robustgeom.vecmath import add, cross_product, point_distance, subtract
from robustgeom.vectors import (
    Point3,
    UnitVector3,
    Vector3,
    invalid_unit_vector3,
    invalid_vector3,
    make_unit_vector3,
)


def _require(value, kind, where):
    if not isinstance(value, kind):
        raise ValueError('bad argument passed to {}: {}'.format(where, value))
    return value


def _sub_classification(*parts):
    return Classification().combine(*(p.classification for p in parts))


def _coincident(prec, p1, p2):
    d = point_distance(p1, p2)
    return not prec.is_valid(d) or prec.is_equal(d, 0)


class Line3(Classified):
    """infinite line through ``base`` and ``target``"""

    __slots__ = ('base', 'target', 'full_direction', 'direction',
                 'precision', 'classification')

    @quiet
    def __init__(self, base=None, target=None):
        if base is None and target is None:
            base = Point3(0.0, 0.0, 0.0)
            target = Point3(1.0, 1.0, 1.0)
        _require(base, Point3, 'Line3')
        _require(target, Point3, 'Line3')
        prec = precision_for(base, target)
        self._set('base', base)
        self._set('target', target)
        self._set('precision', prec)

        full = invalid_vector3(prec)
        direction = invalid_unit_vector3(prec)
        cls = _sub_classification(base, target)
        if cls.is_valid:
            degenerate = _coincident(prec, base, target)
            if not degenerate:
                full = subtract(target, base)
                direction = make_unit_vector3(full)
                degenerate = full.is_degenerate() or direction.is_degenerate()
            if degenerate:
                full = invalid_vector3(prec)
                direction = invalid_unit_vector3(prec)
                cls = Classification(degenerate=True, subnormal=cls.subnormal)
            else:
                cls = Classification(subnormal=cls.subnormal or full.is_subnormal()
                                     or direction.is_subnormal())
        self._set('full_direction', full)
        self._set('direction', direction)
        self._set('classification', cls)

    def __repr__(self):
        return 'Line3({}, {})'.format(self.base, self.target)


class Segment3(Classified):
    """the portion of a line between ``base`` and ``target``"""

    __slots__ = ('base', 'target', 'precision', 'classification')

    @quiet
    def __init__(self, base=None, target=None):
        if base is None and target is None:
            base = Point3(0.0, 0.0, 0.0)
            target = Point3(1.0, 1.0, 1.0)
        _require(base, Point3, 'Segment3')
        _require(target, Point3, 'Segment3')
        prec = precision_for(base, target)
        self._set('base', base)
        self._set('target', target)
        self._set('precision', prec)

        cls = _sub_classification(base, target)
        if cls.is_valid and _coincident(prec, base, target):
            cls = Classification(degenerate=True, subnormal=cls.subnormal)
        self._set('classification', cls)

    def __repr__(self):
        return 'Segment3({}, {})'.format(self.base, self.target)

    def length(self):
        return point_distance(self.base, self.target)


class Plane(Classified):
    """plane through ``base`` with unit normal ``up``"""

    __slots__ = ('base', 'up', 'precision', 'classification')

    def __init__(self, base=None, up=None):
        if base is None and up is None:
            base = Point3(0.0, 0.0, 0.0)
            up = UnitVector3(0.0, 0.0, 1.0)
        _require(base, Point3, 'Plane')
        _require(up, UnitVector3, 'Plane')
        self._set('base', base)
        self._set('up', up)
        self._set('precision', precision_for(base, up))
        self._set('classification', _sub_classification(base, up))

    def __repr__(self):
        return 'Plane({}, {})'.format(self.base, self.up)


class Ray3(Classified):
    """half-line from ``base`` along unit ``direction``"""

    __slots__ = ('base', 'direction', 'precision', 'classification')

    def __init__(self, base=None, direction=None):
        if base is None and direction is None:
            base = Point3(0.0, 0.0, 0.0)
            direction = UnitVector3(0.0, 0.0, 1.0)
        _require(base, Point3, 'Ray3')
        _require(direction, UnitVector3, 'Ray3')
        self._set('base', base)
        self._set('direction', direction)
        self._set('precision', precision_for(base, direction))
        self._set('classification', _sub_classification(base, direction))

    def __repr__(self):
        return 'Ray3({}, {})'.format(self.base, self.direction)


## Triangle degeneracy tests.  Each returns True if the test fails.
## Edges follow the winding convention p2-p1, p3-p2, p1-p3.

def _edge_length_fails(prec, p1, p2, p3):
    return (_coincident(prec, p1, p2) or _coincident(prec, p2, p3)
            or _coincident(prec, p3, p1))


def _area_fails(prec, p1, p2, p3):
    n = cross_product(subtract(p2, p1), subtract(p3, p1))
    area = n.magnitude * prec.scalar(0.5)
    return not prec.is_valid(area) or prec.is_equal(area, 0)


def _cross_fails(prec, e1, e2):
    c = cross_product(e1, e2)
    return all(prec.is_equal(v, 0) for v in c)


class Triangle3(Classified):
    """triangle with vertices ``p1``, ``p2``, ``p3``"""

    __slots__ = ('p1', 'p2', 'p3', 'degeneracy_reasons', 'precision', 'classification')

    @quiet
    def __init__(self, p1=None, p2=None, p3=None):
        if p1 is None and p2 is None and p3 is None:
            p1 = Point3(0.0, 0.0, 0.0)
            p2 = Point3(1.0, 0.0, 0.0)
            p3 = Point3(0.0, 1.0, 0.0)
        for p in (p1, p2, p3):
            _require(p, Point3, 'Triangle3')
        prec = precision_for(p1, p2, p3)
        self._set('p1', p1)
        self._set('p2', p2)
        self._set('p3', p3)
        self._set('precision', prec)

        reasons = []
        cls = _sub_classification(p1, p2, p3)
        if cls.is_valid:
            e1 = subtract(p2, p1)
            e2 = subtract(p3, p2)
            e3 = subtract(p1, p3)
            if _edge_length_fails(prec, p1, p2, p3):
                reasons.append('edge_length')
            if _area_fails(prec, p1, p2, p3):
                reasons.append('area')
            if _cross_fails(prec, e1, e2):
                reasons.append('cross_12')
            if _cross_fails(prec, e2, e3):
                reasons.append('cross_23')
            if _cross_fails(prec, e3, e1):
                reasons.append('cross_31')
            if reasons:
                cls = Classification(degenerate=True, subnormal=cls.subnormal)
        self._set('degeneracy_reasons', tuple(reasons))
        self._set('classification', cls)

    def __repr__(self):
        return 'Triangle3({}, {}, {})'.format(self.p1, self.p2, self.p3)

    def __iter__(self):
        yield self.p1
        yield self.p2
        yield self.p3

    def edges(self):
        """the three edges as segments, following the winding order"""
        return (Segment3(self.p1, self.p2),
                Segment3(self.p2, self.p3),
                Segment3(self.p3, self.p1))


## creation functions, alternates to the constructors
## --------------------------------------------------

def make_line3(p, v):
    """line through point ``p`` along vector or unit vector ``v``"""
    _require(p, Point3, 'make_line3')
    _require(v, (Vector3, UnitVector3), 'make_line3')
    return Line3(p, add(p, v))


def make_plane(p1, p2, p3):
    """plane through three points, normal ``(p2-p1) x (p3-p1)``"""
    for p in (p1, p2, p3):
        _require(p, Point3, 'make_plane')
    return Plane(p1, make_unit_vector3(cross_product(subtract(p2, p1), subtract(p3, p1))))


def make_ray3(p1, p2):
    """ray from ``p1`` through ``p2``"""
    _require(p1, Point3, 'make_ray3')
    _require(p2, Point3, 'make_ray3')
    return Ray3(p1, make_unit_vector3(subtract(p2, p1)))


__all__ = [
    'Line3',
    'Segment3',
    'Plane',
    'Ray3',
    'Triangle3',
    'make_line3',
    'make_plane',
    'make_ray3',
]
