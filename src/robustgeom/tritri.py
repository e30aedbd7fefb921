## robustgeom triangle/triangle overlap
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

"""triangle/triangle overlap test

Based on Tomas Moller, "A Fast Triangle-Triangle Intersection Test",
Journal of Graphics Tools 2(2), 1997 (the division-free variant), with
the edge/edge test from Franklin Antonio, "Faster Line Segment
Intersection", Graphics Gems III.

The test runs in three stages:

1. each triangle's vertices are classified by signed distance to the
   plane of the other triangle.  Distances within epsilon of zero are
   snapped to exactly zero.  If all three distances share a sign and
   none is zero, the triangles are separated.
2. otherwise both triangles are reduced to intervals on the line where
   the two planes meet, projected onto the coordinate axis along which
   that line has its largest component.  Overlapping intervals mean
   the triangles intersect.
3. if all signed distances of a triangle snapped to zero, the
   triangles are coplanar and no interval can be formed.  They are then
   projected onto the coordinate plane that drops the largest component
   of the normal and tested in 2-D: nine edge/edge tests, then a
   containment test in each direction.

Vertices are handled as plain tuples of scalars of one width.
Non-finite plane normals, signed distances or intervals are reported
as ``OVERFLOW``.

"""

from __future__ import annotations

from robustgeom.logging_utils import get_logger
from robustgeom.precision import precision_for, quiet
from robustgeom.result import ResultCode

logger = get_logger(__name__)


def _sub(a, b):
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _cross(a, b):
    return (a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0])


def _dot(a, b):
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _finite(prec, values):
    return all(prec.is_valid(v) for v in values)


def _plane(v0, v1, v2):
    """plane equation ``N.X + d = 0`` of a triangle"""
    n = _cross(_sub(v1, v0), _sub(v2, v0))
    return n, -_dot(n, v0)


def _signed_distances(prec, n, d, verts):
    zero = prec.scalar(0.0)
    dist = []
    for v in verts:
        s = _dot(n, v) + d
        ## snap to the plane, for robustness at coplanar boundaries
        if prec.is_equal(s, zero):
            s = zero
        dist.append(s)
    return dist


def _interval(prec, vp, dist):
    """reduce one triangle to ``(a, b, c, x0, x1)``, the terms of its
    interval along the intersection line.  Returns None if all three
    vertices lie on the other plane."""
    p0, p1, p2 = vp
    d0, d1, d2 = dist
    if d0 * d1 > 0:
        ## d0, d1 on the same side, d2 on the other side or on the plane
        return p2, (p0 - p2) * d2, (p1 - p2) * d2, d2 - d0, d2 - d1
    if d0 * d2 > 0:
        return p1, (p0 - p1) * d1, (p2 - p1) * d1, d1 - d0, d1 - d2
    if d1 * d2 > 0 or d0 != 0:
        return p0, (p1 - p0) * d0, (p2 - p0) * d0, d0 - d1, d0 - d2
    if d1 != 0:
        return p1, (p0 - p1) * d1, (p2 - p1) * d1, d1 - d0, d1 - d2
    if d2 != 0:
        return p2, (p0 - p2) * d2, (p1 - p2) * d2, d2 - d0, d2 - d1
    return None


def _largest_axis(v):
    """index of the component of ``v`` with the largest magnitude"""
    index = 0
    best = abs(v[0])
    for i in (1, 2):
        if abs(v[i]) > best:
            best = abs(v[i])
            index = i
    return index


def _projection_axes(n):
    """the two coordinate axes left after dropping the largest
    component of normal ``n``"""
    a0, a1, a2 = abs(n[0]), abs(n[1]), abs(n[2])
    if a0 > a1:
        if a0 > a2:
            return 1, 2
        return 0, 1
    if a2 > a1:
        return 0, 1
    return 0, 2


def _edge_edge(i0, i1, v0, v1, u0, u1):
    """does 2-D edge ``v0 v1`` cross edge ``u0 u1``"""
    ax = v1[i0] - v0[i0]
    ay = v1[i1] - v0[i1]
    bx = u0[i0] - u1[i0]
    by = u0[i1] - u1[i1]
    cx = v0[i0] - u0[i0]
    cy = v0[i1] - u0[i1]
    f = ay * bx - ax * by
    d = by * cx - bx * cy
    if (f > 0 and 0 <= d <= f) or (f < 0 and f <= d <= 0):
        e = ax * cy - ay * cx
        if f > 0:
            return 0 <= e <= f
        return f <= e <= 0
    return False


def _edge_against_tri_edges(i0, i1, v0, v1, u0, u1, u2):
    return (_edge_edge(i0, i1, v0, v1, u0, u1)
            or _edge_edge(i0, i1, v0, v1, u1, u2)
            or _edge_edge(i0, i1, v0, v1, u2, u0))


def _side(i0, i1, p, q, r):
    ## line through q, r evaluated at p
    a = r[i1] - q[i1]
    b = -(r[i0] - q[i0])
    c = -a * q[i0] - b * q[i1]
    return a * p[i0] + b * p[i1] + c


def _point_in_tri(i0, i1, p, u0, u1, u2):
    """is ``p`` strictly inside the 2-D projection of ``u0 u1 u2``"""
    d0 = _side(i0, i1, p, u0, u1)
    d1 = _side(i0, i1, p, u1, u2)
    d2 = _side(i0, i1, p, u2, u0)
    return d0 * d1 > 0 and d0 * d2 > 0


def coplanar_overlap(n, v, u):
    """2-D overlap test of coplanar triangles ``v`` and ``u`` (vertex
    tuples), projected along normal ``n``"""
    i0, i1 = _projection_axes(n)
    v0, v1, v2 = v
    u0, u1, u2 = u
    if (_edge_against_tri_edges(i0, i1, v0, v1, u0, u1, u2)
            or _edge_against_tri_edges(i0, i1, v1, v2, u0, u1, u2)
            or _edge_against_tri_edges(i0, i1, v2, v0, u0, u1, u2)):
        return True
    ## one triangle entirely inside the other
    return _point_in_tri(i0, i1, v0, u0, u1, u2) or _point_in_tri(i0, i1, u0, v0, v1, v2)


def _coplanar(n, v, u):
    if coplanar_overlap(n, v, u):
        return ResultCode.OK
    return ResultCode.NO_INTERSECTION


@quiet
def triangle_overlap(tri1, tri2):
    """``ResultCode`` of the overlap test of two non-degenerate
    triangles.

    The test is not symmetric at touching boundaries: triangles that
    share an edge or a vertex can overlap in one argument order and not
    in the other, because the snapped distances and the interval pivots
    are taken from different triangles."""
    prec = precision_for(tri1, tri2)
    v = tuple(tuple(prec.scalar(c) for c in p) for p in tri1)
    u = tuple(tuple(prec.scalar(c) for c in p) for p in tri2)

    n1, d1 = _plane(*v)
    if not _finite(prec, n1 + (d1,)):
        logger.debug('plane of %s overflowed', tri1)
        return ResultCode.OVERFLOW
    du = _signed_distances(prec, n1, d1, u)
    if not _finite(prec, du):
        logger.debug('signed distances to plane of %s overflowed', tri1)
        return ResultCode.OVERFLOW
    if du[0] * du[1] > 0 and du[0] * du[2] > 0:
        return ResultCode.NO_INTERSECTION

    n2, d2 = _plane(*u)
    if not _finite(prec, n2 + (d2,)):
        logger.debug('plane of %s overflowed', tri2)
        return ResultCode.OVERFLOW
    dv = _signed_distances(prec, n2, d2, v)
    if not _finite(prec, dv):
        logger.debug('signed distances to plane of %s overflowed', tri2)
        return ResultCode.OVERFLOW
    if dv[0] * dv[1] > 0 and dv[0] * dv[2] > 0:
        return ResultCode.NO_INTERSECTION

    ## direction of the intersection line, projected onto its largest axis
    index = _largest_axis(_cross(n1, n2))
    vp = tuple(p[index] for p in v)
    up = tuple(p[index] for p in u)

    iv = _interval(prec, vp, dv)
    if iv is None:
        return _coplanar(n1, v, u)
    iu = _interval(prec, up, du)
    if iu is None:
        return _coplanar(n1, v, u)

    a, b, c, x0, x1 = iv
    d, e, f, y0, y1 = iu
    xx = x0 * x1
    yy = y0 * y1
    xxyy = xx * yy

    tmp = a * xxyy
    isect1 = sorted((tmp + b * x1 * yy, tmp + c * x0 * yy))
    tmp = d * xxyy
    isect2 = sorted((tmp + e * xx * y1, tmp + f * xx * y0))

    if not _finite(prec, isect1 + isect2):
        logger.debug('intersection intervals of %s and %s overflowed', tri1, tri2)
        return ResultCode.OVERFLOW
    if isect1[1] < isect2[0] or isect2[1] < isect1[0]:
        return ResultCode.NO_INTERSECTION
    return ResultCode.OK


__all__ = ['triangle_overlap', 'coplanar_overlap']
