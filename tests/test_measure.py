import mpmath
import numpy as np
import pytest

from robustgeom.measure import area, centroid, closest_point, distance, unit_normal
from robustgeom.precision import SINGLE
from robustgeom.shapes import Line3, Plane, Triangle3, make_line3
from robustgeom.vectors import Point3, UnitVector3, Vector3
## unit tests for robustgeom measure.py


def _tri(prec, *pts):
    return Triangle3(*(Point3(*p, dtype=prec) for p in pts))


class TestDistance:

    def test_points(self, prec):
        d = distance(Point3(0, 0, 0, dtype=prec), Point3(3, 4, 12, dtype=prec))
        assert d == 13

    def test_signed_plane_distance(self, prec):
        plane = Plane(Point3(0, 0, 1, dtype=prec), UnitVector3(0, 0, 1, dtype=prec))
        above = Point3(1, 2, 5, dtype=prec)
        below = Point3(1, 2, -2, dtype=prec)
        assert distance(above, plane) == 4
        assert distance(below, plane) == -3
        ## either order
        assert distance(plane, above) == 4
        assert distance(plane, below) == -3

    def test_on_plane(self):
        assert distance(Point3(7, -3, 0), Plane()) == 0

    def test_non_finite(self, prec):
        plane = Plane(Point3(dtype=prec), UnitVector3(0, 0, 1, dtype=prec))
        d = distance(Point3(np.nan, 0, 0, dtype=prec), plane)
        assert np.isinf(d) and d > 0
        assert np.isinf(distance(Point3(np.inf, 0, 0), Point3()))

    def test_bad_arguments(self):
        with pytest.raises(ValueError):
            distance(Vector3(), Point3())
        with pytest.raises(ValueError):
            distance(Plane(), Plane())


class TestArea:

    def test_right_triangle(self, prec):
        assert area(_tri(prec, (0, 0, 0), (2, 0, 0), (0, 3, 0))) == 3
        assert area(Triangle3()) == 0.5

    def test_against_high_precision(self, prec):
        pts = [(0.1, 0.2, 0.3), (1.7, -0.4, 2.2), (-0.9, 3.1, 0.5)]
        tri = _tri(prec, *pts)
        with mpmath.workdps(50):
            p1, p2, p3 = [[mpmath.mpf(float(c)) for c in p] for p in tri]
            u = [b - a for a, b in zip(p1, p2)]
            v = [b - a for a, b in zip(p1, p3)]
            n = [u[1] * v[2] - u[2] * v[1],
                 u[2] * v[0] - u[0] * v[2],
                 u[0] * v[1] - u[1] * v[0]]
            want = float(mpmath.sqrt(sum(c * c for c in n)) / 2)
        assert prec.is_equal_scaled(area(tri), want, 16)

    def test_degenerate_is_zero(self, prec):
        assert area(_tri(prec, (0, 0, 0), (1, 1, 1), (2, 2, 2))) == 0

    def test_invalid_is_infinite(self, prec):
        a = area(_tri(prec, (0, 0, np.nan), (1, 0, 0), (0, 1, 0)))
        assert np.isinf(a)

    def test_bad_argument(self):
        with pytest.raises(ValueError):
            area(Plane())


class TestCentroid:

    def test_centroid(self, prec):
        c = centroid(_tri(prec, (0, 0, 0), (3, 0, 0), (0, 3, 6)))
        assert c == Point3(1, 1, 2, dtype=prec)
        assert c.precision is prec

    def test_degenerate_has_centroid(self):
        c = centroid(Triangle3(Point3(0, 0, 0), Point3(3, 3, 3), Point3(6, 6, 6)))
        assert c == Point3(3, 3, 3)

    def test_invalid(self):
        c = centroid(Triangle3(Point3(np.inf, 0, 0), Point3(1, 0, 0), Point3(0, 1, 0)))
        assert not c.is_valid()

    def test_bad_argument(self):
        with pytest.raises(ValueError):
            centroid(Point3())


class TestUnitNormal:

    def test_winding(self, prec):
        n = unit_normal(_tri(prec, (0, 0, 0), (1, 0, 0), (0, 1, 0)))
        assert n == UnitVector3(0, 0, 1, dtype=prec)
        n = unit_normal(_tri(prec, (0, 0, 0), (0, 1, 0), (1, 0, 0)))
        assert n == UnitVector3(0, 0, -1, dtype=prec)

    def test_tilted(self):
        n = unit_normal(Triangle3(Point3(1, 0, 0), Point3(0, 1, 0), Point3(0, 0, 1)))
        third = 1 / np.sqrt(3)
        assert all(SINGLE.is_equal(c, third) for c in n)

    def test_degenerate(self):
        n = unit_normal(Triangle3(Point3(0, 0, 0), Point3(0, 0, 0), Point3(1, 0, 0)))
        assert not n.is_valid()
        assert isinstance(n, UnitVector3)

    def test_bad_argument(self):
        with pytest.raises(ValueError):
            unit_normal(Line3())


class TestClosestPoint:

    def test_line(self, prec):
        line = make_line3(Point3(0, 0, 0, dtype=prec), Vector3(2, 0, 0, dtype=prec))
        p = Point3(3, 4, 5, dtype=prec)
        assert closest_point(line, p) == Point3(3, 0, 0, dtype=prec)
        assert closest_point(p, line) == Point3(3, 0, 0, dtype=prec)

    def test_point_on_line(self):
        line = Line3(Point3(1, 1, 0), Point3(1, 5, 0))
        assert closest_point(line, Point3(1, 3, 0)) == Point3(1, 3, 0)

    def test_plane(self, prec):
        plane = Plane(Point3(0, 0, 1, dtype=prec), UnitVector3(0, 0, 1, dtype=prec))
        p = Point3(2, 3, 7, dtype=prec)
        assert closest_point(plane, p) == Point3(2, 3, 1, dtype=prec)
        assert closest_point(p, plane) == Point3(2, 3, 1, dtype=prec)

    def test_degenerate_shape(self):
        p = Point3(1, 2, 3)
        assert not closest_point(Line3(p, p), Point3()).is_valid()
        flat = Plane(Point3(), UnitVector3(0, 0, 0))
        assert not closest_point(flat, p).is_valid()

    def test_invalid_point(self):
        assert not closest_point(Plane(), Point3(np.nan, 0, 0)).is_valid()

    def test_bad_arguments(self):
        with pytest.raises(ValueError):
            closest_point(Point3(), Point3())
        with pytest.raises(ValueError):
            closest_point(Plane(), Line3())
        with pytest.raises(ValueError):
            closest_point(Triangle3(), Point3())
