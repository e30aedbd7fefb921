import robustgeom
from robustgeom import (
    Plane,
    Point3,
    ResultCode,
    Triangle3,
    UnitVector3,
    intersect,
)


def test_version():
    assert isinstance(robustgeom.__version__, str)
    assert robustgeom.__version__


def test_top_level_api():
    tri = Triangle3(Point3(0, 0, 0), Point3(1, 0, 0), Point3(0, 1, 0))
    plane = Plane(Point3(0.25, 0, 0), UnitVector3(1, 0, 0))
    assert intersect(tri, plane).code is ResultCode.OK
    assert robustgeom.multiply(robustgeom.Vector3(1, 2, 3), 2) == robustgeom.Vector3(2, 4, 6)
