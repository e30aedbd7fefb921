# -*- coding: utf-8 -*-
"""robustgeom: immutable 3-D primitives with validity classification,
and robust intersection tests"""

import logging
from importlib.metadata import PackageNotFoundError, version

from robustgeom.classification import Classification, is_degenerate, is_subnormal, is_valid
from robustgeom.intersect import (
    Intersection,
    ResultCode,
    intersect,
    intersect_plane_line,
    intersect_plane_ray,
    intersect_plane_segment,
    intersect_triangle_line,
    intersect_triangle_plane,
    intersect_triangle_ray,
    intersect_triangle_segment,
    intersect_triangle_triangle,
)
from robustgeom.matrix import (
    Matrix3,
    RotationMatrix3,
    determinant,
    identity,
    is_equal_matrix,
    make_rotation,
    transpose,
)
from robustgeom.measure import area, centroid, closest_point, distance, magnitude, unit_normal
from robustgeom.precision import DOUBLE, SINGLE, Precision, epsilon, infinity
from robustgeom.shapes import Line3, Plane, Ray3, Segment3, Triangle3, make_line3, make_plane, make_ray3
from robustgeom.vecmath import add, cross_product, dot_product, multiply, subtract
from robustgeom.vectors import (
    Point3,
    UnitVector3,
    Vector3,
    invalid_point3,
    invalid_unit_vector3,
    invalid_value,
    invalid_vector3,
    make_unit_vector3,
    make_vector3,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

try:
    __version__ = version("robustgeom")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"
