"""Tagged results of the intersection tests."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from robustgeom.vectors import Point3


class ResultCode(Enum):
    """Outcome of an intersection test."""

    OK = "ok"
    DEGENERATE = "degenerate"
    COPLANAR = "coplanar"
    PARALLEL = "parallel"
    NO_INTERSECTION = "no_intersection"
    OVERFLOW = "overflow"


@dataclass(frozen=True)
class Intersection:
    """Result code plus the intersection point, where the test has one.

    ``point`` is ``None`` for tests that only answer yes or no (triangle
    against plane, triangle against triangle).  For point-producing
    tests that fail it is the invalid point, except for ``OVERFLOW``,
    where the overflowed point is kept so the caller can see what blew up.
    """

    code: ResultCode
    point: Optional[Point3] = None

    def __bool__(self) -> bool:
        return self.code is ResultCode.OK

    @property
    def ok(self) -> bool:
        return self.code is ResultCode.OK


__all__ = ['ResultCode', 'Intersection']
