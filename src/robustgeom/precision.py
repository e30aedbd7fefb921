## robustgeom precision policy
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

"""per-width floating point policy for **robustgeom**

Every primitive in robustgeom is parametrized over a floating point
width, either single precision (``numpy.float32``) or double precision
(``numpy.float64``).  A ``Precision`` bundles the constants and the
comparisons for one width:

- ``epsilon()`` -- machine epsilon for the width
- ``infinity()`` -- positive infinity, which doubles as the sentinel
  value used to mark invalid derived data
- ``is_valid(v)`` -- ``v`` is finite
- ``is_subnormal(v)`` -- ``v`` is finite, non-zero, and below the
  smallest normal magnitude
- ``is_equal(a, b)`` -- epsilon-relative equality.  If both operands are
  non-zero, ``|a-b|/|a|`` and ``|a-b|/|b|`` must both be within
  epsilon, otherwise the absolute difference must be within epsilon.
  The test is commutative, and deliberately more permissive near zero.
- ``is_equal_scaled(a, b, scale)`` -- as above, with a tolerance of
  ``scale*epsilon``
- ``is_greater_or_equal(a, b)``, ``is_less_or_equal(a, b)`` -- strict
  ordering unioned with ``is_equal``

The module-level functions of the same names infer the width from
their operands, see ``precision_for()``.

"""

from __future__ import annotations

import functools
from dataclasses import dataclass

import numpy as np

from robustgeom.constants import DEFAULT_DTYPE, ROTATION_IDENTITY_TOLERANCE


def quiet(func):
    """run ``func`` with numpy floating point warnings suppressed.

    Overflow and invalid operations are part of the classified domain
    of this library, so they are not reported as warnings.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        with np.errstate(all='ignore'):
            return func(*args, **kwargs)

    return wrapper


@dataclass(frozen=True)
class Precision:
    """constants and epsilon comparisons for one floating point width"""

    name: str
    dtype: type
    eps: float
    tiny: float
    huge: float
    rotation_tolerance: float

    def __repr__(self):
        return 'Precision({})'.format(self.name)

    def epsilon(self):
        return self.eps

    def infinity(self):
        return self.dtype(np.inf)

    def smallest_normal(self):
        return self.tiny

    def largest(self):
        return self.huge

    @quiet
    def scalar(self, v):
        """convert ``v`` to a scalar of this width"""
        return self.dtype(v)

    def is_valid(self, v) -> bool:
        return bool(np.isfinite(v))

    def is_subnormal(self, v) -> bool:
        v = self.scalar(v)
        return bool(np.isfinite(v) and v != 0 and abs(v) < self.tiny)

    @quiet
    def is_equal_scaled(self, a, b, scale) -> bool:
        a = self.scalar(a)
        b = self.scalar(b)
        tol = self.scalar(scale) * self.eps
        diff = abs(a - b)
        if a != 0 and b != 0:
            return bool(diff / abs(a) <= tol and diff / abs(b) <= tol)
        return bool(diff <= tol)

    def is_equal(self, a, b) -> bool:
        return self.is_equal_scaled(a, b, 1)

    def is_greater_or_equal(self, a, b) -> bool:
        return bool(self.scalar(a) > self.scalar(b)) or self.is_equal(a, b)

    def is_less_or_equal(self, a, b) -> bool:
        return bool(self.scalar(a) < self.scalar(b)) or self.is_equal(a, b)

    @quiet
    def sqrt(self, v):
        return np.sqrt(self.scalar(v))

    @quiet
    def hypot3(self, x, y, z):
        """length of ``[x, y, z]`` without intermediate overflow"""
        return np.hypot(np.hypot(self.scalar(x), self.scalar(y)), self.scalar(z))


def _make_precision(name, dtype):
    info = np.finfo(dtype)
    return Precision(name=name,
                     dtype=dtype,
                     eps=info.eps,
                     tiny=info.tiny,
                     huge=info.max,
                     rotation_tolerance=dtype(ROTATION_IDENTITY_TOLERANCE[name]))


SINGLE = _make_precision('single', np.float32)
DOUBLE = _make_precision('double', np.float64)

_BY_NAME = {'single': SINGLE, 'double': DOUBLE}


def resolve_precision(dtype) -> Precision:
    """map a width specification to a ``Precision``.

    Accepts a ``Precision``, ``numpy.float32``, ``numpy.float64`` (or the
    corresponding ``numpy.dtype``), or the strings ``'single'`` and
    ``'double'``.
    """
    if isinstance(dtype, Precision):
        return dtype
    if isinstance(dtype, str) and dtype in _BY_NAME:
        return _BY_NAME[dtype]
    try:
        dt = np.dtype(dtype)
    except TypeError:
        raise ValueError('bad width specification: {}'.format(dtype))
    if dt == np.float32:
        return SINGLE
    if dt == np.float64:
        return DOUBLE
    raise ValueError('bad width specification: {}'.format(dtype))


def precision_for(*values) -> Precision:
    """infer the width shared by ``values``.

    Values may be numpy scalars, python numbers, or robustgeom entities.
    Any double precision value promotes the result to double; plain
    python numbers carry no width of their own.  With no width
    information at all, the default width is returned.
    """
    single = False
    for v in values:
        prec = getattr(v, 'precision', None)
        if isinstance(prec, Precision):
            dt = prec.dtype
        else:
            dt = getattr(v, 'dtype', None)
        if dt is None:
            continue
        if dt == np.float64:
            return DOUBLE
        if dt == np.float32:
            single = True
    if single:
        return SINGLE
    return resolve_precision(DEFAULT_DTYPE)


## module-level conveniences, width inferred from the operands

def epsilon(dtype=DEFAULT_DTYPE):
    return resolve_precision(dtype).epsilon()


def infinity(dtype=DEFAULT_DTYPE):
    return resolve_precision(dtype).infinity()


def is_valid(v) -> bool:
    return precision_for(v).is_valid(v)


def is_subnormal(v) -> bool:
    return precision_for(v).is_subnormal(v)


def is_equal(a, b) -> bool:
    return precision_for(a, b).is_equal(a, b)


def is_equal_scaled(a, b, scale) -> bool:
    return precision_for(a, b).is_equal_scaled(a, b, scale)


def is_greater_or_equal(a, b) -> bool:
    return precision_for(a, b).is_greater_or_equal(a, b)


def is_less_or_equal(a, b) -> bool:
    return precision_for(a, b).is_less_or_equal(a, b)


__all__ = [
    'Precision',
    'SINGLE',
    'DOUBLE',
    'quiet',
    'resolve_precision',
    'precision_for',
    'epsilon',
    'infinity',
    'is_valid',
    'is_subnormal',
    'is_equal',
    'is_equal_scaled',
    'is_greater_or_equal',
    'is_less_or_equal',
]
