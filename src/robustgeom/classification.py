"""Validity, degeneracy and reduced-precision state of geometric entities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from robustgeom.precision import Precision, precision_for


@dataclass(frozen=True)
class Classification:
    """The three flags every entity carries.

    ``invalid`` means a defining scalar is NaN or infinite.  ``degenerate``
    means the entity is geometrically ill-formed for its type.
    ``subnormal`` means a defining or derived scalar is a non-zero
    subnormal float; it is only meaningful for valid entities.
    """

    invalid: bool = False
    degenerate: bool = False
    subnormal: bool = False

    @property
    def is_valid(self) -> bool:
        return not self.invalid

    @property
    def is_degenerate(self) -> bool:
        return self.degenerate or self.invalid

    @property
    def is_subnormal(self) -> bool:
        return self.subnormal

    def combine(self, *others: 'Classification') -> 'Classification':
        """Merge the flags of sub-entities into this classification."""
        invalid = self.invalid or any(o.invalid for o in others)
        degenerate = self.degenerate or any(o.is_degenerate for o in others)
        subnormal = not invalid and (self.subnormal or any(o.subnormal for o in others))
        return Classification(invalid, degenerate, subnormal)


VALID = Classification()
INVALID = Classification(invalid=True)


def classify_scalars(prec: Precision, values: Iterable) -> Classification:
    """Classify raw defining scalars: finiteness first, then subnormality."""
    values = tuple(values)
    if not all(prec.is_valid(v) for v in values):
        return INVALID
    return Classification(subnormal=any(prec.is_subnormal(v) for v in values))


class Classified:
    """Read-only accessors over the embedded ``classification`` value.

    Entities are immutable: their slots are written once, in the
    constructor, through ``_set``.
    """

    __slots__ = ()

    def _set(self, name, value):
        object.__setattr__(self, name, value)

    def __setattr__(self, name, value):
        raise AttributeError('{} is immutable'.format(type(self).__name__))

    def __delattr__(self, name):
        raise AttributeError('{} is immutable'.format(type(self).__name__))

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def is_valid(self) -> bool:
        return self.classification.is_valid

    def is_degenerate(self) -> bool:
        return self.classification.is_degenerate

    def is_subnormal(self) -> bool:
        return self.classification.is_subnormal


def is_valid(x) -> bool:
    """``True`` unless ``x`` (an entity or a scalar) is invalid."""
    if isinstance(x, Classified):
        return x.is_valid()
    return precision_for(x).is_valid(x)


def is_degenerate(x) -> bool:
    if isinstance(x, Classified):
        return x.is_degenerate()
    raise ValueError('bad argument passed to is_degenerate: {}'.format(x))


def is_subnormal(x) -> bool:
    if isinstance(x, Classified):
        return x.is_subnormal()
    return precision_for(x).is_subnormal(x)


__all__ = [
    'Classification',
    'Classified',
    'VALID',
    'INVALID',
    'classify_scalars',
    'is_valid',
    'is_degenerate',
    'is_subnormal',
]
