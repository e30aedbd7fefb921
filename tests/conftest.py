import pytest

from robustgeom.precision import DOUBLE, SINGLE


@pytest.fixture(params=[SINGLE, DOUBLE], ids=['single', 'double'])
def prec(request):
    """run a test once per floating point width"""
    return request.param
