import io
import logging

import pytest

from robustgeom.logging_utils import configure_logging, get_logger


@pytest.fixture
def root_logger():
    """put the package logger back the way it was"""
    log = logging.getLogger('robustgeom')
    saved = (list(log.handlers), log.level, log.propagate)
    yield log
    for h in list(log.handlers):
        if h not in saved[0]:
            log.removeHandler(h)
    log.setLevel(saved[1])
    log.propagate = saved[2]


def test_null_handler_installed():
    import robustgeom  # noqa: F401
    log = logging.getLogger('robustgeom')
    assert any(isinstance(h, logging.NullHandler) for h in log.handlers)


def test_get_logger_namespacing():
    assert get_logger('robustgeom').name == 'robustgeom'
    assert get_logger('robustgeom.intersect').name == 'robustgeom.intersect'
    assert get_logger('myapp').name == 'robustgeom.myapp'


def test_get_logger_level():
    log = get_logger('leveltest', level='warning')
    assert log.level == logging.WARNING
    log = get_logger('leveltest', level=logging.DEBUG)
    assert log.level == logging.DEBUG


def test_configure_logging_writes_to_stream(root_logger):
    stream = io.StringIO()
    configure_logging('DEBUG', stream=stream)
    get_logger('robustgeom.tritri').debug('hello %s', 'there')
    assert 'DEBUG robustgeom.tritri: hello there' in stream.getvalue()


def test_configure_logging_is_idempotent(root_logger):
    stream = io.StringIO()
    configure_logging('INFO', stream=stream)
    configure_logging('WARNING', stream=stream)
    streams = [h for h in root_logger.handlers if not isinstance(h, logging.NullHandler)]
    assert len(streams) == 1
    assert root_logger.level == logging.WARNING
    assert root_logger.propagate is False


def test_unknown_level_falls_back_to_info(root_logger):
    configure_logging('chatty', stream=io.StringIO())
    assert root_logger.level == logging.INFO
