import logging

import pytest

from aggtool.reporting import base as _reporting_base


@pytest.fixture(autouse=True)
def _isolate_global_reporting_state():
    """Restore the module-global reporter, verbosity and aggtool logger
    configuration after each test so that state installed by ``cli.main``
    (bound to a since-closed captured stream) does not leak into later tests."""
    logger = logging.getLogger("aggtool")
    saved = (
        _reporting_base._ACTIVE_REPORTER,
        _reporting_base._VERBOSITY,
        list(logger.handlers),
        logger.level,
    )
    yield
    reporter, verbosity, handlers, level = saved
    _reporting_base._ACTIVE_REPORTER = reporter
    _reporting_base._VERBOSITY = verbosity
    for h in list(logger.handlers):
        logger.removeHandler(h)
    for h in handlers:
        logger.addHandler(h)
    logger.setLevel(level)
