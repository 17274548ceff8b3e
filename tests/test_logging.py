import logging

import pytest
import structlog

from lazywire import InjectorSettings
from lazywire.logging import get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    root_logger = logging.getLogger()
    handlers, level = list(root_logger.handlers), root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()


@pytest.mark.parametrize("log_format", ["console", "json"])
def test_setup_logging_installs_single_handler(log_format):
    setup_logging(InjectorSettings(log_format=log_format, log_level="debug"))

    root_logger = logging.getLogger()
    assert len(root_logger.handlers) == 1
    assert isinstance(root_logger.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
    assert root_logger.level == logging.DEBUG


def test_json_output(capsys):
    setup_logging(InjectorSettings(log_format="json"))

    get_logger("tests").info("service_constructed", service="Database")

    output = capsys.readouterr().out
    assert '"event": "service_constructed"' in output
    assert '"component": "tests"' in output
