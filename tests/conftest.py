import logging

import pytest

from py_gnuballistics.engines.base_engine import reset_default_engine_config
from py_gnuballistics.interface import _EngineLoader
from py_gnuballistics.logger import logger

logger.setLevel(logging.DEBUG)


def pytest_addoption(parser):
    parser.addoption(
        "--engine",
        action="store",
        default=None,  # be sure to use the default value from _EngineLoader
        help="Specify the engine entry point name",
    )


@pytest.fixture(scope="class")
def loaded_engine_instance(request):
    engine_name = request.config.getoption("--engine", None)
    logger.info(f"Attempting to load engine: '{engine_name}'")
    try:
        engine = _EngineLoader.load(engine_name)
        # probe:
        engine({})
    except Exception as e:
        pytest.exit(f"Cannot start tests:\nFailed to load engine via _EngineLoader: {e}", returncode=1)
    print(f"Successfully loaded engine: {engine}")
    yield engine


@pytest.fixture
def restore_engine_defaults():
    """Undo changes to the global engine defaults made by a test."""
    yield
    reset_default_engine_config()
