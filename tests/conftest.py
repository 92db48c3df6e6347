import logging

import pytest

from vaxpace.config import load_chart_config
from vaxpace.logging_config import LOGGER_NAMESPACES
from vaxpace.metadata import JsonMetadataClient
from vaxpace.scene import build_scene


COUNTRIES = {
    'US': {'name': 'United States', 'population': 329484123},
    'GB': {'name': 'United Kingdom', 'population': 67215293},
    'FR': {'name': 'France', 'population': 67391582},
    'IS': {'name': 'Iceland', 'population': 366425},
    'XK': {'name': 'Kosovo', 'population': None},
}

# Most recent sample first
RAW_SERIES = {
    'US': [300, 250, 200, 150],
    'GB': [120, 180, 220],
    'IS': [500, 400, 300],
    'XK': [900, 800],
    'ZZ': [1000],
}


@pytest.fixture
def metadata():
    return JsonMetadataClient(COUNTRIES)


@pytest.fixture
def config():
    return load_chart_config()


@pytest.fixture
def raw_series():
    return {code: list(values) for code, values in RAW_SERIES.items()}


@pytest.fixture
def scene(raw_series, config, metadata):
    """Desktop scene at 800px: plot area 650x335."""
    return build_scene(raw_series, config, 800, metadata)


@pytest.fixture
def mobile_scene(raw_series, config, metadata):
    """Mobile scene at 500px: plot area 480x335."""
    return build_scene(raw_series, config, 500, metadata)


@pytest.fixture
def restore_loggers():
    saved = {name: (logging.getLogger(name).level, list(logging.getLogger(name).handlers))
             for name in LOGGER_NAMESPACES}
    yield
    for name, (level, handlers) in saved.items():
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            if handler not in handlers:
                handler.close()
        logger.setLevel(level)
        logger.handlers[:] = handlers
