"""Pytest configuration and shared fixtures."""

import logging
from pathlib import Path

import pytest

from traffic_trends.data.series import Observation, parse_series
from traffic_trends.utils.config import ConfigLoader


# Default station volumes, newest first (2024 -> 2019)
DEFAULT_VOLUMES = "5200\t5100\t4950\t4800\t4650\t4500"


@pytest.fixture(scope="session")
def config_path():
    """Path to the project's default config file."""
    return Path(__file__).parent.parent / "config" / "config.yaml"


@pytest.fixture
def config(config_path):
    return ConfigLoader(str(config_path))


@pytest.fixture
def default_series():
    """Six years of steadily growing volumes, 2019-2024."""
    return parse_series(2024, DEFAULT_VOLUMES)


@pytest.fixture
def exact_exponential_series():
    """Volumes growing exactly 5% per year from 1000."""
    return tuple(
        Observation(year=2015 + i, volume=1000.0 * 1.05 ** i)
        for i in range(8)
    )


@pytest.fixture
def constant_series():
    return tuple(Observation(year=2020 + i, volume=3000.0) for i in range(5))


@pytest.fixture
def tmp_config(tmp_path):
    """Write a small config file and return its path."""
    def _write(text: str) -> Path:
        path = tmp_path / "config.yaml"
        path.write_text(text)
        return path
    return _write


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers the CLI installs so they don't outlive the test's streams."""
    yield
    logger = logging.getLogger('traffic_trends')
    logger.handlers = []
    logger.setLevel(logging.NOTSET)
