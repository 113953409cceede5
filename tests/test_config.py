"""Tests for YAML configuration loading"""

import pytest

from traffic_trends.utils.config import ConfigLoader


def test_default_config_loads(config):
    assert config.get('analysis.min_points') == 2
    assert config.get('analysis.fit_quality.good') == 0.8
    assert config.get('station.latest_year') == 2024


def test_default_path_resolves_from_project_root():
    assert ConfigLoader().get('analysis.projection_horizon') == 10


def test_missing_key_returns_default(config):
    assert config.get('analysis.unknown', default='fallback') == 'fallback'
    assert config.get('station.road.nested') is None


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigLoader(str(tmp_path / "missing.yaml"))


def test_custom_file_and_reload(tmp_config):
    path = tmp_config("analysis:\n  min_points: 3\n")
    cfg = ConfigLoader(str(path))
    assert cfg.get('analysis.min_points') == 3

    path.write_text("analysis:\n  min_points: 4\n")
    cfg.reload()
    assert cfg.get('analysis.min_points') == 4


def test_empty_file(tmp_config):
    cfg = ConfigLoader(str(tmp_config("")))
    assert cfg.get('analysis.min_points', 2) == 2
