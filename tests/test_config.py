"""
Tests for configuration loading and validation.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from nqueens.config import Config, ColorScheme, SPEED_SETTINGS


def test_config_creation():
    """Test Config defaults."""
    config = Config()

    assert config.sizes == [8]
    assert config.size == 8
    assert config.speed == 'normal'
    assert config.interval_ms == 100
    assert config.solution_pause_ms == 1000
    assert config.max_steps == 0
    assert config.colors.queen_safe == '#10B981'
    assert config.validate() == []

    print("Config creation test passed")


def test_config_from_dict():
    """Test Config.from_dict with a single size and partial colours."""
    config = Config.from_dict({
        'size': 6,
        'speed': '4x',
        'save': True,
        'colors': {'queen_conflict': '#FF0000'},
    })

    assert config.sizes == [6]
    assert config.interval_ms == SPEED_SETTINGS['4x']
    assert config.save
    assert config.colors.queen_conflict == '#FF0000'
    assert config.colors.queen_trial == ColorScheme().queen_trial

    config = Config.from_dict({'sizes': 5})
    assert config.sizes == [5]

    print("Config from_dict test passed")


def test_config_validation_errors():
    config = Config(sizes=[0, 32, 'eight'], speed='warp', max_steps=-1, dpi=0)
    errors = config.validate()

    assert len(errors) == 6
    assert any('between 1 and 31, got 0' in e for e in errors)
    assert any('got 32' in e for e in errors)
    assert any("'eight'" in e for e in errors)
    assert any("Invalid speed 'warp'" in e for e in errors)

    assert Config(sizes=[]).validate() == ["At least one board size must be specified"]


def test_config_from_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "sizes: [4, 5]\n"
        "speed: slow\n"
        "output_dir: out\n"
        "colors:\n"
        "  light_square: '#FFFFFF'\n"
    )

    config = Config.from_yaml(str(path))

    assert config.sizes == [4, 5]
    assert config.speed == 'slow'
    assert config.interval_ms == 500
    assert config.output_dir == 'out'
    assert config.colors.light_square == '#FFFFFF'
    assert config.validate() == []


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")

    assert Config.from_yaml(str(path)).to_dict() == Config().to_dict()


def test_to_dict_round_trip():
    config = Config(sizes=[7], speed='max', log_interval=500)
    assert Config.from_dict(config.to_dict()) == config


def test_size_without_sizes_raises():
    """An empty size list is reported instead of failing on indexing."""
    config = Config(sizes=[])

    with pytest.raises(ValueError, match="At least one board size"):
        config.size

    assert "At least one board size must be specified" in config.validate()
