"""Tests for configuration management system."""

import pytest
import tempfile
import shutil
from pathlib import Path
from omegaconf import DictConfig, OmegaConf

from astar_planner.config import (
    ConfigManager, load_config, validate_config, ConfigValidationError
)
from astar_planner.config.config_manager import DEFAULT_CONFIG_DIR
from astar_planner.config.validators import check_config_consistency


@pytest.fixture
def temp_config_dir():
    """Create temporary configuration directory."""
    temp_dir = tempfile.mkdtemp()
    config_dir = Path(temp_dir) / "conf"
    config_dir.mkdir()

    config_content = """
search:
  frontier: heap
  max_steps: 500
  max_computation_time: null
  statistics_tracking: true

grid:
  heuristic: manhattan
  start: [1, 1]
  goal: [5, 3]

goap:
  money_goal: 300
  start:
    time: 2000
    energy: 0
    money: 0
    food: 5
"""

    config_file = config_dir / "config.yaml"
    with open(config_file, 'w') as f:
        f.write(config_content)

    yield config_dir

    # Cleanup
    shutil.rmtree(temp_dir)


class TestConfigManager:
    """Test ConfigManager functionality."""

    def test_config_manager_initialization(self, temp_config_dir):
        """Test ConfigManager initialization."""
        manager = ConfigManager(temp_config_dir)
        assert manager.config_dir.resolve() == temp_config_dir.resolve()
        assert manager.config is None

    def test_missing_config_dir(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigManager(tmp_path / "nowhere")

    def test_load_packaged_defaults(self):
        """The configuration shipped with the package loads and validates."""
        manager = ConfigManager()
        config = manager.load_config()

        assert manager.config_dir == DEFAULT_CONFIG_DIR.resolve()
        assert config.search.frontier == "scan"
        assert config.search.max_steps is None
        assert config.grid.heuristic == "euclidean"
        assert list(config.grid.start) == [1, 1]
        assert list(config.grid.goal) == [11, 7]
        assert config.goap.money_goal == 2000
        assert config.goap.start.food == 5

    def test_load_config_basic(self, temp_config_dir):
        """Test basic configuration loading."""
        manager = ConfigManager(temp_config_dir)
        config = manager.load_config()

        assert isinstance(config, DictConfig)
        assert config.search.frontier == "heap"
        assert config.search.max_steps == 500
        assert manager.config is config

    def test_load_config_with_overrides(self, temp_config_dir):
        """Test configuration loading with overrides."""
        manager = ConfigManager(temp_config_dir)
        overrides = [
            "search.frontier=scan",
            "grid.goal=[4,2]"
        ]

        config = manager.load_config(overrides=overrides)

        assert config.search.frontier == "scan"
        assert list(config.grid.goal) == [4, 2]

    def test_invalid_override_rejected(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)

        with pytest.raises(ConfigValidationError):
            manager.load_config(overrides=["search.frontier=bucket"])

    def test_skip_validation(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)
        config = manager.load_config(overrides=["search.frontier=bucket"], validate=False)

        assert config.search.frontier == "bucket"

    def test_get_parameter(self, temp_config_dir):
        """Test parameter retrieval."""
        manager = ConfigManager(temp_config_dir)
        manager.load_config()

        assert manager.get_parameter("search.frontier") == "heap"
        assert manager.get_parameter("goap.start.time") == 2000
        assert manager.get_parameter("nonexistent.param", "default") == "default"

    def test_set_parameter_on_composed_config(self, temp_config_dir):
        """Composed configs are struct-mode; existing and new keys can both be set."""
        manager = ConfigManager(temp_config_dir)
        manager.load_config()

        manager.set_parameter("search.max_steps", 10)
        assert manager.get_parameter("search.max_steps") == 10

        manager.set_parameter("grid.start", [2, 3])
        assert list(manager.get_parameter("grid.start")) == [2, 3]

        manager.set_parameter("new.parameter", "test_value")
        assert manager.get_parameter("new.parameter") == "test_value"

    def test_apply_skips_unset_values(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)
        manager.load_config()

        config = manager.apply({
            "grid.heuristic": "zero",
            "goap.money_goal": None,
        })

        assert config is manager.get_config()
        assert config.grid.heuristic == "zero"
        assert config.goap.money_goal == 300

    def test_apply_validates(self, temp_config_dir):
        """Values set after composition pass the same checks as the YAML."""
        manager = ConfigManager(temp_config_dir)
        manager.load_config()

        with pytest.raises(ConfigValidationError):
            manager.apply({"search.max_steps": 0})

    def test_to_yaml(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)
        assert manager.to_yaml() == ""

        manager.load_config()
        assert "frontier: heap" in manager.to_yaml()

    def test_config_without_loading(self, temp_config_dir):
        """Test operations without loading config first."""
        manager = ConfigManager(temp_config_dir)

        with pytest.raises(RuntimeError, match="No configuration loaded"):
            manager.get_parameter("search.frontier")

        with pytest.raises(RuntimeError, match="No configuration loaded"):
            manager.set_parameter("search.frontier", "heap")

        with pytest.raises(RuntimeError, match="No configuration loaded"):
            manager.apply({"search.frontier": "heap"})


class TestLoadConfig:
    """Test the module-level load_config helper."""

    def test_load_config(self, temp_config_dir):
        config = load_config(config_dir=temp_config_dir)

        assert isinstance(config, DictConfig)
        assert config.grid.heuristic == "manhattan"

    def test_load_config_with_overrides(self, temp_config_dir):
        config = load_config(overrides=["goap.money_goal=700"], config_dir=temp_config_dir)

        assert config.goap.money_goal == 700


class TestConfigValidation:
    """Test configuration validation."""

    @pytest.fixture
    def valid_config(self):
        return OmegaConf.create({
            "search": {
                "frontier": "scan",
                "max_steps": None,
                "max_computation_time": 2.5,
                "statistics_tracking": True
            },
            "grid": {
                "heuristic": "euclidean",
                "start": [1, 1],
                "goal": [11, 7]
            },
            "goap": {
                "money_goal": 2000,
                "start": {"time": 2000, "energy": 0, "money": 0, "food": 5}
            }
        })

    def test_valid_config(self, valid_config):
        """Test validation of valid configuration."""
        validate_config(valid_config)

    @pytest.mark.parametrize("key,value", [
        ("search.frontier", "bucket"),
        ("search.max_steps", 0),
        ("search.max_steps", 1.5),
        ("search.max_computation_time", -1.0),
        ("grid.heuristic", "octile"),
        ("grid.start", [1]),
        ("grid.goal", [-1, 3]),
        ("goap.money_goal", -5),
        ("goap.start.food", -1),
        ("goap.start.gold", 3),
    ])
    def test_invalid_values(self, valid_config, key, value):
        OmegaConf.update(valid_config, key, value, force_add=True)

        with pytest.raises(ConfigValidationError):
            validate_config(valid_config)

    def test_empty_config_sections(self):
        """Missing sections fall back to defaults."""
        validate_config(OmegaConf.create({}))
        validate_config(OmegaConf.create({"search": {}, "grid": {}, "goap": {}}))

    def test_consistency_warnings(self, valid_config):
        assert check_config_consistency(valid_config) == []

        valid_config.grid.goal = [1, 1]
        valid_config.goap.start.money = 5000
        issues = check_config_consistency(valid_config)

        assert len(issues) == 2
        assert any("grid.start" in issue for issue in issues)
        assert any("goap.money_goal" in issue for issue in issues)
