"""Tests for config/loader.py and config/models.py."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from scriptscope.config.loader import _deep_merge, _load_yaml, load_config
from scriptscope.config.models import CacheConfig, ParsingConfig, PoolConfig, ScriptScopeConfig
from scriptscope.core.errors import ConfigError


@pytest.fixture
def no_global_config(tmp_path: Path):
    with patch("scriptscope.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "missing.yaml"):
        yield


class TestModels:
    """Config model defaults and validation."""

    def test_defaults(self) -> None:
        config = ScriptScopeConfig()
        assert config.pool.max_per_dialect == 4
        assert config.cache.max_entries == 100
        assert config.cache.ttl_sec == 300
        assert "vue" in config.parsing.supported_extensions
        assert config.summary.show_positions is True

    def test_extensions_normalized(self) -> None:
        parsing = ParsingConfig(supported_extensions=[".TS", "vue"])
        assert parsing.supported_extensions == ["ts", "vue"]

    def test_max_file_size_bytes(self) -> None:
        assert ParsingConfig(max_file_size_mb=1).max_file_size_bytes == 1024 * 1024

    @pytest.mark.parametrize(
        ("model", "kwargs"),
        [
            (PoolConfig, {"max_per_dialect": 0}),
            (ParsingConfig, {"max_file_size_mb": 0}),
            (CacheConfig, {"max_entries": 0}),
            (CacheConfig, {"ttl_sec": -1}),
        ],
    )
    def test_invalid_values_rejected(self, model: type, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            model(**kwargs)


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("pool:\n  max_per_dialect: 2\n")
        assert _load_yaml(yaml_file) == {"pool": {"max_per_dialect": 2}}

    def test_invalid_yaml_raises_config_error(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "bad.yaml"
        yaml_file.write_text("pool: [unclosed\n")
        with pytest.raises(ConfigError):
            _load_yaml(yaml_file)

    def test_non_mapping_raises_config_error(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            _load_yaml(yaml_file)


class TestDeepMerge:
    def test_nested_values_merged(self) -> None:
        base = {"cache": {"max_entries": 10, "ttl_sec": 5}}
        override = {"cache": {"ttl_sec": 60}}
        assert _deep_merge(base, override) == {"cache": {"max_entries": 10, "ttl_sec": 60}}


class TestLoadConfig:
    """Precedence of config sources."""

    def test_given_nothing_when_loaded_then_defaults(self, tmp_path: Path, no_global_config: None) -> None:
        config = load_config(tmp_path)
        assert config == ScriptScopeConfig()

    def test_given_repo_yaml_when_loaded_then_applied(self, tmp_path: Path, no_global_config: None) -> None:
        (tmp_path / ".scriptscope").mkdir()
        (tmp_path / ".scriptscope" / "config.yaml").write_text("cache:\n  max_entries: 7\n")
        assert load_config(tmp_path).cache.max_entries == 7

    def test_given_env_var_when_loaded_then_overrides_yaml(
        self, tmp_path: Path, no_global_config: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        # Given
        (tmp_path / ".scriptscope").mkdir()
        (tmp_path / ".scriptscope" / "config.yaml").write_text("pool:\n  max_per_dialect: 2\n")
        monkeypatch.setenv("SCRIPTSCOPE__POOL__MAX_PER_DIALECT", "6")

        # When
        config = load_config(tmp_path)

        # Then
        assert config.pool.max_per_dialect == 6

    def test_given_invalid_value_when_loaded_then_config_error(self, tmp_path: Path, no_global_config: None) -> None:
        (tmp_path / ".scriptscope").mkdir()
        (tmp_path / ".scriptscope" / "config.yaml").write_text("cache:\n  max_entries: 0\n")
        with pytest.raises(ConfigError):
            load_config(tmp_path)
