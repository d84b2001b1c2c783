"""
Tests for configuration loading and environment file resolution.
"""

import pytest
import json
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import yaml

from nohardcoded.config import (
    MatchConfiguration, MatchMode, ScanConfig, create_default_config, find_config,
    load_config, load_scan_config, normalize_fragments,
)
from nohardcoded.constants import DEFAULT_IDENTIFIERS, ENV_FILES
from nohardcoded.core.environment import (
    find_environment_file, load_environment, resolve_environment
)
from nohardcoded.errors import ConfigurationError, EnvironmentFileNotFoundError, NoHardcodedError


class TestMatchConfiguration:
    """Tests for match option validation."""

    def test_defaults(self):
        config = MatchConfiguration()
        assert config.identifiers == frozenset()
        assert config.ignore == frozenset()
        assert config.mode == MatchMode.IDENTIFIERS

    def test_fragments_are_upper_cased(self):
        config = MatchConfiguration.create(identifiers=["api", " token "])
        assert config.identifiers == frozenset({"API", "TOKEN"})

    def test_default_keyword(self):
        config = MatchConfiguration.create(identifiers="default")
        assert config.identifiers == frozenset(DEFAULT_IDENTIFIERS)

    @pytest.mark.parametrize("fragment", ["", "API-KEY", "my key"])
    def test_invalid_fragment(self, fragment):
        with pytest.raises(ConfigurationError):
            MatchConfiguration.create(ignore=[fragment])

    def test_bare_string_rejected(self):
        with pytest.raises(ConfigurationError):
            normalize_fragments("TOKEN", "identifiers")

    def test_unknown_mode(self):
        with pytest.raises(ConfigurationError) as exc_info:
            MatchConfiguration.create(mode="fuzzy")
        assert "fuzzy" in str(exc_info.value)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            MatchConfiguration.create(mode="fuzzy")

    def test_from_dict_round_trip(self):
        data = {"mode": "heuristic", "identifiers": ["KEY"], "ignore": ["PUBLIC"], "no_sensitive_values": ["localhost"]}
        config = MatchConfiguration.from_dict(data)
        assert config.mode == MatchMode.HEURISTIC
        assert MatchConfiguration.from_dict(config.to_dict()) == config

    def test_constructor_normalizes_fragments(self):
        config = MatchConfiguration(
            identifiers=frozenset({"key"}),
            ignore=["public"],
            no_sensitive_values=["localhost"],
            mode="heuristic",
        )
        assert config.identifiers == frozenset({"KEY"})
        assert config.ignore == frozenset({"PUBLIC"})
        assert config.no_sensitive_values == frozenset({"localhost"})
        assert config.mode == MatchMode.HEURISTIC

    def test_constructor_rejects_bare_string(self):
        with pytest.raises(ConfigurationError):
            MatchConfiguration(identifiers="KEY")

    def test_constructor_rejects_invalid_fragment(self):
        with pytest.raises(ConfigurationError):
            MatchConfiguration(ignore=frozenset({"API-KEY"}))

    def test_constructor_rejects_unknown_mode(self):
        with pytest.raises(ConfigurationError):
            MatchConfiguration(mode="fuzzy")

    def test_configuration_is_immutable(self):
        config = MatchConfiguration()
        with pytest.raises(AttributeError):
            config.mode = MatchMode.HEURISTIC


class TestScanConfig:
    """Tests for the scan configuration object and files."""

    def test_from_dict_nested_sections(self):
        config = ScanConfig.from_dict({
            "env_file": ".env.local",
            "scan": {"exclude": ["dist/**"], "max_workers": 2},
            "match": {"identifiers": "default"},
            "output": {"format": "json", "color": False, "unknown": 1},
            "severity": "medium",
            "not_a_field": True,
        })

        assert config.env_file == ".env.local"
        assert config.exclude_patterns == ["dist/**"]
        assert config.max_workers == 2
        assert config.match.identifiers == frozenset(DEFAULT_IDENTIFIERS)
        assert config.output.format == "json"
        assert config.output.color is False
        assert config.severity == "medium"

    def test_invalid_match_section(self):
        with pytest.raises(ConfigurationError):
            ScanConfig.from_dict({"match": ["API"]})

    def test_to_dict(self):
        data = ScanConfig().to_dict()
        assert data["match"]["mode"] == "identifiers"
        assert data["severity"] == "high"

    def test_load_yaml(self, tmp_path):
        path = tmp_path / ".nohardcoded.yaml"
        path.write_text("env_file: .env\nmatch:\n  ignore: [PUBLIC]\n")
        assert load_config(path) == {"env_file": ".env", "match": {"ignore": ["PUBLIC"]}}

    def test_load_json(self, tmp_path):
        path = tmp_path / "nohardcoded.json"
        path.write_text(json.dumps({"severity": "low"}))
        assert load_config(path) == {"severity": "low"}

    def test_load_empty_file(self, tmp_path):
        path = tmp_path / ".nohardcoded.yml"
        path.write_text("")
        assert load_config(path) == {}

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(tmp_path / "missing.yaml")

    def test_load_invalid_yaml(self, tmp_path):
        path = tmp_path / ".nohardcoded.yaml"
        path.write_text("match: [unclosed\n")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_load_non_mapping(self, tmp_path):
        path = tmp_path / ".nohardcoded.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_find_config_walks_up(self, tmp_path):
        (tmp_path / ".nohardcoded.yaml").write_text("severity: low\n")
        nested = tmp_path / "src" / "app"
        nested.mkdir(parents=True)

        assert find_config(str(nested)) == str(tmp_path.resolve() / ".nohardcoded.yaml")

    def test_load_scan_config(self, tmp_path):
        (tmp_path / ".nohardcoded.yaml").write_text("severity: low\n")
        config = load_scan_config(start_dir=str(tmp_path))
        assert config.severity == "low"

    def test_default_config_is_loadable(self):
        data = yaml.safe_load(create_default_config())
        config = ScanConfig.from_dict(data)
        assert config.match.identifiers == frozenset(DEFAULT_IDENTIFIERS)
        assert config.env_file is None


class TestEnvironmentFile:
    """Tests for environment file resolution and parsing."""

    def test_priority_order(self, tmp_path):
        for name in (".env", ".env.local", ".env.example"):
            (tmp_path / name).write_text("A=1\n")

        assert find_environment_file(tmp_path) == (tmp_path / ".env.local").resolve()

    def test_production_first(self, tmp_path):
        for name in ENV_FILES:
            (tmp_path / name).write_text("A=1\n")

        assert find_environment_file(tmp_path) == (tmp_path / ".env.production").resolve()

    def test_example_file_as_last_resort(self, tmp_path):
        (tmp_path / ".env.example").write_text("A=1\n")
        assert find_environment_file(tmp_path).name == ".env.example"

    def test_nothing_found(self, tmp_path):
        assert find_environment_file(tmp_path) is None

    def test_explicit_file_returned_even_if_missing(self, tmp_path):
        (tmp_path / ".env").write_text("A=1\n")
        assert find_environment_file(tmp_path, "config/.env.test") == (tmp_path / "config" / ".env.test").resolve()

    def test_load_environment(self, tmp_path):
        path = tmp_path / ".env"
        path.write_text(
            "# comment\n"
            "API_KEY=sk_live_abcdef123456\n"
            "export TOKEN='quoted value'\n"
            "BASE=${HOME}/x\n"
            "EMPTY=\n"
            "NO_VALUE\n"
        )

        env = load_environment(path)

        assert env["API_KEY"] == "sk_live_abcdef123456"
        assert env["TOKEN"] == "quoted value"
        assert env["BASE"] == "${HOME}/x"
        assert env["EMPTY"] == ""
        assert "NO_VALUE" not in env

    def test_missing_explicit_file(self, tmp_path):
        path = tmp_path / ".env.custom"
        with pytest.raises(EnvironmentFileNotFoundError) as exc_info:
            load_environment(path)

        assert exc_info.value.path == str(path)
        assert str(exc_info.value) == f"The environment file {path} does not exist."

    def test_missing_any_file(self, tmp_path):
        with pytest.raises(EnvironmentFileNotFoundError) as exc_info:
            resolve_environment(tmp_path)

        assert exc_info.value.candidates == ENV_FILES
        assert ".env.example" in str(exc_info.value)
        assert isinstance(exc_info.value, NoHardcodedError)

    def test_resolve_environment(self, tmp_path):
        (tmp_path / ".env").write_text("SECRET=abcdef123456\n")
        assert resolve_environment(tmp_path) == {"SECRET": "abcdef123456"}
