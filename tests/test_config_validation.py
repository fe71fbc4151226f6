"""
Tests for configuration loading and validation.

Ensures that config.yaml is properly validated and API settings are
correctly loaded, with the API key taken from the environment.
"""

import pytest
import tempfile
import yaml
from pathlib import Path
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def _write_config(data):
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        yaml.dump(data, f)
        return Path(f.name)


def test_config_requires_api_section():
    """Test that config validation requires the api section."""
    from config_loader import Config

    config_path = _write_config({"filters": {"company_options_limit": 5}})

    try:
        with pytest.raises(ValueError, match="Missing required config section: api"):
            Config(config_path=config_path)
    finally:
        config_path.unlink()


def test_config_requires_api_host():
    """Test that config validation requires the API host."""
    from config_loader import Config

    config_path = _write_config({"api": {"num_pages": 1}})

    try:
        with pytest.raises(ValueError, match="Missing required api field: host"):
            Config(config_path=config_path)
    finally:
        config_path.unlink()


def test_config_rejects_invalid_num_pages():
    """Test that num_pages must be a positive integer."""
    from config_loader import Config

    for bad in (0, -1, "two"):
        config_path = _write_config({"api": {"host": "jsearch.p.rapidapi.com", "num_pages": bad}})
        try:
            with pytest.raises(ValueError, match="api.num_pages must be a positive integer"):
                Config(config_path=config_path)
        finally:
            config_path.unlink()


def test_config_rejects_non_mapping():
    """Test that a YAML list at the top level is rejected."""
    from config_loader import Config

    config_path = _write_config(["api", "host"])

    try:
        with pytest.raises(ValueError, match="Config file must contain a mapping"):
            Config(config_path=config_path)
    finally:
        config_path.unlink()


def test_config_loads_valid_config(config_file):
    """Test that valid config loads successfully."""
    from config_loader import Config

    config = Config(config_path=config_file)

    assert config.api_host == "jsearch.example.test"
    assert config.api_base_url == "https://jsearch.example.test"
    assert config.num_pages == 1
    assert config.timeout_seconds == 5.0
    assert config.max_retries == 0
    assert config.calls_per_minute == 6000
    assert config.default_query == "python developer"
    assert config.company_options_limit == 10
    assert config.get("api.host") == "jsearch.example.test"
    assert config.get("api.missing", "fallback") == "fallback"


def test_config_default_values():
    """Test that config provides sensible defaults for optional fields."""
    from config_loader import Config

    config_path = _write_config({"api": {"host": "jsearch.p.rapidapi.com"}})

    try:
        config = Config(config_path=config_path)

        # Should have default values
        assert config.num_pages == 2
        assert config.timeout_seconds == 15.0
        assert config.max_retries == 3
        assert config.calls_per_minute == 30
        assert config.default_query == "developer"
        assert config.company_options_limit == 50
    finally:
        config_path.unlink()


def test_config_base_url_override():
    """Test that an explicit base_url wins over the host-derived URL."""
    from config_loader import Config

    config_path = _write_config({"api": {"host": "jsearch.p.rapidapi.com", "base_url": "http://localhost:8080"}})

    try:
        assert Config(config_path=config_path).api_base_url == "http://localhost:8080"
    finally:
        config_path.unlink()


def test_api_key_read_from_environment(config_file, monkeypatch):
    """Test that the API key comes from RAPIDAPI_KEY, not the YAML file."""
    from config_loader import Config

    monkeypatch.delenv("RAPIDAPI_KEY", raising=False)
    config = Config(config_path=config_file)
    assert config.api_key == ""

    monkeypatch.setenv("RAPIDAPI_KEY", "secret")
    assert config.api_key == "secret"


def test_config_reload(config_file):
    """Test that reload picks up changes on disk."""
    from config_loader import Config

    config = Config(config_path=config_file)
    config_file.write_text(yaml.dump({"api": {"host": "other.example.test", "num_pages": 3}}))
    config.reload()

    assert config.api_host == "other.example.test"
    assert config.num_pages == 3
    assert config.to_dict()["api"]["host"] == "other.example.test"


def test_get_config_with_path_replaces_instance(config_file):
    """Test that passing a path builds a fresh global instance."""
    from config_loader import get_config

    first = get_config(config_file)
    assert get_config() is first
    assert get_config(config_file) is not first


def test_config_file_not_found():
    """Test that missing config file raises appropriate error."""
    from config_loader import Config

    with pytest.raises(FileNotFoundError, match="Config file not found"):
        Config(config_path=Path("/nonexistent/config.yaml"))


def test_cached_config_reloads_from_disk(config_file):
    """Test that reloading goes through the cached instance from get_config()."""
    from config_loader import get_config

    config = get_config(config_file)
    config_file.write_text(yaml.dump({"api": {"host": "reloaded.example.test"}}))
    get_config().reload()

    assert get_config() is config
    assert config.api_host == "reloaded.example.test"


def test_only_library_modules_are_packaged():
    """Test that the run.py script is not installed as a top-level module."""
    import re

    pyproject = Path(__file__).parent.parent / "pyproject.toml"
    match = re.search(r"^py-modules = \[(.*)\]$", pyproject.read_text(), re.MULTILINE)

    modules = [m.strip().strip('"') for m in match.group(1).split(",")]
    assert modules == ["config_loader", "constants"]
