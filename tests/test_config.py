"""Tests for configuration file support."""

import sys
import warnings

import pytest

from volley_overlap.config import (
    CacheConfig,
    Config,
    ConfigError,
    ScreenConfig,
    ToleranceConfig,
    _find_project_config,
    _load_toml_file,
    generate_template,
    get_config_paths,
)

NO_USER_CONFIG = "no-exist.toml"


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """A project root with .git and no user config."""
    (tmp_path / ".git").mkdir()
    monkeypatch.setattr("volley_overlap.config.USER_CONFIG_PATH", tmp_path / NO_USER_CONFIG)
    return tmp_path


class TestConfigDataclasses:
    """Test configuration dataclass defaults."""

    def test_tolerance_defaults(self):
        assert ToleranceConfig().epsilon == 0.03

    def test_screen_defaults(self):
        config = ScreenConfig()
        assert config.width == 600.0
        assert config.height == 360.0

    def test_cache_defaults(self):
        assert CacheConfig().max_entries == 1000

    def test_config_defaults(self):
        """Config has correct nested defaults."""
        config = Config()
        assert isinstance(config.tolerance, ToleranceConfig)
        assert isinstance(config.screen, ScreenConfig)
        assert isinstance(config.cache, CacheConfig)


class TestConfigDiscovery:
    """Test config file discovery."""

    def test_find_project_config_in_current_dir(self, tmp_path):
        config_file = tmp_path / ".volley-overlap.toml"
        config_file.write_text("[tolerance]\nepsilon = 0.05\n")

        assert _find_project_config(tmp_path) == config_file

    def test_find_project_config_alternate_name(self, tmp_path):
        config_file = tmp_path / "volley-overlap.toml"
        config_file.write_text("[tolerance]\n")

        assert _find_project_config(tmp_path) == config_file

    def test_find_project_config_prefers_hidden(self, tmp_path):
        """Hidden .volley-overlap.toml is preferred over volley-overlap.toml."""
        (tmp_path / "volley-overlap.toml").write_text("[screen]\n")
        hidden = tmp_path / ".volley-overlap.toml"
        hidden.write_text("[screen]\n")

        assert _find_project_config(tmp_path) == hidden

    def test_find_project_config_walks_up(self, tmp_path):
        parent_config = tmp_path / ".volley-overlap.toml"
        parent_config.write_text("[cache]\n")

        subdir = tmp_path / "app" / "deep"
        subdir.mkdir(parents=True)

        assert _find_project_config(subdir) == parent_config

    def test_find_project_config_stops_at_git(self, tmp_path):
        """Config above the .git directory is not found."""
        parent = tmp_path / "parent"
        project = parent / "project"
        (project / ".git").mkdir(parents=True)
        (parent / ".volley-overlap.toml").write_text("[cache]\n")

        assert _find_project_config(project) is None

    def test_find_project_config_not_found(self, tmp_path):
        (tmp_path / ".git").mkdir()
        assert _find_project_config(tmp_path) is None


class TestLoadToml:
    """Test TOML file loading."""

    def test_load_valid_toml(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text("[tolerance]\nepsilon = 0.05\n\n[cache]\nmax_entries = 50\n")

        result = _load_toml_file(config_file)
        assert result["tolerance"]["epsilon"] == 0.05
        assert result["cache"]["max_entries"] == 50

    def test_load_invalid_toml(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text("invalid [ toml syntax")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            _load_toml_file(config_file)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read"):
            _load_toml_file(tmp_path / "nonexistent.toml")


class TestConfigLoad:
    """Test Config.load() method."""

    def test_load_defaults_only(self, isolated):
        config = Config.load(isolated)
        assert config.tolerance.epsilon == 0.03
        assert config.screen.width == 600.0
        assert config.cache.max_entries == 1000

    def test_load_project_config(self, isolated):
        (isolated / ".volley-overlap.toml").write_text(
            "[tolerance]\nepsilon = 0.05\n\n[screen]\nwidth = 800\nheight = 480\n"
        )

        config = Config.load(isolated)
        assert config.tolerance.epsilon == 0.05
        assert config.screen.width == 800.0
        assert config.screen.height == 480.0

    def test_integer_epsilon_accepted(self, isolated):
        (isolated / ".volley-overlap.toml").write_text("[tolerance]\nepsilon = 0\n")

        config = Config.load(isolated)
        assert config.tolerance.epsilon == 0.0
        assert isinstance(config.tolerance.epsilon, float)

    def test_load_user_config(self, tmp_path, monkeypatch):
        (tmp_path / ".git").mkdir()
        user_config = tmp_path / "user-config.toml"
        user_config.write_text("[cache]\nmax_entries = 200\n")
        monkeypatch.setattr("volley_overlap.config.USER_CONFIG_PATH", user_config)

        assert Config.load(tmp_path).cache.max_entries == 200

    def test_project_overrides_user(self, tmp_path, monkeypatch):
        (tmp_path / ".git").mkdir()
        user_config = tmp_path / "user-config.toml"
        user_config.write_text("[screen]\nwidth = 1000\nheight = 500\n")
        (tmp_path / ".volley-overlap.toml").write_text("[screen]\nwidth = 800\n")
        monkeypatch.setattr("volley_overlap.config.USER_CONFIG_PATH", user_config)

        config = Config.load(tmp_path)
        assert config.screen.width == 800.0
        assert config.screen.height == 500.0

    def test_get_source_tracking(self, tmp_path, monkeypatch):
        (tmp_path / ".git").mkdir()
        user_config = tmp_path / "user-config.toml"
        user_config.write_text("[cache]\nmax_entries = 10\n")
        (tmp_path / ".volley-overlap.toml").write_text("[tolerance]\nepsilon = 0.04\n")
        monkeypatch.setattr("volley_overlap.config.USER_CONFIG_PATH", user_config)

        config = Config.load(tmp_path)
        assert "user-config.toml" in config.get_source("cache.max_entries")
        assert ".volley-overlap.toml" in config.get_source("tolerance.epsilon")
        assert config.get_source("screen.width") == "default"


class TestConfigValidation:
    """Out-of-range values are rejected with ConfigError."""

    @pytest.mark.parametrize("value", ["-0.01", '"small"', "true"])
    def test_bad_epsilon(self, isolated, value):
        (isolated / ".volley-overlap.toml").write_text(f"[tolerance]\nepsilon = {value}\n")

        with pytest.raises(ConfigError, match="tolerance.epsilon"):
            Config.load(isolated)

    @pytest.mark.parametrize("value", ["0", "-600", '"wide"'])
    def test_bad_screen_width(self, isolated, value):
        (isolated / ".volley-overlap.toml").write_text(f"[screen]\nwidth = {value}\n")

        with pytest.raises(ConfigError, match="screen.width"):
            Config.load(isolated)

    @pytest.mark.parametrize("value", ["0", "2.5", "false"])
    def test_bad_cache_size(self, isolated, value):
        (isolated / ".volley-overlap.toml").write_text(f"[cache]\nmax_entries = {value}\n")

        with pytest.raises(ConfigError, match="cache.max_entries"):
            Config.load(isolated)

    def test_error_names_file(self, isolated):
        config_file = isolated / ".volley-overlap.toml"
        config_file.write_text("[cache]\nmax_entries = -1\n")

        with pytest.raises(ConfigError) as exc_info:
            Config.load(isolated)
        assert exc_info.value.context["file"] == str(config_file)


class TestConfigWarnings:
    """Test warnings for unknown config keys."""

    def test_warn_unknown_section(self, isolated):
        (isolated / ".volley-overlap.toml").write_text('[unknown_section]\nkey = "value"\n')

        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            Config.load(isolated)

            assert len(w) == 1
            assert "unknown_section" in str(w[0].message)

    def test_warn_unknown_key_in_section(self, isolated):
        (isolated / ".volley-overlap.toml").write_text("[screen]\ndepth = 3\n")

        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            Config.load(isolated)

            assert len(w) == 1
            assert "screen.depth" in str(w[0].message)


class TestGenerateTemplate:
    """Test template generation."""

    def test_generate_template_valid_toml(self):
        if sys.version_info >= (3, 11):
            import tomllib
        else:
            import tomli as tomllib

        result = tomllib.loads(generate_template())
        assert isinstance(result, dict)

    def test_generate_template_has_sections(self):
        template = generate_template()
        assert "[tolerance]" in template
        assert "[screen]" in template
        assert "[cache]" in template

    def test_generate_template_documents_options(self):
        template = generate_template()
        assert "epsilon" in template
        assert "width" in template
        assert "max_entries" in template


class TestGetConfigPaths:
    """Test get_config_paths function."""

    def test_returns_none_for_missing_files(self, isolated, monkeypatch):
        monkeypatch.chdir(isolated)

        paths = get_config_paths()
        assert paths == {"user": None, "project": None}

    def test_returns_paths_for_existing_files(self, tmp_path, monkeypatch):
        (tmp_path / ".git").mkdir()
        project_config = tmp_path / ".volley-overlap.toml"
        project_config.write_text("[tolerance]\n")
        user_config = tmp_path / "user.toml"
        user_config.write_text("[tolerance]\n")

        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("volley_overlap.config.USER_CONFIG_PATH", user_config)

        paths = get_config_paths()
        assert paths["user"] == user_config
        assert paths["project"] == project_config
