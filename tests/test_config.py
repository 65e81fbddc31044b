import pytest

from playcore import config as config_mod
from playcore.config import AppConfig, ConfigManager, get_config_dir, load_config
from playcore.filters import AUDIO_FILTER
from playcore.logging_config import ConfigurationError


class TestConfigLoading:
    """Tests for reading the TOML configuration."""

    def test_creates_default_file(self, tmp_path):
        """Test that a missing config is created from the template."""
        path = tmp_path / "playbrowser" / "playbrowser.toml"

        manager = ConfigManager(path)

        assert path.exists()
        assert manager.created is True
        assert manager.config == AppConfig()

    def test_default_template_loads_as_defaults(self, tmp_path):
        path = tmp_path / "playbrowser.toml"
        path.write_text(config_mod.DEFAULT_CONFIG)

        manager = ConfigManager(path)

        assert manager.config == AppConfig()

    def test_loads_sections(self, tmp_path):
        path = tmp_path / "playbrowser.toml"
        path.write_text(
            '[browser]\n'
            f'root = "{tmp_path}"\n'
            'show_hidden_files = true\n'
            'default_filter = "audio"\n'
            '[player]\n'
            'command = "mpv"\n'
            'args = ["--fs"]\n'
            '[menu]\n'
            'hide_main_menu_entry = true\n'
            '[logging]\n'
            'level = "DEBUG"\n'
        )

        manager = load_config(path)

        assert manager.get("browser_root") == str(tmp_path)
        assert manager.get("show_hidden_files") is True
        assert manager.get("player") == "mpv"
        assert manager.get("player_args") == ["--fs"]
        assert manager.get("hide_main_menu_entry") is True
        assert manager.get("log_level") == "DEBUG"
        assert manager.get_default_filter() is AUDIO_FILTER
        assert manager.validate_config() is True

    def test_unknown_keys_ignored(self, tmp_path):
        path = tmp_path / "playbrowser.toml"
        path.write_text('[browser]\ncolour = "red"\n[extra]\nkey = 1\n')

        manager = ConfigManager(path)

        assert manager.config == AppConfig()

    def test_malformed_file_uses_defaults(self, tmp_path):
        path = tmp_path / "playbrowser.toml"
        path.write_text("[browser\nroot = ")

        manager = ConfigManager(path)

        assert manager.config == AppConfig()

    def test_wrong_value_types_ignored(self, tmp_path):
        """Test that values of the wrong type keep their defaults."""
        path = tmp_path / "playbrowser.toml"
        path.write_text(
            '[browser]\n'
            'root = 5\n'
            'show_hidden_files = "yes"\n'
            '[player]\n'
            'command = "mpv"\n'
            'args = "x"\n'
            '[logging]\n'
            'level = 10\n'
        )

        manager = ConfigManager(path)

        assert manager.get("browser_root") == "/"
        assert manager.get("show_hidden_files") is False
        assert manager.get("player") == "mpv"
        assert manager.get("player_args") == []
        assert manager.get("log_level") == "INFO"
        assert manager.validate_config() is True

    def test_non_string_player_args_ignored(self, tmp_path):
        path = tmp_path / "playbrowser.toml"
        path.write_text('[player]\nargs = ["--fs", 1]\n')

        assert ConfigManager(path).get("player_args") == []

    def test_xdg_config_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_config_dir() == tmp_path / "playbrowser"


class TestConfigValidation:
    """Tests for validate_config()."""

    def test_missing_root(self, tmp_path):
        manager = ConfigManager(tmp_path / "playbrowser.toml")
        manager.set("browser_root", str(tmp_path / "missing"))

        assert manager.validate_config() is False

    def test_bad_filter(self, tmp_path):
        manager = ConfigManager(tmp_path / "playbrowser.toml")
        manager.set("browser_root", str(tmp_path))
        manager.set("default_filter", "podcasts")

        assert manager.validate_config() is False
        with pytest.raises(ConfigurationError):
            manager.get_default_filter()

    def test_filter_name_case_insensitive(self, tmp_path):
        """Test that validation accepts what get_default_filter accepts."""
        manager = ConfigManager(tmp_path / "playbrowser.toml")
        manager.set("browser_root", str(tmp_path))
        manager.set("default_filter", "Audio")

        assert manager.validate_config() is True
        assert manager.get_default_filter() is AUDIO_FILTER

    def test_bad_log_level(self, tmp_path):
        manager = ConfigManager(tmp_path / "playbrowser.toml")
        manager.set("browser_root", str(tmp_path))
        manager.set("log_level", "LOUD")

        assert manager.validate_config() is False

    def test_set_unknown_key_ignored(self, tmp_path):
        manager = ConfigManager(tmp_path / "playbrowser.toml")

        manager.set("nonexistent", 1)

        assert manager.get("nonexistent", "fallback") == "fallback"

    def test_reset_to_defaults(self, tmp_path):
        manager = ConfigManager(tmp_path / "playbrowser.toml")
        manager.set("show_hidden_files", True)

        manager.reset_to_defaults()

        assert manager.config == AppConfig()

    def test_paths_expand_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        manager = ConfigManager(tmp_path / "playbrowser.toml")
        manager.set("browser_root", "~/Videos")
        manager.set("log_file", "~/pb.log")

        assert manager.get_browser_root_path() == tmp_path / "Videos"
        assert manager.get_log_file_path() == tmp_path / "pb.log"


class TestGlobalManager:
    """Tests for the module level manager."""

    def setup_method(self):
        config_mod._config_manager = None

    def teardown_method(self):
        config_mod._config_manager = None

    def test_singleton(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        first = config_mod.get_config_manager()

        assert config_mod.get_config_manager() is first
        assert first.config_path == tmp_path / "playbrowser" / "playbrowser.toml"
        assert config_mod.get_config_value("player") == "auto"
