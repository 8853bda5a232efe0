"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pagebind.config import Config, ContentConfig, LiveReloadConfig, ServerConfig, SiteConfig
from pagebind.core.routing import PageRoutes


class TestConfigLoad:
    """Tests for Config.load()."""

    def test__explicit_path__loads_config(self, tmp_path: Path) -> None:
        """Load config from explicit path."""
        config_file = tmp_path / "pagebind.toml"
        config_file.write_text("""
[server]
host = "0.0.0.0"
port = 3000

[site]
root_dir = "public"
content_dir = "data"

[content]
base_url = "https://cms.example.com/"
grace_period = 0.5

[routes]
default = "landing"

[routes.pages]
"bathroom.html" = "bathroom"

[live_reload]
enabled = false
watch_patterns = ["*.html"]
""")

        config = Config.load(config_file)

        assert config.server.host == "0.0.0.0"
        assert config.server.port == 3000
        assert config.site.root_dir == tmp_path / "public"
        assert config.site.content_dir == tmp_path / "public" / "data"
        assert config.content.base_url == "https://cms.example.com/"
        assert config.content.grace_period == 0.5
        assert config.routes.default == "landing"
        assert config.routes.page_for("/bathroom.html") == "bathroom"
        assert config.routes.page_for("/kitchen.html") == "kitchen"
        assert config.routes.page_for("/other.html") == "landing"
        assert config.live_reload.enabled is False
        assert config.live_reload.watch_patterns == ["*.html"]
        assert config.config_path == config_file

    def test__empty_file__uses_defaults_relative_to_config(self, tmp_path: Path) -> None:
        """Missing sections fall back to defaults."""
        config_file = tmp_path / "pagebind.toml"
        config_file.write_text("")

        config = Config.load(config_file)

        assert config.server == ServerConfig()
        assert config.site.root_dir == tmp_path / "site"
        assert config.site.content_dir == tmp_path / "site" / "content"
        assert config.content == ContentConfig()
        assert config.routes == PageRoutes()
        assert config.live_reload == LiveReloadConfig()

    def test__integer_grace_period__accepted(self, tmp_path: Path) -> None:
        """Whole-second grace periods are numbers too."""
        config_file = tmp_path / "pagebind.toml"
        config_file.write_text("[content]\ngrace_period = 0\n")

        config = Config.load(config_file)

        assert config.content.grace_period == 0.0

    def test__missing_explicit_path__raises_file_not_found(self, tmp_path: Path) -> None:
        """Explicit config path must exist."""
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            Config.load(tmp_path / "missing.toml")

    def test__no_config_file__returns_defaults(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Without a config file anywhere up the tree, defaults are used."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(Config, "_discover_config", classmethod(lambda cls: None))

        config = Config.load()

        assert config.site == SiteConfig()
        assert config.config_path is None

    def test__discovers_config_in_parent(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Auto-discovery walks up from the current directory."""
        (tmp_path / "pagebind.toml").write_text("[server]\nport = 9000\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        config = Config.load()

        assert config.server.port == 9000
        assert config.config_path == tmp_path / "pagebind.toml"

    def test__invalid_toml__raises_value_error(self, tmp_path: Path) -> None:
        """Syntax errors are configuration errors."""
        config_file = tmp_path / "pagebind.toml"
        config_file.write_text("[server\nport = 1")

        with pytest.raises(ValueError, match="Invalid TOML"):
            Config.load(config_file)

    @pytest.mark.parametrize(
        ("content", "message"),
        [
            ('server = "x"', "server section must be a dictionary"),
            ('[server]\nhost = 1', "server.host must be a string"),
            ('[server]\nport = "80"', "server.port must be an integer"),
            ("[server]\nport = true", "server.port must be an integer"),
            ("[site]\nroot_dir = 1", "site.root_dir must be a string"),
            ("[site]\ncontent_dir = []", "site.content_dir must be a string"),
            ("[content]\nbase_url = 1", "content.base_url must be a string"),
            ('[content]\ngrace_period = "1"', "content.grace_period must be a number"),
            ("[content]\ngrace_period = -1", "content.grace_period must not be negative"),
            ('[routes]\ndefault = ""', "routes.default must be a non-empty string"),
            ('[routes]\npages = "x"', "routes.pages must be a dictionary"),
            ('[routes.pages]\n"a.html" = 1', r"routes.pages.a.html must be a non-empty string"),
            ('[live_reload]\nenabled = "yes"', "live_reload.enabled must be a boolean"),
            ('[live_reload]\nwatch_patterns = "*.html"', "live_reload.watch_patterns must be a list"),
            ("[live_reload]\nwatch_patterns = [1]", "live_reload.watch_patterns items must be strings"),
        ],
    )
    def test__invalid_value__raises_value_error(
        self, tmp_path: Path, content: str, message: str
    ) -> None:
        """Type errors in any section are reported with the key name."""
        config_file = tmp_path / "pagebind.toml"
        config_file.write_text(content)

        with pytest.raises(ValueError, match=message):
            Config.load(config_file)


class TestLoaderConfig:
    """Tests for Config.loader_config()."""

    def test__loader_config__carries_routes_and_grace_period(self, test_config: Config) -> None:
        """The loader settings come from the routes and content sections."""
        loader_config = test_config.loader_config()

        assert loader_config.routes is test_config.routes
        assert loader_config.grace_period == 0.0


class TestWithOverrides:
    """Tests for Config.with_overrides()."""

    def test__no_overrides__returns_equal_config(self, test_config: Config) -> None:
        """Calling without overrides changes nothing."""
        assert test_config.with_overrides() == test_config

    def test__server_overrides__applied(self, test_config: Config) -> None:
        """Host and port override independently."""
        config = test_config.with_overrides(port=9999)

        assert config.server.port == 9999
        assert config.server.host == test_config.server.host

    def test__root_dir_override__moves_content_dir(
        self, test_config: Config, tmp_path: Path
    ) -> None:
        """The content directory stays relative to the new site root."""
        config = test_config.with_overrides(root_dir=tmp_path / "other")

        assert config.site.root_dir == tmp_path / "other"
        assert config.site.content_dir == tmp_path / "other" / "content"

    def test__content_dir_override__wins_over_root_dir(
        self, test_config: Config, tmp_path: Path
    ) -> None:
        """An explicit content directory is used as given."""
        config = test_config.with_overrides(
            root_dir=tmp_path / "other", content_dir=tmp_path / "cms"
        )

        assert config.site.content_dir == tmp_path / "cms"

    def test__content_and_live_reload_overrides__applied(self, test_config: Config) -> None:
        """Content URL and live reload flags override the file."""
        config = test_config.with_overrides(
            base_url="https://cms.example.com/", live_reload_enabled=True
        )

        assert config.content.base_url == "https://cms.example.com/"
        assert config.content.grace_period == test_config.content.grace_period
        assert config.live_reload.enabled is True

    def test__original__not_modified(self, test_config: Config) -> None:
        """Overrides return a new Config."""
        test_config.with_overrides(port=1234, live_reload_enabled=True)

        assert test_config.server.port == 8080
        assert test_config.live_reload.enabled is False
