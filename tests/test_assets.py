"""Tests for bundled asset discovery."""

from pagebind.assets import LIVE_RELOAD_SCRIPT, get_static_dir, live_reload_script_url


class TestGetStaticDir:
    """Tests for get_static_dir()."""

    def test__installed_package__contains_live_reload_script(self) -> None:
        """The live reload client ships with the package."""
        static_dir = get_static_dir()

        assert static_dir.is_dir()
        assert (static_dir / LIVE_RELOAD_SCRIPT).is_file()


class TestLiveReloadScriptUrl:
    """Tests for live_reload_script_url()."""

    def test__url__under_static_prefix(self) -> None:
        """The script is served under the bundled asset prefix."""
        assert live_reload_script_url() == "/_pagebind/live-reload.js"
