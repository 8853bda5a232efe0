"""Asset discovery for bundled static assets.

Locates the client scripts shipped inside the pagebind package.
"""

from importlib.resources import files
from pathlib import Path

LIVE_RELOAD_SCRIPT = "live-reload.js"

# URL prefix the bundled assets are served under
STATIC_URL_PREFIX = "/_pagebind"


def get_static_dir() -> Path:
    """Return path to bundled static assets.

    Returns:
        Path to the static directory containing client scripts.

    Raises:
        FileNotFoundError: If static assets are not bundled.
    """
    static = files("pagebind").joinpath("static")
    if not static.is_dir():
        msg = "Bundled static assets not found. Reinstall pagebind with its package data."
        raise FileNotFoundError(msg)
    return Path(str(static))


def live_reload_script_url() -> str:
    """URL the live reload client script is served at."""
    return f"{STATIC_URL_PREFIX}/{LIVE_RELOAD_SCRIPT}"
