"""Live reload for development mode."""

from pagebind.live.reload import LiveReloadManager

__all__ = ["LiveReloadManager"]
