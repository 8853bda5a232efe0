"""WebSocket-based live reload for development mode.

Monitors site pages and content documents for changes and notifies
connected clients via WebSocket to trigger page reloads.
"""

import asyncio
import logging
from pathlib import Path

from aiohttp import WSCloseCode, WSMsgType, web
from watchfiles import Change, awatch

logger = logging.getLogger(__name__)

DEFAULT_WATCH_PATTERNS = ["*.html", "*.json"]

# Seconds between WebSocket pings
HEARTBEAT_INTERVAL = 30.0


class LiveReloadManager:
    """Manages WebSocket connections and file watching for live reload.

    Coordinates between file system watcher and connected WebSocket clients
    to refresh pages when their markup or content document changes.
    """

    def __init__(
        self,
        watch_dirs: list[Path],
        watch_patterns: list[str] | None = None,
    ) -> None:
        """Initialize the live reload manager.

        Args:
            watch_dirs: Directories to watch for changes (site root, content)
            watch_patterns: Glob patterns to watch (default: ["*.html", "*.json"])
        """
        self._watch_dirs = _distinct_roots(watch_dirs)
        self._watch_patterns = watch_patterns or DEFAULT_WATCH_PATTERNS
        self._connections: set[web.WebSocketResponse] = set()
        self._watch_task: asyncio.Task[None] | None = None
        self._stop_event = asyncio.Event()

    @property
    def watch_dirs(self) -> list[Path]:
        """Directories being watched."""
        return list(self._watch_dirs)

    @property
    def client_count(self) -> int:
        """Number of connected browser tabs."""
        return len(self._connections)

    async def start(self) -> None:
        """Start the file watcher (no-op if already running)."""
        if self._watch_task is not None:
            return
        self._stop_event.clear()
        self._watch_task = asyncio.create_task(self._watch_files())

    async def stop(self) -> None:
        """Stop the file watcher and disconnect every client."""
        task, self._watch_task = self._watch_task, None
        if task is not None:
            self._stop_event.set()
            await task

        for ws in list(self._connections):
            await ws.close(code=WSCloseCode.GOING_AWAY, message=b"Server shutdown")

    async def handle_websocket(self, request: web.Request) -> web.WebSocketResponse:
        """Register a browser tab for reload notifications.

        The connection stays open until the client leaves; incoming
        messages are ignored.
        """
        ws = web.WebSocketResponse(heartbeat=HEARTBEAT_INTERVAL)
        await ws.prepare(request)
        self._connections.add(ws)
        logger.debug(f"Live reload: client connected ({self.client_count} total)")

        try:
            async for msg in ws:
                if msg.type == WSMsgType.ERROR:
                    logger.debug(f"Live reload: connection closed with {ws.exception()}")
                    break
        finally:
            self._connections.discard(ws)

        return ws

    async def _watch_files(self) -> None:
        """Watch for file changes and broadcast reload events."""
        existing = [d for d in self._watch_dirs if d.exists()]
        if not existing:
            logger.warning("Live reload: no watch directory exists, watcher not started")
            return

        async for changes in awatch(*existing, stop_event=self._stop_event):
            for change_type, path_str in changes:
                if change_type == Change.deleted:
                    continue

                changed = self.to_url_path(Path(path_str))
                if changed is None:
                    continue

                logger.debug(f"Live reload: {changed} changed")
                await self._broadcast_reload(changed)

    def to_url_path(self, path: Path) -> str | None:
        """Convert a changed file to the URL path reported to clients.

        Args:
            path: Absolute file path

        Returns:
            URL path relative to its watch directory (e.g., "/content/home.json"),
            or None if the file is outside the watch directories or does not
            match any watch pattern
        """
        path = path.resolve()
        for watch_dir in self._watch_dirs:
            try:
                relative = path.relative_to(watch_dir)
            except ValueError:
                continue

            if any(relative.match(pattern) for pattern in self._watch_patterns):
                return f"/{relative.as_posix()}"
            return None

        return None

    async def _broadcast_reload(self, path: str) -> None:
        """Tell every open client that a file changed.

        Args:
            path: URL path of the file that changed
        """
        payload = {"type": "reload", "path": path}
        for ws in [ws for ws in self._connections if not ws.closed]:
            try:
                await ws.send_json(payload)
            except ConnectionResetError:
                # Closed mid-send; handle_websocket drops it on exit
                self._connections.discard(ws)


def _distinct_roots(dirs: list[Path]) -> list[Path]:
    """Drop directories nested inside another watched directory."""
    roots: list[Path] = []
    for directory in sorted({d.resolve() for d in dirs}, key=lambda d: len(d.parts)):
        if not any(directory.is_relative_to(root) for root in roots):
            roots.append(directory)
    return roots


def create_live_reload_routes(manager: LiveReloadManager) -> list[web.RouteDef]:
    """Create routes for live reload WebSocket.

    Args:
        manager: LiveReloadManager instance

    Returns:
        List of route definitions
    """
    return [web.get("/ws/live-reload", manager.handle_websocket)]
