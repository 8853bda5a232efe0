"""aiohttp server for pagebind.

Application factory and route registration for standalone server mode.
"""

from aiohttp import web

from pagebind.api.content import create_content_routes
from pagebind.api.pages import create_pages_routes
from pagebind.app_keys import (
    content_store_key,
    live_reload_enabled_key,
    live_reload_manager_key,
    loader_key,
    site_dir_key,
    static_dir_key,
    verbose_key,
)
from pagebind.assets import STATIC_URL_PREFIX, get_static_dir
from pagebind.config import Config
from pagebind.core.loader import ContentLoader
from pagebind.core.sources import ContentSource, DirectoryContentSource, HttpContentSource
from pagebind.live.reload import LiveReloadManager, create_live_reload_routes


def create_app(config: Config, *, verbose: bool = False) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        verbose: Enable verbose output (log skipped bindings)

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    content_store = DirectoryContentSource(config.site.content_dir)
    source: ContentSource = content_store
    if config.content.base_url:
        source = HttpContentSource(config.content.base_url)

    app[loader_key] = ContentLoader(source, config.loader_config())
    app[content_store_key] = content_store
    app[site_dir_key] = config.site.root_dir
    app[verbose_key] = verbose
    app[live_reload_enabled_key] = config.live_reload.enabled
    app.on_cleanup.append(_close_content_source)

    # Content documents (must be registered first to take precedence over site files)
    app.router.add_routes(create_content_routes())

    # Live reload WebSocket endpoint
    if config.live_reload.enabled:
        manager = LiveReloadManager(
            [config.site.root_dir, config.site.content_dir],
            watch_patterns=config.live_reload.watch_patterns,
        )
        app[live_reload_manager_key] = manager
        app.router.add_routes(create_live_reload_routes(manager))
        app.on_startup.append(_start_live_reload)
        app.on_cleanup.append(_stop_live_reload)

    # Bundled client scripts
    static_dir = get_static_dir()
    app[static_dir_key] = static_dir
    app.router.add_static(STATIC_URL_PREFIX, static_dir)

    # Site pages and files - must be last to catch all remaining routes
    app.router.add_routes(create_pages_routes())

    return app


async def _close_content_source(app: web.Application) -> None:
    """Release the content source on application cleanup."""
    await app[loader_key].source.close()


async def _start_live_reload(app: web.Application) -> None:
    """Start live reload on application startup."""
    await app[live_reload_manager_key].start()


async def _stop_live_reload(app: web.Application) -> None:
    """Stop live reload on application cleanup."""
    await app[live_reload_manager_key].stop()


def run_server(config: Config, *, verbose: bool = False) -> None:
    """Run the server.

    Args:
        config: Application configuration
        verbose: Enable verbose output (log skipped bindings)
    """
    app = create_app(config, verbose=verbose)
    web.run_app(app, host=config.server.host, port=config.server.port)
