"""Site page endpoint.

Serves HTML pages with their content document injected, and every other
file of the site directory as-is.
"""

import logging
from pathlib import Path

from aiohttp import web

from pagebind.app_keys import live_reload_enabled_key, loader_key, site_dir_key, verbose_key
from pagebind.assets import live_reload_script_url
from pagebind.core.document import append_script, decode_page, parse_page, render_page
from pagebind.site import PAGE_SUFFIX, resolve_site_path

logger = logging.getLogger(__name__)

NO_CACHE = "no-cache"


def create_pages_routes() -> list[web.RouteDef]:
    return [
        web.get("/{path:.*}", get_site_path),
    ]


async def get_site_path(request: web.Request) -> web.StreamResponse:
    path = request.match_info["path"]
    file_path = resolve_site_path(request.app[site_dir_key], path)
    if file_path is None:
        raise web.HTTPNotFound(text=f"Not found: /{path}")

    if file_path.suffix != PAGE_SUFFIX:
        return web.FileResponse(file_path)

    html = decode_page(file_path.read_bytes())
    if html is None:
        logger.warning(f"{request.path}: page encoding not recognized, served as-is")
        return _static_page(file_path)

    page = parse_page(html)

    loader = request.app[loader_key]
    result = await loader.initialize(page, request.path)

    live_reload = request.app[live_reload_enabled_key]
    if result is None and not live_reload:
        # Nothing was written, so the file is served byte for byte
        return _static_page(file_path)

    # Log skipped bindings in verbose mode
    if request.app[verbose_key] and result is not None:
        for diagnostic in result.diagnostics:
            logger.warning(f"{request.path}: {diagnostic}")

    if live_reload:
        append_script(page, live_reload_script_url())

    return web.Response(
        text=render_page(page),
        content_type="text/html",
        headers={"Cache-Control": NO_CACHE},
    )


def _static_page(file_path: Path) -> web.FileResponse:
    return web.FileResponse(file_path, headers={"Cache-Control": NO_CACHE})
