"""Content document endpoint.

Serves content/{page}.json with caching disabled, so the next page load
always sees the latest edit.
"""

import re

from aiohttp import web

from pagebind.app_keys import content_store_key

PAGE_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def create_content_routes(content_path: str = "content") -> list[web.RouteDef]:
    return [web.get(f"/{content_path}/{{page}}.json", get_content)]


async def get_content(request: web.Request) -> web.FileResponse:
    page = request.match_info["page"]
    if not PAGE_ID_RE.match(page):
        raise web.HTTPNotFound()

    document_path = request.app[content_store_key].document_path(page)
    if not document_path.is_file():
        raise web.HTTPNotFound()

    return web.FileResponse(
        document_path,
        headers={
            "Cache-Control": "no-cache, no-store, must-revalidate",
        },
    )
