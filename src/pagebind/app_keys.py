"""Application keys for type-safe app configuration access."""

from pathlib import Path

from aiohttp import web

from pagebind.core.loader import ContentLoader
from pagebind.core.sources import DirectoryContentSource
from pagebind.live.reload import LiveReloadManager

loader_key = web.AppKey("loader", ContentLoader)
content_store_key = web.AppKey("content_store", DirectoryContentSource)
site_dir_key = web.AppKey("site_dir", Path)
static_dir_key = web.AppKey("static_dir", Path)
verbose_key = web.AppKey("verbose", bool)
live_reload_enabled_key = web.AppKey("live_reload_enabled", bool)
live_reload_manager_key = web.AppKey("live_reload_manager", LiveReloadManager)
