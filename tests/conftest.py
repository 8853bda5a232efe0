"""Shared test fixtures."""

from pathlib import Path

import pytest
from pagebind.config import (
    Config,
    ContentConfig,
    LiveReloadConfig,
    ServerConfig,
    SiteConfig,
)
from pagebind.core.routing import PageRoutes

KITCHEN_PAGE_HTML = """<!DOCTYPE html>
<html>
<head><title>Kitchen</title></head>
<body>
<h1 data-content="hero.title">Static title</h1>
<p data-content="hero.subtitle">Static subtitle</p>
<picture data-image="hero.image">
<source type="image/avif" srcset="assets/optimized/images/old-800.avif 800w">
<source type="image/webp" srcset="assets/optimized/images/old-800.webp 800w">
<img src="assets/optimized/images/old-800.webp" alt="Kitchen">
</picture>
<div class="project-item"><h4>Project one</h4></div>
<div class="project-item"><h4>Project two</h4></div>
<address data-content="footer.contact">Static contact</address>
</body>
</html>
"""


@pytest.fixture
def kitchen_html() -> str:
    """Kitchen page markup with every kind of binding."""
    return KITCHEN_PAGE_HTML


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """Create a site directory with a content subdirectory."""
    site = tmp_path / "site"
    (site / "content").mkdir(parents=True, exist_ok=True)
    return site


@pytest.fixture
def test_config(site_dir: Path) -> Config:
    """Create a test configuration with tmp_path directories.

    Live reload is disabled and the grace period is zero so tests do not wait.
    """
    return Config(
        server=ServerConfig(),
        site=SiteConfig(root_dir=site_dir, content_dir=site_dir / "content"),
        content=ContentConfig(grace_period=0.0),
        routes=PageRoutes(),
        live_reload=LiveReloadConfig(enabled=False),
    )
