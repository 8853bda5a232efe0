"""Configuration management for pagebind.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from pagebind.core.loader import DEFAULT_GRACE_PERIOD, LoaderConfig
from pagebind.core.routing import DEFAULT_PAGE, PageRoutes
from pagebind.core.types import PageId

CONFIG_FILENAME = "pagebind.toml"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class SiteConfig:
    """Site layout configuration."""

    root_dir: Path = field(default_factory=lambda: Path("site"))
    content_dir: Path = field(default_factory=lambda: Path("site") / "content")


@dataclass
class ContentConfig:
    """Content loading configuration."""

    base_url: str | None = None
    grace_period: float = DEFAULT_GRACE_PERIOD


@dataclass
class LiveReloadConfig:
    """Live reload configuration."""

    enabled: bool = True
    watch_patterns: list[str] | None = None


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    site: SiteConfig
    content: ContentConfig
    routes: PageRoutes
    live_reload: LiveReloadConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for pagebind.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        """Create config with all defaults."""
        return cls(
            server=ServerConfig(),
            site=SiteConfig(),
            content=ContentConfig(),
            routes=PageRoutes(),
            live_reload=LiveReloadConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            site=cls._parse_site(data.get("site"), config_dir),
            content=cls._parse_content(data.get("content")),
            routes=cls._parse_routes(data.get("routes")),
            live_reload=cls._parse_live_reload(data.get("live_reload")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section.

        Args:
            data: Raw server section data

        Returns:
            ServerConfig instance
        """
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_site(cls, data: object, config_dir: Path) -> SiteConfig:
        """Parse site configuration section.

        Args:
            data: Raw site section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            SiteConfig instance. content_dir is relative to root_dir.
        """
        if data is None:
            root_path = config_dir / "site"
            return SiteConfig(root_dir=root_path, content_dir=root_path / "content")

        if not isinstance(data, dict):
            raise ValueError("site section must be a dictionary")

        root_dir = data.get("root_dir", "site")
        if not isinstance(root_dir, str):
            raise ValueError("site.root_dir must be a string")
        root_path = config_dir / root_dir

        content_dir = data.get("content_dir", "content")
        if not isinstance(content_dir, str):
            raise ValueError("site.content_dir must be a string")

        return SiteConfig(root_dir=root_path, content_dir=root_path / content_dir)

    @classmethod
    def _parse_content(cls, data: object) -> ContentConfig:
        """Parse content configuration section.

        Args:
            data: Raw content section data

        Returns:
            ContentConfig instance
        """
        if data is None:
            return ContentConfig()

        if not isinstance(data, dict):
            raise ValueError("content section must be a dictionary")

        base_url = data.get("base_url")
        if base_url is not None and not isinstance(base_url, str):
            raise ValueError("content.base_url must be a string")

        grace_period = data.get("grace_period", DEFAULT_GRACE_PERIOD)
        if not isinstance(grace_period, (int, float)) or isinstance(grace_period, bool):
            raise ValueError("content.grace_period must be a number")
        if grace_period < 0:
            raise ValueError("content.grace_period must not be negative")

        return ContentConfig(base_url=base_url, grace_period=float(grace_period))

    @classmethod
    def _parse_routes(cls, data: object) -> PageRoutes:
        """Parse routes configuration section.

        Entries under [routes.pages] extend the built-in page table.

        Args:
            data: Raw routes section data

        Returns:
            PageRoutes instance
        """
        if data is None:
            return PageRoutes()

        if not isinstance(data, dict):
            raise ValueError("routes section must be a dictionary")

        default = data.get("default", DEFAULT_PAGE)
        if not isinstance(default, str) or not default:
            raise ValueError("routes.default must be a non-empty string")

        pages_raw = data.get("pages", {})
        if not isinstance(pages_raw, dict):
            raise ValueError("routes.pages must be a dictionary")
        pages: dict[str, str] = {}
        for name, page in pages_raw.items():
            if not isinstance(page, str) or not page:
                raise ValueError(f"routes.pages.{name} must be a non-empty string")
            pages[name] = page

        routes = PageRoutes(default=PageId(default))
        return routes.with_pages(pages) if pages else routes

    @classmethod
    def _parse_live_reload(cls, data: object) -> LiveReloadConfig:
        """Parse live_reload configuration section.

        Args:
            data: Raw live_reload section data

        Returns:
            LiveReloadConfig instance
        """
        if data is None:
            return LiveReloadConfig()

        if not isinstance(data, dict):
            raise ValueError("live_reload section must be a dictionary")

        enabled = data.get("enabled", True)
        if not isinstance(enabled, bool):
            raise ValueError("live_reload.enabled must be a boolean")

        watch_patterns_raw = data.get("watch_patterns")
        watch_patterns: list[str] | None = None
        if watch_patterns_raw is not None:
            if not isinstance(watch_patterns_raw, list):
                raise ValueError("live_reload.watch_patterns must be a list")
            watch_patterns = []
            for item in watch_patterns_raw:
                if not isinstance(item, str):
                    raise ValueError("live_reload.watch_patterns items must be strings")
                watch_patterns.append(item)

        return LiveReloadConfig(enabled=enabled, watch_patterns=watch_patterns)

    def loader_config(self) -> LoaderConfig:
        """Build the content loader settings from this configuration."""
        return LoaderConfig(routes=self.routes, grace_period=self.content.grace_period)

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        root_dir: Path | None = None,
        content_dir: Path | None = None,
        base_url: str | None = None,
        live_reload_enabled: bool | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. This follows
        the immutable pattern - the original Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            root_dir: Override site.root_dir (content_dir follows unless given)
            content_dir: Override site.content_dir
            base_url: Override content.base_url
            live_reload_enabled: Override live_reload.enabled

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        site = self.site
        if root_dir is not None:
            relative_content = _relative_or_none(self.site.content_dir, self.site.root_dir)
            site = replace(
                site,
                root_dir=root_dir,
                content_dir=root_dir / relative_content if relative_content else root_dir / "content",
            )
        if content_dir is not None:
            site = replace(site, content_dir=content_dir)

        content = self.content
        if base_url is not None:
            content = replace(self.content, base_url=base_url)

        live_reload = self.live_reload
        if live_reload_enabled is not None:
            live_reload = replace(self.live_reload, enabled=live_reload_enabled)

        return replace(
            self,
            server=server,
            site=site,
            content=content,
            live_reload=live_reload,
        )


def _relative_or_none(path: Path, base: Path) -> Path | None:
    try:
        return path.relative_to(base)
    except ValueError:
        return None
