"""CLI interface for pagebind.

Command-line tool for serving and rendering pages with injected content.
"""

import asyncio
import logging
import sys
from dataclasses import replace
from pathlib import Path

import click
from bs4 import BeautifulSoup

from pagebind.config import Config
from pagebind.core.bindings import scan
from pagebind.core.document import decode_page, parse_page, render_page
from pagebind.core.injector import InjectionPlan, plan
from pagebind.core.loader import ContentLoader, LoaderConfig
from pagebind.core.sources import ContentSource, DirectoryContentSource, HttpContentSource
from pagebind.core.types import JSONValue


@click.group()
def cli() -> None:
    """pagebind - JSON content projected into static HTML."""


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover pagebind.toml)",
)
@click.option(
    "--site-dir",
    "-s",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Site directory with HTML pages and assets (overrides config)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--content-url",
    default=None,
    help="Base URL to fetch content documents from (overrides config)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (log skipped bindings)",
)
@click.option(
    "--live-reload/--no-live-reload",
    default=None,
    help="Enable/disable live reload (overrides config, default: enabled)",
)
def serve(
    config_path: Path | None,
    site_dir: Path | None,
    host: str | None,
    port: int | None,
    content_url: str | None,
    verbose: bool,
    live_reload: bool | None,
) -> None:
    """Start the site server."""
    from pagebind.server import run_server

    _configure_logging(verbose)
    config = _load_config(config_path).with_overrides(
        host=host,
        port=port,
        root_dir=site_dir,
        base_url=content_url,
        live_reload_enabled=live_reload,
    )

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Site directory: {config.site.root_dir}")
    if config.content.base_url:
        click.echo(f"Content URL: {config.content.base_url}")
    else:
        click.echo(f"Content directory: {config.site.content_dir}")
    if config.live_reload.enabled:
        click.echo("Live reload: enabled")
    else:
        click.echo("Live reload: disabled")

    run_server(config, verbose=verbose)


@cli.command()
@click.argument("page_file", type=click.Path(exists=True, path_type=Path, dir_okay=False))
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover pagebind.toml)",
)
@click.option(
    "--content-dir",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Directory with content documents (overrides config)",
)
@click.option(
    "--content-url",
    default=None,
    help="Base URL to fetch content documents from (overrides config)",
)
@click.option(
    "--location",
    "-l",
    default=None,
    help="URL path the page is served under (default: the file name)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Write the rendered page here (default: stdout)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (log skipped bindings)",
)
def render(
    page_file: Path,
    config_path: Path | None,
    content_dir: Path | None,
    content_url: str | None,
    location: str | None,
    output: Path | None,
    verbose: bool,
) -> None:
    """Render PAGE_FILE with its content document injected."""
    _configure_logging(verbose)
    config = _load_config(config_path).with_overrides(
        content_dir=content_dir,
        base_url=content_url,
    )
    effective_location = location or f"/{page_file.name}"

    data = page_file.read_bytes()
    html = decode_page(data)
    if html is None:
        click.echo(
            click.style("Page encoding not recognized, page left unchanged", fg="yellow"),
            err=True,
        )
        _write_output(data, page_file, output)
        return

    page = parse_page(html)
    loader = ContentLoader(_create_source(config), _offline_loader_config(config))
    result = asyncio.run(_initialize(loader, page, effective_location))

    if result is None:
        click.echo(
            click.style("Content unavailable, page left unchanged", fg="yellow"),
            err=True,
        )
        _write_output(data, page_file, output)
        return

    if verbose:
        for diagnostic in result.diagnostics:
            click.echo(f"  {diagnostic}", err=True)

    _write_output(render_page(page).encode("utf-8"), page_file, output)


@cli.command()
@click.argument("page_file", type=click.Path(exists=True, path_type=Path, dir_okay=False))
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover pagebind.toml)",
)
@click.option(
    "--content-dir",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Directory with content documents (overrides config)",
)
@click.option(
    "--content-url",
    default=None,
    help="Base URL to fetch content documents from (overrides config)",
)
@click.option(
    "--location",
    "-l",
    default=None,
    help="URL path the page is served under (default: the file name)",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Exit with status 1 if any binding would be skipped",
)
def check(
    page_file: Path,
    config_path: Path | None,
    content_dir: Path | None,
    content_url: str | None,
    location: str | None,
    strict: bool,
) -> None:
    """Report how the bindings in PAGE_FILE resolve against its content."""
    _configure_logging(verbose=False)
    config = _load_config(config_path).with_overrides(
        content_dir=content_dir,
        base_url=content_url,
    )
    effective_location = location or f"/{page_file.name}"

    loader = ContentLoader(_create_source(config), _offline_loader_config(config))
    page_id = loader.page_for(effective_location)
    html = decode_page(page_file.read_bytes())
    if html is None:
        click.echo(click.style(f"Error: cannot decode {page_file}", fg="red"), err=True)
        sys.exit(1)
    bindings = scan(parse_page(html))

    click.echo(f"Page: {effective_location} -> {loader.source.describe(page_id)}")
    click.echo(
        f"Bindings: {len(bindings.text)} text, {len(bindings.images)} image, "
        f"{len(bindings.projects)} project items"
    )

    document = asyncio.run(_fetch(loader, page_id))
    if document is None:
        click.echo(click.style("Content unavailable", fg="red"))
        if strict:
            sys.exit(1)
        return

    result = plan(bindings, document)
    _print_diagnostics(result)

    if strict and result.diagnostics:
        sys.exit(1)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load_config(config_path: Path | None) -> Config:
    """Load configuration or exit with error.

    Args:
        config_path: Explicit config path, or None to auto-discover

    Returns:
        Loaded configuration

    Raises:
        SystemExit: If the configuration is invalid
    """
    try:
        return Config.load(config_path)
    except (FileNotFoundError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)


def _create_source(config: Config) -> ContentSource:
    if config.content.base_url:
        return HttpContentSource(config.content.base_url)
    return DirectoryContentSource(config.site.content_dir)


def _offline_loader_config(config: Config) -> LoaderConfig:
    # No other scripts run against a file on disk, nothing to wait for
    return replace(config.loader_config(), grace_period=0.0)


async def _initialize(
    loader: ContentLoader, page: BeautifulSoup, location: str
) -> InjectionPlan | None:
    try:
        return await loader.initialize(page, location)
    finally:
        await loader.source.close()


async def _fetch(loader: ContentLoader, page_id: str) -> JSONValue:
    try:
        return await loader.fetch_document(page_id)
    finally:
        await loader.source.close()


def _write_output(data: bytes, page_file: Path, output: Path | None) -> None:
    """Write page bytes to the output file, or stdout if none is given."""
    if output is None:
        click.echo(data, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(data)
    click.echo(click.style(f"Rendered {page_file} -> {output}", fg="green"), err=True)


def _print_diagnostics(result: InjectionPlan) -> None:
    """Print the planned writes and every skipped binding.

    Args:
        result: Injection plan computed for the page
    """
    click.echo(click.style(f"Writes: {len(result.writes)}", fg="green"))
    if not result.diagnostics:
        click.echo(click.style("All bindings resolved.", fg="green"))
        return

    click.echo(
        click.style(f"Skipped bindings ({len(result.diagnostics)}):", fg="yellow", bold=True)
    )
    for diagnostic in result.diagnostics:
        click.echo(f"  - [{diagnostic.kind}] {diagnostic.message}")


if __name__ == "__main__":
    cli()
