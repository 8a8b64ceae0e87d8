"""CLI interface for gemserve.

Command-line tool for resolving Gemini requests against a content root.
"""

import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click

from gemserve.config import Config

F = TypeVar("F", bound=Callable[..., Any])


@click.group()
def cli() -> None:
    """gemserve - Gemini content resolution."""


def _config_option(func: F) -> F:
    return click.option(
        "--config",
        "-c",
        "config_path",
        type=click.Path(exists=True, path_type=Path),
        default=None,
        help="Path to configuration file (default: auto-discover gemserve.toml)",
    )(func)


def _content_options(func: F) -> F:
    func = click.option(
        "--extension",
        "-e",
        default=None,
        help="Implicit extension for extensionless paths (overrides config)",
    )(func)
    func = click.option(
        "--default-file",
        default=None,
        help="Directory index basename (overrides config)",
    )(func)
    func = click.option(
        "--root-dir",
        "-r",
        type=click.Path(exists=True, path_type=Path, file_okay=False),
        default=None,
        help="Content root directory (overrides config)",
    )(func)
    return func


def _load_config(config_path: Path | None, **overrides: object) -> Config:
    """Load config and apply overrides, exiting with an error on failure."""
    try:
        return Config.load(config_path).with_overrides(**overrides)
    except (OSError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@cli.command()
@click.argument("url")
@_config_option
@_content_options
@click.option(
    "--header-only",
    is_flag=True,
    help="Print only the response header, not the body",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Log resolution details to stderr",
)
def resolve(
    url: str,
    config_path: Path | None,
    root_dir: Path | None,
    default_file: str | None,
    extension: str | None,
    header_only: bool,
    verbose: bool,
) -> None:
    """Resolve URL and print the Gemini response."""
    from gemserve.core.resolver import Resolver
    from gemserve.core.types import Request

    if verbose:
        _setup_logging(verbose=True)

    config = _load_config(
        config_path,
        root_dir=root_dir,
        default_file=default_file,
        extension=extension,
    )
    resolver = Resolver(config.content)

    with resolver.resolve(Request(url=url, origin="cli")) as response:
        click.echo(response.header())
        if response.body is not None and not header_only:
            stdout = click.get_binary_stream("stdout")
            for chunk in iter(lambda: response.body.read(64 * 1024), b""):
                stdout.write(chunk)
            stdout.flush()

    if not response.ok:
        sys.exit(1)


@cli.command(name="config")
@_config_option
def show_config(config_path: Path | None) -> None:
    """Show the effective configuration."""
    config = _load_config(config_path)

    if config.config_path is not None:
        click.echo(f"Configuration file: {config.config_path}")
    else:
        click.echo("Configuration file: none (defaults)")
    click.echo(f"Address: {config.server.address}")
    click.echo(f"Certificate: {config.server.cert_file}")
    click.echo(f"Key: {config.server.key_file}")
    click.echo(f"Root directory: {config.content.root_dir}")
    click.echo(f"Directory index: {config.content.index_name}")
    click.echo(f"Extension: {config.content.extension}")


@cli.command()
@_config_option
@_content_options
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
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging",
)
def preview(
    config_path: Path | None,
    root_dir: Path | None,
    default_file: str | None,
    extension: str | None,
    host: str | None,
    port: int | None,
    verbose: bool,
) -> None:
    """Browse the content root over HTTP."""
    from gemserve.server import run_server

    _setup_logging(verbose)
    config = _load_config(
        config_path,
        root_dir=root_dir,
        default_file=default_file,
        extension=extension,
        host=host,
        port=port,
    )

    click.echo(f"Starting preview server on {config.preview.host}:{config.preview.port}")
    click.echo(f"Root directory: {config.content.root_dir}")
    click.echo(f"Directory index: {config.content.index_name}")

    run_server(config)


if __name__ == "__main__":
    cli()
