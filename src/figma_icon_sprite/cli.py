"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from figma_icon_sprite.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    complete_configuration,
    write_placeholder_configuration,
)
from figma_icon_sprite.sync_execution import (
    PageNotFoundError,
    SyncExecutionError,
    SyncRequest,
    execute_icon_sync,
)

_PACKAGE_LOGGER = logging.getLogger("figma_icon_sprite")


class CliError(Exception):
    """Custom CLI error."""


class _ClickEchoHandler(logging.Handler):
    """Routes package log records to stderr through click."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:  # pylint: disable=broad-exception-caught
            self.handleError(record)


def _configure_logging(verbose: bool) -> None:
    for handler in list(_PACKAGE_LOGGER.handlers):
        if isinstance(handler, _ClickEchoHandler):
            _PACKAGE_LOGGER.removeHandler(handler)
    handler = _ClickEchoHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    _PACKAGE_LOGGER.addHandler(handler)
    _PACKAGE_LOGGER.setLevel(logging.INFO if verbose else logging.WARNING)


def _prompt(label: str, default: str | None) -> str:
    return str(click.prompt(label, default=default))


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="figma-icon-sprite")
def cli() -> None:
    """Sync Figma icons into an SVG sprite and TypeScript typings."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="sync")
@click.option(
    "--config",
    "config_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON configuration file",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Fetch and convert every icon without writing any file.",
)
@click.option(
    "--no-input",
    is_flag=True,
    default=False,
    help="Fail instead of prompting for missing configuration values.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Report each sync step.")
def sync_icons(config_path: str, dry_run: bool, no_input: bool, verbose: bool) -> None:
    """Fetch icons from Figma and write the sprite, typings and icon manifest."""
    _configure_logging(verbose)
    if not no_input:
        try:
            complete_configuration(config_path, _prompt)
        except (ConfigurationError, OSError) as exc:
            raise CliError(str(exc)) from exc

    try:
        outcome = execute_icon_sync(SyncRequest(config_path=config_path, dry_run=dry_run))
    except PageNotFoundError as exc:
        click.echo(str(exc), err=True)
        return
    except SyncExecutionError as exc:
        raise CliError(str(exc)) from exc

    if outcome.dry_run:
        click.echo(f"dry run: {outcome.icon_count} icons converted, no files written")
        return
    click.echo(str(outcome.sprite_path))
    click.echo(str(outcome.typings_path))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
