"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from config_schema_rewriter.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    load_configuration,
    write_placeholder_configuration,
)
from config_schema_rewriter.run_execution import (
    RunExecutionError,
    build_rewrite_request,
    execute_schema_rewrite_run,
)

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
_PACKAGE_LOGGER = "config_schema_rewriter"


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="config-schema-rewriter")
def cli() -> None:
    """Post-process the generated config JSON Schema."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML rewrite profile to write",
)
def generate_config(output_path: str) -> None:
    """Generate a rewrite profile with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="rewrite")
@click.option(
    "--config",
    "config_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON rewrite profile; relative paths inside resolve against its directory",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log each rewrite step.")
def rewrite(config_path: str, verbose: bool) -> None:
    """Promote the Config definition and write the rewritten schema."""
    verbose_state = _attach_verbose_handler() if verbose else None
    try:
        settings = load_configuration(config_path)
        outcome = execute_schema_rewrite_run(build_rewrite_request(settings))
    except (ConfigurationError, RunExecutionError, OSError) as exc:
        raise CliError(str(exc)) from exc
    finally:
        if verbose_state is not None:
            _detach_verbose_handler(*verbose_state)
    click.echo(str(outcome.output_path))


def _attach_verbose_handler() -> tuple[logging.Handler, int]:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    previous_level = package_logger.level
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.INFO)
    return handler, previous_level


def _detach_verbose_handler(handler: logging.Handler, previous_level: int) -> None:
    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    package_logger.removeHandler(handler)
    package_logger.setLevel(previous_level)


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
