"""Click CLI commands for liquiddocs.

This module implements the command-line interface using Click, providing
commands for checking Liquid templates for ``{% doc %}`` tags and dumping
the parsed documentation.
"""

from __future__ import annotations

import logging
import sys
import time
from pathlib import Path
from typing import Any

import click
import structlog
from pydantic import TypeAdapter

from liquiddocs import __version__
from liquiddocs.cli.ui import LiquidDocsUI, get_ui, set_ui
from liquiddocs.core.batch import DocBatchParser
from liquiddocs.core.models import Diagnostic, FileInput, FileResult
from liquiddocs.utils.config import LiquidDocsConfig, create_default_config, load_config
from liquiddocs.utils.file_ops import FileOperations

logger = structlog.get_logger(__name__)

_RESULTS_ADAPTER = TypeAdapter(list[FileResult])


def _stderr_logger_factory(*args: Any) -> structlog.PrintLogger:
    # Resolve sys.stderr per logger so redirected streams are honored
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(level: int, log_format: str = "console") -> None:
    """Configure structlog to write filtered events to stderr.

    Args:
        level: Minimum stdlib logging level
        log_format: ``console`` for human-readable lines, ``json`` for JSON
    """
    renderer: Any
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=_stderr_logger_factory,
    )


def _apply_config(ctx: click.Context, config: LiquidDocsConfig) -> None:
    """Apply logging and UI settings from the loaded configuration.

    The ``--verbose``/``--quiet`` flags of the group take precedence.
    """
    ui: LiquidDocsUI = ctx.obj["ui"]
    verbose = ctx.obj["verbose"] or config.verbose
    quiet = ctx.obj["quiet"] or (config.quiet and not ctx.obj["verbose"])

    if quiet:
        log_level = logging.ERROR
    elif verbose:
        log_level = logging.DEBUG
    else:
        log_level = logging.getLevelName(config.log_level)

    configure_logging(log_level, config.log_format)
    ui.verbose = verbose
    ui.quiet = quiet


def _load_config(ctx: click.Context, **overrides: Any) -> LiquidDocsConfig:
    ui: LiquidDocsUI = ctx.obj["ui"]
    try:
        config = load_config(ctx.obj["config_path"], **overrides)
    except (FileNotFoundError, ValueError) as e:
        ui.print_error(f"Invalid configuration: {e}")
        sys.exit(1)
    _apply_config(ctx, config)
    return config


def _flag_overrides(ctx: click.Context, **flags: bool) -> dict[str, bool]:
    # Only flags given on the command line override the config file
    return {
        name: value
        for name, value in flags.items()
        if ctx.get_parameter_source(name) == click.core.ParameterSource.COMMANDLINE
    }


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),  # type: ignore[type-var]
    help="Path to configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Quiet mode")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    verbose: bool,
    quiet: bool,
) -> None:
    """liquiddocs - check and extract {% doc %} tags in Liquid templates.

    Finds the documentation blocks of Shopify Liquid snippets and blocks,
    validates their @param annotations and reports templates without docs.
    """
    # Setup logging based on verbose/quiet flags
    if quiet:
        log_level = logging.ERROR
    elif verbose:
        log_level = logging.DEBUG
    else:
        log_level = logging.INFO

    configure_logging(log_level)

    logger.debug("logging_configured", level=logging.getLevelName(log_level))

    # Initialize UI
    ui = LiquidDocsUI(verbose=verbose, quiet=quiet)
    set_ui(ui)

    # Store in context
    ctx.ensure_object(dict)
    ctx.obj["ui"] = ui
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


@cli.command()
@click.argument("targets", nargs=-1)
@click.option(
    "--warn",
    "-w",
    is_flag=True,
    help="Report templates without doc tags as warnings instead of errors",
)
@click.option(
    "--eparse",
    "-e",
    "error_on_parse",
    is_flag=True,
    help="Fail on parsing issues (unknown type, missing parameter name, ...)",
)
@click.option(
    "--ci",
    "-c",
    is_flag=True,
    help="Emit GCC diagnostics on stderr and GitHub annotations on stdout",
)
@click.pass_context
def check(
    ctx: click.Context,
    targets: tuple[str, ...],
    warn: bool,
    error_on_parse: bool,
    ci: bool,
) -> None:
    """Check Liquid templates for {% doc %} tags.

    TARGETS can be files, directories or glob patterns (quote them to keep
    the shell from expanding them). Defaults to *.liquid in the current
    directory.

    Examples:
        liquiddocs check snippets/
        liquiddocs check "{blocks,snippets}/*.liquid"
        liquiddocs check --ci --warn "**/*.liquid"
    """
    ui: LiquidDocsUI = ctx.obj["ui"]
    config_path: Path | None = ctx.obj["config_path"]

    overrides = _flag_overrides(ctx, warn=warn, error_on_parse=error_on_parse, ci=ci)
    logger.debug(
        "loading_configuration",
        config_path=str(config_path) if config_path else "default",
        overrides=list(overrides.keys()),
    )
    config = _load_config(ctx, **overrides)

    if ctx.obj["verbose"]:
        ui.display_config(config.model_dump())

    file_ops = FileOperations(max_buffer_size=config.max_buffer_size)
    files = file_ops.collect_files(
        targets or ("*.liquid",),
        config.file_pattern,
        config.exclude_patterns,
    )

    if not config.ci:
        ui.print_info("Checking files...")

    start_time = time.time()
    batch_parser = DocBatchParser(config.allowed_types())
    missing_severity = "warning" if config.warn else "error"

    file_count = 0
    documented = 0
    total_blocks = 0
    issues: list[tuple[str, Diagnostic]] = []
    unreadable: list[Path] = []

    def on_read_error(path: Path, error: Exception) -> None:
        unreadable.append(path)
        ui.print_error(f"Failed to read {path}: {error}")

    for batch in file_ops.batch_files(files, on_error=on_read_error):
        for result in batch_parser.parse_files(batch):
            file_count += 1

            if result.has_docs:
                documented += 1
                total_blocks += len(result.docs.success) if result.docs else 0
                if config.ci:
                    for diagnostic in result.errors:
                        ui.print_ci_diagnostic(
                            result.path,
                            diagnostic.line,
                            diagnostic.column,
                            "warning",
                            diagnostic.message,
                        )
                else:
                    ui.print_file_status(result.path, True)
                issues.extend((result.path, diagnostic) for diagnostic in result.errors)
            elif config.ci:
                ui.print_ci_diagnostic(result.path, 1, 1, missing_severity, "Missing doc")
            else:
                ui.print_file_status(result.path, False)

    missing = file_count - documented
    duration = time.time() - start_time

    logger.info(
        "check_complete",
        total_files=file_count,
        missing=missing,
        parse_issues=len(issues),
        unreadable=len(unreadable),
        duration_seconds=round(duration, 2),
    )

    if not config.ci:
        ui.print_parse_issues(issues, as_errors=config.error_on_parse)
        ui.print_summary(file_count, missing, warn=config.warn)

        if ui.verbose:
            ui.display_statistics(
                total_files=file_count,
                documented_files=documented,
                total_blocks=total_blocks,
                error_count=len(issues),
                duration_seconds=duration,
            )

    failed = (
        (issues and config.error_on_parse)
        or (missing and not config.warn)
        or unreadable
    )
    sys.exit(1 if failed else 0)


@cli.command()
@click.argument("targets", nargs=-1, required=True)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "text"], case_sensitive=False),
    default="json",
    help="Output format",
)
@click.pass_context
def parse(
    ctx: click.Context,
    targets: tuple[str, ...],
    output_format: str,
) -> None:
    """Parse the doc blocks of Liquid templates and print them.

    TARGETS can be files, directories or glob patterns. Use "-" to read a
    single template from stdin.

    Examples:
        liquiddocs parse snippets/card.liquid
        liquiddocs parse --format text "snippets/*.liquid"
        cat card.liquid | liquiddocs parse -
    """
    ui: LiquidDocsUI = ctx.obj["ui"]
    config = _load_config(ctx)

    batch_parser = DocBatchParser(config.allowed_types())
    results: list[FileResult] = []

    if targets == ("-",):
        content = click.get_text_stream("stdin").read()
        results = batch_parser.parse_files([FileInput(path="<stdin>", content=content)])
    else:
        file_ops = FileOperations(max_buffer_size=config.max_buffer_size)
        files = file_ops.collect_files(targets, config.file_pattern, config.exclude_patterns)
        if not files:
            ui.print_warning("No liquid files found")
            sys.exit(0)

        for batch in file_ops.batch_files(files):
            results.extend(batch_parser.parse_files(batch))

    logger.debug("parse_complete", total_files=len(results))

    if output_format.lower() == "json":
        payload = _RESULTS_ADAPTER.dump_json(results, by_alias=True, indent=2)
        click.echo(payload.decode("utf-8"))
    else:
        for result in results:
            ui.display_doc_blocks(result)


@cli.command()
@click.argument("output", type=click.Path(path_type=Path), default="liquiddocs.toml")  # type: ignore[type-var]
def init(output: Path) -> None:
    """Initialize a new liquiddocs configuration file.

    Creates a default configuration file with common settings.
    """
    ui = get_ui()

    try:
        create_default_config(output)
        ui.print_success(f"Created configuration file: {output}")
        ui.print_info("Edit the file to customize settings for your project")

    except FileExistsError:
        ui.print_error(f"Configuration file already exists: {output}")
        sys.exit(1)

    except OSError as e:
        ui.print_error(f"Failed to create configuration: {e}")
        sys.exit(1)


@cli.command()
def version() -> None:
    """Show version information."""
    click.echo(f"liquiddocs v{__version__}")


def main() -> None:
    """Entry point for the CLI."""
    try:
        cli(obj={})
    except KeyboardInterrupt:
        ui = get_ui()
        ui.print_warning("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        ui = get_ui()
        ui.print_error(f"Unexpected error: {e}")
        # Only show full traceback in verbose mode
        if "--verbose" in sys.argv or "-v" in sys.argv:
            logger.exception("cli_error")
        sys.exit(1)


if __name__ == "__main__":
    main()
