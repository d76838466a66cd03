"""
WooWoo CLI Application.

Main entry point for the WooWoo command-line interface. Parses WooWoo
documents and shows the result as a JSON AST, a console tree or a
navigation outline.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..core.ast import DocumentRoot
from ..core.navigation import build_outline
from ..core.parser import Grammar, Parser
from ..core.rendering import render_tree
from ..exceptions.config_exceptions import ConfigurationError
from ..exceptions.parser_exceptions import ParserError
from ..utils.config import ConfigManager
from ..utils.logging_config import LoggingManager, LogLevel

# Initialize console for rich output
console = Console()
# Logs and error messages go to stderr so that JSON output stays parseable
log_console = Console(stderr=True)

# Create main Typer app
app = typer.Typer(
    name="woowoo",
    help="Parser for WooWoo structured documents",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

config_app = typer.Typer(
    name="config",
    help="Configuration commands",
    rich_markup_mode="rich",
)
app.add_typer(config_app, name="config", help="Configuration commands")

# Global state
_config_manager: Optional[ConfigManager] = None
_logger: Optional[logging.Logger] = None


def create_console_handler(verbose: bool = False) -> RichHandler:
    """Create the rich handler used for console logging."""
    rich_handler = RichHandler(
        console=log_console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    rich_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return rich_handler


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Set up console logging before the configuration is known.

    Args:
        verbose: Enable verbose (DEBUG) logging

    Returns:
        Configured logger instance
    """
    logging.getLogger().handlers.clear()

    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[create_console_handler(verbose)],
    )

    logger = logging.getLogger("woowoo_backend")
    logger.setLevel(log_level)
    return logger


def configure_logging_from_config(config_manager: ConfigManager, verbose: bool = False) -> None:
    """
    Reconfigure logging from the ``logging`` configuration section.

    ``--verbose`` takes precedence over the configured level.
    """
    overrides = {"log_level": LogLevel.DEBUG} if verbose else {}
    logging_manager = LoggingManager.from_config(config_manager.get("logging", {}), **overrides)
    logging_manager.setup_root_logger(console_handler=create_console_handler(verbose))
    logging.getLogger("woowoo_backend").setLevel(logging_manager.log_level.value)


def get_config_manager(config_path: Optional[str] = None) -> ConfigManager:
    """
    Get or create the global configuration manager.

    Args:
        config_path: Optional path to configuration file

    Returns:
        ConfigManager instance with its configuration loaded

    Raises:
        ConfigurationError: If configuration loading fails
    """
    global _config_manager

    if _config_manager is None or config_path:
        _config_manager = ConfigManager(config_file=config_path, load_env=True)
        _config_manager.load_config()

    return _config_manager


def get_logger() -> logging.Logger:
    """Get the global logger instance."""
    global _logger
    if _logger is None:
        _logger = setup_logging()
    return _logger


def _prepare(ctx: typer.Context) -> ConfigManager:
    """Load the configuration named on the command line and apply its logging settings."""
    options = ctx.find_root().obj or {}
    config_manager = get_config_manager(options.get("config_path"))
    configure_logging_from_config(config_manager, options.get("verbose", False))
    return config_manager


def _parse_file(config_manager: ConfigManager, file: Path) -> DocumentRoot:
    grammar = Grammar.from_config(config_manager.get_grammar_config())
    # utf-8-sig drops a byte order mark so the first line can still be a header
    source = file.read_text(encoding="utf-8-sig")
    root = Parser(grammar).parse(source)
    get_logger().info(f"Parsed {file} into {len(root.children)} top-level nodes")
    return root


# Global callback for common options
@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[str] = typer.Option(
        None,
        "--config-path",
        "-c",
        help="Path to configuration file (default: woowoo.config.json)",
        metavar="PATH",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging (DEBUG level)",
    ),
) -> None:
    """
    WooWoo CLI - parse and inspect WooWoo documents.

    Common workflows:
    • Dump the AST: woowoo parse notes.woo
    • Inspect the structure: woowoo tree notes.woo
    • List parts and objects: woowoo outline notes.woo
    """
    global _logger, _config_manager
    _logger = setup_logging(verbose)
    _config_manager = None

    ctx.obj = {
        "config_path": config_path,
        "verbose": verbose,
    }


@app.command()
def parse(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="WooWoo document to parse"),
    indent: int = typer.Option(2, "--indent", "-i", min=0, help="JSON indentation"),
) -> None:
    """Parse a document and print its AST as JSON."""
    try:
        config_manager = _prepare(ctx)
        root = _parse_file(config_manager, file)
        # Metadata values may be dates or other YAML types without a JSON form
        output = json.dumps(root.to_dict(), indent=indent or None, ensure_ascii=False, default=str)
    except Exception as e:
        handle_cli_error(e)
        raise typer.Exit(1)

    typer.echo(output)


@app.command()
def tree(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="WooWoo document to show"),
) -> None:
    """Show the AST of a document as a tree."""
    try:
        config_manager = _prepare(ctx)
        root = _parse_file(config_manager, file)
        preview_width = config_manager.get("cli.tree_preview_width", 60)
        console.print(render_tree(root, preview_width=preview_width))
    except Exception as e:
        handle_cli_error(e)
        raise typer.Exit(1)


@app.command()
def outline(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="WooWoo document to outline"),
    max_depth: Optional[int] = typer.Option(
        None, "--max-depth", "-d", min=1, help="Deepest nesting level to list"
    ),
) -> None:
    """List the document parts and objects of a document."""
    try:
        config_manager = _prepare(ctx)
        root = _parse_file(config_manager, file)
        entries = build_outline(root, max_depth=max_depth)
    except Exception as e:
        handle_cli_error(e)
        raise typer.Exit(1)

    if not entries:
        rprint("[yellow]No document parts or objects found[/yellow]")
        return

    table = Table(title=f"Outline of {file.name}")
    table.add_column("Line", justify="right", style="dim")
    table.add_column("Kind", style="bold")
    table.add_column("Variant", style="cyan")
    table.add_column("Title", style="green")
    table.add_column("Label", style="yellow")

    for entry in entries:
        indent_prefix = "  " * (entry.depth - 1)
        table.add_row(
            str(entry.line),
            entry.kind,
            entry.variant,
            escape(f"{indent_prefix}{entry.title}"),
            escape(entry.label or ""),
        )

    console.print(table)


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Show the effective configuration."""
    try:
        config_manager = _prepare(ctx)
        config = config_manager.config
    except Exception as e:
        handle_cli_error(e)
        raise typer.Exit(1)

    console.print_json(json.dumps(config))


def handle_cli_error(error: Exception) -> None:
    """
    Handle CLI errors with user-friendly messages.

    Args:
        error: The exception that occurred
    """
    logger = get_logger()

    if isinstance(error, ConfigurationError):
        log_console.print(f"[red]Configuration Error:[/red] {escape(str(error))}")
        logger.debug("Configuration error details", exc_info=True)
    elif isinstance(error, ParserError):
        log_console.print(f"[red]Parser Error:[/red] {escape(str(error))}")
        logger.debug("Parser error details", exc_info=True)
    elif isinstance(error, FileNotFoundError):
        log_console.print(f"[red]File Not Found:[/red] {escape(str(error))}")
        logger.debug("File not found details", exc_info=True)
    elif isinstance(error, PermissionError):
        log_console.print(f"[red]Permission Denied:[/red] {escape(str(error))}")
        logger.debug("Permission error details", exc_info=True)
    else:
        log_console.print(f"[red]Error:[/red] {escape(str(error))}")
        logger.debug("Unexpected error details", exc_info=True)


def cli_main() -> None:
    """
    Main CLI entry point with error handling.

    This function is called by the console script entry point.
    """
    try:
        app()
    except KeyboardInterrupt:
        rprint("\n[yellow]Operation cancelled by user[/yellow]")
        raise typer.Exit(130)


if __name__ == "__main__":
    cli_main()
