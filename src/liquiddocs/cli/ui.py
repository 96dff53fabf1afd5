"""Rich UI components for the CLI.

This module provides terminal output for the liquiddocs commands using the
Rich library: per-file check results, diagnostics, summaries, and trees of
parsed doc blocks.
"""

from __future__ import annotations

from typing import Any, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from liquiddocs.core.models import Diagnostic, DocBlock, FileResult


class LiquidDocsUI:
    """Rich terminal UI for liquiddocs.

    Regular output goes to ``console`` (stdout); problems go to
    ``err_console`` (stderr) so they can be separated in CI logs.

    Attributes:
        console: Rich console for standard output
        err_console: Rich console for error output
        verbose: Enable verbose output
        quiet: Suppress non-error output
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
        verbose: bool = False,
        quiet: bool = False,
    ) -> None:
        """Initialize the UI.

        Args:
            console: Rich console for stdout (creates new one if not provided)
            err_console: Rich console for stderr (creates new one if not provided)
            verbose: Enable verbose output
            quiet: Suppress non-error output
        """
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)
        self.verbose = verbose
        self.quiet = quiet

    def print_info(self, message: str, **kwargs: Any) -> None:
        """Print an info message.

        Args:
            message: Message to print
            **kwargs: Additional style arguments
        """
        if not self.quiet:
            self.console.print(f"[blue]ℹ[/blue] {escape(message)}", **kwargs)

    def print_success(self, message: str, **kwargs: Any) -> None:
        """Print a success message.

        Args:
            message: Message to print
            **kwargs: Additional style arguments
        """
        if not self.quiet:
            self.console.print(f"[green]✓[/green] {escape(message)}", **kwargs)

    def print_warning(self, message: str, **kwargs: Any) -> None:
        """Print a warning message.

        Args:
            message: Message to print
            **kwargs: Additional style arguments
        """
        if not self.quiet:
            self.err_console.print(f"[yellow]⚠[/yellow] {escape(message)}", **kwargs)

    def print_error(self, message: str, **kwargs: Any) -> None:
        """Print an error message.

        Args:
            message: Message to print
            **kwargs: Additional style arguments
        """
        self.err_console.print(f"[red]✗[/red] {escape(message)}", **kwargs)

    def print_file_status(self, path: str, has_docs: bool) -> None:
        """Print the check result of one file.

        Args:
            path: File path
            has_docs: Whether the file has at least one doc block
        """
        if has_docs:
            if not self.quiet:
                self.console.print(Text(f"✔️ {path}"), soft_wrap=True)
        else:
            self.err_console.print(Text(f"✖️ {path}", style="red"), soft_wrap=True)

    def print_parse_issues(
        self, issues: list[tuple[str, Diagnostic]], as_errors: bool = False
    ) -> None:
        """Print parse diagnostics collected during a check.

        Args:
            issues: ``(path, diagnostic)`` pairs
            as_errors: Whether the issues fail the check
        """
        if not issues:
            return

        heading = "Parsing errors:" if as_errors else "Parsing warnings:"
        self.err_console.print(
            Text(f"\n{heading}", style="bold red" if as_errors else "bold yellow")
        )
        for path, diagnostic in issues:
            line = Text("  ")
            line.append(path, style="red")
            line.append(f": {diagnostic.message}")
            self.err_console.print(line, soft_wrap=True)

    def print_ci_diagnostic(
        self, path: str, line: int, column: int, severity: str, message: str
    ) -> None:
        """Print a diagnostic in GCC and GitHub annotation formats.

        The GCC line goes to stderr, the annotation to stdout.

        Args:
            path: File path
            line: 1-indexed line
            column: 1-indexed column
            severity: ``warning`` or ``error``
            message: One-line message
        """
        self.err_console.print(
            f"{path}:{line}:{column}: {severity}: {message}",
            markup=False,
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )
        self.console.print(
            f"::{severity} file={path},line={line},col={column}::{message}",
            markup=False,
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )

    def print_summary(self, file_count: int, missing_count: int, warn: bool = False) -> None:
        """Print the final line of a check.

        Args:
            file_count: Number of files checked
            missing_count: Number of files without doc tags
            warn: Whether missing doc tags are only warnings
        """
        if missing_count:
            plural = "s" if missing_count > 1 else ""
            message = f"\nFound {missing_count} liquid file{plural} without doc tags"
            if warn:
                if not self.quiet:
                    self.err_console.print(Text(message, style="yellow"))
            else:
                self.err_console.print(Text(message, style="red"))
        elif not self.quiet:
            self.console.print(
                Text(f"\n✨ All liquid files ({file_count}) have doc tags", style="green")
            )

    def display_statistics(
        self,
        total_files: int,
        documented_files: int,
        total_blocks: int,
        error_count: int,
        duration_seconds: float,
    ) -> None:
        """Display overall statistics of a check.

        Args:
            total_files: Number of files processed
            documented_files: Files with at least one doc block
            total_blocks: Doc blocks parsed successfully
            error_count: Doc blocks that failed to parse
            duration_seconds: Total duration in seconds
        """
        if self.quiet:
            return

        table = Table(title="[bold cyan]Check Statistics[/bold cyan]", box=box.ROUNDED)
        table.add_column("Metric", style="cyan", no_wrap=True)
        table.add_column("Value", style="magenta", justify="right")

        table.add_row("Files Checked", str(total_files))
        table.add_row("With Doc Tags", f"[green]{documented_files}[/green]")
        table.add_row(
            "Without Doc Tags",
            f"[yellow]{total_files - documented_files}[/yellow]",
        )
        table.add_row("Doc Blocks", str(total_blocks))
        table.add_row("Parse Issues", f"[red]{error_count}[/red]" if error_count > 0 else "0")
        table.add_row("Duration", f"{duration_seconds:.2f}s")

        self.console.print(table)

    def display_doc_blocks(self, result: FileResult) -> None:
        """Display the parsed doc blocks of a file as a tree.

        Args:
            result: Parse result of one file
        """
        tree = Tree(f"[bold cyan]{escape(result.path)}[/bold cyan]", guide_style="dim")

        if result.docs is None:
            tree.add("[red]no doc block[/red]")
            self.console.print(tree)
            return

        for idx, block in enumerate(result.docs.success, 1):
            self._add_block(tree.add(f"[bold]Block {idx}[/bold]"), block)

        for diagnostic in result.docs.errors:
            tree.add(f"[red]✗ {escape(diagnostic.message)}[/red]")

        self.console.print(tree)

    def _add_block(self, node: Tree, block: DocBlock) -> None:
        if block.description:
            node.add(Text(block.description))

        if block.param:
            params = node.add("[bold]Parameters[/bold]")
            for param in block.param:
                label = Text(f"[{param.name}]" if param.optional else param.name, style="green")
                if param.type_ is not None:
                    label.append(f" {{{param.type_}}}", style="magenta")
                if param.description:
                    label.append(f" - {param.description}")
                params.add(label)

        for example in block.example:
            examples = node.add("[bold]Example[/bold]")
            examples.add(
                Syntax(example, "liquid", theme="monokai", line_numbers=False, word_wrap=True)
            )

    def display_config(self, config: dict[str, Any]) -> None:
        """Display configuration as a table.

        Args:
            config: Configuration dictionary
        """
        if self.quiet:
            return

        table = Table(title="[bold cyan]Configuration[/bold cyan]", box=box.ROUNDED)
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="magenta")

        for key, value in sorted(config.items()):
            table.add_row(key, escape(str(value)))

        self.console.print(table)


# Global UI instance
_ui: Optional[LiquidDocsUI] = None


def get_ui(
    console: Optional[Console] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> LiquidDocsUI:
    """Get or create the global UI instance.

    Args:
        console: Rich console
        verbose: Enable verbose output
        quiet: Suppress non-error output

    Returns:
        LiquidDocsUI instance
    """
    global _ui
    if _ui is None:
        _ui = LiquidDocsUI(console=console, verbose=verbose, quiet=quiet)
    return _ui


def set_ui(ui: LiquidDocsUI) -> None:
    """Replace the global UI instance."""
    global _ui
    _ui = ui
