# src/confkeeper/cli/formatter.py
import difflib
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from confkeeper.core.node import ConfigurationNode

# Initialize the Rich console for high-quality terminal output
console = Console()

class KeeperFormatter:
    """
    KeeperFormatter: renders configuration documents, diffs and run reports.
    """

    def display_diff(self, original_text: str, saved_text: str, file_name: str) -> bool:
        """
        Renders a colorized unified diff between the file on disk and
        the text a save would produce. Returns True if there was a difference.
        """
        diff_list = list(difflib.unified_diff(
            original_text.splitlines(),
            saved_text.splitlines(),
            fromfile=f"Original: {file_name}",
            tofile="Normalized",
            lineterm=""
        ))

        if not diff_list:
            console.print(f"[dim]ℹ No changes needed for {file_name}.[/dim]")
            return False

        syntax = Syntax("\n".join(diff_list), "diff", theme="monokai", line_numbers=True)
        console.print(Panel(syntax, title=f"Normalized: {file_name}", border_style="green"))
        return True

    def show_document(self, config: ConfigurationNode, title: str):
        """One row per key path: its header (if any) and its value."""
        document_header = config.get_header()
        if document_header:
            console.print(Panel(document_header, title="Document Header", border_style="cyan"))

        table = Table(title=title, show_lines=True, header_style="bold magenta")
        table.add_column("Path", style="cyan")
        table.add_column("Header", style="dim")
        table.add_column("Value")

        for path in config.get_keys(deep=True):
            value = config.get(path)
            shown = "[dim]<node>[/dim]" if isinstance(value, dict) else repr(value)
            table.add_row(path, config.get_header(path) or "", shown)

        console.print(table)

        orphans = [p for p in config.get_headers() if p and not config.contains(p)]
        if orphans:
            console.print(f"[yellow]⚠ Headers without a key (not written on save): {', '.join(orphans)}[/yellow]")

    def print_final_table(self, reports: list):
        """
        Builds the summary table shown at the end of a fmt run.
        """
        table = Table(title="ConfKeeper Report", show_header=True, header_style="bold magenta")
        table.add_column("File Path", style="dim")
        table.add_column("Status")
        table.add_column("Result", justify="center")

        for r in reports:
            result_icon = "✅" if r.get("success") else "❌"
            table.add_row(
                str(r.get("file_path")),
                r.get("status"),
                result_icon
            )

        console.print(table)
