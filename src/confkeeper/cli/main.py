#!/usr/bin/env python3
"""
CONFKEEPER CLI
--------------
Command line access to comment-preserving configuration files:
inspect headers and values, edit headers, and normalize files through a
full load/save cycle.

Author: ConfKeeper Team
Date: 2026-10-19
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.panel import Panel

from confkeeper.cli.formatter import KeeperFormatter
from confkeeper.core.config_file import FileConfiguration
from confkeeper.core.diagnostics import LoggingSink, RecordingSink

# Global console for consistent styling across the application
console = Console()
logger = logging.getLogger("confkeeper.cli")

VERSION = "1.0.0"


class ConfKeeperCLI:
    """
    CLI wrapper that translates user commands into FileConfiguration actions.
    """

    def __init__(self):
        """Initializes the CLI and sets up the argument parser."""
        self.parser = argparse.ArgumentParser(
            prog="confkeeper",
            description="ConfKeeper - comment-preserving YAML configuration files",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self.formatter = KeeperFormatter()
        self._setup_args()

    def _setup_args(self):
        """Configures the command-line flags and subcommands."""
        self.parser.add_argument("-v", "--version", action="version", version=f"confkeeper v{VERSION}")
        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        # 'show' subcommand - Read-only view
        show_parser = subparsers.add_parser("show", help="Show keys, values and headers of a file")
        show_parser.add_argument("path", help="Path to a configuration file")

        # 'fmt' subcommand - Load and re-save
        fmt_parser = subparsers.add_parser("fmt", help="Normalize files through a load/save cycle")
        fmt_parser.add_argument("path", help="Path to a configuration file or directory")
        fmt_parser.add_argument("--indent", type=int, default=2, help="Indentation of nested keys (default: 2)")
        fmt_parser.add_argument("--ext", default=".yml", help="File extension filter for directories (default: .yml)")
        fmt_parser.add_argument("--dry-run", action="store_true", help="Preview results without writing")
        fmt_parser.add_argument("--diff", action="store_true", help="Display a unified diff per file")

        # 'header' subcommand - Read or edit one header
        header_parser = subparsers.add_parser("header", help="Read or edit a header")
        header_parser.add_argument("path", help="Path to a configuration file")
        header_parser.add_argument("key", nargs="?", default="", help="Dotted key path (empty: document header)")
        group = header_parser.add_mutually_exclusive_group()
        group.add_argument("--set", dest="text", help="New header text; '\\n' starts a new line")
        group.add_argument("--remove", action="store_true", help="Remove the header")

    def _open(self, file_path: Path, indent: int = 2):
        sink = RecordingSink(forward=LoggingSink("confkeeper.file"))
        config = FileConfiguration(file_path, indent=indent, sink=sink)
        config.load()
        return config, sink

    def _run_show(self, args: argparse.Namespace) -> int:
        file_path = Path(args.path)
        if not file_path.is_file():
            console.print(f"[bold red]Error:[/bold red] File '{args.path}' not found.")
            return 1
        config, sink = self._open(file_path)
        if sink.messages(logging.ERROR):
            console.print(f"[bold red]Error:[/bold red] Could not load '{args.path}'.")
            return 1
        self.formatter.show_document(config, str(file_path))
        return 0

    def _run_header(self, args: argparse.Namespace) -> int:
        file_path = Path(args.path)
        config, sink = self._open(file_path)
        if sink.messages(logging.ERROR):
            console.print(f"[bold red]Error:[/bold red] Could not load '{args.path}'.")
            return 1

        if args.text is None and not args.remove:
            header = config.get_header(args.key)
            if header is None:
                console.print(f"[dim]No header for '{args.key or '<document>'}'.[/dim]")
            else:
                console.print(Panel(header, title=args.key or "Document Header", border_style="cyan"))
            return 0

        if args.key and not config.contains(args.key):
            console.print(f"[yellow]⚠ Key '{args.key}' does not exist; the header is kept but not written.[/yellow]")

        if args.remove:
            config.remove_header(args.key)
        else:
            config.set_header(args.key, args.text.replace("\\n", "\n"))
        config.save()
        return 1 if sink.messages(logging.ERROR) else 0

    def _format_file(self, file_path: Path, args: argparse.Namespace) -> Dict[str, Any]:
        """Runs one file through load/save and reports what happened."""
        original = file_path.read_text(encoding="utf-8-sig")
        config, sink = self._open(file_path, indent=args.indent)
        if sink.messages(logging.ERROR):
            return {"file_path": str(file_path), "status": "LOAD_ERROR", "success": False}

        normalized = config.to_text()
        if args.diff:
            self.formatter.display_diff(original, normalized, str(file_path))
        if normalized == original:
            return {"file_path": str(file_path), "status": "UNCHANGED", "success": True}
        if args.dry_run:
            return {"file_path": str(file_path), "status": "PREVIEW", "success": True}

        config.save()
        if sink.messages(logging.ERROR):
            return {"file_path": str(file_path), "status": "SAVE_ERROR", "success": False}
        return {"file_path": str(file_path), "status": "WRITTEN", "success": True}

    def _run_fmt(self, args: argparse.Namespace) -> int:
        input_path = Path(args.path)
        if not input_path.exists():
            console.print(f"[bold red]Error:[/bold red] Path '{args.path}' not found.")
            return 1

        if input_path.is_file():
            target_files = [input_path]
        else:
            target_files = sorted(
                f for f in input_path.rglob(f"*{args.ext}")
                if f.is_file() and not f.is_symlink()
            )

        if not target_files:
            console.print("\n[bold yellow]⚠️  No configuration files found.[/bold yellow]")
            return 0

        reports: List[Dict[str, Any]] = []
        for file_path in target_files:
            try:
                reports.append(self._format_file(file_path, args))
            except OSError as e:
                logger.error(f"Could not read {file_path}: {e}")
                reports.append({"file_path": str(file_path), "status": "READ_ERROR", "success": False})

        self.formatter.print_final_table(reports)
        return 0 if all(r["success"] for r in reports) else 1

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point."""
        args = self.parser.parse_args(argv)
        if args.command == "show":
            return self._run_show(args)
        if args.command == "fmt":
            return self._run_fmt(args)
        if args.command == "header":
            return self._run_header(args)
        self.parser.print_help()
        return 0


def main():
    """Application entry point with interrupt handling."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    try:
        sys.exit(ConfKeeperCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
