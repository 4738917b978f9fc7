"""
Console and JSON helpers for the hidden-heaven tool.

Includes:
- Run banner and per-package status lines
- Run summary table
- Reading/writing the settings and managed-record JSON files
"""

import json
from pathlib import Path
from typing import Any
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

# Global console instance
console = Console()

def print_header(title: str, subtitle: str = ""):
    """Print the run banner (mode, link folder name, package count)."""
    console.print(Panel(f"[bold blue]{title}[/bold blue]\n[italic]{subtitle}[/italic]", expand=False))

def print_report_table(report) -> None:
    """Print one row per package of a RunReport: status, linked items, warnings."""
    table = Table(title=f"{report.mode.value.capitalize()} Summary")
    table.add_column("Package", style="cyan")
    table.add_column("Status")
    table.add_column("Linked", style="magenta", justify="right")
    table.add_column("Warnings", style="yellow", justify="right")
    table.add_column("Changed")

    for result in report.results:
        status = "[green]ok[/green]" if result.ok else "[red]failed[/red]"
        table.add_row(
            str(result.root),
            status,
            str(len(result.linked)),
            str(len(result.warnings)),
            "yes" if result.changed else "no",
        )

    console.print(table)

# Package status lines
def print_error(msg: str):
    console.print(f"[bold red]ERROR:[/bold red] {msg}")

def print_warning(msg: str):
    console.print(f"[bold yellow]WARNING:[/bold yellow] {msg}")

def print_success(msg: str):
    console.print(f"[bold green]SUCCESS:[/bold green] {msg}")


def save_json(data: Any, path: Path, indent: int = 4) -> None:
    """
    Write an editor settings document or managed record.
    
    Output matches what VS Code writes for settings.json: UTF-8, non-ASCII
    paths kept as-is, 4-space indent and a trailing newline.
    
    Args:
        data: JSON-serializable document (key order is kept).
        path: Target file; its directory must exist.
        indent: Indentation width.
    """
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=indent, ensure_ascii=False)
        f.write('\n')


def load_json(path: Path) -> Any:
    """
    Read a settings document, managed record or policy file.
    
    Raises:
        json.JSONDecodeError: If the file is not valid JSON; callers turn
            this into MalformedSettings or InvalidArgument.
    """
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)
