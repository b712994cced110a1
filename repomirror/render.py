"""
Rendering functions for repomirror output.

This module handles all pretty-printing and table formatting.
Commands produce records, this module makes them human-readable.
"""

from rich.table import Table
from rich.console import Console
from rich import box
from typing import List, Dict, Any, Optional

console = Console()

ACTION_STYLES = {
    'cloned': ('Cloned', 'green'),
    'reset': ('Reset to remote', 'yellow'),
    'unchanged': ('Up to date', 'dim'),
}


def render_files_table(files: List[Dict[str, Any]], title: Optional[str] = None) -> None:
    """
    Render file records (from ls/hash) as a table.

    Columns are picked from what the records carry, so the same
    function serves plain listings and listings with sha/size.
    """
    if not files:
        console.print("[yellow]No files found.[/yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta"
    )
    table.add_column("Name", style="cyan")
    table.add_column("Path", style="dim")
    has_sha = any('sha' in f for f in files)
    has_size = any('size_mib' in f for f in files)
    if has_sha:
        table.add_column("SHA", style="yellow")
    if has_size:
        table.add_column("Size (MiB)", justify="right")

    for f in files:
        row = [f.get('name', ''), f.get('local_path', f.get('path', ''))]
        if has_sha:
            row.append(f.get('sha') or '')
        if has_size:
            size = f.get('size_mib')
            row.append(f"{size:.3f}" if isinstance(size, float) else '')
        table.add_row(*row)

    console.print(table)


def render_sync_result(result: Dict[str, Any]) -> None:
    """Print a one-line summary of a sync."""
    label, color = ACTION_STYLES.get(result.get('action'), (result.get('action', '?'), 'white'))
    console.print(f"[{color}]{label}[/{color}] {result.get('path', '')}")
