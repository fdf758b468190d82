"""Shared utility functions for shopgen.

Provides Rich-based console reporting and a helper that writes a generated
file mapping into a directory.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from shopgen.models import FileMapping

console = Console()


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def write_files(files: FileMapping, output_dir: str | Path) -> list[Path]:
    """Write every entry of *files* below *output_dir*.

    Parent directories are created automatically.  Paths that are absolute
    or climb out of *output_dir* are rejected.

    Returns:
        The written paths, in mapping order.

    Raises:
        ValueError: If a path escapes the output directory.
    """
    root = Path(output_dir).resolve()
    written: list[Path] = []
    for rel_path, content in files.items():
        target = (root / PurePosixPath(rel_path)).resolve()
        if PurePosixPath(rel_path).is_absolute() or not target.is_relative_to(root):
            raise ValueError(f"Refusing to write outside {root}: {rel_path}")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        written.append(target)
    return written


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def build_file_tree(files: FileMapping, label: str = "shopify-app") -> Tree:
    """Render the mapping's paths as a Rich tree, directories first."""
    tree = Tree(f"[bold]{label}[/bold]")
    branches: dict[tuple[str, ...], Tree] = {(): tree}
    for rel_path in sorted(files, key=lambda p: (p.count("/") == 0, p)):
        parts = PurePosixPath(rel_path).parts
        for depth in range(1, len(parts)):
            key = parts[:depth]
            if key not in branches:
                branches[key] = branches[parts[:depth - 1]].add(f"[bold blue]{parts[depth - 1]}/[/bold blue]")
        branches[parts[:-1]].add(parts[-1])
    return tree


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
