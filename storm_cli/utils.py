"""Shared helpers for the ST🌀RM Stack CLI.

File writers used by the scaffolders (plain, append-only and temp-file +
rename) and Rich console output for pipeline progress.  The writers are
synchronous; callers run them through ``asyncio.to_thread``.
"""

from __future__ import annotations

import os
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Writers
# ---------------------------------------------------------------------------


def write_text(path: Path, content: str) -> None:
    """Replace *path* with *content*, creating missing parent folders."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def append_text(path: Path, content: str) -> None:
    """Append *content* to *path*, creating the file (not its parents) if needed."""
    with path.open("a", encoding="utf-8") as fh:
        fh.write(content)


def atomic_write_text(path: Path, content: str) -> None:
    """Write *path* via a PID-suffixed temp file and ``os.replace``.

    A reader sees either the previous contents or the new ones, never a
    truncated file.  Not crash-safe: there is no fsync.
    """
    tmp = path.with_suffix(path.suffix + f".tmp.{os.getpid()}")
    try:
        tmp.write_text(content, encoding="utf-8")
        os.replace(tmp, path)
    finally:
        if tmp.exists():
            tmp.unlink()


def format_duration(seconds: float) -> str:
    """``3.7`` -> ``"3.7s"``, ``65.2`` -> ``"1m 5s"``, ``3661`` -> ``"1h 1m 1s"``."""
    if seconds < 0:
        return "0.0s"
    hours, rest = divmod(seconds, 3600)
    minutes, rest = divmod(rest, 60)
    if not hours and not minutes:
        return f"{rest:.1f}s"
    parts = [f"{int(hours)}h"] if hours else []
    if minutes:
        parts.append(f"{int(minutes)}m")
    parts.append(f"{int(rest)}s")
    return " ".join(parts)


# ---------------------------------------------------------------------------
# Console output
# ---------------------------------------------------------------------------


def _styled(style: str, message: str) -> str:
    return f"[{style}]{escape(message)}[/{style}]"


def print_success(message: str) -> None:
    console.print(_styled("bold green", message))


def print_error(message: str) -> None:
    console.print(_styled("bold red", message))


def print_warning(message: str) -> None:
    console.print(_styled("bold yellow", message))


def _process_line(marker: str, color: str, message: str, detail: str) -> str:
    line = f"  [{color}]{marker}[/{color}] {escape(message)}"
    if detail:
        line += f" [dim]{escape(detail)}[/dim]"
    return line


def print_process_info(message: str, detail: str = "", *, verbose: bool = True) -> None:
    """Announce a pipeline step.  Suppressed in quiet mode."""
    if verbose:
        console.print(_process_line("..", "cyan", message, detail))


def print_process_success(message: str, detail: str = "", *, verbose: bool = True) -> None:
    """Report a completed pipeline step.  Suppressed in quiet mode."""
    if verbose:
        console.print(_process_line("+", "green", message, detail))


def print_process_error(message: str, detail: str = "") -> None:
    """Report a failed pipeline step.  Always shown."""
    console.print(_process_line("x", "red", message, detail))


def print_summary_table(rows: dict[str, str], title: str) -> None:
    """Render *rows* as a two-column ``Field``/``Value`` table."""
    table = Table(title=title, header_style="bold cyan")
    table.add_column("Field", style="dim", no_wrap=True)
    table.add_column("Value")
    for label, value in rows.items():
        table.add_row(label, escape(str(value)))
    console.print(table)
