"""
Sodor CLI output helpers built on Click.

    success(), error(), dim()
    section()       section divider with title
    kv()            key-value pair, aligned
    table()         minimal aligned table

Click handles NO_COLOR / TERM=dumb, so output degrades on plain terminals.
"""

from __future__ import annotations

import shutil
from typing import Optional, Sequence

import click

_TERM_WIDTH: Optional[int] = None


def _tw() -> int:
    """Terminal width, cached and clamped to a sane range."""
    global _TERM_WIDTH
    if _TERM_WIDTH is None:
        _TERM_WIDTH = max(40, min(shutil.get_terminal_size((80, 24)).columns, 120))
    return _TERM_WIDTH


def success(message: str) -> None:
    """Print success message in green."""
    click.echo(click.style(message, fg="green"))


def error(message: str) -> None:
    """Print error message in red (stderr)."""
    click.echo(click.style(message, fg="red"), err=True)


def dim(message: str) -> None:
    """Print dimmed message."""
    click.echo(click.style(message, dim=True))


_L_H = "\u2500"     # ─
_ARROW = "\u2192"   # →
_CHECK = "\u2713"   # ✓
_CROSS = "\u2717"   # ✗


def section(title: str, *, width: Optional[int] = None, fg: str = "cyan") -> None:
    """
    Print a section header with a ruled line.

        ── Users (/users) ─────────────────────────
    """
    w = width or _tw()
    dashes = max(4, w - len(title) - 6)
    line = f"{_L_H}{_L_H} {title} {_L_H * dashes}"
    click.echo(click.style(line, fg=fg, bold=True))


def kv(
    key: str,
    value: str,
    *,
    key_width: int = 20,
    indent: int = 2,
) -> None:
    """
    Print an aligned key-value pair.

        Routes:           12
    """
    prefix = " " * indent
    k = click.style(f"{key}:", fg="white")
    v = click.style(str(value), fg="cyan")
    padding = " " * max(1, key_width - len(key) - 1)
    click.echo(f"{prefix}{k}{padding}{v}")


def table(
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    *,
    header_fg: str = "cyan",
    indent: int = 2,
) -> None:
    """
    Print a minimal aligned table.

        Method  Path               Action
        ─────── ────────────────── ────────────
        GET     /users/show/:id    Users.show
    """
    prefix = " " * indent
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row[:len(headers)]):
            widths[i] = max(widths[i], len(str(cell)))
    widths = [w + 2 for w in widths]

    hdr = "".join(h.ljust(widths[i]) for i, h in enumerate(headers))
    click.echo(f"{prefix}{click.style(hdr, fg=header_fg, bold=True)}")
    click.echo(f"{prefix}{click.style(''.join(_L_H * w for w in widths), dim=True)}")

    for row in rows:
        line = "".join(str(cell).ljust(widths[i]) for i, cell in enumerate(row))
        click.echo(f"{prefix}{line.rstrip()}")
