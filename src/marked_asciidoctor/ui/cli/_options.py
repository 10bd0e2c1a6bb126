"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from typing import Annotated

import typer

from marked_asciidoctor.version import get_version


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(get_version())
        raise typer.Exit()


VersionOption = Annotated[
    bool,
    typer.Option(
        "--version",
        help="Show the installed version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
]
