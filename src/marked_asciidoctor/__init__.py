"""Asciidoctor custom processor for the Marked preview application."""

from __future__ import annotations

from marked_asciidoctor.core.context import DocumentKind, InvocationContext, Phase
from marked_asciidoctor.core.dispatch import (
    NOCUSTOM,
    Defer,
    Delegate,
    Outcome,
    PassThrough,
    dispatch,
    execute,
)
from marked_asciidoctor.core.exceptions import ProcessorError
from marked_asciidoctor.core.options import ProcessorOptions, parse_flags
from marked_asciidoctor.version import get_version


__version__ = get_version()

__all__ = [
    "NOCUSTOM",
    "Defer",
    "Delegate",
    "DocumentKind",
    "InvocationContext",
    "Outcome",
    "PassThrough",
    "Phase",
    "ProcessorError",
    "ProcessorOptions",
    "__version__",
    "dispatch",
    "execute",
    "get_version",
    "parse_flags",
]
