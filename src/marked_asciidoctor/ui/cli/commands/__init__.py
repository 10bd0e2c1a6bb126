"""CLI command implementations."""

from __future__ import annotations

from .process import process


__all__ = ["process"]
