"""Derived environment handed to the converter subprocess."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import os

from .options import ProcessorOptions


def prepend_paths(current: str | None, entries: Iterable[str]) -> str:
    """Prepend ``entries`` to a search path, the last entry ending up first."""
    value = current or ""
    for entry in entries:
        if not entry:
            continue
        value = f"{entry}{os.pathsep}{value}" if value else entry
    return value


def build_base_env(environ: Mapping[str, str], options: ProcessorOptions) -> dict[str, str]:
    """Copy the inherited environment and apply ``--path`` prepends."""
    env = dict(environ)
    if options.path_prepend:
        env["PATH"] = prepend_paths(env.get("PATH"), options.path_prepend)
    return env


def apply_gem_overrides(env: Mapping[str, str], options: ProcessorOptions) -> dict[str, str]:
    """Return ``env`` with GEM_PATH/GEM_HOME overrides layered on top."""
    result = dict(env)
    if options.gem_path_prepend:
        result["GEM_PATH"] = prepend_paths(result.get("GEM_PATH"), options.gem_path_prepend)
    if options.gem_home:
        result["GEM_HOME"] = options.gem_home
    return result


def environment_changes(
    before: Mapping[str, str], after: Mapping[str, str]
) -> dict[str, str]:
    """Return the variables whose value differs between two environments."""
    changes = {key: value for key, value in after.items() if before.get(key) != value}
    for key in before:
        if key not in after:
            changes[key] = "<unset>"
    return dict(sorted(changes.items()))


__all__ = [
    "apply_gem_overrides",
    "build_base_env",
    "environment_changes",
    "prepend_paths",
]
