"""Command-line flag parsing for the processor.

The host passes a flat list of tokens. Every recognised flag is either a
switch or takes exactly one value; a handful may be repeated and accumulate.
Unknown tokens are reported and skipped so a stale host configuration never
blocks rendering.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from .diagnostics import DiagnosticEmitter, NullEmitter
from .exceptions import MissingFlagValueError


class RuntimeManagerKind(Enum):
    """Ruby version manager used to select the converter's interpreter."""

    NONE = "none"
    RBENV = "rbenv"
    RVM = "rvm"


@dataclass(frozen=True, slots=True)
class RuntimeSelection:
    """Requested Ruby version and the manager that provides it."""

    kind: RuntimeManagerKind = RuntimeManagerKind.NONE
    version: str | None = None
    rvm_path: str | None = None

    @property
    def active(self) -> bool:
        return self.kind is not RuntimeManagerKind.NONE and bool(self.version)


@dataclass(frozen=True, slots=True)
class FlagSpec:
    """Recognised flag definition."""

    dest: str
    names: tuple[str, ...]
    takes_value: bool
    help: str


FLAG_SPECS: tuple[FlagSpec, ...] = (
    FlagSpec("path", ("-p", "--path"), True, "Prepend a directory to PATH."),
    FlagSpec("gem_path", ("--gem-path",), True, "Prepend a directory to GEM_PATH."),
    FlagSpec("gem_home", ("--gem-home",), True, "Override GEM_HOME."),
    FlagSpec("rbenv", ("--rbenv",), True, "Activate a Ruby version through rbenv."),
    FlagSpec("rvm_path", ("--rvm-path",), True, "Location of the RVM installation."),
    FlagSpec("rvm", ("--rvm",), True, "Activate a Ruby version through RVM."),
    FlagSpec("require", ("-r", "--require"), True, "Library passed to asciidoctor --require."),
    FlagSpec("attribute", ("-a", "--attribute"), True, "Attribute passed to asciidoctor."),
    FlagSpec("debug", ("-d", "--debug"), False, "Trace processing steps on stderr."),
    FlagSpec("debug_verbose", ("-D", "--debug-verbose"), False, "Also trace every command."),
)

_FLAG_INDEX: dict[str, FlagSpec] = {name: spec for spec in FLAG_SPECS for name in spec.names}


@dataclass(frozen=True, slots=True)
class ProcessorOptions:
    """Immutable result of flag parsing."""

    path_prepend: tuple[str, ...] = ()
    gem_path_prepend: tuple[str, ...] = ()
    gem_home: str | None = None
    runtime: RuntimeSelection = field(default_factory=RuntimeSelection)
    requires: tuple[str, ...] = ()
    attributes: tuple[str, ...] = ()
    verbosity: int = 0
    unknown: tuple[str, ...] = ()

    @property
    def debug(self) -> bool:
        return self.verbosity >= 1

    @property
    def trace(self) -> bool:
        return self.verbosity >= 2


def _split_token(token: str) -> tuple[str, str | None]:
    if token.startswith("--") and "=" in token:
        name, _, value = token.partition("=")
        return name, value
    return token, None


def parse_flags(
    args: Iterable[str],
    *,
    emitter: DiagnosticEmitter | None = None,
) -> ProcessorOptions:
    """Parse ``args`` into :class:`ProcessorOptions`.

    Raises :class:`MissingFlagValueError` when a flag that takes a value is
    the last token or is followed by another flag.
    """
    emitter = emitter or NullEmitter()
    tokens: Sequence[str] = list(args)

    path_prepend: list[str] = []
    gem_path_prepend: list[str] = []
    requires: list[str] = []
    attributes: list[str] = []
    unknown: list[str] = []
    gem_home: str | None = None
    rvm_path: str | None = None
    kind = RuntimeManagerKind.NONE
    version: str | None = None
    verbosity = 0

    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        name, inline_value = _split_token(token)
        spec = _FLAG_INDEX.get(name)

        if spec is None:
            unknown.append(token)
            emitter.warning(f"Ignoring unrecognised argument '{token}'.")
            continue

        value: str | None = None
        if spec.takes_value:
            if inline_value is not None:
                value = inline_value
            elif index < len(tokens) and not tokens[index].startswith("-"):
                value = tokens[index]
                index += 1
            else:
                raise MissingFlagValueError(name)
        elif inline_value is not None:
            unknown.append(token)
            emitter.warning(f"Flag '{name}' does not take a value; ignoring '{token}'.")
            continue

        match spec.dest:
            case "path":
                path_prepend.append(value)
            case "gem_path":
                gem_path_prepend.append(value)
            case "gem_home":
                gem_home = value
            case "rbenv":
                kind, version = RuntimeManagerKind.RBENV, value
            case "rvm":
                kind, version = RuntimeManagerKind.RVM, value
            case "rvm_path":
                rvm_path = value
            case "require":
                requires.append(value)
            case "attribute":
                attributes.append(value)
            case "debug":
                verbosity = max(verbosity, 1)
            case "debug_verbose":
                verbosity = 2

    return ProcessorOptions(
        path_prepend=tuple(path_prepend),
        gem_path_prepend=tuple(gem_path_prepend),
        gem_home=gem_home,
        runtime=RuntimeSelection(kind=kind, version=version, rvm_path=rvm_path),
        requires=tuple(requires),
        attributes=tuple(attributes),
        verbosity=verbosity,
        unknown=tuple(unknown),
    )


__all__ = [
    "FLAG_SPECS",
    "FlagSpec",
    "ProcessorOptions",
    "RuntimeManagerKind",
    "RuntimeSelection",
    "parse_flags",
]
