"""Per-invocation context derived from the host application's environment."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum


class Phase(Enum):
    """Rendering pass announced by the host through ``MARKED_PHASE``."""

    PROCESS = "PROCESS"
    PREPROCESS = "PREPROCESS"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_value(cls, value: str | None) -> Phase:
        # Exact match only: "process" is not the processing phase.
        for phase in (cls.PROCESS, cls.PREPROCESS):
            if value == phase.value:
                return phase
        return cls.UNKNOWN


ASCIIDOC_EXTENSIONS = frozenset({"adoc", "asciidoc", "asc", "ad"})
HTML_EXTENSIONS = frozenset({"htm", "html"})


class DocumentKind(Enum):
    """Routing category of the document, keyed on its extension."""

    ASCIIDOC = "asciidoc"
    HTML = "html"
    OTHER = "other"

    @classmethod
    def from_extension(cls, extension: str | None) -> DocumentKind:
        token = (extension or "").strip().lower()
        if token in ASCIIDOC_EXTENSIONS:
            return cls.ASCIIDOC
        if token in HTML_EXTENSIONS:
            return cls.HTML
        return cls.OTHER


def _split_includes(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return ()
    parts = (part.strip().strip('"') for part in raw.split(","))
    return tuple(part for part in parts if part)


@dataclass(frozen=True, slots=True)
class InvocationContext:
    """Read-only description of one render request."""

    phase: Phase
    document_path: str = ""
    origin: str = ""
    extension: str = ""
    includes: tuple[str, ...] = field(default_factory=tuple)
    css_path: str = ""
    home: str = ""

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> InvocationContext:
        """Build the context from the variables exported by the host."""
        return cls(
            phase=Phase.from_value(environ.get("MARKED_PHASE")),
            document_path=environ.get("MARKED_PATH", ""),
            origin=environ.get("MARKED_ORIGIN", ""),
            extension=environ.get("MARKED_EXT", ""),
            includes=_split_includes(environ.get("MARKED_INCLUDES")),
            css_path=environ.get("MARKED_CSS_PATH", ""),
            home=environ.get("HOME", ""),
        )

    @property
    def kind(self) -> DocumentKind:
        return DocumentKind.from_extension(self.extension)

    @property
    def filename(self) -> str:
        """Final component of the document path, or an empty string."""
        return self.document_path.rpartition("/")[2]

    @property
    def docname(self) -> str:
        """Filename with its final extension removed."""
        stem, dot, _suffix = self.filename.rpartition(".")
        if not dot:
            return self.filename
        return stem

    @property
    def docfilesuffix(self) -> str:
        return f".{self.extension}" if self.extension else ""


__all__ = [
    "ASCIIDOC_EXTENSIONS",
    "HTML_EXTENSIONS",
    "DocumentKind",
    "InvocationContext",
    "Phase",
]
