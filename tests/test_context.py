from __future__ import annotations

import pytest

from marked_asciidoctor.core.context import DocumentKind, InvocationContext, Phase


def test_from_environ_reads_marked_variables() -> None:
    context = InvocationContext.from_environ(
        {
            "MARKED_PHASE": "PROCESS",
            "MARKED_PATH": "/docs/report.adoc",
            "MARKED_ORIGIN": "/docs",
            "MARKED_EXT": "adoc",
            "MARKED_INCLUDES": '"/docs/a.adoc","/docs/b.adoc"',
            "MARKED_CSS_PATH": "/styles/github.css",
            "HOME": "/Users/writer",
        }
    )

    assert context.phase is Phase.PROCESS
    assert context.document_path == "/docs/report.adoc"
    assert context.origin == "/docs"
    assert context.includes == ("/docs/a.adoc", "/docs/b.adoc")
    assert context.css_path == "/styles/github.css"
    assert context.home == "/Users/writer"
    assert context.kind is DocumentKind.ASCIIDOC


def test_missing_environment_yields_empty_context() -> None:
    context = InvocationContext.from_environ({})

    assert context.phase is Phase.UNKNOWN
    assert context.filename == ""
    assert context.docname == ""
    assert context.docfilesuffix == ""
    assert context.kind is DocumentKind.OTHER


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("PROCESS", Phase.PROCESS),
        ("PREPROCESS", Phase.PREPROCESS),
        ("process", Phase.UNKNOWN),
        ("", Phase.UNKNOWN),
        (None, Phase.UNKNOWN),
    ],
)
def test_phase_requires_exact_value(value: str | None, expected: Phase) -> None:
    assert Phase.from_value(value) is expected


@pytest.mark.parametrize(
    ("extension", "kind"),
    [
        ("adoc", DocumentKind.ASCIIDOC),
        ("asciidoc", DocumentKind.ASCIIDOC),
        ("asc", DocumentKind.ASCIIDOC),
        ("AD", DocumentKind.ASCIIDOC),
        ("html", DocumentKind.HTML),
        ("HTM", DocumentKind.HTML),
        ("md", DocumentKind.OTHER),
        ("", DocumentKind.OTHER),
    ],
)
def test_extension_routing(extension: str, kind: DocumentKind) -> None:
    assert DocumentKind.from_extension(extension) is kind


def test_docname_strips_only_final_suffix() -> None:
    context = InvocationContext(phase=Phase.PROCESS, document_path="/a/b/notes.v2.adoc")

    assert context.filename == "notes.v2.adoc"
    assert context.docname == "notes.v2"


def test_docname_without_suffix_keeps_filename() -> None:
    context = InvocationContext(phase=Phase.PROCESS, document_path="/a/README")

    assert context.docname == "README"


def test_docname_of_dotfile_is_empty() -> None:
    context = InvocationContext(phase=Phase.PROCESS, document_path="/docs/.adoc")

    assert context.filename == ".adoc"
    assert context.docname == ""


def test_docfilesuffix_keeps_extension_spelling() -> None:
    context = InvocationContext(phase=Phase.PROCESS, extension="AsciiDoc")

    assert context.docfilesuffix == ".AsciiDoc"
