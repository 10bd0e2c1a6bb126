from __future__ import annotations

import logging

import pytest

from marked_asciidoctor.core.diagnostics import (
    DiagnosticEmitter,
    LoggingEmitter,
    NullEmitter,
    format_event_message,
)
from marked_asciidoctor.core.exceptions import ProcessorError
from marked_asciidoctor.ui.cli.diagnostics import CliEmitter
from marked_asciidoctor.ui.cli.state import set_cli_state


def test_null_emitter_is_noop(caplog: pytest.LogCaptureFixture) -> None:
    emitter = NullEmitter()
    with caplog.at_level(logging.DEBUG):
        emitter.info("quiet")
        emitter.warning("nothing to see")
        emitter.error("still quiet")
        emitter.event("command", {"argv": ["x"]})
    assert not caplog.records
    assert emitter.debug_enabled is False


def test_logging_emitter_logs_messages(caplog: pytest.LogCaptureFixture) -> None:
    emitter = LoggingEmitter(debug_enabled=True)
    with caplog.at_level(logging.DEBUG, logger="marked_asciidoctor"):
        emitter.error("boom")
        emitter.event("command", {"argv": ["asciidoctor", "-"], "cwd": "/docs"})
    messages = [record.message for record in caplog.records]
    assert "boom" in messages
    assert "+ asciidoctor - (cwd: /docs)" in messages


def test_emitters_satisfy_protocol() -> None:
    assert isinstance(NullEmitter(), DiagnosticEmitter)
    assert isinstance(LoggingEmitter(), DiagnosticEmitter)
    assert isinstance(CliEmitter(), DiagnosticEmitter)


def test_format_event_message_quotes_arguments() -> None:
    message = format_event_message("command", {"argv": ["asciidoctor", "-a", "title=My Doc"]})

    assert message == "+ asciidoctor -a 'title=My Doc'"
    assert format_event_message("environment", {"changes": {}}) is None
    assert format_event_message("unknown", {}) is None


def test_cli_emitter_respects_verbosity(capsys: pytest.CaptureFixture[str]) -> None:
    state = set_cli_state(verbosity=0)
    emitter = CliEmitter(state=state)

    emitter.info("hidden trace")
    emitter.event("command", {"argv": ["asciidoctor"]})
    emitter.warning("Heads up")
    emitter.error("Boom")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "hidden trace" not in captured.err
    assert "[WARN] marked-asciidoctor: Heads up" in captured.err
    assert "[ERROR] marked-asciidoctor: Boom" in captured.err


def test_cli_emitter_traces_commands_at_verbosity_two(
    capsys: pytest.CaptureFixture[str],
) -> None:
    state = set_cli_state(verbosity=2)
    emitter = CliEmitter(state=state)

    emitter.info("step")
    emitter.event("command", {"argv": ["rbenv", "exec"]})

    captured = capsys.readouterr()
    assert "[INFO] marked-asciidoctor: step" in captured.err
    assert "+ rbenv exec" in captured.err


def test_error_details_follow_verbosity(capsys: pytest.CaptureFixture[str]) -> None:
    set_cli_state(verbosity=2)
    try:
        try:
            raise OSError("disk")
        except OSError as exc:
            raise ProcessorError("wrapped") from exc
    except ProcessorError as error:
        CliEmitter().error("failed", exc=error)

    captured = capsys.readouterr()
    assert "type: ProcessorError" in captured.err
    assert "OSError: disk" in captured.err
