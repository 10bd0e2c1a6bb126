"""Ruby version manager activation (rbenv, RVM).

Shell integrations for both managers only make sense inside an interactive
shell, so activation runs Ruby through the manager and captures the
environment it ends up with. That snapshot becomes the converter's
environment.
"""

from __future__ import annotations

from collections.abc import Mapping
import os

from marked_asciidoctor.core.diagnostics import DiagnosticEmitter, NullEmitter
from marked_asciidoctor.core.environment import prepend_paths
from marked_asciidoctor.core.exceptions import RuntimeManagerError
from marked_asciidoctor.core.options import RuntimeManagerKind, RuntimeSelection

from .process import CommandRequest, ProcessRunner


RUBY_ENV_DUMP = 'ENV.each { |key, value| print key, "=", value, "\\0" }'


def parse_env_dump(payload: bytes) -> dict[str, str]:
    """Decode a NUL separated ``KEY=VALUE`` listing."""
    env: dict[str, str] = {}
    for chunk in payload.split(b"\0"):
        if not chunk:
            continue
        key, sep, value = chunk.decode("utf-8", errors="surrogateescape").partition("=")
        if sep and key:
            env[key] = value
    return env


def _installed_versions(runner: ProcessRunner, argv: list[str], env: Mapping[str, str]) -> list[str]:
    result = runner.run(CommandRequest(argv=argv, env=env))
    if result.returncode != 0:
        return []
    lines = result.stdout.decode("utf-8", errors="replace").splitlines()
    return [line.strip() for line in lines if line.strip()]


def _activate_rbenv(
    selection: RuntimeSelection, env: Mapping[str, str], runner: ProcessRunner
) -> dict[str, str]:
    runner.require("rbenv", env)
    version = selection.version or ""
    request_env = {**env, "RBENV_VERSION": version}
    result = runner.run(
        CommandRequest(argv=["rbenv", "exec", "ruby", "-e", RUBY_ENV_DUMP], env=request_env)
    )
    if result.returncode != 0:
        installed = _installed_versions(runner, ["rbenv", "versions", "--bare"], env)
        raise RuntimeManagerError("rbenv", version, installed)
    activated = parse_env_dump(result.stdout)
    activated.setdefault("RBENV_VERSION", version)
    return activated


def _activate_rvm(
    selection: RuntimeSelection, env: Mapping[str, str], runner: ProcessRunner
) -> dict[str, str]:
    base = dict(env)
    if selection.rvm_path:
        base["PATH"] = prepend_paths(base.get("PATH"), [os.path.join(selection.rvm_path, "bin")])
        base["rvm_path"] = selection.rvm_path
    runner.require("rvm", base)
    version = selection.version or ""
    result = runner.run(
        CommandRequest(argv=["rvm", version, "do", "ruby", "-e", RUBY_ENV_DUMP], env=base)
    )
    if result.returncode != 0:
        installed = _installed_versions(runner, ["rvm", "list", "strings"], base)
        raise RuntimeManagerError("rvm", version, installed)
    return parse_env_dump(result.stdout)


def activate_runtime(
    selection: RuntimeSelection,
    env: Mapping[str, str],
    *,
    runner: ProcessRunner,
    emitter: DiagnosticEmitter | None = None,
) -> dict[str, str]:
    """Return the environment with the selected Ruby version active."""
    emitter = emitter or NullEmitter()
    if not selection.active:
        return dict(env)

    match selection.kind:
        case RuntimeManagerKind.RBENV:
            activated = _activate_rbenv(selection, env, runner)
        case RuntimeManagerKind.RVM:
            activated = _activate_rvm(selection, env, runner)
        case RuntimeManagerKind.NONE:
            return dict(env)

    emitter.event(
        "runtime_activated", {"manager": selection.kind.value, "version": selection.version}
    )
    return activated


__all__ = ["RUBY_ENV_DUMP", "activate_runtime", "parse_env_dump"]
