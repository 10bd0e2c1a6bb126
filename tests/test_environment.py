from __future__ import annotations

import os

from marked_asciidoctor.core.environment import (
    apply_gem_overrides,
    build_base_env,
    environment_changes,
    prepend_paths,
)
from marked_asciidoctor.core.options import parse_flags


def test_prepend_paths_last_entry_first() -> None:
    value = prepend_paths("/usr/bin", ["/a", "/b"])

    assert value.split(os.pathsep) == ["/b", "/a", "/usr/bin"]


def test_prepend_paths_handles_empty_base() -> None:
    assert prepend_paths(None, ["/a"]) == "/a"
    assert prepend_paths("", []) == ""


def test_build_base_env_does_not_touch_source() -> None:
    environ = {"PATH": "/usr/bin", "HOME": "/home/me"}
    options = parse_flags(["-p", "/opt/bin"])

    env = build_base_env(environ, options)

    assert env["PATH"] == f"/opt/bin{os.pathsep}/usr/bin"
    assert environ["PATH"] == "/usr/bin"


def test_gem_overrides() -> None:
    options = parse_flags(["--gem-path", "/gems/extra", "--gem-home", "/gems/home"])

    env = apply_gem_overrides({"GEM_PATH": "/gems/base"}, options)

    assert env["GEM_PATH"] == f"/gems/extra{os.pathsep}/gems/base"
    assert env["GEM_HOME"] == "/gems/home"


def test_gem_overrides_are_noop_without_flags() -> None:
    env = apply_gem_overrides({"PATH": "/usr/bin"}, parse_flags([]))

    assert env == {"PATH": "/usr/bin"}


def test_environment_changes_reports_added_changed_and_removed() -> None:
    changes = environment_changes(
        {"PATH": "/usr/bin", "OLD": "1", "SAME": "x"},
        {"PATH": "/opt/bin:/usr/bin", "NEW": "2", "SAME": "x"},
    )

    assert changes == {"NEW": "2", "OLD": "<unset>", "PATH": "/opt/bin:/usr/bin"}
