"""Unit tests for shim rendering and writing."""

from __future__ import annotations

import stat
from pathlib import Path

from codesync.shims import (
    ROOT_MARKER_VARIABLE,
    SHIM_TOOLS,
    ShimPaths,
    render_env_file,
    render_shim,
    write_shim,
    write_shims,
)


def _mode(path: Path) -> int:
    return stat.S_IMODE(path.stat().st_mode)


def test_shim_paths(root: Path) -> None:
    paths = ShimPaths(root)

    assert paths.stubs_dir == root / ".vscode" / "bin"
    assert paths.python_env == root / ".vscode" / "python.env"
    assert paths.python_stub == root / ".vscode" / "bin" / "python"
    assert paths.cpplint_stub == root / ".vscode" / "bin" / "cpplint"
    assert paths.pycodestyle_stub == root / ".vscode" / "bin" / "pycodestyle"


def test_python_shim_content() -> None:
    content = render_shim("python", Path("/ws"))
    lines = content.splitlines()

    assert lines[0] == "#!/bin/sh"
    unset_at = lines.index(f"unset {ROOT_MARKER_VARIABLE}")
    source_at = lines.index('. "/ws/env.sh"')
    exec_at = lines.index('exec python "$@"')
    assert unset_at < source_at < exec_at
    assert content.endswith("\n")


def test_each_tool_execs_itself() -> None:
    for tool in SHIM_TOOLS:
        assert f'exec {tool} "$@"' in render_shim(tool, Path("/ws"))


def test_env_file_content() -> None:
    content = render_env_file("/opt/userbase", "/opt/py1:/opt/py2")

    assert 'PYTHONUSERBASE="/opt/userbase"' in content
    assert 'PYTHONPATH="/opt/py1:/opt/py2"' in content


def test_env_file_missing_values_render_empty() -> None:
    content = render_env_file()

    assert 'PYTHONUSERBASE=""' in content
    assert 'PYTHONPATH=""' in content


def test_write_shims_creates_files_with_modes(root: Path) -> None:
    paths = ShimPaths(root)

    write_shims(paths, python_user_base="/opt/userbase", python_path="/opt/py")

    assert _mode(paths.python_env) == 0o644
    for tool in SHIM_TOOLS:
        assert _mode(paths.stub(tool)) == 0o755
    assert 'PYTHONPATH="/opt/py"' in paths.python_env.read_text()


def test_write_shim_overwrites(root: Path) -> None:
    paths = ShimPaths(root)
    paths.stubs_dir.mkdir(parents=True)
    paths.python_stub.write_text("stale")

    written = write_shim(paths, "python")

    assert written == paths.python_stub
    assert written.read_text() == render_shim("python", root)
    assert _mode(written) == 0o755


def test_shim_quotes_env_script_path() -> None:
    content = render_shim("python", Path("/home/me/my ws"))

    assert '. "/home/me/my ws/env.sh"' in content.splitlines()
