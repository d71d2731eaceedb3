"""Shim scripts for external tools.

Editors launch linters and the interpreter without the workspace environment
loaded.  Each shim re-establishes it before handing over to the real tool::

    {root}/.vscode/bin/cpplint       (0755)
    {root}/.vscode/bin/pycodestyle   (0755)
    {root}/.vscode/bin/python        (0755)
    {root}/.vscode/python.env        (0644)

The shim unsets ``AUTOPROJ_CURRENT_ROOT`` first so that a shim invoked from
inside another workspace's shell sources *this* workspace's ``env.sh``.

Shims carry no user content and are overwritten on every run.
"""

from __future__ import annotations

from pathlib import Path

import jinja2
from loguru import logger

from codesync.fileio import write_file

SHIM_TOOLS = ("cpplint", "pycodestyle", "python")

SCRIPT_MODE = 0o755
ENV_FILE_MODE = 0o644

ROOT_MARKER_VARIABLE = "AUTOPROJ_CURRENT_ROOT"

_SHIM_TEMPLATE = """\
#!/bin/sh
# Automatically generated by codesync

unset {{ root_marker }}
. "{{ env_script }}"
exec {{ tool }} "$@"
"""

_ENV_FILE_TEMPLATE = """\
# Automatically generated by codesync

PYTHONUSERBASE="{{ python_user_base }}"
PYTHONPATH="{{ python_path }}"
"""

_jinja_env = jinja2.Environment(autoescape=False, keep_trailing_newline=True, undefined=jinja2.StrictUndefined)  # noqa: S701


class ShimPaths:
    """Locations of the generated files under a workspace root."""

    def __init__(self, root_dir: Path) -> None:
        self.root_dir = root_dir
        self.dot_vscode_dir = root_dir / ".vscode"
        self.stubs_dir = self.dot_vscode_dir / "bin"
        self.python_env = self.dot_vscode_dir / "python.env"

    @property
    def env_script(self) -> Path:
        """The workspace's environment setup script sourced by every shim."""
        return self.root_dir / "env.sh"

    def stub(self, tool: str) -> Path:
        return self.stubs_dir / tool

    @property
    def cpplint_stub(self) -> Path:
        return self.stub("cpplint")

    @property
    def pycodestyle_stub(self) -> Path:
        return self.stub("pycodestyle")

    @property
    def python_stub(self) -> Path:
        return self.stub("python")


def render_shim(tool: str, root_dir: Path) -> str:
    """Render the wrapper script for *tool*."""
    template = _jinja_env.from_string(_SHIM_TEMPLATE)
    return template.render(
        root_marker=ROOT_MARKER_VARIABLE,
        env_script=ShimPaths(root_dir).env_script,
        tool=tool,
    )


def render_env_file(python_user_base: str = "", python_path: str = "") -> str:
    """Render ``python.env``; missing values are written as empty strings."""
    template = _jinja_env.from_string(_ENV_FILE_TEMPLATE)
    return template.render(python_user_base=python_user_base, python_path=python_path)


def write_shim(paths: ShimPaths, tool: str) -> Path:
    """Overwrite the shim for *tool*, creating the bin directory if needed."""
    path = paths.stub(tool)
    write_file(path, SCRIPT_MODE, render_shim(tool, paths.root_dir))
    return path


def write_shims(paths: ShimPaths, *, python_user_base: str = "", python_path: str = "") -> None:
    """(Re)write the env file and every shim script."""
    write_file(paths.python_env, ENV_FILE_MODE, render_env_file(python_user_base, python_path))
    for tool in SHIM_TOOLS:
        write_shim(paths, tool)
    logger.info("Wrote {} shims to {}", len(SHIM_TOOLS), paths.stubs_dir)
