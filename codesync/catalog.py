"""Managed settings fragments.

Every function here is pure: it receives already-resolved paths and returns
a fresh ``SettingsFragment``.  The merge engine applies the fragments in
``managed_fragments`` order; all keys overwrite what the user has, except the
two ``APPENDED_LIST_KEYS`` which are unioned with the user's entries.

Values in ``${...}`` form are VS Code variables and are expanded by the
editor, not by us.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from codesync.models import SettingsFragment
    from codesync.shims import ShimPaths

INCLUDE_PATH_KEY = "C_Cpp.default.includePath"
BROWSE_PATH_KEY = "C_Cpp.default.browse.path"
APPENDED_LIST_KEYS = (INCLUDE_PATH_KEY, BROWSE_PATH_KEY)

LINE_LENGTH = 120

EXTENSION_RECOMMENDATIONS = (
    "mine.cpplint",
    "ms-vscode.cpptools",
    "ms-python.python",
    "visualstudioexptteam.vscodeintellicode",
    "arjones.autoproj",
    "twxs.cmake",
)

CPPLINT_EXTENSIONS = ("cpp", "h++", "c", "c++", "hxx", "hpp", "cc", "cxx", "h", "hh")


def compile_commands_path(build_dir: str) -> str:
    """Location of ``compile_commands.json`` as seen from a workspace folder.

    An absolute build dir is shared by all packages, so each package gets its
    own subdirectory named after the folder.  A relative build dir lives
    inside each package checkout.
    """
    if PurePosixPath(build_dir).is_absolute():
        return str(PurePosixPath(build_dir, "${workspaceFolderBasename}", "compile_commands.json"))
    return str(PurePosixPath("${workspaceFolder}", build_dir, "compile_commands.json"))


def python_settings(paths: ShimPaths, extra_paths: list[str] | None = None) -> SettingsFragment:
    max_line_length = ["--max-line-length", str(LINE_LENGTH)]
    return {
        "python.formatting.autopep8Args": list(max_line_length),
        "python.linting.pep8Args": list(max_line_length),
        "python.linting.enabled": True,
        "python.pythonPath": str(paths.python_stub),
        "python.linting.lintOnSave": True,
        "python.linting.pylintEnabled": True,
        "python.linting.pep8Enabled": True,
        "python.linting.pep8Path": str(paths.pycodestyle_stub),
        "python.envFile": str(paths.python_env),
        "python.autoComplete.extraPaths": list(extra_paths or []),
    }


def editor_settings() -> SettingsFragment:
    return {
        "files.autoSave": "afterDelay",
        "editor.detectIndentation": False,
        "[python]": {"editor.tabSize": 4},
        "[cpp]": {"editor.tabSize": 2},
    }


def c_cpp_settings(compile_commands: str) -> SettingsFragment:
    return {
        "C_Cpp.clang_format_fallbackStyle": f"{{BasedOnStyle: Google, ColumnLimit: {LINE_LENGTH}}}",
        INCLUDE_PATH_KEY: ["${default}", "${workspaceFolder}/include"],
        BROWSE_PATH_KEY: ["${default}", "${workspaceFolder}/**"],
        "C_Cpp.default.compileCommands": compile_commands,
    }


def cpplint_settings(cpplint_path: str, root: str = "include") -> SettingsFragment:
    return {
        "cpplint.cpplintPath": cpplint_path,
        "cpplint.lineLength": LINE_LENGTH,
        "cpplint.root": root,
        "cpplint.repository": "${workspaceFolder}",
        "cpplint.headers": [],
        "cpplint.extensions": list(CPPLINT_EXTENSIONS),
    }


def managed_fragments(
    paths: ShimPaths,
    *,
    build_dir: str,
    extra_paths: list[str] | None = None,
    cpplint_root: str = "include",
) -> list[SettingsFragment]:
    """All managed fragments, in the order they are applied."""
    return [
        python_settings(paths, extra_paths),
        editor_settings(),
        c_cpp_settings(compile_commands_path(build_dir)),
        cpplint_settings(str(paths.cpplint_stub), cpplint_root),
    ]
