"""Unit tests for the managed settings fragments."""

from __future__ import annotations

from pathlib import Path

from codesync.catalog import (
    BROWSE_PATH_KEY,
    EXTENSION_RECOMMENDATIONS,
    INCLUDE_PATH_KEY,
    c_cpp_settings,
    compile_commands_path,
    cpplint_settings,
    editor_settings,
    managed_fragments,
    python_settings,
)
from codesync.shims import ShimPaths

# ---------------------------------------------------------------------------
# compile_commands_path
# ---------------------------------------------------------------------------


def test_compile_commands_absolute_build_dir() -> None:
    assert compile_commands_path("/abs/build") == "/abs/build/${workspaceFolderBasename}/compile_commands.json"


def test_compile_commands_relative_build_dir() -> None:
    assert compile_commands_path("build") == "${workspaceFolder}/build/compile_commands.json"


def test_compile_commands_nested_relative_build_dir() -> None:
    assert compile_commands_path("out/debug") == "${workspaceFolder}/out/debug/compile_commands.json"


def test_compile_commands_empty_build_dir() -> None:
    assert compile_commands_path("") == "${workspaceFolder}/compile_commands.json"


# ---------------------------------------------------------------------------
# Fragments
# ---------------------------------------------------------------------------


def test_python_settings_point_at_shims() -> None:
    paths = ShimPaths(Path("/ws"))
    fragment = python_settings(paths, ["/opt/py"])

    assert fragment["python.pythonPath"] == "/ws/.vscode/bin/python"
    assert fragment["python.linting.pep8Path"] == "/ws/.vscode/bin/pycodestyle"
    assert fragment["python.envFile"] == "/ws/.vscode/python.env"
    assert fragment["python.autoComplete.extraPaths"] == ["/opt/py"]
    assert fragment["python.linting.pep8Args"] == ["--max-line-length", "120"]


def test_python_settings_missing_extra_paths_is_empty_list() -> None:
    fragment = python_settings(ShimPaths(Path("/ws")), None)
    assert fragment["python.autoComplete.extraPaths"] == []


def test_c_cpp_settings_lists() -> None:
    fragment = c_cpp_settings("${workspaceFolder}/build/compile_commands.json")

    assert fragment[INCLUDE_PATH_KEY] == ["${default}", "${workspaceFolder}/include"]
    assert fragment[BROWSE_PATH_KEY] == ["${default}", "${workspaceFolder}/**"]
    assert fragment["C_Cpp.default.compileCommands"] == "${workspaceFolder}/build/compile_commands.json"
    assert fragment["C_Cpp.clang_format_fallbackStyle"] == "{BasedOnStyle: Google, ColumnLimit: 120}"


def test_cpplint_settings() -> None:
    fragment = cpplint_settings("/ws/.vscode/bin/cpplint", "src")

    assert fragment["cpplint.cpplintPath"] == "/ws/.vscode/bin/cpplint"
    assert fragment["cpplint.root"] == "src"
    assert fragment["cpplint.lineLength"] == 120
    assert "hpp" in fragment["cpplint.extensions"]


def test_editor_settings_tab_sizes() -> None:
    fragment = editor_settings()
    assert fragment["[python]"] == {"editor.tabSize": 4}
    assert fragment["[cpp]"] == {"editor.tabSize": 2}
    assert fragment["editor.detectIndentation"] is False


def test_fragments_are_fresh_objects() -> None:
    """Mutating a returned fragment must not leak into the next call."""
    first = c_cpp_settings("x")
    first[INCLUDE_PATH_KEY].append("/user")
    assert c_cpp_settings("x")[INCLUDE_PATH_KEY] == ["${default}", "${workspaceFolder}/include"]


def test_managed_fragments_order_and_compile_commands() -> None:
    fragments = managed_fragments(ShimPaths(Path("/ws")), build_dir="/abs/build", cpplint_root="include")

    assert len(fragments) == 4
    assert "python.pythonPath" in fragments[0]
    assert "files.autoSave" in fragments[1]
    assert fragments[2]["C_Cpp.default.compileCommands"] == (
        "/abs/build/${workspaceFolderBasename}/compile_commands.json"
    )
    assert fragments[3]["cpplint.cpplintPath"] == "/ws/.vscode/bin/cpplint"


def test_extension_recommendations_have_no_duplicates() -> None:
    assert len(set(EXTENSION_RECOMMENDATIONS)) == len(EXTENSION_RECOMMENDATIONS)
    assert "ms-python.python" in EXTENSION_RECOMMENDATIONS
