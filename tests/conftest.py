"""Shared test fixtures.

Everything runs against a temporary workspace root; no host build tool is
needed.  The collaborators (option store, environment, manifest, registry)
are the real implementations pointed at files under ``tmp_path``.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger

from codesync.environment import ProcessEnvironment
from codesync.folders import ManifestRegistry
from codesync.integration import CodeIntegration
from codesync.models import InstallationManifest, PackageInfo, PackageSetInfo
from codesync.options import JsonOptionStore
from codesync.settings import CodeSyncSettings


@pytest.fixture
def root(tmp_path: Path) -> Path:
    workspace_root = tmp_path / "ws"
    workspace_root.mkdir()
    return workspace_root


@pytest.fixture
def settings(root: Path) -> CodeSyncSettings:
    return CodeSyncSettings(root_dir=root, workspace_name="autoproj", build_dir="build", python_version="3.12")


@pytest.fixture
def manifest(root: Path) -> InstallationManifest:
    """Three packages (inserted out of order) and two package sets."""
    return InstallationManifest(
        package_sets={
            "rock": PackageSetInfo(name="rock", user_local_dir=str(root / "autoproj" / "remotes" / "rock")),
            "core": PackageSetInfo(name="core", user_local_dir=str(root / "autoproj" / "remotes" / "core")),
        },
        packages={
            "b": PackageInfo(name="b", srcdir=str(root / "src" / "b")),
            "a": PackageInfo(name="a", srcdir=str(root / "src" / "a")),
            "c": PackageInfo(name="c", srcdir=str(root / "src" / "c")),
        },
    )


@pytest.fixture
def option_store(root: Path) -> JsonOptionStore:
    return JsonOptionStore(root / ".autoproj" / "codesync-options.json")


@pytest.fixture
def environment() -> ProcessEnvironment:
    return ProcessEnvironment({"PYTHONPATH": "/opt/py1:/opt/py2", "PYTHONUSERBASE": "/opt/userbase"})


@pytest.fixture
def integration(
    settings: CodeSyncSettings,
    option_store: JsonOptionStore,
    environment: ProcessEnvironment,
    manifest: InstallationManifest,
) -> CodeIntegration:
    return CodeIntegration(
        settings,
        option_store=option_store,
        environment=environment,
        registry=ManifestRegistry.from_manifest(manifest, disabled=["c"]),
        manifest_source=lambda: manifest,
    )


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Capture loguru output (loguru does not go through ``caplog``)."""
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(str(message)), level="DEBUG", format="{level} {message}")
    yield messages
    logger.remove(handler_id)
