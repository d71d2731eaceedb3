"""Folder resolution: installation manifest -> ordered workspace folders.

Ordering is by display name so that the generated list is stable no matter
how the manifest was written.  Layout when package sets are included::

    autoproj (buildconf)          {root}/autoproj
    <set> (package set)           user_local_dir   (sorted by set name)
    <package>                     srcdir           (sorted by package name)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Protocol, runtime_checkable

from loguru import logger
from pydantic import ValidationError

from codesync.models import FolderEntry, InstallationManifest

BUILDCONF_FOLDER_NAME = "autoproj (buildconf)"
BUILDCONF_DIR_NAME = "autoproj"


class ManifestError(ValueError):
    """The installation manifest exists but cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot read installation manifest {path}: {reason}")
        self.path = path


@runtime_checkable
class PackageRegistry(Protocol):
    """The build's view of which packages are enabled."""

    def is_disabled(self, name: str) -> bool:
        """True if *name* is disabled or unknown to the build."""
        ...


class ManifestRegistry:
    """``PackageRegistry`` over explicit sets of known and disabled packages.

    A package the registry does not know about counts as disabled: the
    manifest and the build can briefly disagree during a partial update.
    """

    def __init__(self, known: Iterable[str], disabled: Iterable[str] = ()) -> None:
        self._known = frozenset(known)
        self._disabled = frozenset(disabled)

    @classmethod
    def from_manifest(cls, manifest: InstallationManifest, disabled: Iterable[str] = ()) -> ManifestRegistry:
        return cls(manifest.packages.keys(), disabled)

    def is_disabled(self, name: str) -> bool:
        return name not in self._known or name in self._disabled


def load_manifest(path: Path) -> InstallationManifest:
    """Read a JSON installation manifest.  A missing file yields an empty manifest."""
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("No installation manifest at {}", path)
        return InstallationManifest()
    except UnicodeDecodeError as exc:
        raise ManifestError(path, str(exc)) from exc
    try:
        return InstallationManifest.model_validate_json(raw)
    except ValidationError as exc:
        raise ManifestError(path, str(exc)) from exc


def resolve_folders(
    manifest: InstallationManifest,
    is_disabled: Callable[[str], bool],
    *,
    root_dir: Path,
    include_package_sets: bool = False,
) -> list[FolderEntry]:
    """Return the managed folder list for *manifest*."""
    folders: list[FolderEntry] = []

    if include_package_sets:
        folders.append(FolderEntry(name=BUILDCONF_FOLDER_NAME, path=str(root_dir / BUILDCONF_DIR_NAME)))
        for pkg_set in sorted(manifest.package_sets.values(), key=lambda s: s.name):
            folders.append(FolderEntry(name=f"{pkg_set.name} (package set)", path=pkg_set.user_local_dir))

    for pkg in sorted(manifest.packages.values(), key=lambda p: p.name):
        if is_disabled(pkg.name):
            logger.debug("Skipping disabled package {}", pkg.name)
            continue
        folders.append(FolderEntry(name=pkg.name, path=pkg.srcdir))

    return folders
