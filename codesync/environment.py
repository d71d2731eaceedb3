"""Environment value provider.

The host build tool owns the workspace environment (what ``env.sh``
exports).  codesync only needs to read a few path-list variables from it,
and, at setup time, to add the install prefix's python site directories to
``PYTHONPATH``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from loguru import logger


@runtime_checkable
class EnvironmentProvider(Protocol):
    """Read access to the workspace environment."""

    def value(self, name: str) -> list[str]:
        """Path-list value of *name*, split into entries.  Empty if unset."""
        ...

    def get(self, name: str) -> str:
        """Raw value of *name*.  Empty string if unset."""
        ...


class ProcessEnvironment:
    """Environment backed by a plain mapping (``os.environ`` by default).

    Paths added with ``add_path`` are kept in insertion order and never
    duplicated.
    """

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        source = os.environ if initial is None else initial
        self._values: dict[str, list[str]] = {
            name: [entry for entry in raw.split(os.pathsep) if entry] for name, raw in source.items()
        }

    def value(self, name: str) -> list[str]:
        return list(self._values.get(name, []))

    def get(self, name: str) -> str:
        return os.pathsep.join(self._values.get(name, []))

    def add_path(self, name: str, path: str | Path) -> None:
        entries = self._values.setdefault(name, [])
        if str(path) not in entries:
            entries.append(str(path))


def python_site_dirs(prefix: Path, python_version: str) -> list[Path]:
    """``dist-packages`` and ``site-packages`` for *python_version* under *prefix*."""
    lib_dir = prefix / "lib" / f"python{python_version}"
    return [lib_dir / "dist-packages", lib_dir / "site-packages"]


def ensure_python_site_dirs(env: ProcessEnvironment, prefix: Path, python_version: str) -> list[Path]:
    """Create the prefix's python site directories and add them to ``PYTHONPATH``."""
    site_dirs = python_site_dirs(prefix, python_version)
    for site_dir in site_dirs:
        site_dir.mkdir(parents=True, exist_ok=True)
        env.add_path("PYTHONPATH", site_dir)
    logger.debug("PYTHONPATH extended with {}", [str(p) for p in site_dirs])
    return site_dirs
