"""Installation manifest data model.

The manifest is produced by the build orchestrator after each update and
lists every package set and package checked out in the workspace.  codesync
only reads it.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class PackageSetInfo(BaseModel):
    """A package set and the directory users edit it in."""

    name: str
    user_local_dir: str


class PackageInfo(BaseModel):
    """A source package and its checkout directory."""

    name: str
    srcdir: str


class InstallationManifest(BaseModel):
    """Package sets and packages, keyed by name."""

    package_sets: dict[str, PackageSetInfo] = Field(default_factory=dict)
    packages: dict[str, PackageInfo] = Field(default_factory=dict)
