"""Data models for codesync."""

from codesync.models.manifest import InstallationManifest, PackageInfo, PackageSetInfo
from codesync.models.options import IntegrationOptions, OptionSpec, OptionType
from codesync.models.workspace import (
    Extensions,
    FolderEntry,
    SettingsFragment,
    SettingValue,
    WorkspaceDescriptor,
)

__all__ = [
    "Extensions",
    "FolderEntry",
    "InstallationManifest",
    "IntegrationOptions",
    "OptionSpec",
    "OptionType",
    "PackageInfo",
    "PackageSetInfo",
    "SettingValue",
    "SettingsFragment",
    "WorkspaceDescriptor",
]
