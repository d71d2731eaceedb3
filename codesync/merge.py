"""Workspace merge engine.

Reads the current ``.code-workspace`` file, layers the managed settings on
top of it and writes it back.  The merge never drops user content:

- settings keys we do not manage are left alone;
- the include/browse path lists are unioned (managed entries first, then the
  user's remaining entries, without duplicates);
- ``folders`` is only replaced when a new folder list is given;
- unknown top-level keys survive as model extras.

A file that exists but cannot be parsed aborts the run before anything is
written: overwriting it would lose whatever the user had in it.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Sequence
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from codesync.catalog import APPENDED_LIST_KEYS
from codesync.fileio import atomic_write, read_text
from codesync.models import FolderEntry, SettingsFragment, SettingValue, WorkspaceDescriptor


class DescriptorParseError(ValueError):
    """The workspace file exists but is not a valid workspace document."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot parse workspace file {path}: {reason}")
        self.path = path


def empty_workspace() -> WorkspaceDescriptor:
    return WorkspaceDescriptor()


def load_descriptor(path: Path) -> WorkspaceDescriptor:
    """Load *path*, or return the empty workspace if it does not exist.

    Keys missing from the file are filled in from the empty workspace.
    Raises ``DescriptorParseError`` for anything we cannot understand.
    """
    try:
        raw = read_text(path)
        if raw is None:
            return empty_workspace()
        return WorkspaceDescriptor.model_validate_json(raw)
    except (UnicodeDecodeError, ValidationError) as exc:
        raise DescriptorParseError(path, str(exc)) from exc


def _union(first: Iterable[SettingValue], then: Iterable[SettingValue]) -> list[SettingValue]:
    merged: list[SettingValue] = []
    for item in (*first, *then):
        if item not in merged:
            merged.append(item)
    return merged


def _as_list(value: SettingValue | None) -> list[SettingValue]:
    if value is None:
        return []
    if isinstance(value, list):
        return list(value)
    return [value]


def merge(
    current: WorkspaceDescriptor,
    fragments: Sequence[SettingsFragment],
    *,
    folders: Sequence[FolderEntry] | None = None,
    recommendations: Sequence[str] = (),
) -> WorkspaceDescriptor:
    """Return a new descriptor with *fragments* applied to *current*.

    Parameters
    ----------
    current:
        The descriptor as read from disk (or the empty workspace).
    fragments:
        Managed settings, applied in order.  Later fragments win.
    folders:
        Replacement folder list, or ``None`` to keep the current folders.
    recommendations:
        Extension identifiers; always replace the current recommendations.
    """
    merged = current.model_copy(deep=True)

    for fragment in fragments:
        for key, value in fragment.items():
            if key in APPENDED_LIST_KEYS:
                merged.settings[key] = _union(_as_list(value), _as_list(merged.settings.get(key)))
            else:
                merged.settings[key] = copy.deepcopy(value)

    if folders is not None:
        merged.folders = [folder.model_copy() for folder in folders]

    merged.extensions.recommendations = list(recommendations)
    return merged


def dump_descriptor(descriptor: WorkspaceDescriptor) -> str:
    return descriptor.model_dump_json(indent=2) + "\n"


def save_descriptor(path: Path, descriptor: WorkspaceDescriptor) -> None:
    """Pretty-print *descriptor* to *path* with a single atomic replace."""
    atomic_write(path, dump_descriptor(descriptor))
    logger.info("Saved workspace file {}", path)


class WorkspaceFile:
    """A ``.code-workspace`` file on disk."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> WorkspaceDescriptor:
        return load_descriptor(self.path)

    def save(self, descriptor: WorkspaceDescriptor) -> None:
        save_descriptor(self.path, descriptor)

    def update(
        self,
        fragments: Sequence[SettingsFragment],
        *,
        folders: Sequence[FolderEntry] | None = None,
        recommendations: Sequence[str] = (),
    ) -> WorkspaceDescriptor:
        """Load, merge and save.  Returns the descriptor that was written."""
        updated = merge(self.load(), fragments, folders=folders, recommendations=recommendations)
        self.save(updated)
        return updated
