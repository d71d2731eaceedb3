"""Workspace descriptor data model.

Mirrors the layout of a VS Code ``.code-workspace`` file::

    {
      "folders": [{"name": "...", "path": "..."}],
      "settings": {"dotted.key": <value>},
      "extensions": {"recommendations": ["publisher.extension"]}
    }

Keys we do not manage (``launch``, ``tasks``, ``extensions.unwantedRecommendations``,
extra folder attributes) are kept as pydantic extras so they round-trip
untouched.
"""

from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, JsonValue, SerializerFunctionWrapHandler, model_serializer

SettingValue = Union[bool, int, float, str, list[str], list[list[str]], JsonValue]  # noqa: UP007
"""Closed set of setting shapes we generate, plus an opaque JSON passthrough
for whatever else a user puts in the file."""

SettingsFragment = dict[str, SettingValue]
"""One coherent group of managed settings, contributed by one tooling concern."""


class FolderEntry(BaseModel):
    """A workspace root folder.

    Generated entries always carry both ``name`` and ``path``.  Entries a user
    added by hand may omit ``name``; unset attributes are not written back.
    """

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    path: str | None = None

    @model_serializer(mode="wrap")
    def _drop_unset(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        return {key: value for key, value in data.items() if not (key in ("name", "path") and value is None)}


class Extensions(BaseModel):
    """``extensions`` block; only ``recommendations`` is managed."""

    model_config = ConfigDict(extra="allow")

    recommendations: list[str] = Field(default_factory=list)


class WorkspaceDescriptor(BaseModel):
    """A parsed ``.code-workspace`` document."""

    model_config = ConfigDict(extra="allow")

    folders: list[FolderEntry] = Field(default_factory=list)
    settings: dict[str, SettingValue] = Field(default_factory=dict)
    extensions: Extensions = Field(default_factory=Extensions)
