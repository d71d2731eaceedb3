"""Persisted integration options.

The option table is fixed.  Each gate is only looked at when the gate above
it is open, so a user who turned integration off is never asked about
folders::

    CODE_INTEGRATION      (yes)  -> generate the workspace file at all
    CODE_MANAGE_FOLDERS   (no)   -> replace the folder list from the manifest
    CODE_ADD_CONFIG       (no)   -> include buildconf and package sets

Values live in a small JSON file next to the workspace
(``.autoproj/codesync-options.json`` by default).
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from codesync.fileio import atomic_write, read_text
from codesync.models import IntegrationOptions, OptionSpec, OptionType

INTEGRATION_OPTION = OptionSpec(
    key="CODE_INTEGRATION",
    default=True,
    doc="Do you want codesync to generate a Visual Studio Code workspace file? (yes or no)",
)
MANAGE_FOLDERS_OPTION = OptionSpec(
    key="CODE_MANAGE_FOLDERS",
    default=False,
    doc="Should codesync manage folders in the Visual Studio Code workspace? (yes or no)",
)
ADD_CONFIG_OPTION = OptionSpec(
    key="CODE_ADD_CONFIG",
    default=False,
    doc="Should the buildconf and package sets be included in your Visual Studio Code workspace? (yes or no)",
)

OPTION_TABLE = (INTEGRATION_OPTION, MANAGE_FOLDERS_OPTION, ADD_CONFIG_OPTION)

SKIP_DEPENDENCIES_KEY = "CODE_SKIP_DEPENDENCIES"

_MISSING: Any = object()

_ADAPTERS = {
    OptionType.BOOLEAN: TypeAdapter(bool),
    OptionType.STRING: TypeAdapter(str),
}


class OptionStoreError(ValueError):
    """The option file is unreadable or holds a value of the wrong type."""


def coerce_option(spec: OptionSpec, value: Any) -> Any:
    """Convert a stored value to the declared type (accepts yes/no for booleans)."""
    try:
        return _ADAPTERS[spec.type].validate_python(value)
    except ValidationError as exc:
        msg = f"Option {spec.key}={value!r} is not a valid {spec.type}"
        raise OptionStoreError(msg) from exc


@runtime_checkable
class OptionStore(Protocol):
    """Key/value option store with declarations."""

    def declare(self, key: str, type: OptionType, default: Any, doc: str) -> None:  # noqa: A002
        """Declare *key*; persists *default* unless a value is already set."""
        ...

    def get(self, key: str, default: Any = _MISSING) -> Any:
        """Value of *key*, falling back to its declared default, then *default*."""
        ...


class JsonOptionStore:
    """``OptionStore`` persisted as a flat JSON object."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._declared: dict[str, OptionSpec] = {}
        self._values = self._read()

    def _read(self) -> dict[str, Any]:
        try:
            raw = read_text(self.path)
            if raw is None:
                return {}
            data = json.loads(raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            msg = f"Cannot parse option file {self.path}: {exc}"
            raise OptionStoreError(msg) from exc
        if not isinstance(data, dict):
            msg = f"Option file {self.path} must contain a JSON object"
            raise OptionStoreError(msg)
        return data

    def _write(self) -> None:
        atomic_write(self.path, json.dumps(self._values, indent=2, sort_keys=True) + "\n")

    def _coerce(self, key: str, value: Any) -> Any:
        spec = self._declared.get(key)
        return value if spec is None else coerce_option(spec, value)

    def declare(self, key: str, type: OptionType, default: Any, doc: str) -> None:  # noqa: A002
        self._declared[key] = OptionSpec(key=key, type=type, default=default, doc=doc)
        if key in self._values:
            return
        self._values[key] = default
        self._write()
        logger.info("Option {} defaulted to {}", key, default)

    def get(self, key: str, default: Any = _MISSING) -> Any:
        if key in self._values:
            return self._coerce(key, self._values[key])
        if key in self._declared:
            return self._declared[key].default
        if default is not _MISSING:
            return default
        msg = f"Option {key} is neither set nor declared"
        raise OptionStoreError(msg)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = self._coerce(key, value)
        self._write()

    def doc(self, key: str) -> str | None:
        spec = self._declared.get(key)
        return spec.doc if spec else None


def _resolve_gates(fetch: Callable[[OptionSpec], bool]) -> IntegrationOptions:
    if not fetch(INTEGRATION_OPTION):
        return IntegrationOptions()
    if not fetch(MANAGE_FOLDERS_OPTION):
        return IntegrationOptions(integration_enabled=True)
    return IntegrationOptions(
        integration_enabled=True,
        folders_managed=True,
        package_sets_included=fetch(ADD_CONFIG_OPTION),
    )


def read_options(store: OptionStore) -> IntegrationOptions:
    """Read the gates for one run, using table defaults for unset options."""
    return _resolve_gates(lambda spec: coerce_option(spec, store.get(spec.key, spec.default)))


def declare_options(store: OptionStore) -> IntegrationOptions:
    """Declare the gates with their defaults, stopping at the first closed one."""

    def fetch(spec: OptionSpec) -> bool:
        store.declare(spec.key, spec.type, spec.default, spec.doc)
        return coerce_option(spec, store.get(spec.key))

    return _resolve_gates(fetch)
