"""Service configuration loaded from CODESYNC_* environment variables."""

from __future__ import annotations

import sys
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _running_python_version() -> str:
    return f"{sys.version_info.major}.{sys.version_info.minor}"


class CodeSyncSettings(BaseSettings):
    """codesync settings.

    All fields are read from environment variables with the ``CODESYNC_``
    prefix, e.g. ``CODESYNC_BUILD_DIR=/abs/build`` maps to ``build_dir``.

    The three integration gates (``CODE_INTEGRATION`` ...) are **not** managed
    here -- they are persisted in the option store next to the workspace so
    that every checkout carries its own answers.
    """

    model_config = SettingsConfigDict(
        env_prefix="CODESYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"

    # -- Workspace layout ------------------------------------------------------
    root_dir: Path = Field(default_factory=Path.cwd)
    """Workspace root; the descriptor and ``.vscode/`` live directly under it."""

    workspace_name: str = "autoproj"
    """Descriptor basename: ``{root_dir}/{workspace_name}.code-workspace``."""

    build_dir: str = "build"
    """Build output directory.  Relative values are relative to each package."""

    prefix: str = "install"
    """Install prefix, relative to ``root_dir`` unless absolute."""

    # -- Tooling ---------------------------------------------------------------
    cpplint_root: str = "include"
    python_version: str = Field(default_factory=_running_python_version)

    # -- Collaborator data files -----------------------------------------------
    options_file: str = ".autoproj/codesync-options.json"
    manifest_file: str = ".autoproj/installation-manifest.json"
    disabled_packages: list[str] = Field(default_factory=list)
    """Packages the build has disabled (JSON list in the environment)."""

    @field_validator("root_dir")
    @classmethod
    def _absolute_root(cls, value: Path) -> Path:
        return value.expanduser().resolve()

    # -- Helpers ---------------------------------------------------------------

    def resolve(self, relative: str) -> Path:
        """Resolve *relative* against ``root_dir`` (absolute paths pass through)."""
        path = Path(relative)
        return path if path.is_absolute() else self.root_dir / path

    @property
    def prefix_dir(self) -> Path:
        return self.resolve(self.prefix)


def get_settings() -> CodeSyncSettings:
    """Return a cached settings instance.

    Call ``_get_settings_cached.cache_clear()`` in tests to force a re-read after
    overriding env vars.
    """
    return _get_settings_cached()


@lru_cache(maxsize=1)
def _get_settings_cached() -> CodeSyncSettings:
    return CodeSyncSettings()

