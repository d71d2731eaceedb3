"""Integration controller.

Ties the pieces together after each workspace update::

    options gates -> [load descriptor] -> write shims -> merge + save descriptor

The descriptor is loaded (and validated) before anything touches the disk,
so an unparsable file aborts the run with nothing written.  Shims are
written before the descriptor is saved because the saved settings point at
them.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from loguru import logger

from codesync.catalog import EXTENSION_RECOMMENDATIONS, managed_fragments
from codesync.environment import EnvironmentProvider
from codesync.folders import PackageRegistry, resolve_folders
from codesync.hooks import UPDATE_COMMAND, PostCommandHooks
from codesync.merge import WorkspaceFile, merge
from codesync.models import FolderEntry, InstallationManifest, IntegrationOptions, OptionSpec, WorkspaceDescriptor
from codesync.options import (
    SKIP_DEPENDENCIES_KEY,
    OptionStore,
    coerce_option,
    declare_options,
    read_options,
)
from codesync.settings import CodeSyncSettings
from codesync.shims import ShimPaths, write_shims

RECOMMENDED_DEPENDENCIES = ("pycodestyle-latest", "cpplint-latest")

_SKIP_DEPENDENCIES_OPTION = OptionSpec(key=SKIP_DEPENDENCIES_KEY, default=False, doc="")


@runtime_checkable
class BuildLayout(Protocol):
    """The host build's package layout."""

    def has_package(self, name: str) -> bool: ...

    def add_package_to_layout(self, name: str) -> None: ...


class CodeIntegration:
    """Generates and maintains ``{root}/{name}.code-workspace`` and its shims.

    Construct one instance at startup and hand it to whatever owns the host's
    hooks (see ``setup_integration``).
    """

    def __init__(
        self,
        settings: CodeSyncSettings,
        *,
        option_store: OptionStore,
        environment: EnvironmentProvider,
        registry: PackageRegistry,
        manifest_source: Callable[[], InstallationManifest],
    ) -> None:
        self.settings = settings
        self.option_store = option_store
        self.environment = environment
        self.registry = registry
        self.manifest_source = manifest_source
        self.paths = ShimPaths(settings.root_dir)
        self.recommendations = list(EXTENSION_RECOMMENDATIONS)
        self.dependencies = list(RECOMMENDED_DEPENDENCIES)

    @property
    def workspace_file(self) -> WorkspaceFile:
        return WorkspaceFile(self.settings.root_dir / f"{self.settings.workspace_name}.code-workspace")

    def options(self) -> IntegrationOptions:
        return read_options(self.option_store)

    # -- Computation -----------------------------------------------------------

    def updated_folders(self, options: IntegrationOptions) -> list[FolderEntry]:
        return resolve_folders(
            self.manifest_source(),
            self.registry.is_disabled,
            root_dir=self.settings.root_dir,
            include_package_sets=options.package_sets_included,
        )

    def updated_workspace(self, options: IntegrationOptions) -> WorkspaceDescriptor:
        """Current descriptor merged with the managed content.  Nothing is written."""
        current = self.workspace_file.load()
        fragments = managed_fragments(
            self.paths,
            build_dir=self.settings.build_dir,
            extra_paths=self.environment.value("PYTHONPATH"),
            cpplint_root=self.settings.cpplint_root,
        )
        folders = self.updated_folders(options) if options.folders_managed else None
        return merge(current, fragments, folders=folders, recommendations=self.recommendations)

    # -- Side effects ----------------------------------------------------------

    def write_shims(self) -> None:
        write_shims(
            self.paths,
            python_user_base=self.environment.get("PYTHONUSERBASE"),
            python_path=self.environment.get("PYTHONPATH"),
        )

    def integrate(self) -> WorkspaceDescriptor | None:
        """Run one integration pass.  Returns the saved descriptor, or ``None`` if disabled."""
        options = self.options()
        if not options.integration_enabled:
            logger.debug("Code integration disabled, nothing to do")
            return None

        updated = self.updated_workspace(options)
        self.write_shims()
        self.workspace_file.save(updated)
        return updated

    def on_workspace_updated(self) -> None:
        """Post-update hook entry point."""
        self.integrate()

    # -- Setup -----------------------------------------------------------------

    def setup_integration(self, hooks: PostCommandHooks) -> IntegrationOptions:
        """Register the post-update hook and declare the options gate by gate."""
        hooks.register(UPDATE_COMMAND, self.on_workspace_updated)
        return declare_options(self.option_store)

    def setup_dependencies(self, layout: BuildLayout) -> list[str]:
        """Add the recommended tools to the build layout.  Returns the ones added."""
        skip = coerce_option(_SKIP_DEPENDENCIES_OPTION, self.option_store.get(SKIP_DEPENDENCIES_KEY, False))
        if skip or not self.options().integration_enabled:
            return []

        added: list[str] = []
        for tool in self.dependencies:
            if layout.has_package(tool):
                layout.add_package_to_layout(tool)
                added.append(tool)
            else:
                logger.warning("Could not find package `{}`, recommended for vscode integration", tool)
        return added


class StaticBuildLayout:
    """``BuildLayout`` over a fixed set of available packages."""

    def __init__(self, available: set[str] | frozenset[str], selected: list[str] | None = None) -> None:
        self.available = frozenset(available)
        self.selected = list(selected or [])

    def has_package(self, name: str) -> bool:
        return name in self.available

    def add_package_to_layout(self, name: str) -> None:
        if name not in self.selected:
            self.selected.append(name)
