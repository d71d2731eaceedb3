from __future__ import annotations

from pathlib import Path

import click

from codesync.settings import CodeSyncSettings, get_settings


def _load_settings(root: Path | None) -> CodeSyncSettings:
    from codesync.log import setup_logging

    settings = CodeSyncSettings(root_dir=root) if root is not None else get_settings()
    setup_logging(settings.log_level)
    return settings


def _build_integration(settings: CodeSyncSettings):
    """Wire the controller to the on-disk option store, manifest and environment."""
    from codesync.environment import ProcessEnvironment, ensure_python_site_dirs
    from codesync.folders import ManifestRegistry, load_manifest
    from codesync.integration import CodeIntegration
    from codesync.options import JsonOptionStore

    environment = ProcessEnvironment()
    ensure_python_site_dirs(environment, settings.prefix_dir, settings.python_version)

    manifest = load_manifest(settings.resolve(settings.manifest_file))
    integration = CodeIntegration(
        settings,
        option_store=JsonOptionStore(settings.resolve(settings.options_file)),
        environment=environment,
        registry=ManifestRegistry.from_manifest(manifest, settings.disabled_packages),
        manifest_source=lambda: manifest,
    )
    return integration, manifest


def _domain_errors() -> tuple[type[Exception], ...]:
    from codesync.folders import ManifestError
    from codesync.merge import DescriptorParseError
    from codesync.options import OptionStoreError

    return DescriptorParseError, ManifestError, OptionStoreError


@click.group()
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Workspace root (default: from CODESYNC_ROOT_DIR or the current directory).",
)
@click.pass_context
def main(ctx: click.Context, root: Path | None) -> None:
    """codesync - keep a VS Code workspace file in sync with the checkout."""
    ctx.obj = root


@main.command()
@click.pass_obj
def integrate(root: Path | None) -> None:
    """Run the post-update hooks: rewrite shims and the workspace file."""
    from codesync.hooks import UPDATE_COMMAND, PostCommandHooks

    settings = _load_settings(root)
    try:
        integration, _ = _build_integration(settings)
        hooks = PostCommandHooks()
        integration.setup_integration(hooks)
        hooks.run(UPDATE_COMMAND)
    except _domain_errors() as exc:
        raise click.ClickException(str(exc)) from exc

    if integration.options().integration_enabled:
        click.echo(f"Updated {integration.workspace_file.path}")
    else:
        click.echo("Code integration is disabled (CODE_INTEGRATION=no).")


@main.command()
@click.pass_obj
def setup(root: Path | None) -> None:
    """Declare the integration options and add the recommended tools to the build."""
    from codesync.hooks import PostCommandHooks
    from codesync.integration import StaticBuildLayout

    settings = _load_settings(root)
    try:
        integration, manifest = _build_integration(settings)
        integration.setup_integration(PostCommandHooks())
        layout = StaticBuildLayout(frozenset(manifest.packages))
        added = integration.setup_dependencies(layout)
    except _domain_errors() as exc:
        raise click.ClickException(str(exc)) from exc

    for name in added:
        click.echo(f"Added {name} to the build layout")


@main.command()
@click.pass_obj
def options(root: Path | None) -> None:
    """Show the resolved integration gates."""
    settings = _load_settings(root)
    try:
        integration, _ = _build_integration(settings)
        resolved = integration.options()
    except _domain_errors() as exc:
        raise click.ClickException(str(exc)) from exc

    for name, value in resolved.model_dump().items():
        click.echo(f"{name}: {'yes' if value else 'no'}")


if __name__ == "__main__":
    main()
