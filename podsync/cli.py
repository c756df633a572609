"""
podsync CLI

Usage:
    podsync reconcile installation.json
    podsync reconcile installation.json --dry-run --log-format json
    podsync plan installation.json
"""

from pathlib import Path

import typer

from podsync.common.exceptions import PodsyncError
from podsync.common.observability import setup_logging
from podsync.config.settings import Settings
from podsync.generator.planning import packages_to_install, packages_to_remove, targets_to_install
from podsync.generator.reconciler import Reconciler
from podsync.loader import InstallationDocument

app = typer.Typer(help="Reconcile the Pods project with the resolved targets")


def _load(document: Path, settings: Settings) -> Reconciler:
    installation = InstallationDocument.load(document)
    sandbox = installation.build_sandbox(document.parent, settings.project.project_file_name)
    return Reconciler(
        sandbox=sandbox,
        aggregates=installation.build_specs(),
        user_build_configurations=installation.user_build_configurations,
        manifest_path=installation.manifest_path,
        config=settings.project,
    )


@app.command()
def reconcile(
    document: Path = typer.Argument(..., exists=True, dir_okay=False, help="Installation document (JSON)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Reconcile in memory without writing the project"),
    log_format: str | None = typer.Option(None, "--log-format", help="console or json"),
):
    """Reconcile the project and write it."""
    settings = Settings()
    setup_logging(settings.observability.log_level, log_format or settings.observability.log_format)

    try:
        reconciler = _load(document, settings)
        result = reconciler.run(persist=not dry_run)
    except PodsyncError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=1) from e

    typer.echo(f"Project: {reconciler.store.path}{' (dry run)' if dry_run else ''}")
    typer.echo("=" * 60)
    for key, value in result.summary().items():
        if isinstance(value, list):
            value = ", ".join(value) or "-"
        typer.echo(f"   {key}: {value}")
    typer.echo("\n✅ No changes" if result.is_noop else "\n✅ Reconciled")


@app.command()
def plan(
    document: Path = typer.Argument(..., exists=True, dir_okay=False, help="Installation document (JSON)"),
):
    """Show what a reconcile would remove and install, without changing anything."""
    settings = Settings()
    setup_logging("WARNING", settings.observability.log_format)

    try:
        reconciler = _load(document, settings)
        ctx = reconciler.context
        new_project = reconciler.should_create_new_project()
        if not new_project:
            reconciler.detect_native_targets(ctx, reconciler.store.open())
    except PodsyncError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=1) from e

    state = ctx.sandbox.state
    typer.echo(f"new_project: {new_project}")
    typer.echo(f"packages_to_remove: {', '.join(packages_to_remove(state, new_project)) or '-'}")
    typer.echo(f"packages_to_install: {', '.join(packages_to_install(ctx.pod_specs, state, new_project)) or '-'}")
    labels = [aggregate.label for aggregate in targets_to_install(ctx.aggregates, new_project)]
    typer.echo(f"targets_to_install: {', '.join(labels) or '-'}")


def main():
    app()


if __name__ == "__main__":
    main()
