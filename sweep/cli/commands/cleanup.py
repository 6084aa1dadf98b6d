"""Cleanup command - remove old releases from every node."""

from __future__ import annotations

from pathlib import Path

import typer

from sweep.cli.commands._helpers import exit_user_error, exit_with_cleanup_error
from sweep.cli.context import CLIContext, build_context
from sweep.core.deployment import Deployment, Node
from sweep.core.result import Err
from sweep.output.console import Style
from sweep.services.cleanup.cleaner import ReleaseCleaner
from sweep.services.cleanup.lister import resolve_release_symlink


def _select_nodes(ctx: CLIContext, names: list[str] | None) -> list[Node]:
    if not names:
        return list(ctx.config.nodes)

    selected: list[Node] = []
    for name in names:
        node = ctx.config.node(name)
        if node is None:
            available = ", ".join(n.name for n in ctx.config.nodes)
            exit_user_error(f"unknown node: {name}", ctx.console, hint=f"Available: {available}")
        selected.append(node)
    return selected


def _current_release(ctx: CLIContext, node: Node, dry_run: bool) -> str:
    lookup = Deployment(release_identifier="", logger=ctx.console, dry_run=dry_run)
    result = resolve_release_symlink(
        "current", node, ctx.config.application, lookup, ctx.shell
    )
    if isinstance(result, Err):
        exit_with_cleanup_error(result.error, ctx.console)
    if result.value is None:
        exit_user_error(
            f"no current release on {node.name}",
            ctx.console,
            hint="Pass --release to name the live release explicitly.",
        )
    return result.value


def cleanup(
    config: Path = typer.Option(
        Path("sweep.toml"), "--config", "-c", help="Path to the sweep config file"
    ),
    release: str | None = typer.Option(
        None, "--release", help="Live release identifier (default: target of 'current')"
    ),
    node: list[str] | None = typer.Option(
        None, "--node", help="Only clean these nodes (repeatable)"
    ),
    keep: int | None = typer.Option(None, "--keep", help="Override keep_releases"),
    older_than: str | None = typer.Option(
        None,
        "--older-than",
        help='Override only_remove_releases_older_than (e.g. "7 days ago")',
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Execute (default is dry-run)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show commands"),
) -> None:
    """Remove old releases. Dry-run by default, use -y to execute."""
    ctx = build_context(config, verbose=verbose)
    console = ctx.console
    dry_run = not yes

    options = ctx.config.options.with_overrides(
        keep_releases=keep, only_remove_releases_older_than=older_than
    )
    validated = options.validate()
    if isinstance(validated, Err):
        exit_with_cleanup_error(validated.error, console)
    if keep is not None and options.strategy == "age":
        console.warning(
            "--keep is ignored while only_remove_releases_older_than is set"
        )
    nodes = _select_nodes(ctx, node)
    cleaner = ReleaseCleaner(ctx.shell, ctx.clock)

    if yes:
        console.print("\nEXECUTE\n", Style.ERROR)
    else:
        console.print("\nDRY-RUN\n", Style.WARNING)

    application = ctx.config.application
    for target in nodes:
        console.header(f"{application.name} @ {target.name}")
        release_id = release or ""
        # Keeping everything must not touch the node.
        if not release_id and options.strategy != "keep_all":
            release_id = _current_release(ctx, target, dry_run)
        deployment = Deployment(release_identifier=release_id, logger=console, dry_run=dry_run)

        if dry_run:
            result = cleaner.simulate(target, application, deployment, options)
        else:
            result = cleaner.run(target, application, deployment, options)

        if isinstance(result, Err):
            exit_with_cleanup_error(result.error, console)

        if result.value.removed and not dry_run:
            console.success(f"removed {len(result.value.removed)} release(s)")

    if dry_run:
        console.print("\nUse -y to execute", Style.DIM)
