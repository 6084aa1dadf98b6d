"""Remove old releases from a node.

There is no rollback for this cleanup. Removal is one ``&&`` chain of
``rm`` commands; if it stops partway, the releases removed so far stay
removed. The current and previous release are never selected.

Flow per run: validate options, list releases, compute the removable set,
then remove (or, in dry-run, only log) ``<releases>/<id>`` and
``<releases>/<id>REVISION`` for each selected release.
"""

from __future__ import annotations

import posixpath
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from sweep.core.clock import Clock
from sweep.core.config import RetentionOptions
from sweep.core.deployment import Application, Deployment, Node
from sweep.core.result import Err, Ok, Result
from sweep.platform.shell import ShellCommand, ShellExecutor
from sweep.services.cleanup.errors import CleanupError
from sweep.services.cleanup.lister import list_releases
from sweep.services.cleanup.policy import compute_removable

__all__ = [
    "CleanupOutcome",
    "CleanupState",
    "REVISION_SUFFIX",
    "ReleaseCleaner",
    "removal_commands",
]

REVISION_SUFFIX = "REVISION"


class CleanupState(Enum):
    IDLE = "idle"
    LISTING = "listing"
    DECIDING = "deciding"
    ACTING = "acting"
    DONE = "done"


@dataclass(frozen=True, slots=True)
class CleanupOutcome:
    """What a cleanup run decided.

    Attributes:
        removed: Releases submitted for removal (simulated in dry-run).
        kept_all: True when no retention option was configured.
        last_state: The furthest state reached before finishing.
    """

    removed: tuple[str, ...] = ()
    kept_all: bool = False
    last_state: CleanupState = CleanupState.DONE


def removal_commands(releases_path: str, releases: Sequence[str]) -> list[ShellCommand]:
    """Two commands per release: the directory, then its revision marker."""
    commands: list[ShellCommand] = []
    for release in releases:
        target = posixpath.join(releases_path, release)
        commands.append(("rm", "-rf", "--", target))
        commands.append(("rm", "-f", "--", target + REVISION_SUFFIX))
    return commands


class ReleaseCleaner:
    """Deletes old releases according to ``RetentionOptions``.

    Both collaborators are injected; the cleaner holds no other state, so one
    instance can serve any number of nodes and applications.
    """

    def __init__(self, shell: ShellExecutor, clock: Clock) -> None:
        self._shell = shell
        self._clock = clock

    def run(
        self,
        node: Node,
        application: Application,
        deployment: Deployment,
        options: RetentionOptions,
    ) -> Result[CleanupOutcome, CleanupError]:
        logger = deployment.logger
        dry_run = deployment.dry_run

        validated = options.validate()
        if isinstance(validated, Err):
            return validated

        if options.strategy == "keep_all":
            verb = "Would keep" if dry_run else "Keeping"
            logger.debug(f'{verb} all releases for "{application.name}"')
            return Ok(CleanupOutcome(kept_all=True, last_state=CleanupState.IDLE))

        listing = list_releases(node, application, deployment, self._shell)
        if isinstance(listing, Err):
            return listing

        removable = compute_removable(
            listing.value.releases,
            deployment.release_identifier,
            listing.value.previous,
            options,
            self._clock,
        )
        if isinstance(removable, Err):
            return removable

        releases = removable.value
        if not releases:
            logger.info("No releases to remove")
            return Ok(CleanupOutcome(last_state=CleanupState.DECIDING))

        verb = "Would remove" if dry_run else "Removing"
        logger.info(f"{verb} releases {', '.join(releases)}")
        commands = removal_commands(application.releases_path, releases)
        acted = self._shell.act_or_simulate(commands, node, deployment)
        if isinstance(acted, Err):
            return acted

        return Ok(CleanupOutcome(removed=releases, last_state=CleanupState.ACTING))

    def simulate(
        self,
        node: Node,
        application: Application,
        deployment: Deployment,
        options: RetentionOptions,
    ) -> Result[CleanupOutcome, CleanupError]:
        """Same as ``run``; the executor decides whether anything is mutated."""
        return self.run(node, application, deployment, options)
