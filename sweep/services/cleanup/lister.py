"""Discover the releases present on a node."""

from __future__ import annotations

import posixpath
import shlex
from dataclasses import dataclass

from sweep.core.deployment import Application, Deployment, Node
from sweep.core.result import Err, Ok, Result
from sweep.platform.shell import ShellExecutionError, ShellExecutor

__all__ = ["ReleaseListing", "list_releases", "resolve_release_symlink"]


@dataclass(frozen=True, slots=True)
class ReleaseListing:
    """Release directories in discovery order, plus the ``previous`` target."""

    releases: tuple[str, ...]
    previous: str | None = None


def _list_script(releases_path: str) -> str:
    # Trailing "/." makes test and find follow a symlinked releases path.
    path = shlex.quote(posixpath.join(releases_path, "."))
    return (
        f"if [ -d {path} ]; then "
        f"find {path} -mindepth 1 -maxdepth 1 -type d -exec basename {{}} \\; ; "
        "fi"
    )


def _symlink_script(link_path: str) -> str:
    link = shlex.quote(link_path)
    return f'if [ -h {link} ]; then basename "$(readlink {link})"; fi'


def _lines(output: str) -> tuple[str, ...]:
    # Only line terminators are dropped; names are otherwise kept verbatim.
    return tuple(line for line in output.splitlines() if line)


def resolve_release_symlink(
    name: str,
    node: Node,
    application: Application,
    deployment: Deployment,
    shell: ShellExecutor,
) -> Result[str | None, ShellExecutionError]:
    """Return the release a ``<releases>/<name>`` symlink points to.

    None when the symlink does not exist.
    """
    link_path = posixpath.join(application.releases_path, name)
    result = shell.query(_symlink_script(link_path), node, deployment)
    if isinstance(result, Err):
        return result
    target = result.value.removesuffix("\n")
    return Ok(target or None)


def list_releases(
    node: Node,
    application: Application,
    deployment: Deployment,
    shell: ShellExecutor,
) -> Result[ReleaseListing, ShellExecutionError]:
    """List release directories and resolve the ``previous`` release.

    Read-only. A missing releases directory yields an empty listing; only a
    failing query is an error.
    """
    previous = resolve_release_symlink("previous", node, application, deployment, shell)
    if isinstance(previous, Err):
        return previous

    listed = shell.query(_list_script(application.releases_path), node, deployment)
    if isinstance(listed, Err):
        return listed

    return Ok(ReleaseListing(releases=_lines(listed.value), previous=previous.value))
