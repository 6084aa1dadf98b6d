"""Deployment context: the node, the application, and the current run.

These are plain values handed to the cleanup service. ``Deployment`` carries
the per-run state (release being deployed, dry-run flag, logger).
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sweep.output.console import ConsoleProtocol

__all__ = ["Application", "Deployment", "Node", "LOCALHOST"]

LOCALHOST = "localhost"


@dataclass(frozen=True, slots=True)
class Node:
    """A deployment target.

    A node without a hostname (or with ``localhost``) is the local machine and
    its commands run without ssh.
    """

    name: str
    hostname: str | None = None
    username: str | None = None
    port: int | None = None

    @property
    def is_local(self) -> bool:
        return self.hostname is None or self.hostname == LOCALHOST

    @property
    def ssh_target(self) -> str:
        host = self.hostname or LOCALHOST
        if self.username:
            return f"{self.username}@{host}"
        return host


@dataclass(frozen=True, slots=True)
class Application:
    """An application deployed below ``deployment_path``.

    Layout on the node:
    - <deployment_path>/releases/<identifier>/
    - <deployment_path>/releases/<identifier>REVISION
    - <deployment_path>/releases/current -> <identifier>
    - <deployment_path>/releases/previous -> <identifier>
    """

    name: str
    deployment_path: str

    @property
    def releases_path(self) -> str:
        return posixpath.join(self.deployment_path.rstrip("/") or "/", "releases")


@dataclass(frozen=True, slots=True)
class Deployment:
    release_identifier: str
    logger: ConsoleProtocol
    dry_run: bool = False
