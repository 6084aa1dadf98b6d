"""Tests for sweep.services.cleanup.lister."""

from __future__ import annotations

import os
from pathlib import Path

from sweep.core.deployment import LOCALHOST, Application, Deployment, Node
from sweep.core.result import Err, Ok
from sweep.output.console import MockConsole
from sweep.platform.shell import ShellCommandService
from sweep.services.cleanup.lister import ReleaseListing, list_releases, resolve_release_symlink

from ._fakes import FakeShell

LOCAL = Node(name=LOCALHOST)
NODE = Node(name="web1", hostname="web1.example.com")
APP = Application(name="shop", deployment_path="/srv/shop")


def _deployment() -> Deployment:
    return Deployment(release_identifier="20230104000000", logger=MockConsole())


def test_lists_releases_and_previous() -> None:
    shell = FakeShell(
        releases=["20230101000000", "20230102000000"],
        previous="20230102000000",
    )

    result = list_releases(NODE, APP, _deployment(), shell)

    assert result == Ok(
        ReleaseListing(
            releases=("20230101000000", "20230102000000"),
            previous="20230102000000",
        )
    )


def test_missing_previous_is_none() -> None:
    shell = FakeShell(releases=["20230101000000"])

    result = list_releases(NODE, APP, _deployment(), shell)

    assert isinstance(result, Ok)
    assert result.value.previous is None


def test_empty_output_is_empty_listing() -> None:
    result = list_releases(NODE, APP, _deployment(), FakeShell())
    assert result == Ok(ReleaseListing(releases=()))


def test_queries_are_read_only_and_quote_paths() -> None:
    app = Application(name="shop", deployment_path="/srv/my shop")
    shell = FakeShell()

    list_releases(NODE, app, _deployment(), shell)

    assert len(shell.queries) == 2
    assert all("'/srv/my shop/releases" in q for q in shell.queries)
    assert not any("rm " in q for q in shell.queries)
    assert shell.submitted == []


def test_names_keep_surrounding_whitespace() -> None:
    shell = FakeShell(releases=["x ", " 20230101000000"], previous="y ")

    result = list_releases(NODE, APP, _deployment(), shell)

    assert result == Ok(ReleaseListing(releases=("x ", " 20230101000000"), previous="y "))


def test_listing_follows_symlinked_releases_path(tmp_path: Path) -> None:
    real = tmp_path / "storage"
    (real / "20230101000000").mkdir(parents=True)
    (real / "20230102000000").mkdir()
    (tmp_path / "app").mkdir()
    os.symlink(real, tmp_path / "app" / "releases")
    app = Application(name="shop", deployment_path=str(tmp_path / "app"))

    result = list_releases(LOCAL, app, _deployment(), ShellCommandService())

    assert isinstance(result, Ok)
    assert sorted(result.value.releases) == ["20230101000000", "20230102000000"]


def test_query_failure_is_shell_error() -> None:
    result = list_releases(NODE, APP, _deployment(), FakeShell(fail_queries=True))

    assert isinstance(result, Err)
    assert result.error.returncode == 255


def test_resolve_current_symlink() -> None:
    shell = FakeShell(current="20230103000000")

    result = resolve_release_symlink("current", NODE, APP, _deployment(), shell)

    assert result == Ok("20230103000000")
    assert "/srv/shop/releases/current" in shell.queries[0]
