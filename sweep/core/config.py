"""Typed configuration loading.

A sweep config file describes one application, its retention options and the
nodes it is deployed to:

    [application]
    name = "shop"
    deployment_path = "/var/www/shop"

    [options]
    keep_releases = 3
    # only_remove_releases_older_than = "7 days ago"

    [[nodes]]
    name = "web1"
    hostname = "web1.example.com"
    username = "deploy"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Literal

from .deployment import LOCALHOST, Application, Node
from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_int, get_str, get_table, get_table_list

__all__ = [
    "ConfigurationError",
    "RetentionOptions",
    "RetentionStrategy",
    "SweepConfig",
    "load_config",
]

RetentionStrategy = Literal["age", "count", "keep_all"]

# Accepted spellings for each option key.
_KEEP_KEYS = ("keep_releases", "keepReleases")
_AGE_KEYS = ("only_remove_releases_older_than", "onlyRemoveReleasesOlderThan")


@dataclass(frozen=True, slots=True)
class ConfigurationError:
    """Invalid option values or an unreadable config file."""

    message: str
    path: Path | None = None
    hint: str | None = None


def _first_present(data: Mapping[str, object], keys: tuple[str, ...]) -> tuple[str, object] | None:
    for key in keys:
        if key in data and data[key] is not None:
            return key, data[key]
    return None


@dataclass(frozen=True, slots=True)
class RetentionOptions:
    """Per-application retention options.

    At most one strategy applies: ``only_remove_releases_older_than`` takes
    precedence over ``keep_releases`` when both are set. With neither set,
    every release is kept.
    """

    keep_releases: int | None = None
    only_remove_releases_older_than: str | None = None

    @property
    def strategy(self) -> RetentionStrategy:
        if self.only_remove_releases_older_than is not None:
            return "age"
        if self.keep_releases is not None:
            return "count"
        return "keep_all"

    def validate(self) -> Result[RetentionOptions, ConfigurationError]:
        if self.keep_releases is not None and self.keep_releases < 0:
            return Err(
                ConfigurationError(
                    f"keep_releases must not be negative (got {self.keep_releases})",
                    hint="Use 0 to remove every release except current and previous.",
                )
            )
        if (
            self.only_remove_releases_older_than is not None
            and not self.only_remove_releases_older_than.strip()
        ):
            return Err(ConfigurationError("only_remove_releases_older_than must not be empty"))
        return Ok(self)

    def with_overrides(
        self,
        *,
        keep_releases: int | None = None,
        only_remove_releases_older_than: str | None = None,
    ) -> RetentionOptions:
        """Return a copy where the given (non-None) values replace ours."""
        updated = self
        if keep_releases is not None:
            updated = replace(updated, keep_releases=keep_releases)
        if only_remove_releases_older_than is not None:
            updated = replace(
                updated, only_remove_releases_older_than=only_remove_releases_older_than
            )
        return updated

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> Result[RetentionOptions, ConfigurationError]:
        """Build options from an untyped mapping (TOML table or CLI dict)."""
        keep: int | None = None
        age: str | None = None

        found = _first_present(data, _KEEP_KEYS)
        if found is not None:
            key, value = found
            if isinstance(value, bool) or not isinstance(value, int):
                return Err(ConfigurationError(f"{key} must be an integer (got {value!r})"))
            keep = value

        found = _first_present(data, _AGE_KEYS)
        if found is not None:
            key, value = found
            if not isinstance(value, str):
                return Err(
                    ConfigurationError(
                        f"{key} must be a string (got {value!r})",
                        hint='e.g. "7 days ago"',
                    )
                )
            age = value

        return cls(keep_releases=keep, only_remove_releases_older_than=age).validate()


@dataclass(frozen=True, slots=True)
class SweepConfig:
    application: Application
    options: RetentionOptions = field(default_factory=RetentionOptions)
    nodes: tuple[Node, ...] = (Node(name=LOCALHOST),)

    def node(self, name: str) -> Node | None:
        for node in self.nodes:
            if node.name == name:
                return node
        return None


def _parse_nodes(data: Mapping[str, object], path: Path) -> Result[tuple[Node, ...], ConfigurationError]:
    tables = get_table_list(data, "nodes")
    if not tables:
        return Ok((Node(name=LOCALHOST),))

    nodes: list[Node] = []
    for index, table in enumerate(tables):
        name = get_str(table, "name")
        if name is None:
            return Err(ConfigurationError(f"nodes[{index}] is missing a name", path=path))
        port = get_int(table, "port")
        if "port" in table and port is None:
            return Err(ConfigurationError(f"nodes[{index}].port must be an integer", path=path))
        nodes.append(
            Node(
                name=name,
                hostname=get_str(table, "hostname"),
                username=get_str(table, "username"),
                port=port,
            )
        )
    return Ok(tuple(nodes))


def parse_config(data: Mapping[str, object], path: Path) -> Result[SweepConfig, ConfigurationError]:
    """Validate a parsed TOML document."""
    app_table: StrDict = get_table(data, "application") or {}
    name = get_str(app_table, "name")
    deployment_path = get_str(app_table, "deployment_path")
    if name is None or deployment_path is None:
        return Err(
            ConfigurationError(
                "[application] requires name and deployment_path",
                path=path,
            )
        )

    options = RetentionOptions.from_mapping(get_table(data, "options") or {})
    if isinstance(options, Err):
        return Err(replace(options.error, path=path))

    nodes = _parse_nodes(data, path)
    if isinstance(nodes, Err):
        return nodes

    return Ok(
        SweepConfig(
            application=Application(name=name, deployment_path=deployment_path),
            options=options.value,
            nodes=nodes.value,
        )
    )


def _parse_toml(path: Path) -> Result[StrDict, ConfigurationError]:
    import tomllib

    try:
        content = path.read_bytes()
        data = as_str_dict(tomllib.loads(content.decode("utf-8")))
        if data is None:
            return Err(ConfigurationError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigurationError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigurationError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigurationError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigurationError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[SweepConfig, ConfigurationError]:
    """Load and validate a sweep config file."""
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result
    return parse_config(result.value, path)
