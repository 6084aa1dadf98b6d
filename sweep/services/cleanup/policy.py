"""Retention policy: which releases may be removed.

Pure computation over a release listing. Nothing here touches a node.

Protected entries are never removable: the current release, the previous
release, and the ``.``/``current``/``previous`` pseudo entries. Of the
remaining candidates:

- age strategy: remove a release when its age is strictly greater than the
  threshold age (``now - string_to_time(expression)``); a release exactly at
  the threshold stays.
- count strategy: keep the ``keep_releases`` newest (identifiers sort
  chronologically), remove the rest, oldest first.
- no strategy: remove nothing.
"""

from __future__ import annotations

from collections.abc import Sequence

from sweep.core.clock import Clock, ParseError
from sweep.core.config import ConfigurationError, RetentionOptions
from sweep.core.result import Err, Ok, Result

__all__ = [
    "PSEUDO_ENTRIES",
    "compute_removable",
    "filter_candidates",
    "remove_by_age",
    "remove_by_count",
]

PSEUDO_ENTRIES = frozenset({".", "..", "current", "previous"})


def _is_release_name(name: str) -> bool:
    # A name with a separator cannot be a direct child of the releases path.
    return bool(name) and "/" not in name and "\x00" not in name


def filter_candidates(
    all_releases: Sequence[str],
    current_id: str | None,
    previous_id: str | None,
) -> tuple[str, ...]:
    """Drop protected and malformed entries, preserving discovery order."""
    protected = set(PSEUDO_ENTRIES)
    if current_id:
        protected.add(current_id)
    if previous_id:
        protected.add(previous_id)

    candidates: list[str] = []
    for name in all_releases:
        if name in protected or not _is_release_name(name):
            continue
        candidates.append(name)
    return tuple(candidates)


def remove_by_age(
    candidates: Sequence[str],
    older_than: str,
    clock: Clock,
) -> Result[tuple[str, ...], ParseError]:
    threshold_time = clock.string_to_time(older_than)
    if isinstance(threshold_time, Err):
        return threshold_time

    now = clock.current_time()
    threshold_age = now - threshold_time.value

    removable: list[str] = []
    for candidate in candidates:
        created = clock.parse_fixed_format(candidate)
        if isinstance(created, Err):
            return created
        if now - created.value > threshold_age:
            removable.append(candidate)
    return Ok(tuple(removable))


def remove_by_count(
    candidates: Sequence[str],
    keep_releases: int,
) -> Result[tuple[str, ...], ConfigurationError]:
    if keep_releases < 0:
        return Err(
            ConfigurationError(f"keep_releases must not be negative (got {keep_releases})")
        )
    ordered = sorted(candidates)
    if keep_releases >= len(ordered):
        return Ok(())
    return Ok(tuple(ordered[: len(ordered) - keep_releases]))


def compute_removable(
    all_releases: Sequence[str],
    current_id: str | None,
    previous_id: str | None,
    options: RetentionOptions,
    clock: Clock,
) -> Result[tuple[str, ...], ParseError | ConfigurationError]:
    """Compute the releases to remove, in the order they should be removed.

    Under the age strategy, the first candidate whose identifier is not a
    timestamp is returned as ``Err(ParseError)`` and nothing is selected.
    """
    candidates = filter_candidates(all_releases, current_id, previous_id)

    match options.strategy:
        case "age":
            assert options.only_remove_releases_older_than is not None
            return remove_by_age(candidates, options.only_remove_releases_older_than, clock)
        case "count":
            assert options.keep_releases is not None
            return remove_by_count(candidates, options.keep_releases)
        case _:
            return Ok(())
