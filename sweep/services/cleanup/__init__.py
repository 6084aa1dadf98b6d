"""Release cleanup: list, decide, remove."""

from .cleaner import CleanupOutcome, CleanupState, ReleaseCleaner, removal_commands
from .errors import CleanupError
from .lister import ReleaseListing, list_releases, resolve_release_symlink
from .policy import compute_removable, filter_candidates

__all__ = [
    "CleanupError",
    "CleanupOutcome",
    "CleanupState",
    "ReleaseCleaner",
    "ReleaseListing",
    "compute_removable",
    "filter_candidates",
    "list_releases",
    "removal_commands",
    "resolve_release_symlink",
]
