"""release-sweep: remove old deployment releases from target nodes."""

__version__ = "0.1.0"
