"""Infrastructure adapters for external interfaces."""

from modelcheck.infrastructure.adapters.snapshot_loader import SnapshotLoader, load_snapshot

__all__ = [
    "SnapshotLoader",
    "load_snapshot",
]
