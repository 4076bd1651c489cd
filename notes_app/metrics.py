"""Prometheus metrics for the note store.

All metric objects are defined here so they can be imported from any module.
"""

from prometheus_client import Counter, Gauge

# ---------------------------------------------------------------------------
# Store operations
# ---------------------------------------------------------------------------

NOTE_OPERATIONS = Counter(
    "notes_operations_total",
    "Total note store operations",
    ["operation", "status"],  # create/update/delete; ok, invalid, not_found
)

NOTES_STORED = Gauge(
    "notes_stored",
    "Number of notes currently held in memory",
)

# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------

PERSISTENCE_FAILURES = Counter(
    "notes_persistence_failures_total",
    "Failed reads/writes against the storage backend",
    ["operation"],  # load, save, parse
)
