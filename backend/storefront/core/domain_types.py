"""Domain Types — enums that replace bare string states across the codebase.

Invariants:
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum


class AlertSeverity(str, Enum):
    """Severity of a transient client-side alert."""
    SUCCESS = "success"
    ERROR = "error"


class SearchState(str, Enum):
    """Lifecycle of one search widget (overlay visibility tracked separately)."""
    IDLE = "idle"
    PENDING = "pending"
    LOADING = "loading"
    RESULTS = "results"
    EMPTY = "empty"
