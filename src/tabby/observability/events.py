"""Export events — what the multi-language export did, and when.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass
from typing import Literal

type ExportEventKind = Literal[
    "staged",
    "routes_extended",
    "route_failed",
    "error_record_failed",
    "files_collected",
    "language_copied",
    "partitioned",
]


@dataclass(frozen=True, slots=True)
class ExportEvent:
    """A step of the multi-language export completed.

    Attributes:
        kind: The export step.
        detail: Route, language code, or path the step concerned.
        count: Number of items the step handled (routes, files, languages).
        duration_ms: Time taken in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    kind: ExportEventKind
    detail: str
    count: int
    duration_ms: float
    timestamp_ns: int


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
