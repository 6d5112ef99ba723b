"""Export observability — structured events for each export step.

Quick Start:
    >>> from tabby.observability import EventLog
    >>> log = EventLog()
    >>> # Pass log to StaticGenerate; inspect afterwards
    >>> log.query(kind="route_failed")

"""

from tabby.observability.events import ExportEvent, ExportEventKind, now_ns
from tabby.observability.log import EventLog

__all__ = [
    "EventLog",
    "ExportEvent",
    "ExportEventKind",
    "now_ns",
]
