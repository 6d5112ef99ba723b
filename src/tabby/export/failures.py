"""Route failure records — one JSON artifact per route that failed to render.

A failure on ``/news/articles/foo/`` is written to
``<output>/generate-error___news_articles_foo_.json``::

    {
      "route": "/news/articles/foo/",
      "errors": [{"type": "unhandled", "description": "..."}]
    }

Records are written once and never updated or removed by the export.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from pathlib import Path

ERROR_RECORD_PREFIX = "generate-error__"


@dataclass(frozen=True, slots=True)
class FailureEntry:
    """One reason a route failed.

    Attributes:
        type: Failure category (``"handled"``, ``"unhandled"``, ...).
        error: The exception or message describing the failure.

    """

    type: object
    error: object


@dataclass(frozen=True, slots=True)
class RouteFailure:
    """A route the export pipeline could not render.

    Attributes:
        route: Concrete route path.
        errors: Failure entries in the order they occurred.

    """

    route: str
    errors: tuple[FailureEntry, ...]

    def to_dict(self) -> dict[str, object]:
        """Serialise with every failure entry stringified."""
        return {
            "route": self.route,
            "errors": [
                {"type": str(entry.type), "description": str(entry.error)}
                for entry in self.errors
            ],
        }


def error_record_name(route: str) -> str:
    """Return the filesystem-safe artifact name for *route*."""
    return ERROR_RECORD_PREFIX + route.replace("/", "_") + ".json"


def write_error_record(output_dir: Path, failure: RouteFailure) -> Path | None:
    """Write *failure* as JSON into *output_dir*.

    A write failure is reported on stderr and otherwise ignored, so a broken
    record never aborts the export.

    Returns:
        Path of the written record, or *None* if it could not be written.

    """
    record_path = output_dir / error_record_name(failure.route)
    try:
        record_path.write_text(
            json.dumps(failure.to_dict(), indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
    except OSError as exc:
        print(
            f"  Warning: failure record for {failure.route} not written: {exc}",
            file=sys.stderr,
        )
        return None
    return record_path
