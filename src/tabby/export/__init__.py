"""Export layer — render, expand per language, and partition static output.

Renders every route to static HTML, then reorganizes the output into one
directory per configured language.
"""

from tabby.export.failures import FailureEntry, RouteFailure, error_record_name, write_error_record
from tabby.export.generate import StaticGenerate
from tabby.export.partition import copy_tree, move_tree, partition_languages
from tabby.export.static import (
    ExportedFile,
    ExportHooks,
    ExportResult,
    PageRenderer,
    PassthroughHooks,
    StaticExporter,
)

__all__ = [
    "ExportHooks",
    "ExportResult",
    "ExportedFile",
    "FailureEntry",
    "PageRenderer",
    "PassthroughHooks",
    "RouteFailure",
    "StaticExporter",
    "StaticGenerate",
    "copy_tree",
    "error_record_name",
    "move_tree",
    "partition_languages",
    "write_error_record",
]
