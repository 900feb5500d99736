"""Load orchestration for the git source extractor."""

from __future__ import annotations

from extraction.options import LoadOptions, normalize_load_options
from extraction.orchestrator import ExtractionResult, load_objects, run_extraction
from extraction.registry import (
    GitSource,
    SourceLoader,
    SourceRegistry,
    build_source_registry,
    register_git_source,
)

__all__ = [
    "ExtractionResult",
    "GitSource",
    "LoadOptions",
    "SourceLoader",
    "SourceRegistry",
    "build_source_registry",
    "load_objects",
    "normalize_load_options",
    "register_git_source",
    "run_extraction",
]
