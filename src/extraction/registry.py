"""Registry of named source loaders."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from extract.objects import SOURCE_TYPE, ContentObject
from extraction.options import LoadOptions
from extraction.orchestrator import ExtractionResult, run_extraction
from utils.registry_protocol import MutableRegistry

_LOGGER = logging.getLogger(__name__)


@runtime_checkable
class SourceLoader(Protocol):
    """Loader that turns a source locator into content objects."""

    def load_objects(
        self,
        source: str,
        options: LoadOptions | Mapping[str, object] | None = None,
    ) -> list[ContentObject]:
        """Load content objects for ``source``."""
        ...


type SourceLoaderFactory = Callable[[], SourceLoader]


@dataclass(frozen=True)
class GitSource:
    """Source loader backed by git history and the staging index."""

    cancel_event: threading.Event | None = None

    def load_objects(
        self,
        source: str,
        options: LoadOptions | Mapping[str, object] | None = None,
    ) -> list[ContentObject]:
        """Load content objects from a local or remote git repository.

        Returns
        -------
        list[ContentObject]
            History objects followed by staged objects.
        """
        return self.extract(source, options).objects

    def extract(
        self,
        source: str,
        options: LoadOptions | Mapping[str, object] | None = None,
    ) -> ExtractionResult:
        """Run a full extraction, including issues and timing.

        Returns
        -------
        ExtractionResult
            Objects, tolerated tree-walk issues, and stage timing.
        """
        return run_extraction(source, options, cancel_event=self.cancel_event)


@dataclass
class SourceRegistry:
    """Source type to loader factory mapping."""

    entries: MutableRegistry[str, SourceLoaderFactory] = field(
        default_factory=lambda: MutableRegistry(label="source loader")
    )

    def register(
        self,
        source_type: str,
        factory: SourceLoaderFactory,
        *,
        overwrite: bool = False,
    ) -> None:
        """Register a loader factory under ``source_type``."""
        self.entries.register(source_type, factory, overwrite=overwrite)
        _LOGGER.debug("Registered source loader %s", source_type)

    def create(self, source_type: str) -> SourceLoader:
        """Instantiate the loader registered for ``source_type``.

        Returns
        -------
        SourceLoader
            Fresh loader instance.

        Raises
        ------
        KeyError
            Raised when no loader is registered for ``source_type``.
        """
        return self.entries.require(source_type)()

    def source_types(self) -> tuple[str, ...]:
        """Return registered source types in registration order.

        Returns
        -------
        tuple[str, ...]
            Registered source type keys.
        """
        return tuple(self.entries)

    def __contains__(self, source_type: str) -> bool:
        return source_type in self.entries

    def __len__(self) -> int:
        return len(self.entries)


def register_git_source(registry: SourceRegistry, *, overwrite: bool = False) -> None:
    """Register the git source loader under its source type."""
    registry.register(SOURCE_TYPE, GitSource, overwrite=overwrite)


def build_source_registry() -> SourceRegistry:
    """Build a fresh registry with the git source registered.

    Returns
    -------
    SourceRegistry
        New registry owned by the caller.
    """
    registry = SourceRegistry()
    register_git_source(registry)
    return registry


__all__ = [
    "GitSource",
    "SourceLoader",
    "SourceLoaderFactory",
    "SourceRegistry",
    "build_source_registry",
    "register_git_source",
]
