from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
from typing import Protocol, runtime_checkable

from sitemap_generator.core.types import Site, UrlRecord


@runtime_checkable
class SiteSource(Protocol):
    """Enumerates the posts, pages and layouts produced by the site pipeline."""

    def load(self) -> Site: ...


@runtime_checkable
class ModificationTimeSource(Protocol):
    """Maps a filesystem path to its last-modified time.

    Raises SourceNotFoundError when the path does not exist.
    """

    def modified_at(self, path: Path) -> datetime: ...


@runtime_checkable
class SitemapSink(Protocol):
    """Final destination for the rendered sitemap."""

    def publish(self, records: Iterable[UrlRecord]) -> Path:
        """Writes the sitemap and returns where it landed."""
        ...


@runtime_checkable
class ArtifactRegistry(Protocol):
    """Keeps generated files from being removed by the pipeline's cleanup pass."""

    def protect(self, path: Path) -> None: ...
