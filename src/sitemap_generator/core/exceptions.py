"""Core exceptions for the sitemap generator."""

from pathlib import Path


class SitemapGeneratorError(Exception):
    """Base exception for all sitemap generator errors."""


class ConfigurationError(SitemapGeneratorError):
    """Raised when the configuration file or its values are invalid."""


class SourceNotFoundError(SitemapGeneratorError):
    """Raised when a content or layout source file cannot be located."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Source file not found: {path}")


class OutputWriteError(SitemapGeneratorError):
    """Raised when the sitemap document cannot be persisted."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Could not write sitemap to {path}: {reason}")
