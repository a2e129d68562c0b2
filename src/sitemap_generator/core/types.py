"""Core data types for the sitemap generator."""

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sitemap_generator.core.utils import ensure_utc


def format_iso_utc(dt: datetime) -> str:
    """Provides a consistent ISO 8601 format with UTC timezone for the sitemap."""
    # 'Z' suffix instead of '+00:00'
    return ensure_utc(dt).isoformat().replace("+00:00", "Z")


class ChangeFrequency(str, Enum):
    ALWAYS = "always"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    NEVER = "never"


# --- Content model ---
class Layout(BaseModel):
    """A template that content items (or other layouts) render through."""

    model_config = ConfigDict(frozen=True)

    name: str
    source_modified_at: datetime | None = None
    parent: str | None = None

    @field_validator("source_modified_at")
    @classmethod
    def _to_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value) if value is not None else None


class ContentItem(BaseModel):
    """Fields shared by every generated page and post."""

    model_config = ConfigDict(frozen=True)

    relative_path: str
    url_path: str
    source_modified_at: datetime | None = None
    layout: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("source_modified_at")
    @classmethod
    def _to_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value) if value is not None else None

    @property
    def source_exists(self) -> bool:
        return self.source_modified_at is not None


class Post(ContentItem):
    kind: Literal["post"] = "post"

    @property
    def categories(self) -> list[str]:
        raw = self.metadata.get("categories", self.metadata.get("category"))
        if raw is None:
            return []
        if isinstance(raw, str):
            return raw.split()
        return [str(category) for category in raw]


class Page(ContentItem):
    kind: Literal["page"] = "page"


class AggregatorPage(Page):
    """A page whose freshness derives from the posts it lists.

    Monthly, yearly and category archives are the typical examples.
    """

    kind: Literal["aggregator"] = "aggregator"  # type: ignore[assignment]
    posts: list[Post] = Field(default_factory=list)


AnyPage = Annotated[Page | AggregatorPage, Field(discriminator="kind")]


class Site(BaseModel):
    """Immutable snapshot of everything the pipeline generated for one run."""

    model_config = ConfigDict(frozen=True)

    base_url: str = ""
    destination: Path = Path("_site")
    posts: list[Post] = Field(default_factory=list)
    pages: list[AnyPage] = Field(default_factory=list)
    layouts: dict[str, Layout] = Field(default_factory=dict)


# --- Sitemap output ---
class UrlRecord(BaseModel):
    """One ``<url>`` entry of the sitemap."""

    model_config = ConfigDict(frozen=True)

    location: str
    last_modified: datetime
    change_frequency: ChangeFrequency | None = None
    priority: float | None = Field(default=None, ge=0.0, le=1.0)

    @property
    def lastmod(self) -> str:
        return format_iso_utc(self.last_modified)


class Diagnostic(BaseModel):
    """A recovered per-item problem, reported instead of aborting the run."""

    model_config = ConfigDict(frozen=True)

    relative_path: str
    field: str
    value: Any = None
    message: str

    def __str__(self) -> str:
        return self.message


class SitemapResult(BaseModel):
    records: list[UrlRecord] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    newest_post_date: datetime | None = None
    output_path: Path | None = None
