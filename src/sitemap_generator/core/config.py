from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_EXCLUDE = ["/atom.xml", "/feed.xml", "/rss.xml"]


class SitemapSettings(BaseModel):
    """The ``sitemap:`` block of the site configuration.

    Frozen: one instance is shared by every component of a run.
    """

    model_config = ConfigDict(frozen=True)

    filename: str = Field(default="/sitemap.xml", description="Output path relative to the destination root")
    exclude: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDE),
        description="Relative source paths that never appear in the sitemap",
    )
    include_posts: list[str] = Field(
        default_factory=lambda: ["/index.html"],
        description="Pages whose lastmod also considers the newest post",
    )
    change_frequency_name: str = Field(
        default="change_frequency", description="Front matter key holding <changefreq>"
    )
    priority_name: str = Field(default="priority", description="Front matter key holding <priority>")

    @field_validator("filename")
    @classmethod
    def _filename_not_empty(cls, value: str) -> str:
        if not value.strip("/"):
            msg = "sitemap filename must name a file"
            raise ValueError(msg)
        return value

    @property
    def output_relpath(self) -> Path:
        return Path(self.filename.lstrip("/"))


class SiteSettings(BaseModel):
    """Site-wide settings.

    ``source`` and ``destination`` are relative to ``site_root`` unless absolute.
    """

    url: str = Field(default="", description="Base URL prepended to every location")
    site_root: Path = Field(default_factory=Path.cwd, description="Directory holding _config.yml")
    source: Path = Field(default=Path("."), description="Source tree of pages, posts and layouts")
    destination: Path = Field(default=Path("_site"), description="Generated site directory")
    permalink: str | None = Field(default=None, description="Site-wide post permalink style or template")

    @field_validator("url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def abs_source(self) -> Path:
        return self._resolve(self.source)

    @property
    def abs_destination(self) -> Path:
        return self._resolve(self.destination)

    def _resolve(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return self.site_root / path


class LoggingSettings(BaseModel):
    level: str = Field(default="INFO", description="Root log level")
    file: Path | None = Field(default=None, description="Optional log file")


class SitemapGeneratorConfig(BaseSettings):
    """Root configuration.

    Supports environment variable overrides with the pattern:
    SITEMAP_GENERATOR_SECTION__KEY (e.g., SITEMAP_GENERATOR_SITE__URL)
    """

    site: SiteSettings = Field(default_factory=SiteSettings)
    sitemap: SitemapSettings = Field(default_factory=SitemapSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="SITEMAP_GENERATOR_",
        env_nested_delimiter="__",
    )
