import logging
from collections.abc import Callable
from datetime import datetime

from sitemap_generator.core.config import SitemapSettings
from sitemap_generator.core.types import ContentItem, Diagnostic, Site, SitemapResult, UrlRecord
from sitemap_generator.core.utils import utc_now
from sitemap_generator.engine.freshness import FreshnessResolver, later
from sitemap_generator.engine.inclusion import InclusionPolicy
from sitemap_generator.engine.urls import UrlComposer
from sitemap_generator.engine.validation import parse_change_frequency, parse_priority

logger = logging.getLogger(__name__)


class SitemapAssembler:
    """Turns a site snapshot into ordered sitemap records.

    Posts are processed first so the newest post date is known before any
    posts-aware page (e.g. the home page) is finalized.
    """

    def __init__(self, settings: SitemapSettings, clock: Callable[[], datetime] = utc_now) -> None:
        self.settings = settings
        self.policy = InclusionPolicy(settings)
        self.clock = clock

    def assemble(self, site: Site) -> SitemapResult:
        resolver = FreshnessResolver(site.layouts, clock=self.clock)
        composer = UrlComposer(site.base_url)
        records: list[UrlRecord] = []
        diagnostics: list[Diagnostic] = []
        newest_post_date: datetime | None = None

        for post in site.posts:
            if self.policy.is_excluded(post.relative_path):
                continue
            last_modified = resolver.resolve(post)
            if newest_post_date is None:
                newest_post_date = last_modified
            else:
                newest_post_date = later(newest_post_date, last_modified)
            records.append(self._build_record(post, composer.location_of(post), last_modified, diagnostics))

        for page in site.pages:
            if self.policy.is_excluded(page.relative_path):
                continue
            last_modified = resolver.resolve(page)
            if newest_post_date is not None and self.policy.is_posts_aware(page.relative_path):
                last_modified = later(last_modified, newest_post_date)
            records.append(self._build_record(page, composer.location_of(page), last_modified, diagnostics))

        return SitemapResult(records=records, diagnostics=diagnostics, newest_post_date=newest_post_date)

    def _build_record(
        self,
        item: ContentItem,
        location: str,
        last_modified: datetime,
        diagnostics: list[Diagnostic],
    ) -> UrlRecord:
        change_frequency = None
        field = self.settings.change_frequency_name
        if item.metadata.get(field) is not None:
            value = item.metadata[field]
            change_frequency = parse_change_frequency(value)
            if change_frequency is None:
                diagnostics.append(self._report(item, field, value, "change frequency"))

        priority = None
        field = self.settings.priority_name
        if item.metadata.get(field) is not None:
            value = item.metadata[field]
            priority = parse_priority(value)
            if priority is None:
                diagnostics.append(self._report(item, field, value, "priority"))

        return UrlRecord(
            location=location,
            last_modified=last_modified,
            change_frequency=change_frequency,
            priority=priority,
        )

    def _report(self, item: ContentItem, field: str, value: object, label: str) -> Diagnostic:
        logger.warning("Invalid %s %r in %s", label, value, item.relative_path)
        return Diagnostic(
            relative_path=item.relative_path,
            field=field,
            value=value,
            message=f"Invalid {label} {value!r} in {item.relative_path}",
        )
