"""Last-modified resolution for content items.

An item is as fresh as the newest of its own source file and every layout it
renders through. Aggregator pages are as fresh as the newest post they list.
"""

import logging
from collections.abc import Callable, Mapping
from datetime import datetime

from sitemap_generator.core.types import AggregatorPage, ContentItem, Layout
from sitemap_generator.core.utils import EPOCH, utc_now

logger = logging.getLogger(__name__)


def later(first: datetime, second: datetime) -> datetime:
    """Return the later of two timestamps; ties go to ``second``."""
    return second if second >= first else first


class FreshnessResolver:
    """Computes the effective last-modified time of posts, pages and layouts."""

    def __init__(
        self,
        layouts: Mapping[str, Layout],
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.layouts = layouts
        self.clock = clock

    def resolve(self, item: ContentItem) -> datetime:
        if isinstance(item, AggregatorPage):
            return self._resolve_aggregator(item)
        if item.source_modified_at is None:
            logger.debug("No source file for %s, using the current time", item.relative_path)
            return self.clock()
        return self.resolve_layout_chain(item.layout, item.source_modified_at)

    def resolve_layout_chain(self, name: str | None, start: datetime) -> datetime:
        """Walk ``name`` and its parents, raising ``start`` to the newest layout date.

        The walk stops at the first name that does not resolve to a layout, or
        when a name repeats.
        """
        latest = start
        visited: set[str] = set()

        while name is not None:
            if name in visited:
                logger.warning("Layout cycle detected at %r, stopping the chain walk", name)
                break
            visited.add(name)

            layout = self.layouts.get(name)
            if layout is None:
                logger.debug("Layout %r not found, stopping the chain walk", name)
                break
            if layout.source_modified_at is not None:
                latest = later(latest, layout.source_modified_at)
            name = layout.parent

        return latest

    def _resolve_aggregator(self, page: AggregatorPage) -> datetime:
        latest = EPOCH
        for post in page.posts:
            latest = later(latest, self.resolve(post))
        return latest
