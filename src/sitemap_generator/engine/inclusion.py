from sitemap_generator.core.config import SitemapSettings


class InclusionPolicy:
    """Decides which items appear in the sitemap.

    Matching is exact string equality on the item's relative path.
    """

    def __init__(self, settings: SitemapSettings) -> None:
        self._excluded = frozenset(settings.exclude)
        self._posts_aware = frozenset(settings.include_posts)

    def is_excluded(self, relative_path: str) -> bool:
        return relative_path in self._excluded

    def is_posts_aware(self, relative_path: str) -> bool:
        """True for pages whose lastmod must also consider the newest post."""
        return relative_path in self._posts_aware
