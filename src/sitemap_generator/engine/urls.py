from sitemap_generator.core.types import ContentItem, Page

INDEX_FILENAME = "index.html"


class UrlComposer:
    """Builds the absolute ``<loc>`` of an item from the site base URL."""

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url

    def location_of(self, item: ContentItem) -> str:
        """Return ``base_url + url_path``.

        For pages a trailing ``index.html`` segment is dropped, so
        ``/blog/index.html`` becomes ``/blog/`` while ``/docs/reindex.html``
        is kept. Post URLs are used verbatim.
        """
        location = f"{self.base_url}{item.url_path}"
        if isinstance(item, Page) and (
            item.url_path == INDEX_FILENAME or item.url_path.endswith("/" + INDEX_FILENAME)
        ):
            return location[: -len(INDEX_FILENAME)]
        return location
