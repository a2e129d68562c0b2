"""Jekyll-style source tree adapter.

Reads layouts from ``_layouts/``, posts from ``_posts/`` and treats every other
HTML, Markdown or XML file that starts with YAML front matter as a page. Supports:
- layout inheritance through the layout's own ``layout`` key
- a site-wide post ``permalink`` (style name or ``:placeholder`` template)
- ``permalink`` overrides for posts and pages
- archive pages listing ``posts`` explicitly or through ``category_archive``
"""

import logging
import re
from collections.abc import Iterable, Iterator
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml

from sitemap_generator.core.exceptions import SourceNotFoundError
from sitemap_generator.core.ports import ModificationTimeSource
from sitemap_generator.core.types import AggregatorPage, Layout, Page, Post, Site
from sitemap_generator.infra.mtime import FileSystemModificationTimes

logger = logging.getLogger(__name__)

LAYOUTS_DIR = "_layouts"
POSTS_DIR = "_posts"

FRONT_MATTER_RE = re.compile(r"\A---\s*\n(.*?)^---\s*$\n?", re.DOTALL | re.MULTILINE)
POST_FILENAME_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})-(.+)\.[^.]+$")
MARKDOWN_SUFFIXES = {".md", ".markdown"}
# Files that render to a page; other files with front matter (stylesheets, scripts) are assets
PAGE_SUFFIXES = {".html", ".htm", ".xml", *MARKDOWN_SUFFIXES}

# Built-in Jekyll permalink styles
PERMALINK_STYLES = {
    "date": "/:categories/:year/:month/:day/:title.html",
    "pretty": "/:categories/:year/:month/:day/:title/",
    "none": "/:categories/:title.html",
}
DEFAULT_PERMALINK = PERMALINK_STYLES["date"]
PLACEHOLDER_RE = re.compile(r":(categories|year|month|day|title)")


def read_front_matter(path: Path) -> dict[str, Any] | None:
    """Return the YAML front matter of ``path``, or None if it has none.

    Malformed front matter is logged and treated as empty.
    """
    with path.open("rb") as f:
        if f.read(3) != b"---":
            return None

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        return None

    m = FRONT_MATTER_RE.match(text)
    if not m:
        return None

    try:
        data = yaml.safe_load(m.group(1))
    except yaml.YAMLError as e:
        logger.warning("Invalid front matter in %s: %s", path, e)
        return {}

    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Front matter in %s is not a mapping, ignoring it", path)
        return {}
    return data


def expand_permalink(template: str, values: dict[str, str]) -> str:
    """Fill the ``:name`` placeholders of a permalink template.

    ``template`` may also be one of the built-in style names. Empty
    placeholders (no categories) leave no double slashes behind.

    Examples:
        >>> expand_permalink("/:categories/:year/:title/", {"year": "2021", "title": "hi"})
        '/2021/hi/'

    """
    template = PERMALINK_STYLES.get(template, template)
    url = PLACEHOLDER_RE.sub(lambda m: values.get(m.group(1), ""), template)
    url = re.sub(r"/{2,}", "/", url)
    if not url.startswith("/"):
        url = "/" + url
    return url


class JekyllSiteSource:
    """Builds a Site snapshot from a Jekyll-style source directory."""

    def __init__(
        self,
        source: Path,
        *,
        base_url: str = "",
        destination: Path | None = None,
        mtimes: ModificationTimeSource | None = None,
        extra_pages: Iterable[Page] = (),
        permalink: str | None = None,
    ) -> None:
        """Initialize the site source.

        Args:
            source: Root of the source tree
            base_url: Site URL prepended to every location
            destination: Generated site directory (skipped when inside ``source``)
            mtimes: Modification time lookup, defaults to the local filesystem
            extra_pages: Generated pages without a source file
            permalink: Site-wide post permalink, a style name or a template

        """
        self.source = Path(source)
        self.base_url = base_url.rstrip("/")
        self.destination = Path(destination) if destination is not None else self.source / "_site"
        self.mtimes = mtimes if mtimes is not None else FileSystemModificationTimes()
        self.extra_pages = list(extra_pages)
        self.permalink = permalink or DEFAULT_PERMALINK

    def load(self) -> Site:
        layouts = {layout.name: layout for layout in self._load_layouts()}
        posts = list(self._load_posts())
        pages = list(self._load_pages(posts))
        pages.extend(self.extra_pages)

        logger.info(
            "Loaded %d posts, %d pages and %d layouts from %s",
            len(posts),
            len(pages),
            len(layouts),
            self.source,
        )
        return Site(
            base_url=self.base_url,
            destination=self.destination,
            posts=posts,
            pages=pages,
            layouts=layouts,
        )

    # --- Helpers ---

    def _modified_at(self, path: Path) -> datetime | None:
        try:
            return self.mtimes.modified_at(path)
        except SourceNotFoundError:
            return None

    def _relative_path(self, path: Path) -> str:
        return "/" + path.relative_to(self.source).as_posix()

    def _load_layouts(self) -> Iterator[Layout]:
        layouts_dir = self.source / LAYOUTS_DIR
        if not layouts_dir.is_dir():
            return

        for path in sorted(layouts_dir.iterdir()):
            if not path.is_file():
                continue
            front_matter = read_front_matter(path) or {}
            yield Layout(
                name=path.stem,
                source_modified_at=self._modified_at(path),
                parent=front_matter.get("layout"),
            )

    def _load_posts(self) -> Iterator[Post]:
        posts_dir = self.source / POSTS_DIR
        if not posts_dir.is_dir():
            return

        for path in sorted(p for p in posts_dir.rglob("*") if p.is_file()):
            m = POST_FILENAME_RE.match(path.name)
            if not m:
                logger.debug("Skipping %s: not a dated post filename", path)
                continue
            front_matter = read_front_matter(path) or {}
            post = Post(
                relative_path=self._relative_path(path),
                url_path="",
                source_modified_at=self._modified_at(path),
                layout=front_matter.get("layout"),
                metadata=front_matter,
            )
            yield post.model_copy(update={"url_path": self._post_url(post, m)})

    def _post_url(self, post: Post, m: re.Match[str]) -> str:
        permalink = post.metadata.get("permalink")
        if permalink:
            return str(permalink)
        year, month, day, slug = m.groups()
        values = {
            "categories": "/".join(post.categories),
            "year": year,
            "month": month,
            "day": day,
            "title": slug,
        }
        return expand_permalink(self.permalink, values)

    def _is_page_candidate(self, path: Path) -> bool:
        if not path.is_file() or path.suffix.lower() not in PAGE_SUFFIXES:
            return False
        if path.is_relative_to(self.destination):
            return False
        parts = path.relative_to(self.source).parts
        return not any(part.startswith(("_", ".")) for part in parts)

    def _load_pages(self, posts: list[Post]) -> Iterator[Page]:
        index = _PostIndex(posts)

        for path in sorted(self.source.rglob("*")):
            if not self._is_page_candidate(path):
                continue
            front_matter = read_front_matter(path)
            if front_matter is None:
                continue

            fields = {
                "relative_path": self._relative_path(path),
                "url_path": self._page_url(path, front_matter),
                "source_modified_at": self._modified_at(path),
                "layout": front_matter.get("layout"),
                "metadata": front_matter,
            }

            listed = index.listed_by(front_matter, fields["relative_path"])
            if listed is None:
                yield Page(**fields)
            else:
                yield AggregatorPage(**fields, posts=listed)

    def _page_url(self, path: Path, front_matter: dict[str, Any]) -> str:
        permalink = front_matter.get("permalink")
        if permalink:
            return str(permalink)
        relative = path.relative_to(self.source)
        if relative.suffix in MARKDOWN_SUFFIXES:
            relative = relative.with_suffix(".html")
        return "/" + relative.as_posix()


class _PostIndex:
    """Resolves post references used by archive pages."""

    def __init__(self, posts: list[Post]) -> None:
        self.posts = posts
        self._by_ref: dict[str, Post] = {}
        for post in posts:
            name = post.relative_path.rsplit("/", 1)[-1]
            m = POST_FILENAME_RE.match(name)
            self._by_ref[post.relative_path] = post
            self._by_ref[name] = post
            if m:
                self._by_ref.setdefault(m.group(4), post)

    def listed_by(self, front_matter: dict[str, Any], page_path: str) -> list[Post] | None:
        """Return the posts an archive page lists, or None for an ordinary page."""
        category = front_matter.get("category_archive")
        if category is not None:
            return [post for post in self.posts if str(category) in post.categories]

        refs = front_matter.get("posts")
        if refs is None:
            return None
        if isinstance(refs, str):
            refs = [refs]

        listed = []
        for ref in refs:
            post = self._by_ref.get(str(ref))
            if post is None:
                logger.warning("Unknown post %r listed in %s", ref, page_path)
                continue
            listed.append(post)
        return listed
