import logging
from pathlib import Path

import pytest

from sitemap_generator.core.types import AggregatorPage, Page
from sitemap_generator.infra.adapters.jekyll import JekyllSiteSource, expand_permalink, read_front_matter
from tests.factories import utc


@pytest.fixture
def blog(write_file, tmp_path: Path) -> Path:
    write_file("_layouts/default.html", "<html>{{ content }}</html>", utc(2018))
    write_file("_layouts/post.html", "---\nlayout: default\n---\n{{ content }}", utc(2019))
    write_file(
        "_posts/2020-01-01-hello.md",
        "---\nlayout: post\ntitle: Hello\ncategories: news\n---\nHi",
        utc(2020),
    )
    write_file(
        "_posts/2021-06-15-again.md",
        "---\nlayout: post\npermalink: /again/\nchange_frequency: yearly\n---\nAgain",
        utc(2021, 6, 15),
    )
    write_file("_posts/notes.txt", "not a post", utc(2022))
    write_file("index.html", "---\nlayout: default\n---\n{% for post in site.posts %}{% endfor %}", utc(2019))
    write_file("about.md", "---\ntitle: About\npriority: 0.7\n---\nAbout me", utc(2017))
    write_file("atom.xml", "---\nlayout: null\n---\n<feed/>", utc(2017))
    write_file("style.css", "body {}", utc(2017))
    write_file("_drafts/2022-01-01-draft.md", "---\n---\n", utc(2022))
    write_file("_site/index.html", "---\n---\nstale output", utc(2022))
    write_file(".git/HEAD", "---\n---\n", utc(2022))
    write_file("news/index.html", "---\ncategory_archive: news\n---\n", utc(2024))
    write_file("2021/index.html", "---\nposts:\n  - again\n  - missing-post\n---\n", utc(2024))
    return tmp_path


def test_read_front_matter(write_file):
    assert read_front_matter(write_file("a.md", "---\ntitle: A\ntags: [x]\n---\nbody")) == {
        "title": "A",
        "tags": ["x"],
    }
    assert read_front_matter(write_file("b.md", "---\n---\n")) == {}
    assert read_front_matter(write_file("c.css", "body {}")) is None


def test_malformed_front_matter_is_logged_and_empty(write_file, caplog):
    path = write_file("bad.md", "---\ntitle: [unclosed\n---\n")

    with caplog.at_level(logging.WARNING):
        assert read_front_matter(path) == {}

    assert "Invalid front matter" in caplog.text


def test_layouts_carry_parent_and_mtime(blog: Path):
    site = JekyllSiteSource(blog).load()

    assert set(site.layouts) == {"default", "post"}
    assert site.layouts["post"].parent == "default"
    assert site.layouts["post"].source_modified_at == utc(2019)
    assert site.layouts["default"].parent is None


def test_posts_are_dated_files_in_order(blog: Path):
    site = JekyllSiteSource(blog, base_url="https://example.com/").load()

    assert site.base_url == "https://example.com"
    assert [post.relative_path for post in site.posts] == [
        "/_posts/2020-01-01-hello.md",
        "/_posts/2021-06-15-again.md",
    ]
    hello, again = site.posts
    assert hello.url_path == "/news/2020/01/01/hello.html"
    assert hello.layout == "post"
    assert hello.source_modified_at == utc(2020)
    assert again.url_path == "/again/"
    assert again.metadata["change_frequency"] == "yearly"


def test_pages_need_front_matter_and_skip_private_dirs(blog: Path):
    site = JekyllSiteSource(blog).load()

    paths = [page.relative_path for page in site.pages]
    assert paths == ["/2021/index.html", "/about.md", "/atom.xml", "/index.html", "/news/index.html"]


def test_page_urls(blog: Path):
    pages = {page.relative_path: page for page in JekyllSiteSource(blog).load().pages}

    assert pages["/about.md"].url_path == "/about.html"
    assert pages["/index.html"].url_path == "/index.html"
    assert pages["/about.md"].metadata["priority"] == 0.7


def test_archive_pages_become_aggregators(blog: Path, caplog):
    with caplog.at_level(logging.WARNING):
        pages = {page.relative_path: page for page in JekyllSiteSource(blog).load().pages}

    news = pages["/news/index.html"]
    assert isinstance(news, AggregatorPage)
    assert [post.relative_path for post in news.posts] == ["/_posts/2020-01-01-hello.md"]

    year = pages["/2021/index.html"]
    assert isinstance(year, AggregatorPage)
    assert [post.relative_path for post in year.posts] == ["/_posts/2021-06-15-again.md"]
    assert "Unknown post 'missing-post' listed in /2021/index.html" in caplog.text

    assert type(pages["/about.md"]) is Page


def test_external_destination_is_not_scanned(write_file, tmp_path: Path):
    write_file("index.html", "---\n---\n", utc(2020))
    write_file("public/index.html", "---\n---\n", utc(2020))

    site = JekyllSiteSource(tmp_path, destination=tmp_path / "public").load()

    assert [page.relative_path for page in site.pages] == ["/index.html"]
    assert site.destination == tmp_path / "public"


def test_extra_pages_are_appended(blog: Path):
    generated = Page(relative_path="/tags/index.html", url_path="/tags/index.html")

    site = JekyllSiteSource(blog, extra_pages=[generated]).load()

    assert site.pages[-1] == generated
    assert not site.pages[-1].source_exists


def test_empty_source_tree(tmp_path: Path):
    site = JekyllSiteSource(tmp_path).load()

    assert site.posts == []
    assert site.pages == []
    assert site.layouts == {}


@pytest.mark.parametrize(
    ("permalink", "expected"),
    [
        (None, "/news/2020/01/01/hello.html"),
        ("date", "/news/2020/01/01/hello.html"),
        ("pretty", "/news/2020/01/01/hello/"),
        ("none", "/news/hello.html"),
        ("/blog/:year/:title/", "/blog/2020/hello/"),
    ],
)
def test_site_permalink_shapes_post_urls(blog: Path, permalink, expected):
    hello, again = JekyllSiteSource(blog, permalink=permalink).load().posts

    assert hello.url_path == expected
    assert again.url_path == "/again/"


def test_expand_permalink_without_categories():
    values = {"categories": "", "year": "2021", "month": "06", "day": "15", "title": "hi"}

    assert expand_permalink("pretty", values) == "/2021/06/15/hi/"
    assert expand_permalink(":year/:title.html", values) == "/2021/hi.html"


def test_assets_with_front_matter_are_not_pages(write_file, tmp_path: Path):
    write_file("index.html", "---\n---\n", utc(2020))
    write_file("assets/main.scss", "---\n---\n@import 'minima';", utc(2020))
    write_file("assets/app.js", "---\n---\nconsole.log(1);", utc(2020))
    write_file("docs/guide.markdown", "---\n---\n", utc(2020))

    site = JekyllSiteSource(tmp_path).load()

    assert [page.relative_path for page in site.pages] == ["/docs/guide.markdown", "/index.html"]
