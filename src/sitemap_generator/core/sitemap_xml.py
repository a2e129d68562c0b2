"""Sitemap protocol serialization."""

from collections.abc import Iterable
from decimal import Decimal

from lxml import etree

from sitemap_generator.core.types import UrlRecord

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
SITEMAP_NSMAP = {None: SITEMAP_NS}


def _tag(name: str) -> str:
    return f"{{{SITEMAP_NS}}}{name}"


def format_priority(priority: float) -> str:
    """Fixed-point text for ``<priority>``; xsd:decimal has no exponent form.

    Examples:
        >>> format_priority(0.00001)
        '0.00001'

    """
    return format(Decimal(repr(priority)), "f")


def build_urlset(records: Iterable[UrlRecord]) -> etree._Element:
    """Build the ``<urlset>`` tree, one ``<url>`` per record in the given order."""
    urlset = etree.Element(_tag("urlset"), nsmap=SITEMAP_NSMAP)

    for record in records:
        url = etree.SubElement(urlset, _tag("url"))
        etree.SubElement(url, _tag("loc")).text = record.location
        etree.SubElement(url, _tag("lastmod")).text = record.lastmod
        if record.change_frequency is not None:
            etree.SubElement(url, _tag("changefreq")).text = record.change_frequency.value
        if record.priority is not None:
            etree.SubElement(url, _tag("priority")).text = format_priority(record.priority)

    return urlset


def render_sitemap(records: Iterable[UrlRecord]) -> bytes:
    """Serialize records to a pretty-printed, UTF-8 encoded sitemap document."""
    return etree.tostring(
        build_urlset(records),
        xml_declaration=True,
        encoding="UTF-8",
        pretty_print=True,
    )
