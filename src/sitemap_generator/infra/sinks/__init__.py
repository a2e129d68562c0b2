"""Output sinks."""

from sitemap_generator.infra.sinks.sitemap_xml import SitemapXMLOutputSink

__all__ = ["SitemapXMLOutputSink"]
