"""One sitemap generation run: assemble, publish, protect."""

import logging
from collections.abc import Callable
from datetime import datetime

from sitemap_generator.core.config import SitemapSettings
from sitemap_generator.core.ports import ArtifactRegistry, SitemapSink
from sitemap_generator.core.types import Site, SitemapResult
from sitemap_generator.core.utils import utc_now
from sitemap_generator.engine.assembler import SitemapAssembler
from sitemap_generator.infra.sinks.sitemap_xml import SitemapXMLOutputSink

logger = logging.getLogger(__name__)


def generate_sitemap(
    site: Site,
    settings: SitemapSettings,
    *,
    sink: SitemapSink | None = None,
    registry: ArtifactRegistry | None = None,
    clock: Callable[[], datetime] = utc_now,
) -> SitemapResult:
    """Generate and write the sitemap for ``site``.

    Per-item problems end up in ``SitemapResult.diagnostics``. A failure to
    write the document raises OutputWriteError.
    """
    result = SitemapAssembler(settings, clock=clock).assemble(site)

    if sink is None:
        sink = SitemapXMLOutputSink(site.destination / settings.output_relpath)
    output_path = sink.publish(result.records)

    if registry is not None:
        registry.protect(output_path)

    logger.info(
        "Wrote %d URLs to %s (%d diagnostics)",
        len(result.records),
        output_path,
        len(result.diagnostics),
    )
    return result.model_copy(update={"output_path": output_path})
