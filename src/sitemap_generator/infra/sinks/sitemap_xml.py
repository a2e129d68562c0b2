"""Sitemap XML Output Sink for publishing records as a sitemap.xml file."""

import logging
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path

from sitemap_generator.core.exceptions import OutputWriteError
from sitemap_generator.core.sitemap_xml import render_sitemap
from sitemap_generator.core.types import UrlRecord

logger = logging.getLogger(__name__)


class SitemapXMLOutputSink:
    """Publishes sitemap records as an XML file.

    Implements the SitemapSink protocol by writing render_sitemap() to a file.
    """

    def __init__(self, output_path: Path) -> None:
        """Initialize the sitemap output sink.

        Args:
            output_path: Path where the sitemap file will be written

        """
        self.output_path = Path(output_path)

    def publish(self, records: Iterable[UrlRecord]) -> Path:
        """Publish the records as a sitemap file.

        Args:
            records: The records to publish, in output order

        Returns:
            The path of the written file

        Raises:
            OutputWriteError: If the directory cannot be created or the file
                cannot be written. An existing file is left untouched.

        """
        document = render_sitemap(records)

        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputWriteError(self.output_path, f"cannot create directory: {e}") from e

        # Write next to the target, then swap it in
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=".sitemap-", dir=self.output_path.parent)
        except OSError as e:
            raise OutputWriteError(self.output_path, str(e)) from e

        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(document)
            # mkstemp creates the file owner-only
            tmp_path.chmod(0o644)
            os.replace(tmp_path, self.output_path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise OutputWriteError(self.output_path, str(e)) from e

        logger.debug("Wrote %d bytes to %s", len(document), self.output_path)
        return self.output_path
