from datetime import UTC, datetime
from pathlib import Path

import pytest

from sitemap_generator.core.exceptions import OutputWriteError
from sitemap_generator.core.sitemap_xml import render_sitemap
from sitemap_generator.core.types import UrlRecord
from sitemap_generator.infra.sinks.sitemap_xml import SitemapXMLOutputSink


@pytest.fixture
def records() -> list[UrlRecord]:
    return [UrlRecord(location="https://example.com/", last_modified=datetime(2021, 6, 15, tzinfo=UTC))]


def test_sink_creates_file(records, tmp_path: Path):
    output_file = tmp_path / "sitemap.xml"

    written = SitemapXMLOutputSink(output_path=output_file).publish(records)

    assert written == output_file
    assert output_file.read_bytes() == render_sitemap(records)


def test_sink_creates_parent_directories(records, tmp_path: Path):
    output_file = tmp_path / "deeply" / "nested" / "sitemap.xml"

    SitemapXMLOutputSink(output_path=output_file).publish(records)

    assert output_file.exists()


def test_sink_overwrites_existing_file(records, tmp_path: Path):
    output_file = tmp_path / "sitemap.xml"
    output_file.write_text("old content")

    SitemapXMLOutputSink(output_path=output_file).publish(records)

    content = output_file.read_text(encoding="utf-8")
    assert content.startswith("<?xml version")
    assert "old content" not in content


def test_sink_leaves_no_temporary_files(records, tmp_path: Path):
    SitemapXMLOutputSink(output_path=tmp_path / "sitemap.xml").publish(records)

    assert [p.name for p in tmp_path.iterdir()] == ["sitemap.xml"]


def test_sink_file_is_world_readable(records, tmp_path: Path):
    output_file = tmp_path / "sitemap.xml"

    SitemapXMLOutputSink(output_path=output_file).publish(records)

    assert output_file.stat().st_mode & 0o044 == 0o044


def test_sink_raises_when_directory_cannot_be_created(records, tmp_path: Path):
    blocker = tmp_path / "site"
    blocker.write_text("a file, not a directory")

    with pytest.raises(OutputWriteError) as excinfo:
        SitemapXMLOutputSink(output_path=blocker / "sitemap.xml").publish(records)

    assert excinfo.value.path == blocker / "sitemap.xml"
    assert isinstance(excinfo.value.__cause__, OSError)


def test_sink_raises_when_target_is_a_directory(records, tmp_path: Path):
    target = tmp_path / "sitemap.xml"
    target.mkdir()

    with pytest.raises(OutputWriteError):
        SitemapXMLOutputSink(output_path=target).publish(records)

    assert [p.name for p in tmp_path.iterdir()] == ["sitemap.xml"]
