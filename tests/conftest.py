from __future__ import annotations

import os
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import pytest

from sitemap_generator.core.config import SitemapSettings


@pytest.fixture
def settings() -> SitemapSettings:
    return SitemapSettings()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep SITEMAP_GENERATOR_* variables from the host out of the tests."""
    for key in list(os.environ):
        if key.startswith("SITEMAP_GENERATOR_"):
            monkeypatch.delenv(key)


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[..., Path]:
    """Create a file under tmp_path with an optional fixed modification time."""

    def _write(relative: str, content: str = "", modified: datetime | None = None) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        if modified is not None:
            ts = modified.timestamp()
            os.utime(path, (ts, ts))
        return path

    return _write
