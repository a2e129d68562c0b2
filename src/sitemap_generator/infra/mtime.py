from datetime import datetime
from pathlib import Path

from sitemap_generator.core.exceptions import SourceNotFoundError
from sitemap_generator.core.utils import from_timestamp


class FileSystemModificationTimes:
    """Reads modification times from the local filesystem."""

    def modified_at(self, path: Path) -> datetime:
        try:
            return from_timestamp(Path(path).stat().st_mtime)
        except (FileNotFoundError, NotADirectoryError) as e:
            raise SourceNotFoundError(Path(path)) from e


class StaticModificationTimes:
    """Modification times from a fixed mapping, for generated or in-memory sites."""

    def __init__(self, times: dict[Path, datetime]) -> None:
        self._times = {Path(path): value for path, value in times.items()}

    def modified_at(self, path: Path) -> datetime:
        try:
            return self._times[Path(path)]
        except KeyError:
            raise SourceNotFoundError(Path(path)) from None
