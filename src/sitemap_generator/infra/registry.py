from collections.abc import Iterator
from pathlib import Path, PurePosixPath


class KeepFilesRegistry:
    """Generated files that the site's cleanup pass must leave in place.

    Paths are stored relative to the destination root.
    """

    def __init__(self, destination: Path) -> None:
        self.destination = Path(destination)
        self._kept: set[PurePosixPath] = set()

    def protect(self, path: Path) -> None:
        self._kept.add(self._relative(path))

    def is_protected(self, path: Path) -> bool:
        return self._relative(path) in self._kept

    def __iter__(self) -> Iterator[PurePosixPath]:
        return iter(sorted(self._kept))

    def __len__(self) -> int:
        return len(self._kept)

    def _relative(self, path: Path) -> PurePosixPath:
        path = Path(path)
        if path.is_absolute():
            path = path.relative_to(self.destination)
        return PurePosixPath(path.as_posix())
