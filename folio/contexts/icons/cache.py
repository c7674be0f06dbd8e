"""
Icon Cache

Content-addressed, filesystem-resident store of rasterized icons. The key is the
triple (file stem, color hex without '#', pixel size) and the file name is derived
from it alone:

    <stem>_<color>_<size>px.png

so identical requests hit the same file across runs. Entries are never
invalidated automatically: editing a source SVG does not refresh its rasters.
Clearing the cache is a manual operation (see IconCache.clear).
"""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

RASTER_EXTENSION = ".png"


@dataclass(frozen=True)
class IconCacheKey:
    """
    Cache key for one rasterized icon.

    Attributes:
        name: SVG file stem (after icon key mapping)
        color: Six hex digits without '#'
        size: Pixel size of the longer raster side
    """

    name: str
    color: str
    size: int

    @property
    def filename(self) -> str:
        return f"{self.name}_{self.color}_{self.size}px{RASTER_EXTENSION}"


class IconCache:
    """Icon raster files under one output directory."""

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)

    def path_for(self, key: IconCacheKey) -> Path:
        return self.output_dir / key.filename

    def lookup(self, key: IconCacheKey) -> Optional[Path]:
        """Return the cached path for key if the file exists."""
        path = self.path_for(key)
        return path if path.exists() else None

    def store(self, key: IconCacheKey, write: Callable[[Path], None]) -> Path:
        """
        Write a cache entry atomically.

        The writer receives a temporary path in the output directory; once it
        returns, the file is renamed into place so concurrent readers never see a
        partially written raster.

        Args:
            key: Cache key
            write: Callable writing the raster to the path it is given

        Returns:
            Final cache path
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        target = self.path_for(key)

        # Same directory as target so os.replace stays on one filesystem
        temp_fd, temp_path = tempfile.mkstemp(
            prefix=f".{key.name}_", suffix=RASTER_EXTENSION, dir=self.output_dir
        )
        os.close(temp_fd)
        try:
            write(Path(temp_path))
            os.replace(temp_path, target)
        except BaseException:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

        return target

    def entries(self) -> List[Path]:
        """All cached raster files, sorted by name."""
        if not self.output_dir.exists():
            return []
        return sorted(
            p for p in self.output_dir.glob(f"*{RASTER_EXTENSION}") if not p.name.startswith(".")
        )

    def clear(self) -> int:
        """
        Delete every cached raster.

        Returns:
            Number of files removed
        """
        removed = 0
        for path in self.entries():
            path.unlink()
            removed += 1
        return removed
