from __future__ import annotations

import gzip
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from scrapy.settings import Settings

from .models import SitemapReference, UrlRecord
from .sitemap_index import SitemapIndexGenerator
from .urlset import UrlSetGenerator

logger = logging.getLogger(__name__)


def _atomic_write(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_bytes(data)
    tmp_path.replace(path)


@dataclass(frozen=True)
class SitemapPath:
    """Where sitemap files live on disk and the URL crawlers reach them under."""

    real_path: Path
    path_url: str

    def __post_init__(self) -> None:
        if not str(self.real_path).strip():
            raise ValueError(f"Invalid real_path: {self.real_path!r}")
        if not isinstance(self.path_url, str) or not self.path_url.strip():
            raise ValueError(f"Invalid path_url: {self.path_url!r}")
        object.__setattr__(self, "real_path", Path(self.real_path))

    def url_for(self, file_name: str) -> str:
        return f"{self.path_url.rstrip('/')}/{file_name.lstrip('/')}"


@dataclass(frozen=True)
class BuildResult:
    sitemap_files: list[Path]
    index_file: Path
    url_count: int

    def as_dict(self) -> dict[str, object]:
        return {
            "sitemap_files": [str(p) for p in self.sitemap_files],
            "index_file": str(self.index_file),
            "url_count": self.url_count,
        }


class SitemapBuilder:
    """Write sitemap files plus the sitemap index that points at them.

    Sitemap file names are built as ``base + [order_number] + [".gz"] + ".xml"``.
    The order number (starting at 1) is only used when more than one sitemap is
    generated and ``.gz`` only when the files are gzip-compressed.
    """

    def __init__(
        self,
        path: SitemapPath | None = None,
        *,
        index_file_name: str = "sitemap_index.xml",
        sitemap_file_base_name: str = "sitemap",
        gzip: bool = False,
    ) -> None:
        if not index_file_name:
            raise ValueError(f"Invalid index_file_name: {index_file_name!r}")
        if not sitemap_file_base_name:
            raise ValueError(f"Invalid sitemap_file_base_name: {sitemap_file_base_name!r}")
        self._path = path
        self.index_file_name = index_file_name
        self.sitemap_file_base_name = sitemap_file_base_name
        self.gzip = gzip
        self._url_set_generator = UrlSetGenerator()

    @classmethod
    def from_settings(cls, settings: Settings, path: SitemapPath | None = None) -> SitemapBuilder:
        return cls(
            path,
            index_file_name=settings.get("SITEMAP_INDEX_FILE_NAME", "sitemap_index.xml"),
            sitemap_file_base_name=settings.get("SITEMAP_FILE_BASE_NAME", "sitemap"),
            gzip=settings.getbool("SITEMAP_GZIP"),
        )

    def set_path(self, real_path: Path | str, path_url: str) -> None:
        self._path = SitemapPath(Path(real_path), path_url)

    @property
    def path(self) -> SitemapPath:
        if self._path is None:
            raise RuntimeError("There is no path set, use set_path() first")
        return self._path

    def add_url(self, url: UrlRecord) -> None:
        self._url_set_generator.add_url(url)

    def add_urls(self, urls: Iterable[UrlRecord]) -> None:
        self._url_set_generator.add_urls(urls)

    def file_name(self, order_number: int | None = None) -> str:
        ordinal = "" if order_number is None else str(order_number)
        suffix = ".gz" if self.gzip else ""
        return f"{self.sitemap_file_base_name}{ordinal}{suffix}.xml"

    def _encode(self, document: str) -> bytes:
        data = document.encode("utf-8")
        if self.gzip:
            # Fixed mtime keeps the compressed bytes reproducible.
            return gzip.compress(data, mtime=0)
        return data

    def _remove_stale_sitemaps(self, real_path: Path, current: set[str]) -> list[Path]:
        """Delete sitemap files of this base name that the new index no longer lists."""
        pattern = re.compile(rf"^{re.escape(self.sitemap_file_base_name)}[0-9]*(\.gz)?\.xml$")
        removed: list[Path] = []
        for file_path in sorted(real_path.glob(f"{self.sitemap_file_base_name}*.xml")):
            name = file_path.name
            if name in current or name == self.index_file_name or not pattern.match(name):
                continue
            file_path.unlink()
            removed.append(file_path)
            logger.info("Removed stale sitemap %s", file_path)
        return removed

    def write(self, lastmod: str | None = None) -> BuildResult:
        """Write every sitemap, then the index, then drop stale sitemap files.

        Files are written one by one; if a write fails, sitemaps written before it
        stay on disk and the previous index (if any) is left untouched.
        """
        path = self.path
        sitemaps = self._url_set_generator.get_sitemaps()
        if lastmod is None:
            lastmod = datetime.now(UTC).date().isoformat()

        index = SitemapIndexGenerator()
        file_names: list[str] = []
        numbered = len(sitemaps) > 1
        for i in range(1, len(sitemaps) + 1):
            file_name = self.file_name(i if numbered else None)
            file_names.append(file_name)
            index.add_sitemap(SitemapReference(path.url_for(file_name), lastmod))

        # Build the index before touching the disk so an empty builder writes nothing.
        index_xml = index.get_xml()

        sitemap_files: list[Path] = []
        for file_name, document in zip(file_names, sitemaps):
            out_path = path.real_path / file_name
            _atomic_write(out_path, self._encode(document))
            sitemap_files.append(out_path)
            logger.info("Wrote sitemap %s", out_path)

        index_file = path.real_path / self.index_file_name
        _atomic_write(index_file, index_xml.encode("utf-8"))
        logger.info("Wrote sitemap index %s (%d sitemap(s))", index_file, len(sitemap_files))

        self._remove_stale_sitemaps(path.real_path, set(file_names))

        return BuildResult(
            sitemap_files=sitemap_files,
            index_file=index_file,
            url_count=len(self._url_set_generator),
        )
