from __future__ import annotations

import logging
from collections.abc import Iterable

from .models import UrlRecord
from .rendering import fragment_size, render_url, render_urlset

logger = logging.getLogger(__name__)


class UrlSetGenerator:
    """Split URL records into as many ``<urlset>`` documents as the protocol needs.

    See https://www.sitemaps.org/protocol.html for the limits. Both limits are
    scaled down by a multiplier so the wrapper markup never pushes a finished
    document over the hard cap.
    """

    MAX_URLRECORD_COUNT = 50000
    MAX_URLRECORD_COUNT_MULTIPLIER = 0.9
    MAX_URLSET_SIZE_KB = 50000
    MAX_URLSET_SIZE_MULTIPLIER = 0.9

    def __init__(self) -> None:
        self._urls: list[UrlRecord] = []

    def __len__(self) -> int:
        return len(self._urls)

    def add_url(self, url: UrlRecord) -> None:
        if not isinstance(url, UrlRecord):
            raise TypeError(f"Expected UrlRecord, got {type(url).__name__}")
        self._urls.append(url)

    def add_urls(self, urls: Iterable[UrlRecord]) -> None:
        for url in urls:
            self.add_url(url)

    @property
    def max_file_size(self) -> float:
        return self.MAX_URLSET_SIZE_KB * self.MAX_URLSET_SIZE_MULTIPLIER * 1024

    @property
    def max_records_count(self) -> float:
        return self.MAX_URLRECORD_COUNT * self.MAX_URLRECORD_COUNT_MULTIPLIER

    def _partition(self) -> list[list[str]]:
        max_file_size = self.max_file_size
        max_records_count = self.max_records_count

        groups: list[list[str]] = []
        current: list[str] = []
        current_size = 0
        current_count = 0
        for url in self._urls:
            fragment = render_url(url)
            current.append(fragment)
            current_size += fragment_size(fragment)
            current_count += 1

            # The check runs after the append, so an oversized record still lands in a group.
            if current_size >= max_file_size or current_count >= max_records_count:
                logger.debug(
                    "Closing url set %d (records=%d, bytes=%d)",
                    len(groups) + 1,
                    current_count,
                    current_size,
                )
                groups.append(current)
                current = []
                current_size = 0
                current_count = 0

        if current:
            groups.append(current)
        return groups

    def get_sitemaps(self) -> list[str]:
        sitemaps = [render_urlset(group) for group in self._partition()]
        logger.info("Generated %d sitemap(s) from %d URL record(s)", len(sitemaps), len(self))
        return sitemaps
