from __future__ import annotations

from .models import SitemapReference
from .rendering import render_sitemap, render_sitemapindex


class SitemapIndexGenerator:
    def __init__(self) -> None:
        self._sitemaps: list[SitemapReference] = []

    def __len__(self) -> int:
        return len(self._sitemaps)

    def add_sitemap(self, sitemap: SitemapReference) -> None:
        if not isinstance(sitemap, SitemapReference):
            raise TypeError(f"Expected SitemapReference, got {type(sitemap).__name__}")
        self._sitemaps.append(sitemap)

    def get_xml(self) -> str:
        if not self._sitemaps:
            raise RuntimeError("There is no sitemap added, use add_sitemap() first")
        return render_sitemapindex(render_sitemap(sitemap) for sitemap in self._sitemaps)
