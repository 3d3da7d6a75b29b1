from __future__ import annotations

import pytest
from scrapy.utils.sitemap import Sitemap
from sitemap_generator.models import SitemapReference
from sitemap_generator.sitemap_index import SitemapIndexGenerator


def test_get_xml_without_sitemaps_fails():
    with pytest.raises(RuntimeError, match="add_sitemap"):
        SitemapIndexGenerator().get_xml()


def test_get_xml_lists_sitemaps_in_insertion_order():
    index = SitemapIndexGenerator()
    index.add_sitemap(SitemapReference("http://example.com/sitemap2.xml", "2024-01-02"))
    index.add_sitemap(SitemapReference("http://example.com/sitemap1.xml"))
    index.add_sitemap(SitemapReference("http://example.com/a&b.xml", "2024-01-03"))
    assert len(index) == 3

    xml = index.get_xml()
    assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<sitemapindex ')
    assert xml.count("<sitemap>") == 3
    assert "a&amp;b.xml" in xml

    parsed = Sitemap(xml.encode("utf-8"))
    assert parsed.type == "sitemapindex"
    assert list(parsed) == [
        {"loc": "http://example.com/sitemap2.xml", "lastmod": "2024-01-02"},
        {"loc": "http://example.com/sitemap1.xml"},
        {"loc": "http://example.com/a&b.xml", "lastmod": "2024-01-03"},
    ]


def test_add_sitemap_rejects_other_types():
    with pytest.raises(TypeError):
        SitemapIndexGenerator().add_sitemap("http://example.com/sitemap.xml")  # type: ignore[arg-type]
