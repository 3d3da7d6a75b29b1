from __future__ import annotations

import re

from sitemap_generator.models import SitemapReference, UrlRecord
from sitemap_generator.rendering import (
    format_priority,
    fragment_size,
    render_sitemap,
    render_sitemapindex,
    render_url,
    render_urlset,
)


def test_render_url_location_only():
    assert render_url(UrlRecord("http://example.com/a")) == (
        "<url><loc>http://example.com/a</loc></url>"
    )


def test_render_url_children_in_fixed_order():
    record = UrlRecord("http://example.com/", "2024-05-06", "weekly", 0.25)
    assert render_url(record) == (
        "<url><loc>http://example.com/</loc><lastmod>2024-05-06</lastmod>"
        "<changefreq>weekly</changefreq><priority>0.25</priority></url>"
    )


def test_render_url_priority_formatting():
    assert "<priority>1.0</priority>" in render_url(UrlRecord("http://e.com/", priority=1))
    assert "<priority>0.0</priority>" in render_url(UrlRecord("http://e.com/", priority="0"))


def test_render_url_escapes_location():
    record = UrlRecord("http://example.com/?a=1&b=<2>&c=\"x\"&d='y'")
    fragment = render_url(record)
    assert "&amp;b=&lt;2&gt;&amp;c=&quot;x&quot;&amp;d=&#x27;y&#x27;" in fragment
    assert "&b=" not in fragment


def test_render_sitemap_with_and_without_lastmod():
    assert render_sitemap(SitemapReference("http://example.com/s.xml")) == (
        "<sitemap><loc>http://example.com/s.xml</loc></sitemap>"
    )
    assert render_sitemap(SitemapReference("http://example.com/s.xml", "2024-01-01")) == (
        "<sitemap><loc>http://example.com/s.xml</loc><lastmod>2024-01-01</lastmod></sitemap>"
    )


def test_render_urlset_document_layout():
    doc = render_urlset(["<url><loc>a</loc></url>", "<url><loc>b</loc></url>"])
    assert doc == (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        "  <url><loc>a</loc></url>\n"
        "  <url><loc>b</loc></url>\n"
        "</urlset>\n"
    )


def test_render_sitemapindex_document_layout():
    doc = render_sitemapindex(["<sitemap><loc>a</loc></sitemap>"])
    assert doc.splitlines() == [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<sitemapindex xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
        "  <sitemap><loc>a</loc></sitemap>",
        "</sitemapindex>",
    ]


def test_fragment_size_counts_utf8_bytes():
    assert fragment_size("abc") == 3
    assert fragment_size("č") == 2


def test_render_url_priority_never_uses_exponent_notation():
    fragment = render_url(UrlRecord("http://e.com/", priority=0.00001))
    assert "<priority>0.00001</priority>" in fragment
    assert re.search(r"<priority>\d+(\.\d+)?</priority>", fragment)
    assert format_priority(0.5) == "0.5"
    assert format_priority(1.0) == "1.0"
