from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal
from html import escape

from .models import SitemapReference, UrlRecord

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def _tag(name: str, value: object | None) -> str:
    if value is None:
        return ""
    return f"<{name}>{value}</{name}>"


def render_url(record: UrlRecord) -> str:
    return (
        "<url>"
        + _tag("loc", escape(record.location, quote=True))
        + _tag("lastmod", record.lastmod)
        + _tag("changefreq", record.changefreq)
        + _tag("priority", None if record.priority is None else format_priority(record.priority))
        + "</url>"
    )


def format_priority(priority: float) -> str:
    # <priority> is an xsd:decimal, which has no exponent notation (1e-05).
    return format(Decimal(repr(priority)), "f")


def render_sitemap(reference: SitemapReference) -> str:
    return (
        "<sitemap>"
        + _tag("loc", escape(reference.location, quote=True))
        + _tag("lastmod", reference.lastmod)
        + "</sitemap>"
    )


def fragment_size(fragment: str) -> int:
    """Size of a rendered element in bytes, as it ends up in the UTF-8 file."""
    return len(fragment.encode("utf-8"))


def _document(root: str, fragments: Iterable[str]) -> str:
    lines = [XML_DECLARATION, f'<{root} xmlns="{SITEMAP_NS}">']
    lines.extend(f"  {fragment}" for fragment in fragments)
    lines.append(f"</{root}>")
    return "\n".join(lines) + "\n"


def render_urlset(fragments: Iterable[str]) -> str:
    return _document("urlset", fragments)


def render_sitemapindex(fragments: Iterable[str]) -> str:
    return _document("sitemapindex", fragments)
