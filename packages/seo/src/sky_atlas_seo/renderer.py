"""Sitemap protocol 0.9 serialization."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING

from sky_atlas_core.schemas import ChangeFreq, SitemapURL

from sky_atlas_seo.roles import FALLBACK_PRIORITY

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date

    from sky_atlas_core.schemas import SitemapKind

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'
MAX_URLS_PER_SITEMAP = 50_000


def format_priority(priority: float) -> str:
    return f"{priority:.1f}"


def _serialize(root: ET.Element) -> str:
    ET.indent(root, space="  ")
    return XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"


def render_urlset(urls: Sequence[SitemapURL]) -> str:
    """Render a ``<urlset>`` document, preserving the given order.

    Raises:
        ValueError: if ``urls`` is empty or above the protocol limit.
    """
    if not urls:
        msg = "A urlset must contain at least one <url>"
        raise ValueError(msg)
    if len(urls) > MAX_URLS_PER_SITEMAP:
        msg = f"A urlset may hold at most {MAX_URLS_PER_SITEMAP} URLs"
        raise ValueError(msg)

    urlset = ET.Element("urlset", {"xmlns": SITEMAP_NS})
    for url in urls:
        url_el = ET.SubElement(urlset, "url")
        ET.SubElement(url_el, "loc").text = url.loc
        ET.SubElement(url_el, "lastmod").text = url.lastmod.isoformat()
        ET.SubElement(url_el, "changefreq").text = url.changefreq.value
        ET.SubElement(url_el, "priority").text = format_priority(url.priority)
    return _serialize(urlset)


def render_sitemap_index(entries: Sequence[tuple[str, date]]) -> str:
    """Render a ``<sitemapindex>`` listing ``(loc, lastmod)`` pairs."""
    index = ET.Element("sitemapindex", {"xmlns": SITEMAP_NS})
    for loc, lastmod in entries:
        sitemap_el = ET.SubElement(index, "sitemap")
        ET.SubElement(sitemap_el, "loc").text = loc
        ET.SubElement(sitemap_el, "lastmod").text = lastmod.isoformat()
    return _serialize(index)


def fallback_url(site_url: str, kind: SitemapKind, lastmod: date) -> SitemapURL:
    """Single entry pointing at the category root of ``kind``."""
    return SitemapURL(
        loc=f"{site_url.rstrip('/')}{kind.category_root}",
        lastmod=lastmod,
        changefreq=ChangeFreq.DAILY,
        priority=FALLBACK_PRIORITY,
    )


def render_fallback(site_url: str, kind: SitemapKind, lastmod: date) -> str:
    return render_urlset([fallback_url(site_url, kind, lastmod)])


def parse_urlset(xml: str) -> list[tuple[str, float]]:
    """Read ``(loc, priority)`` pairs back out of a rendered urlset."""
    root = ET.fromstring(xml)
    ns = {"sm": SITEMAP_NS}
    pairs: list[tuple[str, float]] = []
    for url_el in root.findall("sm:url", ns):
        loc = url_el.findtext("sm:loc", default="", namespaces=ns)
        priority = url_el.findtext("sm:priority", default="0.5", namespaces=ns)
        pairs.append((loc, float(priority)))
    return pairs
