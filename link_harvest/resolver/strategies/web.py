"""
WebPageStrategy Pipeline
========================
1. Claim : every URL (fallback strategy).
2. GET the page through the relay, bounded by ``WEB_TIMEOUT``.
3. Scrape Open Graph title/description/image, then ``<title>`` and
   ``<meta name="description">``.
4. Short descriptions are replaced by the first long paragraphs; the summary
   is capped at ``SUMMARY_MAX_LEN``.

NOTE: Timeouts, HTTP errors and parse errors all yield ``error=True`` with no
partial page fields.
"""

from __future__ import annotations

import asyncio
import logging

import aiohttp
from bs4 import BeautifulSoup

from . import register
from .. import http
from ...config import ResolverSettings
from ..model import Preview

logger = logging.getLogger(__name__)

NO_SUMMARY = "No summary available for this content."
FETCH_FAILED = "Could not fetch content preview. The website might be blocking automated access."


def _meta_content(soup: BeautifulSoup, **attrs: str) -> str | None:
    tag = soup.find("meta", attrs=attrs)
    if tag and tag.get("content"):
        return str(tag["content"]).strip() or None
    return None


@register
class WebPageStrategy:
    name = "web"

    # ---------- low‑level helpers ------------------------------------ #

    @staticmethod
    def _paragraph_summary(soup: BeautifulSoup, settings: ResolverSettings) -> str:
        texts = (p.get_text().strip() for p in soup.find_all("p"))
        long_texts = [t for t in texts if len(t) > settings.PARAGRAPH_MIN_LEN]
        return "\n\n".join(long_texts[: settings.PARAGRAPH_COUNT])

    @staticmethod
    def _truncate(text: str, limit: int) -> str:
        return text[:limit] + "..." if len(text) > limit else text

    @staticmethod
    def parse_html(html: str, url: str, settings: ResolverSettings) -> Preview:
        """Build a preview from a fetched HTML document."""
        soup = BeautifulSoup(html, "html.parser")

        og_title = _meta_content(soup, property="og:title")
        og_desc = _meta_content(soup, property="og:description")
        og_image = _meta_content(soup, property="og:image")
        meta_desc = _meta_content(soup, name="description")
        title_tag = soup.find("title")
        page_title = title_tag.get_text().strip() if title_tag else None

        summary = og_desc or meta_desc or ""
        if len(summary) < settings.SHORT_DESCRIPTION_LEN:
            extracted = WebPageStrategy._paragraph_summary(soup, settings)
            if extracted:
                summary = extracted
        summary = WebPageStrategy._truncate(summary, settings.SUMMARY_MAX_LEN)

        return Preview(
            title=og_title or page_title or url,
            description=og_desc or meta_desc or "",
            summary=summary or NO_SUMMARY,
            image=og_image,
            error=False,
        )

    # ---------- public contract -------------------------------------- #

    @staticmethod
    def claims(url: str, settings: ResolverSettings) -> bool:
        return True

    @staticmethod
    async def resolve(
        session: aiohttp.ClientSession, url: str, settings: ResolverSettings
    ) -> Preview:
        """
        Scrape a generic page into a :class:`Preview`.

        :param session: Shared HTTP session.
        :param url: Page URL.
        :param settings: Relay, timeout and summary limits.
        :returns: Page preview, or an error preview on any failure.
        """
        target = http.relay_url(url, settings.RELAY_URL)
        try:
            html = await asyncio.wait_for(
                http.fetch_text(session, target, timeout=settings.WEB_TIMEOUT),
                timeout=settings.WEB_TIMEOUT,
            )
            return WebPageStrategy.parse_html(html, url, settings)
        except asyncio.TimeoutError:
            logger.warning("Timed out after %.1fs fetching %s", settings.WEB_TIMEOUT, url)
        except Exception as e:
            logger.warning("Failed to fetch page at %s: %s", url, e)
        return Preview(title=url, summary=FETCH_FAILED, error=True)
