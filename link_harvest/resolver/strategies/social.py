"""
SocialPostStrategy Pipeline
===========================
1. Claim : host is x.com / twitter.com (or a subdomain) and the path carries
   ``/status/<digits>``.
2. Fetch the post JSON from the read API, routed through the relay.
3. Build :class:`Preview`:
      ``Preview(title="Post by <name> (@<handle>)", description=<text>,
        summary=<text>, image=<photo|video thumb|avatar>, domain="x.com")``

NOTE: Any failure yields a fixed placeholder with ``error=True``.
"""

from __future__ import annotations

import logging
import re
from typing import Any
import aiohttp

from . import register
from .. import http
from ...config import ResolverSettings
from ..model import Preview, host_of, split_url

logger = logging.getLogger(__name__)

_SOCIAL_DOMAINS = {
    "x.com",
    "twitter.com",
}
_STATUS_RE = re.compile(r"/status/(\d+)")

CANONICAL_DOMAIN = "x.com"


@register
class SocialPostStrategy:
    name = "social"

    # ---------- low‑level helpers ------------------------------------ #

    @staticmethod
    def _is_social_host(url: str) -> bool:
        host = host_of(url)
        return any(host == dom or host.endswith("." + dom) for dom in _SOCIAL_DOMAINS)

    @staticmethod
    def _extract_post_id(url: str) -> str | None:
        parts = split_url(url)
        match = _STATUS_RE.search(parts.path) if parts else None
        return match.group(1) if match else None

    @staticmethod
    def _pick_image(post: dict[str, Any]) -> str:
        """First photo, else first video thumbnail, else the author's avatar."""
        media = post.get("media") or {}
        photos = media.get("photos") or []
        videos = media.get("videos") or []
        if photos:
            return str(photos[0].get("url") or "")
        if videos:
            return str(videos[0].get("thumbnail_url") or "")
        return str((post.get("author") or {}).get("avatar_url") or "")

    @staticmethod
    def _placeholder() -> Preview:
        return Preview(
            title="X / Twitter Post",
            description="Click to view this post on X.",
            summary=(
                "Content could not be loaded automatically. "
                "Please visit the link to view the content."
            ),
            error=True,
        )

    # ---------- public contract -------------------------------------- #

    @staticmethod
    def claims(url: str, settings: ResolverSettings) -> bool:
        return (
            SocialPostStrategy._is_social_host(url)
            and SocialPostStrategy._extract_post_id(url) is not None
        )

    @staticmethod
    async def resolve(
        session: aiohttp.ClientSession, url: str, settings: ResolverSettings
    ) -> Preview:
        """
        Resolve a social post URL into a :class:`Preview`.

        :param session: Shared HTTP session.
        :param url: Post URL.
        :param settings: Endpoint and relay configuration.
        :returns: Post preview, or the placeholder on any failure.
        """
        try:
            post_id = SocialPostStrategy._extract_post_id(url)
            if not post_id:
                raise ValueError("No post id in URL")

            api_url = settings.SOCIAL_API_URL.format(post_id=post_id)
            data = await http.fetch_json(session, http.relay_url(api_url, settings.RELAY_URL))

            post = data.get("tweet") if isinstance(data, dict) else None
            if not isinstance(post, dict):
                raise ValueError("No post data in response")

            author = post.get("author") or {}
            name = str(author.get("name") or "Unknown")
            handle = str(author.get("screen_name") or "twitter")
            text = str(post.get("text") or "")

            return Preview(
                title=f"Post by {name} (@{handle})",
                description=text,
                summary=text,
                image=SocialPostStrategy._pick_image(post),
                domain=CANONICAL_DOMAIN,
                error=False,
            )
        except Exception as e:
            logger.warning("Failed to fetch social post at %s: %s", url, e)
            return SocialPostStrategy._placeholder()
