"""
VideoEmbedStrategy Pipeline
===========================
1. Claim : video-host URL matching a watch/share/embed pattern with an
   11-character id.
2. Thumbnail URL is built from the id (no network).
3. Title/author come from the public embed-metadata endpoint (not relayed).
4. Build :class:`Preview`:
      ``Preview(title=<title>, description="Video by <author>",
        summary=<watch blurb>, image=<thumbnail>)``

NOTE: Embed failures keep the thumbnail and are *not* marked as errors.
"""

from __future__ import annotations

import logging
import re
import aiohttp

from . import register
from .. import http
from ...config import ResolverSettings
from ..model import Preview, host_of

logger = logging.getLogger(__name__)

_VIDEO_DOMAINS = {
    "youtube.com",
    "youtu.be",
    "youtube-nocookie.com",
}
_VIDEO_ID_RE = re.compile(r"^.*(youtu\.be/|v/|u/\w/|embed/|watch\?v=|&v=)([^#&?]*).*")
VIDEO_ID_LEN = 11
DEFAULT_TITLE = "YouTube Video"


@register
class VideoEmbedStrategy:
    name = "video"

    # ---------- low‑level helpers ------------------------------------ #

    @staticmethod
    def _is_video_host(url: str) -> bool:
        host = host_of(url)
        return any(host == dom or host.endswith("." + dom) for dom in _VIDEO_DOMAINS)

    @staticmethod
    def _extract_video_id(url: str) -> str | None:
        """Return the video id or None if the URL has no well-formed one."""
        if not VideoEmbedStrategy._is_video_host(url):
            return None
        match = _VIDEO_ID_RE.match(url)
        if match and len(match.group(2)) == VIDEO_ID_LEN:
            return match.group(2)
        return None

    # ---------- public contract -------------------------------------- #

    @staticmethod
    def claims(url: str, settings: ResolverSettings) -> bool:
        return VideoEmbedStrategy._extract_video_id(url) is not None

    @staticmethod
    async def resolve(
        session: aiohttp.ClientSession, url: str, settings: ResolverSettings
    ) -> Preview:
        """
        Resolve a video URL into a :class:`Preview`.

        :param session: Shared HTTP session.
        :param url: Video watch/share URL.
        :param settings: Endpoint configuration.
        :returns: Preview with the constructed thumbnail whenever the URL
            carries a video id.
        """
        video_id = VideoEmbedStrategy._extract_video_id(url)
        if video_id is None:
            logger.warning("No video id in %s", url)
            return Preview(title=DEFAULT_TITLE, error=True)
        thumbnail = settings.THUMBNAIL_URL.format(video_id=video_id)

        try:
            data = await http.fetch_json(session, settings.EMBED_API_URL, params={"url": url})
            if not isinstance(data, dict):
                raise ValueError("Malformed embed response")
            if data.get("error"):
                raise ValueError(str(data["error"]))

            title = str(data.get("title") or DEFAULT_TITLE)
            author = data.get("author_name")
            return Preview(
                title=title,
                description=f"Video by {author}" if author else "",
                summary=(
                    f'Watch "{data.get("title") or "this video"}" on YouTube.\n\n'
                    f"Author: {author or 'Unknown'}\nProvider: YouTube"
                ),
                image=thumbnail,
                error=False,
            )
        except Exception as e:
            logger.warning("Failed to fetch embed metadata for %s: %s", url, e)
            return Preview(title=DEFAULT_TITLE, image=thumbnail, error=False)
