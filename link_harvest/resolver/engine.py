from __future__ import annotations

import logging
from types import TracebackType
from typing import List

import aiohttp

from ..config import ResolverSettings
from ..parser.model import ExtractedLink
from .model import LinkMetadata, Preview
from .strategies import Strategy, get as get_strategy
from .strategies.web import FETCH_FAILED

logger = logging.getLogger(__name__)

ORDER = ["social", "video", "web"]


class MetadataResolver:
    """
    Turn link records into settled :class:`LinkMetadata`.

    Usable as an async context manager to share one HTTP session across many
    resolutions; otherwise every call opens and closes its own session.
    """

    def __init__(
        self,
        settings: ResolverSettings | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        if settings is None:
            from ..config import resolver as default_settings

            settings = default_settings
        self.settings = settings
        self._session = session
        self._owns_session = False

    async def __aenter__(self) -> "MetadataResolver":
        if self._session is None:
            self._session = self._new_session()
            self._owns_session = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
        self._session = None
        self._owns_session = False

    def _new_session(self) -> aiohttp.ClientSession:
        return aiohttp.ClientSession(headers={"User-Agent": self.settings.USER_AGENT})

    def select_strategy(self, url: str) -> Strategy:
        """First strategy in ``ORDER`` that claims ``url``."""
        strategies: List[Strategy] = [s for s in (get_strategy(n) for n in ORDER) if s]
        for strategy in strategies:
            if strategy.claims(url, self.settings):
                return strategy
        # ORDER ends with the catch-all web strategy
        return strategies[-1]

    async def _dispatch(self, session: aiohttp.ClientSession, url: str) -> Preview:
        name = "<none>"
        try:
            strategy = self.select_strategy(url)
            name = strategy.name
            logger.debug("resolve: %s -> %s", url, name)
            return await strategy.resolve(session, url, self.settings)
        except Exception:
            logger.exception("Strategy %s raised for %s", name, url)
            return Preview(title=url, summary=FETCH_FAILED, error=True)

    async def resolve_into(self, link: ExtractedLink, metadata: LinkMetadata) -> LinkMetadata:
        """Resolve ``link`` and settle the caller-owned ``metadata`` record."""
        if self._session is not None:
            preview = await self._dispatch(self._session, link.url)
        else:
            async with self._new_session() as session:
                preview = await self._dispatch(session, link.url)
        return metadata.settle(preview)

    async def resolve(self, link: ExtractedLink) -> LinkMetadata:
        """
        Resolve one link into a settled preview.

        :param link: Parsed link record.
        :returns: :class:`LinkMetadata` with ``is_loading=False``; failures are
            reported through ``error`` rather than raised.
        """
        return await self.resolve_into(link, LinkMetadata.pending(link.url))


async def resolve_link(link: ExtractedLink, settings: ResolverSettings | None = None) -> LinkMetadata:
    """Resolve ``link`` with a throwaway :class:`MetadataResolver`."""
    return await MetadataResolver(settings).resolve(link)
