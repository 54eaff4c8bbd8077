"""
On-demand resolution with a one-shot latch per link.

Presentation code calls :meth:`ResolutionScheduler.request` whenever a link
becomes relevant (e.g. scrolls into view). The first call spawns an
``asyncio`` task; repeated calls return that same task. Until the task
settles, :meth:`metadata_for` returns the pending baseline, so the domain is
always available for display.

Tasks are independent: each owns its own record and settles in whatever
order the network allows. Identical URLs under different link ids are
resolved separately.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Iterable, List

from ..parser.model import ExtractedLink
from .engine import MetadataResolver
from .model import LinkMetadata

logger = logging.getLogger(__name__)


class ResolutionScheduler:
    def __init__(self, resolver: MetadataResolver, *, max_concurrency: int | None = None) -> None:
        self.resolver = resolver
        limit = max_concurrency or resolver.settings.MAX_CONCURRENCY
        self._semaphore = asyncio.Semaphore(limit)
        self._records: Dict[str, LinkMetadata] = {}
        self._tasks: Dict[str, asyncio.Task[LinkMetadata]] = {}

    def metadata_for(self, link: ExtractedLink) -> LinkMetadata:
        """Current record for ``link`` (pending baseline until settled)."""
        record = self._records.get(link.id)
        if record is None:
            record = self._records[link.id] = LinkMetadata.pending(link.url)
        return record

    def is_requested(self, link: ExtractedLink) -> bool:
        return link.id in self._tasks

    async def _run(self, link: ExtractedLink) -> LinkMetadata:
        async with self._semaphore:
            return await self.resolver.resolve_into(link, self.metadata_for(link))

    def request(self, link: ExtractedLink) -> asyncio.Task[LinkMetadata]:
        """
        Start resolving ``link`` unless already started.

        Must be called from a running event loop.

        :returns: The task settling this link's record.
        """
        task = self._tasks.get(link.id)
        if task is None:
            task = asyncio.get_running_loop().create_task(
                self._run(link), name=f"resolve-{link.id}"
            )
            self._tasks[link.id] = task
        return task

    async def resolve_visible(
        self, links: Iterable[ExtractedLink], limit: int | None = None
    ) -> List[LinkMetadata]:
        """
        Request and await a batch of links.

        :param links: Links in display order.
        :param limit: Only the first ``limit`` links are requested.
        :returns: Settled records, in the same order as ``links``.
        """
        batch = list(links)
        if limit is not None:
            batch = batch[:limit]
        logger.info("Resolving %d links", len(batch))
        return list(await asyncio.gather(*(self.request(link) for link in batch)))
