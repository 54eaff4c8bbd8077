"""
Outbound HTTP helpers shared by the resolution strategies.

Every remote call goes through these two coroutines so strategies stay free
of session plumbing (and tests have one place to stub).
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import aiohttp


def relay_url(target: str, relay: str) -> str:
    """
    Route ``target`` through the CORS-bypass relay.

    :param target: Absolute URL to fetch.
    :param relay: Relay prefix the encoded target is appended to. Empty
        string means "no relay".
    """
    if not relay:
        return target
    return f"{relay}{quote(target, safe='')}"


async def fetch_json(
    session: aiohttp.ClientSession,
    url: str,
    *,
    params: dict[str, str] | None = None,
) -> Any:
    """GET ``url`` and decode the JSON body. Raises on non-2xx responses."""
    async with session.get(url, params=params) as resp:
        resp.raise_for_status()
        # Relays and embed services often mislabel JSON as text/html
        return await resp.json(content_type=None)


async def fetch_text(
    session: aiohttp.ClientSession,
    url: str,
    *,
    timeout: float | None = None,
) -> str:
    """GET ``url`` and return the decoded body. Raises on non-2xx responses."""
    kwargs: dict[str, Any] = {}
    if timeout:
        kwargs["timeout"] = aiohttp.ClientTimeout(total=timeout)
    async with session.get(url, **kwargs) as resp:
        resp.raise_for_status()
        return await resp.text(errors="replace")


__all__ = ["relay_url", "fetch_json", "fetch_text"]
