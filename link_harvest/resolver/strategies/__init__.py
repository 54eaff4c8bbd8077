"""
Auto-discovery & registry for link resolution strategies.

Any file inside ``resolver/strategies/`` that defines::

    from . import register

    @register
    class MyStrategy:
        name = "podcast"

        @staticmethod
        def claims(url, settings) -> bool: ...

        @staticmethod
        async def resolve(session, url, settings) -> Preview: ...

is picked up automatically at import-time.

Adding a new strategy:

1. Give it a unique ``name`` and place the module in this directory.
2. Insert that name into ``ORDER`` in ``resolver/engine.py``; the first
   strategy whose ``claims`` returns True handles the URL.
3. ``resolve`` must never raise: catch failures and return the strategy's own
   placeholder :class:`Preview`.
"""

from __future__ import annotations
from typing import Protocol, Dict, ClassVar
from importlib import import_module
from pkgutil import iter_modules
from pathlib import Path

import aiohttp

from ...config import ResolverSettings
from ..model import Preview

# ------------------------------------------------------------------ #
# 1.  Registry contract + decorator
# ------------------------------------------------------------------ #


class Strategy(Protocol):
    name: ClassVar[str]  # unique key, e.g. "video"

    @staticmethod
    def claims(url: str, settings: ResolverSettings) -> bool:
        """True if this strategy should handle ``url``."""

    @staticmethod
    async def resolve(
        session: aiohttp.ClientSession, url: str, settings: ResolverSettings
    ) -> Preview:
        """Coroutine returning a settled :class:`Preview`."""


_REGISTRY: Dict[str, Strategy] = {}


def register(cls: Strategy):
    """
    Decorator that stores the strategy in the global registry.

    :param cls: Strategy class to register.
    :returns: The class unchanged.
    """
    _REGISTRY[cls.name] = cls
    return cls


def get(name: str) -> Strategy | None:
    """Return strategy class for ``name`` or ``None``."""
    return _REGISTRY.get(name)


# ------------------------------------------------------------------ #
# 2.  Auto-import every sibling module (plug-n-play)
# ------------------------------------------------------------------ #

_pkg_path = Path(__file__).resolve().parent
for _, modname, _ in iter_modules([str(_pkg_path)]):
    if modname != "__init__":
        import_module(f"{__name__}.{modname}")
