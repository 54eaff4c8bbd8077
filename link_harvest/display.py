"""
Card display hints derived from a link and its (possibly failed) metadata.

Every hint is computable from the link record and the synchronous ``domain``
baseline, so a placeholder card can always be drawn.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .parser.model import ExtractedLink
from .resolver.model import LinkMetadata

AVATAR_COLORS = [
    "red", "orange", "amber", "yellow",
    "lime", "green", "emerald", "teal",
    "cyan", "sky", "blue", "indigo",
    "violet", "purple", "pink",
]

DomainKind = Literal["video", "social", "web"]


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def avatar_color(name: str) -> str:
    """Stable palette entry for ``name``."""
    h = 0
    for ch in name:
        h = ord(ch) + (_to_int32(_to_int32(h) << 5) - h)
    return AVATAR_COLORS[abs(h) % len(AVATAR_COLORS)]


def domain_kind(domain: str | None) -> DomainKind:
    domain = (domain or "").lower()
    if "youtu" in domain:
        return "video"
    if "x.com" in domain or "twitter" in domain:
        return "social"
    return "web"


def short_date(date: str) -> str:
    """Date part of a chat date token (text before the first comma)."""
    return date.split(",")[0]


@dataclass(frozen=True, slots=True)
class CardHints:
    avatar_color: str
    author_initial: str
    short_date: str
    kind: DomainKind
    show_image: bool
    title: str


def card_hints(link: ExtractedLink, metadata: LinkMetadata) -> CardHints:
    if metadata.is_loading:
        title = "Loading preview..."
    else:
        title = metadata.title or link.url
    return CardHints(
        avatar_color=avatar_color(link.author),
        author_initial=link.author[:1].upper(),
        short_date=short_date(link.date),
        kind=domain_kind(metadata.domain),
        show_image=bool(metadata.image) and not metadata.error,
        title=title,
    )


__all__ = ["AVATAR_COLORS", "CardHints", "avatar_color", "card_hints", "domain_kind", "short_date"]
