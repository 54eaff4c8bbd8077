"""Extract links from chat exports and resolve display-ready previews."""

from .parser import ExtractedLink, LogParser, ParseResult, parse_chat
from .resolver import LinkMetadata, MetadataResolver, ResolutionScheduler, resolve_link

__all__ = [
    "ExtractedLink",
    "LogParser",
    "ParseResult",
    "parse_chat",
    "LinkMetadata",
    "MetadataResolver",
    "ResolutionScheduler",
    "resolve_link",
]
