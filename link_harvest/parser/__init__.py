"""Chat export parsing: raw text -> ordered link records."""

from .log_parser import LogParser, parse_chat
from .model import ChatMessage, ExtractedLink, ParseResult
from .timestamps import parse_timestamp

__all__ = [
    "LogParser",
    "parse_chat",
    "ChatMessage",
    "ExtractedLink",
    "ParseResult",
    "parse_timestamp",
]
