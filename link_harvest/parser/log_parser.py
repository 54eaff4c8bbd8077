"""
LogParser Pipeline
==================
1. Input : raw chat export text.
2. For each line
   a. Strip invisible characters and whitespace; skip blanks.
   b. Match the bracketed grammar, then the dashed grammar.
   c. Register the author and collect every URL token in the content.
   d. Stamp each URL with a best-effort timestamp (falls back to "now").
3. Return :class:`ParseResult` with links stable-sorted by timestamp.

NOTE: Unmatched lines are treated as continuation noise and dropped; there is
no multi-line message reassembly.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List

from ..config import ParserSettings
from .model import ChatMessage, ExtractedLink, ParseResult
from .timestamps import timestamp_or_now

logger = logging.getLogger(__name__)


class LogParser:
    def __init__(self, settings: ParserSettings | None = None) -> None:
        if settings is None:
            from ..config import parser as default_settings

            settings = default_settings
        self.settings = settings

    # ---------- low‑level helpers ------------------------------------ #

    def clean_line(self, line: str) -> str:
        return self.settings.INVISIBLE_CHARS.sub("", line).strip()

    def parse_line(self, line: str) -> ChatMessage | None:
        """Return the message on ``line`` or ``None`` if no grammar matches."""
        clean = self.clean_line(line)
        if not clean:
            return None

        for grammar in self.settings.line_grammars:
            match = grammar.match(clean)
            if match:
                date, author, content = match.groups()
                return ChatMessage(date=date.strip(), author=author.strip(), content=content)
        return None

    def extract_links(self, message: ChatMessage) -> List[ExtractedLink]:
        """Build one link record per URL token in ``message``."""
        original = message.content.strip()
        return [
            ExtractedLink(
                url=url,
                date=message.date,
                author=message.author,
                timestamp=timestamp_or_now(message.date, self.settings.DATE_FORMATS),
                original_message=original,
            )
            for url in self.settings.URL_TOKEN.findall(message.content)
        ]

    def iter_messages(self, text: str) -> Iterator[ChatMessage]:
        for lineno, line in enumerate(text.split("\n"), start=1):
            message = self.parse_line(line)
            if message is None:
                if line.strip():
                    logger.debug("Skipping unmatched line %d", lineno)
                continue
            yield message

    # ---------- public contract -------------------------------------- #

    def parse(self, text: str) -> ParseResult:
        """
        Extract links and distinct authors from a chat export.

        :param text: Full export text.
        :returns: :class:`ParseResult` with links ordered oldest first; ties
            keep discovery order.
        """
        links: List[ExtractedLink] = []
        authors: Dict[str, None] = {}
        message_count = 0

        for message in self.iter_messages(text):
            message_count += 1
            authors.setdefault(message.author, None)
            links.extend(self.extract_links(message))

        # sorted() is stable, so equal timestamps keep input order
        links = sorted(links, key=lambda link: link.timestamp)

        logger.info(
            "Parsed %d messages -> %d links from %d authors",
            message_count,
            len(links),
            len(authors),
        )
        return ParseResult(links=links, authors=list(authors))


def parse_chat(text: str, settings: ParserSettings | None = None) -> ParseResult:
    """Parse ``text`` with ``settings`` (configured defaults when omitted)."""
    return LogParser(settings).parse(text)
