import os
import re
from typing import List, Pattern

# Bracketed export: "[3/1/24, 10:00:15] Alice: message"
BRACKETED_LINE = r"^\[(.*?)]\s(.*?):\s(.*)$"
# Dashed export: "2024-03-01 10:00 - Bob: message"
DASHED_LINE = r"^(\d{1,4}[-./]\d{1,2}[-./]\d{1,4}.*?)\s-\s(.*?):\s(.*)$"
URL_TOKEN = r"https?://\S+"
INVISIBLE_CHARS = r"[\u200b-\u200f\u2060\ufeff]"

DEFAULT_DATE_FORMATS: List[str] = [
    "%m/%d/%y %H:%M:%S",
    "%m/%d/%y %H:%M",
    "%m/%d/%y %I:%M:%S %p",
    "%m/%d/%y %I:%M %p",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %I:%M:%S %p",
    "%m/%d/%Y %I:%M %p",
    "%m/%d/%y",
    "%m/%d/%Y",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %I:%M %p",
    "%Y-%m-%d",
    "%d.%m.%Y %H:%M:%S",
    "%d.%m.%Y %H:%M",
    "%d.%m.%y %H:%M:%S",
    "%d.%m.%y %H:%M",
    "%d.%m.%Y",
    "%d.%m.%y",
]


class ParserSettings:
    """Line grammars and date formats used by :class:`link_harvest.parser.LogParser`."""

    def __init__(self, config: dict | None = None) -> None:
        cfg = (config or {}).get("link_harvest", {}).get("parser", {})

        self.BRACKETED_LINE: Pattern[str] = re.compile(
            str(cfg.get("bracketed_line", os.getenv("PARSER_BRACKETED_LINE", BRACKETED_LINE)))
        )
        self.DASHED_LINE: Pattern[str] = re.compile(
            str(cfg.get("dashed_line", os.getenv("PARSER_DASHED_LINE", DASHED_LINE)))
        )
        self.URL_TOKEN: Pattern[str] = re.compile(URL_TOKEN)
        self.INVISIBLE_CHARS: Pattern[str] = re.compile(INVISIBLE_CHARS)

        formats = cfg.get("date_formats")
        if formats is None:
            self.DATE_FORMATS: List[str] = list(DEFAULT_DATE_FORMATS)
        elif isinstance(formats, list) and all(isinstance(fmt, str) for fmt in formats):
            self.DATE_FORMATS = list(formats)
        else:
            raise ValueError("link_harvest.parser.date_formats must be a list of strings")

        for pattern in (self.BRACKETED_LINE, self.DASHED_LINE):
            if pattern.groups != 3:
                raise ValueError(
                    f"Line grammar {pattern.pattern!r} must capture date, author and content"
                )

    @property
    def line_grammars(self) -> tuple[Pattern[str], ...]:
        """Grammars in the order they are attempted."""
        return (self.BRACKETED_LINE, self.DASHED_LINE)
