"""Dataclass records produced by the log parser.

``ExtractedLink.to_dict()`` shape:

```
{"id": "9f1c...", "url": "https://example.com/a", "date": "3/1/24, 10:00:15",
 "author": "Alice", "timestamp": 1709287215.0,
 "original_message": "check this https://example.com/a"}
```

Records are immutable once built; the parser returns them and keeps no
reference.
"""

from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List


def new_id() -> str:
    """Opaque unique identifier for parsed records."""
    return uuid.uuid4().hex


@dataclass(frozen=True, slots=True)
class ChatMessage:
    """One authored line of chat."""

    date: str
    author: str
    content: str
    id: str = field(default_factory=new_id)


@dataclass(frozen=True, slots=True)
class ExtractedLink:
    """One URL occurrence with the context of the message it came from."""

    url: str
    date: str
    author: str
    timestamp: float
    original_message: str
    id: str = field(default_factory=new_id)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class ParseResult:
    """Complete parser output."""

    links: List[ExtractedLink] = field(default_factory=list)
    authors: List[str] = field(default_factory=list)

    @property
    def total_links(self) -> int:
        return len(self.links)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "links": [link.to_dict() for link in self.links],
            "total_links": self.total_links,
            "authors": list(self.authors),
        }


__all__ = ["ChatMessage", "ExtractedLink", "ParseResult", "new_id"]
