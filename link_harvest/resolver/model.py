"""Dataclass models for link previews.

``LinkMetadata.to_dict()`` keeps only non-``None`` attributes:

```
{"is_loading": true, "error": false, "domain": "example.com"}          # pending
{"is_loading": false, "error": false, "domain": "example.com",
 "title": "...", "description": "...", "summary": "...", "image": "..."}
{"is_loading": false, "error": true, "domain": "example.com",
 "title": "https://example.com/a", "summary": "Could not fetch ..."}
```
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional
from urllib.parse import SplitResult, urlsplit


def _drop_nones(d: Dict[str, Any]) -> Dict[str, Any]:
    """Return a shallow copy of ``d`` without keys mapped to ``None``."""
    return {k: v for k, v in d.items() if v is not None}


def split_url(url: str) -> SplitResult | None:
    """``urlsplit`` that returns ``None`` for tokens it rejects (e.g. ``https://[oops``)."""
    try:
        return urlsplit(url)
    except ValueError:
        return None


def host_of(url: str) -> str:
    """Lower-cased host of ``url`` ("" if there is none or the URL is malformed)."""
    parts = split_url(url)
    return (parts.hostname or "") if parts else ""


def domain_of(url: str) -> str:
    """Host of ``url`` with a leading ``www.`` removed ("" if there is none)."""
    host = host_of(url)
    return host[4:] if host.startswith("www.") else host


class MetadataAlreadySettled(RuntimeError):
    """Raised when a settled :class:`LinkMetadata` would be mutated again."""


@dataclass(slots=True)
class Preview:
    """What a strategy produced for one URL."""

    title: Optional[str] = None
    description: Optional[str] = None
    summary: Optional[str] = None
    image: Optional[str] = None
    domain: Optional[str] = None
    error: bool = False


@dataclass(slots=True)
class LinkMetadata:
    """Display-ready preview for one link, settled exactly once."""

    is_loading: bool = True
    error: bool = False
    title: Optional[str] = None
    description: Optional[str] = None
    summary: Optional[str] = None
    image: Optional[str] = None
    domain: Optional[str] = None

    @classmethod
    def pending(cls, url: str) -> "LinkMetadata":
        """Baseline available before any network activity."""
        return cls(is_loading=True, domain=domain_of(url))

    def settle(self, preview: Preview) -> "LinkMetadata":
        """
        Merge ``preview`` into this record and mark it loaded.

        :raises MetadataAlreadySettled: if the record was settled before.
        """
        if not self.is_loading:
            raise MetadataAlreadySettled(f"metadata for {self.domain!r} already settled")

        for f in fields(Preview):
            if f.name == "error":
                continue
            value = getattr(preview, f.name)
            if value is not None:
                setattr(self, f.name, value)
        self.error = preview.error
        self.is_loading = False
        return self

    def to_dict(self) -> Dict[str, Any]:
        return _drop_nones(
            {
                "is_loading": self.is_loading,
                "error": self.error,
                "domain": self.domain,
                "title": self.title,
                "description": self.description,
                "summary": self.summary,
                "image": self.image,
            }
        )


__all__ = ["Preview", "LinkMetadata", "MetadataAlreadySettled", "domain_of", "host_of", "split_url"]
