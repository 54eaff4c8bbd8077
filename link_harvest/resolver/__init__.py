"""Link preview resolution: strategy dispatch with timeout and fallback."""

from .engine import ORDER, MetadataResolver, resolve_link
from .model import LinkMetadata, MetadataAlreadySettled, Preview, domain_of
from .scheduler import ResolutionScheduler

__all__ = [
    "ORDER",
    "MetadataResolver",
    "resolve_link",
    "LinkMetadata",
    "MetadataAlreadySettled",
    "Preview",
    "domain_of",
    "ResolutionScheduler",
]
