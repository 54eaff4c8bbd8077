import os, sys
from pathlib import Path

import pytest

# Add project root to sys.path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

# Keep a developer's local config.toml out of the test run
os.environ.setdefault("LINK_HARVEST_CONFIG", str(Path(__file__).resolve().parent / "missing-config.toml"))

from link_harvest.config import ParserSettings, ResolverSettings
from link_harvest.parser.model import ExtractedLink


@pytest.fixture
def parser_settings() -> ParserSettings:
    return ParserSettings({})


@pytest.fixture
def resolver_settings() -> ResolverSettings:
    return ResolverSettings(
        {
            "link_harvest": {
                "resolver": {
                    "relay_url": "https://relay.test/?",
                    "limits": {"web_timeout": 0.2},
                }
            }
        }
    )


@pytest.fixture
def make_link():
    def _make(url: str, *, author: str = "Alice", date: str = "3/1/24, 10:00:15") -> ExtractedLink:
        return ExtractedLink(
            url=url,
            date=date,
            author=author,
            timestamp=0.0,
            original_message=f"see {url}",
        )

    return _make
