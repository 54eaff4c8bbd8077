import asyncio
import time

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from link_harvest.resolver.strategies.web import FETCH_FAILED, NO_SUMMARY, WebPageStrategy

LONG = "This paragraph is comfortably longer than fifty characters of prose."


def _page(head: str = "", body: str = "") -> str:
    return f"<html><head>{head}</head><body>{body}</body></html>"


def test_parse_html_prefers_open_graph(resolver_settings):
    html = _page(
        head=(
            '<meta property="og:title" content="OG Title">'
            '<meta property="og:description" content="' + "d" * 250 + '">'
            '<meta property="og:image" content="https://img/og.png">'
            "<title>Plain Title</title>"
            '<meta name="description" content="meta desc">'
        ),
        body=f"<p>{LONG}</p>",
    )

    preview = WebPageStrategy.parse_html(html, "https://example.com", resolver_settings)

    assert preview.title == "OG Title"
    assert preview.description == "d" * 250
    assert preview.summary == "d" * 250
    assert preview.image == "https://img/og.png"
    assert preview.error is False


def test_parse_html_falls_back_to_title_and_meta(resolver_settings):
    html = _page(head='<title> Plain Title </title><meta name="description" content="meta desc">')

    preview = WebPageStrategy.parse_html(html, "https://example.com", resolver_settings)

    assert preview.title == "Plain Title"
    assert preview.description == "meta desc"
    assert preview.summary == "meta desc"
    assert preview.image is None


def test_short_description_replaced_by_long_paragraphs(resolver_settings):
    body = "".join(
        [
            "<p>short</p>",
            f"<p>{LONG} one</p>",
            f"<p>{LONG} two</p>",
            "<p>tiny</p>",
            f"<p>{LONG} three</p>",
            f"<p>{LONG} four</p>",
        ]
    )
    html = _page(head='<meta name="description" content="brief">', body=body)

    preview = WebPageStrategy.parse_html(html, "https://example.com", resolver_settings)

    assert preview.description == "brief"
    assert preview.summary == f"{LONG} one\n\n{LONG} two\n\n{LONG} three"


def test_summary_truncated_with_ellipsis(resolver_settings):
    body = "".join(f"<p>{'x' * 600}</p>" for _ in range(3))

    preview = WebPageStrategy.parse_html(_page(body=body), "https://example.com", resolver_settings)

    assert len(preview.summary) == 1003
    assert preview.summary.endswith("...")


def test_empty_page_uses_url_and_default_summary(resolver_settings):
    preview = WebPageStrategy.parse_html(_page(), "https://example.com/a", resolver_settings)

    assert preview.title == "https://example.com/a"
    assert preview.description == ""
    assert preview.summary == NO_SUMMARY


@pytest.mark.asyncio
async def test_resolve_fetches_through_relay(resolver_settings):
    with patch("link_harvest.resolver.http.fetch_text", new_callable=AsyncMock) as mock_fetch:
        mock_fetch.return_value = _page(head="<title>Hi</title>")
        preview = await WebPageStrategy.resolve(MagicMock(), "https://example.com/a?b=1", resolver_settings)

    mock_fetch.assert_awaited_once()
    assert mock_fetch.call_args.args[1] == "https://relay.test/?https%3A%2F%2Fexample.com%2Fa%3Fb%3D1"
    assert mock_fetch.call_args.kwargs["timeout"] == resolver_settings.WEB_TIMEOUT
    assert preview.title == "Hi"


@pytest.mark.asyncio
async def test_resolve_http_failure(resolver_settings):
    with patch("link_harvest.resolver.http.fetch_text", new_callable=AsyncMock) as mock_fetch:
        mock_fetch.side_effect = RuntimeError("403 Forbidden")
        preview = await WebPageStrategy.resolve(MagicMock(), "https://example.com/a", resolver_settings)

    assert preview.error is True
    assert preview.title == "https://example.com/a"
    assert preview.summary == FETCH_FAILED
    assert preview.description is None
    assert preview.image is None


@pytest.mark.asyncio
async def test_resolve_hanging_fetch_times_out(resolver_settings):
    async def never_returns(*args, **kwargs):
        await asyncio.sleep(60)

    started = time.monotonic()
    with patch("link_harvest.resolver.http.fetch_text", new=never_returns):
        preview = await WebPageStrategy.resolve(MagicMock(), "https://slow.example", resolver_settings)

    assert time.monotonic() - started < 5
    assert preview.error is True
    assert preview.summary == FETCH_FAILED
