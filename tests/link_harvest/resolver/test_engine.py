import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from link_harvest.parser import LogParser
from link_harvest.resolver import MetadataResolver, resolve_link
from link_harvest.resolver.model import Preview
from link_harvest.resolver.strategies import get as get_strategy


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://x.com/jane/status/42", "social"),
        ("https://x.com/jane", "web"),
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", "video"),
        ("https://www.youtube.com/watch?v=bad", "web"),
        ("https://example.com/article", "web"),
    ],
)
def test_select_strategy(url, expected, resolver_settings):
    resolver = MetadataResolver(resolver_settings, session=MagicMock())

    assert resolver.select_strategy(url).name == expected


@pytest.mark.asyncio
async def test_generic_url_invokes_web_strategy_once(resolver_settings, make_link):
    link = make_link("https://www.example.com/post")
    resolver = MetadataResolver(resolver_settings, session=MagicMock())

    with patch.object(
        get_strategy("web"), "resolve", new_callable=AsyncMock
    ) as mock_web, patch.object(get_strategy("social"), "resolve", new_callable=AsyncMock) as mock_social:
        mock_web.return_value = Preview(title="Post", summary="s")
        metadata = await resolver.resolve(link)

    mock_web.assert_awaited_once()
    mock_social.assert_not_awaited()
    assert metadata.is_loading is False
    assert metadata.error is False
    assert metadata.title == "Post"
    assert metadata.domain == "example.com"


@pytest.mark.asyncio
async def test_failed_resolution_still_settles_with_domain(resolver_settings, make_link):
    link = make_link("https://www.blocked.example/page")
    resolver = MetadataResolver(resolver_settings, session=MagicMock())

    with patch("link_harvest.resolver.http.fetch_text", new_callable=AsyncMock) as mock_fetch:
        mock_fetch.side_effect = RuntimeError("blocked")
        metadata = await resolver.resolve(link)

    assert metadata.is_loading is False
    assert metadata.error is True
    assert metadata.domain == "blocked.example"


@pytest.mark.asyncio
async def test_social_domain_override(resolver_settings, make_link):
    link = make_link("https://twitter.com/jane/status/42")
    resolver = MetadataResolver(resolver_settings, session=MagicMock())

    with patch("link_harvest.resolver.http.fetch_json", new_callable=AsyncMock) as mock_fetch:
        mock_fetch.return_value = {"tweet": {"text": "hi", "author": {"name": "Jane", "screen_name": "jane"}}}
        metadata = await resolver.resolve(link)

    assert metadata.domain == "x.com"
    assert metadata.title == "Post by Jane (@jane)"


@pytest.mark.asyncio
async def test_video_embed_failure_keeps_image_without_error(resolver_settings, make_link):
    link = make_link("https://youtu.be/dQw4w9WgXcQ")
    resolver = MetadataResolver(resolver_settings, session=MagicMock())

    with patch("link_harvest.resolver.http.fetch_json", new_callable=AsyncMock) as mock_fetch:
        mock_fetch.side_effect = RuntimeError("embed endpoint down")
        metadata = await resolver.resolve(link)

    assert metadata.image
    assert metadata.error is False
    assert metadata.is_loading is False


@pytest.mark.asyncio
async def test_unexpected_strategy_error_is_contained(resolver_settings, make_link):
    link = make_link("https://example.com/x")
    resolver = MetadataResolver(resolver_settings, session=MagicMock())

    with patch.object(get_strategy("web"), "resolve", new_callable=AsyncMock) as mock_web:
        mock_web.side_effect = KeyError("bug")
        metadata = await resolver.resolve(link)

    assert metadata.error is True
    assert metadata.is_loading is False
    assert metadata.title == "https://example.com/x"


@pytest.mark.asyncio
async def test_context_manager_shares_and_closes_session(resolver_settings, make_link):
    with patch("link_harvest.resolver.http.fetch_text", new_callable=AsyncMock) as mock_fetch:
        mock_fetch.return_value = "<title>A</title>"
        async with MetadataResolver(resolver_settings) as resolver:
            session = resolver._session
            await resolver.resolve(make_link("https://a.example"))
            await resolver.resolve(make_link("https://b.example"))

    assert mock_fetch.call_args_list[0].args[0] is session
    assert mock_fetch.call_args_list[1].args[0] is session
    assert session.closed
    assert resolver._session is None


@pytest.mark.asyncio
async def test_resolve_link_without_shared_session(resolver_settings, make_link):
    with patch("link_harvest.resolver.http.fetch_text", new_callable=AsyncMock) as mock_fetch:
        mock_fetch.return_value = "<title>Solo</title>"
        metadata = await resolve_link(make_link("https://solo.example"), resolver_settings)

    assert metadata.title == "Solo"
    assert mock_fetch.call_args.args[0].closed


ODD_TOKENS = ["https://[x", "https://]", "http://:80", "https://[::1", "https://x.com]/a/status/1"]


@pytest.mark.asyncio
@pytest.mark.parametrize("token", ODD_TOKENS)
async def test_parsed_odd_url_tokens_always_settle(token, resolver_settings, parser_settings):
    result = LogParser(parser_settings).parse(f"[3/1/24, 10:00:00] Alice: look {token} here")
    assert [link.url for link in result.links] == [token]
    resolver = MetadataResolver(resolver_settings, session=MagicMock())

    with patch("link_harvest.resolver.http.fetch_text", new_callable=AsyncMock) as mock_fetch:
        mock_fetch.side_effect = RuntimeError("unreachable host")
        metadata = await resolver.resolve(result.links[0])

    assert metadata.is_loading is False
    assert metadata.error is True
    assert metadata.domain == ""


@pytest.mark.asyncio
async def test_bare_scheme_url_settles(resolver_settings, make_link):
    resolver = MetadataResolver(resolver_settings, session=MagicMock())

    with patch("link_harvest.resolver.http.fetch_text", new_callable=AsyncMock) as mock_fetch:
        mock_fetch.side_effect = RuntimeError("no host")
        metadata = await resolver.resolve(make_link("https://"))

    assert metadata.is_loading is False
    assert metadata.error is True


def test_malformed_host_is_not_claimed_by_social_or_video(resolver_settings):
    resolver = MetadataResolver(resolver_settings, session=MagicMock())

    assert resolver.select_strategy("https://[oops").name == "web"
    assert resolver.select_strategy("https://youtu.be]/dQw4w9WgXcQ").name == "web"


@pytest.mark.asyncio
async def test_claim_check_error_is_contained(resolver_settings, make_link):
    resolver = MetadataResolver(resolver_settings, session=MagicMock())

    with patch.object(get_strategy("social"), "claims", side_effect=ValueError("bad url")):
        metadata = await resolver.resolve(make_link("https://example.com/x"))

    assert metadata.is_loading is False
    assert metadata.error is True
