import logging
import os

logger = logging.getLogger(__name__)


class ResolverSettings:
    def __init__(self, config: dict | None = None) -> None:
        cfg = (config or {}).get("link_harvest", {}).get("resolver", {})
        limits_cfg = cfg.get("limits", {})

        # Relay prefix; the URL-encoded target is appended. Empty disables relaying.
        self.RELAY_URL: str = str(cfg.get("relay_url", os.getenv("RELAY_URL", "https://corsproxy.io/?")))
        self.SOCIAL_API_URL: str = str(
            cfg.get("social_api_url", os.getenv("SOCIAL_API_URL", "https://api.fxtwitter.com/status/{post_id}"))
        )
        self.EMBED_API_URL: str = str(
            cfg.get("embed_api_url", os.getenv("EMBED_API_URL", "https://noembed.com/embed"))
        )
        self.THUMBNAIL_URL: str = str(
            cfg.get("thumbnail_url", os.getenv("THUMBNAIL_URL", "https://img.youtube.com/vi/{video_id}/hqdefault.jpg"))
        )
        self.USER_AGENT: str = str(
            cfg.get("user_agent", os.getenv("RESOLVER_USER_AGENT", "Mozilla/5.0 (compatible; link-harvest/0.1)"))
        )

        self.WEB_TIMEOUT: float = float(limits_cfg.get("web_timeout", os.getenv("WEB_TIMEOUT", "8")))
        self.SUMMARY_MAX_LEN: int = int(limits_cfg.get("summary_max_len", os.getenv("SUMMARY_MAX_LEN", "1000")))
        self.SHORT_DESCRIPTION_LEN: int = int(
            limits_cfg.get("short_description_len", os.getenv("SHORT_DESCRIPTION_LEN", "200"))
        )
        self.PARAGRAPH_MIN_LEN: int = int(limits_cfg.get("paragraph_min_len", os.getenv("PARAGRAPH_MIN_LEN", "50")))
        self.PARAGRAPH_COUNT: int = int(limits_cfg.get("paragraph_count", os.getenv("PARAGRAPH_COUNT", "3")))
        self.MAX_CONCURRENCY: int = int(limits_cfg.get("max_concurrency", os.getenv("RESOLVE_CONCURRENCY", "8")))

        if self.WEB_TIMEOUT <= 0:
            raise ValueError("WEB_TIMEOUT must be positive")
        if self.MAX_CONCURRENCY <= 0:
            raise ValueError("RESOLVE_CONCURRENCY must be positive")
        if "{post_id}" not in self.SOCIAL_API_URL:
            raise ValueError("SOCIAL_API_URL must contain a {post_id} placeholder")
        if "{video_id}" not in self.THUMBNAIL_URL:
            raise ValueError("THUMBNAIL_URL must contain a {video_id} placeholder")

        if not self.RELAY_URL:
            logger.info("No relay configured; resolver requests go direct.")
