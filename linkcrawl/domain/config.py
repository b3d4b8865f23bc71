from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from linkcrawl.exceptions import CrawlConfigError

ALLOWED_SCHEMES = frozenset({"http", "https"})


@dataclass(frozen=True)
class CrawlerConfig:
    """Settings fixed for the lifetime of one crawl.

    - `seed_url` must be an absolute http(s) URL with a host.
    - `max_depth` is inclusive: pages at depth `max_depth` are fetched, their
      children are not.
    - `max_concurrent_fetches` caps in-flight HTTP requests across the crawl.
    """

    seed_url: str
    max_depth: int = 10
    debug: bool = False
    max_concurrent_fetches: int = 100

    def __post_init__(self):
        if not isinstance(self.max_depth, int) or isinstance(self.max_depth, bool) or self.max_depth < 0:
            raise CrawlConfigError("depth", self.max_depth, "must be a non-negative integer")
        if (
            not isinstance(self.max_concurrent_fetches, int)
            or isinstance(self.max_concurrent_fetches, bool)
            or self.max_concurrent_fetches < 1
        ):
            raise CrawlConfigError("concurrency", self.max_concurrent_fetches, "must be a positive integer")
        if not self.seed_url or not isinstance(self.seed_url, str):
            raise CrawlConfigError("URL", self.seed_url, "must not be empty")
        try:
            parts = urlsplit(self.seed_url)
            host = parts.hostname
        except ValueError as e:
            raise CrawlConfigError("URL", self.seed_url, str(e)) from e
        if parts.scheme.lower() not in ALLOWED_SCHEMES:
            raise CrawlConfigError("URL", self.seed_url, "scheme must be http or https")
        if not host:
            raise CrawlConfigError("URL", self.seed_url, "missing host")

    def __repr__(self):
        return f"<CrawlerConfig seed={self.seed_url} max_depth={self.max_depth} k={self.max_concurrent_fetches}>"
