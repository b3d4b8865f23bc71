"""Dependency injection container for the application."""
from dependency_injector import containers, providers
import requests

from linkcrawl import config as env
from linkcrawl.services.content_review_service import ContentReviewService
from linkcrawl.services.crawl_executor import CrawlExecutor
from linkcrawl.services.crawl_policy import CrawlPolicy
from linkcrawl.services.fetch_gate import FetchGate
from linkcrawl.services.http_service import HttpService


# Environment variables used by the container (read via `linkcrawl.config` helpers).
#
# USER_AGENT (str, default: Chrome-like desktop UA)
#   User-Agent header sent with every page request.
#
# HTTP_TIMEOUT (int seconds, default: 10)
#   Timeout for outbound HTTP requests.
#
# DEFAULT_DEPTH (int, default: 10)
#   Depth used by the CLI when --depth is not given.
#
# LINKCRAWL_MAX_CONCURRENT_FETCHES (int, default: 100)
#   Admission cap for in-flight requests when --concurrency is not given.
#
# LINKCRAWL_PROGRESS_INTERVAL (int, default: 100)
#   Log "Crawled N pages" every N claimed URLs. 0 disables it.
ENV = {
    "USER_AGENT": env.get_str_env("USER_AGENT", env.DEFAULT_USER_AGENT),
    "HTTP_TIMEOUT": env.get_int_env("HTTP_TIMEOUT", 10),
    "DEFAULT_DEPTH": env.get_int_env("DEFAULT_DEPTH", 10),
    "LINKCRAWL_MAX_CONCURRENT_FETCHES": env.get_int_env("LINKCRAWL_MAX_CONCURRENT_FETCHES", 100),
    "LINKCRAWL_PROGRESS_INTERVAL": env.get_int_env("LINKCRAWL_PROGRESS_INTERVAL", 100),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for the linkcrawl application."""

    # Configuration
    config = providers.Configuration(default=ENV)

    # Services - Singleton instances
    http_service = providers.Singleton(
        HttpService,
        user_agent=config.USER_AGENT.as_(str),
        http_client=providers.Object(requests.get),
        timeout=config.HTTP_TIMEOUT.as_(int)
    )

    content_review_service = providers.Singleton(
        ContentReviewService
    )

    crawl_policy = providers.Singleton(
        CrawlPolicy
    )

    # One gate per crawl: the admission cap comes from that crawl's config.
    fetch_gate_factory = providers.Object(FetchGate)

    crawl_executor = providers.Factory(
        CrawlExecutor,
        http_service=http_service,
        extract_links_fn=providers.Callable(
            lambda crs: crs.extract_links,
            content_review_service,
        ),
        crawl_policy=crawl_policy,
        progress_interval=config.LINKCRAWL_PROGRESS_INTERVAL.as_(int),
        fetch_gate_factory=fetch_gate_factory,
    )
