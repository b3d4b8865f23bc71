"""Crawl result data model."""
from typing import NamedTuple

from linkcrawl.domain.link import Link


class CrawlResult(NamedTuple):
    """Result of a crawl operation.

    Provides feedback about what happened during the crawl,
    enabling callers to print links and distinguish completion from a stop request.
    """
    links: list[Link]
    """Every recorded link, sorted by label then href"""

    pages_fetched: int
    """Number of pages that returned an HTML body"""

    pages_claimed: int
    """Number of distinct URLs claimed for traversal, seed included"""

    stopped: bool
    """True if the crawl was stopped early via stop_event, False if it ran to completion"""
