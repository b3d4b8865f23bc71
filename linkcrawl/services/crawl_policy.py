import logging
from urllib.parse import urlsplit

from linkcrawl.domain.config import ALLOWED_SCHEMES

logger = logging.getLogger(__name__)


class CrawlPolicy:
    """Encapsulates crawl decision rules: depth limits and scheme/host scope.

    Separates policy decisions from crawl orchestration logic.
    """

    def should_skip_due_to_depth(self, depth: int, max_depth: int) -> bool:
        """Check if a task is past the inclusive depth bound."""
        if depth > max_depth:
            logger.debug("Skipping (max depth reached) at depth %s", depth)
            return True
        return False

    def is_crawlable(self, seed_url: str, candidate_url: str) -> bool:
        """Check that `candidate_url` is http(s) and on exactly the seed's host.

        Hosts compare case-insensitively; subdomains count as different hosts.
        Never raises: anything unparseable is treated as out of scope.
        """
        try:
            candidate = urlsplit(candidate_url)
            candidate_host = candidate.hostname
            seed_host = urlsplit(seed_url).hostname
        except ValueError:
            logger.debug("Skipping (malformed URL) %s", candidate_url)
            return False

        if candidate.scheme.lower() not in ALLOWED_SCHEMES:
            logger.debug("Skipping (non-http(s) link) %s", candidate_url)
            return False
        if not candidate_host or not seed_host or candidate_host.lower() != seed_host.lower():
            logger.debug("Skipping (external) %s -> not same host as %s", candidate_url, seed_url)
            return False
        return True
