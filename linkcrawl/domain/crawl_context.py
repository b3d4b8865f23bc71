import threading
from typing import Optional

from linkcrawl.domain.config import CrawlerConfig
from linkcrawl.domain.link_collector import LinkCollector
from linkcrawl.domain.visited_tracker import VisitedTracker


class CrawlContext:
    """Shared state for one crawl, passed by reference to every task.

    Holding counters here rather than at module level keeps concurrent crawls
    in one process independent of each other.
    """

    def __init__(
        self,
        config: CrawlerConfig,
        visited_tracker: Optional[VisitedTracker] = None,
        link_collector: Optional[LinkCollector] = None,
        stop_event: Optional[threading.Event] = None,
    ):
        self.config = config
        self.max_depth = config.max_depth
        self.seed_url = config.seed_url
        self.visited_tracker = visited_tracker if visited_tracker is not None else VisitedTracker()
        self.link_collector = link_collector if link_collector is not None else LinkCollector()
        self.stop_event = stop_event if stop_event is not None else threading.Event()
        self._counter_lock = threading.Lock()
        self.pages_claimed: int = 0
        self.pages_fetched: int = 0

    def claim(self, url: str) -> bool:
        """Delegate to visited tracker."""
        return self.visited_tracker.claim(url)

    def record(self, link) -> None:
        """Delegate to link collector."""
        self.link_collector.record(link)

    def increment_pages_claimed(self) -> int:
        with self._counter_lock:
            self.pages_claimed += 1
            return self.pages_claimed

    def increment_pages_fetched(self) -> int:
        with self._counter_lock:
            self.pages_fetched += 1
            return self.pages_fetched

    def is_stopped(self) -> bool:
        """Check if crawling has stopped."""
        return self.stop_event.is_set()

    def mark_stopped(self) -> None:
        """Mark that crawling should stop."""
        self.stop_event.set()
