import threading


class VisitedTracker:
    """
    Tracks which URLs have been claimed for traversal during a crawl.

    `claim()` is the only mutation: an atomic add-if-absent that tells the
    caller whether it is the first to see the URL. That answer is what keeps
    a cyclic link graph from being traversed twice, so the check and the
    insert happen under one lock. The lock also makes the tracker safe to
    share between OS threads, not only between coroutines on one loop.

    The set never shrinks while a crawl is running.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._visited: set[str] = set()

    def claim(self, url: str) -> bool:
        """Mark `url` as visited. Returns True only for the first caller."""
        with self._lock:
            if url in self._visited:
                return False
            self._visited.add(url)
            return True

    def is_visited(self, url: str) -> bool:
        """Check if a URL has been claimed."""
        with self._lock:
            return url in self._visited

    def __len__(self) -> int:
        with self._lock:
            return len(self._visited)
