import threading

from linkcrawl.domain.link import Link


class LinkCollector:
    """Append-only, thread-safe set of links discovered during one crawl."""

    def __init__(self):
        self._lock = threading.Lock()
        self._links: set[Link] = set()

    def record(self, link: Link) -> None:
        """Add `link`; recording the same (label, href) twice is a no-op."""
        with self._lock:
            self._links.add(link)

    def sorted_links(self) -> list[Link]:
        with self._lock:
            snapshot = list(self._links)
        return sorted(snapshot, key=lambda link: (link.label, link.href))

    def __contains__(self, link: Link) -> bool:
        with self._lock:
            return link in self._links

    def __len__(self) -> int:
        with self._lock:
            return len(self._links)
