from typing import NamedTuple


class CrawlTask(NamedTuple):
    """A single page to traverse: the URL and its hop distance from the seed."""
    url: str
    depth: int

    def child(self, url: str) -> "CrawlTask":
        return CrawlTask(url, self.depth + 1)
