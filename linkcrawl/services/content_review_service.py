from typing import Callable, Iterator, Optional

from bs4 import BeautifulSoup


def _html_parser(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


class ContentReviewService:
    """Pulls raw anchors out of an HTML document.

    Hrefs are returned exactly as written; resolving them is the crawler's job.
    """

    def __init__(self, parser_fn: Optional[Callable[[str], BeautifulSoup]] = None):
        self.parser_fn = parser_fn or _html_parser

    def extract_links(self, html: str) -> Iterator[tuple[str, str]]:
        """Yield `(label, href)` for every `<a href>` in document order.

        The label is the anchor text with whitespace collapsed, or an empty
        string when the anchor has no text.
        """
        soup = self.parser_fn(html)
        for a in soup.find_all("a", href=True):
            href = a.get("href")
            label = " ".join(a.get_text(" ", strip=True).split())
            yield (label, href)
