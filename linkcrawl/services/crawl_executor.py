import asyncio
import logging
import threading
from typing import Callable, Iterable, Optional

from linkcrawl.domain.config import CrawlerConfig
from linkcrawl.domain.crawl_context import CrawlContext
from linkcrawl.domain.crawl_result import CrawlResult
from linkcrawl.domain.crawl_task import CrawlTask
from linkcrawl.domain.link import Link
from linkcrawl.services.crawl_policy import CrawlPolicy
from linkcrawl.services.fetch_gate import FetchGate
from linkcrawl.utils.url_utils import normalize_link

logger = logging.getLogger(__name__)


class CrawlExecutor:
    """Executes a crawl given configured collaborators.

    Every page is its own asyncio task. A task fetches its page through the
    fetch gate, records the in-scope links it finds, spawns one child task per
    URL it is first to claim and then waits for all of its children. The crawl
    therefore forms a tree of tasks and `crawl()` returns only after the last
    descendant is done.

    This class owns the traversal control-flow; it does NOT construct its
    dependencies (that stays in the DI layer).
    """

    def __init__(
        self,
        *,
        http_service,
        extract_links_fn: Callable[[str], Iterable[tuple[str, str]]],
        crawl_policy: Optional[CrawlPolicy] = None,
        progress_interval: int = 100,
        fetch_gate_factory: Callable[..., FetchGate] = FetchGate,
    ):
        self.http_service = http_service
        self.extract_links_fn = extract_links_fn
        self.crawl_policy = crawl_policy or CrawlPolicy()
        self.progress_interval = int(progress_interval)
        self.fetch_gate_factory = fetch_gate_factory

    async def crawl(self, config: CrawlerConfig, stop_event: Optional[threading.Event] = None) -> CrawlResult:
        if config is None:
            raise ValueError("config is required for crawl")

        context = CrawlContext(config, stop_event=stop_event)
        seed = normalize_link(config.seed_url, config.seed_url) or config.seed_url
        gate = self.fetch_gate_factory(self.http_service, config.max_concurrent_fetches)

        logger.info("Starting crawl at %s", seed)
        try:
            context.claim(seed)
            context.increment_pages_claimed()
            await self.crawl_from(CrawlTask(seed, 0), context, gate)
        finally:
            gate.close()

        return CrawlResult(
            links=context.link_collector.sorted_links(),
            pages_fetched=context.pages_fetched,
            pages_claimed=context.pages_claimed,
            stopped=context.is_stopped(),
        )

    async def crawl_from(self, task: CrawlTask, context: CrawlContext, gate: FetchGate) -> None:
        logger.debug("depth %s: %s", task.depth, task.url)
        if self.crawl_policy.should_skip_due_to_depth(task.depth, context.max_depth):
            return
        if context.is_stopped():
            logger.info("Crawl cancelled before fetching %s", task.url)
            return

        body = await gate.fetch(task.url)
        if body is None:
            return
        context.increment_pages_fetched()

        candidates = await asyncio.to_thread(self._extract, body)

        children = []
        for raw_label, raw_href in candidates:
            href = normalize_link(task.url, raw_href)
            if href is None:
                continue
            if not self.crawl_policy.is_crawlable(context.seed_url, href):
                continue

            context.record(Link(self._label_for(raw_label, href), href))

            if context.is_stopped():
                continue
            if not context.claim(href):
                continue
            self._report_progress(context)
            children.append(asyncio.create_task(self.crawl_from(task.child(href), context, gate)))

        if children:
            await asyncio.gather(*children)

    def _extract(self, body: str) -> list[tuple[str, str]]:
        # Parsing is CPU-bound; it runs on a worker thread so other pages keep moving.
        return list(self.extract_links_fn(body))

    @staticmethod
    def _label_for(raw_label: Optional[str], href: str) -> str:
        # Anchors without text are labelled with their resolved href.
        return (raw_label or "").strip() or href

    def _report_progress(self, context: CrawlContext) -> None:
        count = context.increment_pages_claimed()
        if self.progress_interval > 0 and count % self.progress_interval == 0:
            logger.info("Crawled %d pages", count)
