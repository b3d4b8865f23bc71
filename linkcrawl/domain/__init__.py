"""Domain objects for linkcrawl - explicit re-exports to satisfy linters."""
from .link import Link as Link
from .config import CrawlerConfig as CrawlerConfig
from .crawl_task import CrawlTask as CrawlTask
from .crawl_context import CrawlContext as CrawlContext
from .crawl_result import CrawlResult as CrawlResult
from .http_response import HttpResponse as HttpResponse

__all__ = ["Link", "CrawlerConfig", "CrawlTask", "CrawlContext", "CrawlResult", "HttpResponse"]
