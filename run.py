import argparse
import asyncio
import logging
import signal
import sys
import threading
import time
from typing import Optional, Sequence

from linkcrawl import config as env
from linkcrawl.container import Container
from linkcrawl.domain import CrawlerConfig
from linkcrawl.exceptions import CrawlConfigError

logger = logging.getLogger("linkcrawl")

LOG_FORMAT = "[%(levelname)s] %(message)s"


def build_parser(default_depth: int, default_concurrency: int) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linkcrawl",
        description="Collect every internal link reachable from a URL, up to a given depth.",
    )
    parser.add_argument("url", nargs="?", default=env.DEFAULT_SEED_URL,
                        help=f"The URL to crawl (default: {env.DEFAULT_SEED_URL})")
    parser.add_argument("--depth", default=str(default_depth), metavar="N",
                        help=f"Limit recursive link depth (default: {default_depth})")
    parser.add_argument("--concurrency", default=str(default_concurrency), metavar="N",
                        help=f"Maximum parallel requests (default: {default_concurrency})")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    return parser


def configure_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
    # Keep third-party connection chatter out of --debug output.
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def _parse_int(raw: str, name: str) -> Optional[int]:
    try:
        return int(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid %s value %r", name, raw)
        return None


def _request_stop(stop_event: threading.Event) -> None:
    if stop_event.is_set():
        # Second Ctrl-C: abandon in-flight fetches.
        raise KeyboardInterrupt
    logger.warning("Interrupt received; letting in-flight fetches finish (Ctrl-C again to abort)")
    stop_event.set()


async def run_crawl(executor, crawl_config: CrawlerConfig, stop_event: threading.Event):
    """Run one crawl with SIGINT mapped to `stop_event` while it is in progress."""
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, _request_stop, stop_event)
        handler_installed = True
    except (NotImplementedError, RuntimeError, ValueError) as e:
        logger.debug("SIGINT handler unavailable (%s); Ctrl-C aborts immediately", e)
        handler_installed = False
    try:
        return await executor.crawl(crawl_config, stop_event=stop_event)
    finally:
        if handler_installed:
            loop.remove_signal_handler(signal.SIGINT)


def main(argv: Optional[Sequence[str]] = None, container: Optional[Container] = None) -> int:
    """Run one crawl and print its links. Returns the process exit status."""
    container = container or Container()
    parser = build_parser(
        default_depth=container.config.DEFAULT_DEPTH(),
        default_concurrency=container.config.LINKCRAWL_MAX_CONCURRENT_FETCHES(),
    )
    args = parser.parse_args(argv)
    configure_logging(args.debug)

    depth = _parse_int(args.depth, "depth")
    concurrency = _parse_int(args.concurrency, "concurrency")
    if depth is None or concurrency is None:
        return 1

    try:
        crawl_config = CrawlerConfig(
            seed_url=args.url,
            max_depth=depth,
            debug=args.debug,
            max_concurrent_fetches=concurrency,
        )
    except CrawlConfigError as e:
        logger.warning("%s", e)
        return 1

    if args.debug:
        logger.info("running in debug mode")
    logger.info("max search depth %d", crawl_config.max_depth)

    executor = container.crawl_executor()
    start = time.monotonic()
    stop_event = threading.Event()
    try:
        result = asyncio.run(run_crawl(executor, crawl_config, stop_event))
    except KeyboardInterrupt:
        logger.warning("Crawl interrupted")
        return 1
    if result.stopped:
        logger.warning("Crawl interrupted after %d pages", result.pages_fetched)
        return 1

    print("\nCollected Internal Links (Sorted by Label):")
    for link in result.links:
        print(link)
    print(f"Found links: {len(result.links)}")
    logger.debug("Pages fetched: %d, URLs claimed: %d", result.pages_fetched, result.pages_claimed)
    logger.debug("Runtime: %d seconds", int(time.monotonic() - start))
    return 0


if __name__ == '__main__':
    sys.exit(main())
