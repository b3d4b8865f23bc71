import asyncio
import logging
import threading
import time
from unittest.mock import Mock

import pytest

from linkcrawl.domain.http_response import HttpResponse
from linkcrawl.exceptions import HttpFetchError
from linkcrawl.services.fetch_gate import FetchGate


def _run_with_gate(http_service, coro_fn, max_concurrent=2):
    async def runner():
        gate = FetchGate(http_service, max_concurrent=max_concurrent)
        try:
            return await coro_fn(gate), gate
        finally:
            gate.close()
    return asyncio.run(runner())


class SlowHttpService:
    """Records how many fetches overlap inside the transport."""

    def __init__(self, delay=0.05):
        self.delay = delay
        self._lock = threading.Lock()
        self.active = 0
        self.max_active = 0

    def fetch(self, url):
        with self._lock:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            time.sleep(self.delay)
            return HttpResponse(200, f"<p>{url}</p>", "text/html")
        finally:
            with self._lock:
                self.active -= 1


def test_rejects_non_positive_limit():
    with pytest.raises(ValueError):
        FetchGate(Mock(), max_concurrent=0)


def test_returns_body_for_html():
    http = Mock()
    http.fetch.return_value = HttpResponse(200, "<html>ok</html>", "text/html; charset=utf-8")
    body, _ = _run_with_gate(http, lambda gate: gate.fetch("https://example.com/"))
    assert body == "<html>ok</html>"
    http.fetch.assert_called_once_with("https://example.com/")


def test_content_type_match_is_case_insensitive():
    http = Mock()
    http.fetch.return_value = HttpResponse(200, "<html></html>", "Text/HTML")
    body, _ = _run_with_gate(http, lambda gate: gate.fetch("https://example.com/"))
    assert body == "<html></html>"


@pytest.mark.parametrize("content_type", ["application/pdf", "image/png", "", None])
def test_non_html_yields_none(content_type):
    http = Mock()
    http.fetch.return_value = HttpResponse(200, "%PDF", content_type)
    body, _ = _run_with_gate(http, lambda gate: gate.fetch("https://example.com/doc"))
    assert body is None


def test_error_status_with_html_body_is_still_returned(caplog):
    caplog.set_level(logging.DEBUG, logger="linkcrawl.services.fetch_gate")
    http = Mock()
    http.fetch.return_value = HttpResponse(404, "<html>missing</html>", "text/html")
    body, _ = _run_with_gate(http, lambda gate: gate.fetch("https://example.com/gone"))
    assert body == "<html>missing</html>"
    assert "HTTP error 404" in caplog.text


def test_redirect_status_is_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="linkcrawl.services.fetch_gate")
    http = Mock()
    http.fetch.return_value = HttpResponse(301, "", "text/html")
    _run_with_gate(http, lambda gate: gate.fetch("https://example.com/moved"))
    assert "HTTP warning 301" in caplog.text


def test_transport_failure_yields_none_and_warns(caplog):
    http = Mock()
    http.fetch.side_effect = HttpFetchError("https://example.com/", ConnectionError("refused"))
    with caplog.at_level(logging.WARNING):
        body, gate = _run_with_gate(http, lambda gate: gate.fetch("https://example.com/"))
    assert body is None
    assert "refused" in caplog.text
    assert gate.in_flight == 0


def test_unexpected_transport_errors_propagate():
    http = Mock()
    http.fetch.side_effect = RuntimeError("bug in transport")

    async def fetch(gate):
        with pytest.raises(RuntimeError, match="bug in transport"):
            await gate.fetch("https://example.com/")

    _, gate = _run_with_gate(http, fetch)
    assert gate.in_flight == 0


def test_slot_released_after_failure():
    http = Mock()
    http.fetch.side_effect = [
        HttpFetchError("https://example.com/a", TimeoutError("slow")),
        RuntimeError("boom"),
        HttpResponse(200, "<html>b</html>", "text/html"),
    ]

    async def sequence(gate):
        first = await gate.fetch("https://example.com/a")
        with pytest.raises(RuntimeError, match="boom"):
            await gate.fetch("https://example.com/b")
        second = gate.in_flight
        third = await asyncio.wait_for(gate.fetch("https://example.com/c"), timeout=5)
        return first, second, third

    results, gate = _run_with_gate(http, sequence, max_concurrent=1)
    assert results == (None, 0, "<html>b</html>")
    assert gate.in_flight == 0


def test_never_exceeds_admission_limit():
    http = SlowHttpService()

    async def fan_out(gate):
        urls = [f"https://example.com/{i}" for i in range(12)]
        return await asyncio.gather(*(gate.fetch(u) for u in urls))

    bodies, gate = _run_with_gate(http, fan_out, max_concurrent=3)
    assert len(bodies) == 12
    assert all(b is not None for b in bodies)
    assert http.max_active <= 3
    assert gate.peak_in_flight == 3
    assert gate.in_flight == 0
