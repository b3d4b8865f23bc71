import requests
from typing import Callable

from linkcrawl.domain.http_response import HttpResponse
from linkcrawl.exceptions import HttpFetchError


class HttpService:
    """
    Blocking HTTP transport used by the fetch gate.

    Requires an http_client callable (normally `requests.get`) so tests can
    hand in a fake without patching the network layer.
    """

    def __init__(self, user_agent: str, http_client: Callable, timeout: int = 10):
        self.user_agent = user_agent
        self.timeout = timeout
        self.http_client = http_client

    def fetch(self, url: str) -> HttpResponse:
        """GET `url` and return status code, body text and Content-Type.

        Transport failures surface as `HttpFetchError`; HTTP error statuses
        are returned like any other response.
        """
        headers = {"User-Agent": self.user_agent}
        try:
            resp = self.http_client(url, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise HttpFetchError(url, e) from e

        ct = None
        if hasattr(resp, 'headers'):
            ct = resp.headers.get('Content-Type')

        return HttpResponse(resp.status_code, resp.text, ct)
