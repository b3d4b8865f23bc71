from linkcrawl.services.http_service import HttpService
from linkcrawl.exceptions import HttpFetchError
from unittest.mock import Mock
import pytest
import requests


def test_fetch_success():
    mock_http_client = Mock()
    mock_http_client.return_value.status_code = 200
    mock_http_client.return_value.text = 'hello world'
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)
    response = http.fetch('http://example.com')
    assert response.status_code == 200
    assert response.text == 'hello world'


def test_fetch_sends_user_agent_and_timeout():
    mock_http_client = Mock()
    mock_http_client.return_value.status_code = 200
    mock_http_client.return_value.text = ''
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client, timeout=3)
    http.fetch('http://example.com/page')
    mock_http_client.assert_called_once_with(
        'http://example.com/page', headers={'User-Agent': 'TestAgent'}, timeout=3
    )


@pytest.mark.parametrize("exc", [
    requests.exceptions.Timeout("timed out"),
    requests.exceptions.ConnectionError("refused"),
])
def test_fetch_wraps_requests_exception(exc):
    mock_http_client = Mock(side_effect=exc)
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)

    with pytest.raises(HttpFetchError) as err:
        http.fetch('http://example.com')
    assert "http://example.com" in str(err.value)
    assert err.value.original is exc


def test_fetch_content_type_from_headers():
    mock_http_client = Mock()
    mock_http_client.return_value.status_code = 200
    mock_http_client.return_value.text = '<html>test</html>'
    mock_http_client.return_value.headers = {'Content-Type': 'text/html; charset=utf-8'}
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)
    response = http.fetch('http://example.com')
    assert response.content_type == 'text/html; charset=utf-8'


def test_fetch_missing_content_type():
    mock_http_client = Mock()
    mock_http_client.return_value.status_code = 200
    mock_http_client.return_value.text = 'data'
    mock_http_client.return_value.headers = {}
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)
    response = http.fetch('http://example.com')
    assert response.content_type is None


def test_fetch_returns_error_statuses_without_raising():
    mock_http_client = Mock()
    mock_http_client.return_value.status_code = 503
    mock_http_client.return_value.text = 'down'
    mock_http_client.return_value.headers = {'Content-Type': 'text/html'}
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)
    assert http.fetch('http://example.com').status_code == 503


def test_fetch_bubbles_unexpected_exceptions():
    """Verify that non-requests exceptions from headers.get() are NOT swallowed."""
    mock_http_client = Mock()
    mock_response = Mock()
    mock_response.status_code = 200
    mock_response.text = 'test'
    mock_response.headers.get.side_effect = RuntimeError("Real bug in headers.get()")
    mock_http_client.return_value = mock_response
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)

    with pytest.raises(RuntimeError, match="Real bug"):
        http.fetch('http://example.com')
