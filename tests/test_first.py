import socket
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest
import requests

from chanworks.first import fetch_first, main


class _Handler(BaseHTTPRequestHandler):
    def do_GET(self):
        body = b"hello"
        self.send_response(200)
        self.send_header("Content-Type", "text/plain")
        self.send_header("X-Path", self.path)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, *args):
        pass


@pytest.fixture
def server():
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield httpd
    httpd.shutdown()
    httpd.server_close()


def _url(httpd, path):
    return f"http://127.0.0.1:{httpd.server_port}{path}"


def _dead_url():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}/"


def test_returns_one_of_the_responses(server):
    urls = [_url(server, "/a"), _url(server, "/b")]
    with fetch_first(urls) as response:
        assert response.url in urls
        assert response.headers["X-Path"] in ("/a", "/b")
        assert response.content == b"hello"


def test_failed_requests_are_skipped(server):
    good = _url(server, "/ok")
    with fetch_first([_dead_url(), good]) as response:
        assert response.url == good


def test_all_failing_raises():
    with pytest.raises(requests.ConnectionError):
        fetch_first([_dead_url(), _dead_url()])


def test_no_urls_raises():
    with pytest.raises(ValueError):
        fetch_first([])


def test_uses_given_session(server):
    with requests.Session() as session:
        with fetch_first([_url(server, "/s")], session) as response:
            assert response.headers["X-Path"] == "/s"


def test_main_prints_url_and_headers(server, capsys):
    url = _url(server, "/m")
    assert main([url]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == url
    assert "X-Path: /m" in lines[1:]


def test_main_reports_failure():
    assert main([_dead_url()]) == 1