import http.server
import socket
import threading
import pytest
import requests


class FakeResponse:
    def __init__(self, status_code):
        self.status_code = status_code
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False


class FakeSession:
    """Stands in for requests.Session. Answers from a {host: status} table."""

    def __init__(self, statuses=None, default_status=404, error=None, delay=0):
        self.statuses = statuses or {}
        self.default_status = default_status
        self.error = error
        self.delay = delay
        self.calls = []
        self._lock = threading.Lock()

    def get(self, url, headers=None, **kwargs):
        with self._lock:
            self.calls.append((url, dict(headers or {}), kwargs))
        if self.delay:
            threading.Event().wait(self.delay)
        if self.error is not None:
            raise self.error
        host = (headers or {}).get('Host', '')
        return FakeResponse(self.statuses.get(host, self.default_status))

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture
def fake_session(monkeypatch):
    session = FakeSession(statuses={'example.com': 200})
    monkeypatch.setattr('hostsweep.scanner.get_session', lambda scanner: session)
    return session


@pytest.fixture
def timeout_session(monkeypatch):
    session = FakeSession(error=requests.exceptions.ConnectTimeout("connect timed out"), delay=0.05)
    monkeypatch.setattr('hostsweep.scanner.get_session', lambda scanner: session)
    return session


class VhostHandler(http.server.BaseHTTPRequestHandler):
    """200 for Host example.com, a redirect for redirect.example, 404 for anything else."""

    def do_GET(self):
        self.server.seen_hosts.append(self.headers.get('Host'))
        host = self.headers.get('Host', '')
        if host == 'example.com':
            self.send_response(200)
        elif host == 'redirect.example':
            self.send_response(301)
            self.send_header('Location', 'http://example.com/')
        else:
            self.send_response(404)
        body = b'hello'
        self.send_header('Content-Length', str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def vhost_server():
    server = http.server.ThreadingHTTPServer(('127.0.0.1', 0), VhostHandler)
    server.daemon_threads = True
    server.seen_hosts = []
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()


def _socket_server(handle):
    stop = threading.Event()
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(('127.0.0.1', 0))
    listener.listen(5)
    listener.settimeout(0.1)

    def serve():
        while not stop.is_set():
            try:
                conn, _ = listener.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            threading.Thread(target=handle, args=(conn, stop), daemon=True).start()

    threading.Thread(target=serve, daemon=True).start()
    return listener, stop


def _drip_headers(conn, stop):
    with conn:
        try:
            conn.recv(4096)
            conn.sendall(b'HTTP/1.1 200 OK\r\nX-Pad: ')
            while not stop.wait(0.2):
                conn.sendall(b'a')
        except OSError:
            pass


def _stay_silent(conn, stop):
    with conn:
        stop.wait(10)


@pytest.fixture
def drip_server():
    listener, stop = _socket_server(_drip_headers)
    yield listener.getsockname()[1]
    stop.set()
    listener.close()


@pytest.fixture
def silent_server():
    listener, stop = _socket_server(_stay_silent)
    yield listener.getsockname()[1]
    stop.set()
    listener.close()
