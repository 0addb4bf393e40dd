import socket
import threading
import requests
from requests.adapters import HTTPAdapter
from urllib3.connection import HTTPConnection, HTTPSConnection
from urllib3.connectionpool import HTTPConnectionPool, HTTPSConnectionPool
from ..config import USER_AGENT

_local = threading.local()


class RequestDeadline:
    """
    Bounds a whole request/response exchange, not just each socket read.

    While active, sockets opened by the current thread through a
    DeadlineAdapter are registered here; when the timer fires they are shut
    down, so a server trickling its headers cannot hold the request open.
    """

    def __init__(self, timeout):
        self.timeout = timeout
        self.expired = False
        self._sockets = []
        self._lock = threading.Lock()
        self._timer = threading.Timer(timeout, self._expire)
        self._timer.daemon = True

    def __enter__(self):
        _local.deadline = self
        self._timer.start()
        return self

    def __exit__(self, *exc):
        self._timer.cancel()
        _local.deadline = None
        return False

    def watch(self, sock):
        with self._lock:
            if not self.expired:
                self._sockets.append(sock)
                return
        _shutdown(sock)

    def _expire(self):
        with self._lock:
            self.expired = True
            sockets, self._sockets = self._sockets, []
        for sock in sockets:
            _shutdown(sock)


def _shutdown(sock):
    try:
        sock.shutdown(socket.SHUT_RDWR)
    except OSError:
        pass  # already closed by the other side


def _watch_socket(sock):
    deadline = getattr(_local, 'deadline', None)
    if deadline is not None:
        deadline.watch(sock)
    return sock


class DeadlineHTTPConnection(HTTPConnection):
    def _new_conn(self):
        return _watch_socket(super()._new_conn())


class DeadlineHTTPSConnection(HTTPSConnection):
    def _new_conn(self):
        return _watch_socket(super()._new_conn())


class DeadlineHTTPConnectionPool(HTTPConnectionPool):
    ConnectionCls = DeadlineHTTPConnection


class DeadlineHTTPSConnectionPool(HTTPSConnectionPool):
    ConnectionCls = DeadlineHTTPSConnection


class DeadlineAdapter(HTTPAdapter):
    def init_poolmanager(self, *args, **kwargs):
        super().init_poolmanager(*args, **kwargs)
        self.poolmanager.pool_classes_by_scheme = {
            'http': DeadlineHTTPConnectionPool,
            'https': DeadlineHTTPSConnectionPool,
        }


def mount_deadline_adapters(session):
    for prefix in ('http://', 'https://'):
        if not isinstance(session.adapters.get(prefix), DeadlineAdapter):
            session.mount(prefix, DeadlineAdapter())
    return session


def get_session(self):
    session = requests.Session()
    session.headers.update({'User-Agent': USER_AGENT})
    session.verify = self.verify_tls
    return mount_deadline_adapters(session)
