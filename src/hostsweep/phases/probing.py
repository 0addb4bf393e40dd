from ..config import logger
from ..results import ProbeResult
from ..utils.http_utils import RequestDeadline, mount_deadline_adapters
import requests


def build_url(protocol, ip, port=None):
    host = f"[{ip}]" if ':' in ip else ip
    if port:
        return f"{protocol}://{host}:{port}"
    return f"{protocol}://{host}"


def probe_vhost(session, ip, domain, protocol, timeout, verify_tls, port=None):
    """
    Sends one GET to protocol://ip claiming to be `domain` in the Host header.

    The TCP/TLS connection always goes to `ip`. Only the status line is used,
    the body is never read. `timeout` bounds the whole exchange. Transport
    failures (refused, timed out, TLS handshake) come back as status 0 with an
    error description.
    """
    url = build_url(protocol, ip, port)
    headers = {'Host': domain} if domain else {}

    if isinstance(session, requests.Session):
        mount_deadline_adapters(session)

    deadline = RequestDeadline(timeout)
    try:
        with deadline:
            with session.get(url, headers=headers, timeout=timeout, verify=verify_tls,
                             allow_redirects=False, stream=True) as response:
                status_code = response.status_code
    except requests.exceptions.RequestException as e:
        if deadline.expired or isinstance(e, requests.exceptions.Timeout):
            logger.debug(f" [!] {protocol}://{domain} (IP: {ip}) timed out: {e}")
            return ProbeResult(domain, ip, protocol, 0, f"Request timed out after {timeout}s")
        logger.debug(f" [!] {protocol}://{domain} (IP: {ip}) failed: {type(e).__name__} - {e}")
        return ProbeResult(domain, ip, protocol, 0, f"{type(e).__name__}: {e}")

    # A cut-off connection can still look like a short, complete header block
    if deadline.expired:
        logger.debug(f" [!] {protocol}://{domain} (IP: {ip}) exceeded the {timeout}s deadline")
        return ProbeResult(domain, ip, protocol, 0, f"Request timed out after {timeout}s")

    logger.debug(f" [+] {protocol}://{domain} (IP: {ip}) - Status: {status_code}")
    return ProbeResult(domain, ip, protocol, status_code, None)
