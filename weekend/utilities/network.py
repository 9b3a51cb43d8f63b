"""Startup banner addresses for `weekend.main`.

The LAN address is found by "connecting" a UDP socket towards LAN_PROBE_HOST;
nothing is sent, the OS just picks the outgoing interface.
"""
import logging
import socket
from typing import List

from weekend.utilities.config import APP_HOST, LAN_PROBE_HOST

logger = logging.getLogger(__name__)

LOOPBACK = "127.0.0.1"
WILDCARD_HOSTS = ("0.0.0.0", "::", "")


def get_local_ip(probe_host: str = LAN_PROBE_HOST) -> str:
    """Non-loopback local address, or 127.0.0.1 when there is no route."""
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
        try:
            s.connect((probe_host, 80))
            return str(s.getsockname()[0])
        except OSError as e:
            logger.debug(f"No LAN route via {probe_host}: {e}")
            return LOOPBACK


def banner_urls(port: int, host: str = APP_HOST, probe_host: str = LAN_PROBE_HOST) -> List[str]:
    """URLs to print at startup: localhost first, then the LAN address when the server is reachable there."""
    urls = [f"http://localhost:{port}"]
    if host in WILDCARD_HOSTS:
        lan_ip = get_local_ip(probe_host)
    else:
        lan_ip = host
    if lan_ip not in (LOOPBACK, "localhost"):
        urls.append(f"http://{lan_ip}:{port}")
    return urls
