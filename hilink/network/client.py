"""
HTTP transport setup for WebUI communication.

Provides the requests.Session the dispatcher sends through: keep-alive
headers, optional TLS verification, and an optional custom transport adapter.
"""

from typing import Optional

import requests
import urllib3
from requests.adapters import BaseAdapter, HTTPAdapter

from ..logging_setup import log


def build_session(
    verify_ssl: bool = True,
    transport: Optional[BaseAdapter] = None,
    session: Optional[requests.Session] = None,
) -> requests.Session:
    """
    Return a requests.Session prepared for the device.

    Args:
        verify_ssl: Whether to verify TLS certificates
        transport:  Adapter mounted for both http:// and https:// (defaults to a
                    plain HTTPAdapter without retries)
        session:    Existing session to configure instead of a new one

    Returns:
        Configured requests.Session instance
    """
    if session is None:
        session = requests.Session()
        transport = transport or HTTPAdapter(max_retries=0)
    if transport is not None:
        session.mount("http://", transport)
        session.mount("https://", transport)

    session.verify = verify_ssl
    if not verify_ssl:
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        log.warning("TLS certificate verification is DISABLED")

    session.headers.update({
        "User-Agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/120.0.0.0 Safari/537.36"
        ),
        "Connection": "keep-alive",
        "X-Requested-With": "XMLHttpRequest",
    })
    return session


def base_url(url: str) -> str:
    """
    Normalise the device endpoint so relative API paths can be appended.

    Args:
        url: Device URL or bare host (e.g. '192.168.8.1')

    Returns:
        URL with a scheme and exactly one trailing slash
        (e.g. 'http://192.168.8.1/')
    """
    url = url.strip()
    if "://" not in url:
        url = "http://" + url
    return url.rstrip("/") + "/"
