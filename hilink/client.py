"""
Connection facade for a HiLink WebUI device.

A :class:`Client` owns the HTTP session, the anti-CSRF token state and the
credentials.  Unless ``start_session=False`` it bootstraps a session (and logs
in when a username is given) as soon as it is constructed.
"""

from __future__ import annotations

from typing import Any, Optional

import requests
from requests.adapters import BaseAdapter

from .auth.login import login as _login
from .auth.session import SessionStatus, new_session_and_token_id
from .codec.tree import Mapping, Node
from .config import DEFAULT_PASSWORD, DEFAULT_TIMEOUT, DEFAULT_URL, DEFAULT_USER
from .dispatcher import Dispatcher, Payload
from .endpoints import EndpointsMixin
from .logging_setup import log
from .network.client import base_url, build_session


class Client(EndpointsMixin):
    """
    One logical connection to one device.

    Safe to share between threads: exchanges are serialised internally, at
    most one request is in flight at a time.

    Args:
        url:           Device endpoint, e.g. 'http://192.168.8.1/'
        username:      Login name; empty/None keeps the session anonymous
        password:      Login password
        timeout:       Per-request timeout in seconds
        start_session: Bootstrap the session (and log in) immediately
        verify_ssl:    Verify TLS certificates for https:// endpoints
        transport:     requests transport adapter to send through
        session:       Pre-built requests.Session to use
    """

    def __init__(
        self,
        url: str = DEFAULT_URL,
        *,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        start_session: bool = True,
        verify_ssl: bool = True,
        transport: Optional[BaseAdapter] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.url = base_url(url)
        self.username = username or ""
        self._password = password or ""
        self._http = build_session(verify_ssl=verify_ssl, transport=transport, session=session)
        self._dispatcher = Dispatcher(self.url, self._http, timeout)

        if start_session:
            self.start_session()

    @classmethod
    def from_env(cls, **kwargs: Any) -> "Client":
        """Build a client from HILINK_URL / HILINK_USER / HILINK_PASSWORD."""
        kwargs.setdefault("username", DEFAULT_USER)
        kwargs.setdefault("password", DEFAULT_PASSWORD)
        return cls(kwargs.pop("url", DEFAULT_URL), **kwargs)

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def start_session(self) -> None:
        """
        Fetch a new SessionID and token, install them, then log in.

        Calling it again starts over with a fresh session.  A refused login is
        logged, not raised; device errors (e.g. wrong password) propagate.
        """
        session_id, token = self.new_session_and_token_id()
        self.set_session_and_token_id(session_id, token)
        self.login()

    def new_session_and_token_id(self) -> tuple[str, str]:
        return new_session_and_token_id(self._dispatcher)

    def set_session_and_token_id(self, session_id: str, token: str) -> None:
        self._dispatcher.set_session(session_id, token)

    def login(self) -> bool:
        """Log in with the configured credentials; False if there are none."""
        return _login(self._dispatcher, self.username, self._password)

    @property
    def token(self) -> str:
        return self._dispatcher.token

    @property
    def session_id(self) -> str:
        return self._dispatcher.session_id

    @property
    def status(self) -> SessionStatus:
        return self._dispatcher.status

    @property
    def timeout(self) -> float:
        return self._dispatcher.timeout

    @property
    def http_session(self) -> requests.Session:
        return self._http

    # ------------------------------------------------------------------
    # Request primitives
    # ------------------------------------------------------------------

    def execute(self, path: str, payload: Payload = None, unwrap_root: bool = True) -> Node:
        return self._dispatcher.execute(path, payload, unwrap_root)

    def build_request(self, path: str, payload: Payload = None) -> requests.PreparedRequest:
        return self._dispatcher.build_request(path, payload)

    def do(self, path: str, payload: Payload = None) -> Mapping:
        """GET (payload None) or POST *path* and return the response fields."""
        return self._dispatcher.do(path, payload)

    def do_string(self, path: str, payload: Payload, name: str) -> str:
        return self._dispatcher.do_string(path, payload, name)

    def do_check_ok(self, path: str, payload: Payload = None) -> bool:
        return self._dispatcher.do_check_ok(path, payload)

    # ------------------------------------------------------------------

    def close(self) -> None:
        log.debug("Closing HTTP session for %s", self.url)
        self._http.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<Client {self.url} {self.status.value}>"
