"""
Request dispatcher – one serialised round trip per call.

Every exchange runs under a single re-entrant lock that spans building the
request, sending it, harvesting the rotated ``__RequestVerificationToken`` and
decoding the body.  The token presented on request N+1 is therefore always
the one the device returned on request N.
"""

from __future__ import annotations

import threading
from typing import Optional, Union

import requests

from .auth.session import SessionState, SessionStatus, install_session_cookie
from .codec.fields import Fields
from .codec.markup import decode_xml, encode_xml
from .codec.tree import Mapping, Node, Scalar
from .config import REQUEST_CONTENT_TYPE, TOKEN_HEADER
from .exceptions import (
    BadStatusCodeError,
    FieldMissingError,
    InvalidResponseError,
    InvalidValueError,
    TransportError,
)
from .logging_setup import log

Payload = Union[Fields, dict, None]


class Dispatcher:
    """Owns the HTTP session and the session/token state of one client."""

    def __init__(self, url: str, session: requests.Session, timeout: float) -> None:
        self.url = url
        self.timeout = timeout
        self._session = session
        self._state = SessionState()
        self._lock = threading.RLock()

    # -- state ------------------------------------------------------------

    @property
    def lock(self) -> threading.RLock:
        """Held for the duration of every exchange; re-entrant."""
        return self._lock

    @property
    def token(self) -> str:
        return self._state.token

    @property
    def session_id(self) -> str:
        return self._state.session_id

    @property
    def status(self) -> SessionStatus:
        return self._state.status

    def set_session(self, session_id: str, token: str) -> None:
        """Install a fresh SessionID cookie and token, discarding prior state."""
        with self._lock:
            install_session_cookie(self._session, self.url, session_id)
            self._state.session_id = session_id
            self._state.token = token
            self._state.status = SessionStatus.SESSION_ESTABLISHED
        log.info("Session established (SessionID=%s…)", session_id[:8])

    def mark_authenticated(self) -> None:
        with self._lock:
            self._state.status = SessionStatus.AUTHENTICATED

    # -- raw exchange -----------------------------------------------------

    def build_request(self, path: str, payload: Payload = None) -> requests.PreparedRequest:
        """
        Prepare (but do not send) the request for *path*.

        GET without a body when *payload* is None, otherwise POST with the XML
        body and the current token.  Session cookies are merged in.
        """
        url = self.url + path.lstrip("/")
        if payload is None:
            request = requests.Request("GET", url)
        else:
            request = requests.Request(
                "POST",
                url,
                data=encode_xml(payload),
                headers={
                    "Content-Type": REQUEST_CONTENT_TYPE,
                    TOKEN_HEADER: self._state.token,
                },
            )
        return self._session.prepare_request(request)

    def execute(self, path: str, payload: Payload = None, unwrap_root: bool = True) -> Node:
        """
        Send one request and return the decoded body.

        Raises:
            TransportError:       connection, DNS or timeout failure
            BadStatusCodeError:   HTTP status other than 200
            InvalidMarkupError:   body is not XML
            InvalidResponseError: body does not have the requested shape
        """
        with self._lock:
            prepared = self.build_request(path, payload)
            try:
                resp = self._session.send(prepared, timeout=self.timeout)
            except requests.RequestException as exc:
                raise TransportError(f"{prepared.method} {prepared.url} failed: {exc}") from exc

            log.debug("%s %s → HTTP %s", prepared.method, path, resp.status_code)
            if resp.status_code != requests.codes.ok:
                raise BadStatusCodeError(resp.status_code, prepared.url)

            # Rotate before decoding: the device has spent the old token even
            # if the body turns out to be unusable.
            token = resp.headers.get(TOKEN_HEADER)
            if token:
                self._state.token = token
                log.debug("Token rotated after %s", path)

            return decode_xml(resp.content, unwrap_root)

    # -- derived call shapes ----------------------------------------------

    def do(self, path: str, payload: Payload = None) -> Mapping:
        """Structured call: the fields of the response element."""
        return self.execute(path, payload, unwrap_root=True).as_mapping()

    def do_string(self, path: str, payload: Payload, name: str) -> str:
        """Scalar-field call: the text of field *name* in the response element."""
        fields = self.do(path, payload)
        node = fields.get(name)
        if node is None:
            raise FieldMissingError(name)
        if not isinstance(node, Scalar):
            raise InvalidValueError(f"field {name!r} is not text")
        return node.text

    def do_check_ok(self, path: str, payload: Payload = None) -> bool:
        """Acknowledgement call: True iff the body is ``<response>OK</response>``."""
        document = self.execute(path, payload, unwrap_root=False).as_mapping()
        node: Optional[Node] = document.get("response")
        if not isinstance(node, Scalar):
            raise InvalidResponseError(
                f"no <response> acknowledgement in reply to {path} (got {document.keys()})"
            )
        return node.text == "OK"
