"""
Session and anti-CSRF token state.

A client moves through three states:

  UNBOOTSTRAPPED      – nothing fetched yet
  SESSION_ESTABLISHED – SessionID cookie and first token installed
  AUTHENTICATED       – login accepted (only with a configured username)
"""

from __future__ import annotations

import enum
import urllib.parse
from dataclasses import dataclass
from typing import TYPE_CHECKING

import requests

from ..config import SES_TOK_INFO_PATH, SESSION_COOKIE, SESSION_ID_PREFIX
from ..exceptions import InvalidResponseError, InvalidValueError
from ..logging_setup import log

if TYPE_CHECKING:
    from ..dispatcher import Dispatcher


class SessionStatus(enum.Enum):
    UNBOOTSTRAPPED = "unbootstrapped"
    SESSION_ESTABLISHED = "session_established"
    AUTHENTICATED = "authenticated"


@dataclass
class SessionState:
    """Mutable per-client state; only the dispatcher writes to it."""

    session_id: str = ""
    token: str = ""
    status: SessionStatus = SessionStatus.UNBOOTSTRAPPED


def new_session_and_token_id(dispatcher: "Dispatcher") -> tuple[str, str]:
    """
    GET ``api/webserver/SesTokInfo`` and return ``(session_id, token)``.

    The device reports the session as ``SessionID=<id>``; the prefix is removed.
    Raises InvalidResponseError when either field is missing or not text.
    """
    fields = dispatcher.do(SES_TOK_INFO_PATH)

    ses_info = fields.get("SesInfo")
    tok_info = fields.get("TokInfo")
    if ses_info is None or tok_info is None:
        raise InvalidResponseError(
            f"SesTokInfo response lacks SesInfo/TokInfo (got {fields.keys()})"
        )
    try:
        session_id = ses_info.as_scalar()
        token = tok_info.as_scalar()
    except InvalidValueError as exc:
        raise InvalidResponseError(f"SesTokInfo fields are not text: {exc}") from exc

    session_id = session_id.strip().removeprefix(SESSION_ID_PREFIX)
    log.debug("SesTokInfo: session=%s…", session_id[:8])
    return session_id, token.strip()


def install_session_cookie(session: requests.Session, url: str, session_id: str) -> None:
    """Replace every cookie in *session* with a single SessionID for the device host."""
    host = urllib.parse.urlsplit(url).hostname or ""
    session.cookies.clear()
    # cookielib matches dotless hosts as "<host>.local"; such cookies stay host-less
    domain = host if "." in host else ""
    session.cookies.set(SESSION_COOKIE, session_id, domain=domain, path="/")
