"""Login handshake against ``api/user/login``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..codec.fields import simple_request
from ..config import LOGIN_PATH, PASSWORD_TYPE_SHA256
from ..logging_setup import log
from .password import tokenized_password

if TYPE_CHECKING:
    from ..dispatcher import Dispatcher


def login(dispatcher: "Dispatcher", username: str, password: str) -> bool:
    """
    Authenticate the dispatcher's session.

    Returns False without contacting the device when *username* is empty – an
    anonymous session is a valid mode.  Otherwise returns whether the device
    acknowledged the login with ``<response>OK</response>``.

    The token is read and the request sent while holding the dispatcher lock,
    so the digest is always computed over the token the request carries.
    """
    if not username:
        log.debug("No username configured – skipping login")
        return False

    with dispatcher.lock:
        payload = simple_request(
            "Username", username,
            "Password", tokenized_password(password, dispatcher.token),
            "password_type", PASSWORD_TYPE_SHA256,
        )
        ok = dispatcher.do_check_ok(LOGIN_PATH, payload)
        if ok:
            dispatcher.mark_authenticated()

    if ok:
        log.info("Login successful as %r", username)
    else:
        log.warning("Login as %r was not acknowledged by the device", username)
    return ok
