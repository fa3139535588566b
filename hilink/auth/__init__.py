"""Authentication submodule – session bootstrap, token state, login."""

from hilink.auth.login import login
from hilink.auth.password import tokenized_password
from hilink.auth.session import (
    SessionState,
    SessionStatus,
    install_session_cookie,
    new_session_and_token_id,
)

__all__ = [
    "login",
    "tokenized_password",
    "SessionState",
    "SessionStatus",
    "install_session_cookie",
    "new_session_and_token_id",
]
