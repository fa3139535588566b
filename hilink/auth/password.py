"""Password encoding for the WebUI login handshake."""

import base64
import hashlib


def tokenized_password(password: str, token: str) -> str:
    """
    Replicate the WebUI's ``password_type=4`` encoding:

      1. SHA-256 over the UTF-8 bytes of ``password + token``
      2. lowercase hex digest of step 1
      3. Base64 of the hex text, with the ``=`` padding removed

    The live anti-CSRF token is part of the digest, so the same password gives a
    different credential on every login attempt.
    """
    digest_hex = hashlib.sha256((password + token).encode("utf-8")).hexdigest()
    return base64.b64encode(digest_hex.encode("ascii")).decode("ascii").rstrip("=")
