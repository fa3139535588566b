"""
Exception hierarchy for the HiLink WebUI client.

Every failure a public call can report derives from :class:`HilinkError`, so
callers that do not care about the kind can catch a single type.
"""

from __future__ import annotations

from typing import Optional


class HilinkError(Exception):
    """Base class for all client errors."""


class TransportError(HilinkError):
    """
    Connection, DNS or timeout failure raised by the HTTP layer.

    The underlying ``requests`` exception is available as ``__cause__``; a slow
    device and an unreachable one are not told apart here.
    """


class BadStatusCodeError(HilinkError):
    """The device answered with a non-200 HTTP status. The body is not read."""

    def __init__(self, status_code: int, url: str = "") -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"unexpected HTTP status {status_code} from {url or 'device'}")


class InvalidMarkupError(HilinkError):
    """The response body is not well-formed XML."""


class InvalidResponseError(HilinkError):
    """The body parsed, but an expected element or shape is missing."""


class DeviceError(InvalidResponseError):
    """
    The device replied with an ``<error>`` document instead of a response.

    Attributes:
        code:    error code as sent by the device (text, e.g. ``"125002"``)
        message: the device's own message, often empty
    """

    def __init__(self, code: str, message: str = "", description: Optional[str] = None) -> None:
        self.code = code
        self.message = message
        self.description = description
        text = f"device error {code}"
        if description:
            text += f" ({description})"
        if message:
            text += f": {message}"
        super().__init__(text)


class InvalidValueError(HilinkError):
    """A field is present but is not scalar text."""


class FieldMissingError(HilinkError):
    """A named field is absent from an otherwise valid response."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"field {field!r} missing from response")


class InvalidShapeError(HilinkError):
    """The decoded result is not mapping-shaped where a mapping was required."""


class MessageTooLongError(HilinkError):
    """An outgoing SMS exceeds the single-message length accepted by the device."""


class InvalidMessageError(HilinkError):
    """An outgoing SMS contains characters that cannot be carried in XML 1.0."""
