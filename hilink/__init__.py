"""
hilink
======
Python client for the Huawei HiLink WebUI API (the HTTP/XML interface of
Huawei LTE routers and USB modems).

Package structure
-----------------
hilink/
├── __init__.py       – package init and public API
├── config.py         – configuration constants
├── logging_setup.py  – package logger and coloured console handler
├── exceptions.py     – error hierarchy
├── client.py         – Client facade (session bootstrap + endpoint catalog)
├── dispatcher.py     – serialised request/response round trip
├── endpoints.py      – one method per WebUI endpoint
├── types.py          – enumerations used by endpoints
├── auth/             – session/token state, password encoding, login
├── codec/            – ordered request fields, XML encode/decode, response tree
└── network/          – requests.Session factory

Quick start
-----------
    from hilink import Client

    with Client("http://192.168.8.1/", username="admin", password="secret") as c:
        print(c.device_info().to_dict())
        c.sms_send("hello", "+15551234567")
"""

from .client import Client
from .auth.session import SessionStatus
from .codec import Fields, Mapping, Scalar, nvp, repeated, simple_request
from .exceptions import (
    BadStatusCodeError,
    DeviceError,
    FieldMissingError,
    HilinkError,
    InvalidMarkupError,
    InvalidMessageError,
    InvalidResponseError,
    InvalidShapeError,
    InvalidValueError,
    MessageTooLongError,
    TransportError,
)
from .logging_setup import setup_logging
from .types import DeviceControl, PinType, UssdState

__version__ = "1.0.0"

__all__ = [
    "Client",
    "SessionStatus",
    "Fields",
    "Mapping",
    "Scalar",
    "nvp",
    "repeated",
    "simple_request",
    "BadStatusCodeError",
    "DeviceError",
    "FieldMissingError",
    "HilinkError",
    "InvalidMarkupError",
    "InvalidMessageError",
    "InvalidResponseError",
    "InvalidShapeError",
    "InvalidValueError",
    "MessageTooLongError",
    "TransportError",
    "setup_logging",
    "DeviceControl",
    "PinType",
    "UssdState",
]
