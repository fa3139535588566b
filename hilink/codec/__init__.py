"""Request field encoding and response XML decoding."""

from hilink.codec.fields import (
    Fields,
    bool_to_string,
    nvp,
    repeated,
    simple_request,
)
from hilink.codec.markup import decode_xml, encode_xml
from hilink.codec.tree import Mapping, Node, Scalar

__all__ = [
    "Fields",
    "bool_to_string",
    "nvp",
    "repeated",
    "simple_request",
    "decode_xml",
    "encode_xml",
    "Mapping",
    "Node",
    "Scalar",
]
