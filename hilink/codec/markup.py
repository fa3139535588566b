"""
XML encoding and decoding for the WebUI request/response dialect.

Outgoing bodies are a single ``<request>`` element whose children follow the
payload order exactly.  Incoming bodies are turned into a :mod:`tree` of
:class:`Scalar` / :class:`Mapping` nodes; the codec only understands shape,
never meaning, so every value stays text.
"""

from __future__ import annotations

import codecs
import re
from typing import Union

from lxml import etree

from ..config import KNOWN_ERROR_CODES, REQUEST_ROOT
from ..exceptions import DeviceError, InvalidMarkupError, InvalidResponseError
from .fields import Fields
from .tree import Mapping, Node, Scalar

_XML_DECL_RE = re.compile(rb"^\s*<\?xml[^>]*\?>")
_ENCODING_RE = re.compile(rb"""encoding\s*=\s*["']([A-Za-z0-9._-]+)["']""")

# Synthetic wrapper so that a body is parsed as a list of top-level elements
_DOCUMENT_TAG = "hilink-document"

_PARSER = etree.XMLParser(
    resolve_entities=False,
    no_network=True,
    remove_comments=True,
    remove_pis=True,
)


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def _append_fields(parent: etree._Element, fields: Fields) -> None:
    for name, value in fields:
        child = etree.SubElement(parent, name)
        if isinstance(value, Fields):
            _append_fields(child, value)
        else:
            # "" still yields an explicit element (<Sca></Sca>)
            child.text = value


def encode_xml(payload: Union[Fields, dict, None], root: str = REQUEST_ROOT) -> bytes:
    """
    Serialise *payload* to a UTF-8 request document.

    ``None`` means "no body" and gives ``b""``.  A ``dict`` is encoded in
    insertion order; nested dicts or :class:`Fields` become nested elements.
    """
    if payload is None:
        return b""
    if isinstance(payload, dict):
        payload = Fields(payload.items())
    if not isinstance(payload, Fields):
        raise TypeError(f"cannot encode {type(payload).__name__} as a request body")

    element = etree.Element(root)
    _append_fields(element, payload)
    return etree.tostring(element, xml_declaration=True, encoding="UTF-8")


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def _local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def _to_node(element: etree._Element) -> Node:
    children = [c for c in element if isinstance(c.tag, str)]
    if not children and not element.attrib:
        return Scalar(element.text or "")

    pairs: list[tuple[str, Node]] = [
        ("-" + name.rsplit("}", 1)[-1], Scalar(value))
        for name, value in element.attrib.items()
    ]
    text = (element.text or "") + "".join(c.tail or "" for c in children)
    if text.strip():
        pairs.append(("#text", Scalar(text.strip())))
    pairs.extend((_local_name(c), _to_node(c)) for c in children)
    return Mapping(tuple(pairs))


def _document_content(body: bytes) -> bytes:
    """Strip the BOM and XML declaration, returning the rest as UTF-8."""
    body = body.removeprefix(codecs.BOM_UTF8)
    declaration = _XML_DECL_RE.match(body)
    if declaration is None:
        return body
    content = body[declaration.end():]
    declared = _ENCODING_RE.search(declaration.group(0))
    if declared is None:
        return content
    encoding = declared.group(1).decode("ascii")
    try:
        return content.decode(encoding).encode("utf-8")
    except (LookupError, UnicodeDecodeError) as exc:
        raise InvalidMarkupError(f"response is not valid {encoding}: {exc}") from exc


def _parse_document(body: Union[bytes, str]) -> Mapping:
    if isinstance(body, str):
        # already text; a declared encoding no longer applies
        body = _XML_DECL_RE.sub(b"", body.lstrip("\ufeff").encode("utf-8"), count=1)
    if not body.strip():
        raise InvalidMarkupError("empty response body")

    content = _document_content(body)
    wrapped = b"<%s>%s</%s>" % (_DOCUMENT_TAG.encode(), content, _DOCUMENT_TAG.encode())
    try:
        document = etree.fromstring(wrapped, parser=_PARSER)
    except etree.XMLSyntaxError as exc:
        raise InvalidMarkupError(f"malformed XML in response: {exc}") from exc

    elements = [c for c in document if isinstance(c.tag, str)]
    stray = (document.text or "") + "".join(c.tail or "" for c in elements)
    if stray.strip() or not elements:
        raise InvalidMarkupError("response body is not an XML document")

    return Mapping(tuple((_local_name(c), _to_node(c)) for c in elements))


def _raise_device_error(document: Mapping) -> None:
    if document.keys() != ["error"]:
        return
    error = document["error"]
    if not isinstance(error, Mapping) or "code" not in error:
        raise InvalidResponseError("device returned a malformed <error> document")
    code = (error.text("code") or "").strip()
    message = (error.text("message") or "").strip()
    raise DeviceError(code, message, KNOWN_ERROR_CODES.get(code))


def decode_xml(body: Union[bytes, str], unwrap_root: bool) -> Node:
    """
    Parse a response body.

    With ``unwrap_root`` the fields of the single top-level element are
    returned (``<response><A>1</A></response>`` → ``{A: "1"}``); otherwise the
    whole document is returned as a mapping of its top-level elements.

    Raises:
        InvalidMarkupError:   body is not well-formed XML
        DeviceError:          body is a device ``<error>`` document
        InvalidResponseError: ``unwrap_root`` and the document does not reduce
                              to the fields of exactly one element
    """
    document = _parse_document(body)
    _raise_device_error(document)

    if not unwrap_root:
        return document

    if len(document) != 1:
        raise InvalidResponseError(
            f"expected one top-level element, found {len(document)}: {document.keys()}"
        )
    name, node = document.pairs[0]
    if isinstance(node, Scalar):
        if node.text.strip():
            raise InvalidResponseError(f"<{name}> holds text, not fields")
        return Mapping()
    return node

