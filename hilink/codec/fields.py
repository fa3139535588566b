"""
Ordered request fields.

Some WebUI endpoints (SMS list, SMS send, phonebook) parse the request body
positionally, so a payload is an ordered list of ``(name, value)`` pairs rather
than a dict.  Names may repeat; the encoder never merges or re-keys them.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Tuple, Union

FieldValue = Union[str, "Fields"]


def bool_to_string(flag: bool) -> str:
    """The WebUI spells booleans as ``"1"`` / ``"0"``."""
    return "1" if flag else "0"


def _coerce(value: Any) -> FieldValue:
    if isinstance(value, Fields):
        return value
    if isinstance(value, dict):
        return Fields(value.items())
    if value is None:
        return ""
    if isinstance(value, bool):
        return bool_to_string(value)
    return str(value)


class Fields:
    """An ordered, duplicate-preserving sequence of request fields."""

    __slots__ = ("_pairs",)

    def __init__(self, pairs: Iterable[Tuple[str, Any]] = ()) -> None:
        self._pairs: list[Tuple[str, FieldValue]] = [
            (str(name), _coerce(value)) for name, value in pairs
        ]

    def append(self, name: str, value: Any) -> "Fields":
        self._pairs.append((str(name), _coerce(value)))
        return self

    def names(self) -> list[str]:
        return [name for name, _ in self._pairs]

    def __iter__(self) -> Iterator[Tuple[str, FieldValue]]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fields):
            return NotImplemented
        return self._pairs == other._pairs

    def __repr__(self) -> str:
        return f"Fields({self._pairs!r})"


def simple_request(*items: Any) -> Fields:
    """
    Build :class:`Fields` from a flat ``name, value, name, value, …`` list.

    An odd number of items is a programming error and raises ``ValueError``.
    """
    if len(items) % 2:
        raise ValueError(
            f"simple_request() needs name/value pairs, got {len(items)} items"
        )
    return Fields(zip(items[0::2], items[1::2]))


def nvp(name: str, value: Any) -> Fields:
    """A ``<Name>…</Name><Value>…</Value>`` block, as used by phonebook fields."""
    return simple_request("Name", name, "Value", value)


def repeated(name: str, values: Iterable[Any]) -> Fields:
    """The same field once per value, e.g. ``repeated("Phone", numbers)``."""
    return Fields((name, value) for value in values)
