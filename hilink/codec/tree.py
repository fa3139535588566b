"""
Decoded response tree.

A response document is either a piece of text (:class:`Scalar`) or an ordered
list of named children (:class:`Mapping`).  Repeated element names are kept as
repeated pairs so that nothing present in the markup is lost.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Tuple

from ..exceptions import InvalidShapeError, InvalidValueError


class Node(abc.ABC):
    """Common base of :class:`Scalar` and :class:`Mapping`."""

    def as_scalar(self) -> str:
        raise InvalidValueError(f"expected text, got {type(self).__name__}")

    def as_mapping(self) -> "Mapping":
        raise InvalidShapeError(f"expected a mapping, got {type(self).__name__}")

    @abc.abstractmethod
    def to_python(self) -> Any:
        """Plain Python value: text, or a dict with lists for repeated names."""


@dataclass(frozen=True)
class Scalar(Node):
    text: str = ""

    def as_scalar(self) -> str:
        return self.text

    def to_python(self) -> str:
        return self.text

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Mapping(Node):
    pairs: Tuple[Tuple[str, Node], ...] = ()

    def as_mapping(self) -> "Mapping":
        return self

    def get(self, name: str, default: Optional[Node] = None) -> Optional[Node]:
        """Return the first child called *name*, or *default*."""
        for key, value in self.pairs:
            if key == name:
                return value
        return default

    def get_all(self, name: str) -> list[Node]:
        return [value for key, value in self.pairs if key == name]

    def text(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Text of the first child called *name* if it is scalar, else *default*."""
        node = self.get(name)
        if isinstance(node, Scalar):
            return node.text
        return default

    def keys(self) -> list[str]:
        return [key for key, _ in self.pairs]

    def to_python(self) -> dict[str, Any]:
        """
        Plain ``dict`` view: text stays ``str``, nested mappings become dicts and
        a repeated name becomes a list of its values in document order.
        """
        out: dict[str, Any] = {}
        for key, value in self.pairs:
            converted = value.to_python()
            if key in out:
                if not isinstance(out[key], list):
                    out[key] = [out[key]]
                out[key].append(converted)
            else:
                out[key] = converted
        return out

    to_dict = to_python

    def __contains__(self, name: object) -> bool:
        return any(key == name for key, _ in self.pairs)

    def __getitem__(self, name: str) -> Node:
        node = self.get(name)
        if node is None:
            raise KeyError(name)
        return node

    def __iter__(self) -> Iterator[Tuple[str, Node]]:
        return iter(self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)
