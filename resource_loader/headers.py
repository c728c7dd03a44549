"""Parsing of structured HTTP header values.

A header value is a comma-separated list of elements; each element is a
semicolon-separated list of parts. The first part is the element text (for
example a MIME type) and the remaining parts are ``name=value`` parameters::

    >>> header = HeaderValue.parse("text/html; q=1.0, text/*; q=0.8")
    >>> header.element(1).text
    'text/*'
    >>> header.element(1).parameter("q")
    '0.8'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class HeaderElement:
    """One comma-separated element of a header value."""

    parts: Tuple[str, ...]

    @property
    def text(self) -> str:
        return self.parts[0]

    def parameter(self, name: str, start: int = 1) -> Optional[str]:
        """Return the value of the first ``name=value`` part at or after ``start``."""

        for part in self.parts[start:]:
            key, sep, value = part.partition("=")
            if sep and key.strip() == name:
                return _unquote(value.strip())
        return None


@dataclass(frozen=True)
class HeaderValue:
    elements: Tuple[HeaderElement, ...]

    @classmethod
    def parse(cls, raw: str) -> HeaderValue:
        elements: List[HeaderElement] = []
        if raw.strip():
            for item in raw.split(","):
                elements.append(HeaderElement(tuple(part.strip() for part in item.split(";"))))
        return cls(tuple(elements))

    def element(self, index: int = 0) -> HeaderElement:
        return self.elements[index]

    def first_element_text(self) -> Optional[str]:
        if not self.elements:
            return None
        return self.elements[0].text

    def __len__(self) -> int:
        return len(self.elements)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value
