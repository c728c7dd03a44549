"""Helpers for classifying and comparing resource identifiers."""

from __future__ import annotations

import os
import re
from typing import Optional, Tuple
from urllib.parse import unquote, urlsplit

from .constants import ARCHIVE_SCHEMES, ARCHIVE_SEPARATOR, DEFAULT_PORTS, FILE_SCHEME, LOCAL_HOSTS

# Single-letter schemes are Windows drive letters, not URLs.
_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]+):")


def scheme_of(identifier: str) -> Optional[str]:
    match = _SCHEME_RE.match(identifier)
    return match.group(1).lower() if match else None


def has_scheme(identifier: str) -> bool:
    return scheme_of(identifier) is not None


def file_url_to_path(url: str) -> str:
    """Convert a ``file:`` URL to a native absolute path."""

    path = unquote(urlsplit(url).path)
    # file:///C:/dir -> C:/dir
    if os.sep == "\\" and len(path) > 2 and path[0] == "/" and path[2] == ":":
        path = path[1:]
    return os.path.normpath(path) if path else os.sep


def split_archive_url(url: str) -> Tuple[str, str, str]:
    """Split ``jar:{container}!/{entry}`` into scheme, container and entry path."""

    scheme = scheme_of(url)
    if scheme not in ARCHIVE_SCHEMES:
        raise ValueError(f"Archive URL must start with one of {sorted(ARCHIVE_SCHEMES)}: '{url}'")
    separator = url.rfind(ARCHIVE_SEPARATOR)
    if separator < 0:
        raise ValueError(f"Archive URL must contain '{ARCHIVE_SEPARATOR}': '{url}'")
    return scheme, url[len(scheme) + 1:separator], url[separator + len(ARCHIVE_SEPARATOR):]


class WildcardPattern:
    """Matches host names against a pattern using ``?`` and ``*``."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        regex = "".join(
            ".*" if char == "*" else "." if char == "?" else re.escape(char) for char in pattern
        )
        self._regex = re.compile(f"^{regex}$", re.IGNORECASE | re.DOTALL)

    def matches(self, text: Optional[str]) -> bool:
        return text is not None and self._regex.match(text) is not None

    def __repr__(self) -> str:
        return f"WildcardPattern({self.pattern!r})"


def url_key(url: str) -> Tuple:
    """Return a key under which equivalent URLs compare equal."""

    scheme = scheme_of(url)
    if scheme == FILE_SCHEME:
        return (FILE_SCHEME, os.path.normcase(file_url_to_path(url)))
    if scheme in ARCHIVE_SCHEMES:
        _, container, entry = split_archive_url(url)
        return ("jar", url_key(container), entry)
    parts = urlsplit(url)
    host = (parts.hostname or "").lower()
    if host in LOCAL_HOSTS:
        host = "localhost"
    port = parts.port or DEFAULT_PORTS.get(parts.scheme.lower())
    return (parts.scheme.lower(), host, port, parts.path or "/", parts.query)


def same_url(first: str, second: str) -> bool:
    return url_key(first) == url_key(second)
