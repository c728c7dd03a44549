from __future__ import annotations

import codecs
import io
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import BinaryIO, Mapping, Optional, TextIO

from .constants import CONTENT_LENGTH_HEADER, CONTENT_TYPE_HEADER, ETAG_HEADER, LAST_MODIFIED_HEADER
from .headers import HeaderValue


@dataclass
class ResourceDescriptor:
    """An opened resource: a byte stream plus everything known about it.

    The stream is consumed once. Whoever receives the descriptor is responsible
    for closing it; the descriptor is a context manager for that purpose.
    """

    stream: BinaryIO
    identifier: str
    charset: Optional[str] = None
    size: Optional[int] = None
    time: Optional[datetime] = None
    mime_type: Optional[str] = None
    etag: Optional[str] = None

    def read(self) -> bytes:
        return self.stream.read()

    def get_reader(self, default_charset: Optional[str] = None) -> TextIO:
        """Return a text reader over the stream.

        The declared charset wins when Python knows it, then ``default_charset``,
        then UTF-8.
        """

        encoding = _known_charset(self.charset) or default_charset or "utf-8"
        return io.TextIOWrapper(self.stream, encoding=encoding)

    def close(self) -> None:
        self.stream.close()

    def __enter__(self) -> ResourceDescriptor:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _known_charset(name: Optional[str]) -> Optional[str]:
    if not name:
        return None
    try:
        return codecs.lookup(name).name
    except LookupError:
        return None


def timestamp_from_epoch(seconds: Optional[float]) -> Optional[datetime]:
    if not seconds:
        return None
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def descriptor_from_headers(
    stream: BinaryIO,
    identifier: str,
    headers: Mapping[str, str],
) -> ResourceDescriptor:
    """Build a descriptor from HTTP response headers.

    ``headers`` must be a case-insensitive mapping (``httpx.Headers`` is).
    """

    mime_type = None
    charset = None
    content_type = headers.get(CONTENT_TYPE_HEADER)
    if content_type:
        parsed = HeaderValue.parse(content_type)
        if parsed.elements:
            mime_type = parsed.first_element_text() or None
            charset = parsed.element().parameter("charset")

    return ResourceDescriptor(
        stream=stream,
        identifier=identifier,
        charset=charset,
        size=_content_length(headers.get(CONTENT_LENGTH_HEADER)),
        time=_http_date(headers.get(LAST_MODIFIED_HEADER)),
        mime_type=mime_type,
        etag=headers.get(ETAG_HEADER),
    )


def _content_length(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        length = int(value.strip())
    except ValueError:
        return None
    return length if length >= 0 else None


def _http_date(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
