from __future__ import annotations

import io
import logging
from typing import TYPE_CHECKING, Iterator, Optional, Sequence
from urllib.parse import urlsplit

import httpx

from ..constants import DEFAULT_PORTS, NETWORK_SCHEMES
from ..descriptor import ResourceDescriptor, descriptor_from_headers
from ..exceptions import DirectoryNotLoadable, LoaderError, ResourceAccessError, ResourceNotFound
from ..filters import ConnectionAttempt, apply_filters
from .base import Location, normalize_segments, split_path

if TYPE_CHECKING:  # pragma: no cover
    from ..loader import ResourceLoader

LOGGER = logging.getLogger(__name__)


class NetworkLocation(Location):
    """An HTTP or HTTPS resource.

    Every open runs through the loader's connection filters before a request is
    sent. A filter may redirect the access to a non-network URL, in which case
    the rewritten URL is opened as a local resource instead; a missing local
    resource is still reported under this location's URL.
    """

    def __init__(
        self,
        authority: str,
        segments: Sequence[str],
        is_directory: bool,
        loader: ResourceLoader,
    ) -> None:
        super().__init__(segments, is_directory, loader)
        self._authority = authority

    @classmethod
    def from_url(cls, url: str, loader: ResourceLoader) -> NetworkLocation:
        parts = urlsplit(url)
        scheme = parts.scheme.lower()
        if scheme not in NETWORK_SCHEMES or not parts.hostname:
            raise LoaderError(f"Not a network URL '{url}'", identifier=url)
        authority = f"{scheme}://{_host_text(parts.hostname)}"
        if parts.port is not None and parts.port != DEFAULT_PORTS.get(scheme):
            authority += f":{parts.port}"
        elements, is_directory = split_path(parts.path)
        if not elements:
            is_directory = True
        return cls(authority, normalize_segments(elements, url), is_directory, loader)

    @property
    def authority(self) -> str:
        return self._authority

    @property
    def url(self) -> str:
        return self._render(self.segments)

    def _render(self, segments: Sequence[str]) -> str:
        path = "/" + "/".join(segments)
        if self.is_directory and segments:
            path += "/"
        return self._authority + path

    def open(self) -> ResourceDescriptor:
        if self.is_directory:
            raise DirectoryNotLoadable(self.url)
        attempt = apply_filters(
            self.loader.connection_filters,
            ConnectionAttempt(url=self._render(self._open_segments())),
        )
        if not attempt.is_network:
            LOGGER.debug("Opening redirected resource", extra={"url": self.url, "target": attempt.url})
            try:
                return self.loader.resource(attempt.url).open()
            except ResourceNotFound as exc:
                raise ResourceNotFound(self.url) from exc
        return self._send(attempt)

    def _send(self, attempt: ConnectionAttempt) -> ResourceDescriptor:
        client = self.loader.http_client
        try:
            request = client.build_request(attempt.method, attempt.url, headers=attempt.headers)
            response = client.send(request, stream=True)
        except httpx.HTTPError as exc:
            raise ResourceAccessError(self.url) from exc

        try:
            if response.status_code == httpx.codes.NOT_FOUND:
                raise ResourceNotFound(self.url)
            if not response.is_success:
                raise ResourceAccessError(
                    self.url,
                    f"Error status - {response.status_code} - {self.url}",
                    status_code=response.status_code,
                )
            LOGGER.debug(
                "Opened network resource",
                extra={"url": self.url, "target": attempt.url, "status": response.status_code},
            )
            stream = io.BufferedReader(ResponseStream(response))
            return descriptor_from_headers(stream, self.url, response.headers)
        except BaseException:
            response.close()
            raise

    def _create(self, segments: Sequence[str], is_directory: bool) -> NetworkLocation:
        return NetworkLocation(self._authority, segments, is_directory, self.loader)

    def __str__(self) -> str:
        return self.url


class ResponseStream(io.RawIOBase):
    """Raw binary stream over the body of a streamed ``httpx.Response``."""

    def __init__(self, response: httpx.Response) -> None:
        self._response = response
        self._chunks: Iterator[bytes] = response.iter_bytes()
        self._pending = b""

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        while not self._pending:
            chunk = self._next_chunk()
            if chunk is None:
                return 0
            self._pending = chunk
        count = min(len(buffer), len(self._pending))
        buffer[:count] = self._pending[:count]
        self._pending = self._pending[count:]
        return count

    def _next_chunk(self) -> Optional[bytes]:
        try:
            return next(self._chunks)
        except StopIteration:
            return None
        except httpx.HTTPError as exc:
            raise OSError(f"Error reading {self._response.url}") from exc

    def close(self) -> None:
        if not self.closed:
            self._response.close()
        super().close()


def _host_text(hostname: str) -> str:
    return f"[{hostname}]" if ":" in hostname else hostname
