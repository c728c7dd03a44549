"""Connection filters applied to outbound network accesses.

A filter is any callable taking a :class:`ConnectionAttempt` and returning the
attempt to continue with (the same one, a modified copy or a different one) or
``None`` to veto the connection. Filters run in registration order, each one
seeing the attempt produced by the previous filter. A filter that depends on a
redirection (for example an authorization header for the redirected host) must
therefore be registered after the redirection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, Iterable, Optional, Union
from urllib.parse import urlsplit

import httpx

from .constants import DEFAULT_PORTS, NETWORK_SCHEMES
from .exceptions import ResourceVetoed
from .urls import WildcardPattern, scheme_of

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConnectionAttempt:
    """An outbound request that has not been sent yet."""

    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    method: str = "GET"

    @property
    def scheme(self) -> Optional[str]:
        return scheme_of(self.url)

    @property
    def is_network(self) -> bool:
        return self.scheme in NETWORK_SCHEMES

    @property
    def host(self) -> Optional[str]:
        return urlsplit(self.url).hostname

    @property
    def port(self) -> Optional[int]:
        return urlsplit(self.url).port

    @property
    def effective_port(self) -> Optional[int]:
        """The explicit port, or the scheme default when the URL leaves it out."""

        port = self.port
        return port if port is not None else DEFAULT_PORTS.get(self.scheme or "")

    def with_header(self, name: str, value: str) -> ConnectionAttempt:
        headers = {key: val for key, val in self.headers.items() if key.lower() != name.lower()}
        headers[name] = value
        return replace(self, headers=headers)

    def with_url(self, url: str) -> ConnectionAttempt:
        """Return a fresh attempt for ``url``; headers are not carried over."""

        return ConnectionAttempt(url=url, method=self.method)


ConnectionFilter = Callable[[ConnectionAttempt], Optional[ConnectionAttempt]]


def apply_filters(filters: Iterable[ConnectionFilter], attempt: ConnectionAttempt) -> ConnectionAttempt:
    """Run ``attempt`` through ``filters`` in order.

    Raises :class:`ResourceVetoed` naming the URL that entered the chain as soon as a filter
    returns ``None``; later filters are not called.
    """

    current = attempt
    for connection_filter in filters:
        result = connection_filter(current)
        if result is None:
            LOGGER.info(
                "Connection vetoed",
                extra={"url": attempt.url, "filter": repr(connection_filter)},
            )
            raise ResourceVetoed(attempt.url)
        current = result
    return current


class AuthorizationFilter:
    """Adds a request header to network connections whose host matches a pattern."""

    def __init__(self, host: Union[str, WildcardPattern], header_name: str, header_value: str) -> None:
        self.host = host if isinstance(host, WildcardPattern) else WildcardPattern(host)
        self.header_name = header_name
        self.header_value = header_value

    def __call__(self, attempt: ConnectionAttempt) -> ConnectionAttempt:
        if attempt.is_network and self.host.matches(attempt.host):
            return attempt.with_header(self.header_name, self.header_value)
        return attempt

    def __repr__(self) -> str:
        return f"AuthorizationFilter({self.host.pattern!r}, {self.header_name!r})"


class RedirectionFilter:
    """Sends connections for one host (and optionally one port) to another host.

    ``from_port=None`` matches any port; a default port such as 80 also matches
    URLs that leave it implicit. ``to_port=None`` leaves the port implicit. The
    redirected attempt keeps scheme, path and query but starts with no headers.
    """

    def __init__(
        self,
        from_host: str,
        from_port: Optional[int] = None,
        to_host: str = "",
        to_port: Optional[int] = None,
    ) -> None:
        if not to_host:
            raise ValueError("to_host is required")
        self.from_host = WildcardPattern(from_host)
        self.from_port = from_port
        self.to_host = to_host
        self.to_port = to_port

    def __call__(self, attempt: ConnectionAttempt) -> ConnectionAttempt:
        if not attempt.is_network or not self.from_host.matches(attempt.host):
            return attempt
        if self.from_port is not None and attempt.effective_port != self.from_port:
            return attempt
        target = str(httpx.URL(attempt.url).copy_with(host=self.to_host, port=self.to_port))
        LOGGER.info("Redirecting connection", extra={"from": attempt.url, "to": target})
        return attempt.with_url(target)

    def __repr__(self) -> str:
        return (
            f"RedirectionFilter({self.from_host.pattern!r}, {self.from_port!r}, "
            f"{self.to_host!r}, {self.to_port!r})"
        )


class PrefixRedirectionFilter:
    """Rewrites connection URLs that start with a given prefix.

    The replacement may point at a different kind of resource altogether, for
    example a ``file:`` URL holding a local copy.
    """

    def __init__(self, from_prefix: str, to_prefix: str) -> None:
        self.from_prefix = from_prefix
        self.to_prefix = to_prefix

    def __call__(self, attempt: ConnectionAttempt) -> ConnectionAttempt:
        if not attempt.url.startswith(self.from_prefix):
            return attempt
        target = self.to_prefix + attempt.url[len(self.from_prefix):]
        LOGGER.info("Redirecting connection", extra={"from": attempt.url, "to": target})
        return attempt.with_url(target)

    def __repr__(self) -> str:
        return f"PrefixRedirectionFilter({self.from_prefix!r}, {self.to_prefix!r})"
