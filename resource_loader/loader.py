"""The resource loader façade.

A :class:`ResourceLoader` owns a base location, the ordered connection
filters and the shared handles (HTTP client, archive containers) used by the
locations it creates. Subclasses supply :meth:`ResourceLoader.load_descriptor`
to turn an opened resource into a domain object::

    class TextLoader(ResourceLoader[str]):
        default_extension = "txt"

        def load_descriptor(self, descriptor):
            return descriptor.get_reader().read()

    loader = TextLoader("https://example.com/docs/")
    loader.add_authorization_filter("*.example.com", "Authorization", "Bearer abc")
    text = loader.load("intro")          # https://example.com/docs/intro.txt

Filters are read on every network open; register them before loading starts.
Registering filters while other threads are loading is not supported.
"""

from __future__ import annotations

import logging
import os
import threading
import zipfile
from abc import ABC, abstractmethod
from importlib import resources
from pathlib import Path
from typing import Generic, List, Optional, Sequence, TypeVar, Union

import httpx

from .archives import ArchiveCache, ArchiveFactory
from .constants import (
    ARCHIVE_SCHEMES,
    BASE_ENV_VAR,
    FILE_SCHEME,
    FOLLOW_REDIRECTS,
    NETWORK_SCHEMES,
    USER_AGENT,
)
from .descriptor import ResourceDescriptor
from .exceptions import LoaderError
from .filters import AuthorizationFilter, ConnectionFilter, PrefixRedirectionFilter, RedirectionFilter
from .locations import ArchiveLocation, FileLocation, Location, NetworkLocation
from .urls import WildcardPattern, scheme_of

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

Target = Union[str, "os.PathLike[str]", Location]


class ResourceLoader(ABC, Generic[T]):
    """Loads typed resources from files, archive entries and network URLs."""

    default_extension: Optional[str] = None
    default_mime_type: Optional[str] = None

    def __init__(
        self,
        base: Optional[Target] = None,
        *,
        http_client: Optional[httpx.Client] = None,
        archive_factory: Optional[ArchiveFactory] = None,
    ) -> None:
        self._connection_filters: List[ConnectionFilter] = []
        self._http_client = http_client
        self._owns_http_client = http_client is None
        self._http_client_lock = threading.Lock()
        self.archive_cache = ArchiveCache(archive_factory)
        if base is None:
            base = os.environ.get(BASE_ENV_VAR) or os.getcwd()
        self.base = self.resource(base)

    @abstractmethod
    def load_descriptor(self, descriptor: ResourceDescriptor) -> T:
        """Read the opened resource and return its domain representation."""

    # --- Locating -------------------------------------------------------------------------

    def resource(self, target: Target) -> Location:
        """Return the location for an absolute URL, a native path or a path object."""

        if isinstance(target, Location):
            return target
        if not isinstance(target, str):
            return FileLocation.from_path(target, self)
        scheme = scheme_of(target)
        if scheme is None:
            return FileLocation.from_path(target, self)
        if scheme == FILE_SCHEME:
            return FileLocation.from_url(target, self)
        if scheme in ARCHIVE_SCHEMES:
            return ArchiveLocation.from_url(target, self)
        if scheme in NETWORK_SCHEMES:
            return NetworkLocation.from_url(target, self)
        raise LoaderError(f"Unsupported URL scheme '{scheme}' in '{target}'", identifier=target)

    def resolve(self, reference: str) -> Location:
        return self.base.resolve(reference)

    def bundled_resource(self, package: str, name: str) -> Optional[Location]:
        """Return the location of ``name`` shipped inside ``package``, or None if absent.

        Packages imported from a directory give a file location; packages
        imported from a zip archive give an archive location.
        """

        target = resources.files(package).joinpath(name)
        if not (target.is_file() or target.is_dir()):
            return None
        if isinstance(target, zipfile.Path):
            container = Path(target.root.filename).absolute().as_uri()
            return self.resource(f"jar:{container}!/{target.at}")
        if isinstance(target, Path):
            return self.resource(target)
        raise LoaderError(f"Unsupported resource container for package '{package}'", identifier=name)

    def add_extension(self, name: str) -> str:
        """Append the default extension when the last path element has none."""

        if not self.default_extension:
            return name
        last = name.rsplit("/", 1)[-1]
        if not last or last in (".", "..") or "." in last:
            return name
        return f"{name}.{self.default_extension}"

    # --- Loading --------------------------------------------------------------------------

    def load(self, target: Target) -> T:
        """Load a resource; strings are resolved against the base location."""

        if isinstance(target, str):
            location = self.base.resolve(target)
        else:
            location = self.resource(target)
        LOGGER.debug("Loading resource", extra={"resource": str(location)})
        with self.open(location) as descriptor:
            return self.load_descriptor(descriptor)

    def open(self, location: Location) -> ResourceDescriptor:
        return location.open()

    # --- Connection filters ---------------------------------------------------------------

    @property
    def connection_filters(self) -> Sequence[ConnectionFilter]:
        return tuple(self._connection_filters)

    def add_connection_filter(self, connection_filter: ConnectionFilter) -> None:
        self._connection_filters.append(connection_filter)

    def add_authorization_filter(
        self,
        host: Union[str, WildcardPattern],
        header_name: str,
        header_value: str,
    ) -> None:
        self.add_connection_filter(AuthorizationFilter(host, header_name, header_value))

    def add_redirection_filter(
        self,
        from_host: str,
        from_port: Optional[int] = None,
        to_host: str = "",
        to_port: Optional[int] = None,
    ) -> None:
        self.add_connection_filter(RedirectionFilter(from_host, from_port, to_host, to_port))

    def add_prefix_redirection_filter(self, from_prefix: str, to_prefix: str) -> None:
        self.add_connection_filter(PrefixRedirectionFilter(from_prefix, to_prefix))

    # --- Shared handles -------------------------------------------------------------------

    @property
    def http_client(self) -> httpx.Client:
        if self._http_client is not None:
            return self._http_client
        with self._http_client_lock:
            if self._http_client is None:
                self._http_client = httpx.Client(
                    follow_redirects=FOLLOW_REDIRECTS,
                    headers={"User-Agent": USER_AGENT},
                )
                LOGGER.debug("HTTP client initialized")
            return self._http_client

    def close(self) -> None:
        """Close the HTTP client (when created here) and every cached archive."""

        if self._owns_http_client and self._http_client is not None:
            self._http_client.close()
            self._http_client = None
        self.archive_cache.close()

    def __enter__(self) -> ResourceLoader[T]:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
