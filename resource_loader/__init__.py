"""Load typed resources from files, archive entries and network URLs."""

from .descriptor import ResourceDescriptor
from .exceptions import (
    DirectoryNotLoadable,
    IllegalReference,
    LoaderError,
    ResourceAccessError,
    ResourceNotFound,
    ResourceVetoed,
)
from .filters import (
    AuthorizationFilter,
    ConnectionAttempt,
    ConnectionFilter,
    PrefixRedirectionFilter,
    RedirectionFilter,
    apply_filters,
)
from .headers import HeaderElement, HeaderValue
from .loader import ResourceLoader
from .loaders import JsonLoader, XmlLoader
from .locations import ArchiveLocation, FileLocation, Location, NetworkLocation
from .urls import WildcardPattern, has_scheme, same_url

__version__ = "1.0.0"

__all__ = [
    "ArchiveLocation",
    "AuthorizationFilter",
    "ConnectionAttempt",
    "ConnectionFilter",
    "DirectoryNotLoadable",
    "FileLocation",
    "HeaderElement",
    "HeaderValue",
    "IllegalReference",
    "JsonLoader",
    "LoaderError",
    "Location",
    "NetworkLocation",
    "PrefixRedirectionFilter",
    "RedirectionFilter",
    "ResourceAccessError",
    "ResourceDescriptor",
    "ResourceLoader",
    "ResourceNotFound",
    "ResourceVetoed",
    "WildcardPattern",
    "XmlLoader",
    "apply_filters",
    "has_scheme",
    "same_url",
]
