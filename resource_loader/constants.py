"""Configuration constants shared across the resource loader."""

from __future__ import annotations

BASE_ENV_VAR = "RESOURCE_LOADER_BASE"
LOG_LEVEL_ENV_VAR = "RESOURCE_LOADER_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

USER_AGENT = "resource-loader/1.0"
FOLLOW_REDIRECTS = True

FILE_SCHEME = "file"
ARCHIVE_SCHEMES = frozenset({"jar", "zip"})
NETWORK_SCHEMES = frozenset({"http", "https"})
ARCHIVE_SEPARATOR = "!/"

CONTENT_TYPE_HEADER = "Content-Type"
CONTENT_LENGTH_HEADER = "Content-Length"
LAST_MODIFIED_HEADER = "Last-Modified"
ETAG_HEADER = "ETag"

LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1", "::1", "[::1]"})
DEFAULT_PORTS = {"http": 80, "https": 443}
