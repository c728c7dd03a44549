from __future__ import annotations

from typing import Optional


class LoaderError(RuntimeError):
    """Base class for resource loading errors."""

    def __init__(self, message: str, *, identifier: Optional[str] = None) -> None:
        super().__init__(message)
        self.identifier = identifier


class IllegalReference(LoaderError, ValueError):
    """Raised when a relative reference cannot be resolved."""

    def __init__(self, message: str, *, reference: Optional[str] = None) -> None:
        super().__init__(message, identifier=reference)


class ResourceNotFound(LoaderError):
    """Raised when the file, archive entry or remote resource does not exist."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Resource not found - {identifier}", identifier=identifier)


class ResourceVetoed(LoaderError):
    """Raised when a connection filter rejects an outbound connection."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Connection vetoed - {identifier}", identifier=identifier)


class DirectoryNotLoadable(LoaderError):
    """Raised when a directory location is opened."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Can't load directory resource {identifier}", identifier=identifier)


class ResourceAccessError(LoaderError):
    """Raised when a lower-level I/O failure prevents a resource from being opened."""

    def __init__(
        self,
        identifier: str,
        message: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message or f"Error opening resource {identifier}", identifier=identifier)
        self.status_code = status_code
