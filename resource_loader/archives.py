from __future__ import annotations

import logging
import threading
import zipfile
from typing import Callable, Dict, Optional

from .constants import FILE_SCHEME
from .exceptions import ResourceAccessError, ResourceNotFound
from .urls import file_url_to_path, has_scheme, scheme_of

LOGGER = logging.getLogger(__name__)

ArchiveFactory = Callable[[str], zipfile.ZipFile]


def open_archive(container: str) -> zipfile.ZipFile:
    """Open the archive identified by ``container`` (a ``file:`` URL or a native path)."""

    if has_scheme(container):
        if scheme_of(container) != FILE_SCHEME:
            raise ResourceAccessError(container, f"Unsupported archive container '{container}'")
        path = file_url_to_path(container)
    else:
        path = container
    try:
        return zipfile.ZipFile(path)
    except FileNotFoundError as exc:
        raise ResourceNotFound(container) from exc
    except (OSError, zipfile.BadZipFile) as exc:
        raise ResourceAccessError(container, f"Error opening archive {container}") from exc


class ArchiveCache:
    """Holds one open handle per archive container.

    Handles are created on first use and kept until :meth:`close`. Population
    is single-flight: concurrent first lookups of the same container create
    exactly one handle.
    """

    def __init__(self, factory: Optional[ArchiveFactory] = None) -> None:
        self._factory: ArchiveFactory = factory or open_archive
        self._handles: Dict[str, zipfile.ZipFile] = {}
        self._lock = threading.Lock()

    def get(self, container: str) -> zipfile.ZipFile:
        handle = self._handles.get(container)
        if handle is not None:
            return handle
        with self._lock:
            # Double-check after lock acquired
            handle = self._handles.get(container)
            if handle is None:
                handle = self._factory(container)
                self._handles[container] = handle
                LOGGER.debug("Opened archive container", extra={"container": container})
            return handle

    def __contains__(self, container: str) -> bool:
        return container in self._handles

    def __len__(self) -> int:
        return len(self._handles)

    def close(self) -> None:
        with self._lock:
            handles = list(self._handles.values())
            self._handles.clear()
        for handle in handles:
            handle.close()
