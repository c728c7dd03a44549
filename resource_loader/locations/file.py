from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, List, Sequence, Union
from urllib.parse import quote

from ..descriptor import ResourceDescriptor, timestamp_from_epoch
from ..exceptions import DirectoryNotLoadable, ResourceAccessError, ResourceNotFound
from ..urls import file_url_to_path
from .base import Location, normalize_segments, split_path

if TYPE_CHECKING:  # pragma: no cover
    from ..loader import ResourceLoader

LOGGER = logging.getLogger(__name__)


class FileLocation(Location):
    """A resource on the local filesystem."""

    @classmethod
    def from_path(cls, path: Union[str, os.PathLike], loader: ResourceLoader) -> FileLocation:
        raw = os.fspath(path)
        absolute = os.path.abspath(raw)
        is_directory = os.path.isdir(absolute) or raw.endswith(("/", os.sep))
        return cls(_native_segments(absolute), is_directory, loader)

    @classmethod
    def from_url(cls, url: str, loader: ResourceLoader) -> FileLocation:
        path = file_url_to_path(url)
        return cls(_native_segments(path), url.endswith("/"), loader)

    @property
    def path(self) -> str:
        """Native absolute path of this location."""

        return _join_native(self.segments)

    @property
    def url(self) -> str:
        path = "/" + "/".join(self.segments)
        if self.is_directory and self.segments:
            path += "/"
        return "file://" + quote(path)

    def open(self) -> ResourceDescriptor:
        if self.is_directory:
            raise DirectoryNotLoadable(str(self))
        path = _join_native(self._open_segments())
        if not os.path.isfile(path):
            raise ResourceNotFound(str(self))
        try:
            stat = os.stat(path)
            stream = open(path, "rb")
        except FileNotFoundError as exc:
            raise ResourceNotFound(str(self)) from exc
        except OSError as exc:
            raise ResourceAccessError(str(self)) from exc
        LOGGER.debug("Opened file resource", extra={"path": path, "size": stat.st_size})
        return ResourceDescriptor(
            stream=stream,
            identifier=str(self),
            size=stat.st_size,
            time=timestamp_from_epoch(stat.st_mtime),
            mime_type=self.loader.default_mime_type,
        )

    def _create(self, segments: Sequence[str], is_directory: bool) -> FileLocation:
        return FileLocation(segments, is_directory, self.loader)

    def __str__(self) -> str:
        """Display form: relative to the working directory when it lies beneath it."""

        current = _native_segments(os.getcwd())
        count = len(current)
        if current and self.segments[:count] == tuple(current):
            if count == len(self.segments):
                return "."
            text = os.sep.join(self.segments[count:])
        else:
            text = _join_native(self.segments)
        if self.is_directory and self.segments and not text.endswith(os.sep):
            text += os.sep
        return text


def _native_segments(path: str) -> List[str]:
    elements, _ = split_path(path, os.sep)
    if os.altsep:
        elements = [part for element in elements for part in element.split(os.altsep)]
    return normalize_segments([element for element in elements if element], path)


def _join_native(segments: Sequence[str]) -> str:
    if os.sep == "/":
        return "/" + "/".join(segments)
    # Windows: the first segment is the drive
    return os.sep.join(segments) + (os.sep if len(segments) == 1 else "")

