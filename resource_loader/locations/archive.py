from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Sequence

from ..constants import ARCHIVE_SEPARATOR
from ..descriptor import ResourceDescriptor
from ..exceptions import DirectoryNotLoadable, LoaderError, ResourceAccessError, ResourceNotFound
from ..urls import split_archive_url
from .base import Location, normalize_segments, split_path

if TYPE_CHECKING:  # pragma: no cover
    from ..loader import ResourceLoader

LOGGER = logging.getLogger(__name__)


class ArchiveLocation(Location):
    """An entry inside a zip (or jar) archive, addressed as ``jar:{container}!/{entry}``."""

    def __init__(
        self,
        container: str,
        segments: Sequence[str],
        is_directory: bool,
        loader: ResourceLoader,
        *,
        scheme: str = "jar",
    ) -> None:
        super().__init__(segments, is_directory, loader)
        self._container = container
        self._scheme = scheme

    @classmethod
    def from_url(cls, url: str, loader: ResourceLoader) -> ArchiveLocation:
        try:
            scheme, container, entry = split_archive_url(url)
        except ValueError as exc:
            raise LoaderError(str(exc), identifier=url) from exc
        elements, is_directory = split_path(entry)
        if not elements:
            is_directory = True
        segments = normalize_segments(elements, url)
        return cls(container, segments, is_directory, loader, scheme=scheme)

    @property
    def container(self) -> str:
        return self._container

    @property
    def entry_name(self) -> str:
        return "/".join(self.segments)

    @property
    def url(self) -> str:
        entry = self.entry_name
        if self.is_directory and self.segments:
            entry += "/"
        return f"{self._scheme}:{self._container}{ARCHIVE_SEPARATOR}{entry}"

    def open(self) -> ResourceDescriptor:
        if self.is_directory:
            raise DirectoryNotLoadable(self.url)
        entry_name = "/".join(self._open_segments())
        try:
            try:
                archive = self.loader.archive_cache.get(self._container)
            except ResourceNotFound as exc:
                raise ResourceNotFound(self.url) from exc
            try:
                info = archive.getinfo(entry_name)
            except KeyError as exc:
                raise ResourceNotFound(self.url) from exc
            if info.is_dir():
                raise ResourceNotFound(self.url)
            stream = archive.open(info)
        except LoaderError:
            raise
        except Exception as exc:
            raise ResourceAccessError(self.url, f"Error opening archive resource {self.url}") from exc
        LOGGER.debug(
            "Opened archive entry",
            extra={"container": self._container, "entry": entry_name, "size": info.file_size},
        )
        return ResourceDescriptor(
            stream=stream,
            identifier=self.url,
            size=info.file_size,
            time=datetime(*info.date_time, tzinfo=timezone.utc),
            mime_type=self.loader.default_mime_type,
        )

    def _create(self, segments: Sequence[str], is_directory: bool) -> ArchiveLocation:
        return ArchiveLocation(self._container, segments, is_directory, self.loader, scheme=self._scheme)

    def __str__(self) -> str:
        return self.url
