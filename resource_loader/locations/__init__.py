from .base import Location
from .file import FileLocation
from .archive import ArchiveLocation
from .network import NetworkLocation

__all__ = [
    "Location",
    "FileLocation",
    "ArchiveLocation",
    "NetworkLocation",
]
