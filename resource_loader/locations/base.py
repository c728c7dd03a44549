from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Iterable, List, Sequence, Tuple

from ..descriptor import ResourceDescriptor
from ..exceptions import IllegalReference
from ..urls import has_scheme

if TYPE_CHECKING:  # pragma: no cover
    from ..loader import ResourceLoader


class Location(ABC):
    """A resource identified by path segments and a directory flag.

    Locations are immutable. They hold a reference to the loader that created
    them, which supplies connection filters, the default extension and shared
    handles. Resolving a reference against a location always produces a
    location of the same kind, unless the reference is an absolute URL.
    """

    def __init__(self, segments: Iterable[str], is_directory: bool, loader: ResourceLoader) -> None:
        self._segments: Tuple[str, ...] = tuple(segments)
        self._is_directory = is_directory
        self._loader = loader
        if not is_directory and not self._segments:
            raise IllegalReference("A non-directory location needs at least one path segment")

    @property
    def segments(self) -> Tuple[str, ...]:
        return self._segments

    @property
    def is_directory(self) -> bool:
        return self._is_directory

    @property
    def loader(self) -> ResourceLoader:
        return self._loader

    @property
    def name(self) -> str:
        return self._segments[-1] if self._segments else ""

    @property
    @abstractmethod
    def url(self) -> str:
        """Canonical external URL of this location."""

    @abstractmethod
    def open(self) -> ResourceDescriptor:
        """Open the resource for reading."""

    @abstractmethod
    def _create(self, segments: Sequence[str], is_directory: bool) -> Location:
        """Build a location of the same kind with the given path."""

    def load(self) -> Any:
        return self._loader.load(self)

    def parent(self) -> Location:
        return self.resolve("")

    def resolve(self, reference: str) -> Location:
        """Resolve ``reference`` against this location.

        Resolving against a file resolves against its directory, so siblings
        are reached by name; ``..`` past the root and empty segments in the
        middle of the reference raise :class:`IllegalReference`.
        """

        if has_scheme(reference):
            return self._loader.resource(reference)
        if not reference:
            if self._is_directory:
                return self
            return self._create(self._segments[:-1], True)

        tokens = self._loader.add_extension(reference).split("/")
        if tokens[0] == "":
            # Leading slash - absolute path within the same root
            path: List[str] = []
            tokens = tokens[1:]
            if tokens == [""]:
                return self._create(path, True)
        else:
            path = list(self._segments)
            if not self._is_directory:
                path.pop()

        is_directory = True
        last = len(tokens) - 1
        for index, token in enumerate(tokens):
            if token == ".":
                is_directory = True
            elif token == "..":
                if not path:
                    raise IllegalReference(f'Illegal use of ".." in "{reference}"', reference=reference)
                path.pop()
                is_directory = True
            elif token == "":
                if index == last:
                    is_directory = True
                    break
                raise IllegalReference(f'Illegal use of "//" in "{reference}"', reference=reference)
            else:
                path.append(token)
                is_directory = False
        return self._create(path, is_directory)

    def _open_segments(self) -> Tuple[str, ...]:
        """Segments to open, with the loader's default extension applied to the name."""

        return self._segments[:-1] + (self._loader.add_extension(self._segments[-1]),)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        return (
            type(other) is type(self)
            and other._loader is self._loader  # type: ignore[attr-defined]
            and other.url == self.url  # type: ignore[attr-defined]
        )

    def __hash__(self) -> int:
        return hash((type(self), id(self._loader), self.url))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.url!r})"


def normalize_segments(elements: Iterable[str], identifier: str) -> List[str]:
    """Remove ``.`` and ``..`` from an absolute path split on separators."""

    result: List[str] = []
    for element in elements:
        if element == ".":
            continue
        if element == "..":
            if not result:
                raise IllegalReference(f'Illegal use of ".." in "{identifier}"', reference=identifier)
            result.pop()
        elif element == "":
            raise IllegalReference(f'Illegal empty path element in "{identifier}"', reference=identifier)
        else:
            result.append(element)
    return result


def split_path(path: str, separator: str = "/") -> Tuple[List[str], bool]:
    """Split an absolute path into raw elements and a trailing-separator flag."""

    elements = path.split(separator)
    if elements and elements[0] == "":
        elements = elements[1:]
    is_directory = bool(elements) and elements[-1] == ""
    if is_directory:
        elements = elements[:-1]
    return elements, is_directory
