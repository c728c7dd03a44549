from __future__ import annotations

import json
import logging
from typing import Any

from lxml import etree

from .descriptor import ResourceDescriptor
from .exceptions import LoaderError
from .loader import ResourceLoader

LOGGER = logging.getLogger(__name__)


class XmlLoader(ResourceLoader[etree._Element]):
    """Loads XML documents and returns their root element."""

    default_extension = "xml"
    default_mime_type = "application/xml"

    def load_descriptor(self, descriptor: ResourceDescriptor) -> etree._Element:
        parser = _xml_parser(descriptor)
        try:
            tree = etree.parse(descriptor.stream, parser, base_url=descriptor.identifier)
        except etree.XMLSyntaxError as exc:
            raise LoaderError(
                f"Unable to parse XML from '{descriptor.identifier}'.",
                identifier=descriptor.identifier,
            ) from exc
        return tree.getroot()


def _xml_parser(descriptor: ResourceDescriptor) -> etree.XMLParser:
    # Unknown declared charsets fall back to detection from the document itself.
    try:
        return etree.XMLParser(encoding=descriptor.charset, resolve_entities=False)
    except LookupError:
        LOGGER.warning(
            "Ignoring unknown charset",
            extra={"identifier": descriptor.identifier, "charset": descriptor.charset},
        )
        return etree.XMLParser(resolve_entities=False)


class JsonLoader(ResourceLoader[Any]):
    """Loads JSON documents."""

    default_extension = "json"
    default_mime_type = "application/json"

    def load_descriptor(self, descriptor: ResourceDescriptor) -> Any:
        try:
            return json.load(descriptor.get_reader("utf-8"))
        except ValueError as exc:
            raise LoaderError(
                f"Unable to parse JSON from '{descriptor.identifier}'.",
                identifier=descriptor.identifier,
            ) from exc
