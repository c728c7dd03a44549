"""Command line entry point to load a single resource and describe it."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from lxml import etree

from .constants import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV_VAR
from .descriptor import ResourceDescriptor
from .exceptions import LoaderError
from .loader import ResourceLoader
from .loaders import JsonLoader, XmlLoader

LOGGER = logging.getLogger("resource-loader.cli")


class RawLoader(ResourceLoader[bytes]):
    """Returns resource content unchanged."""

    def load_descriptor(self, descriptor: ResourceDescriptor) -> bytes:
        return descriptor.read()


LOADERS = {"xml": XmlLoader, "json": JsonLoader, "raw": RawLoader}


def _port(value: str) -> Optional[int]:
    return None if value in ("", "-", "*") else int(value)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Load a resource from a file, archive or URL")
    parser.add_argument("reference", help="Reference resolved against the base location")
    parser.add_argument("--base", help="Base URL or path (defaults to the current directory)")
    parser.add_argument("--format", choices=sorted(LOADERS), default="raw", help="How to parse the content")
    parser.add_argument(
        "--auth",
        nargs=3,
        action="append",
        default=[],
        metavar=("HOST", "HEADER", "VALUE"),
        help="Add a header to requests for hosts matching HOST (wildcards allowed)",
    )
    parser.add_argument(
        "--redirect",
        nargs=4,
        action="append",
        default=[],
        metavar=("FROM_HOST", "FROM_PORT", "TO_HOST", "TO_PORT"),
        help="Send requests for FROM_HOST to TO_HOST; use '*' for any or default port",
    )
    parser.add_argument(
        "--prefix-redirect",
        nargs=2,
        action="append",
        default=[],
        metavar=("FROM", "TO"),
        help="Rewrite URLs starting with FROM to start with TO",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL),
        help="Logging level",
    )
    return parser.parse_args(argv)


def build_loader(args: argparse.Namespace) -> ResourceLoader:
    loader = LOADERS[args.format](args.base)
    # Redirections first so that authorization headers apply to the redirected hosts.
    for from_host, from_port, to_host, to_port in args.redirect:
        loader.add_redirection_filter(from_host, _port(from_port), to_host, _port(to_port))
    for from_prefix, to_prefix in args.prefix_redirect:
        loader.add_prefix_redirection_filter(from_prefix, to_prefix)
    for host, header, value in args.auth:
        loader.add_authorization_filter(host, header, value)
    return loader


def describe(loader: ResourceLoader, reference: str) -> str:
    location = loader.resolve(reference)
    with loader.open(location) as descriptor:
        lines = [f"resource: {descriptor.identifier}"]
        for label, value in (
            ("mime-type", descriptor.mime_type),
            ("charset", descriptor.charset),
            ("size", descriptor.size),
            ("modified", descriptor.time.isoformat() if descriptor.time else None),
            ("etag", descriptor.etag),
        ):
            if value is not None:
                lines.append(f"{label}: {value}")
        content = loader.load_descriptor(descriptor)
    if isinstance(content, bytes):
        lines.append(f"bytes: {len(content)}")
    elif isinstance(content, etree._Element):
        lines.append(f"root: {content.tag}")
    else:
        lines.append(json.dumps(content, indent=2, sort_keys=True))
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())

    try:
        with build_loader(args) as loader:
            print(describe(loader, args.reference))
    except LoaderError as exc:
        LOGGER.error("Unable to load resource", extra={"reference": args.reference})
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
