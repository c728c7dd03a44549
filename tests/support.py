import zipfile
from pathlib import Path
from typing import Dict

import httpx

from resource_loader import ResourceDescriptor, ResourceLoader

RESOURCES = Path(__file__).resolve().parent / "resources"
XML_DIR = RESOURCES / "xml"

JAR_FILE_1 = '<?xml version="1.0" encoding="UTF-8"?>\n<jar-test-1>Hello jar</jar-test-1>\n'
JAR_FILE_2 = '<?xml version="1.0" encoding="UTF-8"?>\n<jar-test-2>Kia ora</jar-test-2>\n'


class TextLoader(ResourceLoader[str]):
    """Minimal loader returning decoded text."""

    def load_descriptor(self, descriptor: ResourceDescriptor) -> str:
        return descriptor.get_reader().read()


class XmlTextLoader(TextLoader):
    default_extension = "xml"


def write_archive(path: Path, entries: Dict[str, str]) -> Path:
    with zipfile.ZipFile(path, "w") as archive:
        for name, content in entries.items():
            archive.writestr(name, content)
    return path


def mock_client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler), follow_redirects=True)
