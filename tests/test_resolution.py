import os
import unittest

from resource_loader import (
    ArchiveLocation,
    FileLocation,
    IllegalReference,
    NetworkLocation,
)

from .support import TextLoader, XmlTextLoader


class NetworkResolutionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.loader = TextLoader("http://example.com/a/b/")
        self.directory = self.loader.base

    def test_base_is_directory(self):
        self.assertIsInstance(self.directory, NetworkLocation)
        self.assertTrue(self.directory.is_directory)
        self.assertEqual(self.directory.segments, ("a", "b"))

    def test_empty_reference_on_directory_is_identity(self):
        self.assertIs(self.directory.resolve(""), self.directory)

    def test_empty_reference_on_file_gives_parent(self):
        file_location = self.directory.resolve("c.txt")
        parent = file_location.resolve("")
        self.assertTrue(parent.is_directory)
        self.assertEqual(parent.url, "http://example.com/a/b/")
        self.assertEqual(parent, self.directory)

    def test_dot_segment(self):
        resolved = self.directory.resolve("./c")
        self.assertEqual(resolved.segments, ("a", "b", "c"))
        self.assertFalse(resolved.is_directory)

    def test_dot_dot_segment(self):
        resolved = self.directory.resolve("../x")
        self.assertEqual(resolved.segments, ("a", "x"))
        self.assertEqual(resolved.url, "http://example.com/a/x")

    def test_trailing_dot_and_dot_dot_give_directories(self):
        self.assertTrue(self.directory.resolve("c/.").is_directory)
        up = self.directory.resolve("c/..")
        self.assertTrue(up.is_directory)
        self.assertEqual(up.segments, ("a", "b"))

    def test_root_overrun_is_rejected(self):
        root = self.loader.resource("http://example.com/")
        self.assertEqual(root.segments, ())
        with self.assertRaises(IllegalReference):
            root.resolve("../x")

    def test_overrun_after_climbing_is_rejected(self):
        with self.assertRaises(IllegalReference):
            self.directory.resolve("../../../x")

    def test_empty_segment_mid_reference_is_rejected(self):
        with self.assertRaises(IllegalReference):
            self.directory.resolve("x//y")

    def test_trailing_slash_gives_directory(self):
        resolved = self.directory.resolve("sub/")
        self.assertTrue(resolved.is_directory)
        self.assertEqual(resolved.url, "http://example.com/a/b/sub/")

    def test_absolute_path_reference(self):
        resolved = self.directory.resolve("/x/y.txt")
        self.assertEqual(resolved.url, "http://example.com/x/y.txt")
        root = self.directory.resolve("/")
        self.assertTrue(root.is_directory)
        self.assertEqual(root.url, "http://example.com/")

    def test_sibling_and_child_resolve_to_same_location(self):
        test1 = self.directory.resolve("test1.xml")
        self.assertEqual(test1.resolve("test2.xml"), self.directory.resolve("test2.xml"))
        self.assertEqual(test1.resolve("test2.xml").url, "http://example.com/a/b/test2.xml")

    def test_absolute_url_switches_variant(self):
        resolved = self.directory.resolve("https://other.example.org:8443/z")
        self.assertIsInstance(resolved, NetworkLocation)
        self.assertEqual(resolved.url, "https://other.example.org:8443/z")
        self.assertIsInstance(self.directory.resolve("file:///tmp/a.xml"), FileLocation)

    def test_authority_is_normalised(self):
        location = self.loader.resource("HTTP://Example.COM:80/a")
        self.assertEqual(location.url, "http://example.com/a")
        self.assertEqual(location, self.loader.resource("http://example.com/a"))

    def test_locations_of_different_loaders_differ(self):
        other = TextLoader("http://example.com/a/b/")
        self.assertEqual(other.base.url, self.directory.url)
        self.assertNotEqual(other.base, self.directory)


class DefaultExtensionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.directory = XmlTextLoader("http://example.com/xml/").base

    def test_extension_added_when_missing(self):
        self.assertEqual(self.directory.resolve("test2").url, "http://example.com/xml/test2.xml")

    def test_existing_extension_kept(self):
        self.assertEqual(self.directory.resolve("test2.json").url, "http://example.com/xml/test2.json")

    def test_directories_untouched(self):
        self.assertEqual(self.directory.resolve("sub/").url, "http://example.com/xml/sub/")
        self.assertEqual(self.directory.resolve("..").url, "http://example.com/")


class ArchiveResolutionTests(unittest.TestCase):
    container = "file:///tmp/test.zip"

    def setUp(self) -> None:
        self.loader = TextLoader("http://example.com/")
        self.directory = self.loader.resource(f"jar:{self.container}!/xml/")

    def test_render(self):
        self.assertIsInstance(self.directory, ArchiveLocation)
        self.assertEqual(str(self.directory), f"jar:{self.container}!/xml/")
        self.assertEqual(self.directory.container, self.container)

    def test_round_trip(self):
        for reference in ("a.xml", "sub/b.xml", "sub/deeper/c.xml"):
            self.assertEqual(
                str(self.directory.resolve(reference)),
                f"jar:{self.container}!/xml/{reference}",
            )

    def test_sibling_of_entry(self):
        entry = self.loader.resource(f"jar:{self.container}!/xml/jar-file-1.xml")
        self.assertFalse(entry.is_directory)
        sibling = entry.resolve("jar-file-2.xml")
        self.assertEqual(str(sibling), f"jar:{self.container}!/xml/jar-file-2.xml")

    def test_archive_root(self):
        root = self.loader.resource(f"jar:{self.container}!/")
        self.assertTrue(root.is_directory)
        self.assertEqual(str(root), f"jar:{self.container}!/")
        sub = root.resolve("xml/")
        self.assertEqual(sub, self.directory)
        with self.assertRaises(IllegalReference):
            root.resolve("..")

    def test_zip_scheme_is_preserved(self):
        location = self.loader.resource(f"zip:{self.container}!/a/b.txt")
        self.assertEqual(location.resolve("c.txt").url, f"zip:{self.container}!/a/c.txt")


class FileResolutionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.loader = TextLoader(os.path.abspath(os.sep))

    def test_round_trip(self):
        directory = FileLocation(("data", "xml"), True, self.loader)
        resolved = directory.resolve("sub/test1.xml")
        self.assertEqual(resolved.segments, ("data", "xml", "sub", "test1.xml"))
        self.assertEqual(resolved.path, os.path.join(directory.path, "sub", "test1.xml"))

    def test_url_form(self):
        location = FileLocation(("data", "my file.xml"), False, self.loader)
        self.assertEqual(location.url, "file:///data/my%20file.xml")
        self.assertEqual(FileLocation(("data",), True, self.loader).url, "file:///data/")

    def test_from_url(self):
        location = self.loader.resource("file:///data/./xml/../test1.xml")
        self.assertEqual(location.segments, ("data", "test1.xml"))
        self.assertFalse(location.is_directory)

    def test_non_directory_requires_segment(self):
        with self.assertRaises(IllegalReference):
            FileLocation((), False, self.loader)


if __name__ == "__main__":
    unittest.main()
