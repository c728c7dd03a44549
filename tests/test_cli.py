import contextlib
import io
import unittest

from resource_loader import AuthorizationFilter, RedirectionFilter
from resource_loader.cli import build_loader, main, parse_args

from .support import RESOURCES, XML_DIR


class CliTests(unittest.TestCase):
    def _run(self, *argv):
        stdout = io.StringIO()
        stderr = io.StringIO()
        with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
            code = main(list(argv))
        return code, stdout.getvalue(), stderr.getvalue()

    def test_describe_xml_resource(self):
        code, out, _ = self._run("test1", "--base", str(XML_DIR) + "/", "--format", "xml")
        self.assertEqual(code, 0)
        self.assertIn("root: test1", out)
        self.assertIn("mime-type: application/xml", out)

    def test_describe_json_resource(self):
        code, out, _ = self._run("json/sample.json", "--base", str(RESOURCES) + "/", "--format", "json")
        self.assertEqual(code, 0)
        self.assertIn('"name": "sample"', out)

    def test_raw_resource_reports_byte_count(self):
        code, out, _ = self._run((XML_DIR / "test2.xml").as_uri())
        self.assertEqual(code, 0)
        self.assertIn(f"bytes: {(XML_DIR / 'test2.xml').stat().st_size}", out)

    def test_missing_resource_exits_with_error(self):
        code, _, err = self._run("test9.xml", "--base", str(XML_DIR) + "/")
        self.assertEqual(code, 1)
        self.assertIn("Resource not found", err)

    def test_filters_registered_redirection_first(self):
        args = parse_args(
            [
                "a.xml",
                "--base", "http://h1/",
                "--auth", "h2", "X-Token", "secret",
                "--redirect", "h1", "*", "h2", "8080",
            ]
        )
        loader = build_loader(args)
        filters = loader.connection_filters
        self.assertIsInstance(filters[0], RedirectionFilter)
        self.assertIsNone(filters[0].from_port)
        self.assertEqual(filters[0].to_port, 8080)
        self.assertIsInstance(filters[1], AuthorizationFilter)


if __name__ == "__main__":
    unittest.main()
