import contextlib
import io
import json
import os
import shutil
import tempfile
from unittest import TestCase

from rich.console import Console

from saucebrowsers import BrowserRecord, Catalog, LoadError
from saucebrowsers.cli import (main, make_rows, make_table, FAMILY_STYLE,
                               HEADERS)

from .sauce_listing import make_listing, IDS


def failing_fetcher():
    raise LoadError("could not fetch saucelabs browsers")


class CLITestCase(TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.shrinkwrap = os.path.join(self.tmpdir, "shrinkwrap.json")
        with open(self.shrinkwrap, "w") as f:
            json.dump(make_listing(), f)

    def tearDown(self):
        shutil.rmtree(self.tmpdir, True)

    def run_main(self, argv, fetcher=make_listing):
        out = io.StringIO()
        err = io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            status = main(argv, Catalog(fetcher),
                          Console(file=out, width=200, color_system=None))
        return status, out.getvalue(), err.getvalue()

    def test_list(self):
        status, out, _ = self.run_main(["list"])
        self.assertEqual(status, 0)
        self.assertIn("Available Sauce Browsers", out.splitlines()[0])
        self.assertIn("Webkit Android", out)
        for record_id in IDS:
            self.assertIn(record_id, out)

    def test_list_from_shrinkwrap(self):
        status, out, _ = self.run_main(["--shrinkwrap", self.shrinkwrap,
                                        "list"], failing_fetcher)
        self.assertEqual(status, 0)
        self.assertIn("chrome_42_Windows_2012_Desktop", out)

    def test_get(self):
        status, out, _ = self.run_main(
            ["get", "id=chrome_latest_Windows_2012_Desktop",
             "screenResolution=1024x768"])
        self.assertEqual(status, 0)
        self.assertEqual(json.loads(out), [{
            "browserName": "chrome",
            "version": "42",
            "platform": "Windows 2012",
            "screenResolution": "1024x768",
        }])

    def test_get_wrapped(self):
        status, out, _ = self.run_main(
            ["get", "--wrapped", "id=android_6_0_Android_Android_Emulator"])
        self.assertEqual(status, 0)
        results = json.loads(out)
        self.assertEqual(results[0]["desiredCapabilities"]["platform"],
                         "Linux")

    def test_get_no_match(self):
        status, out, _ = self.run_main(["get", "browserName=netscape"])
        self.assertEqual(status, 0)
        self.assertEqual(json.loads(out), [])

    def test_get_bad_pair(self):
        with self.assertRaises(SystemExit):
            self.run_main(["get", "browserName"])

    def test_add(self):
        extra = os.path.join(self.tmpdir, "extra.json")
        with open(extra, "w") as f:
            json.dump([{"id": "custom_1_Linux_Desktop", "family": "Other",
                        "desiredCapabilities": {"browserName": "custom"}}],
                      f)
        status, out, _ = self.run_main(["--add", extra, "get",
                                        "family=Other"])
        self.assertEqual(status, 0)
        self.assertEqual(json.loads(out), [{"browserName": "custom"}])

    def test_load_error(self):
        status, out, err = self.run_main(["list"], failing_fetcher)
        self.assertEqual(status, 1)
        self.assertEqual(out, "")
        self.assertIn("saucebrowsers: error: could not fetch", err)

    def test_shrinkwrap(self):
        path = os.path.join(self.tmpdir, "out.json")
        status, out, _ = self.run_main(["shrinkwrap", path])
        self.assertEqual(status, 0)
        self.assertEqual(out, "Wrote " + path + "\n")
        with open(path) as f:
            self.assertEqual(json.load(f), make_listing())


class TableTestCase(TestCase):

    def test_rows_grouped_by_family(self):
        catalog = Catalog(make_listing)
        catalog.initialize()
        rows = make_rows(catalog.records)
        families = [row[0] for row in rows if len(row) == 1]
        self.assertEqual(families, sorted(families))
        self.assertEqual(rows[0], ("Appium - Android", ))
        self.assertEqual(rows[1], (
            "1.", "Samsung_Galaxy_S4_Emulator_Android_4_4_Linux", "", "", "",
            "Samsung Galaxy S4 Emulator"))

    def test_make_table(self):
        catalog = Catalog(make_listing)
        catalog.initialize()
        table = make_table(catalog.records)
        self.assertEqual([column.header for column in table.columns],
                         list(HEADERS))
        self.assertEqual(table.title, "Available Sauce Browsers")
        self.assertEqual(table.row_count,
                         len(make_rows(catalog.records)))

    def test_family_rows_are_styled(self):
        table = make_table([BrowserRecord(
            "chrome_41_Linux_Desktop", "Chrome", None,
            {"browserName": "chrome", "version": "41",
             "platform": "Linux"})])
        self.assertEqual(table.row_count, 2)
        self.assertEqual(table.rows[0].style, FAMILY_STYLE)
        self.assertIsNone(table.rows[1].style)
