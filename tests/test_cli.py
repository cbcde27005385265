import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest.mock import patch

from airport_finder.airports import AirportRecord, load_airports
from airport_finder.cli import main

REFERENCE = (
    "name,abbreviation,lat,long,id\n"
    "John F Kennedy,JFK,40.64,-73.78,0\n"
    "Los Angeles,LAX,33.94,-118.41,1\n"
)


class TestCli(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.tmp = Path(self._tmp.name)
        self.reference = self.tmp / "airports.csv"
        self.reference.write_text(REFERENCE)
        env = patch.dict(os.environ, {"AIRPORT_ALLOWED_DIRS": str(self.tmp)})
        env.start()
        self.addCleanup(env.stop)
        os.environ.pop("AIRPORT_REFERENCE_PATH", None)
        os.environ.pop("AIRPORT_FINDER", None)

    def run_cli(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            status = main(list(argv))
        return status, out.getvalue()

    def test_lookup(self):
        status, out = self.run_cli("--reference", str(self.reference), "lookup", "34.05", "-118.24")
        self.assertEqual(status, 0)
        self.assertIn("\t1\tLAX\tLos Angeles", out)

    def test_lookup_reference_from_env(self):
        with patch.dict(os.environ, {"AIRPORT_REFERENCE_PATH": str(self.reference)}):
            status, out = self.run_cli("lookup", "40.64", "-73.78")
        self.assertEqual(status, 0)
        self.assertIn("JFK", out)

    def test_hash_lookup_without_exact_match(self):
        status, out = self.run_cli(
            "--reference", str(self.reference), "--strategy", "hash", "lookup", "34.05", "-118.24"
        )
        self.assertEqual(status, 1)
        self.assertEqual(out, "")

    def test_lookup_queries_file(self):
        queries = self.tmp / "queries.json"
        queries.write_text(json.dumps([{"lat": 40.7, "long": -73.9}, {"lat": 33.9, "long": -118.4}]))
        status, out = self.run_cli("--reference", str(self.reference), "lookup", "--queries", str(queries))
        self.assertEqual(status, 0)
        lines = out.splitlines()
        self.assertEqual(len(lines), 2)
        self.assertIn("JFK", lines[0])
        self.assertIn("LAX", lines[1])

    def test_lookup_invalid_queries_file(self):
        queries = self.tmp / "queries.json"
        queries.write_text(json.dumps([{"lat": 40.7}]))
        status, _ = self.run_cli("--reference", str(self.reference), "lookup", "--queries", str(queries))
        self.assertEqual(status, 1)

    def test_lookup_bad_reference(self):
        self.reference.write_text(REFERENCE + "Broken,BRK,north,0,2\n")
        status, _ = self.run_cli("--reference", str(self.reference), "lookup", "1", "2")
        self.assertEqual(status, 1)

    def test_reference_required(self):
        with self.assertRaises(SystemExit) as ctx:
            self.run_cli("lookup", "1", "2")
        self.assertEqual(ctx.exception.code, 2)

    def test_validate(self):
        for strategy in ("kdtree", "hash", "brute"):
            status, _ = self.run_cli(
                "--reference", str(self.reference), "--strategy", strategy, "validate", "--samples", "50"
            )
            self.assertEqual(status, 0, strategy)

    def test_validate_empty_reference(self):
        self.reference.write_text("name,abbreviation,lat,long,id\n")
        for strategy in ("kdtree", "hash", "brute"):
            status, _ = self.run_cli(
                "--reference", str(self.reference), "--strategy", strategy, "validate", "--samples", "5"
            )
            self.assertEqual(status, 1, strategy)

    def test_export(self):
        output = self.tmp / "exported.csv"
        records = [AirportRecord("Seattle Tacoma", "SEA", 47.449, -122.309, 0)]
        with patch("airport_finder.cli.records_from_airportsdata", return_value=records) as source:
            status, _ = self.run_cli("export", str(output), "--country", "US")
        self.assertEqual(status, 0)
        source.assert_called_once_with("IATA", "US")
        self.assertEqual(load_airports(output), records)


if __name__ == "__main__":
    unittest.main()
