#!/usr/bin/env python3
"""
Tests for zone file import and export.
"""

import io
import os
import tempfile
import unittest
from pathlib import Path

from dns_zone_manager.core.record import Record
from dns_zone_manager.parsers.zonefile import ZoneFileParser, filter_records

ZONE_TEXT = """$ORIGIN example.com.
$TTL 3600
@       IN SOA ns1.example.com. admin.example.com. 2024010101 7200 3600 1209600 300
@       IN NS  ns1.example.com.
@       IN MX  10 mail.example.com.
www 300 IN A   10.0.0.1
www 300 IN A   10.0.0.2
mail    IN A   10.0.0.3
api     IN CNAME www
"""


class TestZoneFileParser(unittest.TestCase):
    """Test parsing and rendering zone files."""

    def setUp(self):
        self.parser = ZoneFileParser("example.com.")

    def by_key(self, records):
        return {r.key: r for r in records}

    def test_parse_text(self):
        records = self.by_key(self.parser.parse(ZONE_TEXT))

        self.assertNotIn(("example.com.", "SOA"), records)
        self.assertEqual(
            records[("www.example.com.", "A")],
            Record("www.example.com.", "A", 300, ["10.0.0.1", "10.0.0.2"]),
        )
        self.assertEqual(records[("example.com.", "MX")].data, ["10 mail.example.com."])
        self.assertEqual(records[("mail.example.com.", "A")].ttl, 3600)
        self.assertEqual(records[("api.example.com.", "CNAME")].data, ["www.example.com."])

    def test_parse_with_soa(self):
        records = self.by_key(self.parser.parse(ZONE_TEXT, include_soa=True))

        self.assertIn(("example.com.", "SOA"), records)

    def test_parse_file_sources(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "example.com.zone")
            with open(path, "w") as f:
                f.write(ZONE_TEXT)

            from_path = self.parser.parse(path)
            from_pathlib = self.parser.parse(Path(path))
        from_stream = self.parser.parse(io.StringIO(ZONE_TEXT))

        self.assertEqual(len(from_path), 5)
        self.assertEqual(from_path, from_pathlib)
        self.assertEqual(from_path, from_stream)

    def test_parse_error(self):
        with self.assertRaises(ValueError):
            self.parser.parse("$TTL 300\nwww IN A not-an-address\n")

    def test_render(self):
        text = self.parser.render(
            [
                Record("www.example.com.", "A", 300, ["10.0.0.1", "10.0.0.2"]),
                Record("example.com.", "MX", 3600, "10 mail.example.com."),
            ]
        )

        self.assertTrue(text.startswith("$ORIGIN example.com.\n"))
        self.assertIn("www.example.com. 300 IN A 10.0.0.1", text)
        self.assertIn("www.example.com. 300 IN A 10.0.0.2", text)
        self.assertIn("example.com. 3600 IN MX 10 mail.example.com.", text)

    def test_render_skips_records_outside_the_zone(self):
        text = self.parser.render([Record("www.example.org.", "A", 300, "10.0.0.1")])

        self.assertNotIn("example.org.", text)

    def test_render_skips_unparsable_data(self):
        text = self.parser.render(
            [
                Record("www.example.com.", "A", 300, "not-an-address"),
                Record("mail.example.com.", "A", 300, "10.0.0.3"),
            ]
        )

        self.assertNotIn("www.example.com.", text)
        self.assertIn("mail.example.com. 300 IN A 10.0.0.3", text)

    def test_rendered_text_parses_back(self):
        records = self.parser.parse(ZONE_TEXT)

        self.assertEqual(
            sorted(self.parser.parse(self.parser.render(records)), key=str),
            sorted(records, key=str),
        )


class TestFilterRecords(unittest.TestCase):
    """Test record type filtering."""

    def setUp(self):
        self.records = [
            Record("example.com.", "A", 300, "10.0.0.1"),
            Record("example.com.", "MX", 300, "10 mail.example.com."),
            Record("example.com.", "TXT", 300, '"v=spf1 -all"'),
        ]

    def test_no_filters(self):
        self.assertEqual(filter_records(self.records), self.records)

    def test_only(self):
        self.assertEqual(
            [r.type for r in filter_records(self.records, only=["a", "mx"])], ["A", "MX"]
        )

    def test_exclude(self):
        self.assertEqual([r.type for r in filter_records(self.records, exclude="TXT")], ["A", "MX"])

    def test_only_and_exclude(self):
        self.assertEqual(filter_records(self.records, only=["A"], exclude=["A"]), [])


if __name__ == "__main__":
    unittest.main(verbosity=2)
