#!/usr/bin/env python3
"""
Tests for SOA payload handling and the SOA serial manager.
"""

import unittest
from unittest.mock import Mock

from dns_zone_manager.core.record import Record, parse_soa, replace_soa_serial
from dns_zone_manager.core.soa import (
    ComputedSerial,
    DefaultSerial,
    LiteralSerial,
    SOASerialManager,
    serial_policy,
)
from dns_zone_manager.exceptions import RecordNotFoundError

SOA_TEXT = "ns-cloud-b1.googledomains.com. dns-admin.google.com. 0 21600 3600 1209600 300"


class TestSOAData(unittest.TestCase):
    """Test parsing and rewriting SOA payloads."""

    def test_parse_soa(self):
        soa = parse_soa(SOA_TEXT)

        self.assertEqual(soa.primary_ns, "ns-cloud-b1.googledomains.com.")
        self.assertEqual(soa.admin_email, "dns-admin.google.com.")
        self.assertEqual(soa.serial, 0)
        self.assertEqual(soa.expire, 1209600)
        self.assertEqual(soa.minimum, 300)

    def test_parse_malformed_soa(self):
        with self.assertRaises(ValueError):
            parse_soa("ns1.example.com. admin.example.com. 1")
        with self.assertRaises(ValueError):
            parse_soa("ns1.example.com. admin.example.com. serial 1 2 3 4")

    def test_replace_serial_keeps_other_fields(self):
        self.assertEqual(
            replace_soa_serial(SOA_TEXT, 2024010101),
            "ns-cloud-b1.googledomains.com. dns-admin.google.com. 2024010101 21600 3600 1209600 300",
        )

    def test_replace_serial_keeps_spacing(self):
        text = "ns1.example.com.  admin.example.com.\t7  3600 600 86400 60"

        self.assertEqual(
            replace_soa_serial(text, 8),
            "ns1.example.com.  admin.example.com.\t8  3600 600 86400 60",
        )


class TestSerialPolicy(unittest.TestCase):
    """Test soa_serial option conversion."""

    def test_none_increments(self):
        policy = serial_policy(None)

        self.assertIsInstance(policy, DefaultSerial)
        self.assertEqual(policy.next_serial(41), 42)

    def test_int_is_literal(self):
        policy = serial_policy(10)

        self.assertEqual(policy, LiteralSerial(10))
        self.assertEqual(policy.next_serial(41), 10)

    def test_callable_is_computed(self):
        policy = serial_policy(lambda serial: serial + 10)

        self.assertIsInstance(policy, ComputedSerial)
        self.assertEqual(policy.next_serial(0), 10)

    def test_policies_pass_through(self):
        policy = LiteralSerial(5)

        self.assertIs(serial_policy(policy), policy)

    def test_unsupported_values_are_rejected(self):
        for option in (True, "10", 1.5):
            with self.subTest(option=option):
                with self.assertRaises(TypeError):
                    serial_policy(option)


class TestSOASerialManager(unittest.TestCase):
    """Test appending SOA replacements to a change."""

    def setUp(self):
        self.soa = Record("example.com.", "SOA", 18600, SOA_TEXT)
        self.client = Mock()
        self.client.list_rrsets.return_value = {"rrsets": [self.soa.to_api()]}
        self.zone = Mock()
        self.zone.name = "example-zone"
        self.zone.dns = "example.com."
        self.manager = SOASerialManager(self.client)
        self.record = Record("www.example.com.", "A", 300, "10.0.0.1")

    def test_soa_is_appended_last(self):
        other = Record("old.example.com.", "A", 300, "10.0.0.9")

        additions, deletions = self.manager.apply(self.zone, [self.record], [other])

        self.client.list_rrsets.assert_called_once_with(
            "example-zone", name="example.com.", type="SOA"
        )
        self.assertEqual(additions[0], self.record)
        self.assertEqual(additions[-1].data, [SOA_TEXT.replace(" 0 ", " 1 ")])
        self.assertEqual(additions[-1].ttl, 18600)
        self.assertEqual(deletions, [other, self.soa])

    def test_skip_soa_leaves_changes_alone(self):
        additions, deletions = self.manager.apply(
            self.zone, [self.record], [], skip_soa=True
        )

        self.assertEqual(additions, [self.record])
        self.assertEqual(deletions, [])
        self.client.list_rrsets.assert_not_called()

    def test_empty_changes_do_not_touch_soa(self):
        additions, deletions = self.manager.apply(self.zone, [], [])

        self.assertEqual((additions, deletions), ([], []))
        self.client.list_rrsets.assert_not_called()

    def test_inputs_are_not_mutated(self):
        to_add = [self.record]

        self.manager.apply(self.zone, to_add, [])

        self.assertEqual(to_add, [self.record])

    def test_literal_serial(self):
        additions, _ = self.manager.apply(self.zone, [self.record], [], soa_serial=99)

        self.assertEqual(parse_soa(additions[-1].data[0]).serial, 99)

    def test_explicit_soa_replacement_is_reused(self):
        edited = Record(
            "example.com.",
            "SOA",
            18600,
            "ns-cloud-b1.googledomains.com. dns-admin.google.com. 5 7200 3600 1209600 300",
        )

        additions, deletions = self.manager.apply(self.zone, [edited], [self.soa])

        self.client.list_rrsets.assert_not_called()
        self.assertEqual(len(additions), 1)
        self.assertEqual(
            additions[0].data,
            ["ns-cloud-b1.googledomains.com. dns-admin.google.com. 1 7200 3600 1209600 300"],
        )
        self.assertEqual(deletions, [self.soa])
        self.assertEqual(parse_soa(edited.data[0]).serial, 5)

    def test_soa_addition_without_deletion_gets_serial(self):
        edited = Record(
            "example.com.",
            "SOA",
            3600,
            "ns-cloud-b1.googledomains.com. dns-admin.google.com. 5 7200 3600 1209600 300",
        )

        additions, deletions = self.manager.apply(
            self.zone, [edited, self.record], [], soa_serial=lambda serial: serial + 10
        )

        self.client.list_rrsets.assert_called_once()
        self.assertEqual(additions[0].ttl, 3600)
        self.assertEqual(parse_soa(additions[0].data[0]).serial, 10)
        self.assertEqual(parse_soa(additions[0].data[0]).refresh, 7200)
        self.assertEqual(additions[1], self.record)
        self.assertEqual(deletions, [self.soa])

    def test_missing_soa_raises(self):
        self.client.list_rrsets.return_value = {"rrsets": []}

        with self.assertRaises(RecordNotFoundError):
            self.manager.apply(self.zone, [self.record], [])


if __name__ == "__main__":
    unittest.main(verbosity=2)
