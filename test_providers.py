#!/usr/bin/env python3
"""
Tests for the DNS providers and the retrying DNS client.
"""

import unittest
from unittest.mock import Mock

import requests

from dns_zone_manager.exceptions import ApiError, ConfigurationError
from dns_zone_manager.providers.cloud_dns_provider import CloudDNSProvider
from dns_zone_manager.providers.dns_client import DNSClient
from dns_zone_manager.providers.mock_provider import DEFAULT_SOA, MockDNSProvider
from dns_zone_manager.utils.retry import RetryExecutor, RetryPolicy


def json_response(status_code=200, payload=None, text=""):
    response = Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.reason = "Error" if status_code >= 400 else "OK"
    response.text = text
    response.content = b"{}" if payload is not None else b""
    if payload is None:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = payload
    return response


class TestCloudDNSProvider(unittest.TestCase):
    """Test the Cloud DNS REST provider with a mocked session."""

    def setUp(self):
        self.session = Mock()
        self.session.headers = {}
        self.provider = CloudDNSProvider(
            {"project": "test-project", "token": "secret"}, session=self.session
        )

    def test_requires_project(self):
        with self.assertRaises(ConfigurationError):
            CloudDNSProvider({}, session=self.session)

    def test_sets_authorization_header(self):
        self.assertEqual(self.session.headers["Authorization"], "Bearer secret")
        self.assertEqual(self.session.headers["Content-Type"], "application/json")

    def test_list_rrsets_sends_only_given_params(self):
        self.session.request.return_value = json_response(payload={"rrsets": []})

        result = self.provider.list_rrsets("example-zone", name="www.example.com.", type="A")

        self.assertEqual(result, {"rrsets": []})
        self.session.request.assert_called_once_with(
            "GET",
            "https://dns.googleapis.com/dns/v1/projects/test-project/managedZones/example-zone/rrsets",
            params={"name": "www.example.com.", "type": "A"},
            json=None,
            timeout=(10, 60),
        )

    def test_list_changes_params(self):
        self.session.request.return_value = json_response(payload={"changes": []})

        self.provider.list_changes(
            "example-zone", sort_by="changeSequence", sort_order="descending", page_token="t", max_results=3
        )

        _, kwargs = self.session.request.call_args
        self.assertEqual(
            kwargs["params"],
            {"sortBy": "changeSequence", "sortOrder": "descending", "pageToken": "t", "maxResults": 3},
        )

    def test_create_change_posts_body(self):
        body = {"additions": [], "deletions": []}
        self.session.request.return_value = json_response(payload={"id": "1", "status": "pending"})

        self.provider.create_change("example-zone", body)

        args, kwargs = self.session.request.call_args
        self.assertEqual(args[0], "POST")
        self.assertTrue(args[1].endswith("/managedZones/example-zone/changes"))
        self.assertIsNone(kwargs["params"])
        self.assertEqual(kwargs["json"], body)

    def test_empty_response_body(self):
        self.session.request.return_value = json_response(204)

        self.assertIsNone(self.provider.delete_zone("example-zone"))

    def test_error_envelope_is_parsed(self):
        self.session.request.return_value = json_response(
            403,
            payload={
                "error": {
                    "code": 403,
                    "message": "Rate Limit Exceeded",
                    "errors": [{"reason": "rateLimitExceeded", "message": "Rate Limit Exceeded"}],
                }
            },
        )

        with self.assertRaises(ApiError) as ctx:
            self.provider.list_zones()

        self.assertEqual(ctx.exception.status_code, 403)
        self.assertEqual(ctx.exception.reason, "rateLimitExceeded")
        self.assertEqual(ctx.exception.message, "Rate Limit Exceeded")

    def test_non_json_error(self):
        self.session.request.return_value = json_response(502, text="Bad Gateway")

        with self.assertRaises(ApiError) as ctx:
            self.provider.get_zone("example-zone")

        self.assertEqual(ctx.exception.status_code, 502)
        self.assertIsNone(ctx.exception.reason)
        self.assertEqual(ctx.exception.message, "Bad Gateway")


class TestMockDNSProvider(unittest.TestCase):
    """Test the in-memory backend."""

    def setUp(self):
        self.provider = MockDNSProvider(
            {"page_size": 2, "zones": [{"name": "example-com", "dnsName": "example.com."}]}
        )
        self.a_record = {"name": "www.example.com.", "type": "A", "ttl": 300, "rrdatas": ["10.0.0.1"]}

    def test_new_zone_has_ns_and_soa(self):
        rrsets = self.provider.list_rrsets("example-com")["rrsets"]

        self.assertEqual([r["type"] for r in rrsets], ["NS", "SOA"])
        self.assertEqual(rrsets[1]["rrdatas"], [DEFAULT_SOA])

    def test_zones_can_be_found_by_id(self):
        zone_id = self.provider.zones["example-com"]["id"]

        self.assertEqual(self.provider.get_zone(zone_id)["name"], "example-com")

    def test_unknown_zone_is_not_found(self):
        with self.assertRaises(ApiError) as ctx:
            self.provider.get_zone("missing")
        self.assertTrue(ctx.exception.not_found)

    def test_pagination(self):
        self.provider.create_change("example-com", {"additions": [self.a_record]})

        first = self.provider.list_rrsets("example-com")
        self.assertEqual(len(first["rrsets"]), 2)
        self.assertEqual(first["nextPageToken"], "2")

        second = self.provider.list_rrsets("example-com", page_token=first["nextPageToken"])
        self.assertEqual(second["rrsets"], [self.a_record])
        self.assertNotIn("nextPageToken", second)

    def test_change_is_atomic(self):
        stale = dict(self.a_record, rrdatas=["10.9.9.9"])
        self.provider.create_change("example-com", {"additions": [self.a_record]})
        before = self.provider.list_rrsets("example-com", max_results=10)

        new = {"name": "api.example.com.", "type": "A", "ttl": 300, "rrdatas": ["10.0.0.2"]}
        with self.assertRaises(ApiError) as ctx:
            self.provider.create_change("example-com", {"additions": [new], "deletions": [stale]})

        self.assertEqual(ctx.exception.status_code, 412)
        self.assertEqual(self.provider.list_rrsets("example-com", max_results=10), before)

    def test_duplicate_addition_conflicts(self):
        self.provider.create_change("example-com", {"additions": [self.a_record]})

        with self.assertRaises(ApiError) as ctx:
            self.provider.create_change("example-com", {"additions": [self.a_record]})
        self.assertEqual(ctx.exception.reason, "alreadyExists")

    def test_pending_changes_finish_after_polls(self):
        provider = MockDNSProvider(
            {"pending_polls": 2, "zones": [{"name": "example-com", "dnsName": "example.com."}]}
        )
        change = provider.create_change("example-com", {"additions": [self.a_record]})

        self.assertEqual(change["status"], "pending")
        self.assertEqual(provider.get_change("example-com", change["id"])["status"], "pending")
        self.assertEqual(provider.get_change("example-com", change["id"])["status"], "done")

    def test_list_changes_descending(self):
        self.provider.create_change("example-com", {"additions": [self.a_record]})
        self.provider.create_change("example-com", {"deletions": [self.a_record]})

        ids = [c["id"] for c in self.provider.list_changes("example-com", sort_order="descending")["changes"]]

        self.assertEqual(ids, ["2", "1"])

    def test_zone_with_records_cannot_be_deleted(self):
        self.provider.create_change("example-com", {"additions": [self.a_record]})

        with self.assertRaises(ApiError) as ctx:
            self.provider.delete_zone("example-com")
        self.assertEqual(ctx.exception.reason, "containerNotEmpty")

    def test_queued_failures(self):
        error = ApiError(503, "unavailable")
        self.provider.fail_next(error)

        with self.assertRaises(ApiError) as ctx:
            self.provider.list_zones()
        self.assertIs(ctx.exception, error)
        self.assertEqual(len(self.provider.list_zones()["managedZones"]), 1)


class TestDNSClient(unittest.TestCase):
    """Test provider selection and retrying calls."""

    def setUp(self):
        self.config = {
            "default_provider": "mock",
            "dns_providers": {"mock": {"zones": [{"name": "example-com", "dnsName": "example.com."}]}},
            "retry": {"max_retries": 2, "base_delay": 0.5, "jitter": False},
        }
        self.sleep = Mock()

    def make_client(self):
        client = DNSClient(self.config)
        client.executor = RetryExecutor(client.retry_policy, sleep=self.sleep)
        return client

    def test_provider_selection(self):
        self.assertIsInstance(DNSClient(self.config).provider, MockDNSProvider)

        self.config["default_provider"] = "cloud_dns"
        self.config["dns_providers"]["cloud_dns"] = {"project": "test-project"}
        self.assertIsInstance(DNSClient(self.config).provider, CloudDNSProvider)

    def test_unknown_provider(self):
        self.config["default_provider"] = "route53"

        with self.assertRaises(ConfigurationError):
            DNSClient(self.config)

    def test_retry_policy_from_config(self):
        policy = DNSClient(self.config).retry_policy

        self.assertEqual(policy, RetryPolicy(max_retries=2, base_delay=0.5, jitter=False))

    def test_missing_resources_are_none(self):
        client = self.make_client()

        self.assertIsNone(client.get_zone("missing"))
        self.assertIsNone(client.get_change("example-com", "42"))

    def test_transient_failures_are_retried(self):
        client = self.make_client()
        client.provider.fail_next(ApiError(503, "unavailable"), requests.ConnectionError("reset"))

        result = client.list_rrsets("example-com", type="SOA")

        self.assertEqual(len(result["rrsets"]), 1)
        self.assertEqual(client.provider.calls[-3:], ["list_rrsets"] * 3)
        self.assertEqual([c.args[0] for c in self.sleep.call_args_list], [0.5, 1.0])

    def test_fatal_failures_are_not_retried(self):
        client = self.make_client()
        error = ApiError(400, "invalid", reason="invalid")
        client.provider.fail_next(error)

        with self.assertRaises(ApiError) as ctx:
            client.list_zones()

        self.assertIs(ctx.exception, error)
        self.sleep.assert_not_called()

    def test_not_found_is_raised_for_listings(self):
        client = self.make_client()

        with self.assertRaises(ApiError):
            client.list_rrsets("missing")


if __name__ == "__main__":
    unittest.main(verbosity=2)
