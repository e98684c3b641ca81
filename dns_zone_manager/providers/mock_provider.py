"""
Mock DNS provider for testing and demonstration.

This module provides an in-memory backend that follows the same wire
contract as Cloud DNS: token pagination, atomic changes and 404s for
unknown resources. Failures can be queued to exercise retry handling.
"""

import copy
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from ..exceptions import ApiError
from .base_provider import DNSProvider

logger = logging.getLogger(__name__)

DEFAULT_NAME_SERVERS = [
    "ns-cloud-a1.googledomains.com.",
    "ns-cloud-a2.googledomains.com.",
    "ns-cloud-a3.googledomains.com.",
    "ns-cloud-a4.googledomains.com.",
]
DEFAULT_SOA = "ns-cloud-a1.googledomains.com. cloud-dns-hostmaster.google.com. 1 21600 3600 259200 300"
DEFAULT_PAGE_SIZE = 100


def _now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


class MockDNSProvider(DNSProvider):
    """Mock DNS provider for testing and demonstration purposes."""

    def __init__(self, config: Dict = None):
        """Initialize mock provider."""
        config = config or {}
        self.page_size = config.get("page_size", DEFAULT_PAGE_SIZE)
        self.pending_polls = config.get("pending_polls", 0)
        self.zones: Dict[str, Dict] = {}
        self.rrsets: Dict[str, List[Dict]] = {}
        self.changes: Dict[str, List[Dict]] = {}
        self.failures: List[Exception] = []
        self.calls: List[str] = []
        self._polls: Dict[tuple, int] = {}
        self._next_id = 1000

        for zone in config.get("zones", []):
            self.create_zone(zone)
        logger.info("Mock DNS provider initialized")

    def fail_next(self, *errors: Exception):
        """Queue errors to be raised by the next calls, one per call."""
        self.failures.extend(errors)

    def _call(self, method: str):
        self.calls.append(method)
        if self.failures:
            error = self.failures.pop(0)
            logger.debug(f"Mock: {method} failing with {error}")
            raise error

    def _zone_name(self, zone: str) -> str:
        if zone in self.zones:
            return zone
        for name, data in self.zones.items():
            if data["id"] == str(zone):
                return name
        raise ApiError(404, f"The 'parameters.managedZone' resource named '{zone}' does not exist.", reason="notFound")

    def _paginate(self, items: List[Dict], key: str, page_token, max_results) -> Dict:
        try:
            offset = int(page_token) if page_token else 0
        except ValueError:
            raise ApiError(400, f"Invalid page token '{page_token}'", reason="invalid")
        size = int(max_results) if max_results else self.page_size
        result = {key: copy.deepcopy(items[offset:offset + size])}
        if offset + size < len(items):
            result["nextPageToken"] = str(offset + size)
        return result

    # Zones

    def list_zones(self, page_token=None, max_results=None) -> Dict:
        self._call("list_zones")
        return self._paginate(list(self.zones.values()), "managedZones", page_token, max_results)

    def get_zone(self, zone: str) -> Dict:
        self._call("get_zone")
        return copy.deepcopy(self.zones[self._zone_name(zone)])

    def create_zone(self, body: Dict) -> Dict:
        self._call("create_zone")
        name, dns_name = body.get("name"), body.get("dnsName")
        if not name or not dns_name:
            raise ApiError(400, "Zone name and dnsName are required", reason="required")
        if name in self.zones:
            raise ApiError(409, f"The resource '{name}' already exists", reason="alreadyExists")

        self._next_id += 1
        zone = {
            "kind": "dns#managedZone",
            "name": name,
            "dnsName": dns_name,
            "description": body.get("description", ""),
            "id": str(self._next_id),
            "nameServers": list(DEFAULT_NAME_SERVERS),
            "creationTime": _now(),
        }
        if body.get("nameServerSet"):
            zone["nameServerSet"] = body["nameServerSet"]

        self.zones[name] = zone
        self.rrsets[name] = [
            {"name": dns_name, "type": "NS", "ttl": 21600, "rrdatas": list(DEFAULT_NAME_SERVERS)},
            {"name": dns_name, "type": "SOA", "ttl": 21600, "rrdatas": [DEFAULT_SOA]},
        ]
        self.changes[name] = []
        for record in body.get("rrsets", []):
            self.rrsets[name].append(copy.deepcopy(record))

        logger.info(f"Mock: Created zone {name} ({dns_name})")
        return copy.deepcopy(zone)

    def delete_zone(self, zone: str) -> None:
        self._call("delete_zone")
        name = self._zone_name(zone)
        dns_name = self.zones[name]["dnsName"]
        extra = [
            r for r in self.rrsets[name]
            if not (r["type"] in ("SOA", "NS") and r["name"] == dns_name)
        ]
        if extra:
            raise ApiError(
                400,
                f"The resource named '{name}' cannot be deleted because it is not empty",
                reason="containerNotEmpty",
            )
        del self.zones[name]
        del self.rrsets[name]
        del self.changes[name]
        logger.info(f"Mock: Deleted zone {name}")

    # Records

    def list_rrsets(self, zone, name=None, type=None, page_token=None, max_results=None) -> Dict:
        self._call("list_rrsets")
        zone_name = self._zone_name(zone)
        matches = [
            r for r in self.rrsets[zone_name]
            if (name is None or r["name"] == name) and (type is None or r["type"] == type)
        ]
        return self._paginate(matches, "rrsets", page_token, max_results)

    # Changes

    def create_change(self, zone: str, body: Dict) -> Dict:
        self._call("create_change")
        zone_name = self._zone_name(zone)
        additions = body.get("additions") or []
        deletions = body.get("deletions") or []
        if not additions and not deletions:
            raise ApiError(400, "The 'entity.change' parameter is required but was missing.", reason="required")

        rrsets = copy.deepcopy(self.rrsets[zone_name])
        for deletion in deletions:
            index = self._find_rrset(rrsets, deletion["name"], deletion["type"])
            if index is None:
                raise ApiError(
                    404,
                    f"The 'entity.change.deletions[{deletion['name']}][{deletion['type']}]' resource does not exist.",
                    reason="notFound",
                )
            if rrsets[index] != self._normalize(deletion):
                raise ApiError(
                    412,
                    f"Deletion of {deletion['name']} {deletion['type']} does not match the current record",
                    reason="conditionNotMet",
                )
            del rrsets[index]

        for addition in additions:
            if self._find_rrset(rrsets, addition["name"], addition["type"]) is not None:
                raise ApiError(
                    409,
                    f"The resource 'entity.change.additions[{addition['name']}][{addition['type']}]' already exists",
                    reason="alreadyExists",
                )
            rrsets.append(self._normalize(addition))

        self.rrsets[zone_name] = rrsets
        change = {
            "kind": "dns#change",
            "id": str(len(self.changes[zone_name]) + 1),
            "status": "pending" if self.pending_polls else "done",
            "startTime": _now(),
            "additions": [self._normalize(r) for r in additions],
            "deletions": [self._normalize(r) for r in deletions],
        }
        self.changes[zone_name].append(change)
        logger.info(
            f"Mock: Applied change {change['id']} to {zone_name}: "
            f"{len(additions)} additions, {len(deletions)} deletions"
        )
        return copy.deepcopy(change)

    def get_change(self, zone: str, change_id: str) -> Dict:
        self._call("get_change")
        zone_name = self._zone_name(zone)
        for change in self.changes[zone_name]:
            if change["id"] == str(change_id):
                key = (zone_name, change["id"])
                polls = self._polls.get(key, 0) + 1
                self._polls[key] = polls
                if change["status"] == "pending" and polls >= self.pending_polls:
                    change["status"] = "done"
                return copy.deepcopy(change)
        raise ApiError(404, f"The 'parameters.changeId' resource named '{change_id}' does not exist.", reason="notFound")

    def list_changes(self, zone, sort_by=None, sort_order=None, page_token=None, max_results=None) -> Dict:
        self._call("list_changes")
        changes = list(self.changes[self._zone_name(zone)])
        if sort_order == "descending":
            changes.reverse()
        return self._paginate(changes, "changes", page_token, max_results)

    @staticmethod
    def _find_rrset(rrsets: List[Dict], name: str, type: str) -> Optional[int]:
        for i, rrset in enumerate(rrsets):
            if rrset["name"] == name and rrset["type"] == type:
                return i
        return None

    @staticmethod
    def _normalize(record: Dict) -> Dict:
        return {
            "name": record["name"],
            "type": record["type"],
            "ttl": int(record.get("ttl", 0)),
            "rrdatas": list(record.get("rrdatas") or []),
        }
