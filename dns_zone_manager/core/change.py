"""
Changes - atomic record transactions against a managed zone.
"""

import logging
import time
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from ..exceptions import DNSError
from .record import Record

logger = logging.getLogger(__name__)

STATUS_DONE = "done"
STATUS_PENDING = "pending"


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an RFC 3339 timestamp as returned by the backend."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.debug(f"Unparseable timestamp: {value}")
        return None


class Change:
    """A submitted change as reported by the backend. Read-only."""

    def __init__(self, data: Dict, zone=None):
        self._data = dict(data)
        self._zone = zone
        self._additions: Tuple[Record, ...] = tuple(
            Record.from_api(r) for r in data.get("additions") or []
        )
        self._deletions: Tuple[Record, ...] = tuple(
            Record.from_api(r) for r in data.get("deletions") or []
        )

    @classmethod
    def from_api(cls, data: Dict, zone=None) -> "Change":
        return cls(data, zone)

    @property
    def id(self) -> str:
        return self._data.get("id")

    @property
    def status(self) -> Optional[str]:
        return self._data.get("status")

    @property
    def additions(self) -> List[Record]:
        return list(self._additions)

    @property
    def deletions(self) -> List[Record]:
        return list(self._deletions)

    @property
    def started_at(self) -> Optional[datetime]:
        return parse_timestamp(self._data.get("startTime"))

    def done(self) -> bool:
        return self.status == STATUS_DONE

    def pending(self) -> bool:
        return self.status == STATUS_PENDING

    def to_api(self) -> Dict:
        return dict(self._data)

    def reload(self) -> "Change":
        """Fetch the current state of this change from the backend."""
        self._ensure_zone()
        data = self._zone.dns_client.get_change(self._zone.name, self.id)
        if data is None:
            raise DNSError(f"Change {self.id} no longer exists in {self._zone.name}")
        return Change.from_api(data, self._zone)

    def wait_until_done(self, max_wait: float = 300.0) -> "Change":
        """
        Poll until the backend reports the change as done.

        Waits between polls follow the client's retry policy delays.

        Returns:
            The finished Change

        Raises:
            DNSError: If the change is not done within ``max_wait`` seconds
        """
        self._ensure_zone()
        change = self
        policy = self._zone.dns_client.retry_policy
        waited = 0.0
        attempt = 0
        while not change.done():
            if waited >= max_wait:
                raise DNSError(
                    f"Change {self.id} still {change.status} after {waited:.0f}s"
                )
            delay = policy.delay_for(attempt)
            logger.debug(f"Change {self.id} is {change.status}, polling in {delay:.2f}s")
            time.sleep(delay)
            waited += delay
            attempt += 1
            change = change.reload()
        return change

    def _ensure_zone(self):
        if self._zone is None:
            raise DNSError("Must have an active zone to reload a change")

    def __repr__(self):
        return (
            f"Change(id={self.id!r}, status={self.status!r}, "
            f"additions={len(self._additions)}, deletions={len(self._deletions)})"
        )


class ChangeOrchestrator:
    """Submits additions and deletions to a zone as one atomic change."""

    def __init__(self, dns_client):
        self.dns_client = dns_client

    def submit(self, zone, additions: List[Record], deletions: List[Record]) -> Optional[Change]:
        """
        Submit a change.

        Args:
            zone: The Zone to change
            additions: Records to add
            deletions: Records to delete

        Returns:
            The created Change, or None when there is nothing to submit
        """
        if not additions and not deletions:
            logger.info(f"No changes to submit for zone {zone.name}")
            return None

        body = {
            "additions": [r.to_api() for r in additions],
            "deletions": [r.to_api() for r in deletions],
        }
        logger.info(
            f"Submitting change to {zone.name}: {len(additions)} additions, "
            f"{len(deletions)} deletions"
        )
        data = self.dns_client.create_change(zone.name, body)
        change = Change.from_api(data, zone)
        logger.info(f"Change {change.id} submitted with status {change.status}")
        return change
