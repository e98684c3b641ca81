"""
Batching several record operations into a single zone change.
"""

import logging
from typing import Callable, List, Optional, Tuple

from ..utils.validators import validate_ttl
from .change import Change
from .record import Record, normalize_data
from .record_manager import ChangeSet

logger = logging.getLogger(__name__)


class RecordEditor:
    """Explicit mutations applied to a duplicate of a live record."""

    def __init__(self, record: Record):
        self.record = record

    def set_ttl(self, ttl: int) -> "RecordEditor":
        ttl = int(ttl)
        if not validate_ttl(ttl):
            raise ValueError(f"Invalid TTL for {self.record.name}: {ttl}")
        self.record.ttl = ttl
        return self

    def set_data(self, data) -> "RecordEditor":
        self.record.data = normalize_data(data)
        return self


class ZoneTransaction:
    """
    Accumulates add/remove/replace/modify operations for one zone.

    Operations are resolved (including their lookups) when the transaction
    is committed, in the order they were added. Used as a context manager
    the transaction commits when the block exits without an exception.
    """

    OPERATIONS = ("add", "remove", "replace", "modify")

    def __init__(self, zone, skip_soa: bool = False, soa_serial=None):
        self.zone = zone
        self.skip_soa = skip_soa
        self.soa_serial = soa_serial
        self.operations: List[Tuple[str, tuple, dict]] = []
        self.change: Optional[Change] = None
        self.committed = False

    def add_op(self, kind: str, *args, **kwargs) -> "ZoneTransaction":
        if kind not in self.OPERATIONS:
            raise ValueError(f"Unknown operation '{kind}'")
        if self.committed:
            raise RuntimeError("Transaction has already been committed")
        self.operations.append((kind, args, kwargs))
        return self

    def add(self, name: str, type: str, ttl: int, data) -> "ZoneTransaction":
        return self.add_op("add", name, type, ttl, data)

    def remove(self, name: str, type: str) -> "ZoneTransaction":
        return self.add_op("remove", name, type)

    def replace(self, name: str, type: str, ttl: int, data) -> "ZoneTransaction":
        return self.add_op("replace", name, type, ttl, data)

    def modify(
        self,
        name: str,
        type: str,
        edit: Optional[Callable[[RecordEditor], None]] = None,
        ttl: Optional[int] = None,
        data=None,
    ) -> "ZoneTransaction":
        return self.add_op("modify", name, type, edit=edit, ttl=ttl, data=data)

    def changes(self) -> ChangeSet:
        """Resolve every queued operation and concatenate the results."""
        combined = ChangeSet()
        for kind, args, kwargs in self.operations:
            resolver = getattr(self.zone, f"_{kind}_changes")
            combined.extend(resolver(*args, **kwargs))
        return combined

    def commit(self) -> Optional[Change]:
        """Submit all queued operations as one change."""
        combined = self.changes()
        logger.debug(
            f"Committing {len(self.operations)} operations on {self.zone.name}"
        )
        self.change = self.zone.update(
            combined.additions,
            combined.deletions,
            skip_soa=self.skip_soa,
            soa_serial=self.soa_serial,
        )
        self.committed = True
        return self.change

    def __enter__(self) -> "ZoneTransaction":
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if exc_type is None and not self.committed:
            self.commit()
        return False
