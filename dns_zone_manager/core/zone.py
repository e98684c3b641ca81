"""
Zone - handle for one managed DNS zone.

A Zone is long-lived and holds no change state; every update call computes
its own diff, SOA replacement and submission.
"""

import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional

from ..exceptions import RecordNotFoundError
from ..parsers.zonefile import ZoneFileParser, filter_records
from ..utils.validators import qualify_name
from .change import Change, ChangeOrchestrator, parse_timestamp
from .pagination import PaginatedList
from .record import SOA_TYPE, Record
from .record_manager import ChangeSet, RecordManager
from .soa import SOASerialManager
from .transaction import RecordEditor, ZoneTransaction

logger = logging.getLogger(__name__)

SORT_ORDERS = {
    "asc": "ascending",
    "ascending": "ascending",
    "desc": "descending",
    "descending": "descending",
}


class Zone:
    """A managed zone and the operations that change its records."""

    def __init__(self, data: Dict, dns_client):
        self._data = dict(data)
        self.dns_client = dns_client
        self.record_manager = RecordManager()
        self.soa_manager = SOASerialManager(dns_client)
        self.orchestrator = ChangeOrchestrator(dns_client)

    @classmethod
    def from_api(cls, data: Dict, dns_client) -> "Zone":
        return cls(data, dns_client)

    @property
    def name(self) -> str:
        return self._data.get("name")

    @property
    def dns(self) -> str:
        return self._data.get("dnsName")

    @property
    def id(self):
        return self._data.get("id")

    @property
    def description(self) -> str:
        return self._data.get("description", "")

    @property
    def name_servers(self) -> List[str]:
        return list(self._data.get("nameServers") or [])

    @property
    def name_server_set(self) -> Optional[str]:
        return self._data.get("nameServerSet")

    @property
    def created_at(self) -> Optional[datetime]:
        return parse_timestamp(self._data.get("creationTime"))

    def __repr__(self):
        return f"Zone(name={self.name!r}, dns={self.dns!r})"

    # Records and names

    def fqdn(self, name: Optional[str] = None) -> str:
        """Qualify a record name against this zone's apex."""
        return qualify_name(name, self.dns)

    def record(self, name: Optional[str], type: str, ttl: int, data) -> Record:
        """Build a Record whose name is qualified against this zone."""
        return Record(self.fqdn(name), type, ttl, data)

    def records(
        self,
        name: Optional[str] = None,
        type: Optional[str] = None,
        token: Optional[str] = None,
        max: Optional[int] = None,
    ) -> PaginatedList[Record]:
        """
        List records in the zone, optionally filtered by name and type.

        Args:
            name: Record name, qualified against the zone apex
            type: Record type filter, upper-cased
            token: Continuation token from a previous page
            max: Maximum number of records per page

        Returns:
            A PaginatedList of Records
        """
        if name is not None:
            name = self.fqdn(name)
        if type is not None:
            type = type.upper()

        response = self.dns_client.list_rrsets(
            self.name, name=name, type=type, page_token=token, max_results=max
        )
        items = [Record.from_api(r) for r in response.get("rrsets") or []]
        return PaginatedList(
            items,
            token=response.get("nextPageToken"),
            loader=self.records,
            query={"name": name, "type": type, "max": max},
        )

    # Changes

    def changes(
        self,
        token: Optional[str] = None,
        max: Optional[int] = None,
        order: Optional[str] = None,
    ) -> PaginatedList[Change]:
        """
        List the changes made to the zone.

        Args:
            token: Continuation token from a previous page
            max: Maximum number of changes per page
            order: "asc" or "desc" by change sequence

        Returns:
            A PaginatedList of Changes
        """
        sort_by = sort_order = None
        if order is not None:
            try:
                sort_order = SORT_ORDERS[str(order).lower()]
            except KeyError:
                raise ValueError(f"Unknown sort order '{order}', use 'asc' or 'desc'")
            sort_by = "changeSequence"

        response = self.dns_client.list_changes(
            self.name,
            sort_by=sort_by,
            sort_order=sort_order,
            page_token=token,
            max_results=max,
        )
        items = [Change.from_api(c, self) for c in response.get("changes") or []]
        return PaginatedList(
            items,
            token=response.get("nextPageToken"),
            loader=self.changes,
            query={"max": max, "order": order},
        )

    def change(self, change_id: str) -> Optional[Change]:
        """Find a change by id; None if the backend does not know it."""
        data = self.dns_client.get_change(self.name, change_id)
        if data is None:
            return None
        return Change.from_api(data, self)

    # Updates

    def update(
        self,
        additions=None,
        deletions=None,
        skip_soa: bool = False,
        soa_serial=None,
    ) -> Optional[Change]:
        """
        Add and remove records in one change.

        Records present in both lists cancel out. Unless ``skip_soa`` is set,
        the zone's SOA serial is replaced as part of the same change.

        Args:
            additions: A Record or list of Records to add
            deletions: A Record or list of Records to remove
            skip_soa: Do not touch the SOA record
            soa_serial: An int to use as the new serial, or a callable
                receiving the current serial and returning the new one

        Returns:
            The submitted Change, or None when nothing changed
        """
        changes = self.record_manager.diff(additions, deletions)
        if changes.is_empty:
            return None

        to_add, to_remove = self.soa_manager.apply(
            self,
            changes.additions,
            changes.deletions,
            skip_soa=skip_soa,
            soa_serial=soa_serial,
        )
        return self.orchestrator.submit(self, to_add, to_remove)

    def add(self, name, type, ttl, data, skip_soa=False, soa_serial=None) -> Optional[Change]:
        """Add a record to the zone."""
        changes = self._add_changes(name, type, ttl, data)
        return self.update(
            changes.additions, changes.deletions, skip_soa=skip_soa, soa_serial=soa_serial
        )

    def remove(self, name, type, skip_soa=False, soa_serial=None) -> Optional[Change]:
        """Remove all records matching name and type."""
        changes = self._remove_changes(name, type)
        return self.update(
            changes.additions, changes.deletions, skip_soa=skip_soa, soa_serial=soa_serial
        )

    def replace(self, name, type, ttl, data, skip_soa=False, soa_serial=None) -> Optional[Change]:
        """Replace the records matching name and type with a new record."""
        changes = self._replace_changes(name, type, ttl, data)
        return self.update(
            changes.additions, changes.deletions, skip_soa=skip_soa, soa_serial=soa_serial
        )

    def modify(
        self,
        name,
        type,
        edit: Optional[Callable[[RecordEditor], None]] = None,
        ttl: Optional[int] = None,
        data=None,
        skip_soa=False,
        soa_serial=None,
    ) -> Optional[Change]:
        """
        Change the TTL or data of existing records matching name and type.

        Raises:
            RecordNotFoundError: If no record matches
        """
        changes = self._modify_changes(name, type, edit=edit, ttl=ttl, data=data)
        return self.update(
            changes.additions, changes.deletions, skip_soa=skip_soa, soa_serial=soa_serial
        )

    def transaction(self, skip_soa: bool = False, soa_serial=None) -> ZoneTransaction:
        """Start a batch of operations submitted as a single change."""
        return ZoneTransaction(self, skip_soa=skip_soa, soa_serial=soa_serial)

    def clear(self, skip_soa: bool = False, soa_serial=None) -> Optional[Change]:
        """Remove every record except the apex SOA and NS records."""
        non_essential = [
            r
            for r in self.records().all()
            if not (r.type in (SOA_TYPE, "NS") and r.name == self.dns)
        ]
        change = self.update([], non_essential, skip_soa=skip_soa, soa_serial=soa_serial)
        if change is not None:
            change = change.wait_until_done()
        return change

    def delete(self, force: bool = False) -> bool:
        """Delete the zone; with ``force`` clear its records first."""
        if force:
            self.clear()
        self.dns_client.delete_zone(self.name)
        logger.info(f"Deleted zone {self.name}")
        return True

    # Zone files

    def export(self, path: Optional[str] = None) -> str:
        """Write every record in the zone to a zone file and return the text."""
        text = ZoneFileParser(self.dns).render(self.records().all())
        if path is not None:
            with open(path, "w") as f:
                f.write(text)
            logger.info(f"Exported zone {self.name} to {path}")
        return text

    def import_records(
        self,
        source,
        only=None,
        exclude=None,
        skip_soa: bool = False,
        soa_serial=None,
    ) -> Optional[Change]:
        """
        Add the records from a zone file.

        Args:
            source: A path, file-like object or zone file text
            only: Record types to import
            exclude: Record types to skip
        """
        records = filter_records(
            ZoneFileParser(self.dns).parse(source), only=only, exclude=exclude
        )
        return self.update(records, [], skip_soa=skip_soa, soa_serial=soa_serial)

    # Change computation for each operation

    def _lookup(self, name, type) -> List[Record]:
        return list(self.records(name, type).all())

    def _add_changes(self, name, type, ttl, data) -> ChangeSet:
        return self.record_manager.diff(self.record(name, type, ttl, data), [])

    def _remove_changes(self, name, type) -> ChangeSet:
        return self.record_manager.diff([], self._lookup(name, type))

    def _replace_changes(self, name, type, ttl, data) -> ChangeSet:
        current = self._lookup(name, type)
        return self.record_manager.replace_set(current, [self.record(name, type, ttl, data)])

    def _modify_changes(self, name, type, edit=None, ttl=None, data=None) -> ChangeSet:
        current = self._lookup(name, type)
        if not current:
            raise RecordNotFoundError(self.fqdn(name), type.upper())

        updated = []
        for record in current:
            editor = RecordEditor(record.copy())
            if ttl is not None:
                editor.set_ttl(ttl)
            if data is not None:
                editor.set_data(data)
            if edit is not None:
                edit(editor)
            updated.append(editor.record)
        return self.record_manager.replace_set(current, updated)
