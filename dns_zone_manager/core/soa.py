"""
SOA serial management.

Every change submitted to a zone can carry a replacement of the zone's SOA
record with a new serial, so secondary nameservers notice the update.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

from ..exceptions import RecordNotFoundError
from .record import SOA_TYPE, Record, parse_soa, replace_soa_serial

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LiteralSerial:
    """Use this serial as-is."""

    value: int

    def next_serial(self, old_serial: int) -> int:
        return self.value


@dataclass(frozen=True)
class ComputedSerial:
    """Derive the serial from the current one."""

    compute: Callable[[int], int]

    def next_serial(self, old_serial: int) -> int:
        return self.compute(old_serial)


@dataclass(frozen=True)
class DefaultSerial:
    """Increment the current serial by one."""

    def next_serial(self, old_serial: int) -> int:
        return old_serial + 1


SerialPolicy = Union[LiteralSerial, ComputedSerial, DefaultSerial]


def serial_policy(option=None) -> SerialPolicy:
    """
    Convert a ``soa_serial`` option to a SerialPolicy.

    Args:
        option: None, an int, a callable taking the old serial, or a policy

    Returns:
        The matching SerialPolicy
    """
    if isinstance(option, (LiteralSerial, ComputedSerial, DefaultSerial)):
        return option
    if option is None:
        return DefaultSerial()
    if isinstance(option, int) and not isinstance(option, bool):
        return LiteralSerial(option)
    if callable(option):
        return ComputedSerial(option)
    raise TypeError(f"Unsupported soa_serial value: {option!r}")


class SOASerialManager:
    """Appends an SOA replacement to a set of record changes."""

    def __init__(self, dns_client):
        self.dns_client = dns_client

    def apply(
        self,
        zone,
        additions: List[Record],
        deletions: List[Record],
        skip_soa: bool = False,
        soa_serial=None,
    ) -> Tuple[List[Record], List[Record]]:
        """
        Add the SOA serial update to additions and deletions.

        The updated SOA is always the last addition and the current SOA is
        always the last deletion, unless the change already replaces the SOA.
        Then the SOA being deleted counts as the current one, and the SOA
        being added gets the new serial where it stands.

        Args:
            zone: The Zone being changed
            additions: Records to add
            deletions: Records to delete
            skip_soa: Leave the SOA record untouched
            soa_serial: An int, a callable or a SerialPolicy for the new serial

        Returns:
            Tuple of (additions, deletions)

        Raises:
            RecordNotFoundError: If the zone has no SOA record
        """
        if skip_soa or (not additions and not deletions):
            return list(additions), list(deletions)

        policy = serial_policy(soa_serial)
        additions, deletions = list(additions), list(deletions)

        removed = _find_soa(deletions, zone.dns)
        if removed is None:
            current = self._lookup_soa(zone)
            deletions.append(current)
        else:
            current = deletions[removed]

        old_serial = parse_soa(current.data[0]).serial
        new_serial = policy.next_serial(old_serial)

        added = _find_soa(additions, zone.dns)
        if added is None:
            additions.append(_with_serial(current, new_serial))
        else:
            additions[added] = _with_serial(additions[added], new_serial)
        logger.info(f"Updating SOA serial for {zone.dns}: {old_serial} -> {new_serial}")

        return additions, deletions

    def _lookup_soa(self, zone) -> Record:
        response = self.dns_client.list_rrsets(zone.name, name=zone.dns, type=SOA_TYPE)
        rrsets = response.get("rrsets") or []
        if not rrsets:
            raise RecordNotFoundError(zone.dns, SOA_TYPE)
        return Record.from_api(rrsets[0])


def _find_soa(records: List[Record], dns_name: str) -> Optional[int]:
    for index, record in enumerate(records):
        if record.type == SOA_TYPE and record.name == dns_name:
            return index
    return None


def _with_serial(record: Record, serial: int) -> Record:
    return Record(
        record.name,
        record.type,
        record.ttl,
        [replace_soa_serial(record.data[0], serial)],
    )
