"""
Zone file import and export using dnspython.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional

import dns.exception
import dns.name
import dns.rdata
import dns.rdataclass
import dns.rdatatype
import dns.zone

from ..core.record import SOA_TYPE, Record

logger = logging.getLogger(__name__)


class ZoneFileParser:
    """Reads and writes RFC 1035 master files for one zone apex."""

    def __init__(self, origin: str):
        self.origin = origin

    def parse(self, source, include_soa: bool = False) -> List[Record]:
        """
        Parse zone file content into records.

        Args:
            source: A path, a file-like object, or the zone file text
            include_soa: Keep the file's SOA record (skipped by default)

        Returns:
            Records with absolute names, one per RRset
        """
        text = self._read(source)
        try:
            zone = dns.zone.from_text(
                text,
                origin=self.origin,
                relativize=False,
                check_origin=False,
            )
        except dns.exception.DNSException as e:
            raise ValueError(f"Error parsing zone file: {e}")

        records = []
        for name, rdataset in zone.iterate_rdatasets():
            record_type = dns.rdatatype.to_text(rdataset.rdtype)
            if record_type == SOA_TYPE and not include_soa:
                continue
            records.append(
                Record(
                    name.to_text(),
                    record_type,
                    rdataset.ttl,
                    [rdata.to_text() for rdata in rdataset],
                )
            )

        logger.info(f"Parsed {len(records)} record sets from zone file")
        return records

    def render(self, records: Iterable[Record]) -> str:
        """Render records as zone file text."""
        zone = dns.zone.Zone(self.origin, relativize=False)
        for record in records:
            try:
                name = dns.name.from_text(record.name)
                rdtype = dns.rdatatype.from_text(record.type)
                rdatas = [
                    dns.rdata.from_text(dns.rdataclass.IN, rdtype, item)
                    for item in record.data
                ]
                rdataset = zone.find_rdataset(name, rdtype, create=True)
                for rdata in rdatas:
                    rdataset.add(rdata, record.ttl)
            except KeyError:
                logger.warning(f"Skipping {record.name}: outside zone {self.origin}")
            except dns.exception.DNSException as e:
                logger.warning(f"Skipping {record.name} {record.type}: {e}")

        return f"$ORIGIN {self.origin}\n" + zone.to_text(relativize=False)

    def _read(self, source) -> str:
        if hasattr(source, "read"):
            return source.read()
        if isinstance(source, Path):
            return source.read_text()
        if "\n" not in source and os.path.isfile(source):
            with open(source, "r") as f:
                return f.read()
        return source


def filter_records(
    records: Iterable[Record],
    only: Optional[Iterable[str]] = None,
    exclude: Optional[Iterable[str]] = None,
) -> List[Record]:
    """Keep records whose type is in ``only`` and not in ``exclude``."""
    only_types = {t.upper() for t in _as_list(only)}
    excluded = {t.upper() for t in _as_list(exclude)}
    return [
        r
        for r in records
        if (not only_types or r.type in only_types) and r.type not in excluded
    ]


def _as_list(value) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)
