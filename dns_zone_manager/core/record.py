"""
DNS resource record value type and SOA payload handling.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, NamedTuple, Union

from ..utils.validators import is_ip_address, validate_record_type, validate_ttl

SOA_TYPE = "SOA"

_SOA_SERIAL_RE = re.compile(r"^(\s*\S+\s+\S+\s+)(\d+)(?=\s)")


@dataclass(eq=True)
class Record:
    """
    One DNS resource record set entry.

    ``name`` is fully qualified: dot-terminated, or an IP literal as used by
    NAPTR owner names. ``data`` is ordered; for multi-value types such as MX
    the order is significant and takes part in equality.

    Raises:
        ValueError: On a relative name, a negative TTL or a malformed type
    """

    name: str
    type: str
    ttl: int
    data: List[str] = field(default_factory=list)

    def __post_init__(self):
        if not isinstance(self.name, str) or not (
            self.name.endswith(".") or is_ip_address(self.name)
        ):
            raise ValueError(f"Record name must be fully qualified: {self.name!r}")
        if not validate_record_type(self.type):
            raise ValueError(f"Invalid record type: {self.type!r}")
        self.type = self.type.upper()
        self.ttl = int(self.ttl)
        if not validate_ttl(self.ttl):
            raise ValueError(f"Invalid TTL for {self.name}: {self.ttl}")
        self.data = normalize_data(self.data)

    def __hash__(self):
        return hash((self.name, self.type, self.ttl, tuple(self.data)))

    @property
    def key(self):
        """The RRset identity (name, type)."""
        return (self.name, self.type)

    def copy(self) -> "Record":
        return Record(self.name, self.type, self.ttl, list(self.data))

    def to_api(self) -> Dict:
        """Serialize to the wire schema."""
        return {
            "name": self.name,
            "type": self.type,
            "ttl": self.ttl,
            "rrdatas": list(self.data),
        }

    @classmethod
    def from_api(cls, data: Dict) -> "Record":
        return cls(
            data["name"],
            data["type"],
            data.get("ttl", 0),
            list(data.get("rrdatas") or []),
        )

    def __str__(self):
        return f"{self.name} {self.ttl} {self.type} {' '.join(self.data)}"


def normalize_data(data: Union[str, Iterable[str], None]) -> List[str]:
    """Wrap a scalar rrdata string into a list."""
    if data is None:
        return []
    if isinstance(data, str):
        return [data]
    return [str(d) for d in data]


def as_record_list(records) -> List[Record]:
    """Accept a single Record, None, or an iterable of Records."""
    if records is None:
        return []
    if isinstance(records, Record):
        return [records]
    return list(records)


class SOAData(NamedTuple):
    """The seven fields of an SOA payload."""

    primary_ns: str
    admin_email: str
    serial: int
    refresh: int
    retry: int
    expire: int
    minimum: int


def parse_soa(text: str) -> SOAData:
    """
    Parse an SOA rrdata string.

    Raises:
        ValueError: If the payload does not have seven fields
    """
    fields = text.split()
    if len(fields) != 7:
        raise ValueError(f"Malformed SOA data: {text!r}")
    primary_ns, admin_email, *numbers = fields
    return SOAData(primary_ns, admin_email, *(int(n) for n in numbers))


def replace_soa_serial(text: str, serial: int) -> str:
    """Rewrite the serial field of an SOA payload, keeping everything else."""
    parse_soa(text)
    updated, count = _SOA_SERIAL_RE.subn(
        lambda m: f"{m.group(1)}{int(serial)}", text, count=1
    )
    if count != 1:
        raise ValueError(f"Malformed SOA data: {text!r}")
    return updated
