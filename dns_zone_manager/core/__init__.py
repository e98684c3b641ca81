"""
Core DNS management functionality.

This package contains records, the diff engine, SOA serial handling,
change submission, pagination and the Zone and DNSManager handles.
"""

from .change import Change, ChangeOrchestrator
from .dns_manager import DNSManager
from .pagination import PaginatedList
from .record import Record
from .record_manager import ChangeSet, RecordManager
from .soa import ComputedSerial, DefaultSerial, LiteralSerial, SOASerialManager
from .transaction import RecordEditor, ZoneTransaction
from .zone import Zone

__all__ = [
    "Change",
    "ChangeOrchestrator",
    "ChangeSet",
    "ComputedSerial",
    "DefaultSerial",
    "DNSManager",
    "LiteralSerial",
    "PaginatedList",
    "Record",
    "RecordEditor",
    "RecordManager",
    "SOASerialManager",
    "Zone",
    "ZoneTransaction",
]
