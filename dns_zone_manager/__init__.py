"""
DNS Zone Manager - Managed DNS zone record reconciliation

A client for managed DNS zones that computes minimal record changes,
keeps the zone's SOA serial current, and submits each update as one
atomic change, with pagination and retry/backoff for every remote call.
"""

__version__ = "1.0.0"
__author__ = "DNS Zone Manager Team"
__description__ = "Record reconciliation and change management for managed DNS zones"

from .core.change import Change
from .core.dns_manager import DNSManager
from .core.pagination import PaginatedList
from .core.record import Record
from .core.record_manager import RecordManager
from .core.zone import Zone
from .exceptions import ApiError, DNSError, RecordNotFoundError
from .providers.dns_client import DNSClient
from .utils.retry import RetryExecutor, RetryPolicy

__all__ = [
    "ApiError",
    "Change",
    "DNSClient",
    "DNSError",
    "DNSManager",
    "PaginatedList",
    "Record",
    "RecordManager",
    "RecordNotFoundError",
    "RetryExecutor",
    "RetryPolicy",
    "Zone",
]
