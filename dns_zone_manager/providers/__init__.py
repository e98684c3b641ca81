"""
DNS provider implementations.

This package contains the Cloud DNS REST provider, an in-memory mock
provider, and the retrying DNSClient that fronts them.
"""

from .base_provider import DNSProvider
from .cloud_dns_provider import CloudDNSProvider
from .dns_client import DNSClient
from .mock_provider import MockDNSProvider

__all__ = ["DNSClient", "DNSProvider", "CloudDNSProvider", "MockDNSProvider"]
