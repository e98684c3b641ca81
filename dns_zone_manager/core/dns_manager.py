"""
DNS Zone Manager - entry point for a project's managed zones

DNSManager loads configuration, builds the retrying DNS client and hands
out Zone objects for record management.
"""

import logging
from typing import Dict, Optional, Union

from ..providers.dns_client import DNSClient
from ..utils.config import DEFAULT_CONFIG_PATH, load_config
from ..utils.validators import validate_zone_dns
from .pagination import PaginatedList
from .zone import Zone

logger = logging.getLogger(__name__)


class DNSManager:
    """Main DNS management class for a project's zones."""

    def __init__(self, config: Union[str, Dict] = DEFAULT_CONFIG_PATH, dns_client: Optional[DNSClient] = None):
        """Initialize the DNS manager with a configuration path or dict."""
        self.config = load_config(config) if isinstance(config, str) else dict(config)
        self.dns_client = dns_client or DNSClient(self.config)

    def zones(self, token: Optional[str] = None, max: Optional[int] = None) -> PaginatedList[Zone]:
        """List the managed zones in the project."""
        response = self.dns_client.list_zones(page_token=token, max_results=max)
        items = [Zone.from_api(z, self.dns_client) for z in response.get("managedZones") or []]
        return PaginatedList(
            items,
            token=response.get("nextPageToken"),
            loader=self.zones,
            query={"max": max},
        )

    def zone(self, name: str) -> Optional[Zone]:
        """Get a zone by name or id; None if it does not exist."""
        data = self.dns_client.get_zone(name)
        if data is None:
            logger.info(f"Zone {name} not found")
            return None
        return Zone.from_api(data, self.dns_client)

    def create_zone(
        self,
        name: str,
        dns: str,
        description: str = "",
        name_server_set: Optional[str] = None,
    ) -> Zone:
        """
        Create a managed zone.

        Args:
            name: Unique resource name, e.g. "example-com"
            dns: Zone apex; a trailing dot is appended when missing
            description: Free-form description
            name_server_set: Optional name server set to serve the zone

        Returns:
            The new Zone
        """
        if not dns.endswith("."):
            dns = f"{dns}."
        if not validate_zone_dns(dns):
            raise ValueError(f"Invalid zone DNS name '{dns}'")

        body = {"kind": "dns#managedZone", "name": name, "dnsName": dns, "description": description}
        if name_server_set:
            body["nameServerSet"] = name_server_set

        data = self.dns_client.create_zone(body)
        logger.info(f"Created zone {name} for {dns}")
        return Zone.from_api(data, self.dns_client)
