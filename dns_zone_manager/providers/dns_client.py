"""
DNS Client - Unified, retrying interface to the DNS backend

This module selects the configured provider and runs every call to it
through the retry executor. Single-resource lookups report a missing
resource as None instead of raising.
"""

import logging
from typing import Dict, Optional

from ..exceptions import ApiError, ConfigurationError
from ..utils.retry import RetryExecutor, RetryPolicy
from .base_provider import DNSProvider
from .cloud_dns_provider import CloudDNSProvider
from .mock_provider import MockDNSProvider

logger = logging.getLogger(__name__)


class DNSClient:
    """Unified DNS client that supports multiple providers."""

    def __init__(
        self,
        config: Dict,
        provider: Optional[DNSProvider] = None,
        executor: Optional[RetryExecutor] = None,
    ):
        """Initialize DNS client with configuration."""
        self.config = config
        self.provider = provider or self._get_provider()
        self.executor = executor or RetryExecutor(
            RetryPolicy.from_config(config.get("retry"))
        )

    @property
    def retry_policy(self) -> RetryPolicy:
        return self.executor.policy

    def _get_provider(self) -> DNSProvider:
        """Get DNS provider based on configuration."""
        provider_name = self.config.get("default_provider", "cloud_dns")
        provider_config = self.config.get("dns_providers", {}).get(provider_name) or {}

        if provider_name == "cloud_dns":
            return CloudDNSProvider(provider_config)
        elif provider_name == "mock":
            return MockDNSProvider(provider_config)
        raise ConfigurationError(f"Unknown DNS provider '{provider_name}'")

    def _execute(self, method: str, *args, **kwargs):
        return self.executor.execute(getattr(self.provider, method), *args, **kwargs)

    def _get_or_none(self, method: str, *args) -> Optional[Dict]:
        try:
            return self._execute(method, *args)
        except ApiError as e:
            if e.not_found:
                logger.debug(f"{method}{args} returned 404")
                return None
            raise

    def list_zones(self, page_token=None, max_results=None) -> Dict:
        """List managed zones."""
        return self._execute("list_zones", page_token=page_token, max_results=max_results)

    def get_zone(self, zone: str) -> Optional[Dict]:
        """Get a managed zone, or None if it does not exist."""
        return self._get_or_none("get_zone", zone)

    def create_zone(self, body: Dict) -> Dict:
        """Create a managed zone."""
        return self._execute("create_zone", body)

    def delete_zone(self, zone: str) -> None:
        """Delete a managed zone."""
        return self._execute("delete_zone", zone)

    def list_rrsets(self, zone, name=None, type=None, page_token=None, max_results=None) -> Dict:
        """List record sets in a zone."""
        return self._execute(
            "list_rrsets",
            zone,
            name=name,
            type=type,
            page_token=page_token,
            max_results=max_results,
        )

    def create_change(self, zone: str, body: Dict) -> Dict:
        """Submit a change to a zone."""
        return self._execute("create_change", zone, body)

    def get_change(self, zone: str, change_id: str) -> Optional[Dict]:
        """Get a change, or None if it does not exist."""
        return self._get_or_none("get_change", zone, change_id)

    def list_changes(
        self, zone, sort_by=None, sort_order=None, page_token=None, max_results=None
    ) -> Dict:
        """List the changes made to a zone."""
        return self._execute(
            "list_changes",
            zone,
            sort_by=sort_by,
            sort_order=sort_order,
            page_token=page_token,
            max_results=max_results,
        )
