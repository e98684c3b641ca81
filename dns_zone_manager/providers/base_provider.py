"""
Base DNS provider interface.

This module defines the abstract base class that all DNS backends must
implement. Providers speak the wire schema: every method takes and returns
plain dictionaries shaped like the Cloud DNS v1 REST resources.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional


class DNSProvider(ABC):
    """Abstract base class for DNS providers."""

    @abstractmethod
    def list_zones(
        self, page_token: Optional[str] = None, max_results: Optional[int] = None
    ) -> Dict:
        """List managed zones: ``{"managedZones": [...], "nextPageToken"?}``."""
        pass

    @abstractmethod
    def get_zone(self, zone: str) -> Dict:
        """Get a managed zone by name or id."""
        pass

    @abstractmethod
    def create_zone(self, body: Dict) -> Dict:
        """Create a managed zone."""
        pass

    @abstractmethod
    def delete_zone(self, zone: str) -> None:
        """Delete a managed zone."""
        pass

    @abstractmethod
    def list_rrsets(
        self,
        zone: str,
        name: Optional[str] = None,
        type: Optional[str] = None,
        page_token: Optional[str] = None,
        max_results: Optional[int] = None,
    ) -> Dict:
        """List record sets: ``{"rrsets": [...], "nextPageToken"?}``."""
        pass

    @abstractmethod
    def create_change(self, zone: str, body: Dict) -> Dict:
        """Submit ``{"additions": [...], "deletions": [...]}`` atomically."""
        pass

    @abstractmethod
    def get_change(self, zone: str, change_id: str) -> Dict:
        """Get a change by id."""
        pass

    @abstractmethod
    def list_changes(
        self,
        zone: str,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        page_token: Optional[str] = None,
        max_results: Optional[int] = None,
    ) -> Dict:
        """List changes: ``{"changes": [...], "nextPageToken"?}``."""
        pass
