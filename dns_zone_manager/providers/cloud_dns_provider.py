"""
Google Cloud DNS provider implementation.

This module talks to the Cloud DNS v1 REST API with requests. Retries are
not handled here; the DNSClient wraps every call in its retry executor.
"""

import logging
from typing import Dict, Optional

import requests

from ..exceptions import ApiError, ConfigurationError
from .base_provider import DNSProvider

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://dns.googleapis.com"


class CloudDNSProvider(DNSProvider):
    """Cloud DNS provider using the v1 REST API."""

    # Default timeout for all HTTP requests: (connect, read) in seconds.
    DEFAULT_TIMEOUT = (10, 60)

    def __init__(self, config: Dict, session: Optional[requests.Session] = None):
        """Initialize the Cloud DNS provider."""
        self.config = config
        self.project = config.get("project")
        if not self.project:
            raise ConfigurationError("Cloud DNS provider requires a 'project'")

        self.endpoint = config.get("endpoint", DEFAULT_ENDPOINT).rstrip("/")
        self.base_url = f"{self.endpoint}/dns/v1/projects/{self.project}"
        timeout = config.get("timeout") or self.DEFAULT_TIMEOUT
        self.timeout = tuple(timeout) if isinstance(timeout, list) else timeout

        self.session = session or requests.Session()
        self.session.headers.update(
            {"Content-Type": "application/json", "Accept": "application/json"}
        )
        token = config.get("token")
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

        logger.info(f"Cloud DNS provider initialized for project {self.project}")

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict] = None,
        body: Optional[Dict] = None,
    ) -> Dict:
        """Send a request and return the parsed JSON response."""
        url = f"{self.base_url}{path}"
        params = {k: v for k, v in (params or {}).items() if v is not None}
        logger.debug(f"{method} {url} params={params}")

        response = self.session.request(
            method, url, params=params or None, json=body, timeout=self.timeout
        )
        if not response.ok:
            raise ApiError.from_response(response)
        if not response.content:
            return {}
        return response.json()

    def list_zones(self, page_token=None, max_results=None) -> Dict:
        return self._request(
            "GET",
            "/managedZones",
            params={"pageToken": page_token, "maxResults": max_results},
        )

    def get_zone(self, zone: str) -> Dict:
        return self._request("GET", f"/managedZones/{zone}")

    def create_zone(self, body: Dict) -> Dict:
        return self._request("POST", "/managedZones", body=body)

    def delete_zone(self, zone: str) -> None:
        self._request("DELETE", f"/managedZones/{zone}")

    def list_rrsets(self, zone, name=None, type=None, page_token=None, max_results=None) -> Dict:
        return self._request(
            "GET",
            f"/managedZones/{zone}/rrsets",
            params={
                "name": name,
                "type": type,
                "pageToken": page_token,
                "maxResults": max_results,
            },
        )

    def create_change(self, zone: str, body: Dict) -> Dict:
        return self._request("POST", f"/managedZones/{zone}/changes", body=body)

    def get_change(self, zone: str, change_id: str) -> Dict:
        return self._request("GET", f"/managedZones/{zone}/changes/{change_id}")

    def list_changes(
        self, zone, sort_by=None, sort_order=None, page_token=None, max_results=None
    ) -> Dict:
        return self._request(
            "GET",
            f"/managedZones/{zone}/changes",
            params={
                "sortBy": sort_by,
                "sortOrder": sort_order,
                "pageToken": page_token,
                "maxResults": max_results,
            },
        )
