"""HTTP record fetcher adapter.

Retrieves raw records as a JSON array from a REST endpoint, with:
- Configuration injection (base URL, timeout)
- A lazily created, reusable requests session
- Transport and payload failures mapped to FetchError
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

import requests

from ...config import SourceConfig, get_config
from ...domain.errors import FetchError
from ...ports.records import RawRecord


@dataclass
class HttpRecordFetcher:
    """Record fetcher backed by an HTTP JSON API.

    This adapter implements RecordFetcherPort. A resource is either an
    absolute http(s) URL, used as-is, or a name joined onto the base URL
    (e.g. 'companies' -> '<base_url>/companies').

    Attributes:
        config: Source configuration
        session: Optional requests session (created on first use)
    """

    config: SourceConfig = field(default_factory=lambda: get_config().source)
    session: Optional[requests.Session] = field(default=None, repr=False)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _get_session(self) -> requests.Session:
        if self.session is None:
            self.session = requests.Session()
            self.session.headers.update({"Accept": "application/json"})
        return self.session

    def close(self) -> None:
        """Close the session, if one was opened."""
        if self.session is not None:
            self.session.close()
            self.session = None

    def resolve_url(self, resource: str) -> str:
        """Return the URL a resource is fetched from."""
        if resource.startswith(("http://", "https://")):
            return resource
        return f"{self.config.base_url.rstrip('/')}/{resource.lstrip('/')}"

    def fetch_records(self, resource: str) -> Sequence[RawRecord]:
        """Fetch every record of a resource.

        Args:
            resource: Logical resource name or absolute URL.

        Returns:
            The decoded records, in response order.

        Raises:
            FetchError: On transport errors, non-2xx responses, invalid
                JSON or a payload that is not a list of objects.
        """
        url = self.resolve_url(resource)
        self._logger.debug("Fetching records", extra={"url": url})

        try:
            response = self._get_session().get(
                url, timeout=self.config.timeout_seconds
            )
        except requests.RequestException as e:
            raise FetchError(
                f"Request for {url} failed",
                resource=resource,
                cause=e,
            )

        if not response.ok:
            raise FetchError(
                f"Request for {url} returned HTTP {response.status_code}",
                resource=resource,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise FetchError(
                f"Response from {url} is not valid JSON",
                resource=resource,
                status_code=response.status_code,
                cause=e,
            )

        if not isinstance(payload, list) or not all(
            isinstance(item, dict) for item in payload
        ):
            raise FetchError(
                f"Response from {url} is not a list of records",
                resource=resource,
                status_code=response.status_code,
            )

        self._logger.info(
            "Records fetched",
            extra={"resource": resource, "records": len(payload)},
        )
        return payload
