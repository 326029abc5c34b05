"""Remote catalog snapshot source fetched over HTTP."""

from typing import Optional

import requests

from dataprivacy.exceptions import CollaboratorUnavailableError
from dataprivacy.http_client import DEFAULT_TIMEOUT, get_default_headers, join_url
from dataprivacy.logging_config import logger

from .snapshot import CatalogSnapshot

SNAPSHOT_ENDPOINT = "/api/v1/privacy/snapshot"


class RemoteSnapshotSource:
    """
    Fetches a catalog snapshot document from a platform API.

    The endpoint returns the same document shape as a local snapshot file
    and is validated the same way.

    Example:
        source = RemoteSnapshotSource("https://lms.example.com", token="...")
        snapshot = source.fetch()
    """

    name = "remote-snapshot"

    def __init__(
        self,
        api_base_url: str,
        token: Optional[str] = None,
        timeout: int = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_base_url = api_base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._session = session

    @property
    def url(self) -> str:
        return join_url(self.api_base_url, SNAPSHOT_ENDPOINT)

    def fetch(self) -> CatalogSnapshot:
        """
        Fetch and validate the snapshot.

        Returns:
            CatalogSnapshot built from the response

        Raises:
            CollaboratorUnavailableError: On connection failure, timeout, error status or invalid JSON
            SnapshotValidationError: If the document does not match the snapshot schema
        """
        headers = get_default_headers(self.token)
        getter = self._session.get if self._session else requests.get

        try:
            response = getter(self.url, headers=headers, timeout=self.timeout)
        except requests.exceptions.ConnectionError as e:
            raise CollaboratorUnavailableError(self.name, f"Failed to connect to {self.api_base_url}") from e
        except requests.exceptions.Timeout as e:
            raise CollaboratorUnavailableError(self.name, "Snapshot request timed out") from e

        if not response.ok:
            err_msg = f"Failed to retrieve catalog snapshot. [{response.status_code}]"
            if response.headers.get("content-type") == "application/json":
                try:
                    error_data = response.json()
                    if "detail" in error_data:
                        err_msg += f" - {error_data['detail']}"
                except (ValueError, KeyError):
                    pass
            raise CollaboratorUnavailableError(self.name, err_msg)

        try:
            data = response.json()
        except ValueError as e:
            raise CollaboratorUnavailableError(self.name, "Invalid JSON response from snapshot endpoint") from e

        if not isinstance(data, dict):
            raise CollaboratorUnavailableError(self.name, "Snapshot response is not a JSON object")

        logger.info(f"Fetched catalog snapshot from {self.api_base_url}")
        return CatalogSnapshot.from_dict(data, source=self.name)
