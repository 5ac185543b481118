"""Client for the de-escalation audit trail sheet (Sheety REST API)."""

import logging
from typing import Any

import requests

from common.deescalation import AuditRecord, to_records

from ..config import DEFAULT_SOURCE_URL

logger = logging.getLogger(__name__)


def extract_rows(payload: Any) -> list:
    """Pull the row list out of a sheet response.

    A body without a "rows" list is treated as an empty sheet, not an error.
    """
    if isinstance(payload, dict):
        rows = payload.get("rows")
        if isinstance(rows, list):
            return rows
    return []


class AuditTrailClient:
    """Reads the audit trail sheet over HTTP.

    One GET with no query parameters or auth headers per call.
    """

    def __init__(self, source_url: str | None = None, timeout: int | float | None = None):
        self.source_url = source_url or DEFAULT_SOURCE_URL
        self.timeout = timeout if timeout is not None else 10
        self.session = requests.Session()
        self.session.headers.update({
            "Accept": "application/json",
        })

    def fetch_payload(self) -> Any:
        """GET the sheet and return the parsed JSON body.

        An HTTP error status is not an exception: a JSON error body (quota,
        rate limit) is returned like any other payload.

        Raises:
            requests.RequestException: On transport failure.
            ValueError: If the body is not JSON.
        """
        logger.debug(f"Fetching audit trail from {self.source_url}")
        response = self.session.get(self.source_url, timeout=self.timeout)
        if not response.ok:
            logger.warning(f"Audit trail returned HTTP {response.status_code}")
        return response.json()

    def fetch_rows(self) -> list:
        """Fetch the raw sheet rows."""
        rows = extract_rows(self.fetch_payload())
        logger.debug(f"Fetched {len(rows)} audit trail row(s)")
        return rows

    def fetch_records(self) -> list[AuditRecord]:
        """Fetch the sheet rows as AuditRecord objects."""
        return to_records(self.fetch_rows())

    def close(self) -> None:
        self.session.close()
