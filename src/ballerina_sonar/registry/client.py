"""Registry client — fetches the scan tool's README and archive URL."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from ballerina_sonar.errors import RegistryError

_logger = logging.getLogger(__name__)

ACCEPT_JSON = {"Accept": "application/json"}


@dataclass(frozen=True, slots=True)
class ToolMetadata:
    """The two fields of the registry entry the pipeline consumes."""

    readme: str
    bala_url: str


def fetch_tool_metadata(client: httpx.Client, url: str) -> ToolMetadata:
    """GET the registry entry at *url* and return its README and archive URL.

    Raises ``RegistryError`` on transport failure, a non-success status, or
    a body that is not a JSON object with a valid ``balaURL``. No retries.
    """
    _logger.debug("Fetching scan tool metadata from %s", url)
    try:
        response = client.get(url, headers=ACCEPT_JSON)
    except httpx.HTTPError as exc:
        raise RegistryError(f"Failed to fetch the scan tool metadata from {url}: {exc}") from exc

    if not response.is_success:
        raise RegistryError(
            f"Failed to fetch the scan tool metadata with status code: {response.status_code}"
        )

    try:
        payload = response.json()
    except ValueError as exc:
        raise RegistryError(f"Scan tool metadata from {url} is not valid JSON") from exc
    if not isinstance(payload, dict):
        raise RegistryError("Scan tool metadata must be a JSON object")

    bala_url = payload.get("balaURL")
    if not isinstance(bala_url, str) or not bala_url:
        raise RegistryError("Scan tool metadata has no balaURL")
    try:
        httpx.URL(bala_url)
    except httpx.InvalidURL as exc:
        raise RegistryError(f"Scan tool metadata has an invalid balaURL: {exc}") from exc
    readme = payload.get("readme")
    if not isinstance(readme, str):
        _logger.warning("Scan tool metadata has no readme; rule descriptions will be empty")
        readme = ""

    return ToolMetadata(readme=readme, bala_url=bala_url)
