"""Archive extractor — pulls ``rule-info.json`` out of the scan-tool archive.

The archive is unzipped while it downloads: entries before the target are
drained chunk by chunk and discarded, only the target entry is held in
memory, and the download is abandoned as soon as the target has been read.
"""

from __future__ import annotations

import json
import logging
from contextlib import closing
from typing import Any

import httpx
import jsonschema
from stream_unzip import UnzipError, stream_unzip

from ballerina_sonar.contracts.load import RULE_INFO_SCHEMA, validate_instance
from ballerina_sonar.errors import ArchiveError
from ballerina_sonar.model.rule import RuleRecord

_logger = logging.getLogger(__name__)

DEFAULT_RULE_INFO_PATH = "resources/rule-info.json"
DOWNLOAD_CHUNK_SIZE = 64 * 1024

DOWNLOAD_HEADERS = {
    "Accept-Encoding": "identity",
    "Content-Disposition": "attachment; filename=scan-tool.bala",
}


def parse_rule_info(payload: bytes | str) -> list[RuleRecord]:
    """Parse and validate a ``rule-info.json`` document.

    Raises ``ArchiveError`` if the payload is not a JSON array of rule
    descriptors.
    """
    try:
        data: Any = json.loads(payload)
        validate_instance(data, RULE_INFO_SCHEMA)
    except (ValueError, jsonschema.ValidationError) as exc:
        raise ArchiveError(f"Malformed rule info in the scan tool archive: {exc}") from exc
    return [RuleRecord.from_dict(item) for item in data]


def extract_rule_info(
    client: httpx.Client,
    bala_url: str,
    entry_path: str = DEFAULT_RULE_INFO_PATH,
) -> list[RuleRecord]:
    """Stream the archive at *bala_url* and return the rules in *entry_path*.

    Rules come back in archive order; duplicate keys are left for the
    catalog builder to collapse.
    """
    _logger.debug("Downloading scan tool archive from %s", bala_url)
    try:
        with client.stream("GET", bala_url, headers=DOWNLOAD_HEADERS) as response:
            if not response.is_success:
                raise ArchiveError(
                    f"Failed to download the scan tool with status code: {response.status_code}"
                )
            entries = stream_unzip(response.iter_bytes(DOWNLOAD_CHUNK_SIZE))
            with closing(entries):
                for raw_name, _size, chunks in entries:
                    name = raw_name.decode("utf-8", errors="replace")
                    if name != entry_path:
                        # stream_unzip refuses to advance past an unread entry
                        for _ in chunks:
                            pass
                        continue
                    payload = b"".join(chunks)
                    _logger.debug("Found %s (%d bytes)", entry_path, len(payload))
                    return parse_rule_info(payload)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise ArchiveError(f"Failed to download the scan tool: {exc}") from exc
    except UnzipError as exc:
        raise ArchiveError(f"Failed to read the scan tool archive: {exc}") from exc

    raise ArchiveError(f"Failed to find {entry_path} in the scan tool archive")
