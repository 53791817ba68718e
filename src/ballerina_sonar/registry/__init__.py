"""Ballerina Central access: tool metadata and the tool archive."""

from __future__ import annotations

import httpx

from ballerina_sonar.core.config import Settings, settings as _default_settings


def build_client(config: Settings | None = None) -> httpx.Client:
    """Build the synchronous HTTP client used for Ballerina Central.

    Redirects are followed because Central hands archive downloads off to
    its CDN.
    """
    cfg = config or _default_settings
    return httpx.Client(
        timeout=httpx.Timeout(cfg.HTTP_TIMEOUT),
        follow_redirects=True,
        headers={"User-Agent": cfg.USER_AGENT},
    )
