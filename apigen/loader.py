"""Load and parse the OpenAPI document.

Reads it over HTTP (one blocking GET) or from a local JSON file, and
extracts paths and component schemas.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx

from .errors import DocumentError, FetchError

logger = logging.getLogger(__name__)

FETCH_TIMEOUT = 30.0


def fetch_spec(url: str, client: httpx.Client | None = None) -> dict[str, Any]:
    """Download the OpenAPI document and parse it as JSON."""
    logger.debug("Fetching %s", url)
    try:
        if client is not None:
            resp = client.get(url)
        else:
            resp = httpx.get(url, timeout=FETCH_TIMEOUT, follow_redirects=True)
        resp.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise FetchError(f"{url} returned {exc.response.status_code}") from exc
    except httpx.HTTPError as exc:
        raise FetchError(f"could not fetch {url}: {exc}") from exc

    try:
        doc = resp.json()
    except json.JSONDecodeError as exc:
        raise FetchError(f"{url} did not return JSON: {exc}") from exc
    if not isinstance(doc, dict):
        raise FetchError(f"{url} did not return a JSON object")
    return doc


def load_spec(path: Path) -> dict[str, Any]:
    """Load the OpenAPI document from disk."""
    try:
        with open(path, encoding="utf-8") as f:
            doc = json.load(f)
    except OSError as exc:
        raise DocumentError(f"could not read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DocumentError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(doc, dict):
        raise DocumentError(f"{path} does not contain a JSON object")
    return doc


def load_document(source: str) -> dict[str, Any]:
    """Fetch http(s) URLs, read anything else as a file path."""
    if source.startswith(("http://", "https://")):
        return fetch_spec(source)
    return load_spec(Path(source))


def get_paths(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the spec."""
    return spec.get("paths") or {}


def get_schemas(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract component schemas from the spec."""
    return (spec.get("components") or {}).get("schemas") or {}
