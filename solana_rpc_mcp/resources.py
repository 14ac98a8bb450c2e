"""
Static documentation resources.

Each resource relays one fixed Solana documentation page verbatim. Fetch
failures are reported in the resource body as ``"Error: ..."`` text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

DOCS_RAW_BASE_URL = "https://raw.githubusercontent.com/solana-foundation/solana-com/main/content/docs"

Fetcher = Callable[[str], Awaitable[str]]


@dataclass(slots=True, frozen=True)
class ResourceDefinition:
    name: str
    uri: str
    source_url: str
    description: str
    mime_type: str = "text/markdown"


RESOURCES: Dict[str, ResourceDefinition] = {
    resource.uri: resource
    for resource in (
        ResourceDefinition(
            name="solanaDocsInstallation",
            uri="solana://docs/intro/installation",
            source_url=f"{DOCS_RAW_BASE_URL}/intro/installation.mdx",
            description="Solana docs: installing the Solana CLI and toolchain.",
        ),
        ResourceDefinition(
            name="solanaDocsClusters",
            uri="solana://docs/references/clusters",
            source_url=f"{DOCS_RAW_BASE_URL}/references/clusters.mdx",
            description="Solana docs: clusters and public RPC endpoints.",
        ),
    )
}


async def fetch_text(url: str) -> str:
    """GET ``url`` and return the body text regardless of status code."""
    async with httpx.AsyncClient(timeout=None, follow_redirects=True) as client:
        response = await client.get(url)
    return response.text


def list_resources() -> List[Dict[str, Any]]:
    return [
        {
            "name": resource.name,
            "uri": resource.uri,
            "description": resource.description,
            "mimeType": resource.mime_type,
        }
        for resource in RESOURCES.values()
    ]


def _contents(uri: str, text: str) -> Dict[str, Any]:
    return {"contents": [{"uri": uri, "text": text}]}


async def read_resource(uri: str, *, fetcher: Optional[Fetcher] = None) -> Dict[str, Any]:
    """Resolve a resource URI to its relayed document; never raises."""
    resource = RESOURCES.get(uri)
    if resource is None:
        logger.warning("resource outcome=unknown uri=%s", uri, extra={"uri": uri})
        return _contents(uri, f"Error: Unknown resource: {uri}")

    fetch = fetcher or fetch_text
    try:
        text = await fetch(resource.source_url)
    except Exception as exc:
        logger.warning("resource outcome=error uri=%s error=%s", uri, exc, extra={"uri": uri, "error": str(exc)})
        return _contents(uri, f"Error: {exc}")
    return _contents(uri, text)
