"""Tool to fetch a remote outline document and parse it."""

import logging
import os
import re
from typing import Optional

import httpx

from ..config import is_local_only
from ..security import scan_content_for_secrets
from .parse_outline import outline_result, resolve_config

logger = logging.getLogger(__name__)

USER_AGENT = "listtree-mcp"
MAX_CONTENT_BYTES = 2 * 1024 * 1024

_GITHUB_BLOB = re.compile(r"^https?://github\.com/([^/]+)/([^/]+)/blob/(.+)$")


def to_raw_url(url: str) -> str:
    """Rewrite GitHub blob URLs to their raw.githubusercontent.com form."""
    url = url.strip()
    match = _GITHUB_BLOB.match(url)
    if match:
        owner, repo, rest = match.groups()
        return f"https://raw.githubusercontent.com/{owner}/{repo}/{rest}"
    return url


async def fetch_text(
    url: str,
    token: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """Fetch a document body as text. Raises httpx errors and ValueError."""
    headers = {"User-Agent": USER_AGENT}
    if token and "githubusercontent.com" in url:
        headers["Authorization"] = f"token {token}"

    if client is None:
        async with httpx.AsyncClient(follow_redirects=True, timeout=30.0) as owned:
            response = await owned.get(url, headers=headers)
    else:
        response = await client.get(url, headers=headers)

    response.raise_for_status()
    if len(response.content) > MAX_CONTENT_BYTES:
        raise ValueError(f"Document too large ({len(response.content)} bytes)")
    return response.text


async def fetch_outline(
    url: str,
    indent_width: Optional[int] = None,
    list_marker: Optional[str] = None,
    max_depth: Optional[int] = None,
    github_token: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> dict:
    """
    Fetch a remote outline document and parse it.

    Args:
        url: Document URL (GitHub blob URLs are fetched raw)
        indent_width: Whitespace characters per depth level
        list_marker: Prefix recognized as a list-item marker
        max_depth: Only include nodes with depth <= this value
        github_token: Token for private GitHub content (defaults to GITHUB_TOKEN)
        client: Optional shared httpx client

    Returns:
        Parse result plus source URL, or a dict with "error"
    """
    if is_local_only():
        return {
            "success": False,
            "error": "Remote fetching disabled in local-only mode. Set LISTTREE_LOCAL_ONLY=false or unset to enable.",
        }

    try:
        config = resolve_config(indent_width, list_marker)
    except ValueError as e:
        return {"success": False, "error": str(e)}

    raw_url = to_raw_url(url)
    if not raw_url.startswith(("http://", "https://")):
        return {"success": False, "error": f"Unsupported URL: {url}"}

    token = github_token or os.environ.get("GITHUB_TOKEN")

    try:
        content = await fetch_text(raw_url, token, client)
    except httpx.HTTPStatusError as e:
        return {
            "success": False,
            "error": f"HTTP {e.response.status_code} fetching {raw_url}",
            "url": raw_url,
        }
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Fetch failed for %s: %s", raw_url, e)
        return {"success": False, "error": f"Could not fetch {raw_url}: {e}", "url": raw_url}

    detected = scan_content_for_secrets(content)
    if detected:
        logger.warning("Secret detected in %s: %s", raw_url, ', '.join(detected))
        return {
            "success": False,
            "error": f"Secret detected in document ({', '.join(detected)})",
            "url": raw_url,
        }

    result = outline_result(content, config, max_depth)
    result["success"] = True
    result["url"] = raw_url
    return result
