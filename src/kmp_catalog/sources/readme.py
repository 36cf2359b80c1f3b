"""Catalog README retrieval through the GitHub contents API."""

import base64
import binascii

import httpx
from loguru import logger

from kmp_catalog.config import settings


class ReadmeError(RuntimeError):
    """The catalog README could not be fetched or decoded."""


def contents_url() -> str:
    return (
        f"{settings.github_api_url.rstrip('/')}/repos/{settings.source_repo}"
        f"/contents/{settings.source_path}"
    )


def decode_contents(data: dict) -> str:
    """Decode the base64 ``content`` field of a contents API response."""
    content = data.get("content")
    if not isinstance(content, str):
        raise ReadmeError("Contents response has no 'content' field")
    encoding = data.get("encoding", "base64")
    if encoding != "base64":
        raise ReadmeError(f"Unsupported contents encoding: {encoding}")
    try:
        # The API wraps base64 at 60 columns.
        raw = base64.b64decode("".join(content.split()), validate=True)
        return raw.decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ReadmeError(f"Could not decode README contents: {e}") from e


async def fetch_readme(client: httpx.AsyncClient | None = None) -> str:
    """Fetch the catalog README text.

    Raises:
        ReadmeError: On transport errors, error statuses or bad payloads.
    """
    url = contents_url()
    logger.info(f"Fetching catalog README: {settings.source_repo}/{settings.source_path}")

    async def _get(c: httpx.AsyncClient) -> httpx.Response:
        return await c.get(url, headers=settings.auth_headers())

    try:
        if client is not None:
            response = await _get(client)
        else:
            async with httpx.AsyncClient(
                timeout=settings.request_timeout, follow_redirects=True
            ) as owned:
                response = await _get(owned)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as e:
        raise ReadmeError(
            f"README request failed: HTTP {e.response.status_code}"
        ) from e
    except httpx.HTTPError as e:
        raise ReadmeError(f"README request failed: {e}") from e
    except ValueError as e:
        raise ReadmeError(f"README response is not JSON: {e}") from e

    if not isinstance(data, dict):
        raise ReadmeError("Contents response is not a JSON object")
    return decode_contents(data)
