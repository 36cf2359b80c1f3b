"""GitHub star counts for catalog entries.

Every entry is looked up independently. Entries hosted elsewhere are
skipped without a request, and any failed lookup degrades to ``None``
so a flaky API never breaks the build.
"""

import asyncio
from dataclasses import replace
from urllib.parse import urlparse

import httpx
from loguru import logger

from kmp_catalog.config import settings
from kmp_catalog.models import LibraryRecord

_GITHUB_HOST = "github.com"


def repo_api_url(url: str) -> str | None:
    """Map a github.com repository URL to its REST API URL.

    Returns None for URLs on any other host.
    """
    try:
        parsed = urlparse(url)
    except ValueError:
        return None

    if (parsed.hostname or "").lower() != _GITHUB_HOST:
        return None

    # Deep links (/tree/main/sub, /blob/...) still name one repository.
    segments = [s for s in parsed.path.split("/") if s]
    if len(segments) < 2:
        return None
    owner, repo = segments[0], segments[1].removesuffix(".git")
    if not repo:
        return None

    return f"{settings.github_api_url.rstrip('/')}/repos/{owner}/{repo}"


async def fetch_stars(client: httpx.AsyncClient, url: str) -> int | None:
    """Return the stargazer count for *url*, or None if unavailable."""
    api_url = repo_api_url(url)
    if api_url is None:
        logger.debug(f"Not a GitHub repository, skipping stars: {url}")
        return None

    try:
        response = await client.get(api_url, headers=settings.auth_headers())
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as e:
        logger.warning(
            f"Failed to fetch stars for {url}: HTTP {e.response.status_code}"
        )
        return None
    except httpx.HTTPError as e:
        logger.warning(f"Failed to fetch stars for {url}: {e}")
        return None
    except ValueError as e:
        logger.warning(f"Failed to fetch stars for {url}: invalid JSON ({e})")
        return None

    stars = data.get("stargazers_count") if isinstance(data, dict) else None
    if not isinstance(stars, int) or isinstance(stars, bool):
        logger.warning(f"Failed to fetch stars for {url}: no stargazers_count")
        return None
    return stars


async def enrich_libraries(
    records: list[LibraryRecord],
    client: httpx.AsyncClient | None = None,
) -> list[LibraryRecord]:
    """Attach star counts to *records*, querying all of them concurrently.

    The result keeps the input order regardless of completion order.
    """
    if not records:
        return []

    async def _gather(c: httpx.AsyncClient) -> list[int | None]:
        return await asyncio.gather(*(fetch_stars(c, r.url) for r in records))

    if client is not None:
        stars = await _gather(client)
    else:
        async with httpx.AsyncClient(
            timeout=settings.request_timeout, follow_redirects=True
        ) as owned:
            stars = await _gather(owned)

    found = sum(1 for s in stars if s is not None)
    logger.info(f"Fetched stars for {found}/{len(records)} libraries")
    return [replace(r, stars=s) for r, s in zip(records, stars, strict=True)]
