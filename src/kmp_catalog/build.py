"""Catalog build pipeline: fetch, extract, enrich, render."""

from pathlib import Path

import httpx
from loguru import logger

from kmp_catalog.config import settings
from kmp_catalog.extractor import extract_libraries
from kmp_catalog.models import Catalog
from kmp_catalog.site import render_site
from kmp_catalog.sources.github import enrich_libraries
from kmp_catalog.sources.readme import fetch_readme


async def build_catalog(client: httpx.AsyncClient | None = None) -> Catalog:
    """Fetch the README and return the enriched catalog.

    Raises:
        ReadmeError: If the README cannot be fetched.
    """
    if client is None:
        async with httpx.AsyncClient(
            timeout=settings.request_timeout, follow_redirects=True
        ) as owned:
            return await build_catalog(owned)

    if not settings.github_token:
        logger.warning(
            "No GITHUB_TOKEN set. Using unauthenticated GitHub API "
            "(60 req/hr limit); star counts may be missing."
        )

    readme = await fetch_readme(client)
    records = extract_libraries(readme)
    logger.info(f"Extracted {len(records)} libraries")

    enriched = await enrich_libraries(records, client)
    return Catalog.from_records(enriched)


async def build_site(output_dir: Path | str | None = None) -> Path:
    """Build the catalog and write the static site."""
    catalog = await build_catalog()
    return render_site(catalog, output_dir)
