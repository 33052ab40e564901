"""Discover document paths from the site's index page.

Extraction is textual: one regular expression over the raw HTML
picks up every double-quoted ``href`` under the docs prefix. Entries with a
fragment marker are dropped whole, not truncated.
"""

import logging
import re
from typing import List

import httpx

from .config import AppConfig
from .downloader import Downloader
from .errors import DiscoveryError
from .validator import validate_path

logger = logging.getLogger("docs_mirror")


def extract_paths(html: str, prefix: str) -> List[str]:
    """Return sorted, unique, fragment-free href values starting with ``prefix``."""
    pattern = re.compile(r'href="(' + re.escape(prefix) + r'[^"\n]*)"')
    candidates = set()

    for match in pattern.finditer(html):
        href = match.group(1)
        if not href or "#" in href:
            continue
        candidates.add(href)

    return sorted(candidates)


def discover(config: AppConfig, downloader: Downloader) -> List[str]:
    """Fetch the index page and return the validated, ordered set of paths."""
    site = config.site
    print("Discovering documentation URLs...")

    try:
        html = downloader.fetch_text(site.overview_url)
    except httpx.HTTPError as e:
        raise DiscoveryError(f"Failed to download overview page {site.overview_url}: {e}") from e

    logger.info("Downloaded overview page")

    candidates = extract_paths(html, site.docs_prefix)
    if not candidates:
        raise DiscoveryError(f"Failed to extract URLs from overview page {site.overview_url}")

    valid = []
    for path in candidates:
        if validate_path(path, site.docs_prefix):
            valid.append(path)
        else:
            logger.warning(f"Skipping invalid URL: {path}")

    if not valid:
        raise DiscoveryError("No valid URLs discovered")

    logger.info(f"Discovered {len(valid)} valid documentation URLs")
    return valid
