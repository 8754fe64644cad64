"""
Embedded Data Extractor Module

Storefront pages ship their server-hydrated state as JSON inside a <script>
element with a well-known id. This module finds that element in the rendered
document and parses it.
"""

import json
import logging
from typing import Any

from bs4 import BeautifulSoup
from playwright.async_api import Error as PlaywrightError

from shopscrape.errors import ExtractionError


logger = logging.getLogger(__name__)


# Script ids carrying the hydration payload, in no particular priority
DATA_SCRIPT_IDS = frozenset({
    "__UNIVERSAL_DATA_FOR_REHYDRATION__",
    "SIGI_STATE",
})


def _reject_constant(name: str):
    # NaN and Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


def extract_from_html(html: str) -> Any:
    """
    Parse the first embedded-data script found in a document.

    Scripts are scanned in document order. A recognized script whose text is
    not valid JSON (or is JSON null) is skipped.

    Args:
        html: Rendered page HTML

    Returns:
        The parsed JSON document

    Raises:
        ExtractionError: If no recognized script parses
    """
    soup = BeautifulSoup(html, "lxml")

    for script in soup.find_all("script"):
        if script.get("id") not in DATA_SCRIPT_IDS:
            continue

        try:
            data = json.loads(script.get_text(), parse_constant=_reject_constant)
        except ValueError:
            logger.debug(f"Skipping unparsable #{script.get('id')} script")
            continue

        if data is not None:
            return data

    logger.error("Failed to extract JSON data from page")
    raise ExtractionError("Failed to extract JSON data")


class Extractor:
    """Page callback that pulls the embedded JSON out of a loaded page."""

    async def extract(self, page) -> Any:
        try:
            html = await page.content()
        except PlaywrightError as e:
            raise ExtractionError(f"Failed to read page content: {e}") from e
        return extract_from_html(html)
