"""
Parser for Force of Wind decklist URLs.

Accepted shape: any string containing <host>/view_decklist/<numeric-id>/

Example:
    https://forceofwind.online/view_decklist/4821/  ->  slug "4821"

The host comes from the configured base URL, so a local development server
(http://localhost:1337) is matched the same way.
"""

import re
from urllib.parse import urlsplit

from fowloader.models.deck import DeckSource
from fowloader.models.failure import InputError


def site_host(base_url: str) -> str:
    """Host (with port, if any) of the deck site, e.g. "forceofwind.online"."""
    return urlsplit(base_url).netloc or base_url


def _decklist_pattern(host: str) -> re.Pattern[str]:
    # Groups: (slug,)
    return re.compile(re.escape(host) + r"/view_decklist/(\d+)/")


def parse_deck_url(url: str | None, base_url: str) -> DeckSource:
    """
    Resolve a deck URL to its slug.

    Args:
        url: URL as typed by the player
        base_url: Deck site base URL (e.g., "https://forceofwind.online")

    Returns:
        DeckSource with the trimmed URL and numeric slug

    Raises:
        InputError: If the URL is empty, points at another site, or has no deck id
    """
    url = (url or "").strip()
    if not url:
        raise InputError("Please enter a deck URL.")

    host = site_host(base_url)
    if host not in url:
        raise InputError(
            "Unknown deck site, sorry! Please input a valid force of wind decklist!",
            detail=f"expected host {host}",
        )

    match = _decklist_pattern(host).search(url)
    if not match:
        raise InputError(f"Invalid fow deck slug: {url}")

    return DeckSource(url=url, slug=match.group(1))
