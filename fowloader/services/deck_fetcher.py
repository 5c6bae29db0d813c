"""
Force of Wind deck lookup.

Issues exactly one GET against the deck endpoint and classifies the outcome.
Never retries.
"""

import json
import logging

import httpx
from pydantic import ValidationError

from fowloader.models.failure import (
    DeckNotFoundError,
    EmptyResponseError,
    InputError,
    MalformedResponseError,
    TransportError,
)
from fowloader.parsers.forceofwind import DeckPayload

logger = logging.getLogger(__name__)

USER_AGENT = "FoWDeckLoader/1.0"


def deck_api_url(base_url: str, slug: str) -> str:
    """Deck endpoint for a slug, e.g. https://forceofwind.online/api/deck/4821/"""
    return f"{base_url.rstrip('/')}/api/deck/{slug}/"


async def fetch_deck(
    slug: str,
    *,
    base_url: str,
    client: httpx.AsyncClient | None = None,
    timeout: float = 30.0,
) -> DeckPayload:
    """
    Fetch and validate a deck description.

    Args:
        slug: Numeric deck id
        base_url: Deck site base URL
        client: Optional httpx client for connection reuse
        timeout: Request timeout in seconds (only used without a client)

    Returns:
        Validated DeckPayload

    Raises:
        InputError: If the slug is empty
        TransportError: If the request fails or the status is an error
        DeckNotFoundError: If the deck does not exist or is private (404)
        EmptyResponseError: If the body is empty
        MalformedResponseError: If the body is not a deck description
    """
    if not slug:
        raise InputError(f"Invalid fow deck slug: {slug!r}")

    url = deck_api_url(base_url, slug)
    logger.info("Fetching deck %s from %s", slug, url)

    try:
        if client:
            response = await client.get(url)
        else:
            async with httpx.AsyncClient(
                headers={"User-Agent": USER_AGENT},
                follow_redirects=True,
                timeout=timeout,
            ) as owned_client:
                response = await owned_client.get(url)
    except httpx.RequestError as e:
        logger.warning("Deck request for %s failed: %s", slug, e)
        raise TransportError(str(e) or type(e).__name__) from e

    if response.status_code == 404:
        raise DeckNotFoundError(slug)
    if response.is_error:
        raise TransportError(f"HTTP {response.status_code}")

    if not response.content.strip():
        raise EmptyResponseError()

    return parse_deck_body(response.text)


def parse_deck_body(text: str) -> DeckPayload:
    """
    Decode and validate a deck response body.

    Raises:
        MalformedResponseError: If the body is not JSON, not an object, lacks a
            name, or does not match the deck schema
    """
    try:
        data = json.loads(text)
    except ValueError as e:
        raise MalformedResponseError(
            "Failed to parse JSON response from force of wind.", detail=str(e)
        ) from e

    if not data:
        raise MalformedResponseError("Empty response from force of wind.")
    if not isinstance(data, dict) or not data.get("name"):
        raise MalformedResponseError(
            "Empty response from force of wind. Did you enter a valid deck URL?"
        )

    try:
        return DeckPayload.model_validate(data)
    except ValidationError as e:
        raise MalformedResponseError(
            "Failed to parse JSON response from force of wind.",
            detail=f"{e.error_count()} validation error(s)",
        ) from e
