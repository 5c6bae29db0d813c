"""Tests for the Force of Wind deck lookup (mocked HTTP)."""

from typing import Any

import httpx
import pytest
import respx

from fowloader.models.failure import (
    DeckNotFoundError,
    EmptyResponseError,
    FailureKind,
    InputError,
    MalformedResponseError,
    TransportError,
)
from fowloader.services.deck_fetcher import deck_api_url, fetch_deck, parse_deck_body

BASE_URL = "https://forceofwind.online"
DECK_API_URL = f"{BASE_URL}/api/deck/4821/"


class TestDeckApiUrl:
    def test_builds_endpoint(self) -> None:
        """The slug is wrapped in the fixed endpoint with a trailing slash."""
        assert deck_api_url(BASE_URL, "4821") == DECK_API_URL

    def test_tolerates_trailing_slash_in_base(self) -> None:
        assert deck_api_url(f"{BASE_URL}/", "4821") == DECK_API_URL


class TestFetchDeck:
    @pytest.mark.asyncio
    @respx.mock
    async def test_returns_validated_payload(self, sample_deck: dict[str, Any]) -> None:
        """A 200 with a deck body is parsed."""
        route = respx.get(DECK_API_URL).mock(return_value=httpx.Response(200, json=sample_deck))

        payload = await fetch_deck("4821", base_url=BASE_URL)

        assert route.call_count == 1
        assert payload.name == "Fire Aggro"
        assert payload.cards is not None
        assert len(payload.cards) == 4

    @pytest.mark.asyncio
    @respx.mock
    async def test_uses_given_client(self, sample_deck: dict[str, Any]) -> None:
        """A caller-supplied client is used for the request."""
        respx.get(DECK_API_URL).mock(return_value=httpx.Response(200, json=sample_deck))

        async with httpx.AsyncClient() as client:
            payload = await fetch_deck("4821", base_url=BASE_URL, client=client)

        assert payload.name == "Fire Aggro"

    @pytest.mark.asyncio
    @respx.mock
    async def test_404_is_not_found(self) -> None:
        """404 maps to DeckNotFoundError with the public-deck hint."""
        respx.get(DECK_API_URL).mock(return_value=httpx.Response(404))

        with pytest.raises(DeckNotFoundError) as exc_info:
            await fetch_deck("4821", base_url=BASE_URL)

        assert exc_info.value.message == "Deck not found. Is it public?"
        assert exc_info.value.kind == FailureKind.NOT_FOUND

    @pytest.mark.asyncio
    @respx.mock
    async def test_server_error_is_transport_error(self) -> None:
        """Other error statuses map to TransportError."""
        respx.get(DECK_API_URL).mock(return_value=httpx.Response(503))

        with pytest.raises(TransportError, match="Web request error: HTTP 503"):
            await fetch_deck("4821", base_url=BASE_URL)

    @pytest.mark.asyncio
    @respx.mock
    async def test_connection_failure_is_transport_error(self) -> None:
        """Network failures carry their message."""
        respx.get(DECK_API_URL).mock(side_effect=httpx.ConnectError("connection refused"))

        with pytest.raises(TransportError) as exc_info:
            await fetch_deck("4821", base_url=BASE_URL)

        assert exc_info.value.message == "Web request error: connection refused"

    @pytest.mark.asyncio
    @respx.mock
    async def test_empty_body_is_empty_response(self) -> None:
        """A 200 with no body maps to EmptyResponseError."""
        respx.get(DECK_API_URL).mock(return_value=httpx.Response(200, content=b""))

        with pytest.raises(EmptyResponseError, match="empty response"):
            await fetch_deck("4821", base_url=BASE_URL)

    @pytest.mark.asyncio
    @respx.mock
    async def test_invalid_json_is_malformed(self) -> None:
        """An unparseable body maps to MalformedResponseError."""
        respx.get(DECK_API_URL).mock(return_value=httpx.Response(200, content=b"<html>"))

        with pytest.raises(MalformedResponseError, match="Failed to parse JSON"):
            await fetch_deck("4821", base_url=BASE_URL)

    @pytest.mark.asyncio
    async def test_empty_slug_rejected_without_request(self) -> None:
        """An empty slug never reaches the network."""
        with respx.mock(assert_all_called=False) as mock:
            route = mock.get(url__regex=r".*")

            with pytest.raises(InputError, match="Invalid fow deck slug"):
                await fetch_deck("", base_url=BASE_URL)

            assert route.call_count == 0


class TestParseDeckBody:
    def test_missing_name_is_malformed(self) -> None:
        """A body without a deck name is rejected."""
        with pytest.raises(MalformedResponseError, match="Did you enter a valid deck URL"):
            parse_deck_body('{"cards": {}}')

    def test_empty_name_is_malformed(self) -> None:
        with pytest.raises(MalformedResponseError, match="Did you enter a valid deck URL"):
            parse_deck_body('{"name": "", "cards": {}}')

    def test_null_body_is_malformed(self) -> None:
        with pytest.raises(MalformedResponseError, match="Empty response"):
            parse_deck_body("null")

    def test_non_object_body_is_malformed(self) -> None:
        with pytest.raises(MalformedResponseError):
            parse_deck_body('["not", "a", "deck"]')

    def test_schema_mismatch_is_malformed(self) -> None:
        """Cards of the wrong shape fail validation."""
        with pytest.raises(MalformedResponseError) as exc_info:
            parse_deck_body('{"name": "X", "cards": {"A": {"quantity": "many"}}}')

        assert exc_info.value.kind == FailureKind.MALFORMED_RESPONSE

    def test_minimal_deck(self) -> None:
        payload = parse_deck_body('{"name": "Test"}')

        assert payload.name == "Test"
        assert payload.cards is None
