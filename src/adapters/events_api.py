"""Adaptador HTTP de la API de eventos (The Events Calendar REST v1).

Implementa `core.interfaces.events_source.EventsSource` sobre httpx y
traduce cualquier fallo a `NetworkError` / `ParseError`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings, EndpointConfig
from core.domain.errors import NetworkError, ParseError
from core.domain.models import PageEnvelope, Term, TermPage
from core.domain.taxonomy import Taxonomy
from core.interfaces.events_source import EventsSource

logger = logging.getLogger(__name__)


class EventsApiClient(EventsSource):
    """Cliente de los cuatro endpoints configurados.

    Si no se inyecta `client`, se crea uno propio y se cierra con `aclose()`
    o al salir del `async with`.
    """

    def __init__(
        self,
        endpoints: EndpointConfig,
        *,
        settings: AppSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._endpoints = endpoints
        self._owns_client = client is None
        self._client = client or build_async_client(settings)

    @property
    def endpoints(self) -> EndpointConfig:
        return self._endpoints

    async def __aenter__(self) -> "EventsApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get_json(self, url: str, *, page: int) -> Any:
        try:
            response = await self._client.get(url)
        except httpx.TimeoutException as exc:
            raise NetworkError(f"Timed out requesting {url}", page=page, url=url) from exc
        except httpx.HTTPError as exc:
            raise NetworkError(f"Request to {url} failed: {exc}", page=page, url=url) from exc

        if not response.is_success:
            raise NetworkError(
                f"HTTP {response.status_code} from {url}",
                page=page,
                url=url,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise ParseError(f"Response from {url} is not valid JSON", page=page, url=url) from exc

    async def fetch_events_page(self, query: str, *, page: int) -> PageEnvelope:
        url = self._endpoints.events_url
        if query:
            url = f"{url}{'&' if '?' in url else '?'}{query}"
        payload = await self._get_json(url, page=page)
        try:
            envelope = PageEnvelope.model_validate(payload)
        except ValidationError as exc:
            raise ParseError(f"Unexpected events payload from {url}: {exc}", page=page, url=url) from exc

        logger.debug(
            "Events page %d: %d events, total_pages=%d",
            page,
            len(envelope.events),
            envelope.total_pages,
        )
        return envelope

    async def fetch_terms_page(self, url: str, taxonomy: Taxonomy, *, page: int = 1) -> TermPage:
        payload = await self._get_json(url, page=page)
        if not isinstance(payload, dict) or not isinstance(payload.get(taxonomy.response_key), list):
            raise ParseError(
                f"Missing '{taxonomy.response_key}' list in response from {url}",
                page=page,
                url=url,
            )

        try:
            terms = [Term.from_api(raw, taxonomy) for raw in payload[taxonomy.response_key]]
        except (AttributeError, KeyError, TypeError, ValidationError) as exc:
            raise ParseError(f"Invalid {taxonomy.value} term in {url}: {exc}", page=page, url=url) from exc

        next_url = payload.get("next_rest_url")
        return TermPage(terms=terms, next_rest_url=next_url if isinstance(next_url, str) and next_url else None)
