"""Carga de términos de taxonomía.

Los endpoints de taxonomía no paginan por `page`: cada respuesta trae un
`next_rest_url` absoluto que se sigue hasta que desaparece.
"""

from __future__ import annotations

import asyncio
import logging

from core.config import EndpointConfig
from core.domain.errors import FetchCancelled, ParseError
from core.domain.models import Term
from core.domain.taxonomy import Taxonomy
from core.interfaces.events_source import EventsSource

logger = logging.getLogger(__name__)


async def load_terms(
    source: EventsSource,
    endpoints: EndpointConfig,
    taxonomy: Taxonomy,
    *,
    cancel_event: asyncio.Event | None = None,
) -> list[Term]:
    """Devuelve todos los términos de `taxonomy` en el orden del listado."""

    url: str | None = endpoints.for_taxonomy(taxonomy)
    seen: set[str] = set()
    terms: list[Term] = []
    page = 0

    while url:
        page += 1
        if cancel_event is not None and cancel_event.is_set():
            logger.warning("Term load for %s cancelled before page %d", taxonomy.value, page)
            raise FetchCancelled(page)
        if url in seen:
            raise ParseError(f"next_rest_url loops back to {url}", page=page, url=url)
        seen.add(url)

        logger.debug("Fetching %s page %d: %s", taxonomy.value, page, url)
        term_page = await source.fetch_terms_page(url, taxonomy, page=page)
        terms.extend(term_page.terms)
        url = term_page.next_rest_url

    logger.info("Loaded %d %s", len(terms), taxonomy.value)
    return terms


class TermCatalog:
    """Caché de términos por taxonomía durante una sesión o un render."""

    def __init__(self, source: EventsSource, endpoints: EndpointConfig) -> None:
        self._source = source
        self._endpoints = endpoints
        self._terms: dict[Taxonomy, list[Term]] = {}

    async def get(self, taxonomy: Taxonomy) -> list[Term]:
        if taxonomy not in self._terms:
            self._terms[taxonomy] = await load_terms(self._source, self._endpoints, taxonomy)
        return self._terms[taxonomy]

    async def load_all(self) -> dict[Taxonomy, list[Term]]:
        """Carga las tres taxonomías en paralelo (cada una con su acumulador).

        Si una falla, las demás se cancelan y se esperan antes de propagar.
        """

        taxonomies = list(Taxonomy)
        tasks = [asyncio.create_task(self.get(t)) for t in taxonomies]
        try:
            results = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return dict(zip(taxonomies, results))

    def cached(self, taxonomy: Taxonomy) -> list[Term]:
        return self._terms.get(taxonomy, [])

    def suggestions(self, taxonomy: Taxonomy) -> list[str]:
        """Nombres visibles para el autocompletado de un input tipo tags."""

        return [term.display_name for term in self.cached(taxonomy)]

    def clear(self) -> None:
        self._terms.clear()
