"""Contrato de la fuente de eventos.

Por qué Protocol:
- El Core (paginación, queries) no conoce HTTP; el adaptador httpx y los
  dobles de test implementan el mismo contrato estructural.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import PageEnvelope, TermPage
from core.domain.taxonomy import Taxonomy


@runtime_checkable
class EventsSource(Protocol):
    """Contrato mínimo para obtener páginas de la API.

    Reglas de diseño:
    - Ambos métodos son asíncronos porque hacen I/O (HTTP).
    - Un fallo se reporta como `NetworkError` o `ParseError`, nunca como
      resultado vacío.
    """

    async def fetch_events_page(self, query: str, *, page: int) -> PageEnvelope:
        """Pide el endpoint de eventos con un query string ya construido."""

        ...

    async def fetch_terms_page(self, url: str, taxonomy: Taxonomy, *, page: int = 1) -> TermPage:
        """Pide una página (absoluta) de un endpoint de taxonomía."""

        ...
