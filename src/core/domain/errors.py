"""Errores del dominio.

Solo existen dos tipos de fallo al hablar con la API: `NetworkError`
(request fallido o respuesta no 2xx) y `ParseError` (cuerpo inválido según
el esquema). Ambos heredan de `FetchFailed` y llevan la página que falló.
"""

from __future__ import annotations


class EventsBlockError(Exception):
    """Base de todos los errores del proyecto."""


class FetchFailed(EventsBlockError):
    """Fallo al obtener una página de la API.

    `page` es 1-based; para cadenas `next_rest_url` es la posición en la cadena.
    """

    def __init__(self, message: str, *, page: int | None = None, url: str | None = None) -> None:
        super().__init__(message)
        self.page = page
        self.url = url

    def __str__(self) -> str:
        base = super().__str__()
        if self.page is None:
            return base
        return f"{base} (page {self.page})"


class NetworkError(FetchFailed):
    """Request fallido, timeout o status no 2xx."""

    def __init__(
        self,
        message: str,
        *,
        page: int | None = None,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, page=page, url=url)
        self.status_code = status_code


class ParseError(FetchFailed):
    """El cuerpo de la respuesta no es JSON válido o no cumple el esquema."""


class FetchCancelled(EventsBlockError):
    """La agregación se canceló antes de pedir `page`."""

    def __init__(self, page: int) -> None:
        super().__init__(f"Fetch cancelled before requesting page {page}")
        self.page = page
