"""Resolution between tag-input tokens and taxonomy term IDs.

Tokens come from a free-text input with case-insensitive suggestions, so a
token may be a plain string or an already-resolved ``{id, value}`` pair.
Unmatched tokens and unknown IDs are dropped, never raised.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from core.domain.models import Term, TermToken

Token = str | TermToken | Mapping[str, Any]


def _token_id(token: Token) -> int | None:
    if isinstance(token, TermToken):
        return token.id or None
    if isinstance(token, Mapping):
        value = token.get("id")
        if not value:
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None
    return None


def _token_text(token: Token) -> str:
    if isinstance(token, TermToken):
        return token.value
    if isinstance(token, Mapping):
        return str(token.get("value") or "")
    return str(token)


def resolve_term_id(terms: Sequence[Term], token: Token) -> int | None:
    """ID for one token: explicit id, then exact name, then first casefold match."""

    explicit = _token_id(token)
    if explicit is not None:
        return explicit

    text = _token_text(token)
    for term in terms:
        if term.display_name == text:
            return term.id

    folded = text.casefold()
    for term in terms:
        if term.display_name.casefold() == folded:
            return term.id
    return None


def resolve_term_ids(terms: Sequence[Term], tokens: Iterable[Token]) -> list[int]:
    """Order-preserving, duplicate-free list of resolved IDs."""

    ids: list[int] = []
    for token in tokens:
        term_id = resolve_term_id(terms, token)
        if term_id is not None and term_id not in ids:
            ids.append(term_id)
    return ids


def term_ids_to_tokens(terms: Sequence[Term], ids: Iterable[int]) -> list[TermToken]:
    """Tokens for display; IDs missing from ``terms`` are skipped."""

    by_id = {term.id: term for term in terms}
    return [
        TermToken(id=by_id[term_id].id, value=by_id[term_id].display_name)
        for term_id in ids
        if term_id in by_id
    ]
