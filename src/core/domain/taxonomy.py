"""Taxonomies exposed by the events API.

Each taxonomy endpoint wraps its listing under its own key and names the
display field of a term differently (`name` for categories, `organizer`
for organizers, `venue` for venues).
"""

from __future__ import annotations

from enum import Enum


class Taxonomy(str, Enum):
    """Filterable taxonomies of the events endpoint."""

    CATEGORIES = "categories"
    ORGANIZERS = "organizers"
    VENUES = "venues"

    @property
    def response_key(self) -> str:
        """Key holding the term list in a taxonomy response."""

        return self.value

    @property
    def name_field(self) -> str:
        """Field carrying the human readable name of a term."""

        return _NAME_FIELDS[self]

    @property
    def filter_key(self) -> str:
        """Query parameter used to filter events by this taxonomy."""

        return _FILTER_KEYS[self]

    def label(self) -> str:
        return self.value.capitalize()


_NAME_FIELDS: dict[Taxonomy, str] = {
    Taxonomy.CATEGORIES: "name",
    Taxonomy.ORGANIZERS: "organizer",
    Taxonomy.VENUES: "venue",
}

_FILTER_KEYS: dict[Taxonomy, str] = {
    Taxonomy.CATEGORIES: "categories",
    Taxonomy.ORGANIZERS: "organizer",
    Taxonomy.VENUES: "venue",
}
