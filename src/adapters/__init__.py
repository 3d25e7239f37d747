"""Adaptadores de infraestructura (HTTP, templates HTML, exportadores)."""
