"""Servicios del Core: lógica reutilizable sin efectos de presentación."""
