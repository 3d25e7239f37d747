"""Core: dominio, configuración y servicios sin I/O de presentación."""
