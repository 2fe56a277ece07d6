"""Dominio, configuración y servicios (sin dependencias de CLI)."""
