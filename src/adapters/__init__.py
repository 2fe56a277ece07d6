"""Adaptadores de I/O: HTTP, firma, URIs, decodificación, exportación."""
