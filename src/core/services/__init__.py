"""Servicios del Core: fachada y correlación."""
