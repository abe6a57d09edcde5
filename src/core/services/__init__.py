"""Servicios del Core: fachada de bases externas, fraude y revisión."""
