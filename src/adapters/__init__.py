"""Adaptadores de I/O (HTTP, mocks, persistencia, exportación)."""
