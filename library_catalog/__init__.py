"""Library catalog service: authors, genres and books over HTTP."""

__version__ = "0.1.0"
