"""Indie game discovery service backed by the RAWG metadata API."""

__version__ = "0.1.0"
