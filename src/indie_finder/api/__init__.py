"""HTTP API layer."""

from .app import create_app
from .params import parse_filter

__all__ = ["create_app", "parse_filter"]
