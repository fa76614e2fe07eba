"""Cache-related data models."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    """Decoded upstream payload and the moment it was captured."""
    payload: Any
    captured_at: float

    def age(self, now: float) -> float:
        return now - self.captured_at

    def is_fresh(self, now: float, ttl_seconds: float) -> bool:
        return self.age(now) < ttl_seconds
