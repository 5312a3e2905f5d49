"""Endpoint resolution for the free, pro and custom (self-hosted / test) APIs."""
from __future__ import annotations
import threading
from enum import Enum

BASE_URL_FREE = 'https://api-free.deepl.com'
BASE_URL_PRO = 'https://api.deepl.com'

_custom_url_lock = threading.Lock()
_custom_url: str = ''


def set_custom_url(url: str) -> None:
    """Force every ApiType to resolve to ``url``. An empty string clears the override.

    Meant for configuration time (tests, local servers); the last writer wins.
    """
    global _custom_url
    with _custom_url_lock:
        _custom_url = url or ''


def get_custom_url() -> str:
    with _custom_url_lock:
        return _custom_url


class ApiType(Enum):
    CUSTOM = 'custom'
    FREE = 'free'
    PRO = 'pro'

    @classmethod
    def from_name(cls, name: str) -> 'ApiType':
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ', '.join(t.value for t in cls)
            raise ValueError(f"Unknown API type '{name}' (expected one of: {choices})") from None

    def base_url(self) -> str:
        override = get_custom_url()
        if override:
            return override
        if self is ApiType.PRO:
            return BASE_URL_PRO
        if self is ApiType.FREE:
            return BASE_URL_FREE
        return ''

    def __str__(self) -> str:
        return self.base_url()


def resolve(api_type: ApiType) -> str:
    return api_type.base_url()
