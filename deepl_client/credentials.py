from __future__ import annotations
import os
from typing import Mapping, Optional

from .exceptions import MissingCredentialError

NAME_ENV_KEY_API_DEFAULT = 'DEEPL_API_KEY'

# Name of the environment variable holding the API key. Reassign to read another one.
NAME_ENV_KEY_API = NAME_ENV_KEY_API_DEFAULT


def get_api_key(env_name: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the API key, re-reading the environment on every call."""
    name = env_name or NAME_ENV_KEY_API
    source = os.environ if environ is None else environ
    val = source.get(name)
    if val is None:
        raise MissingCredentialError(f"env variable for API key not set: {name}")
    if val == '':
        raise MissingCredentialError(f"env var is set but empty: {name}")
    return val


def mask(val: Optional[str]) -> Optional[str]:
    if not val:
        return val
    if len(val) <= 8:
        return '*' * len(val)
    return val[:4] + '...' + val[-4:]
