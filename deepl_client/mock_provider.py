"""Offline stand-in for the DeepL API: fake payloads and a requests-compatible session."""
from __future__ import annotations
import json
import random
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import parse_qsl, urlsplit

import requests

_RANDOM = random.Random()


def seed_mock(seed: Optional[int] = None) -> None:
    if seed is not None:
        _RANDOM.seed(seed)

LANGUAGES = ["EN", "JA", "DE", "FR", "ES", "IT", "NL", "PL", "PT", "ZH"]
FREE_CHARACTER_LIMIT = 500000


def generate_usage(limit: int = FREE_CHARACTER_LIMIT) -> Dict[str, Any]:
    return {
        'character_count': _RANDOM.randint(0, limit),
        'character_limit': limit,
    }


def generate_translation(text: str, target_lang: str, source_lang: str = '') -> Dict[str, Any]:
    detected = source_lang.upper() if source_lang else _RANDOM.choice([lang for lang in LANGUAGES if lang != target_lang.upper()])
    return {
        'translations': [
            {'detected_source_language': detected, 'text': f"[{target_lang.upper()}] {text}"}
        ]
    }


def make_response(status_code: int, body: Union[bytes, str, Dict[str, Any], None] = None, url: str = '') -> requests.Response:
    resp = requests.Response()
    resp.status_code = status_code
    if body is None:
        content = b''
    elif isinstance(body, bytes):
        content = body
    elif isinstance(body, str):
        content = body.encode('utf-8')
    else:
        content = json.dumps(body).encode('utf-8')
    resp._content = content
    resp._content_consumed = True
    resp.url = url
    resp.headers['Content-Type'] = 'application/json'
    return resp


class MockSession:
    """Drop-in for ``requests.Session`` that never touches the network.

    Canned responses can be queued per path (``/v2/usage``); otherwise the fake
    generators answer. Every call is recorded in ``calls``.
    """

    def __init__(self, responses: Optional[Dict[str, List[Tuple[int, Any]]]] = None, error: Optional[Exception] = None):
        self.responses = {k: list(v) for k, v in (responses or {}).items()}
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def queue(self, path: str, status_code: int, body: Any = None) -> None:
        self.responses.setdefault(path, []).append((status_code, body))

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        parts = urlsplit(url)
        params = dict(parse_qsl(parts.query, keep_blank_values=True))
        self.calls.append({'method': method, 'url': url, 'path': parts.path, 'params': params, **kwargs})
        if self.error is not None:
            raise self.error
        queued = self.responses.get(parts.path)
        if queued:
            status_code, body = queued.pop(0)
            return make_response(status_code, body, url)
        if not params.get('auth_key'):
            return make_response(403, {'message': 'Wrong endpoint or missing auth_key'}, url)
        if parts.path.endswith('/usage'):
            return make_response(200, generate_usage(), url)
        if parts.path.endswith('/translate'):
            if not params.get('target_lang'):
                return make_response(400, {'message': "Value for 'target_lang' not supported."}, url)
            return make_response(200, generate_translation(params.get('text', ''), params['target_lang'], params.get('source_lang', '')), url)
        return make_response(404, {'message': 'Not found'}, url)

    def close(self) -> None:
        pass
