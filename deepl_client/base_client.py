from __future__ import annotations
import logging
import re
from typing import Any, Mapping, Optional, Sequence, Union
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import requests

from .credentials import mask
from .exceptions import InvalidURLError, TransportError

USER_AGENT_DEFAULT = 'deepl-client-py'

_INVALID_URL_CHARS = re.compile(r'[\x00-\x20\x7f]')

ParamValue = Union[str, Sequence[str]]


def build_url(base_url: str, path_segments: Sequence[str], params: Optional[Mapping[str, ParamValue]] = None) -> str:
    """Join ``path_segments`` onto ``base_url`` and append ``params`` as a sorted query string."""
    match = _INVALID_URL_CHARS.search(base_url)
    if match:
        raise InvalidURLError(f"failed to parse URL {base_url!r}: invalid character {match.group()!r} in URL")
    try:
        parts = urlsplit(base_url)
        parts.port  # raises on a non-numeric port
    except ValueError as e:
        raise InvalidURLError(f"failed to parse URL {base_url!r}: {e}") from e
    if not parts.scheme or not parts.netloc:
        raise InvalidURLError(f"failed to parse URL {base_url!r}: scheme and host are required")

    segments = [s for s in parts.path.split('/') if s]
    for seg in path_segments:
        segments.extend(s for s in seg.split('/') if s)
    path = '/' + '/'.join(segments)

    query = parse_qsl(parts.query, keep_blank_values=True)
    for key, value in (params or {}).items():
        if isinstance(value, (list, tuple)):
            query.extend((key, v) for v in value)
        else:
            query.append((key, value))
    query.sort(key=lambda kv: kv[0])
    return urlunsplit((parts.scheme, parts.netloc, path, urlencode(query), ''))


class BaseClient:
    """Base HTTP client: URL building, a single request per call, no retries."""
    BASE_URL: str = ''

    def __init__(self, session: Optional[requests.Session] = None, logger: Optional[logging.Logger] = None,
                 user_agent: str = USER_AGENT_DEFAULT, timeout: Optional[float] = None):
        self.session = session if session is not None else requests.Session()
        self.logger = logger if logger is not None else logging.getLogger('deepl_client')
        self.user_agent = user_agent
        self.timeout = timeout

    def build_url(self, path_segments: Sequence[str], params: Optional[Mapping[str, ParamValue]] = None) -> str:
        return build_url(self.BASE_URL, path_segments, params)

    def _headers(self) -> dict:
        return {'User-Agent': self.user_agent}

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        self.logger.debug('%s %s', method.upper(), _redact(url))
        try:
            resp = self.session.request(method.upper(), url, headers=self._headers(), timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise TransportError(f"Network error: {_redact(str(e))}") from e
        self.logger.debug('%s %s -> %s', method.upper(), _redact(url), resp.status_code)
        return resp


_AUTH_KEY_RE = re.compile(r'(auth_key=)([^&\s\'"]+)')


def _redact(text: str) -> str:
    return _AUTH_KEY_RE.sub(lambda m: m.group(1) + (mask(m.group(2)) or ''), text)
