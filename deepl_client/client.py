from __future__ import annotations
import logging
import os
from typing import Dict, Optional, Type, TypeVar

import requests

from .api_type import ApiType
from .base_client import BaseClient, USER_AGENT_DEFAULT, ParamValue
from .credentials import get_api_key
from .exceptions import DeepLClientError, DeepLError, InvalidURLError, MissingCredentialError, Stage, TransportError
from .models import AccountStatus, TranslateResult
from .response import parse_response

T = TypeVar('T')

API_VERSION = 'v2'


class DeepLClient(BaseClient):
    """Minimal DeepL API client (account usage & text translation).

    The base URL is resolved once, at construction: an explicit ``base_url`` wins,
    otherwise ``api_type.base_url()`` (which honours ``set_custom_url``).
    """

    def __init__(self, api_type: ApiType = ApiType.FREE, logger: Optional[logging.Logger] = None,
                 session: Optional[requests.Session] = None, base_url: Optional[str] = None,
                 env_name: Optional[str] = None, user_agent: str = USER_AGENT_DEFAULT,
                 timeout: Optional[float] = None):
        super().__init__(session=session, logger=logger, user_agent=user_agent, timeout=timeout)
        self.api_type = api_type
        self.env_name = env_name
        self.BASE_URL = base_url or api_type.base_url()

    @classmethod
    def from_env(cls, api_type: Optional[ApiType] = None, **kwargs) -> 'DeepLClient':
        if api_type is None:
            api_type = ApiType.from_name(os.getenv('DEEPL_API_TYPE') or 'free')
        base_url = os.getenv('DEEPL_BASE_URL') or None
        timeout_raw = os.getenv('DEEPL_TIMEOUT')
        timeout = float(timeout_raw) if timeout_raw else None
        kwargs.setdefault('base_url', base_url)
        kwargs.setdefault('timeout', timeout)
        return cls(api_type, **kwargs)

    def get_account_status(self) -> AccountStatus:
        return self._call('usage', {}, AccountStatus)

    def translate_sentence(self, text: str, source_lang: str, target_lang: str) -> TranslateResult:
        # Language codes are not validated here; the API answers 400 for bad ones.
        params = {
            'text': text,
            'source_lang': source_lang,
            'target_lang': target_lang,
        }
        return self._call('translate', params, TranslateResult)

    def _call(self, endpoint: str, params: dict, shape: Type[T]) -> T:
        try:
            api_key = get_api_key(self.env_name)
        except MissingCredentialError as e:
            raise DeepLClientError('failed to get API key', Stage.CREDENTIAL, e) from e

        query: Dict[str, ParamValue] = {'auth_key': api_key, **params}
        try:
            url = self.build_url([API_VERSION, endpoint], query)
        except InvalidURLError as e:
            raise DeepLClientError('failed to create request', Stage.BUILD_URL, e) from e

        try:
            resp = self._request('POST', url)
        except TransportError as e:
            raise DeepLClientError('failed to send http request', Stage.TRANSPORT, e) from e

        try:
            with resp:
                return parse_response(resp, shape)
        except TransportError as e:
            raise DeepLClientError('failed to read response', Stage.TRANSPORT, e) from e
        except DeepLError as e:
            raise DeepLClientError(f"failed to parse response to {shape.__name__}", Stage.PARSE, e) from e
