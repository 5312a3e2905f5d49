import pytest
import requests

from deepl_client import credentials
from deepl_client.api_type import set_custom_url

API_KEY = 'test-key-1234:fx'


@pytest.fixture(autouse=True)
def _reset_globals(monkeypatch):
    # Process-wide state must not leak between tests
    set_custom_url('')
    monkeypatch.setattr(credentials, 'NAME_ENV_KEY_API', credentials.NAME_ENV_KEY_API_DEFAULT)
    for name in ('DEEPL_API_TYPE', 'DEEPL_BASE_URL', 'DEEPL_TIMEOUT'):
        monkeypatch.delenv(name, raising=False)
    yield
    set_custom_url('')


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv('DEEPL_API_KEY', API_KEY)
    return API_KEY


class _BrokenBodyResponse(requests.Response):
    @property
    def content(self):
        raise requests.exceptions.ChunkedEncodingError('Connection broken: IncompleteRead')


@pytest.fixture
def broken_body_response():
    def _make(status_code=200):
        resp = _BrokenBodyResponse()
        resp.status_code = status_code
        resp._content_consumed = True
        return resp
    return _make
