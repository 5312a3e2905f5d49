"""Client for the DeepL translation API (account usage & text translation).

Usage example:
    from deepl_client import ApiType, DeepLClient
    client = DeepLClient(ApiType.FREE)        # API key read from DEEPL_API_KEY
    status = client.get_account_status()
    result = client.translate_sentence('Hello', 'EN', 'JA')
"""
from .api_type import ApiType, set_custom_url, get_custom_url, resolve  # noqa: F401
from .base_client import build_url  # noqa: F401
from .client import DeepLClient  # noqa: F401
from .credentials import get_api_key  # noqa: F401
from .exceptions import (  # noqa: F401
    ApiStatusError,
    AuthorizationFailedError,
    BadRequestError,
    DeepLClientError,
    DeepLError,
    EntityTooLargeError,
    InternalServerError,
    InvalidURLError,
    MalformedErrorBodyError,
    MalformedResponseError,
    MissingCredentialError,
    NotFoundError,
    QuotaExceededError,
    ServiceUnavailableError,
    Stage,
    TooManyRequestsError,
    TransportError,
    UnauthorizedError,
    UnexpectedStatusError,
)
from .models import AccountStatus, ErrorBody, TranslateResult, Translation  # noqa: F401
from .response import classify  # noqa: F401
