"""Classification of API responses into decoded shapes or categorized errors."""
from __future__ import annotations
import json
import logging
from typing import Any, Dict, Tuple, Type, TypeVar

import jsonschema
import requests

from .exceptions import (
    ApiStatusError,
    AuthorizationFailedError,
    BadRequestError,
    EntityTooLargeError,
    InternalServerError,
    MalformedErrorBodyError,
    MalformedResponseError,
    NotFoundError,
    QuotaExceededError,
    ServiceUnavailableError,
    TooManyRequestsError,
    TransportError,
    UnauthorizedError,
    UnexpectedStatusError,
)
from .models import ErrorBody

logger = logging.getLogger(__name__)

T = TypeVar('T')

STATUS_OK = 200
STATUS_QUOTA_EXCEEDED = 456  # DeepL specific

# Exact matches are consulted before the 5xx range below.
STATUS_ERRORS: Dict[int, Tuple[Type[ApiStatusError], str]] = {
    400: (BadRequestError,
          'Bad request. Please check the error message and your parameters. Returned message: {msg}'),
    401: (UnauthorizedError,
          'Unauthorized. Please check your API key. Returned message: {msg}'),
    403: (AuthorizationFailedError,
          'Authorization failed. Please supply a valid auth_key parameter. Returned message: {msg}'),
    404: (NotFoundError,
          'Not found. The requested resource could not be found. Returned message: {msg}'),
    413: (EntityTooLargeError,
          'Request entity too large. The entity size exceeds the limit of each request. Returned message: {msg}'),
    429: (TooManyRequestsError,
          'Too many requests. Please wait and resend your request. Returned message: {msg}'),
    STATUS_QUOTA_EXCEEDED: (QuotaExceededError,
                            'Quota exceeded. The character limit has been reached. Returned message: {msg}'),
    503: (ServiceUnavailableError,
          'Service currently unavailable. Try again later. Returned message: {msg}'),
}

SERVER_ERROR_RANGE = range(500, 600)
SERVER_ERROR = (InternalServerError,
                'Internal server error. Please try again later. Status code: {status}, Returned message: {msg}')
UNEXPECTED_ERROR = (UnexpectedStatusError,
                    'Unexpected error. Status code: {status}, Returned message: {msg}')


def decode_body(body: bytes, shape: Type[T]) -> T:
    """Decode JSON ``body`` into ``shape`` (a model class exposing SCHEMA/from_dict).

    Raises ValueError (json) or jsonschema.ValidationError; callers map them to
    their own category.
    """
    try:
        data: Any = json.loads(body)
    except RecursionError as e:
        raise ValueError(f"JSON nested too deeply: {e}") from e
    jsonschema.validate(instance=data, schema=shape.SCHEMA)  # type: ignore[attr-defined]
    return shape.from_dict(data)  # type: ignore[attr-defined]


def status_error(status_code: int, message: str) -> ApiStatusError:
    """Build the categorized error for a non-200 status."""
    if status_code in STATUS_ERRORS:
        exc_cls, template = STATUS_ERRORS[status_code]
    elif status_code in SERVER_ERROR_RANGE:
        exc_cls, template = SERVER_ERROR
    else:
        exc_cls, template = UNEXPECTED_ERROR
    return exc_cls(template.format(msg=message, status=status_code), status_code, message)


def classify(status_code: int, body: bytes, shape: Type[T]) -> T:
    """Return ``body`` decoded into ``shape`` on 200, raise a categorized error otherwise."""
    if status_code == STATUS_OK:
        try:
            return decode_body(body, shape)
        except (ValueError, jsonschema.ValidationError) as e:
            raise MalformedResponseError(f"failed to decode {shape.__name__} from response body: {_reason(e)}") from e

    message = ''
    if body:
        try:
            message = decode_body(body, ErrorBody).message
        except (ValueError, jsonschema.ValidationError) as e:
            raise MalformedErrorBodyError(
                f"failed to decode error response (status {status_code}): {_reason(e)}") from e

    err = status_error(status_code, message)
    logger.warning('DeepL API returned %s: %s', status_code, err)
    raise err


def parse_response(resp: requests.Response, shape: Type[T]) -> T:
    try:
        body = resp.content
    except requests.RequestException as e:
        raise TransportError(f"failed to read response: {e}") from e
    return classify(resp.status_code, body or b'', shape)


def _reason(e: Exception) -> str:
    if isinstance(e, jsonschema.ValidationError):
        return e.message
    return str(e)
