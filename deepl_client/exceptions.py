from __future__ import annotations
from enum import Enum
from typing import Optional


class DeepLError(Exception):
    """Base class of every error raised by this package."""


class MissingCredentialError(DeepLError):
    """API key variable is not set or is empty."""


class InvalidURLError(DeepLError):
    """Base URL could not be parsed or joined into a request URL."""


class TransportError(DeepLError):
    """Network failure while sending the request or reading the response."""


class MalformedResponseError(DeepLError):
    """A 200 response whose body does not decode into the expected shape."""


class MalformedErrorBodyError(DeepLError):
    """A non-200 response whose body is not a valid error document."""


class ApiStatusError(DeepLError):
    """Non-200 status returned by the API."""

    def __init__(self, message: str, status_code: int, returned_message: str = ''):
        super().__init__(message)
        self.status_code = status_code
        self.returned_message = returned_message


class BadRequestError(ApiStatusError):
    """400"""


class UnauthorizedError(ApiStatusError):
    """401"""


class AuthorizationFailedError(ApiStatusError):
    """403"""


class NotFoundError(ApiStatusError):
    """404"""


class EntityTooLargeError(ApiStatusError):
    """413"""


class TooManyRequestsError(ApiStatusError):
    """429"""


class QuotaExceededError(ApiStatusError):
    """456: the character limit of the billing period has been reached."""


class ServiceUnavailableError(ApiStatusError):
    """503"""


class InternalServerError(ApiStatusError):
    """5xx other than 503."""


class UnexpectedStatusError(ApiStatusError):
    """Any status without a dedicated category."""


class Stage(str, Enum):
    CREDENTIAL = 'credential'
    BUILD_URL = 'build_url'
    TRANSPORT = 'transport'
    PARSE = 'parse'


class DeepLClientError(DeepLError):
    """Failure of a client operation, tagged with the stage that failed.

    The underlying error is chained (``raise ... from cause``) and is also
    available as ``cause``. ``str()`` reads ``"<stage message>: <cause message>"``.
    """

    def __init__(self, message: str, stage: Stage, cause: Optional[BaseException] = None):
        self.message = message
        self.stage = stage
        self.cause = cause
        self.__cause__ = cause
        super().__init__(f"{message}: {cause}" if cause is not None else message)

    @property
    def root_cause(self) -> BaseException:
        err: BaseException = self
        while err.__cause__ is not None:
            err = err.__cause__
        return err
