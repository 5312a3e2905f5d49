import json

import pytest
import requests

from deepl_client import exceptions as exc
from deepl_client.models import AccountStatus, TranslateResult, Translation
from deepl_client.response import classify, parse_response, status_error
from deepl_client.mock_provider import make_response

ERROR_BODY = json.dumps({'message': 'Value for target_lang not supported.'}).encode('utf-8')

TEMPLATE_PREFIXES = {
    400: (exc.BadRequestError, 'Bad request. Please check the error message and your parameters. Returned message: '),
    401: (exc.UnauthorizedError, 'Unauthorized. Please check your API key. Returned message: '),
    403: (exc.AuthorizationFailedError, 'Authorization failed. Please supply a valid auth_key parameter. Returned message: '),
    404: (exc.NotFoundError, 'Not found. The requested resource could not be found. Returned message: '),
    413: (exc.EntityTooLargeError, 'Request entity too large. The entity size exceeds the limit of each request. Returned message: '),
    429: (exc.TooManyRequestsError, 'Too many requests. Please wait and resend your request. Returned message: '),
    456: (exc.QuotaExceededError, 'Quota exceeded. The character limit has been reached. Returned message: '),
    503: (exc.ServiceUnavailableError, 'Service currently unavailable. Try again later. Returned message: '),
}


@pytest.mark.parametrize('status', sorted(TEMPLATE_PREFIXES))
def test_status_templates(status):
    exc_cls, prefix = TEMPLATE_PREFIXES[status]
    with pytest.raises(exc_cls) as info:
        classify(status, ERROR_BODY, AccountStatus)
    message = str(info.value)
    assert message.startswith(prefix)
    assert message == prefix + 'Value for target_lang not supported.'
    assert info.value.status_code == status
    assert info.value.returned_message == 'Value for target_lang not supported.'


def test_usage_ok():
    body = b'{"character_count": 10, "character_limit": 20}'
    assert classify(200, body, AccountStatus) == AccountStatus(character_count=10, character_limit=20)


def test_translate_ok_keeps_order():
    body = json.dumps({'translations': [
        {'detected_source_language': 'EN', 'text': 'first'},
        {'detected_source_language': 'DE', 'text': 'second'},
    ]}).encode('utf-8')
    result = classify(200, body, TranslateResult)
    assert result.translations == (Translation('EN', 'first'), Translation('DE', 'second'))
    assert result.texts == ('first', 'second')


def test_missing_fields_default_to_zero_values():
    assert classify(200, b'{}', AccountStatus) == AccountStatus(0, 0)
    assert classify(200, b'{}', TranslateResult) == TranslateResult(())
    assert classify(200, b'{"translations": [{}]}', TranslateResult).translations == (Translation('', ''),)


def test_unknown_fields_ignored():
    body = b'{"character_count": 1, "character_limit": 2, "document_count": 3}'
    assert classify(200, body, AccountStatus) == AccountStatus(1, 2)


@pytest.mark.parametrize('body', [
    b'',
    b'not json',
    b'{"character_count": 10,',
    b'[1, 2]',
    b'{"character_count": "ten"}',
    b'{"character_count": -1}',
    b'\xff\xfe\x00',
])
def test_malformed_success_body(body):
    with pytest.raises(exc.MalformedResponseError) as info:
        classify(200, body, AccountStatus)
    assert info.value.__cause__ is not None, 'underlying parse failure must be chained'
    assert 'AccountStatus' in str(info.value)


def test_malformed_translation_item():
    with pytest.raises(exc.MalformedResponseError):
        classify(200, b'{"translations": [{"text": 5}]}', TranslateResult)


@pytest.mark.parametrize('status', [400, 456, 500, 999])
def test_malformed_error_body(status):
    with pytest.raises(exc.MalformedErrorBodyError) as info:
        classify(status, b'<html>Bad Gateway</html>', AccountStatus)
    assert not isinstance(info.value, exc.MalformedResponseError)
    assert f'status {status}' in str(info.value)


def test_error_body_with_wrong_type():
    with pytest.raises(exc.MalformedErrorBodyError):
        classify(400, b'{"message": 42}', AccountStatus)


def test_empty_error_body_gives_empty_message():
    with pytest.raises(exc.QuotaExceededError) as info:
        classify(456, b'', AccountStatus)
    assert str(info.value) == 'Quota exceeded. The character limit has been reached. Returned message: '
    assert info.value.returned_message == ''


def test_unknown_status():
    with pytest.raises(exc.UnexpectedStatusError) as info:
        classify(999, b'{"message": "teapot"}', AccountStatus)
    assert str(info.value).startswith('Unexpected error. Status code: 999')
    assert str(info.value) == 'Unexpected error. Status code: 999, Returned message: teapot'


@pytest.mark.parametrize('status', [500, 502, 504, 599])
def test_server_error_range(status):
    with pytest.raises(exc.InternalServerError) as info:
        classify(status, b'{"message": "oops"}', AccountStatus)
    message = str(info.value)
    assert message.startswith('Internal server error.')
    assert f'Status code: {status}' in message
    assert message.endswith('Returned message: oops')


@pytest.mark.parametrize('status', [201, 204, 302, 402, 499, 600])
def test_outside_known_ranges_is_unexpected(status):
    assert isinstance(status_error(status, ''), exc.UnexpectedStatusError)


def test_503_checked_before_range():
    assert type(status_error(503, '')) is exc.ServiceUnavailableError


def test_all_status_errors_share_base():
    for status in list(TEMPLATE_PREFIXES) + [500, 999]:
        err = status_error(status, 'm')
        assert isinstance(err, exc.ApiStatusError)
        assert isinstance(err, exc.DeepLError)


def test_parse_response_reads_body():
    resp = make_response(200, {'character_count': 3, 'character_limit': 4})
    assert parse_response(resp, AccountStatus) == AccountStatus(3, 4)


def test_parse_response_error_status():
    resp = make_response(401, {'message': 'Invalid key'})
    with pytest.raises(exc.UnauthorizedError, match='Returned message: Invalid key'):
        parse_response(resp, TranslateResult)


DEEPLY_NESTED = b'[' * 200000 + b']' * 200000


def test_deeply_nested_success_body():
    with pytest.raises(exc.MalformedResponseError, match='nested too deeply'):
        classify(200, DEEPLY_NESTED, AccountStatus)


@pytest.mark.parametrize('status', [429, 500])
def test_deeply_nested_error_body(status):
    with pytest.raises(exc.MalformedErrorBodyError, match='nested too deeply'):
        classify(status, DEEPLY_NESTED, AccountStatus)


def test_null_error_message_keeps_category():
    with pytest.raises(exc.TooManyRequestsError) as info:
        classify(429, b'{"message": null}', AccountStatus)
    assert info.value.returned_message == ''


def test_null_error_document_keeps_category():
    with pytest.raises(exc.BadRequestError):
        classify(400, b'null', AccountStatus)


def test_null_fields_become_zero_values():
    body = b'{"translations": [{"detected_source_language": null, "text": "hola"}, null]}'
    result = classify(200, body, TranslateResult)
    assert result.translations == (Translation('', 'hola'), Translation('', ''))
    assert classify(200, b'{"character_count": null, "character_limit": 5}', AccountStatus) == AccountStatus(0, 5)
    assert classify(200, b'null', AccountStatus) == AccountStatus(0, 0)


def test_body_read_failure_is_transport_error(broken_body_response):
    with pytest.raises(exc.TransportError, match='failed to read response: Connection broken') as info:
        parse_response(broken_body_response(), AccountStatus)
    assert isinstance(info.value.__cause__, requests.exceptions.ChunkedEncodingError)
