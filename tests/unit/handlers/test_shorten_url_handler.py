"""Unit tests for the shorten_url handler.

Test coverage includes:

1. Successful shortening
   - 200 with created records and their short URLs.

2. Protected route
   - Anonymous requests are redirected to /login.

3. Bad requests
   - 400 for unreadable bodies, missing `urls` and invalid fields.

4. Unexpected errors
   - 500 response, or the original exception when running locally.
"""

import json
from unittest.mock import patch

import pytest

from localshortener.constants import UNKNOWN_INTERNAL_SERVER_ERROR
from localshortener.dao.exceptions import DataStoreError
from localshortener.handlers.shorten_url.app import handler
from localshortener.handlers.shorten_url.constants import INVALID_BODY, INVALID_FIELDS


# -------------------------------
# 1. Successful shortening
# -------------------------------


def test_shorten_success(logged_in, make_event):
    event = make_event(
        'POST',
        '/',
        {'urls': [{'longURL': 'example.com/page', 'validityPeriod': '60', 'customShortcode': 'promo1'}, {'longURL': 'https://b.example.com'}]},
    )

    response = handler(event, logged_in)

    assert response['statusCode'] == 200
    urls = json.loads(response['body'])['urls']
    assert urls[0]['shortcode'] == 'promo1'
    assert urls[0]['longURL'] == 'https://example.com/page'
    assert urls[0]['validityPeriod'] == 60
    assert urls[0]['shortURL'] == 'https://sho.rt/promo1'
    assert urls[1]['validityPeriod'] == 30
    assert len(logged_in.shortener.statistics('demo-user-1').records) == 2


def test_numeric_validity_period(logged_in, make_event):
    response = handler(make_event('POST', '/', {'urls': [{'longURL': 'https://a.example.com', 'validityPeriod': 15}]}), logged_in)

    assert json.loads(response['body'])['urls'][0]['validityPeriod'] == 15


# -------------------------------
# 2. Protected route
# -------------------------------


def test_anonymous_request_redirects_to_login(app, make_event):
    response = handler(make_event('POST', '/', {'urls': [{'longURL': 'https://a.example.com'}]}), app)

    assert response['statusCode'] == 302
    assert response['headers']['Location'] == '/login'


# -------------------------------
# 3. Bad requests
# -------------------------------


@pytest.mark.parametrize('body', ['{not json', {'urls': 'https://a.example.com'}, {'urls': ['https://a.example.com']}, {}])
def test_invalid_body(logged_in, make_event, body):
    response = handler(make_event('POST', '/', body), logged_in)

    assert response['statusCode'] == 400
    assert json.loads(response['body'])['errorCode'] == INVALID_BODY


def test_invalid_fields(logged_in, make_event):
    event = make_event('POST', '/', {'urls': [{'longURL': 'https://', 'validityPeriod': '0', 'customShortcode': 'ab'}]})

    response = handler(event, logged_in)

    assert response['statusCode'] == 400
    body = json.loads(response['body'])
    assert body['errorCode'] == INVALID_FIELDS
    assert body['errors'] == {
        'longURL_0': 'Please enter a valid URL',
        'validityPeriod_0': 'Must be a positive number (1-43200 minutes)',
        'customShortcode_0': 'Must be 4-10 alphanumeric characters',
    }


# -------------------------------
# 4. Unexpected errors
# -------------------------------


def test_data_store_failure_responds_500(logged_in, make_event):
    with patch.object(logged_in.shortener, 'shorten', side_effect=DataStoreError("Can't connect to Redis")):
        response = handler(make_event('POST', '/', {'urls': [{'longURL': 'https://a.example.com'}]}), logged_in)

    assert response['statusCode'] == 500
    assert json.loads(response['body'])['errorCode'] == UNKNOWN_INTERNAL_SERVER_ERROR


def test_unexpected_error_reraised_locally(logged_in, make_event, monkeypatch):
    monkeypatch.setenv('APP_ENV', 'local')

    with patch.object(logged_in.shortener, 'shorten', side_effect=DataStoreError("Can't connect to Redis")):
        with pytest.raises(DataStoreError):
            handler(make_event('POST', '/', {'urls': [{'longURL': 'https://a.example.com'}]}), logged_in)
