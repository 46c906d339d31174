"""Unit tests for API Gateway response builders."""

import json

from linkshortener.utils.responses import response_200, response_302, response_400, response_404, response_500


def test_response_200():
    response = response_200({'fullUrl': 'https://example.com', 'shortUrl': 'abc123'})

    assert response['statusCode'] == 200
    assert response['headers']['Content-Type'] == 'application/json'
    assert json.loads(response['body']) == {'fullUrl': 'https://example.com', 'shortUrl': 'abc123'}


def test_response_302():
    response = response_302(location='https://example.com')

    assert response['statusCode'] == 302
    assert response['headers']['Location'] == 'https://example.com'
    assert json.loads(response['body']) == {}


def test_response_400():
    response = response_400(message='invalid JSON body', error_code='INVALID_JSON_BODY')

    assert response['statusCode'] == 400
    assert json.loads(response['body']) == {'error': 'Bad Request (invalid JSON body)', 'errorCode': 'INVALID_JSON_BODY'}


def test_response_404_without_details():
    response = response_404()

    assert response['statusCode'] == 404
    assert json.loads(response['body']) == {'error': 'Not Found'}


def test_response_500():
    response = response_500()

    assert response['statusCode'] == 500
    assert json.loads(response['body']) == {'error': 'Internal Server Error'}
