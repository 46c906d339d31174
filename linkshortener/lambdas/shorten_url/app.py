import json
import logging

from linkshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from linkshortener.exceptions import LinkShortenerError
from linkshortener.dao import build_short_url_dao
from linkshortener.services import ErrorKind, URLMappingService
from linkshortener.utils import load_config, get_short_url, guarantee_500_response
from linkshortener.utils.responses import response_200, response_400, response_500
from linkshortener.lambdas.shorten_url.constants import (
    INVALID_JSON_BODY,
    INVALID_INPUT,
    ALIAS_CONFLICT,
    STORE_FAILURE,
    SHORTEN_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Load the application's config and data store
    - Step 2: Extract `fullUrl` and optional `customShort` from request body
    - Step 3: Create (or reuse) the mapping via URLMappingService
    - Step 4: Respond to user with the mapping

    HTTP responses:
        200: Successful URL shortening (or reuse of an existing short URL)
            fullUrl: original url (provided in request)
            shortUrl: alias of the short url
        400: Bad client request
            error: invalid JSON, invalid URL / custom short name, or custom short name already in use
            errorCode: INVALID_JSON_BODY | INVALID_INPUT | ALIAS_CONFLICT
        500: Internal server error
            error: indicate the server experienced an internal error

    Args:
        event (dict):
            API Gateway event payload in Lambda Proxy format.
        context (Any):
            AWS Lambda context object containing runtime information.

    Returns:
        dict:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'body': '{"fullUrl": "https://example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])
        {'fullUrl': 'https://example.com', 'shortUrl': 'q7ZkP0a'}
    """
    # 1- Load application's config and data store
    try:
        app_config = load_config('shorten_url')
        service = URLMappingService(dao=build_short_url_dao(app_config))
    except LinkShortenerError:
        logger.exception('Failed to initialize shorten URL function. Responding with 500.', extra={'event': STORE_FAILURE})
        return response_500()

    # 2- Extract full URL and custom alias from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)
    if not isinstance(request_body, dict):
        logger.info('JSON body is not an object. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='JSON body must be an object', error_code=INVALID_JSON_BODY)

    full_url = request_body.get('fullUrl')
    custom_alias = request_body.get('customShort')

    # 3- Create or reuse the mapping
    result = service.shorten(full_url, custom_alias)
    if result.error is ErrorKind.INVALID_INPUT:
        logger.info('Invalid shorten request. Responding with 400.', extra={'event': INVALID_INPUT})
        return response_400(message=result.message, error_code=INVALID_INPUT)
    elif result.error is ErrorKind.ALIAS_CONFLICT:
        logger.info('Short name unavailable. Responding with 400.', extra={'event': ALIAS_CONFLICT})
        return response_400(message=result.message, error_code=ALIAS_CONFLICT)
    elif result.error is ErrorKind.STORE_FAILURE:
        logger.error('Data store failure. Responding with 500.', extra={'event': STORE_FAILURE})
        return response_500()

    # 4- Return successful response to user
    short_url = result.value
    logger.info(
        'Shortened %s to %s. Responding with 200.',
        short_url.full_url,
        get_short_url(short_url.short_url, event),
        extra={'shortUrl': short_url.short_url, 'event': SHORTEN_SUCCESS},
    )
    return response_200(short_url.to_dict())
