import logging

from linkshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from linkshortener.exceptions import LinkShortenerError
from linkshortener.dao import build_short_url_dao
from linkshortener.services import ErrorKind, URLMappingService
from linkshortener.utils import load_config, get_short_url, guarantee_500_response
from linkshortener.utils.responses import response_302, response_400, response_404, response_500
from linkshortener.lambdas.redirect_url.constants import (
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    STORE_FAILURE,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract alias from request path
    - Step 2: Load the application's config and data store
    - Step 3: Resolve the alias via URLMappingService
    - Step 4: Redirect client to the full URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: full URL destination
        400: Bad client request
            error: missing alias in path parameters
        404: Not found
            error: alias doesn't exist
        500: Internal server error
            error: server experienced an internal error

    Args:
        event (dict):
            API Gateway event payload containing the `shortUrl` path parameter.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        dict:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'shortUrl': 'q7ZkP0a'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 1- Extract alias from request's path
    alias = (event.get('pathParameters') or {}).get('shortUrl')
    if not alias:
        logger.info('Missing "shortUrl" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'shortUrl' in path", error_code=MISSING_SHORTCODE)
    logger.debug('Client requested short URL %s.', get_short_url(alias, event))

    # 2- Load application's config and data store
    try:
        app_config = load_config('redirect_url')
        service = URLMappingService(dao=build_short_url_dao(app_config))
    except LinkShortenerError:
        logger.exception('Failed to initialize redirect URL function. Responding with 500.', extra={'event': STORE_FAILURE})
        return response_500()

    # 3- Resolve alias
    result = service.resolve(alias)
    if result.error is ErrorKind.NOT_FOUND:
        logger.info(
            'Short URL record not found in database. Responding with 404.',
            extra={'shortUrl': alias, 'event': SHORT_URL_NOT_FOUND},
        )
        return response_404(message=f"short url {get_short_url(alias, event)} doesn't exist", error_code=SHORT_URL_NOT_FOUND)
    elif result.error is ErrorKind.STORE_FAILURE:
        logger.error('Data store failure. Responding with 500.', extra={'shortUrl': alias, 'event': STORE_FAILURE})
        return response_500()

    # 4- Redirect client to full URL
    logger.info(
        'Redirecting client to full URL. Responding with 302.',
        extra={'shortUrl': alias, 'event': REDIRECT_SUCCESS},
    )
    return response_302(location=result.value.full_url)
