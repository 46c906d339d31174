import logging

from linkshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from linkshortener.exceptions import LinkShortenerError
from linkshortener.dao import build_short_url_dao
from linkshortener.services import URLMappingService
from linkshortener.utils import load_config, guarantee_500_response
from linkshortener.utils.responses import response_200, response_500


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to list every short URL

    Administrative/debugging view of the data store.

    HTTP responses:
        200: {"urls": [{"fullUrl": ..., "shortUrl": ...}, ...]}
        500: Internal server error
    """
    try:
        app_config = load_config('list_urls')
        service = URLMappingService(dao=build_short_url_dao(app_config))
    except LinkShortenerError:
        logger.exception('Failed to initialize list URLs function. Responding with 500.')
        return response_500()

    result = service.list_all()
    if not result.ok:
        logger.error('Data store failure. Responding with 500.')
        return response_500()

    logger.debug('Listing %d short URLs.', len(result.value))
    return response_200({'urls': [short_url.to_dict() for short_url in result.value]})
