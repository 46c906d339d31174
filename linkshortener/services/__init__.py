from linkshortener.services.results import ErrorKind, Result
from linkshortener.services.url_mapping import URLMappingService


__all__ = [
    'ErrorKind',
    'Result',
    'URLMappingService',
]
