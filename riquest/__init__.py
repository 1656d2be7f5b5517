# Re-export the request coroutine and the error family for easier imports
from .executor import RequestExecutor, ResponseStream, request
from .params import RequestParams, validate_params
from .errors import (
    RiquestError,
    ValidationError,
    ValidationFailure,
    UrlParseError,
    UnsupportedSchemeError,
    SerializationError,
    TransportError,
    TimeoutError,
    StatusError,
    BodyParseError,
)
from .log import setup_logging
