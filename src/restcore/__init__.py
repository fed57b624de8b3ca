"""Asynchronous REST request/response core with a visual recognition client."""

from ._config import Config
from ._services import RestClient, VisualRecognitionService
from ._services._decoders import (
    DataDecoder,
    JSONArrayDecoder,
    JSONObjectDecoder,
    ModelDecoder,
    ResponseDecoder,
    StringDecoder,
    VoidDecoder,
)
from .auth import (
    APIKeyAuthentication,
    AuthenticationMethod,
    BasicAuthentication,
    BearerTokenAuthentication,
    NoAuthentication,
    TokenExchangeAuthentication,
)
from .models import (
    DownloadResponse,
    Failure,
    JSONWrapper,
    RawResponse,
    RestRequest,
    RestResponse,
    RestResult,
    Success,
)

__all__ = [
    "APIKeyAuthentication",
    "AuthenticationMethod",
    "BasicAuthentication",
    "BearerTokenAuthentication",
    "Config",
    "DataDecoder",
    "DownloadResponse",
    "Failure",
    "JSONArrayDecoder",
    "JSONObjectDecoder",
    "JSONWrapper",
    "ModelDecoder",
    "NoAuthentication",
    "RawResponse",
    "ResponseDecoder",
    "RestClient",
    "RestRequest",
    "RestResponse",
    "RestResult",
    "StringDecoder",
    "Success",
    "TokenExchangeAuthentication",
    "VisualRecognitionService",
    "VoidDecoder",
]
