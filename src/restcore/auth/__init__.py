from ._authentication import (
    APIKeyAuthentication,
    AuthenticationMethod,
    BasicAuthentication,
    BearerTokenAuthentication,
    NoAuthentication,
)
from ._token_exchange import TokenExchangeAuthentication

__all__ = [
    "APIKeyAuthentication",
    "AuthenticationMethod",
    "BasicAuthentication",
    "BearerTokenAuthentication",
    "NoAuthentication",
    "TokenExchangeAuthentication",
]
