import asyncio
import time
from typing import Callable, Optional
from urllib.parse import urlencode

from .._services._rest_client import RestClient
from .._utils.constants import (
    APPLICATION_FORM_URLENCODED,
    APPLICATION_JSON,
    HEADER_AUTHORIZATION,
)
from ..models.auth import TokenData
from ..models.errors import CredentialError
from ..models.request import RestRequest
from ._authentication import NoAuthentication

DEFAULT_TOKEN_URL = "https://iam.cloud.ibm.com/identity/token"
DEFAULT_GRANT_TYPE = "urn:ibm:params:oauth:grant-type:apikey"


class TokenExchangeAuthentication:
    """Exchanges an API key for a short-lived bearer token.

    The token is cached and fetched again once ``refresh_ratio`` of its
    lifetime has elapsed. Concurrent callers share a single exchange.
    """

    DEFAULT_EXPIRES_IN = 3600

    def __init__(
        self,
        api_key: str,
        token_url: str = DEFAULT_TOKEN_URL,
        *,
        grant_type: str = DEFAULT_GRANT_TYPE,
        refresh_ratio: float = 0.8,
        client: Optional[RestClient] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.api_key = api_key
        self.token_url = token_url
        self.grant_type = grant_type
        self.refresh_ratio = refresh_ratio
        self._client = client
        self._clock = clock
        self._lock = asyncio.Lock()
        self._token: Optional[TokenData] = None
        self._refresh_at = 0.0

    async def authenticate(self, request: RestRequest) -> RestRequest:
        access_token = await self.get_token()
        return request.with_headers({HEADER_AUTHORIZATION: f"Bearer {access_token}"})

    async def get_token(self) -> str:
        if not self.api_key:
            raise CredentialError("Token exchange requires an API key.")

        async with self._lock:
            if self._token is None or self._clock() >= self._refresh_at:
                token = await self._request_token()
                expires_in = (
                    token.expires_in
                    if token.expires_in is not None
                    else self.DEFAULT_EXPIRES_IN
                )
                self._token = token
                self._refresh_at = self._clock() + expires_in * self.refresh_ratio
            return self._token.access_token

    def invalidate(self) -> None:
        """Drop the cached token so the next request fetches a new one."""
        self._token = None

    async def _request_token(self) -> TokenData:
        body = urlencode(
            {
                "grant_type": self.grant_type,
                "apikey": self.api_key,
                "response_type": "cloud_iam",
            }
        ).encode("ascii")
        request = RestRequest.create(
            "POST",
            self.token_url,
            NoAuthentication(),
            accept_type=APPLICATION_JSON,
            content_type=APPLICATION_FORM_URLENCODED,
            body=body,
        )

        if self._client is not None:
            response = await self._client.response_model(request, TokenData)
        else:
            async with RestClient() as client:
                response = await client.response_model(request, TokenData)

        if not response.result.is_success:
            error = response.result.error
            raise CredentialError(f"Token exchange failed: {error}") from error
        return response.result.value
