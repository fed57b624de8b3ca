import base64
from typing import Protocol, runtime_checkable

from .._utils.constants import HEADER_AUTHORIZATION
from ..models.errors import CredentialError
from ..models.request import RestRequest


@runtime_checkable
class AuthenticationMethod(Protocol):
    """Attaches credentials to a request before it is sent.

    Implementations return an updated copy of the request, or raise
    :class:`CredentialError` when no valid credentials can be produced.
    The call is a coroutine since refreshing credentials may need network I/O.
    """

    async def authenticate(self, request: RestRequest) -> RestRequest: ...


class NoAuthentication:
    async def authenticate(self, request: RestRequest) -> RestRequest:
        return request


class BasicAuthentication:
    def __init__(self, username: str, password: str):
        self.username = username
        self.password = password

    async def authenticate(self, request: RestRequest) -> RestRequest:
        if not self.username or not self.password:
            raise CredentialError("Basic authentication requires a username and password.")
        credentials = f"{self.username}:{self.password}".encode("utf-8")
        token = base64.b64encode(credentials).decode("ascii")
        return request.with_headers({HEADER_AUTHORIZATION: f"Basic {token}"})


class BearerTokenAuthentication:
    def __init__(self, token: str):
        self.token = token

    async def authenticate(self, request: RestRequest) -> RestRequest:
        if not self.token:
            raise CredentialError("Bearer authentication requires an access token.")
        return request.with_headers({HEADER_AUTHORIZATION: f"Bearer {self.token}"})


class APIKeyAuthentication:
    """Sends an API key in a header, or as a query item when ``in_query`` is set."""

    def __init__(self, name: str, key: str, *, in_query: bool = False):
        self.name = name
        self.key = key
        self.in_query = in_query

    async def authenticate(self, request: RestRequest) -> RestRequest:
        if not self.key:
            raise CredentialError(f"API key {self.name!r} is missing.")
        if self.in_query:
            return request.with_query_items([(self.name, self.key)])
        return request.with_headers({self.name: self.key})
