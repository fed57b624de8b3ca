from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Mapping, Optional, Sequence
from urllib.parse import quote, urlsplit, urlunsplit

import httpx

from .._utils._user_agent import user_agent_value
from .._utils.constants import HEADER_ACCEPT, HEADER_CONTENT_TYPE, HEADER_USER_AGENT
from .errors import InvalidURLError

if TYPE_CHECKING:
    from ..auth import AuthenticationMethod

# Sub-delimiters kept literal inside query values. "+" is re-escaped
# separately in build_url.
_QUERY_VALUE_SAFE = "-._~!$'()*+,;:@/?"


def merge_headers(
    headers: Mapping[str, str], updates: Mapping[str, str]
) -> dict[str, str]:
    """Merge ``updates`` into ``headers``, matching names case-insensitively.

    The last write wins and takes the spelling of the updating key.
    """
    merged: dict[str, str] = {}
    for name, value in [*headers.items(), *updates.items()]:
        for existing in [k for k in merged if k.lower() == name.lower()]:
            del merged[existing]
        merged[name] = value
    return merged


def encode_query_items(query_items: Sequence[tuple[str, str]]) -> str:
    return "&".join(
        f"{quote(name, safe=_QUERY_VALUE_SAFE)}={quote(value, safe=_QUERY_VALUE_SAFE)}"
        for name, value in query_items
    )


def build_url(url: str, query_items: Sequence[tuple[str, str]] = ()) -> httpx.URL:
    """Combine a URL and query items into the final wire URL.

    Encoded ``query_items`` are appended after any query already present in
    ``url``. Every literal "+" left in the encoded query is escaped as "%2B"
    so that servers do not read it as an encoded space.

    Raises:
        InvalidURLError: If ``url`` is not an absolute http(s) locator.
    """
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise InvalidURLError(url, str(e)) from e

    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise InvalidURLError(url, "an absolute http(s) URL is required")

    scheme, netloc, path, query, fragment = urlsplit(url)
    if query_items:
        query = "&".join(filter(None, [query, encode_query_items(query_items)]))
    query = query.replace("+", "%2B")

    return httpx.URL(urlunsplit((scheme, netloc, path, query, fragment)))


@dataclass(frozen=True)
class RestRequest:
    """Immutable description of a single HTTP request.

    A request is built fresh for each call. Authentication strategies never
    mutate it; they return an updated copy through :meth:`with_headers` or
    :meth:`with_query_items`.
    """

    method: str
    url: str
    auth_method: "AuthenticationMethod"
    headers: dict[str, str] = field(default_factory=dict)
    query_items: tuple[tuple[str, str], ...] = ()
    body: Optional[bytes] = None

    @classmethod
    def create(
        cls,
        method: str,
        url: str,
        auth_method: "AuthenticationMethod",
        headers: Optional[Mapping[str, str]] = None,
        accept_type: Optional[str] = None,
        content_type: Optional[str] = None,
        query_items: Optional[Sequence[tuple[str, str]]] = None,
        body: Optional[bytes] = None,
    ) -> "RestRequest":
        """Build a request, folding ``accept_type`` and ``content_type`` into the headers.

        Args:
            method: The HTTP verb.
            url: The resource URL, optionally with a query string.
            auth_method: The strategy that attaches credentials before dispatch.
            headers: Caller headers.
            accept_type: Overwrites any ``Accept`` header when given.
            content_type: Overwrites any ``Content-Type`` header when given.
            query_items: Ordered ``(name, value)`` pairs.
            body: Raw request body.
        """
        overrides: dict[str, str] = {}
        if accept_type is not None:
            overrides[HEADER_ACCEPT] = accept_type
        if content_type is not None:
            overrides[HEADER_CONTENT_TYPE] = content_type

        return cls(
            method=method.upper(),
            url=url,
            auth_method=auth_method,
            headers=merge_headers(headers or {}, overrides),
            query_items=tuple(query_items or ()),
            body=body,
        )

    def with_headers(self, headers: Mapping[str, str]) -> "RestRequest":
        return replace(self, headers=merge_headers(self.headers, headers))

    def with_query_items(self, query_items: Sequence[tuple[str, str]]) -> "RestRequest":
        return replace(self, query_items=self.query_items + tuple(query_items))

    def build(self, user_agent: Optional[str] = None) -> httpx.Request:
        """Materialize the wire request.

        The User-Agent header is applied after the caller headers and cannot
        be overridden by them.

        Raises:
            InvalidURLError: If the URL cannot be parsed into a valid locator.
        """
        headers = httpx.Headers(self.headers)
        headers[HEADER_USER_AGENT] = user_agent or user_agent_value()
        return httpx.Request(
            self.method,
            build_url(self.url, self.query_items),
            headers=headers,
            content=self.body,
        )
