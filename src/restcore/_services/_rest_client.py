import os
import shutil
import tempfile
from contextlib import suppress
from logging import getLogger
from pathlib import Path
from typing import Any, Callable, Optional, Sequence, TypeVar, Union

import httpx

from .._config import Config
from .._utils import (
    get_httpx_client_kwargs,
    record_error,
    record_status,
    redact_headers,
    request_span,
    user_agent_value,
)
from ..models.errors import (
    CredentialError,
    FileSystemError,
    HTTPStatusError,
    InvalidFileError,
    InvalidURLError,
    NoDataError,
    NoResponseError,
    RestError,
    TransportError,
)
from ..models.json_wrapper import JSONPathType
from ..models.request import RestRequest
from ..models.response import (
    DownloadResponse,
    Failure,
    RawResponse,
    RestResponse,
    Success,
)
from ._decoders import (
    DataDecoder,
    JSONArrayDecoder,
    JSONObjectDecoder,
    ModelDecoder,
    ResponseDecoder,
    StringDecoder,
    VoidDecoder,
)

T = TypeVar("T")

ServiceErrorParser = Callable[
    [Optional[httpx.Response], Optional[bytes]], Optional[Exception]
]


def is_success_status(status_code: int) -> bool:
    return 200 <= status_code < 300


class RestClient:
    """Single-shot executor for :class:`RestRequest` objects.

    Every call authenticates the request, dispatches it over a shared
    ``httpx.AsyncClient`` and classifies the outcome. Errors are never raised
    out of the public coroutines; they are returned inside the result so the
    response metadata and body travel with them.

    The underlying ``httpx.AsyncClient`` is safe for concurrent use, and no
    other state is shared between calls, so any number of requests may be in
    flight at once.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._logger = getLogger("restcore")
        self._config = config or Config()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            **get_httpx_client_kwargs(self._config)
        )
        self.user_agent = user_agent_value(
            self._config.sdk_name, self._config.sdk_version
        )

    async def __aenter__(self) -> "RestClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _prepare(self, request: RestRequest) -> httpx.Request:
        """Authenticate ``request`` and materialize it for the wire.

        Raises:
            CredentialError: The authentication strategy rejected the request.
            InvalidURLError: The URL cannot be materialized.
        """
        authenticated = await request.auth_method.authenticate(request)
        wire_request = authenticated.build(self.user_agent)
        self._logger.debug(f"Request: {wire_request.method} {wire_request.url}")
        self._logger.debug(f"HEADERS: {redact_headers(wire_request.headers)}")
        return wire_request

    async def response(
        self,
        request: RestRequest,
        parse_service_error: Optional[ServiceErrorParser] = None,
    ) -> RawResponse:
        """Execute ``request`` and classify the outcome.

        This is the only place the buffered variants touch the network.

        Args:
            request: The request to execute.
            parse_service_error: Called with the response and body when the
                status code is outside [200, 300). The error it returns, if
                any, replaces the generic :class:`HTTPStatusError`.

        Returns:
            RawResponse: The body, the HTTP response and the error, any of
                which may be missing.
        """
        try:
            wire_request = await self._prepare(request)
        except (CredentialError, InvalidURLError) as e:
            self._logger.warning(f"Request not sent: {e}")
            return RawResponse(error=e)

        with request_span(wire_request) as span:
            try:
                response = await self._client.send(wire_request)
            except httpx.RequestError as e:
                self._logger.warning(
                    f"Transport error for {wire_request.method} {wire_request.url}: {e!r}"
                )
                record_error(span, e)
                return RawResponse(error=TransportError(e))

            if not isinstance(response, httpx.Response):
                return RawResponse(error=NoResponseError())

            data = response.content
            record_status(span, response.status_code)

        self._logger.debug(f"Response: {response.status_code} ({len(data)} bytes)")

        if not is_success_status(response.status_code):
            error = None
            if parse_service_error is not None:
                error = parse_service_error(response, data)
            if error is None:
                message = httpx.codes.get_reason_phrase(response.status_code)
                error = HTTPStatusError(
                    response.status_code, message or f"HTTP {response.status_code}"
                )
            self._logger.warning(
                f"{wire_request.method} {wire_request.url} failed with status "
                f"{response.status_code}: {error}"
            )
            return RawResponse(data=data, response=response, error=error)

        return RawResponse(data=data, response=response)

    async def execute(
        self,
        request: RestRequest,
        decoder: ResponseDecoder[T],
        parse_service_error: Optional[ServiceErrorParser] = None,
    ) -> RestResponse[T]:
        """Execute ``request`` and decode the body with ``decoder``."""
        raw = await self.response(request, parse_service_error)

        if raw.error is not None:
            return RestResponse(raw.response, raw.data, Failure(raw.error))

        if decoder.requires_body and not raw.data:
            return RestResponse(raw.response, raw.data, Failure(NoDataError()))

        try:
            value = decoder.decode(raw.data or b"")
        except RestError as e:
            self._logger.debug(f"Decoding failed: {e}")
            return RestResponse(raw.response, raw.data, Failure(e))

        return RestResponse(raw.response, raw.data, Success(value))

    async def response_data(
        self,
        request: RestRequest,
        parse_service_error: Optional[ServiceErrorParser] = None,
    ) -> RestResponse[bytes]:
        return await self.execute(request, DataDecoder(), parse_service_error)

    async def response_object(
        self,
        request: RestRequest,
        shape: type[T],
        path: Optional[Sequence[JSONPathType]] = None,
        parse_service_error: Optional[ServiceErrorParser] = None,
    ) -> RestResponse[T]:
        """Decode the JSON node at ``path`` into ``shape``.

        ``shape`` may implement ``from_json(JSONWrapper)`` or be any type
        pydantic can validate. ``JSONWrapper`` itself returns the raw node.
        """
        decoder = JSONObjectDecoder(shape, path, self._config.max_json_path_depth)
        return await self.execute(request, decoder, parse_service_error)

    async def response_model(
        self,
        request: RestRequest,
        shape: Any,
        parse_service_error: Optional[ServiceErrorParser] = None,
    ) -> RestResponse[Any]:
        """Validate the whole body against ``shape`` with pydantic."""
        return await self.execute(request, ModelDecoder(shape), parse_service_error)

    async def response_array(
        self,
        request: RestRequest,
        shape: type[T],
        path: Optional[Sequence[JSONPathType]] = None,
        parse_service_error: Optional[ServiceErrorParser] = None,
    ) -> RestResponse[list[T]]:
        decoder = JSONArrayDecoder(shape, path, self._config.max_json_path_depth)
        return await self.execute(request, decoder, parse_service_error)

    async def response_string(
        self,
        request: RestRequest,
        parse_service_error: Optional[ServiceErrorParser] = None,
    ) -> RestResponse[str]:
        return await self.execute(request, StringDecoder(), parse_service_error)

    async def response_void(
        self,
        request: RestRequest,
        parse_service_error: Optional[ServiceErrorParser] = None,
    ) -> RestResponse[None]:
        return await self.execute(request, VoidDecoder(), parse_service_error)

    async def download(
        self,
        request: RestRequest,
        destination: Union[str, "os.PathLike[str]"],
    ) -> DownloadResponse:
        """Stream the response body to a temporary file, then move it to ``destination``.

        The status code is not inspected; callers read it from the returned
        response. An existing file at ``destination`` is never overwritten.

        Returns:
            DownloadResponse: The HTTP response and the error, if any.
        """
        try:
            wire_request = await self._prepare(request)
        except (CredentialError, InvalidURLError) as e:
            self._logger.warning(f"Download not started: {e}")
            return DownloadResponse(error=e)

        fd, temp_name = tempfile.mkstemp(prefix="restcore-", suffix=".download")
        temp_path = Path(temp_name)
        try:
            with os.fdopen(fd, "wb") as file, request_span(wire_request) as span:
                try:
                    response = await self._client.send(wire_request, stream=True)
                except httpx.RequestError as e:
                    record_error(span, e)
                    self._logger.warning(f"Transport error during download: {e!r}")
                    return DownloadResponse(error=TransportError(e))

                if not isinstance(response, httpx.Response):
                    return DownloadResponse(error=NoResponseError())

                record_status(span, response.status_code)
                try:
                    async for chunk in response.aiter_bytes(
                        self._config.download_chunk_size
                    ):
                        file.write(chunk)
                except httpx.RequestError as e:
                    record_error(span, e)
                    return DownloadResponse(response, TransportError(e))
                finally:
                    await response.aclose()

            # Another process may remove the staging file while the body is written.
            if not temp_path.exists():
                self._logger.warning(f"Download staging file vanished: {temp_path}")
                return DownloadResponse(response, InvalidFileError())

            return DownloadResponse(response, self._move(temp_path, Path(destination)))
        finally:
            with suppress(FileNotFoundError):
                temp_path.unlink()

    def _move(self, source: Path, destination: Path) -> Optional[FileSystemError]:
        if destination.exists():
            return FileSystemError(f"File already exists: {destination}")
        try:
            shutil.move(str(source), str(destination))
        except OSError as e:
            self._logger.warning(f"Could not move download to {destination}: {e}")
            return FileSystemError(f"Could not move file to {destination}: {e}")
        self._logger.debug(f"Downloaded to {destination}")
        return None
