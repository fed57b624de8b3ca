from contextlib import contextmanager
from typing import Iterator

import httpx
from opentelemetry import trace
from opentelemetry.trace import Span, SpanKind, Status, StatusCode

_tracer = trace.get_tracer("restcore")


@contextmanager
def request_span(request: httpx.Request) -> Iterator[Span]:
    """Wrap one dispatched request in a client span.

    The query string is left out of the recorded URL since it may carry
    credentials.
    """
    with _tracer.start_as_current_span(
        f"HTTP {request.method}",
        kind=SpanKind.CLIENT,
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        span.set_attribute("http.request.method", request.method)
        url = request.url
        span.set_attribute(
            "url.full", f"{url.scheme}://{url.netloc.decode('ascii')}{url.path}"
        )
        yield span


def record_status(span: Span, status_code: int) -> None:
    span.set_attribute("http.response.status_code", status_code)
    if not 200 <= status_code < 300:
        span.set_status(Status(StatusCode.ERROR))


def record_error(span: Span, error: BaseException) -> None:
    span.record_exception(error)
    span.set_status(Status(StatusCode.ERROR, str(error)))
