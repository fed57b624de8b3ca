from ._logs import redact_headers
from ._ssl_context import create_ssl_context, get_httpx_client_kwargs
from ._tracing import record_error, record_status, request_span
from ._user_agent import user_agent_value

__all__ = [
    "create_ssl_context",
    "get_httpx_client_kwargs",
    "record_error",
    "record_status",
    "redact_headers",
    "request_span",
    "user_agent_value",
]
