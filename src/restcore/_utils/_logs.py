from typing import Mapping

from .constants import HEADER_AUTHORIZATION

_REDACTED = "***"
_SENSITIVE_HEADERS = {HEADER_AUTHORIZATION.lower(), "cookie", "set-cookie"}
_SENSITIVE_FRAGMENTS = ("key", "token", "secret", "password")


def is_sensitive_header(name: str) -> bool:
    lowered = name.lower()
    return lowered in _SENSITIVE_HEADERS or any(
        fragment in lowered for fragment in _SENSITIVE_FRAGMENTS
    )


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Copy of ``headers`` safe for debug logs.

    Credential headers are masked by name, so custom API key headers such as
    ``X-Watson-Api-Key`` or ``X-Auth-Token`` are hidden too.
    """
    return {
        name: _REDACTED if is_sensitive_header(name) else value
        for name, value in headers.items()
    }
