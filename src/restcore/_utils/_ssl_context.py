import os
import ssl
from typing import TYPE_CHECKING, Any, Optional

import certifi

from .constants import ENV_REQUESTS_CA_BUNDLE, ENV_SSL_CERT_DIR, ENV_SSL_CERT_FILE

if TYPE_CHECKING:
    from .._config import Config


def _env_path(name: str) -> Optional[str]:
    value = os.environ.get(name)
    if not value:
        return None
    return os.path.expanduser(os.path.expandvars(value))


def ca_bundle_locations() -> tuple[str, Optional[str]]:
    """CA file and CA directory used when the OS trust store is unavailable.

    ``SSL_CERT_FILE`` wins over ``REQUESTS_CA_BUNDLE``; with neither set the
    certifi bundle is used. ``SSL_CERT_DIR`` is an optional extra directory.
    """
    cafile = (
        _env_path(ENV_SSL_CERT_FILE)
        or _env_path(ENV_REQUESTS_CA_BUNDLE)
        or certifi.where()
    )
    return cafile, _env_path(ENV_SSL_CERT_DIR)


def create_ssl_context() -> ssl.SSLContext:
    """SSL context backed by the OS trust store, or by a CA bundle file.

    The OS store is used through ``truststore`` when that extra is installed.
    """
    try:
        import truststore
    except ImportError:
        cafile, capath = ca_bundle_locations()
        return ssl.create_default_context(cafile=cafile, capath=capath)
    return truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT)


def get_httpx_client_kwargs(config: "Config") -> dict[str, Any]:
    """Keyword arguments for building an httpx client from a Config."""
    return {
        "verify": create_ssl_context(),
        "timeout": config.timeout,
        "follow_redirects": config.follow_redirects,
    }
