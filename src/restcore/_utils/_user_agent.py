import platform
from functools import lru_cache

from .constants import SDK_NAME, SDK_VERSION


def _operating_system() -> tuple[str, str]:
    system = platform.system()
    if system == "Darwin":
        return "macOS", platform.mac_ver()[0] or platform.release()
    return system or "Unknown", platform.release() or "0.0.0"


@lru_cache(maxsize=None)
def user_agent_value(sdk_name: str = SDK_NAME, sdk_version: str = SDK_VERSION) -> str:
    """Build the User-Agent sent with every request.

    Format: ``<sdk-name>/<sdk-version> <os-name>/<os-version>``.
    """
    os_name, os_version = _operating_system()
    return f"{sdk_name}/{sdk_version} {os_name}/{os_version}"
