import sys
from collections.abc import AsyncIterator
from pathlib import Path

import pytest

from restcore import BearerTokenAuthentication, Config, RestClient

# Ensure local source package (src/restcore) is importable before tests collect
_PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
_SRC_PATH: Path = _PROJECT_ROOT / "src"
if _SRC_PATH.exists():
    sys.path.insert(0, str(_SRC_PATH))


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def base_url() -> str:
    return "https://api.example.com"


@pytest.fixture
def secret() -> str:
    return "secret"


@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def auth(secret: str) -> BearerTokenAuthentication:
    return BearerTokenAuthentication(secret)


@pytest.fixture
async def rest_client(config: Config) -> AsyncIterator[RestClient]:
    async with RestClient(config=config) as client:
        yield client
