from typing import Optional

from pydantic import BaseModel, Field

from ._utils.constants import DEFAULT_MAX_JSON_PATH_DEPTH, SDK_NAME, SDK_VERSION


class Config(BaseModel):
    """Settings shared by every request a client sends."""

    timeout: float = 30.0
    follow_redirects: bool = True
    sdk_name: str = SDK_NAME
    sdk_version: str = SDK_VERSION
    max_json_path_depth: Optional[int] = Field(
        default=DEFAULT_MAX_JSON_PATH_DEPTH, ge=0
    )
    download_chunk_size: int = Field(default=64 * 1024, gt=0)
