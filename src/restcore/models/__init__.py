from .auth import TokenData
from .errors import (
    CredentialError,
    DecodeError,
    FileSystemError,
    HTTPStatusError,
    InvalidFileError,
    InvalidURLError,
    JSONParseError,
    KeyNotFoundError,
    NoDataError,
    NoResponseError,
    RestError,
    SerializationError,
    ServiceError,
    TransportError,
    TypeMismatchError,
)
from .json_wrapper import JSONDecodable, JSONPathType, JSONWrapper
from .request import RestRequest
from .response import (
    DownloadResponse,
    Failure,
    RawResponse,
    RestResponse,
    RestResult,
    Success,
)
from .visual_recognition import (
    Class,
    ClassifiedImage,
    ClassifiedImages,
    Classifier,
    ClassifierResult,
    ClassResult,
)

__all__ = [
    "Class",
    "ClassifiedImage",
    "ClassifiedImages",
    "Classifier",
    "ClassifierResult",
    "ClassResult",
    "CredentialError",
    "DecodeError",
    "DownloadResponse",
    "Failure",
    "FileSystemError",
    "HTTPStatusError",
    "InvalidFileError",
    "InvalidURLError",
    "JSONDecodable",
    "JSONParseError",
    "JSONPathType",
    "JSONWrapper",
    "KeyNotFoundError",
    "NoDataError",
    "NoResponseError",
    "RawResponse",
    "RestError",
    "RestRequest",
    "RestResponse",
    "RestResult",
    "SerializationError",
    "ServiceError",
    "Success",
    "TokenData",
    "TransportError",
    "TypeMismatchError",
]
