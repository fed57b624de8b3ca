from ._rest_client import RestClient, ServiceErrorParser
from .visual_recognition_service import VisualRecognitionService, parse_service_error

__all__ = [
    "RestClient",
    "ServiceErrorParser",
    "VisualRecognitionService",
    "parse_service_error",
]
