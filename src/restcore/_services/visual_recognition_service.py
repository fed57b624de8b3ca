import json
import os
from typing import List, Optional, Union
from urllib.parse import quote

import httpx

from .._config import Config
from .._utils.constants import APPLICATION_JSON, APPLICATION_OCTET_STREAM
from ..auth import AuthenticationMethod, TokenExchangeAuthentication
from ..models.errors import ServiceError
from ..models.request import RestRequest
from ..models.response import DownloadResponse, RestResponse
from ..models.visual_recognition import Classifier, ClassifiedImages
from ._rest_client import RestClient

DEFAULT_SERVICE_URL = "https://gateway.watsonplatform.net/visual-recognition/api"


def parse_service_error(
    response: Optional[httpx.Response], data: Optional[bytes]
) -> Optional[Exception]:
    """Build a :class:`ServiceError` from a visual recognition error body.

    The service reports errors in a few shapes::

        {"error": {"code": 404, "description": "...", "error_id": "..."}}
        {"code": 400, "error": "..."}
        {"status": "ERROR", "statusInfo": "..."}

    Returns ``None`` when the body is not a JSON object, so the caller falls
    back to a generic status error.
    """
    if response is None or not data:
        return None
    try:
        body = json.loads(data)
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None

    code = body.get("code")
    description = None
    error = body.get("error")
    if isinstance(error, dict):
        code = error.get("code", code)
        description = error.get("description")
        message = description or error.get("error_id")
    else:
        message = error or body.get("statusInfo") or body.get("message")
        description = body.get("description")

    if not message:
        return None

    return ServiceError(
        response.status_code,
        str(message),
        code=code if isinstance(code, int) else response.status_code,
        description=description,
    )


class VisualRecognitionService(RestClient):
    """Client for the visual recognition service.

    Classifies images against built-in and custom classifiers, and fetches
    Core ML models of custom classifiers for on-device use.
    """

    def __init__(
        self,
        version: str,
        *,
        api_key: Optional[str] = None,
        auth_method: Optional[AuthenticationMethod] = None,
        service_url: str = DEFAULT_SERVICE_URL,
        config: Optional[Config] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        super().__init__(config=config, client=client)
        if auth_method is None:
            if api_key is None:
                raise ValueError("Either api_key or auth_method must be provided")
            auth_method = TokenExchangeAuthentication(api_key, client=self)
        self.version = version
        self.service_url = service_url.rstrip("/")
        self._auth_method = auth_method

    def _request(
        self,
        method: str,
        path: str,
        *,
        query_items: Optional[List[tuple[str, str]]] = None,
        headers: Optional[dict[str, str]] = None,
        accept_type: str = APPLICATION_JSON,
    ) -> RestRequest:
        return RestRequest.create(
            method,
            f"{self.service_url}{path}",
            self._auth_method,
            headers=headers,
            accept_type=accept_type,
            query_items=[*(query_items or []), ("version", self.version)],
        )

    def _classify_request(
        self,
        image_url: str,
        classifier_ids: Optional[List[str]] = None,
        owners: Optional[List[str]] = None,
        threshold: Optional[float] = None,
        accept_language: Optional[str] = None,
    ) -> RestRequest:
        query_items = [("url", image_url)]
        if classifier_ids:
            query_items.append(("classifier_ids", ",".join(classifier_ids)))
        if owners:
            query_items.append(("owners", ",".join(owners)))
        if threshold is not None:
            query_items.append(("threshold", str(threshold)))

        headers = {}
        if accept_language is not None:
            headers["Accept-Language"] = accept_language

        return self._request(
            "GET", "/v3/classify", query_items=query_items, headers=headers
        )

    async def classify(
        self,
        image_url: str,
        *,
        classifier_ids: Optional[List[str]] = None,
        owners: Optional[List[str]] = None,
        threshold: Optional[float] = None,
        accept_language: Optional[str] = None,
    ) -> RestResponse[ClassifiedImages]:
        """Classify the image found at ``image_url``.

        Args:
            image_url (str): Public URL of the image.
            classifier_ids (Optional[List[str]]): Classifiers to apply. Defaults to the built-in one.
            owners (Optional[List[str]]): Restrict classifiers by owner, e.g. ``["me", "IBM"]``.
            threshold (Optional[float]): Minimum score a class must reach to be returned.
            accept_language (Optional[str]): Language of the returned class names.

        Returns:
            RestResponse[ClassifiedImages]: The classification results.

        Examples:
            ```python
            async with VisualRecognitionService("2018-03-19", api_key="...") as service:
                response = await service.classify("https://example.com/fruit.jpg")
                images = response.result.unwrap()
            ```
        """
        request = self._classify_request(
            image_url, classifier_ids, owners, threshold, accept_language
        )
        return await self.response_model(request, ClassifiedImages, parse_service_error)

    async def list_classifiers(
        self, *, verbose: bool = False
    ) -> RestResponse[list[Classifier]]:
        request = self._request(
            "GET",
            "/v3/classifiers",
            query_items=[("verbose", "true" if verbose else "false")],
        )
        return await self.response_array(
            request, Classifier, ["classifiers"], parse_service_error
        )

    async def get_classifier(self, classifier_id: str) -> RestResponse[Classifier]:
        request = self._request("GET", f"/v3/classifiers/{quote(classifier_id, safe='')}")
        return await self.response_object(
            request, Classifier, parse_service_error=parse_service_error
        )

    async def delete_classifier(self, classifier_id: str) -> RestResponse[None]:
        request = self._request(
            "DELETE", f"/v3/classifiers/{quote(classifier_id, safe='')}"
        )
        return await self.response_void(request, parse_service_error)

    async def get_core_ml_model(
        self,
        classifier_id: str,
        destination: Union[str, "os.PathLike[str]"],
    ) -> DownloadResponse:
        """Download the Core ML model of a custom classifier to ``destination``.

        The classifier must have been trained with ``core_ml_enabled``.
        """
        request = self._request(
            "GET",
            f"/v3/classifiers/{quote(classifier_id, safe='')}/core_ml_model",
            accept_type=APPLICATION_OCTET_STREAM,
        )
        return await self.download(request, destination)
