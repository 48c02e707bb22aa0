"""
HTTP transport shared by every REST client.

``HttpClient`` wraps a ``requests.Session`` and turns transport failures,
non-2xx responses and undecodable bodies into the library's error types.
"""

import json
import logging
import time
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar, Union

import requests
from pydantic import BaseModel, ValidationError

from openai_tools.common.auth import AuthProvider
from openai_tools.common.errors import ApiError, DecodeError, SerializationError, TransportError
from openai_tools.config.constants import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)

ModelT = TypeVar("ModelT", bound=BaseModel)

# (filename, content, content type)
FilePart = Tuple[str, bytes, str]


def parse_model(model_cls: Type[ModelT], data: Any) -> ModelT:
    """Validate decoded JSON into a pydantic model, raising DecodeError on mismatch."""
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"Unexpected {model_cls.__name__} payload: {e}") from e


class HttpClient:
    """
    Issue authenticated requests against the provider's endpoints.

    Args:
        auth: Provider resolving paths to URLs and supplying headers
        timeout: Per-request timeout in seconds; None waits for the transport
        session: Optional pre-configured requests session
    """

    def __init__(
        self,
        auth: AuthProvider,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.auth = auth
        self.timeout = timeout
        self.session = session or requests.Session()

    def request(
        self,
        method: str,
        path: str,
        json_body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Union[Dict[str, Any], List[Tuple[str, str]]]] = None,
        files: Optional[Dict[str, FilePart]] = None,
    ) -> requests.Response:
        url = self.auth.endpoint(path)
        headers = self.auth.headers()
        body = None
        if json_body is not None:
            try:
                body = json.dumps(json_body)
            except (TypeError, ValueError) as e:
                raise SerializationError(f"Could not encode request for {path}: {e}") from e
            headers["Content-Type"] = "application/json"

        logger.debug(f"{method} {url}")
        start = time.time()
        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                data=body if body is not None else data,
                params=params,
                files=files,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            raise TransportError(f"{method} {path} failed: {e}") from e
        logger.debug(f"{method} {path} -> {response.status_code} in {time.time() - start:.2f}s")

        if not 200 <= response.status_code < 300:
            raise self._api_error(response)
        return response

    @staticmethod
    def _api_error(response: requests.Response) -> ApiError:
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and "error" in payload:
            error = ApiError.from_payload(payload, status_code=response.status_code)
        else:
            message = response.text or response.reason or "HTTP error"
            error = ApiError(message, status_code=response.status_code)
        logger.warning(f"API error: {error}")
        return error

    @staticmethod
    def decode_json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Response is not valid JSON: {response.text[:200]}") from e

    def get(self, path: str, model_cls: Type[ModelT], params: Optional[Dict[str, Any]] = None) -> ModelT:
        response = self.request("GET", path, params=_clean(params))
        return parse_model(model_cls, self.decode_json(response))

    def get_bytes(self, path: str) -> bytes:
        return self.request("GET", path).content

    def post(
        self,
        path: str,
        model_cls: Type[ModelT],
        json_body: Optional[Dict[str, Any]] = None,
    ) -> ModelT:
        response = self.request("POST", path, json_body=json_body if json_body is not None else {})
        return parse_model(model_cls, self.decode_json(response))

    def post_bytes(self, path: str, json_body: Dict[str, Any]) -> bytes:
        return self.request("POST", path, json_body=json_body).content

    def post_multipart(
        self,
        path: str,
        data: Union[Dict[str, Any], List[Tuple[str, str]]],
        files: Dict[str, FilePart],
    ) -> requests.Response:
        return self.request("POST", path, data=data, files=files)

    def post_form(
        self,
        path: str,
        model_cls: Type[ModelT],
        data: Union[Dict[str, Any], List[Tuple[str, str]]],
        files: Dict[str, FilePart],
    ) -> ModelT:
        response = self.post_multipart(path, data, files)
        return parse_model(model_cls, self.decode_json(response))

    def delete(self, path: str, model_cls: Type[ModelT]) -> ModelT:
        response = self.request("DELETE", path)
        return parse_model(model_cls, self.decode_json(response))


def _clean(params: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if params is None:
        return None
    return {key: value for key, value in params.items() if value is not None}
