"""HTTP client for the library catalog API."""

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from catalog_client.config import get_client_settings
from catalog_client.models import CamelModel

logger = logging.getLogger(__name__)

T = TypeVar("T")

EMPTY_ERROR_MESSAGE = "Server returned an error without a message."
UNKNOWN_ERROR_MESSAGE = "Unknown server error."


class APIError(Exception):
    """Base error for every failed API call."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidURLError(APIError):
    def __init__(self) -> None:
        super().__init__("Invalid API URL.")


class InvalidResponseError(APIError):
    def __init__(self) -> None:
        super().__init__("Invalid server response.")


class TransportError(APIError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"Network error: {detail}")


class ServerError(APIError):
    """A non-2xx response, carrying the best message found in the body."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.server_message = message


class DecodingError(APIError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"Failed to process response: {detail}")


class ServerErrorEnvelope(BaseModel):
    """Error body, either ``{message}`` or ``{title, detail, errors}``."""

    message: str | None = None
    title: str | None = None
    detail: str | None = None
    errors: dict[str, list[str]] | None = None

    @property
    def readable_message(self) -> str:
        if self.message:
            return self.message

        if self.errors:
            lines = [
                f"{field}: {text}"
                for field, messages in sorted(self.errors.items())
                for text in messages
            ]
            if lines:
                return "\n".join(lines)

        if self.detail:
            return self.detail

        if self.title:
            return self.title

        return UNKNOWN_ERROR_MESSAGE


def decode_server_message(body: bytes) -> str:
    """Extract the most useful error text from a response body."""
    if not body:
        return EMPTY_ERROR_MESSAGE

    try:
        return ServerErrorEnvelope.model_validate_json(body).readable_message
    except ValidationError:
        pass

    raw = body.decode("utf-8", errors="replace").strip()
    return raw or EMPTY_ERROR_MESSAGE


class CatalogAPIClient:
    """Async client issuing the catalog's JSON requests."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_client_settings()
        self.base_url = base_url or settings.api_url
        self.timeout = timeout if timeout is not None else settings.timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            try:
                self._client = httpx.AsyncClient(
                    base_url=self.base_url,
                    timeout=self.timeout,
                    transport=self._transport,
                    headers={"Accept": "application/json"},
                )
            except httpx.InvalidURL as e:
                raise InvalidURLError() from e
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "CatalogAPIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def get(self, path: str, model: type[T], params: dict[str, Any] | None = None) -> T:
        return self._decode(model, await self._send("GET", path, params=params))

    async def post(self, path: str, model: type[T], body: CamelModel) -> T:
        return self._decode(model, await self._send("POST", path, body=body))

    async def put(self, path: str, model: type[T], body: CamelModel) -> T:
        return self._decode(model, await self._send("PUT", path, body=body))

    async def delete(self, path: str) -> None:
        await self._send("DELETE", path)

    async def _send(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: CamelModel | None = None,
    ) -> httpx.Response:
        client = await self._get_client()
        payload = body.to_json() if body is not None else None

        try:
            response = await client.request(method, path, params=params, json=payload)
        except httpx.InvalidURL as e:
            raise InvalidURLError() from e
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise TransportError(str(e) or type(e).__name__) from e

        if not response.is_success:
            message = decode_server_message(response.content)
            logger.info("%s %s returned %s: %s", method, path, response.status_code, message)
            raise ServerError(response.status_code, message)

        return response

    @staticmethod
    def _decode(model: type[T], response: httpx.Response) -> T:
        if not response.content:
            raise InvalidResponseError()
        try:
            return TypeAdapter(model).validate_json(response.content)
        except ValidationError as e:
            raise DecodingError(str(e)) from e
