"""HTTP client for the book library API.

Every call is sent once: no retries, no caching. The bearer credential is
read from the credential store on each request.
"""

import logging
from typing import Any

import httpx
from pydantic import BaseModel

from booklibrary.client.credentials import CredentialStore
from booklibrary.config import settings
from booklibrary.schemas import BookOut, TokenResponse, UserPublic

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised for any non-2xx response; carries the server's message."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _error_message(response: httpx.Response) -> str:
    try:
        detail = response.json().get("detail")
    except (ValueError, AttributeError):
        detail = None
    if isinstance(detail, str):
        return detail
    if isinstance(detail, list):
        return "; ".join(str(item.get("msg", item)) if isinstance(item, dict) else str(item) for item in detail)
    return response.text or response.reason_phrase


def _payload(data: BaseModel | dict[str, Any]) -> dict[str, Any]:
    if isinstance(data, BaseModel):
        return data.model_dump(by_alias=True)
    return dict(data)


class BookApi:
    def __init__(
        self,
        base_url: str | None = None,
        credentials: CredentialStore | None = None,
        client: httpx.Client | None = None,
    ):
        self.credentials = credentials or CredentialStore(settings.CREDENTIAL_FILE)
        self._client = client or httpx.Client(
            base_url=base_url or settings.API_BASE_URL,
            headers={"Content-Type": "application/json"},
        )

    def __enter__(self) -> "BookApi":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _headers(self) -> dict[str, str]:
        token = self.credentials.get()
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    def _request(self, method: str, url: str, **kwargs) -> Any:
        response = self._client.request(method, url, headers=self._headers(), **kwargs)
        if response.is_error:
            message = _error_message(response)
            logger.debug("%s %s failed: %s %s", method, url, response.status_code, message)
            raise ApiError(response.status_code, message)
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(response.status_code, response.text) from exc

    # Books
    def get_all(self) -> list[BookOut]:
        return [BookOut.model_validate(item) for item in self._request("GET", "/book")]

    def get_by_id(self, book_id: int) -> BookOut:
        return BookOut.model_validate(self._request("GET", f"/book/{book_id}"))

    def create(self, data: BaseModel | dict[str, Any]) -> BookOut:
        return BookOut.model_validate(self._request("POST", "/book", json=_payload(data)))

    def update(self, book_id: int, data: BaseModel | dict[str, Any]) -> BookOut:
        return BookOut.model_validate(self._request("PUT", f"/book/{book_id}", json=_payload(data)))

    def delete(self, book_id: int) -> dict[str, Any]:
        return self._request("DELETE", f"/book/{book_id}")

    # Auth
    def register(self, username: str, password: str) -> UserPublic:
        body = {"username": username, "password": password}
        return UserPublic.model_validate(self._request("POST", "/register", json=body))

    def login(self, username: str, password: str) -> str:
        body = {"username": username, "password": password}
        token = TokenResponse.model_validate(self._request("POST", "/login", json=body)).token
        self.credentials.set(token)
        return token

    def logout(self) -> None:
        self.credentials.clear()

    def current_user(self) -> UserPublic:
        return UserPublic.model_validate(self._request("GET", "/user"))
