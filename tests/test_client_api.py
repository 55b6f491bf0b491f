import json
import os
import stat

import httpx
import pytest

from booklibrary.client import ApiError, BookApi, CredentialStore
from booklibrary.client.credentials import STORAGE_KEY

from conftest import DUNE


def test_credential_store_slot(tmp_path):
    store = CredentialStore(tmp_path / "nested" / "credentials.json")
    assert store.get() is None

    store.set("abc")
    assert store.get() == "abc"
    assert json.loads(store.path.read_text()) == {STORAGE_KEY: "abc"}

    store.set("def")
    assert store.get() == "def"

    store.clear()
    assert store.get() is None
    store.clear()


def test_credential_store_ignores_garbage(tmp_path):
    path = tmp_path / "credentials.json"
    path.write_text("not json")
    assert CredentialStore(path).get() is None


def test_login_stores_credential(book_api, credentials):
    book_api.register("reader", "password123")
    token = book_api.login("reader", "password123")
    assert credentials.get() == token
    assert book_api.current_user().username == "reader"


def test_logout_clears_credential(signed_in_api, credentials):
    signed_in_api.logout()
    assert credentials.get() is None
    with pytest.raises(ApiError) as exc_info:
        signed_in_api.get_all()
    assert exc_info.value.status_code == 401


def test_requests_without_credential_are_unauthorized(book_api):
    with pytest.raises(ApiError) as exc_info:
        book_api.get_all()
    assert exc_info.value.status_code == 401
    assert exc_info.value.message == "Unauthorized"


def test_crud_round_trip(signed_in_api):
    created = signed_in_api.create(DUNE)
    assert created.name == "Dune"
    assert created.page_count == 412
    assert created.created_at == created.updated_at

    assert signed_in_api.get_by_id(created.id) == created
    assert [book.id for book in signed_in_api.get_all()] == [created.id]

    updated = signed_in_api.update(created.id, {**DUNE, "author": "Frank Herbert"})
    assert updated.author == "Frank Herbert"
    assert updated.updated_at >= created.updated_at

    assert signed_in_api.delete(created.id) == {"message": "Book deleted successfully"}
    with pytest.raises(ApiError) as exc_info:
        signed_in_api.get_by_id(created.id)
    assert exc_info.value.status_code == 404
    assert str(exc_info.value) == "Book not found"


def test_bearer_header_is_read_on_every_request(credentials):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers.get("Authorization"))
        return httpx.Response(200, json=[])

    transport = httpx.Client(base_url="http://books.test/api", transport=httpx.MockTransport(handler))
    api = BookApi(client=transport, credentials=credentials)

    api.get_all()
    credentials.set("first")
    api.get_all()
    credentials.set("second")
    api.get_all()

    assert seen == [None, "Bearer first", "Bearer second"]


def test_plain_text_error_message(credentials):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="boom")

    transport = httpx.Client(base_url="http://books.test/api", transport=httpx.MockTransport(handler))
    api = BookApi(client=transport, credentials=credentials)

    with pytest.raises(ApiError) as exc_info:
        api.delete(1)
    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "boom"


@pytest.mark.skipif(os.name == "nt", reason="POSIX file modes")
def test_credential_file_is_private(tmp_path):
    store = CredentialStore(tmp_path / "credentials.json")
    store.set("secret-token")
    assert stat.S_IMODE(store.path.stat().st_mode) == 0o600


def test_non_json_success_body_raises_api_error(credentials):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>proxy page</html>")

    transport = httpx.Client(base_url="http://books.test/api", transport=httpx.MockTransport(handler))
    api = BookApi(client=transport, credentials=credentials)

    with pytest.raises(ApiError) as exc_info:
        api.get_all()
    assert exc_info.value.status_code == 200
    assert exc_info.value.message == "<html>proxy page</html>"
