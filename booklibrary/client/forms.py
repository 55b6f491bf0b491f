"""Book form: create/edit state machine with local validation."""

import logging
from enum import Enum
from typing import Any

import httpx
from pydantic import Field, ValidationError

from booklibrary.client.api import ApiError, BookApi
from booklibrary.client.notifications import Toaster
from booklibrary.client.routing import LIST_ROUTE, Navigator
from booklibrary.schemas import BookCreate, BookOut

logger = logging.getLogger(__name__)

FIELD_MESSAGES = {
    "name": "Name is required",
    "isbn": "ISBN is required",
    "description": "Description is required",
    "page_count": "Page count must be at least 1",
    "author": "Author is required",
}

DEFAULT_VALUES: dict[str, Any] = {
    "name": "",
    "isbn": "",
    "description": "",
    "page_count": 0,
    "author": "",
}


class BookFormData(BookCreate):
    name: str = Field(min_length=1)
    isbn: str = Field(min_length=1)
    description: str = Field(min_length=1)
    page_count: int = Field(ge=1)
    author: str = Field(min_length=1)


class FormMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


def validate_book(values: dict[str, Any]) -> tuple[BookFormData | None, dict[str, str]]:
    """Return the parsed form data, or None and a message per invalid field."""
    try:
        return BookFormData.model_validate(values), {}
    except ValidationError as exc:
        errors: dict[str, str] = {}
        for error in exc.errors():
            field_name = str(error["loc"][0]) if error["loc"] else ""
            if field_name == "pageCount":
                field_name = "page_count"
            if field_name == "page_count" and error["type"].startswith("int"):
                errors.setdefault(field_name, "Page count must be a number")
            else:
                errors.setdefault(field_name, FIELD_MESSAGES.get(field_name, error["msg"]))
        return None, errors


class BookForm:
    def __init__(
        self,
        api: BookApi,
        navigator: Navigator,
        toaster: Toaster,
        book_id: int | None = None,
    ):
        self.api = api
        self.navigator = navigator
        self.toaster = toaster
        self.book_id = book_id
        self.mode = FormMode.EDIT if book_id is not None else FormMode.CREATE
        self.values: dict[str, Any] = dict(DEFAULT_VALUES)
        self.errors: dict[str, str] = {}

    @property
    def is_editing(self) -> bool:
        return self.mode is FormMode.EDIT

    @property
    def heading(self) -> str:
        return "Edit Book" if self.is_editing else "Add New Book"

    def load(self) -> bool:
        """Prefill the form from the server when editing."""
        if not self.is_editing:
            return True

        try:
            book = self.api.get_by_id(self.book_id)
        except (ApiError, httpx.HTTPError) as exc:
            self.toaster.toast("Error", description=str(exc), variant="destructive")
            return False

        self.reset(book)
        return True

    def reset(self, book: BookOut) -> None:
        self.values = {key: getattr(book, key) for key in DEFAULT_VALUES}
        self.errors = {}

    def submit(self, values: dict[str, Any] | None = None) -> BookOut | None:
        if values is not None:
            self.values = {**self.values, **values}

        data, self.errors = validate_book(self.values)
        if data is None:
            return None

        try:
            if self.is_editing:
                book = self.api.update(self.book_id, data)
            else:
                book = self.api.create(data)
        except (ApiError, httpx.HTTPError) as exc:
            logger.warning("Saving book failed: %s", exc)
            self.toaster.toast("Error", description=str(exc), variant="destructive")
            return None

        action = "updated" if self.is_editing else "created"
        self.toaster.toast(f"Book {action} successfully")
        self.navigator.navigate(LIST_ROUTE)
        return book

    def cancel(self) -> None:
        self.navigator.navigate(LIST_ROUTE)
