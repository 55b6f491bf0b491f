import logging
from typing import Callable

import httpx
from rich.console import Console
from rich.table import Table

from booklibrary.client.api import ApiError, BookApi
from booklibrary.client.notifications import Toaster
from booklibrary.client.routing import NEW_BOOK_ROUTE, Navigator, edit_path
from booklibrary.schemas import BookOut

logger = logging.getLogger(__name__)


class BookListView:
    def __init__(
        self,
        api: BookApi,
        navigator: Navigator,
        toaster: Toaster,
        console: Console | None = None,
    ):
        self.api = api
        self.navigator = navigator
        self.toaster = toaster
        self.console = console or toaster.console
        self.books: list[BookOut] = []

    def refresh(self) -> bool:
        try:
            self.books = self.api.get_all()
        except (ApiError, httpx.HTTPError) as exc:
            self.toaster.toast("Error", description=str(exc), variant="destructive")
            return False
        return True

    def render(self) -> None:
        if not self.books:
            self.console.print("No books in library.")
            return

        table = Table(title="My Library", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True)
        table.add_column("Title", style="bold")
        table.add_column("Author")
        table.add_column("Description")
        table.add_column("Pages", justify="right")
        for book in self.books:
            table.add_row(
                str(book.id),
                book.name,
                f"By {book.author}",
                book.description,
                f"{book.page_count} pages",
            )
        self.console.print(table)

    def add_new(self) -> None:
        self.navigator.navigate(NEW_BOOK_ROUTE)

    def edit(self, book_id: int) -> None:
        self.navigator.navigate(edit_path(book_id))

    def delete(self, book_id: int, confirm: Callable[[BookOut | None], bool] | None = None) -> bool:
        """Delete a book after confirmation, then refetch the list."""
        if confirm is not None:
            book = next((b for b in self.books if b.id == book_id), None)
            if not confirm(book):
                return False

        try:
            self.api.delete(book_id)
        except (ApiError, httpx.HTTPError) as exc:
            logger.warning("Deleting book %s failed: %s", book_id, exc)
            self.toaster.toast("Error", description=str(exc), variant="destructive")
            return False

        self.toaster.toast("Book deleted successfully")
        self.refresh()
        return True
