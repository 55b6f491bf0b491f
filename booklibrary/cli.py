"""Terminal front end for the book library."""

import logging

import httpx
import typer
from rich.console import Console
from rich.prompt import Confirm, Prompt

from booklibrary.client import ApiError, BookApi, BookForm, BookListView, Navigator, Toaster
from booklibrary.client.routing import LIST_ROUTE, NEW_BOOK_ROUTE, edit_path
from booklibrary.config import settings
from booklibrary.logging_config import setup_logging

app = typer.Typer(help="Personal book library.", no_args_is_help=True)
console = Console()
logger = logging.getLogger(__name__)

FIELD_LABELS = {
    "name": "Title",
    "isbn": "ISBN",
    "author": "Author",
    "page_count": "Page Count",
    "description": "Description",
}


def make_api() -> BookApi:
    return BookApi()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging.")):
    setup_logging("DEBUG" if verbose else "WARNING")


def _prompt_values(form: BookForm) -> dict:
    values = {}
    for key, label in FIELD_LABELS.items():
        current = form.values.get(key)
        if form.errors.get(key):
            console.print(f"[red]{form.errors[key]}[/red]")
        answer = Prompt.ask(
            label,
            console=console,
            default=str(current) if current else "",
            show_default=bool(current),
        )
        if key == "page_count" and not answer.strip():
            answer = 0
        values[key] = answer
    return values


def _show_form(form: BookForm) -> bool:
    console.print(f"[bold]{form.heading}[/bold]")
    if not form.load():
        return False

    while True:
        if form.submit(_prompt_values(form)) is not None:
            return True
        if form.errors:
            continue
        # Submission failed on the server; the form keeps its values.
        if not Confirm.ask("Try again?", console=console, default=False):
            form.cancel()
            return False


def run(api: BookApi, navigator: Navigator, toaster: Toaster) -> bool:
    """Render routes until the list view is shown."""
    ok = True
    while True:
        route = navigator.route
        if route is None:
            toaster.toast("Error", description=f"Unknown page {navigator.location}", variant="destructive")
            return False
        if route.name == "list":
            view = BookListView(api, navigator, toaster, console=console)
            if view.refresh():
                view.render()
                return ok
            return False
        form = BookForm(api, navigator, toaster, book_id=route.book_id)
        ok = _show_form(form)
        if navigator.location != LIST_ROUTE:
            return ok


def _start(path: str) -> None:
    toaster = Toaster(console=console)
    with make_api() as api:
        navigator = Navigator(location=path)
        if not run(api, navigator, toaster):
            raise typer.Exit(code=1)


@app.command("list")
def list_books():
    """List your books."""
    _start(LIST_ROUTE)


@app.command()
def add():
    """Add a new book."""
    _start(NEW_BOOK_ROUTE)


@app.command()
def edit(book_id: int = typer.Argument(..., help="Id of the book to edit.")):
    """Edit one of your books."""
    _start(edit_path(book_id))


@app.command()
def delete(
    book_id: int = typer.Argument(..., help="Id of the book to delete."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
):
    """Delete one of your books and show the refreshed list."""
    toaster = Toaster(console=console)
    with make_api() as api:
        view = BookListView(api, Navigator(), toaster, console=console)
        if not view.refresh():
            raise typer.Exit(code=1)

        def confirm(book) -> bool:
            if yes:
                return True
            label = book.name if book is not None else f"#{book_id}"
            return Confirm.ask(f"Delete '{label}'?", console=console, default=False)

        if not view.delete(book_id, confirm=confirm):
            raise typer.Exit(code=1)
        view.render()


@app.command()
def register(
    username: str = typer.Option(..., prompt=True),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True),
):
    """Create an account."""
    toaster = Toaster(console=console)
    with make_api() as api:
        try:
            user = api.register(username, password)
        except (ApiError, httpx.HTTPError) as exc:
            toaster.toast("Error", description=str(exc), variant="destructive")
            raise typer.Exit(code=1)
    toaster.toast("Account created", description=f"Welcome, {user.username}")


@app.command()
def login(
    username: str = typer.Option(..., prompt=True),
    password: str = typer.Option(..., prompt=True, hide_input=True),
):
    """Sign in and store the bearer credential."""
    toaster = Toaster(console=console)
    with make_api() as api:
        try:
            api.login(username, password)
        except (ApiError, httpx.HTTPError) as exc:
            toaster.toast("Error", description=str(exc), variant="destructive")
            raise typer.Exit(code=1)
    toaster.toast("Signed in", description=username)


@app.command()
def logout():
    """Forget the stored bearer credential."""
    with make_api() as api:
        api.logout()
    console.print("Signed out.")


@app.command()
def serve(
    host: str = typer.Option(settings.HOST),
    port: int = typer.Option(settings.PORT),
    reload: bool = typer.Option(False),
):
    """Run the API server."""
    import uvicorn

    uvicorn.run("booklibrary.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
