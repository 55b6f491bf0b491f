import re
from dataclasses import dataclass, field

LIST_ROUTE = "/"
NEW_BOOK_ROUTE = "/book/new"
EDIT_BOOK_ROUTE = "/book/edit/{id}"

_EDIT_PATTERN = re.compile(r"^/book/edit/(?P<id>\d+)$")


@dataclass
class Route:
    name: str
    book_id: int | None = None


def match(path: str) -> Route | None:
    if path == LIST_ROUTE:
        return Route("list")
    if path == NEW_BOOK_ROUTE:
        return Route("form")
    m = _EDIT_PATTERN.match(path)
    if m:
        return Route("form", book_id=int(m.group("id")))
    return None


def edit_path(book_id: int) -> str:
    return EDIT_BOOK_ROUTE.format(id=book_id)


@dataclass
class Navigator:
    location: str = LIST_ROUTE
    history: list[str] = field(default_factory=list)

    def navigate(self, path: str) -> None:
        self.history.append(self.location)
        self.location = path

    @property
    def route(self) -> Route | None:
        return match(self.location)
