from dataclasses import dataclass, field

from rich.console import Console
from rich.panel import Panel


@dataclass
class Toast:
    title: str
    description: str | None = None
    variant: str = "default"


@dataclass
class Toaster:
    """Shows toasts on the console and keeps a history of them."""

    console: Console = field(default_factory=Console)
    history: list[Toast] = field(default_factory=list)

    def toast(self, title: str, description: str | None = None, variant: str = "default") -> Toast:
        item = Toast(title=title, description=description, variant=variant)
        self.history.append(item)
        style = "red" if variant == "destructive" else "green"
        self.console.print(Panel(description or "", title=title, border_style=style, expand=False))
        return item

    @property
    def last(self) -> Toast | None:
        return self.history[-1] if self.history else None
