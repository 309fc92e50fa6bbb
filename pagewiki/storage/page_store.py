import os
from pathlib import Path

from pagewiki.config import PAGE_SUFFIX, PAGE_FILE_MODE


class PageStoreError(Exception):
    """Raised when a page can't be read from or written to the store."""


class PageNotFoundError(PageStoreError):
    """Raised when no page is stored under the requested title."""


class Page:
    def __init__(self, title: str, body: bytes = b""):
        self.title = title
        self.body = body

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def __eq__(self, other):
        if not isinstance(other, Page):
            return NotImplemented
        return self.title == other.title and self.body == other.body

    def __repr__(self):
        return f"Page(title={self.title!r}, body={len(self.body)} bytes)"


class PageStore:
    """
    Load/save capability the handlers depend on.
    Implementations key pages by title and must raise PageNotFoundError for
    absent pages and PageStoreError for any other failure.
    """

    def load(self, title: str) -> Page:
        raise NotImplementedError

    def save(self, page: Page) -> None:
        raise NotImplementedError


class FilePageStore(PageStore):
    """
    Stores each page as <title>.txt under a root directory.
    Writes are neither atomic nor locked: concurrent saves to one title race and
    the last completed write wins. Titles are trusted to be validated upstream.
    """

    def __init__(self, root="."):
        self.root = Path(root)

    def path_for(self, title: str) -> Path:
        return self.root / f"{title}{PAGE_SUFFIX}"

    def load(self, title: str) -> Page:
        path = self.path_for(title)
        try:
            with open(path, "rb") as f:
                body = f.read()
        except FileNotFoundError as e:
            raise PageNotFoundError(f"open {path}: no such page") from e
        except OSError as e:
            raise PageStoreError(f"open {path}: {e.strerror or e}") from e
        return Page(title=title, body=body)

    def save(self, page: Page) -> None:
        path = self.path_for(page.title)
        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, PAGE_FILE_MODE)
            with os.fdopen(fd, "wb") as f:
                f.write(page.body)
        except OSError as e:
            raise PageStoreError(f"open {path}: {e.strerror or e}") from e
