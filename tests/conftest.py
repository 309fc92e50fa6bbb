from pathlib import Path

import pytest

from pagewiki.storage.page_store import Page, PageStore, PageNotFoundError, PageStoreError
from wiki_app import Wiki


class RecordingStore(PageStore):
    """In-memory store that remembers every title it was asked about."""

    def __init__(self, pages=None, fail_saves_with=None):
        self.pages = dict(pages or {})
        self.fail_saves_with = fail_saves_with
        self.titles = []

    def load(self, title):
        self.titles.append(title)
        if title not in self.pages:
            raise PageNotFoundError(f"no page {title}")
        return Page(title=title, body=self.pages[title])

    def save(self, page):
        self.titles.append(page.title)
        if self.fail_saves_with is not None:
            raise PageStoreError(self.fail_saves_with)
        self.pages[page.title] = page.body


@pytest.fixture
def data_dir(tmp_path):
    path = tmp_path / "pages"
    path.mkdir()
    return path


@pytest.fixture
def wiki_config(tmp_path, data_dir):
    return {
        "TESTING": True,
        "WIKI_DATA_DIR": str(data_dir),
        "WIKI_LOG_DIR": str(tmp_path / "logs"),
        "RATELIMIT_ENABLED": False,
    }


@pytest.fixture
def wiki(wiki_config):
    return Wiki(config=wiki_config)


@pytest.fixture
def client(wiki):
    return wiki.app.test_client()


@pytest.fixture
def recording_store():
    return RecordingStore()


@pytest.fixture
def recording_client(wiki_config, recording_store):
    return Wiki(config=wiki_config, store=recording_store).app.test_client()
