"""pytest configuration: put src/ on sys.path and provide storage fixtures."""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent / "src"))

from qrdeck.storage import LocalStorage  # noqa: E402
from qrdeck.urls import UrlStore  # noqa: E402


@pytest.fixture
def storage(tmp_path) -> LocalStorage:
    return LocalStorage(tmp_path / "storage.json")


@pytest.fixture
def store(storage) -> UrlStore:
    return UrlStore.open(storage)


@pytest.fixture
def abc_store(store) -> UrlStore:
    """Store holding A (active), B and C in that order."""
    for title in ("A", "B", "C"):
        store.add({"url": f"{title.lower()}.example.com", "title": title})
    return store
