"""The URL store: an ordered list of saved URLs with exactly one active entry.

Rules
-----
* The first URL added to an empty store becomes active; later ones do not.
* ``set_active`` clears every other record's flag.
* Deleting the active record hands activation to whatever is now first.
* Every successful mutation writes the whole list back to storage. A failed
  write is logged and otherwise ignored; the in-memory list stays authoritative.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Union

from pydantic import ValidationError as ModelValidationError

from .config import STORAGE_KEY
from .errors import NotFoundError, PersistenceError, ValidationError
from .models import UrlFormData, UrlList, UrlRecord
from .storage import LocalStorage

logger = logging.getLogger(__name__)

_SCHEMES = ("http://", "https://")

FormInput = Union[UrlFormData, dict]


def normalize_url(url: str) -> str:
    """Trim *url* and prefix ``https://`` unless it already carries a scheme."""
    trimmed = url.strip()
    if trimmed.startswith(_SCHEMES):
        return trimmed
    return f"https://{trimmed}"


def _clean(data: FormInput) -> tuple[str, str]:
    """Validate a form submission; return ``(url, title)`` ready to store."""
    if isinstance(data, dict):
        try:
            data = UrlFormData(**data)
        except ModelValidationError as exc:
            raise ValidationError("Please fill in both URL and title.") from exc
    url = (data.url or "").strip()
    title = (data.title or "").strip()
    if not url or not title:
        raise ValidationError("Please fill in both URL and title.")
    return normalize_url(url), title


class UrlStore:
    """Owns the ordered collection of :class:`UrlRecord` objects."""

    def __init__(
        self,
        records: Optional[list[UrlRecord]] = None,
        storage: Optional[LocalStorage] = None,
    ) -> None:
        try:
            checked = UrlList(urls=[r.model_copy() for r in records or []])
        except ModelValidationError as exc:
            raise ValidationError(f"Invalid URL collection: {exc.error_count()} error(s)") from exc
        self._records: list[UrlRecord] = checked.urls
        self._storage = storage

    @classmethod
    def open(cls, storage: LocalStorage) -> UrlStore:
        """Load the saved collection from *storage* (empty if absent or malformed)."""
        raw = storage.get_item(STORAGE_KEY)
        if raw is None:
            return cls(storage=storage)
        try:
            saved = UrlList.model_validate(raw)
        except ModelValidationError as exc:
            logger.warning(
                "Discarding malformed saved URLs in %s (%d error(s))",
                storage.path,
                exc.error_count(),
            )
            return cls(storage=storage)
        return cls(saved.urls, storage=storage)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def urls(self) -> tuple[UrlRecord, ...]:
        """Snapshot of the collection in display order."""
        return tuple(r.model_copy() for r in self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[UrlRecord]:
        return iter(self.urls)

    def get(self, record_id: str) -> Optional[UrlRecord]:
        index = self._index_of(record_id)
        return None if index is None else self._records[index].model_copy()

    def get_active(self) -> Optional[UrlRecord]:
        """Return the active record, or ``None`` when the store is empty."""
        for record in self._records:
            if record.is_active:
                return record.model_copy()
        return None

    def active_index(self) -> int:
        """Position of the active record, ``-1`` when there is none."""
        for i, record in enumerate(self._records):
            if record.is_active:
                return i
        return -1

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, data: FormInput) -> UrlRecord:
        url, title = _clean(data)
        record = UrlRecord(url=url, title=title, is_active=not self._records)
        self._records.append(record)
        logger.debug("Added %s (%s)", record.id, record.url)
        self._save()
        return record.model_copy()

    def update(self, record_id: str, data: FormInput) -> UrlRecord:
        url, title = _clean(data)
        index = self._require(record_id)
        record = self._records[index]
        self._records[index] = record.model_copy(update={"url": url, "title": title})
        logger.debug("Updated %s", record_id)
        self._save()
        return self._records[index].model_copy()

    def delete(self, record_id: str) -> None:
        index = self._require(record_id)
        removed = self._records.pop(index)
        if removed.is_active and self._records:
            self._records[0].is_active = True
        logger.debug("Deleted %s", record_id)
        self._save()

    def set_active(self, record_id: str) -> UrlRecord:
        index = self._require(record_id)
        for i, record in enumerate(self._records):
            record.is_active = i == index
        logger.debug("Activated %s", record_id)
        self._save()
        return self._records[index].model_copy()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _index_of(self, record_id: str) -> Optional[int]:
        for i, record in enumerate(self._records):
            if record.id == record_id:
                return i
        return None

    def _require(self, record_id: str) -> int:
        index = self._index_of(record_id)
        if index is None:
            raise NotFoundError(record_id)
        return index

    def _save(self) -> None:
        if self._storage is None:
            return
        payload = UrlList(urls=self._records).model_dump(mode="json", by_alias=True)
        try:
            self._storage.set_item(STORAGE_KEY, payload)
        except PersistenceError as exc:
            logger.warning("Saved URLs not persisted: %s", exc)
