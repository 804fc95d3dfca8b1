"""
Collaborator interfaces the slug generator talks to, plus in-memory
implementations.

The generator never touches a database or an ORM directly. It reads and
writes fields through a ``SlugRecord`` and asks a ``SlugStore`` whether a
slug is already taken. ``sluggable.db.adapters`` provides the SQLAlchemy
versions; the classes here back plain dict-shaped records and tests.
"""
import copy
import itertools
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol

from sluggable.models.options import SlugOptions

logger = logging.getLogger(__name__)


class SlugRecord(Protocol):
    """Field access the generator needs from a record."""

    key_name: str
    key_is_store_assigned: bool

    @property
    def instance(self) -> Any:
        """The object handed to computed slug sources."""
        ...

    def get_slug_options(self) -> SlugOptions: ...

    def get(self, field: str) -> Any: ...

    def set(self, field: str, value: Any) -> None: ...

    def get_original(self, field: str) -> Any: ...

    def get_key(self) -> Any: ...

    def get_translations(self, field: str) -> Dict[str, str]: ...


class SlugStore(Protocol):
    """Answers whether another record already holds a slug value."""

    def exists(
        self,
        slug_field: str,
        value: str,
        exclude_key: Any,
        language: Optional[str] = None,
    ) -> bool: ...


class MappingRecord:
    """
    A record backed by a plain dict of field values.

    ``original`` holds the values as last persisted; ``mark_persisted()``
    refreshes it. A translatable field holds a dict of language -> text.
    """

    def __init__(
        self,
        values: Optional[Dict[str, Any]] = None,
        options: Optional[Callable[["MappingRecord"], SlugOptions]] = None,
        original: Optional[Dict[str, Any]] = None,
        key_name: str = "id",
        key_is_store_assigned: bool = True,
    ):
        self.values: Dict[str, Any] = dict(values or {})
        self.original: Dict[str, Any] = copy.deepcopy(original) if original is not None else {}
        self.key_name = key_name
        self.key_is_store_assigned = key_is_store_assigned
        self._options = options

    @property
    def instance(self) -> "MappingRecord":
        return self

    def get_slug_options(self) -> SlugOptions:
        if self._options is None:
            raise NotImplementedError("MappingRecord was created without slug options")
        return self._options(self)

    def get(self, field: str) -> Any:
        return self.values.get(field)

    def set(self, field: str, value: Any) -> None:
        self.values[field] = value

    def get_original(self, field: str) -> Any:
        return self.original.get(field)

    def get_key(self) -> Any:
        return self.values.get(self.key_name)

    def get_translations(self, field: str) -> Dict[str, str]:
        value = self.values.get(field)
        if isinstance(value, dict):
            return dict(value)
        return {}

    def mark_persisted(self) -> None:
        self.original = copy.deepcopy(self.values)

    def __repr__(self):
        return f"<MappingRecord({self.key_name}={self.get_key()!r})>"


class InMemorySlugStore:
    """A list of ``MappingRecord`` objects acting as a record collection."""

    def __init__(self, records: Iterable[MappingRecord] = ()):
        self.records: List[MappingRecord] = list(records)
        assigned = [
            r.get_key() for r in self.records
            if r.key_is_store_assigned and isinstance(r.get_key(), int)
        ]
        self._ids = itertools.count(1 + max(assigned, default=0))

    def save(self, record: MappingRecord) -> MappingRecord:
        if record.get_key() is None and record.key_is_store_assigned:
            record.set(record.key_name, next(self._ids))
        if record not in self.records:
            self.records.append(record)
        record.mark_persisted()
        return record

    def exists(
        self,
        slug_field: str,
        value: str,
        exclude_key: Any,
        language: Optional[str] = None,
    ) -> bool:
        for record in self.records:
            if exclude_key is not None and record.get_key() == exclude_key:
                continue
            stored = record.get(slug_field)
            if language is not None:
                stored = stored.get(language) if isinstance(stored, dict) else None
            if stored == value:
                logger.debug(f"Slug '{value}' already used by {record!r}")
                return True
        return False
