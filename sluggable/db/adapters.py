"""
SQLAlchemy implementations of the slug generator's collaborators.

``OrmRecord`` exposes a mapped instance through the ``SlugRecord`` interface,
reading last-persisted values from SQLAlchemy's attribute history.
``SqlAlchemySlugStore`` answers existence checks with a Core ``select``
against the mapped table, so ORM-level loader criteria (soft-delete filters
and similar) do not hide rows from the uniqueness check.
"""
import json
import logging
from typing import Any, Dict, Optional

from sqlalchemy import inspect, select
from sqlalchemy.orm import Session

from sluggable.models.options import SlugOptions

logger = logging.getLogger(__name__)


class OrmRecord:
    """
    Wraps a mapped instance. The model must define ``get_slug_options()``.
    Translatable fields are JSON columns holding ``{language: text}``;
    assign a new dict to change them so that history tracks the old value.
    """

    def __init__(self, instance: Any):
        self._instance = instance
        mapper = inspect(type(instance))
        pk_column = mapper.primary_key[0]
        self.key_name = mapper.get_property_by_column(pk_column).key
        self.key_is_store_assigned = pk_column is pk_column.table.autoincrement_column

    @property
    def instance(self) -> Any:
        return self._instance

    def get_slug_options(self) -> SlugOptions:
        return self._instance.get_slug_options()

    def get(self, field: str) -> Any:
        return getattr(self._instance, field, None)

    def set(self, field: str, value: Any) -> None:
        setattr(self._instance, field, value)

    def get_original(self, field: str) -> Any:
        state = inspect(self._instance)
        if not state.persistent:
            return None
        history = state.attrs[field].load_history()
        if history.deleted:
            return history.deleted[0]
        if history.unchanged:
            return history.unchanged[0]
        # Only added: the persisted value was NULL.
        return None

    def get_key(self) -> Any:
        return getattr(self._instance, self.key_name, None)

    def get_translations(self, field: str) -> Dict[str, str]:
        value = getattr(self._instance, field, None)
        if isinstance(value, str):
            value = json.loads(value) if value else None
        return dict(value) if isinstance(value, dict) else {}

    def __repr__(self):
        return f"<OrmRecord({type(self._instance).__name__} {self.key_name}={self.get_key()!r})>"


class SqlAlchemySlugStore:
    """Existence checks for one mapped model within a session."""

    def __init__(self, session: Session, model: Any):
        self.session = session
        self.model = model
        mapper = inspect(model)
        self._columns = mapper.columns
        self._pk_column = mapper.primary_key[0]

    def exists(
        self,
        slug_field: str,
        value: str,
        exclude_key: Any,
        language: Optional[str] = None,
    ) -> bool:
        column = self._columns[slug_field]
        target = column[language].as_string() if language else column

        stmt = select(self._pk_column).where(target == value)
        if exclude_key is not None:
            stmt = stmt.where(self._pk_column != exclude_key)

        with self.session.no_autoflush:
            row = self.session.execute(stmt.limit(1)).first()
        if row is not None:
            logger.debug(f"{self.model.__name__}.{slug_field} = '{value}' already used by id {row[0]}")
        return row is not None
