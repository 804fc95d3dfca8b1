"""
Explicit lifecycle trigger for slug generation.

Nothing here hooks into ORM events. Callers invoke ``before_create`` or
``before_update`` right before persisting a record, and ``generate_now``
whenever they want a slug regardless of the create/update flags. An
``InvalidOption`` raised by any of them must abort the save.

``save_with_slug`` wires this up for SQLAlchemy: it generates, flushes inside
a savepoint, and when the flush hits a unique-constraint violation (another
writer took the same slug between the existence check and the insert) it
rolls the savepoint back and generates again.
"""
import logging
from typing import Any, Optional

from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sluggable.db.adapters import OrmRecord, SqlAlchemySlugStore
from sluggable.services.generator import Slug, SlugGenerator
from sluggable.services.records import SlugRecord

logger = logging.getLogger(__name__)


class SlugLifecycle:

    def __init__(self, generator: SlugGenerator):
        self.generator = generator

    def before_create(self, record: SlugRecord) -> Optional[Slug]:
        return self.generator.generate_on_create(record)

    def before_update(self, record: SlugRecord) -> Optional[Slug]:
        return self.generator.generate_on_update(record)

    def generate_now(self, record: SlugRecord) -> Slug:
        return self.generator.generate(record)


def save_with_slug(
    session: Session,
    instance: Any,
    creating: Optional[bool] = None,
    attempts: int = 3,
) -> Any:
    """
    Generate the slug for a mapped instance and flush it.

    ``creating`` defaults to whether the instance has never been persisted.
    Retries up to ``attempts`` times on IntegrityError; the last error is
    re-raised. Committing is left to the caller.
    """
    if creating is None:
        state = inspect(instance)
        creating = state.transient or state.pending

    lifecycle = SlugLifecycle(SlugGenerator(SqlAlchemySlugStore(session, type(instance))))
    record = OrmRecord(instance)
    column_keys = [attr.key for attr in inspect(type(instance)).column_attrs]

    for attempt in range(1, attempts + 1):
        if creating:
            lifecycle.before_create(record)
        else:
            lifecycle.before_update(record)

        loaded = inspect(instance).dict
        snapshot = {key: loaded[key] for key in column_keys if key in loaded}
        try:
            with session.begin_nested():
                session.add(instance)
                session.flush()
            return instance
        except IntegrityError as e:
            if attempt == attempts:
                logger.error(f"Giving up saving {record!r} after {attempts} attempt(s): {e.orig}")
                raise
            logger.warning(f"Integrity error saving {record!r} (attempt {attempt}/{attempts}), regenerating slug: {e.orig}")
            _restore(session, instance, snapshot, record.key_name)

    return instance


def _restore(session: Session, instance: Any, snapshot: dict, key_name: str) -> None:
    """Re-apply unflushed values the savepoint rollback discarded."""
    state = inspect(instance)
    if state.transient or state.detached:
        session.add(instance)
    for key, value in snapshot.items():
        if key == key_name and value is None:
            continue
        setattr(instance, key, value)
