"""
On-demand slug regeneration for every row of a sluggable model.

Used after changing a model's slug options, or to backfill slugs for rows
created before the model became sluggable. Each record is regenerated and
flushed in turn so that later records see the slugs chosen for earlier ones.
"""
import logging
from typing import Any, Dict, Iterable, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from sluggable.db.adapters import OrmRecord, SqlAlchemySlugStore
from sluggable.exceptions import InvalidOption
from sluggable.services.generator import SlugGenerator

logger = logging.getLogger(__name__)


def regenerate_slugs(
    db_session: Session,
    model: Any,
    instances: Optional[Iterable[Any]] = None,
) -> Dict[str, int]:
    """
    Regenerate slugs for ``instances`` (default: every row of ``model``).

    Returns a summary ``{"updated": n, "unchanged": n, "errors": n}``.
    Records whose options fail the guards are logged and counted as errors;
    database errors propagate. Committing is left to the caller.
    """
    generator = SlugGenerator(SqlAlchemySlugStore(db_session, model))
    if instances is None:
        instances = db_session.execute(select(model)).scalars().all()

    summary = {"updated": 0, "unchanged": 0, "errors": 0}
    for instance in instances:
        record = OrmRecord(instance)
        try:
            slug_field = record.get_slug_options().slug_field
            previous = record.get(slug_field) if slug_field else None
            # Reset to the persisted value so a stale in-memory slug is not taken as custom.
            if slug_field:
                record.set(slug_field, record.get_original(slug_field))
            slug = generator.generate(record)
        except InvalidOption as e:
            logger.error(f"Skipping {record!r}: {e}")
            summary["errors"] += 1
            continue

        if slug == previous:
            summary["unchanged"] += 1
        else:
            summary["updated"] += 1
            db_session.flush()

    logger.info(f"Regenerated slugs for {model.__name__}: {summary}")
    return summary
