from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from sluggable.db.adapters import OrmRecord, SqlAlchemySlugStore
from sluggable.models.options import SlugOptions
from sluggable.services.generator import SlugGenerator


class SluggableMixin:
    """
    Mixin for mapped models that carry a generated slug.

    Subclasses implement ``get_slug_options()``. Slug generation is never
    triggered implicitly: call ``save_with_slug`` (or a ``SlugLifecycle``)
    before flushing, or ``generate_slug`` on demand.

    ``find_by_slug`` looks slugs up in ``__slug_field__``; override it when
    ``get_slug_options()`` saves slugs elsewhere.
    """

    __slug_field__: str = "slug"

    def get_slug_options(self) -> SlugOptions:
        raise NotImplementedError(f"{type(self).__name__} must define get_slug_options()")

    def generate_slug(self, session: Session) -> Any:
        generator = SlugGenerator(SqlAlchemySlugStore(session, type(self)))
        return generator.generate(OrmRecord(self))

    @classmethod
    def find_by_slug(
        cls,
        session: Session,
        slug: str,
        language: Optional[str] = None,
        slug_field: Optional[str] = None,
    ):
        """Return the instance whose slug (in language, for translatable slugs) equals slug."""
        slug_field = slug_field or cls.__slug_field__
        column = getattr(cls, slug_field)
        target = column[language].as_string() if language else column
        return session.execute(select(cls).where(target == slug).limit(1)).scalars().first()
