"""
Slug generation: guards, custom-slug detection, candidate derivation and
uniqueness resolution.

``SlugGenerator`` is the single entry point a lifecycle trigger calls. It
reads the record's ``SlugOptions``, derives a candidate from the configured
source (or keeps a slug the caller set by hand), makes it unique against a
``SlugStore`` when required, and writes the result to the record's slug
field. Persisting the record is left to the caller.

Uniqueness is a check-then-act against the store: two concurrent
generations for the same base can both pick the same value. A unique
constraint on the slug column is what actually enforces it; see
``sluggable.services.lifecycle.save_with_slug`` for the retry.
"""
import json
import logging
from typing import Any, Callable, Dict, Optional, Union

from sluggable.exceptions import InvalidOption
from sluggable.models.enums import SlugSourceKind
from sluggable.models.options import SlugOptions
from sluggable.services.records import SlugRecord, SlugStore
from sluggable.utils.slug import generate_slug

logger = logging.getLogger(__name__)

Slug = Union[str, Dict[str, str]]
Transliterator = Callable[[str, str, Optional[str]], str]


class SlugGenerator:

    def __init__(self, store: SlugStore, transliterate: Transliterator = generate_slug):
        self.store = store
        self.transliterate = transliterate

    # --- Entry points ---

    def generate_on_create(self, record: SlugRecord) -> Optional[Slug]:
        options = record.get_slug_options()
        if not options.generate_on_create:
            return None
        return self.add_slug(record, options)

    def generate_on_update(self, record: SlugRecord) -> Optional[Slug]:
        options = record.get_slug_options()
        if not options.generate_on_update:
            return None
        return self.add_slug(record, options)

    def generate(self, record: SlugRecord) -> Slug:
        """Generate a slug on request, regardless of the create/update flags."""
        return self.add_slug(record, record.get_slug_options())

    def add_slug(self, record: SlugRecord, options: SlugOptions) -> Slug:
        try:
            self.guard_against_invalid_options(options)
        except InvalidOption as e:
            logger.error(f"Refusing to generate slug for {record!r}: {e}")
            raise

        slug = self.generate_non_unique_slug(record, options)

        if options.require_unique:
            slug = self.make_slug_unique(slug, record, options)

        record.set(options.slug_field, slug)
        logger.debug(f"Slug for {record!r} set to {slug!r}")
        return slug

    # --- Guards ---

    @staticmethod
    def guard_against_invalid_options(options: SlugOptions) -> None:
        source = options.source
        if source.kind == SlugSourceKind.FIELD_LIST and not source.names:
            raise InvalidOption.missing_from_field()
        if source.kind == SlugSourceKind.TRANSLATABLE_FIELD and not source.name:
            raise InvalidOption.missing_from_field()

        if not options.slug_field:
            raise InvalidOption.missing_slug_field()

        if options.maximum_length <= 0:
            raise InvalidOption.invalid_maximum_length(options.maximum_length)

    # --- Candidate derivation ---

    def generate_non_unique_slug(self, record: SlugRecord, options: SlugOptions) -> Slug:
        if self.has_custom_slug_been_used(record, options):
            logger.debug(f"Using custom slug set on {record!r}")
            if options.is_translatable:
                return record.get_translations(options.slug_field)
            return record.get(options.slug_field)

        source = self.get_slug_source(record, options)
        if isinstance(source, dict):
            return {
                language: self.transliterate(text, options.separator, language)
                for language, text in source.items()
            }
        return self.transliterate(source, options.separator, options.language)

    def has_custom_slug_been_used(self, record: SlugRecord, options: SlugOptions) -> bool:
        slug_field = options.slug_field
        if options.is_translatable:
            original = record.get_original(slug_field)
            if isinstance(original, str):
                original = json.loads(original) if original else None
            return (original or {}) != record.get_translations(slug_field)
        return (record.get_original(slug_field) or "") != (record.get(slug_field) or "")

    def get_slug_source(self, record: SlugRecord, options: SlugOptions) -> Slug:
        source = options.source
        limit = options.maximum_length

        if source.kind == SlugSourceKind.TRANSLATABLE_FIELD:
            return {
                language: (text or "")[:limit]
                for language, text in record.get_translations(source.name).items()
            }

        if source.kind == SlugSourceKind.COMPUTED:
            return str(source.function(record.instance) or "")[:limit]

        values = [record.get(name) for name in source.names]
        joined = options.separator.join("" if v is None else str(v) for v in values)
        return joined[:limit]

    # --- Uniqueness ---

    def make_slug_unique(self, slug: Slug, record: SlugRecord, options: SlugOptions) -> Slug:
        if isinstance(slug, dict):
            return {
                language: self.make_slug_string_unique(item, record, options, language)
                for language, item in slug.items()
            }
        return self.make_slug_string_unique(slug, record, options)

    def make_slug_string_unique(
        self,
        slug: Optional[str],
        record: SlugRecord,
        options: SlugOptions,
        language: Optional[str] = None,
    ) -> str:
        original_slug = slug or ""
        slug = original_slug
        i = 1

        # No upper bound: the store is finite, so a free suffix always exists.
        while slug == "" or self.other_record_exists_with_slug(slug, record, options, language):
            slug = f"{original_slug}{options.separator}{i}"
            i += 1

        if i > 1:
            logger.debug(f"Slug '{original_slug}' was taken; using '{slug}' after {i - 1} attempt(s)")
        return slug

    def other_record_exists_with_slug(
        self,
        slug: str,
        record: SlugRecord,
        options: SlugOptions,
        language: Optional[str] = None,
    ) -> bool:
        return bool(self.store.exists(options.slug_field, slug, self._exclude_key(record), language))

    @staticmethod
    def _exclude_key(record: SlugRecord) -> Any:
        key = record.get_key()
        if key is None and record.key_is_store_assigned:
            # A new row cannot share the placeholder with any stored row.
            return 0
        return key
