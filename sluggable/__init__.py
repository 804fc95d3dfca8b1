# sluggable/__init__.py

from .exceptions import (
    InvalidOption,
    MissingFromFieldError,
    MissingSlugFieldError,
    InvalidMaximumLengthError,
)
from .models import SlugOptions, FieldList, TranslatableField, Computed, InvalidOptionType
from .services.generator import SlugGenerator
from .services.records import SlugRecord, SlugStore, MappingRecord, InMemorySlugStore
from .services.lifecycle import SlugLifecycle, save_with_slug
from .services.bulk import regenerate_slugs
from .utils.slug import generate_slug

__all__ = [
    "InvalidOption",
    "MissingFromFieldError",
    "MissingSlugFieldError",
    "InvalidMaximumLengthError",
    "InvalidOptionType",
    "SlugOptions",
    "FieldList",
    "TranslatableField",
    "Computed",
    "SlugGenerator",
    "SlugRecord",
    "SlugStore",
    "MappingRecord",
    "InMemorySlugStore",
    "SlugLifecycle",
    "save_with_slug",
    "regenerate_slugs",
    "generate_slug",
]
