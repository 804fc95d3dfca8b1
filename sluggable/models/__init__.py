# sluggable/models/__init__.py

from .enums import InvalidOptionType, SlugSourceKind
from .options import SlugOptions, FieldList, TranslatableField, Computed, SlugSource


__all__ = [
    "InvalidOptionType",
    "SlugSourceKind",
    "SlugOptions",
    "FieldList",
    "TranslatableField",
    "Computed",
    "SlugSource",
]
