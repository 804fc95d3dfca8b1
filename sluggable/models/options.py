"""
Configuration value objects describing how a record type builds its slug.

A record type returns a fresh ``SlugOptions`` from ``get_slug_options()``
every time generation runs. Options are frozen pydantic models: each builder
method returns a modified copy. Nothing here checks the configuration's
invariants; ``SlugGenerator`` guards them when it runs.
"""
from typing import Any, Callable, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from sluggable.core.config import settings
from sluggable.models.enums import SlugSourceKind


class FieldList(BaseModel):
    """Ordered field names whose values are joined with the separator."""
    model_config = ConfigDict(frozen=True)

    kind: Literal[SlugSourceKind.FIELD_LIST] = SlugSourceKind.FIELD_LIST
    names: Tuple[str, ...] = ()


class TranslatableField(BaseModel):
    """A single field holding one value per language tag."""
    model_config = ConfigDict(frozen=True)

    kind: Literal[SlugSourceKind.TRANSLATABLE_FIELD] = SlugSourceKind.TRANSLATABLE_FIELD
    name: str


class Computed(BaseModel):
    """A function of the record returning the text to sluggify."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal[SlugSourceKind.COMPUTED] = SlugSourceKind.COMPUTED
    function: Callable[[Any], str]


SlugSource = Union[FieldList, TranslatableField, Computed]


class SlugOptions(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    source: SlugSource = Field(default_factory=FieldList, discriminator="kind")
    slug_field: str = ""
    separator: str = Field(default_factory=lambda: settings.SLUG_SEPARATOR)
    language: Optional[str] = Field(default_factory=lambda: settings.SLUG_LANGUAGE)
    maximum_length: int = Field(default_factory=lambda: settings.SLUG_MAXIMUM_LENGTH)
    generate_on_create: bool = True
    generate_on_update: bool = True
    require_unique: bool = True

    @classmethod
    def create(cls) -> "SlugOptions":
        return cls()

    @property
    def is_translatable(self) -> bool:
        return self.source.kind == SlugSourceKind.TRANSLATABLE_FIELD

    def generate_slugs_from(self, *fields: Union[str, Callable[[Any], str]]) -> "SlugOptions":
        """
        Use the given field names, in order, as the slug source. A single
        callable argument is used as a computed source instead.
        """
        if len(fields) == 1 and callable(fields[0]):
            return self._with(source=Computed(function=fields[0]))
        return self._with(source=FieldList(names=tuple(fields)))

    def generate_slugs_from_translatable(self, field: str) -> "SlugOptions":
        return self._with(source=TranslatableField(name=field))

    def save_slugs_to(self, field: str) -> "SlugOptions":
        return self._with(slug_field=field)

    def allow_duplicate_slugs(self) -> "SlugOptions":
        return self._with(require_unique=False)

    def slugs_should_be_no_longer_than(self, maximum_length: int) -> "SlugOptions":
        return self._with(maximum_length=maximum_length)

    def using_separator(self, separator: str) -> "SlugOptions":
        return self._with(separator=separator)

    def using_language(self, language: Optional[str]) -> "SlugOptions":
        return self._with(language=language)

    def do_not_generate_slugs_on_create(self) -> "SlugOptions":
        return self._with(generate_on_create=False)

    def do_not_generate_slugs_on_update(self) -> "SlugOptions":
        return self._with(generate_on_update=False)

    def _with(self, **changes: Any) -> "SlugOptions":
        return self.model_copy(update=changes)
