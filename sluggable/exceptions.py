from typing import Optional, Any
from sluggable.models.enums import InvalidOptionType

class InvalidOption(Exception):
    """
    Raised by the generator's guard step when a record type's SlugOptions
    break an invariant. These are programmer errors: the save that triggered
    generation should fail outright rather than be retried.
    """
    error_type: Optional[InvalidOptionType] = None

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        offending_value: Optional[Any] = None,
    ):
        super().__init__(message)
        self.message = message
        self.field_name = field_name
        self.offending_value = str(offending_value)[:255] if offending_value is not None else None # Truncate

    def __str__(self):
        kind = self.error_type.value if self.error_type is not None else "unspecified"
        return f"InvalidOption ({kind}): {self.message}" \
               f"{f' | Field: {self.field_name}' if self.field_name else ''}" \
               f"{f' | Value: {self.offending_value}' if self.offending_value is not None else ''}"

    @classmethod
    def missing_from_field(cls) -> "MissingFromFieldError":
        return MissingFromFieldError(
            "Could not determine which fields should be sluggified",
            field_name="source",
        )

    @classmethod
    def missing_slug_field(cls) -> "MissingSlugFieldError":
        return MissingSlugFieldError(
            "Could not determine in which field the slug should be saved",
            field_name="slug_field",
        )

    @classmethod
    def invalid_maximum_length(cls, value: Any = None) -> "InvalidMaximumLengthError":
        return InvalidMaximumLengthError(
            "Maximum length should be greater than zero",
            field_name="maximum_length",
            offending_value=value,
        )


class MissingFromFieldError(InvalidOption):
    error_type = InvalidOptionType.MISSING_FROM_FIELD


class MissingSlugFieldError(InvalidOption):
    error_type = InvalidOptionType.MISSING_SLUG_FIELD


class InvalidMaximumLengthError(InvalidOption):
    error_type = InvalidOptionType.INVALID_MAXIMUM_LENGTH
