from enum import Enum

class InvalidOptionType(str, Enum):
    """
    Identifies which slug configuration invariant a record type violated.
    """
    MISSING_FROM_FIELD = "missing_from_field"           # Source field list is empty (or names no field).
    MISSING_SLUG_FIELD = "missing_slug_field"           # No field configured to store the slug.
    INVALID_MAXIMUM_LENGTH = "invalid_maximum_length"   # Maximum length is zero or negative.


class SlugSourceKind(str, Enum):
    """
    Tag for the three ways a slug source can be configured.
    """
    FIELD_LIST = "field_list"
    TRANSLATABLE_FIELD = "translatable_field"
    COMPUTED = "computed"
