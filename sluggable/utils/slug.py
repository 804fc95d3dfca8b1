# sluggable/utils/slug.py
from typing import Dict, List, Optional, Tuple

from slugify import slugify as _slugify

_COMMON_REPLACEMENTS: List[Tuple[str, str]] = [
    ("@", " at "),
]

# Language-specific spellings applied before the generic ASCII transliteration.
_LANGUAGE_REPLACEMENTS: Dict[str, List[Tuple[str, str]]] = {
    "de": [
        ("ä", "ae"), ("Ä", "Ae"),
        ("ö", "oe"), ("Ö", "Oe"),
        ("ü", "ue"), ("Ü", "Ue"),
        ("ß", "ss"),
    ],
    "da": [
        ("æ", "ae"), ("Æ", "Ae"),
        ("ø", "oe"), ("Ø", "Oe"),
        ("å", "aa"), ("Å", "Aa"),
    ],
    "bg": [
        ("щ", "sht"), ("Щ", "Sht"),
        ("ъ", "a"), ("Ъ", "A"),
        ("ь", "y"), ("Ь", "Y"),
        ("ю", "yu"), ("Ю", "Yu"),
        ("я", "ya"), ("Я", "Ya"),
    ],
}


def _replacements_for(language: Optional[str]) -> List[Tuple[str, str]]:
    if not language:
        return list(_COMMON_REPLACEMENTS)
    primary = language.replace("_", "-").split("-", 1)[0].lower()
    return _LANGUAGE_REPLACEMENTS.get(primary, []) + _COMMON_REPLACEMENTS


def generate_slug(input_string: Optional[str], separator: str = "-", language: Optional[str] = None) -> str:
    """
    Generates a URL-friendly slug from the input string.

    - Applies language-specific spellings (e.g. German umlauts) when a language is given
    - Transliterates to ASCII
    - Converts to lowercase
    - Joins words with the separator, dropping everything that is not alphanumeric

    Args:
        input_string (str): The text to convert into a slug.
        separator (str): Word separator in the output.
        language (str): Optional language tag such as "de" or "en-GB".

    Returns:
        str: The generated slug, possibly empty.
    """
    if not input_string:
        return ""
    return _slugify(
        input_string,
        separator=separator,
        lowercase=True,
        replacements=_replacements_for(language),
        allow_unicode=False,
    )
