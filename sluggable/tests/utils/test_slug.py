import pytest

from sluggable.utils.slug import generate_slug


@pytest.mark.parametrize("text, expected", [
    ("Hello World", "hello-world"),
    ("  Leading and trailing  ", "leading-and-trailing"),
    ("Bonjour Monde", "bonjour-monde"),
    ("Crème brûlée!", "creme-brulee"),
    ("john@example", "john-at-example"),
    ("", ""),
    (None, ""),
    ("***", ""),
])
def test_generate_slug(text, expected):
    assert generate_slug(text) == expected


def test_custom_separator():
    assert generate_slug("Hello Big World", "_") == "hello_big_world"


def test_language_specific_spellings():
    assert generate_slug("Grüße aus Köln", "-", "de") == "gruesse-aus-koeln"
    assert generate_slug("Grüße aus Köln", "-", "de-AT") == "gruesse-aus-koeln"
    assert generate_slug("Grüße aus Köln", "-", "en") == "grusse-aus-koln"
