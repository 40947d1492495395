"""
Name normalization helpers.

Ledger names are typed by hand and the classifier returns names in whatever
case the receipt prints them, so every comparison goes through
``normalize_text``.
"""

import unicodedata
from typing import Optional


def normalize_text(text: Optional[str]) -> str:
    """
    Build the comparison key for a name or header.

    Strips diacritics, lower-cases and trims surrounding whitespace.
    ``None`` is treated as an empty string. The result is idempotent:
    ``normalize_text(normalize_text(x)) == normalize_text(x)``.

    >>> normalize_text("  JOÃO Silva ")
    'joao silva'
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", str(text))
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.lower().strip()


def capitalize_name(name: str) -> str:
    """
    Title-case a payer name word by word.

    "JOSÉ DE SOUZA" -> "José De Souza", "maria santos" -> "Maria Santos".
    Only the first character of each space-separated word is upper-cased, so
    particles like "de" are capitalized too.
    """
    return " ".join(
        word[:1].upper() + word[1:] for word in name.lower().split(" ")
    )
