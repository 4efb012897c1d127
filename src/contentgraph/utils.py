from __future__ import annotations

import math
import re
import unicodedata

from slugify import slugify as _slugify

DATE_PREFIX_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")
WORD_RE = re.compile(r"\S+")

DEFAULT_WORDS_PER_MINUTE = 200

def get_word_count(text: str) -> int:
    return len(WORD_RE.findall(text))

def get_reading_time(text: str, words_per_minute: int = DEFAULT_WORDS_PER_MINUTE) -> int:
    """Minutes needed to read `text`, rounded up."""
    return math.ceil(get_word_count(text) / words_per_minute)

def slugify(text: str) -> str:
    return _slugify(text)

def title_sort_key(title: str) -> tuple[str, str]:
    """Sort key approximating a locale-aware, case- and accent-insensitive compare."""
    decomposed = unicodedata.normalize("NFKD", title)
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    return folded, title
