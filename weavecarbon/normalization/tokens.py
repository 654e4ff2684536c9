from __future__ import annotations

import math
import re
import unicodedata
from typing import Any

"""Token normalizer.

Turns any header or cell value into a lookup key: trim, lowercase, strip
diacritics, strip everything outside [a-z0-9]. "Thị trường", "thi truong" and
"THITRUONG" all become "thitruong".
"""

__all__ = [
    "to_text",
    "normalize_token",
    "slugify",
]

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def to_text(value: Any) -> str:
    """Coerce a raw cell value to trimmed text.

    None / NaN become "", integral floats lose their ".0" (Excel hands 1000 back as 1000.0).
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value).strip()


def _fold(value: Any) -> str:
    text = to_text(value).lower()
    # đ has no NFD decomposition
    text = text.replace("đ", "d")
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def normalize_token(value: Any) -> str:
    """Normalization key used for both header names and cell values."""
    return _NON_ALNUM.sub("", _fold(value))


def slugify(value: Any) -> str:
    """Readable fallback code for unmapped free text ("Giặt đá!" -> "giat_da")."""
    return _NON_ALNUM.sub("_", _fold(value)).strip("_")
