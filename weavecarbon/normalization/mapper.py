from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any, TypeVar

from .dictionaries import HEADER_MAP, PROCESS_MAP
from .tokens import normalize_token, slugify, to_text

"""Row mapper and value parsers.

Unknown or garbled input never raises here: values degrade to a caller-chosen
default and headers that match nothing are kept under their original text. Stricter
rules are the validator's job.
"""

__all__ = [
    "is_blank",
    "map_value",
    "parse_processes",
    "parse_accessories",
    "to_int",
    "to_float",
    "map_header",
    "map_row",
]

T = TypeVar("T")

_LIST_DELIMITERS = re.compile(r"[,;|]")
# a single dot group ("66.667") is a plain decimal, never thousands
_THOUSANDS_DOTS = re.compile(r"^-?[1-9]\d{0,2}(\.\d{3}){2,}$")
_THOUSANDS_DOTS_DECIMAL_COMMA = re.compile(r"^-?[1-9]\d{0,2}(\.\d{3})+,\d+$")
_THOUSANDS_COMMAS = re.compile(r"^-?[1-9]\d{0,2}(,\d{3})+(\.\d+)?$")


def is_blank(value: Any) -> bool:
    """None, NaN and whitespace-only strings are blank; 0 is not."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and value.strip() == "":
        return True
    return False


def map_value(raw: Any, dictionary: Mapping[str, str], default: T) -> str | T:
    """Look a raw value up in a canonicalization dictionary.

    Returns the canonical code, or `default` when the normalized value has no entry
    (blank input included).
    """
    key = normalize_token(raw)
    if not key:
        return default
    return dictionary.get(key, default)


def _split_list(raw: Any) -> list[str]:
    if is_blank(raw):
        return []
    if isinstance(raw, (list, tuple, set)):
        parts = [to_text(p) for p in raw]
    else:
        parts = _LIST_DELIMITERS.split(to_text(raw))
    return [p.strip() for p in parts if p and p.strip()]


def parse_processes(raw: Any) -> list[str]:
    """Split a delimited process cell into canonical process codes.

    Tokens are mapped independently; an unmapped token is kept as a slug of its
    text so unusual processes still reach the calculation. Duplicates are dropped,
    first-seen order is kept.
    """
    processes: list[str] = []
    for token in _split_list(raw):
        code = map_value(token, PROCESS_MAP, None) or slugify(token)
        if code and code not in processes:
            processes.append(code)
    return processes


def parse_accessories(raw: Any) -> list[str]:
    """Split an accessories cell ("Nút, Khoá kéo") into trimmed, de-duplicated items."""
    seen: set[str] = set()
    items: list[str] = []
    for token in _split_list(raw):
        key = token.casefold()
        if key in seen:
            continue
        seen.add(key)
        items.append(token)
    return items


def to_float(raw: Any) -> float | None:
    """Parse a numeric cell; None for blanks, garbage and non-finite values.

    Accepts "12,5" (decimal comma), "66.667" (decimal dot), and thousands grouping
    "1,000", "1,000.5", "1.000.000" and "1.000,5".
    """
    if is_blank(raw) or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = to_text(raw).replace(" ", "").removesuffix("%")
        if _THOUSANDS_DOTS.match(text):
            text = text.replace(".", "")
        elif _THOUSANDS_DOTS_DECIMAL_COMMA.match(text):
            text = text.replace(".", "").replace(",", ".")
        elif _THOUSANDS_COMMAS.match(text):
            text = text.replace(",", "")
        else:
            text = text.replace(",", ".")
        try:
            value = float(text)
        except ValueError:
            return None
    if not math.isfinite(value):
        return None
    return value


def to_int(raw: Any) -> int | None:
    """Parse an integer cell; 12.0 is accepted, 12.5 is not."""
    value = to_float(raw)
    if value is None or not value.is_integer():
        return None
    return int(value)


def map_header(header: Any) -> str | None:
    """Canonical field key for a spreadsheet header, or None if unknown."""
    return HEADER_MAP.get(normalize_token(header))


def map_row(raw_row: Mapping[Any, Any]) -> dict[str, Any]:
    """Rewrite a raw row keyed by header text into a canonical field-keyed row.

    Values are left raw. Headers that match no field are kept under their original
    text. When several headers resolve to the same field the first non-blank value wins.
    """
    if not isinstance(raw_row, Mapping):
        raise TypeError(f"row must be a mapping, got {type(raw_row).__name__}")
    mapped: dict[str, Any] = {}
    for header, value in raw_row.items():
        key = map_header(header) or str(header)
        if key in mapped and not is_blank(mapped[key]):
            continue
        mapped[key] = value
    return mapped
