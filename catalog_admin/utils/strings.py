# catalog_admin/utils/strings.py
from __future__ import annotations

import re
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def to_url_friendly(val: str | None, fallback: str = "product") -> str:
    """Lowercase ASCII slug: accents stripped, other runs of symbols -> '-'."""
    raw = (val or "").strip().lower()
    if not raw:
        return fallback
    # "đ" has no NFKD decomposition
    raw = raw.replace("đ", "d")
    normalized = unicodedata.normalize("NFKD", raw)
    normalized = "".join(ch for ch in normalized if not unicodedata.combining(ch))
    normalized = _NON_ALNUM.sub("-", normalized).strip("-")
    return normalized or fallback


_TRUE = ("1", "true", "t", "yes", "y", "on")
_FALSE = ("0", "false", "f", "no", "n", "off")


def parse_bool(v, default=None) -> bool | None:
    """Strict boolean parsing; raises ValueError for anything unrecognised."""
    if v is None:
        return default
    if isinstance(v, bool):
        return v
    if isinstance(v, int) and v in (0, 1):
        return bool(v)
    if isinstance(v, str):
        s = v.strip().lower()
        if s in _TRUE:
            return True
        if s in _FALSE:
            return False
    raise ValueError("Must be a boolean.")
