import re
import unicodedata
from datetime import datetime, timezone
from typing import Optional

_SLUG_STRIP = re.compile(r"[^\w\s-]", re.UNICODE)
_SLUG_HYPHENATE = re.compile(r"[-\s_]+")


def utcnow() -> datetime:
    # DB에는 naive UTC로 저장한다.
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def slugify(text: Optional[str]) -> str:
    value = unicodedata.normalize("NFKC", str(text or "")).strip().lower()
    value = _SLUG_STRIP.sub("", value)
    return _SLUG_HYPHENATE.sub("-", value).strip("-")
