"""공개 페이지 응답을 위한 태그 기반 인메모리 TTL 캐시입니다."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Iterable, Optional

from agency_cms.config import settings

logger = logging.getLogger(__name__)

TAGS = {
    "content": "content",
    "homepage": "homepage",
    "insight": "insights",
    "service": "services",
    "portfolio_item": "portfolio",
}


@dataclass
class _CacheEntry:
    value: Any
    expires_at: float
    tags: FrozenSet[str] = field(default_factory=frozenset)


class TaggedTTLCache:
    """Thread-safe TTL cache; entries can be dropped by tag."""

    def __init__(self, max_entries: int, ttl_seconds: int) -> None:
        self._max_entries = max_entries
        self._ttl_seconds = ttl_seconds
        self._lock = threading.Lock()
        self._data: Dict[str, _CacheEntry] = {}

    def get(self, key: str) -> Optional[_CacheEntry]:
        now = time.time()
        with self._lock:
            entry = self._data.get(key)
            if not entry:
                return None
            if entry.expires_at < now:
                self._data.pop(key, None)
                return None
            return entry

    def set(self, key: str, value: Any, ttl: Optional[int] = None, tags: Iterable[str] = ()) -> None:
        now = time.time()
        expires_at = now + (ttl if ttl is not None else self._ttl_seconds)
        with self._lock:
            if len(self._data) >= self._max_entries:
                self._prune(now)
                if len(self._data) >= self._max_entries:
                    oldest_key = min(self._data, key=lambda k: self._data[k].expires_at)
                    self._data.pop(oldest_key, None)
            self._data[key] = _CacheEntry(value=value, expires_at=expires_at, tags=frozenset(tags))

    def invalidate_tags(self, tags: Iterable[str]) -> int:
        wanted = set(tags)
        with self._lock:
            doomed = [k for k, entry in self._data.items() if entry.tags & wanted]
            for key in doomed:
                self._data.pop(key, None)
        return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def _prune(self, now: float) -> None:
        expired = [k for k, entry in self._data.items() if entry.expires_at < now]
        for key in expired:
            self._data.pop(key, None)


_cache = TaggedTTLCache(settings.CACHE_MAX_ENTRIES, settings.CACHE_TTL_SECONDS)


def remember(key: str, loader: Callable[[], Any], ttl: Optional[int] = None, tags: Iterable[str] = ()) -> Any:
    if not settings.CACHE_ENABLED:
        return loader()
    try:
        entry = _cache.get(key)
        if entry is not None:
            return entry.value
    except Exception as exc:
        logger.warning("cache read failed key=%s error=%s", key, exc)
        return loader()

    value = loader()
    try:
        _cache.set(key, value, ttl=ttl, tags=tags)
    except Exception as exc:
        logger.warning("cache write failed key=%s error=%s", key, exc)
    return value


def invalidate_tags(tags: Iterable[str]) -> int:
    tags = list(tags)
    try:
        dropped = _cache.invalidate_tags(tags)
    except Exception as exc:
        logger.warning("cache invalidation failed tags=%s error=%s", tags, exc)
        return 0
    logger.debug("cache invalidated tags=%s dropped=%d", tags, dropped)
    return dropped


def invalidate_content(version_type: str) -> int:
    """콘텐츠 저장 후 해당 타입 목록과 홈 화면 캐시를 비운다."""
    return invalidate_tags([TAGS.get(version_type, TAGS["content"]), TAGS["content"], TAGS["homepage"]])


def clear() -> None:
    _cache.clear()
