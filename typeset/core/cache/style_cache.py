"""
Caché en proceso de estilos resueltos, acotada por peso y antigüedad.

La caché es solo una optimización: un fallo (miss) siempre se resuelve
recalculando desde las mismas entradas.
"""
import hashlib
import json
import logging
import threading
import time
from collections import OrderedDict
from dataclasses import asdict, dataclass, is_dataclass
from typing import Any, Callable, Dict, List, Optional

from typeset.config import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    value: Any
    weight: int
    created_at: float


def _json_default(obj: Any):
    if is_dataclass(obj):
        return asdict(obj)
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    if isinstance(obj, (set, frozenset)):
        return sorted(obj)
    return str(obj)


def fingerprint(*parts: Any) -> str:
    """SHA-256 del contenido canónico (JSON con claves ordenadas)."""
    payload = json.dumps(parts, sort_keys=True, default=_json_default, ensure_ascii=False)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def estimate_weight(value: Any) -> int:
    """Peso aproximado en bytes de la representación serializada."""
    return len(json.dumps(value, default=_json_default, ensure_ascii=False).encode("utf-8"))


class StyleCache:
    """LRU por peso y TTL. Las operaciones públicas se serializan con un lock."""

    def __init__(
        self,
        max_weight: Optional[int] = None,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
        settings: Optional[Settings] = None,
    ):
        cfg = settings or get_settings()
        self.max_weight = max_weight if max_weight is not None else cfg.STYLE_CACHE_MAX_WEIGHT
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else cfg.STYLE_CACHE_TTL_SECONDS
        self._clock = clock
        self._entries: "OrderedDict[str, _Entry]" = OrderedDict()
        self._weight = 0
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def _expired(self, entry: _Entry) -> bool:
        return self._clock() - entry.created_at > self.ttl_seconds

    def _remove(self, key: str) -> None:
        # Requiere self._lock
        entry = self._entries.pop(key)
        self._weight -= entry.weight

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.misses += 1
                return None
            if self._expired(entry):
                self._remove(key)
                self.misses += 1
                return None
            self._entries.move_to_end(key)
            self.hits += 1
            return entry.value

    def set(self, key: str, value: Any, weight: Optional[int] = None) -> bool:
        """Devuelve False si la entrada pesa más que la capacidad total."""
        weight = weight if weight is not None else estimate_weight(value)
        if weight > self.max_weight:
            logger.warning(f"Entrada de caché ignorada: {weight} bytes > capacidad {self.max_weight}")
            return False

        with self._lock:
            if key in self._entries:
                self._remove(key)
            while self._entries and self._weight + weight > self.max_weight:
                oldest = next(iter(self._entries))
                self._remove(oldest)
                self.evictions += 1
                logger.debug(f"Caché: desalojada '{oldest[:12]}'")

            self._entries[key] = _Entry(value=value, weight=weight, created_at=self._clock())
            self._weight += weight
        return True

    def has(self, key: str) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and not self._expired(entry)

    def delete(self, key: str) -> bool:
        with self._lock:
            if key not in self._entries:
                return False
            self._remove(key)
            return True

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._weight = 0

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._entries.keys())

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "entries": len(self._entries),
                "weight": self._weight,
                "max_weight": self.max_weight,
                "hits": self.hits,
                "misses": self.misses,
                "evictions": self.evictions,
            }
