"""
Concurrent aggregation store.

Maps (category, detail, keyword) to an arbitrary value. Writers never
coordinate with each other: keys are spread over independently locked
shards, so documents processed in parallel only contend when their keys
hash to the same shard.

Semantics:
- put() creates or overwrites (last write wins, no merging or counting)
- get() returns None for a missing key instead of raising
- retrieve() maps a stored value through a caller-supplied function
"""

from dataclasses import dataclass, field
from threading import Lock
from typing import Callable, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

V = TypeVar("V")
T = TypeVar("T")

Key = Tuple[str, str, str]


@dataclass
class _Shard(Generic[V]):
    data: Dict[Key, V] = field(default_factory=dict)
    lock: Lock = field(default_factory=Lock)


class AggregationStore(Generic[V]):
    """
    Sharded, thread-safe (category, detail, keyword) -> value map.

    Usage:
        store = AggregationStore()
        store.put("fruit", "citrus", "vitamin", entry)
        store.get("fruit", "citrus", "vitamin")          # entry
        store.retrieve("fruit", "citrus", "vitamin", str) # str(entry)
    """

    def __init__(self, shards: int = 16):
        if shards < 1:
            raise ValueError("shards must be >= 1")
        self._shards: List[_Shard[V]] = [_Shard() for _ in range(shards)]

    def _shard(self, key: Key) -> _Shard[V]:
        return self._shards[hash(key) % len(self._shards)]

    def put(self, category: str, detail: str, keyword: str, value: V) -> None:
        key = (category, detail, keyword)
        shard = self._shard(key)
        with shard.lock:
            shard.data[key] = value

    def get(self, category: str, detail: str, keyword: str,
            default: Optional[V] = None) -> Optional[V]:
        key = (category, detail, keyword)
        shard = self._shard(key)
        with shard.lock:
            return shard.data.get(key, default)

    def contains(self, category: str, detail: str, keyword: str) -> bool:
        key = (category, detail, keyword)
        shard = self._shard(key)
        with shard.lock:
            return key in shard.data

    def retrieve(self, category: str, detail: str, keyword: str,
                 mapper: Callable[[V], T]) -> Optional[T]:
        """Stored value passed through mapper, or None when the key is absent."""
        key = (category, detail, keyword)
        shard = self._shard(key)
        with shard.lock:
            if key not in shard.data:
                return None
            raw = shard.data[key]
        return mapper(raw)

    # ── Snapshots ──────────────────────────────────────────────────────

    def items(self) -> List[Tuple[Key, V]]:
        """Point-in-time copy of every entry, sorted by key."""
        snapshot: List[Tuple[Key, V]] = []
        for shard in self._shards:
            with shard.lock:
                snapshot.extend(shard.data.items())
        snapshot.sort(key=lambda item: item[0])
        return snapshot

    def keys(self) -> List[Key]:
        return [key for key, _ in self.items()]

    def keywords_of(self, category: str, detail: str) -> List[str]:
        """Sorted keywords aggregated under one (category, detail) bucket."""
        return [
            keyword for (cat, det, keyword) in self.keys()
            if cat == category and det == detail
        ]

    def buckets(self) -> Dict[str, Dict[str, List[str]]]:
        """Nested {category: {detail: [keywords]}} view of the store."""
        view: Dict[str, Dict[str, List[str]]] = {}
        for category, detail, keyword in self.keys():
            view.setdefault(category, {}).setdefault(detail, []).append(keyword)
        return view

    def __len__(self) -> int:
        total = 0
        for shard in self._shards:
            with shard.lock:
                total += len(shard.data)
        return total

    def __iter__(self) -> Iterator[Key]:
        return iter(self.keys())

    def __contains__(self, key: Key) -> bool:
        return self.contains(*key)
