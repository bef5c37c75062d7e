"""
Per-build memoization.
A BuildCache is created by the caller for one build and handed to every component;
nothing is cached at module level, so no state outlives a build.
"""

from typing import Any, Callable, Dict, Tuple


class BuildCache:
	"""Keyed store of derived per-entity values (profiles, importance maps)."""

	def __init__(self):
		self._store: Dict[Tuple[str, str], Any] = {}
		self.hits = 0
		self.misses = 0

	def get_or_compute(self, namespace: str, entity_id: str, compute: Callable[[], Any]) -> Any:
		key = (namespace, entity_id)
		if key in self._store:
			self.hits += 1
			return self._store[key]
		self.misses += 1
		value = compute()
		self._store[key] = value
		return value

	def __len__(self) -> int:
		return len(self._store)

	def clear(self):
		self._store.clear()
