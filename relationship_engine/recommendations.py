"""
Recommendation compiler.
Turns the finished graph into per-entity `quick` and `deep` ranked lists of plain dicts.
"""

from dataclasses import dataclass, field  # compiled set record
from typing import Dict, List, Optional

from loguru import logger  # console logging

from .config import IndexConfig
from .graph_builder import RelationshipGraph
from .models import CATEGORIES, Connection


def _entry(conn: Connection, category: str, with_relationship: bool) -> Dict[str, object]:
	entry = {
		'id': conn.target_id,
		'score': conn.final_score,
		'confidence': conn.confidence,
		'reason': conn.reason,
		'type': category,
	}
	if with_relationship:
		entry['relationship'] = conn.type
	return entry


@dataclass
class RecommendationSet:
	"""entity id -> {'quick': [...], 'deep': [...]}"""
	entries: Dict[str, Dict[str, List[Dict[str, object]]]] = field(default_factory=dict)

	def to_dict(self) -> Dict[str, Dict[str, List[Dict[str, object]]]]:
		return self.entries

	def for_entity(
		self,
		entity_id: str,
		limit: int = 10,
		min_confidence: float = 0.0,
		category: Optional[str] = None,
	) -> List[Dict[str, object]]:
		"""Filter an entity's deep list by confidence and category."""
		if entity_id not in self.entries:
			raise ValueError(f"No recommendations compiled for {entity_id}")
		if category is not None and category not in CATEGORIES:
			raise ValueError(f"Unknown category: {category}")
		picked = [
			item for item in self.entries[entity_id]['deep']
			if item['confidence'] >= min_confidence and (category is None or item['type'] == category)
		]
		return picked[:limit]


class RecommendationCompiler:

	def __init__(self, config: Optional[IndexConfig] = None):
		self.config = config or IndexConfig()

	def compile(self, graph: RelationshipGraph) -> RecommendationSet:
		cfg = self.config
		entries = {}
		for entity_id in sorted(graph.edges):
			quick = [
				_entry(conn, 'direct', False)
				for conn in graph.connections(entity_id, 'direct')
				if conn.confidence >= cfg.quick_min_confidence
			][:cfg.quick_limit]

			merged = [
				(conn, category)
				for category in CATEGORIES
				for conn in graph.connections(entity_id, category)
			]
			merged.sort(key=lambda pair: pair[0].sort_key() + (pair[1],))
			deep = [_entry(conn, category, True) for conn, category in merged[:cfg.deep_limit]]

			entries[entity_id] = {'quick': quick, 'deep': deep}

		logger.info(f"[Recommendations] Compiled lists for {len(entries)} entities")
		return RecommendationSet(entries=entries)
