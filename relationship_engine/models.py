"""
Data models for the Entity Relationship Intelligence Engine.
Defines the core data structures shared by loaders, analyzers, the graph builder and the index compiler.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field  # auto-generates __init__, __repr__, etc.
# Read-only view over attribute dictionaries
from types import MappingProxyType  # immutable mapping wrapper
# Import typing helpers for precise and self-documenting types
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple  # containers and optionals

# Closed set of entity kinds accepted in identifiers
ENTITY_KINDS = ('movie', 'show', 'person', 'company', 'collection', 'genre', 'keyword')

# Alternative spellings seen in raw provider ids / media_type fields
KIND_ALIASES = {
	'tv': 'show',
	'tv_show': 'show',
	'series': 'show',
	'production_company': 'company',
}

# Closed connection type taxonomy
CONNECTION_TYPES = (
	'genre_match',
	'studio_universe',
	'talent_overlap',
	'franchise_member',
	'rating_similarity',
	'semantic_similarity',
	'cultural_significance',
	'cluster_member',
	'peer_recommendation',
)

# Graph partitions, in output order
CATEGORIES = ('direct', 'semantic', 'contextual', 'collaborative', 'temporal', 'cultural', 'cluster')


def parse_entity_id(raw: Any) -> Tuple[str, int]:
	"""
	Split an identifier like "movie:603" into ("movie", 603).
	Also accepts "movie_603" and alias kinds ("tv:1399" -> "show").
	Raises ValueError for anything else.
	"""
	if not isinstance(raw, str) or not raw:
		raise ValueError(f"Entity id must be a non-empty string, got {raw!r}")
	sep = ':' if ':' in raw else '_'
	kind, _, num = raw.rpartition(sep)
	kind = KIND_ALIASES.get(kind.strip().lower(), kind.strip().lower())
	if kind not in ENTITY_KINDS:
		raise ValueError(f"Unknown entity kind in id {raw!r}")
	if not num.isdigit():
		raise ValueError(f"Entity id {raw!r} has no numeric part")
	return kind, int(num)


def make_entity_id(kind: str, num: int) -> str:
	"""Canonical `kind:numeric-id` form."""
	return f"{kind}:{int(num)}"


def _as_float(value: Any) -> float:
	"""Coerce to float; malformed values become 0.0."""
	if isinstance(value, bool):
		return 0.0
	try:
		return float(value)
	except (TypeError, ValueError):
		return 0.0


def _as_list(value: Any) -> List[Any]:
	return list(value) if isinstance(value, (list, tuple)) else []


def _named(items: Any) -> List[str]:
	"""Names from a list of strings or {"name": ...} dicts."""
	names = []
	for item in _as_list(items):
		if isinstance(item, str) and item.strip():
			names.append(item.strip())
		elif isinstance(item, dict) and isinstance(item.get('name'), str) and item['name'].strip():
			names.append(item['name'].strip())
	return names


@dataclass(frozen=True)
class Entity:
	"""
	One content record (movie, show, person, ...).
	Attributes are kept as delivered by ingestion; the accessors below read them
	defensively so a malformed field behaves like a missing one.
	"""
	id: str  # canonical "kind:numeric-id"
	kind: str  # one of ENTITY_KINDS
	name: str  # display name (title for movies)
	attributes: Mapping[str, Any] = field(default_factory=dict)  # raw provider fields
	derived: Mapping[str, Any] = field(default_factory=dict)  # fields added by enrichers

	def __post_init__(self):
		# Freeze the mappings so analyzers cannot mutate shared records
		object.__setattr__(self, 'attributes', MappingProxyType(dict(self.attributes)))
		object.__setattr__(self, 'derived', MappingProxyType(dict(self.derived)))

	def get(self, key: str, default: Any = None) -> Any:
		"""Derived fields first, then raw attributes."""
		if key in self.derived:
			return self.derived[key]
		return self.attributes.get(key, default)

	def with_derived(self, **fields: Any) -> 'Entity':
		"""Return a copy carrying extra derived fields. Existing fields are never overwritten."""
		merged = dict(self.derived)
		for key, value in fields.items():
			if key in self.attributes or key in merged:
				raise ValueError(f"Derived field '{key}' would overwrite an existing field on {self.id}")
			merged[key] = value
		return Entity(id=self.id, kind=self.kind, name=self.name, attributes=self.attributes, derived=merged)

	# --- typed accessors -------------------------------------------------

	def text(self, key: str) -> str:
		value = self.attributes.get(key)
		return value.strip() if isinstance(value, str) else ''

	@property
	def title(self) -> str:
		return self.text('title') or self.text('name') or self.name

	@property
	def rating(self) -> float:
		return _as_float(self.attributes.get('vote_average'))

	@property
	def vote_count(self) -> int:
		return int(_as_float(self.attributes.get('vote_count')))

	@property
	def popularity(self) -> float:
		return _as_float(self.attributes.get('popularity'))

	@property
	def year(self) -> int:
		"""Release (or first air) year, 0 when unknown."""
		for key in ('release_date', 'first_air_date'):
			value = self.attributes.get(key)
			if isinstance(value, str) and len(value) >= 4 and value[:4].isdigit():
				year = int(value[:4])
				if year > 1800:
					return year
		return 0

	def genre_names(self) -> List[str]:
		from .rules import GENRE_ID_NAMES  # local import keeps models free of rule tables at load time
		names = _named(self.attributes.get('genres'))
		if names:
			return names
		return [GENRE_ID_NAMES[g] for g in _as_list(self.attributes.get('genre_ids')) if g in GENRE_ID_NAMES]

	def keyword_names(self) -> List[str]:
		raw = self.attributes.get('keywords')
		if isinstance(raw, dict):  # TMDB wraps keywords as {"keywords": [...]} or {"results": [...]}
			raw = raw.get('keywords') or raw.get('results')
		return _named(raw)

	def companies(self) -> List[Tuple[Optional[int], str]]:
		"""(id, name) pairs of production companies."""
		result = []
		for company in _as_list(self.attributes.get('production_companies')):
			if not isinstance(company, dict):
				continue
			cid = company.get('id')
			name = company.get('name') if isinstance(company.get('name'), str) else ''
			if isinstance(cid, int) and not isinstance(cid, bool):
				result.append((cid, name))
			elif name:
				result.append((None, name))
		return result

	def _people(self, key: str) -> List[Dict[str, Any]]:
		credits = self.attributes.get(key)
		if credits is None and isinstance(self.attributes.get('credits'), dict):
			credits = self.attributes['credits'].get(key)
		return [p for p in _as_list(credits) if isinstance(p, dict) and isinstance(p.get('id'), int)]

	def cast(self) -> List[Dict[str, Any]]:
		return self._people('cast')

	def crew(self) -> List[Dict[str, Any]]:
		return self._people('crew')

	@property
	def collection(self) -> Optional[Dict[str, Any]]:
		value = self.attributes.get('belongs_to_collection')
		if isinstance(value, dict) and isinstance(value.get('id'), int):
			return value
		return None

	def countries(self) -> List[str]:
		origin = [c for c in _as_list(self.attributes.get('origin_country')) if isinstance(c, str)]
		if origin:
			return origin
		return [
			c['iso_3166_1'] for c in _as_list(self.attributes.get('production_countries'))
			if isinstance(c, dict) and isinstance(c.get('iso_3166_1'), str)
		]


class Corpus:
	"""
	Frozen mapping from entity id to Entity.
	Iteration order is sorted by id so every pass over the corpus is deterministic.
	"""

	def __init__(self, entities: Mapping[str, Entity]):
		if not isinstance(entities, Mapping):
			raise ValueError("Corpus must be built from a mapping of id -> Entity")
		self._entities = MappingProxyType(dict(entities))
		self._order = tuple(sorted(self._entities))

	def __contains__(self, entity_id: object) -> bool:
		return entity_id in self._entities

	def __getitem__(self, entity_id: str) -> Entity:
		return self._entities[entity_id]

	def __iter__(self) -> Iterator[str]:
		return iter(self._order)

	def __len__(self) -> int:
		return len(self._order)

	def get(self, entity_id: str) -> Optional[Entity]:
		return self._entities.get(entity_id)

	def entities(self) -> Iterator[Entity]:
		for entity_id in self._order:
			yield self._entities[entity_id]

	def replace(self, updated: Mapping[str, Entity]) -> 'Corpus':
		"""New corpus with some entities swapped for enriched copies."""
		merged = dict(self._entities)
		merged.update(updated)
		return Corpus(merged)

	def without(self, entity_ids) -> 'Corpus':
		drop = set(entity_ids)
		return Corpus({k: v for k, v in self._entities.items() if k not in drop})


@dataclass(frozen=True)
class Connection:
	"""
	Directed, scored edge from some source entity to `target_id`.
	strength = how related, confidence = how sure; final_score is derived from both.
	"""
	target_id: str  # entity the edge points at
	type: str  # member of CONNECTION_TYPES
	strength: float  # 0..1
	confidence: float  # 0..1
	reason: str  # human-readable justification, never empty
	metadata: Mapping[str, Any] = field(default_factory=dict)  # rule-specific details
	bidirectional: bool = False  # True when produced by reverse-edge enhancement

	def __post_init__(self):
		if self.type not in CONNECTION_TYPES:
			raise ValueError(f"Unknown connection type: {self.type}")
		if not 0.0 <= self.strength <= 1.0:
			raise ValueError(f"Strength out of range: {self.strength}")
		if not 0.0 <= self.confidence <= 1.0:
			raise ValueError(f"Confidence out of range: {self.confidence}")
		if not self.reason or not self.reason.strip():
			raise ValueError("Connection reason must not be empty")
		object.__setattr__(self, 'metadata', MappingProxyType(dict(self.metadata)))

	@property
	def final_score(self) -> float:
		return self.strength * self.confidence

	def sort_key(self) -> Tuple[float, str, str]:
		"""Descending score with a stable tiebreak on target and type."""
		return (-self.final_score, self.target_id, self.type)

	def to_dict(self) -> Dict[str, Any]:
		return {
			'targetId': self.target_id,
			'type': self.type,
			'strength': self.strength,
			'confidence': self.confidence,
			'finalScore': self.final_score,
			'reason': self.reason,
			'bidirectional': self.bidirectional,
			'metadata': dict(self.metadata),
		}


@dataclass(frozen=True)
class Cluster:
	"""A group of at least three entities sharing a semantic connection type."""
	key: str  # e.g. "semantic_similarity_cluster"
	members: frozenset  # entity ids

	def to_dict(self) -> Dict[str, Any]:
		return {'key': self.key, 'members': sorted(self.members)}
