"""
Content analyzer.
Finds explicit, verifiable relationships from shared structured attributes:
genres, production companies, cast/crew, franchise collection and rating band.
"""

from dataclasses import dataclass  # per-entity feature record
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

from .cache import BuildCache
from .config import ContentConfig
from .models import Connection, Corpus, Entity
from . import rules


@dataclass(frozen=True)
class PersonRole:
	name: str
	importance: float
	roles: FrozenSet[str]  # crew jobs plus "Cast"


@dataclass(frozen=True)
class ContentFeatures:
	genres: FrozenSet[str]
	company_ids: Dict[int, str]  # id -> name
	people: Dict[int, PersonRole]
	collection_id: Optional[int]
	collection_name: str
	rating: float


class ContentAnalyzer:
	"""
	Scores five structured relationship types between one entity and the rest of the corpus.
	"""

	name = 'content'

	def __init__(self, config: Optional[ContentConfig] = None):
		self.config = config or ContentConfig()

	def analyze(self, entity: Entity, corpus: Corpus, cache: BuildCache) -> List[Connection]:
		mine = self.features(entity, cache)
		connections = []
		for other in corpus.entities():
			if other.id == entity.id:
				continue
			theirs = self.features(other, cache)
			for rule in (self._genre_match, self._studio_universe, self._talent_overlap,
						 self._franchise_member, self._rating_similarity):
				conn = rule(mine, theirs, other.id)
				if conn is not None:
					connections.append(conn)
		return connections

	# --- feature extraction ----------------------------------------------

	def features(self, entity: Entity, cache: BuildCache) -> ContentFeatures:
		return cache.get_or_compute('content', entity.id, lambda: self._extract(entity))

	def _extract(self, entity: Entity) -> ContentFeatures:
		companies = {cid: name for cid, name in entity.companies() if cid is not None}
		collection = entity.collection
		return ContentFeatures(
			genres=frozenset(entity.genre_names()),
			company_ids=companies,
			people=self.person_importance(entity),
			collection_id=collection['id'] if collection else None,
			collection_name=str(collection.get('name') or '') if collection else '',
			rating=entity.rating,
		)

	def person_importance(self, entity: Entity) -> Dict[int, PersonRole]:
		"""
		Importance of each credited person: billing order for cast, job title for crew,
		taking the higher value when someone appears in both.
		"""
		cfg = self.config
		people: Dict[int, PersonRole] = {}

		for index, member in enumerate(entity.cast()):
			order = member.get('order')
			if not isinstance(order, int) or isinstance(order, bool):
				order = index
			importance = rules.DEFAULT_CAST_IMPORTANCE
			for limit, value in rules.CAST_ORDER_IMPORTANCE:
				if order < limit:
					importance = value
					break
			popularity = member.get('popularity')
			if isinstance(popularity, (int, float)) and popularity > cfg.cast_popularity_floor:
				importance += cfg.cast_popularity_boost
			importance = min(cfg.person_importance_cap, importance)
			self._merge(people, member, importance, 'Cast')

		for member in entity.crew():
			job = member.get('job') if isinstance(member.get('job'), str) else ''
			importance = rules.CREW_JOB_IMPORTANCE.get(job, rules.DEFAULT_CREW_IMPORTANCE)
			self._merge(people, member, importance, job or 'Crew')

		return people

	def _merge(self, people: Dict[int, PersonRole], member: Dict, importance: float, role: str):
		pid = member['id']
		name = member.get('name') if isinstance(member.get('name'), str) else str(pid)
		current = people.get(pid)
		if current is None:
			people[pid] = PersonRole(name=name, importance=importance, roles=frozenset({role}))
		else:
			people[pid] = PersonRole(
				name=current.name,
				importance=max(current.importance, importance),
				roles=current.roles | {role},
			)

	# --- rules -----------------------------------------------------------

	def _genre_match(self, a: ContentFeatures, b: ContentFeatures, target: str) -> Optional[Connection]:
		cfg = self.config
		common = sorted(a.genres & b.genres)
		if not common:
			return None

		jaccard = len(common) / len(a.genres | b.genres)
		weight = 1.0
		for genre in common:
			weight *= rules.GENRE_WEIGHTS.get(genre, rules.DEFAULT_GENRE_WEIGHT)
		bonus = 1 + cfg.multi_genre_bonus * (len(common) - 1)
		strength = min(cfg.genre_strength_cap, jaccard * weight * bonus)
		if strength <= cfg.genre_threshold:
			return None

		confidence = cfg.genre_base_confidence
		if any(g in rules.DISTINCTIVE_GENRES for g in common):
			confidence = cfg.genre_distinctive_confidence
		confidence = min(cfg.genre_confidence_cap, confidence + cfg.genre_extra_confidence * (len(common) - 1))

		return Connection(
			target_id=target,
			type='genre_match',
			strength=strength,
			confidence=confidence,
			reason=f"Shared genres: {', '.join(common)}",
			metadata={'shared_genres': common, 'jaccard': jaccard},
		)

	def studio_importance(self, company_name: str) -> float:
		cfg = self.config
		if any(studio in company_name for studio in rules.MAJOR_STUDIOS):
			return cfg.major_studio_importance
		if any(studio in company_name for studio in rules.PRESTIGE_STUDIOS):
			return cfg.prestige_studio_importance
		return cfg.other_studio_importance

	def _studio_universe(self, a: ContentFeatures, b: ContentFeatures, target: str) -> Optional[Connection]:
		cfg = self.config
		shared = sorted(set(a.company_ids) & set(b.company_ids))
		if not shared:
			return None

		names = [a.company_ids[cid] or b.company_ids[cid] or str(cid) for cid in shared]
		importance = max(self.studio_importance(name) for name in names)
		strength = min(cfg.studio_strength_cap, cfg.studio_base * importance)

		return Connection(
			target_id=target,
			type='studio_universe',
			strength=strength,
			confidence=cfg.studio_confidence,
			reason=f"Same studio: {', '.join(names)}",
			metadata={'shared_company_ids': shared, 'studio_importance': importance},
		)

	def _talent_overlap(self, a: ContentFeatures, b: ContentFeatures, target: str) -> Optional[Connection]:
		cfg = self.config
		shared = sorted(set(a.people) & set(b.people))
		if not shared:
			return None

		strength = cfg.talent_base
		roles_by_person: List[Tuple[float, str, FrozenSet[str]]] = []
		for pid in shared:
			importance = max(a.people[pid].importance, b.people[pid].importance)
			roles = a.people[pid].roles | b.people[pid].roles
			strength += cfg.talent_per_person * importance
			roles_by_person.append((importance, a.people[pid].name, roles))

		has_director = any('Director' in roles for _, _, roles in roles_by_person)
		key_people = sum(1 for _, _, roles in roles_by_person if roles & rules.KEY_CREW_JOBS)
		if has_director:
			strength *= cfg.talent_director_multiplier
		if key_people >= 2:
			strength *= cfg.talent_key_role_multiplier
		strength = min(cfg.talent_strength_cap, strength)

		confidence = cfg.talent_key_role_confidence if key_people else cfg.talent_base_confidence
		confidence = min(cfg.talent_confidence_cap, confidence + cfg.talent_extra_confidence * (len(shared) - 1))

		top = [name for _, name, _ in sorted(roles_by_person, key=lambda p: (-p[0], p[1]))[:3]]
		return Connection(
			target_id=target,
			type='talent_overlap',
			strength=strength,
			confidence=confidence,
			reason=f"Shared talent: {', '.join(top)}",
			metadata={'shared_people': shared, 'shared_director': has_director, 'key_roles': key_people},
		)

	def _franchise_member(self, a: ContentFeatures, b: ContentFeatures, target: str) -> Optional[Connection]:
		if a.collection_id is None or a.collection_id != b.collection_id:
			return None
		label = a.collection_name or f"collection {a.collection_id}"
		return Connection(
			target_id=target,
			type='franchise_member',
			strength=self.config.franchise_strength,
			confidence=self.config.franchise_confidence,
			reason=f"Same franchise: {label}",
			metadata={'collection_id': a.collection_id},
		)

	def _rating_similarity(self, a: ContentFeatures, b: ContentFeatures, target: str) -> Optional[Connection]:
		cfg = self.config
		if a.rating < cfg.rating_floor or b.rating < cfg.rating_floor:
			return None
		diff = round(abs(a.rating - b.rating), 6)  # absorb float noise at the 1.0 boundary
		if diff > cfg.rating_max_difference:
			return None
		return Connection(
			target_id=target,
			type='rating_similarity',
			strength=(1 - diff / 10) * cfg.rating_scale,
			confidence=cfg.rating_confidence,
			reason=f"Similar acclaim: rated {a.rating:.1f} and {b.rating:.1f}",
			metadata={'rating_difference': diff},
		)
