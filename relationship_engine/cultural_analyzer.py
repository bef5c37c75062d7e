"""
Cultural analyzer.
Builds a cultural profile per entity (markers, social themes, movements, regional origin,
audience segment, significance) and links entities with overlapping footprints.
"""

from dataclasses import dataclass, field  # profile record
from typing import Dict, List, Optional, Tuple

from .cache import BuildCache
from .config import CulturalConfig
from .models import Connection, Corpus, Entity
from . import rules


@dataclass(frozen=True)
class Regional:
	type: str
	regions: Tuple[str, ...]
	influence: float


@dataclass(frozen=True)
class Audience:
	type: str
	appeal: float
	confidence: float


@dataclass(frozen=True)
class CulturalProfile:
	markers: Dict[str, Tuple[float, float]] = field(default_factory=dict)  # marker -> (weight, confidence)
	themes: Dict[str, float] = field(default_factory=dict)  # theme -> relevance
	movements: Dict[str, float] = field(default_factory=dict)  # movement -> strength
	regional: Optional[Regional] = None
	audience: Optional[Audience] = None
	significance: float = 0.0

	def to_dict(self) -> Dict[str, object]:
		return {
			'markers': sorted(self.markers),
			'themes': sorted(self.themes),
			'movements': sorted(self.movements),
			'regional': self.regional.type if self.regional else None,
			'audience': self.audience.type if self.audience else None,
			'significance': self.significance,
		}


def cultural_content(entity: Entity) -> str:
	parts = [entity.text(key) for key in ('overview', 'tagline', 'title', 'name', 'biography')]
	parts.append(' '.join(entity.genre_names()))
	parts.append(' '.join(entity.keyword_names()))
	parts.append(' '.join(name for _, name in entity.companies()))
	return ' '.join(p for p in parts if p).lower()


def interpolate_relevance(anchors: Dict[int, float], year: int) -> float:
	"""Linear interpolation between anchor years, clamped to the end anchors."""
	points = sorted(anchors.items())
	if year <= points[0][0]:
		return points[0][1]
	if year >= points[-1][0]:
		return points[-1][1]
	for (y0, v0), (y1, v1) in zip(points, points[1:]):
		if y0 <= year <= y1:
			return v0 + (v1 - v0) * (year - y0) / (y1 - y0)
	return points[-1][1]


class CulturalAnalyzer:
	"""
	Profiles cultural footprint and scores profile overlap.
	"""

	name = 'cultural'

	def __init__(self, config: Optional[CulturalConfig] = None):
		self.config = config or CulturalConfig()

	def analyze(self, entity: Entity, corpus: Corpus, cache: BuildCache) -> List[Connection]:
		mine = self.profile(entity, cache)
		if self.is_insignificant(mine):
			return []

		connections = []
		for other in corpus.entities():
			if other.id == entity.id:
				continue
			theirs = self.profile(other, cache)
			if self.is_insignificant(theirs):
				continue
			conn = self._compare(mine, theirs, other.id)
			if conn is not None:
				connections.append(conn)

		connections.sort(key=lambda c: (-c.strength, c.target_id))
		return connections[:self.config.max_connections]

	def is_insignificant(self, profile: CulturalProfile) -> bool:
		return (
			profile.significance < self.config.insignificance_floor
			and not profile.markers and not profile.themes and not profile.movements
		)

	# --- profile ---------------------------------------------------------

	def profile(self, entity: Entity, cache: BuildCache) -> CulturalProfile:
		return cache.get_or_compute('cultural', entity.id, lambda: self.build_profile(entity))

	def build_profile(self, entity: Entity) -> CulturalProfile:
		content = cultural_content(entity)
		return CulturalProfile(
			markers=self.markers(entity, content),
			themes={
				theme: relevance
				for theme, (pattern, _, relevance) in rules.SOCIAL_THEMES.items()
				if pattern.search(content)
			},
			movements=self.movements(entity, content),
			regional=self.regional(entity),
			audience=self.audience(entity, content),
			significance=self.significance(entity, content),
		)

	def markers(self, entity: Entity, content: str) -> Dict[str, Tuple[float, float]]:
		found = {
			marker: (weight, confidence)
			for marker, (pattern, weight, confidence) in rules.CULTURAL_MARKERS.items()
			if pattern.search(content)
		}

		rating, votes, popularity = entity.rating, entity.vote_count, entity.popularity
		if rating >= 8.5 and votes > 1000:
			found['critically_acclaimed'] = (0.9, 0.9)
		elif rating >= 8.0 and votes > 500:
			found['highly_rated'] = (0.8, 0.8)
		elif 0 < rating <= 4.0 and votes > 100:
			found['notorious'] = (0.6, 0.7)

		if popularity >= 80:
			found['culturally_impactful'] = (0.85, 0.8)
		elif popularity >= 50:
			found['mainstream_popular'] = (0.7, 0.75)
		elif popularity < 10 and rating > 7.5:
			found['hidden_gem'] = (0.6, 0.7)

		if rating >= 8.0 and rules.AWARD_PATTERN.search(content):
			found['award_contender'] = (0.85, 0.75)

		return found

	def movements(self, entity: Entity, content: str) -> Dict[str, float]:
		year = entity.year
		if not year:
			return {}
		found = {}
		for movement, (indicators, anchors, strength) in rules.CULTURAL_MOVEMENTS.items():
			if interpolate_relevance(anchors, year) <= self.config.movement_relevance_floor:
				continue
			if any(indicator in content for indicator in indicators):
				found[movement] = strength
		return found

	def regional(self, entity: Entity) -> Optional[Regional]:
		countries = tuple(entity.countries())
		if not countries:
			return None
		for culture, (regions, influence) in rules.REGIONAL_CULTURES.items():
			if any(region in countries for region in regions):
				return Regional(type=culture, regions=countries, influence=influence)
		return Regional(type='other_regional', regions=countries, influence=rules.OTHER_REGIONAL_INFLUENCE)

	def audience(self, entity: Entity, content: str) -> Audience:
		best = None
		best_score = 0.0
		for segment, (indicators, appeal) in rules.AUDIENCE_SEGMENTS.items():
			score = sum(1 for indicator in indicators if indicator in content) / len(indicators)
			if score > best_score:
				best_score = score
				best = Audience(type=segment, appeal=appeal, confidence=score)

		if entity.rating >= 8.0 and (best is None or best.confidence < 0.5):
			best = Audience(type='art_house', appeal=0.7, confidence=0.6)

		return best or Audience(type='general_audience', appeal=0.6, confidence=0.3)

	def time_relevance(self, year: int) -> float:
		if not year:
			return 0.0
		age = self.config.reference_year - year
		if age <= 5:
			return 1.0
		if age <= 15:
			return 0.9
		if age <= 30:
			return 0.7
		if age <= 50:
			return 0.6
		return 0.4

	def significance(self, entity: Entity, content: str) -> float:
		score = 0.3
		rating, votes, popularity = entity.rating, entity.vote_count, entity.popularity

		if rating >= 8.0 and votes > 1000:
			score += 0.3
		elif rating >= 7.0 and votes > 500:
			score += 0.2

		if popularity >= 50:
			score += 0.2
		elif popularity >= 20:
			score += 0.1

		if any(term in content for term in rules.SIGNIFICANT_TERMS):
			score += 0.2

		return min(1.0, score * self.time_relevance(entity.year))

	# --- similarity ------------------------------------------------------

	def similarity(self, a: CulturalProfile, b: CulturalProfile) -> Dict[str, object]:
		weights = self.config.category_weights
		shared_markers = sorted(set(a.markers) & set(b.markers))
		shared_themes = sorted(set(a.themes) & set(b.themes))
		shared_movements = sorted(set(a.movements) & set(b.movements))

		breakdown = {
			'markers': self._average([a.markers[m][0] for m in shared_markers]),
			'themes': self._themes_score(a, b, shared_themes),
			'movements': self._average([a.movements[m] for m in shared_movements]),
			'regional': self._regional_score(a.regional, b.regional),
			'audience': self._audience_score(a.audience, b.audience),
		}
		score = sum(weights[key] * value for key, value in breakdown.items())
		score *= 0.5 + 0.5 * min(a.significance, b.significance)

		return {
			'score': min(1.0, score),
			'breakdown': breakdown,
			'shared_markers': shared_markers,
			'shared_themes': shared_themes,
			'shared_movements': shared_movements,
		}

	@staticmethod
	def _average(values: List[float]) -> float:
		return sum(values) / len(values) if values else 0.0

	def _themes_score(self, a: CulturalProfile, b: CulturalProfile, shared: List[str]) -> float:
		if not shared:
			return 0.0
		overlap = len(shared) / max(len(a.themes), len(b.themes))
		return self._average([a.themes[t] for t in shared]) * overlap

	@staticmethod
	def _regional_score(a: Optional[Regional], b: Optional[Regional]) -> float:
		if a is None or b is None:
			return 0.0
		if a.type == b.type:
			return min(a.influence, b.influence)
		if set(a.regions) & set(b.regions):
			return 0.5 * min(a.influence, b.influence)
		return 0.0

	@staticmethod
	def _audience_score(a: Optional[Audience], b: Optional[Audience]) -> float:
		if a is None or b is None:
			return 0.0
		if a.type == b.type:
			return min(a.appeal, b.appeal) * min(a.confidence, b.confidence)
		if b.type in rules.RELATED_SEGMENTS.get(a.type, ()):
			return 0.5 * min(a.appeal, b.appeal)
		return 0.0

	def confidence(self, result: Dict[str, object]) -> float:
		shared = len(result['shared_markers']) + len(result['shared_themes']) + len(result['shared_movements'])
		confidence = self.config.base_confidence
		if shared >= 3:
			confidence = 0.9
		elif shared == 2:
			confidence = 0.8
		elif shared == 1:
			confidence = 0.7

		breakdown = result['breakdown']
		if breakdown['markers'] > 0.8:
			confidence = max(confidence, 0.85)
		if breakdown['movements'] > 0.8:
			confidence = max(confidence, 0.8)
		return min(self.config.confidence_cap, confidence)

	def _compare(self, a: CulturalProfile, b: CulturalProfile, target: str) -> Optional[Connection]:
		result = self.similarity(a, b)
		if result['score'] <= self.config.threshold:
			return None
		return Connection(
			target_id=target,
			type='cultural_significance',
			strength=result['score'],
			confidence=self.confidence(result),
			reason=self._reason(result),
			metadata={
				'shared_markers': result['shared_markers'],
				'shared_themes': result['shared_themes'],
				'shared_movements': result['shared_movements'],
				'breakdown': result['breakdown'],
			},
		)

	@staticmethod
	def _reason(result: Dict[str, object]) -> str:
		reasons = []
		if result['shared_markers']:
			reasons.append(f"Cultural significance: {', '.join(result['shared_markers'])}")
		if result['shared_themes']:
			reasons.append(f"Social themes: {', '.join(result['shared_themes'])}")
		if result['shared_movements']:
			reasons.append(f"Cultural movements: {', '.join(result['shared_movements'])}")
		return ' | '.join(reasons) if reasons else 'Shared cultural context'
