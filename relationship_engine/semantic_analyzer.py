"""
Semantic analyzer.
Extracts theme / setting / mood / audience keywords from free text, genres and titles,
then links entities whose keyword profiles overlap.
"""

from typing import Dict, FrozenSet, List, Optional

from .cache import BuildCache
from .config import SemanticConfig
from .models import Connection, Corpus, Entity
from . import rules

# Profile: axis name -> keywords found on that axis
Profile = Dict[str, FrozenSet[str]]


def content_string(entity: Entity) -> str:
	"""Lowercased overview, tagline, titles, genres and keywords in one string."""
	parts = [entity.text(key) for key in ('overview', 'tagline', 'title', 'name', 'original_title', 'original_name')]
	parts.append(' '.join(entity.genre_names()))
	parts.append(' '.join(entity.keyword_names()))
	return ' '.join(p for p in parts if p).lower()


def _jaccard(a: FrozenSet[str], b: FrozenSet[str]) -> float:
	union = a | b
	return len(a & b) / len(union) if union else 0.0


class SemanticAnalyzer:
	"""
	Keyword-pattern similarity across four weighted axes.
	"""

	name = 'semantic'

	def __init__(self, config: Optional[SemanticConfig] = None):
		self.config = config or SemanticConfig()
		self._weight_total = sum(self.config.axis_weights.values())

	def analyze(self, entity: Entity, corpus: Corpus, cache: BuildCache) -> List[Connection]:
		mine = self.profile(entity, cache)
		if not any(mine.values()):
			return []

		connections = []
		for other in corpus.entities():
			if other.id == entity.id:
				continue
			theirs = self.profile(other, cache)
			if not any(theirs.values()):
				continue
			conn = self._compare(mine, theirs, other.id)
			if conn is not None:
				connections.append(conn)

		connections.sort(key=lambda c: (-c.strength, c.target_id))
		return connections[:self.config.max_connections]

	# --- extraction ------------------------------------------------------

	def profile(self, entity: Entity, cache: BuildCache) -> Profile:
		return cache.get_or_compute('semantic', entity.id, lambda: self.extract_keywords(entity))

	def extract_keywords(self, entity: Entity) -> Profile:
		content = content_string(entity)
		found = {axis: set() for axis in rules.SEMANTIC_AXES}

		# Pattern families over the combined text
		for axis, patterns in rules.SEMANTIC_AXES.items():
			for keyword, pattern in patterns.items():
				if pattern.search(content):
					found[axis].add(keyword)

		# Structured genre implications
		for genre in entity.genre_names():
			for axis, keywords in rules.GENRE_SEMANTICS.get(genre, {}).items():
				found[axis].update(keywords)

		# Title heuristics
		title = entity.title.lower()
		for pattern, implied in rules.TITLE_HEURISTICS:
			if pattern.search(title):
				for axis, keyword in implied:
					found[axis].add(keyword)

		return {axis: frozenset(keywords) for axis, keywords in found.items()}

	# --- scoring ---------------------------------------------------------

	def similarity(self, a: Profile, b: Profile) -> Dict[str, object]:
		"""
		Weighted per-axis Jaccard, averaged over the axis weights, then boosted.
		Returns the score with the shared keywords per axis.
		"""
		cfg = self.config
		common = {axis: a[axis] & b[axis] for axis in rules.SEMANTIC_AXES}
		breakdown = {axis: _jaccard(a[axis], b[axis]) for axis in rules.SEMANTIC_AXES}

		score = sum(cfg.axis_weights[axis] * breakdown[axis] for axis in breakdown) / self._weight_total

		if common['themes'] & rules.STRONG_THEMES:
			score *= cfg.strong_theme_boost

		axes_matched = sum(1 for keywords in common.values() if keywords)
		if axes_matched >= 3:
			score *= cfg.three_axis_boost
		elif axes_matched >= 2:
			score *= cfg.two_axis_boost

		shared_other = common['settings'] | common['moods'] | common['audience']
		for theme, companion, boost in cfg.combination_boosts:
			if theme in common['themes'] and companion in shared_other:
				score *= boost

		return {
			'score': min(1.0, score),
			'common': common,
			'breakdown': breakdown,
			'axes_matched': axes_matched,
		}

	def confidence(self, result: Dict[str, object]) -> float:
		cfg = self.config
		common = result['common']
		confidence = cfg.base_confidence
		if common['themes'] & rules.CONFIDENT_THEMES:
			confidence = cfg.strong_theme_confidence

		total = sum(len(keywords) for keywords in common.values())
		if total >= 4:
			confidence = min(0.95, confidence + 0.15)
		elif total >= 2:
			confidence = min(0.9, confidence + 0.1)

		if result['score'] > 0.7:
			confidence = min(0.95, confidence + 0.1)

		return min(cfg.confidence_cap, confidence)

	def _compare(self, a: Profile, b: Profile, target: str) -> Optional[Connection]:
		result = self.similarity(a, b)
		if result['score'] <= self.config.threshold:
			return None

		common = result['common']
		return Connection(
			target_id=target,
			type='semantic_similarity',
			strength=result['score'],
			confidence=self.confidence(result),
			reason=self._reason(common),
			metadata={
				'common_themes': sorted(common['themes']),
				'common_settings': sorted(common['settings']),
				'common_moods': sorted(common['moods']),
				'common_audience': sorted(common['audience']),
				'breakdown': result['breakdown'],
			},
		)

	def _reason(self, common: Dict[str, FrozenSet[str]]) -> str:
		parts = []
		if common['themes']:
			parts.append(f"Similar themes: {', '.join(sorted(common['themes']))}")
		for axis in ('settings', 'moods', 'audience'):
			if common[axis]:
				parts.append(f"{axis}: {', '.join(sorted(common[axis]))}")
		return '; '.join(parts) if parts else 'Similar overall tone'
