"""
Person enricher.
Precomputes career attributes for person entities (stage, genre specialization,
collaboration, trajectory, influence) and removes people who fail the corpus floor.
"""

import math  # ceil/floor for career thirds and halves
from collections import Counter  # genre frequencies
from typing import Any, Dict, List, Optional, Tuple

import numpy as np  # entropy and averages

from loguru import logger  # console logger

from .cache import BuildCache
from .config import PersonConfig
from .models import Corpus, Entity
from . import rules

DEPARTMENT_INFLUENCE = {'Acting': 10, 'Directing': 15, 'Production': 8}


def _credit_year(credit: Dict[str, Any]) -> int:
	for key in ('release_date', 'first_air_date'):
		value = credit.get(key)
		if isinstance(value, str) and len(value) >= 4 and value[:4].isdigit():
			year = int(value[:4])
			if year > 1900:
				return year
	return 0


def _credit_date(credit: Dict[str, Any]) -> str:
	for key in ('release_date', 'first_air_date'):
		value = credit.get(key)
		if isinstance(value, str) and value:
			return value
	return ''


def _number(value: Any) -> float:
	return float(value) if isinstance(value, (int, float)) and not isinstance(value, bool) else 0.0


class PersonEnricher:
	"""
	Adds derived career fields to person entities. Never mutates input records.
	"""

	def __init__(self, config: Optional[PersonConfig] = None):
		self.config = config or PersonConfig()

	def enrich_corpus(self, corpus: Corpus, cache: Optional[BuildCache] = None) -> Tuple[Corpus, List[str]]:
		"""
		Return (enriched corpus, excluded person ids).
		People below the popularity floor or with no credits are dropped.
		"""
		cache = cache or BuildCache()
		updated: Dict[str, Entity] = {}
		excluded: List[str] = []

		for entity in corpus.entities():
			if entity.kind != 'person':
				continue
			cast, crew = self.credits(entity)
			if entity.popularity < self.config.min_popularity or not (cast or crew):
				excluded.append(entity.id)
				continue
			try:
				updated[entity.id] = cache.get_or_compute('person', entity.id, lambda: self.enrich(entity))
			except Exception as e:
				# keep the un-enriched record; analyzers treat missing fields as absent
				logger.warning(f"[PersonEnricher] Could not enrich {entity.id}: {e}")

		logger.info(f"[PersonEnricher] Enriched {len(updated)} people, excluded {len(excluded)}")
		return corpus.replace(updated).without(excluded), excluded

	def credits(self, entity: Entity) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
		"""Cast and crew credit lists from the first credits block present."""
		for key in ('combined_credits', 'movie_credits', 'credits'):
			block = entity.attributes.get(key)
			if isinstance(block, dict):
				cast = [c for c in block.get('cast') or [] if isinstance(c, dict)]
				crew = [c for c in block.get('crew') or [] if isinstance(c, dict)]
				return cast, crew
		return [], []

	def enrich(self, entity: Entity) -> Entity:
		cast, crew = self.credits(entity)
		credits = cast + crew
		return entity.with_derived(
			career=self.career(cast, crew),
			genre_specialization=self.genre_specialization(credits),
			collaboration_metrics={'collaboration_score': self.collaboration_score(cast, crew)},
			career_trajectory=self.trajectory(credits),
			influence_metrics=self.influence(entity, credits),
		)

	# --- career ----------------------------------------------------------

	def years_active(self, credits: List[Dict[str, Any]]) -> int:
		years = [y for y in (_credit_year(c) for c in credits) if y]
		return max(years) - min(years) + 1 if years else 0

	def career_stage(self, years_active: int, total_credits: int) -> str:
		for stage, ((y_min, y_max), (c_min, c_max)) in self.config.career_stages.items():
			if y_min <= years_active <= y_max and c_min <= total_credits <= c_max:
				return stage
		if total_credits >= 61:
			return 'legend'
		if total_credits >= 31:
			return 'veteran'
		if total_credits >= 11:
			return 'established'
		return 'emerging'

	def career(self, cast: List[Dict[str, Any]], crew: List[Dict[str, Any]]) -> Dict[str, Any]:
		credits = cast + crew
		span = self.years_active(credits)
		dated_years = [y for y in (_credit_year(c) for c in credits) if y]

		if len(cast) > len(crew) * 2:
			primary_role = 'actor'
		elif len(crew) > len(cast) * 2:
			primary_role = 'crew'
		else:
			primary_role = 'multi_role'

		genre_count = len({g for c in credits for g in (c.get('genre_ids') or []) if g in rules.GENRE_ID_NAMES})
		versatility = 'high' if genre_count >= 8 else 'low' if genre_count <= 3 else 'medium'

		consistency = 'medium'
		if len(dated_years) > 3:
			gap = span / (len(dated_years) - 1)
			if gap <= 2:
				consistency = 'high'
			elif gap >= 5:
				consistency = 'low'

		return {
			'stage': self.career_stage(span, len(credits)),
			'span_years': span,
			'total_credits': len(credits),
			'primary_role': primary_role,
			'versatility': versatility,
			'consistency': consistency,
		}

	def genre_specialization(self, credits: List[Dict[str, Any]]) -> Dict[str, Any]:
		frequency = Counter(
			rules.GENRE_ID_NAMES[g]
			for c in credits for g in (c.get('genre_ids') or [])
			if g in rules.GENRE_ID_NAMES
		)
		if not frequency:
			return {'specialization': 'unknown', 'confidence': 0.0, 'top_genres': [], 'diversity_score': 0.0}

		ranked = sorted(frequency.items(), key=lambda kv: (-kv[1], kv[0]))
		total = sum(frequency.values())
		share = ranked[0][1] / total
		return {
			'specialization': ranked[0][0] if share > self.config.specialization_share else 'versatile',
			'confidence': round(share, 2),
			'top_genres': [
				{'genre': genre, 'count': count, 'percentage': round(count / total * 100)}
				for genre, count in ranked[:5]
			],
			'diversity_score': self.diversity(list(frequency.values())),
		}

	@staticmethod
	def diversity(counts: List[int]) -> float:
		"""Shannon entropy normalized by its maximum (log2 of category count)."""
		if len(counts) <= 1:
			return 0.0
		p = np.asarray(counts, dtype=float)
		p = p / p.sum()
		entropy = float(-(p * np.log2(p)).sum())
		return entropy / math.log2(len(counts))

	@staticmethod
	def collaboration_score(cast: List[Dict[str, Any]], crew: List[Dict[str, Any]]) -> int:
		total = len(cast) + len(crew)
		score = 50
		if total >= 50:
			score += 20
		elif total >= 20:
			score += 10
		if cast and crew:
			score += 15
		return min(100, score)

	# --- trajectory ------------------------------------------------------

	def trajectory(self, credits: List[Dict[str, Any]]) -> Dict[str, Any]:
		dated = sorted((c for c in credits if _credit_date(c)), key=lambda c: (_credit_date(c), str(c.get('title') or c.get('name') or '')))
		if len(dated) < 3:
			return {'trajectory': 'insufficient_data', 'trend': 'unknown'}

		cfg = self.config
		popularity = [_number(c.get('popularity')) for c in dated]
		third = math.ceil(len(popularity) / 3)
		early, recent = float(np.mean(popularity[:third])), float(np.mean(popularity[-third:]))
		if recent > early * cfg.trajectory_rise:
			trajectory = 'ascending'
		elif recent < early * cfg.trajectory_fall:
			trajectory = 'declining'
		else:
			trajectory = 'stable'

		ratings = [r for r in (_number(c.get('vote_average')) for c in dated) if r > 0]
		trend = 'stable'
		if len(ratings) >= 6:
			first = float(np.mean(ratings[:math.ceil(len(ratings) / 2)]))
			second = float(np.mean(ratings[len(ratings) // 2:]))
			if second > first + cfg.quality_delta:
				trend = 'improving'
			elif second < first - cfg.quality_delta:
				trend = 'declining'

		peak = max(dated, key=lambda c: _number(c.get('popularity')))
		recent_credits = [c for c in dated if _credit_year(c) >= cfg.reference_year - cfg.recent_window_years]
		return {
			'trajectory': trajectory,
			'trend': trend,
			'career_peak': {
				'title': peak.get('title') or peak.get('name'),
				'year': _credit_year(peak) or None,
				'popularity': _number(peak.get('popularity')),
			},
			'recent_projects': len(recent_credits),
			'activity_level': 'high' if len(recent_credits) >= 3 else 'moderate' if recent_credits else 'low',
		}

	# --- influence -------------------------------------------------------

	def influence(self, entity: Entity, credits: List[Dict[str, Any]]) -> Dict[str, Any]:
		popularity = entity.popularity
		influence = 20.0
		influence += min(30.0, popularity / 2)
		influence += min(25, len(credits))
		influence += DEPARTMENT_INFLUENCE.get(entity.attributes.get('known_for_department'), 0)

		if credits:
			average = float(np.mean([_number(c.get('vote_average')) for c in credits]))
			if average >= 7.0:
				influence += 15
			elif average >= 6.0:
				influence += 8

		return {
			'overall_influence': min(100, round(influence)),
			'industry_impact': 'high' if influence >= 70 else 'medium' if influence >= 50 else 'low',
			'career_significance': self.career_significance(popularity, len(credits)),
			'legacy_potential': self.legacy_potential(credits),
		}

	@staticmethod
	def career_significance(popularity: float, total: int) -> str:
		if popularity >= 50 and total >= 30:
			return 'major'
		if popularity >= 30 and total >= 20:
			return 'significant'
		if popularity >= 15 and total >= 10:
			return 'notable'
		if total >= 5:
			return 'emerging'
		return 'minor'

	def legacy_potential(self, credits: List[Dict[str, Any]]) -> str:
		high_rated = sum(1 for c in credits if _number(c.get('vote_average')) >= 7.5)
		span = self.years_active(credits)
		if high_rated >= 5 and span >= 20:
			return 'legendary'
		if high_rated >= 3 and span >= 15:
			return 'enduring'
		if high_rated >= 2 and span >= 10:
			return 'memorable'
		if high_rated >= 1:
			return 'notable'
		return 'developing'
