"""
Company enricher.
Profiles production companies from the corpus movies they produced: studio category,
genre specialization, production scale, active period and franchise output.
"""

import re  # whitespace cleanup in base titles
from collections import Counter  # genre frequencies
from typing import Any, Dict, List, Optional

import numpy as np  # averages

from loguru import logger  # console logger

from .cache import BuildCache
from .config import CompanyConfig
from .models import Corpus, Entity, parse_entity_id
from . import rules

# period -> maximum years between the latest release and the reference year
ACTIVITY_PERIODS = (('active', 2), ('recent', 10), ('classic', 30))


def base_title(title: str) -> Optional[str]:
	"""Title with sequel markers removed, or None when too little is left to group on."""
	cleaned = rules.WORD_NUMBER_RE.sub('', title)
	cleaned = rules.ROMAN_NUMERAL_RE.sub('', cleaned)
	cleaned = rules.ARABIC_NUMBER_RE.sub('', cleaned)
	cleaned = re.sub(r'\s+', ' ', cleaned).strip(' :-').lower()
	return cleaned if len(cleaned) > 3 else None


class CompanyEnricher:
	"""
	Adds derived studio fields to company entities. Never mutates input records.
	"""

	def __init__(self, config: Optional[CompanyConfig] = None):
		self.config = config or CompanyConfig()

	def enrich_corpus(self, corpus: Corpus, cache: Optional[BuildCache] = None) -> Corpus:
		cache = cache or BuildCache()
		produced: Dict[int, List[Entity]] = {}
		for entity in corpus.entities():
			if entity.kind not in ('movie', 'show'):
				continue
			for company_id in {cid for cid, _ in entity.companies() if cid is not None}:
				produced.setdefault(company_id, []).append(entity)

		updated: Dict[str, Entity] = {}
		for entity in corpus.entities():
			if entity.kind != 'company':
				continue
			_, num = parse_entity_id(entity.id)
			movies = produced.get(num, [])
			try:
				updated[entity.id] = cache.get_or_compute('company', entity.id, lambda: self.enrich(entity, movies))
			except Exception as e:
				logger.warning(f"[CompanyEnricher] Could not enrich {entity.id}: {e}")

		logger.info(f"[CompanyEnricher] Enriched {len(updated)} companies")
		return corpus.replace(updated)

	def enrich(self, entity: Entity, movies: List[Entity]) -> Entity:
		return entity.with_derived(
			studio_category=self.category(entity.title, entity.text('description')),
			genre_specialization=self.genre_specialization(movies),
			production_scale=self.production_scale(movies),
			time_period=self.time_period(movies),
			studio_universe=self.studio_universe(movies),
		)

	@staticmethod
	def category(name: str, description: str = '') -> str:
		"""First category whose keywords appear in the name, else a description hint."""
		name, description = name.lower(), description.lower()
		for category, keywords in rules.STUDIO_CATEGORIES:
			if any(k in name for k in keywords):
				return category
		for keyword, category in rules.STUDIO_DESCRIPTION_CATEGORIES:
			if keyword in description:
				return category
		return rules.DEFAULT_STUDIO_CATEGORY

	def genre_specialization(self, movies: List[Entity]) -> Dict[str, Any]:
		frequency = Counter(g for m in movies for g in m.genre_names())
		if not frequency:
			return {'specialization': 'unknown', 'confidence': 0.0, 'top_genres': []}

		ranked = sorted(frequency.items(), key=lambda kv: (-kv[1], kv[0]))
		total = sum(frequency.values())
		share = ranked[0][1] / total
		return {
			'specialization': ranked[0][0] if share > self.config.specialization_share else 'diverse',
			'confidence': round(share, 2),
			'top_genres': [
				{'genre': genre, 'count': count, 'percentage': round(count / total * 100)}
				for genre, count in ranked[:self.config.top_genres]
			],
		}

	def production_scale(self, movies: List[Entity]) -> Dict[str, Any]:
		if not movies:
			return {'scale': 'unknown', 'movie_count': 0, 'average_popularity': 0.0}
		scale = 'boutique'
		for name, minimum in self.config.scale_thresholds:
			if len(movies) >= minimum:
				scale = name
				break
		return {
			'scale': scale,
			'movie_count': len(movies),
			'average_popularity': round(float(np.mean([m.popularity for m in movies])), 1),
		}

	def time_period(self, movies: List[Entity]) -> Dict[str, Any]:
		years = sorted(m.year for m in movies if m.year)
		if not years:
			return {'period': 'unknown', 'start_year': None, 'end_year': None, 'span': 0}

		reference = self.config.reference_year
		period = 'historical'
		for name, window in ACTIVITY_PERIODS:
			if years[-1] >= reference - window:
				period = name
				break
		return {
			'period': period,
			'start_year': years[0],
			'end_year': years[-1],
			'span': years[-1] - years[0] + 1,
			'is_active': years[-1] >= reference - self.config.active_window_years,
		}

	def studio_universe(self, movies: List[Entity]) -> Dict[str, Any]:
		"""Counts title families with two or more releases among the studio's movies."""
		result = {'has_connected_universe': False, 'franchise_count': 0, 'universe_type': 'standalone'}
		if len(movies) < self.config.universe_min_movies:
			return result

		families = Counter(b for b in (base_title(m.title) for m in movies) if b)
		franchises = sorted(b for b, count in families.items() if count >= 2)
		result['franchise_count'] = len(franchises)
		result['franchises'] = franchises
		if len(franchises) >= 3:
			result['has_connected_universe'] = True
			result['universe_type'] = 'cinematic_universe'
		elif franchises:
			result['universe_type'] = 'franchise_studio'
		return result
