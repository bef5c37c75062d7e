"""
Collection enricher.
Profiles franchise collections from the movies that belong to them: franchise type,
release span, health, sequencing, popularity trajectory and critical reception.
"""

import math  # halves of the release order
from collections import Counter  # genre frequencies
from typing import Any, Dict, List, Optional

import numpy as np  # means and standard deviation

from loguru import logger  # console logger

from .cache import BuildCache
from .config import CollectionConfig
from .models import Corpus, Entity, make_entity_id, parse_entity_id
from . import rules


def _halves(values: List[float]):
	"""First and second half means; the middle value of an odd list lands in both."""
	first = float(np.mean(values[:math.ceil(len(values) / 2)]))
	second = float(np.mean(values[len(values) // 2:]))
	return first, second


def title_number(title: str) -> Optional[int]:
	"""Sequel number from a title: roman numerals first, then digits."""
	roman = rules.ROMAN_NUMERAL_RE.search(title)
	if roman:
		return rules.ROMAN_NUMERALS[roman.group(1).lower()]
	arabic = rules.ARABIC_NUMBER_RE.search(title)
	return int(arabic.group(1)) if arabic else None


class CollectionEnricher:
	"""
	Adds derived franchise fields to collection entities. Never mutates input records.

	A collection's parts are the corpus movies whose belongs_to_collection points at it,
	plus any entries of its own `parts` list that the corpus does not hold.
	"""

	def __init__(self, config: Optional[CollectionConfig] = None):
		self.config = config or CollectionConfig()

	def enrich_corpus(self, corpus: Corpus, cache: Optional[BuildCache] = None) -> Corpus:
		cache = cache or BuildCache()
		members: Dict[int, List[Entity]] = {}
		for entity in corpus.entities():
			if entity.kind == 'movie' and entity.collection:
				members.setdefault(entity.collection['id'], []).append(entity)

		updated: Dict[str, Entity] = {}
		for entity in corpus.entities():
			if entity.kind != 'collection':
				continue
			_, num = parse_entity_id(entity.id)
			try:
				parts = self.parts(entity, members.get(num, []))
				updated[entity.id] = cache.get_or_compute('collection', entity.id, lambda: self.enrich(entity, parts))
			except Exception as e:
				logger.warning(f"[CollectionEnricher] Could not enrich {entity.id}: {e}")

		logger.info(f"[CollectionEnricher] Enriched {len(updated)} collections")
		return corpus.replace(updated)

	@staticmethod
	def parts(entity: Entity, members: List[Entity]) -> List[Entity]:
		"""Member movies ordered by release date, undated ones last."""
		found = {m.id: m for m in members}
		raw_parts = entity.attributes.get('parts')
		for raw in raw_parts if isinstance(raw_parts, list) else []:
			if not isinstance(raw, dict) or not isinstance(raw.get('id'), int) or isinstance(raw.get('id'), bool):
				continue
			part_id = make_entity_id('movie', raw['id'])
			if part_id not in found:
				name = raw.get('title') if isinstance(raw.get('title'), str) else ''
				found[part_id] = Entity(id=part_id, kind='movie', name=name, attributes=raw)
		return sorted(found.values(), key=lambda m: (m.year == 0, m.text('release_date'), m.id))

	def enrich(self, entity: Entity, parts: List[Entity]) -> Entity:
		return entity.with_derived(
			franchise_type=self.franchise_type(entity.title),
			release_span=self.release_span(parts),
			franchise_health=self.franchise_health(parts),
			sequencing=self.sequencing(parts),
			popularity_trajectory=self.popularity_trajectory(parts),
			critical_reception=self.critical_reception(parts),
			collection_genres=self.collection_genres(parts),
		)

	@staticmethod
	def franchise_type(name: str) -> str:
		lowered = name.lower()
		for franchise, keywords in rules.FRANCHISE_TYPES:
			if any(k in lowered for k in keywords):
				return franchise
		return rules.DEFAULT_FRANCHISE_TYPE

	# --- release pattern -------------------------------------------------

	@staticmethod
	def release_span(parts: List[Entity]) -> Optional[Dict[str, Any]]:
		years = sorted(p.year for p in parts if p.year)
		if not years:
			return None
		gaps = [b - a for a, b in zip(years, years[1:])]
		return {
			'start_year': years[0],
			'end_year': years[-1],
			'span_years': years[-1] - years[0] + 1,
			'total_movies': len(parts),
			'average_gap': round(float(np.mean(gaps)), 1) if gaps else 0,
			'longest_gap': max(gaps) if gaps else 0,
			'release_frequency': (years[-1] - years[0]) / (len(years) - 1) if len(years) > 1 else 0,
		}

	def franchise_health(self, parts: List[Entity]) -> Dict[str, Any]:
		"""0..100 health score from rating trend, release rhythm, recency and quality."""
		dated = [p for p in parts if p.year]
		if len(dated) < 2:
			return {'health': 'insufficient_data', 'score': 0}

		cfg = self.config
		score = cfg.health_base
		ratings = [p.rating for p in dated if p.rating > 0]

		rating_trend = 'unknown'
		if len(ratings) >= 2:
			first, second = _halves(ratings)
			rating_trend = 'improving' if second > first else 'declining'
			if second > first:
				score += 20
			elif second < first - 1:
				score -= 15

		span = self.release_span(parts)
		consistent = span['average_gap'] <= cfg.consistent_gap_years
		if consistent:
			score += 15
		elif span['average_gap'] > cfg.sparse_gap_years:
			score -= 10

		since_latest = cfg.reference_year - max(p.year for p in dated)
		if since_latest <= cfg.recent_years:
			score += 15
		elif since_latest > cfg.dormant_years:
			score -= 20

		quality = 'unknown'
		if ratings:
			average = float(np.mean(ratings))
			quality = 'high' if average >= 7.0 else 'medium' if average >= 5.0 else 'low'
			if average >= 7.0:
				score += 20
			elif average < 5.0:
				score -= 15

		score = max(0, min(100, score))
		if score >= 75:
			health = 'thriving'
		elif score >= 60:
			health = 'healthy'
		elif score >= 40:
			health = 'stable'
		elif score >= 25:
			health = 'declining'
		else:
			health = 'struggling'

		return {
			'health': health,
			'score': score,
			'factors': {
				'rating_trend': rating_trend,
				'release_consistency': 'consistent' if consistent else 'irregular',
				'recent_activity': 'active' if since_latest <= cfg.recent_years else 'dormant',
				'overall_quality': quality,
			},
		}

	# --- sequencing ------------------------------------------------------

	@staticmethod
	def sequencing(parts: List[Entity]) -> Dict[str, Any]:
		if len(parts) < 2:
			return {'type': 'single', 'has_numbering': False, 'is_chronological': True}

		titles = [p.title for p in parts]
		numbers = [n for n in (title_number(p.title) for p in parts if p.year) if n is not None]
		chronological = len(numbers) > 1 and all(b > a for a, b in zip(numbers, numbers[1:]))

		if len(parts) == 2:
			kind = 'duology'
		elif len(parts) == 3:
			kind = 'trilogy'
		elif len(parts) <= 6:
			kind = 'series'
		else:
			kind = 'franchise'

		if any(rules.ROMAN_NUMERAL_RE.search(t) for t in titles):
			pattern = 'roman_numerals'
		elif any(rules.WORD_NUMBER_RE.search(t) for t in titles):
			pattern = 'word_numbers'
		elif any(rules.ARABIC_NUMBER_RE.search(t) for t in titles):
			pattern = 'arabic_numbers'
		else:
			pattern = 'none'

		return {
			'type': kind,
			'has_numbering': pattern != 'none',
			'is_chronological': chronological,
			'movie_count': len(parts),
			'numbering_pattern': pattern,
		}

	# --- reception -------------------------------------------------------

	def popularity_trajectory(self, parts: List[Entity]) -> Dict[str, Any]:
		dated = [p for p in parts if p.year and p.popularity > 0]
		if len(dated) < 2:
			return {'trend': 'insufficient_data', 'peak': None}

		popularity = [p.popularity for p in dated]
		first, second = _halves(popularity)
		if second > first * self.config.trajectory_rise:
			trend = 'growing'
		elif second < first * self.config.trajectory_fall:
			trend = 'declining'
		else:
			trend = 'stable'

		peak = max(dated, key=lambda p: p.popularity)
		return {
			'trend': trend,
			'peak': {'id': peak.id, 'title': peak.title, 'year': peak.year, 'popularity': peak.popularity},
			'popularity_range': {
				'min': min(popularity),
				'max': max(popularity),
				'average': round(float(np.mean(popularity)), 2),
			},
		}

	@staticmethod
	def critical_reception(parts: List[Entity]) -> Dict[str, Any]:
		ratings = np.asarray([p.rating for p in parts if p.rating > 0], dtype=float)
		if not ratings.size:
			return {'overall': 'unknown', 'consistency': 'unknown'}

		average, spread = float(ratings.mean()), float(ratings.std())
		if average >= 7.5:
			overall = 'excellent'
		elif average >= 6.5:
			overall = 'good'
		elif average >= 5.5:
			overall = 'mixed'
		else:
			overall = 'poor'

		if spread <= 0.5:
			consistency = 'very_consistent'
		elif spread <= 1.0:
			consistency = 'consistent'
		elif spread <= 1.5:
			consistency = 'variable'
		else:
			consistency = 'inconsistent'

		return {
			'overall': overall,
			'consistency': consistency,
			'average_rating': round(average, 2),
			'standard_deviation': round(spread, 2),
		}

	def collection_genres(self, parts: List[Entity]) -> List[Dict[str, Any]]:
		frequency = Counter(g for p in parts for g in p.genre_names())
		ranked = sorted(frequency.items(), key=lambda kv: (-kv[1], kv[0]))
		return [{'genre': genre, 'count': count} for genre, count in ranked[:self.config.top_genres]]
