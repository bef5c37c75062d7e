"""
Named weights, thresholds and caps for every engine component.
Defaults reproduce the standard scoring rules; a JSON override file can tune them per build.
"""

import datetime as _dt  # default reference year for time decay
import json  # override files
from pathlib import Path  # filesystem-safe paths
from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field  # validated config structs


class _Strict(BaseModel):
	model_config = ConfigDict(extra='forbid', frozen=True)


class ContentConfig(_Strict):
	genre_threshold: float = 0.3  # emit genre_match only above this
	genre_strength_cap: float = 0.9
	multi_genre_bonus: float = 0.1  # per extra shared genre
	genre_base_confidence: float = 0.8
	genre_distinctive_confidence: float = 0.9
	genre_extra_confidence: float = 0.05
	genre_confidence_cap: float = 0.95

	studio_base: float = 0.95
	major_studio_importance: float = 0.95
	prestige_studio_importance: float = 0.85
	other_studio_importance: float = 0.7
	studio_strength_cap: float = 0.98
	studio_confidence: float = 0.95

	talent_base: float = 0.4
	talent_per_person: float = 0.1
	talent_director_multiplier: float = 1.3
	talent_key_role_multiplier: float = 1.2
	talent_strength_cap: float = 0.95
	talent_base_confidence: float = 0.75
	talent_key_role_confidence: float = 0.9
	talent_extra_confidence: float = 0.03
	talent_confidence_cap: float = 0.95
	cast_popularity_boost: float = 0.1
	cast_popularity_floor: float = 20.0
	person_importance_cap: float = 0.95

	franchise_strength: float = 0.92
	franchise_confidence: float = 0.98

	rating_floor: float = 7.0
	rating_max_difference: float = 1.0
	rating_scale: float = 0.6
	rating_confidence: float = 0.7


class SemanticConfig(_Strict):
	axis_weights: Dict[str, float] = Field(default_factory=lambda: {
		'themes': 1.0, 'settings': 0.8, 'moods': 0.9, 'audience': 0.7,
	})
	threshold: float = 0.3
	max_connections: int = 20
	strong_theme_boost: float = 1.3
	three_axis_boost: float = 1.2
	two_axis_boost: float = 1.1
	# (theme, mood-or-audience keyword, boost)
	combination_boosts: Tuple[Tuple[str, str, float], ...] = (
		('horror', 'dark', 1.2),
		('romance', 'emotional', 1.2),
		('family', 'family_friendly', 1.15),
	)
	base_confidence: float = 0.7
	strong_theme_confidence: float = 0.85
	confidence_cap: float = 0.95


class CulturalConfig(_Strict):
	category_weights: Dict[str, float] = Field(default_factory=lambda: {
		'markers': 0.30, 'themes': 0.25, 'movements': 0.20, 'regional': 0.15, 'audience': 0.10,
	})
	threshold: float = 0.3
	max_connections: int = 15
	insignificance_floor: float = 0.2
	movement_relevance_floor: float = 0.5
	reference_year: int = Field(default_factory=lambda: _dt.date.today().year)
	base_confidence: float = 0.6
	confidence_cap: float = 0.95


class PersonConfig(_Strict):
	min_popularity: float = 10.0
	specialization_share: float = 0.4
	trajectory_rise: float = 1.3
	trajectory_fall: float = 0.7
	quality_delta: float = 0.5
	recent_window_years: int = 3
	reference_year: int = Field(default_factory=lambda: _dt.date.today().year)
	# stage -> ((min years, max years), (min credits, max credits))
	career_stages: Dict[str, Tuple[Tuple[int, int], Tuple[int, int]]] = Field(default_factory=lambda: {
		'emerging': ((0, 5), (1, 10)),
		'established': ((6, 15), (11, 30)),
		'veteran': ((16, 30), (31, 60)),
		'legend': ((30, 100), (61, 200)),
	})


class CollectionConfig(_Strict):
	reference_year: int = Field(default_factory=lambda: _dt.date.today().year)
	health_base: int = 50
	consistent_gap_years: float = 4.0  # average gap at or below this is rewarded
	sparse_gap_years: float = 8.0  # average gap above this is penalized
	recent_years: int = 3
	dormant_years: int = 10
	trajectory_rise: float = 1.1
	trajectory_fall: float = 0.9
	top_genres: int = 5


class CompanyConfig(_Strict):
	reference_year: int = Field(default_factory=lambda: _dt.date.today().year)
	specialization_share: float = 0.4
	# scale -> minimum movie count, checked in order
	scale_thresholds: Tuple[Tuple[str, int], ...] = (
		('major', 100), ('large', 50), ('medium', 20), ('small', 5),
	)
	active_window_years: int = 5
	universe_min_movies: int = 5
	top_genres: int = 5


class GraphConfig(_Strict):
	reverse_factor: float = 0.9
	category_cap: int = 15
	peer_factor: float = 0.7
	peer_threshold: float = 0.3
	cluster_min_members: int = 3
	cluster_strength: float = 0.6
	type_confidence: Dict[str, float] = Field(default_factory=lambda: {
		'direct': 0.9, 'semantic': 0.7, 'contextual': 0.6, 'collaborative': 0.8,
		'temporal': 0.5, 'cultural': 0.7, 'cluster': 0.6,
	})
	relationship_confidence: Dict[str, float] = Field(default_factory=lambda: {
		'studio_universe': 0.95,
		'franchise_member': 0.95,
		'talent_overlap': 0.9,
		'genre_match': 0.8,
		'cultural_significance': 0.75,
		'semantic_similarity': 0.7,
		'rating_similarity': 0.7,
		'cluster_member': 0.6,
		'peer_recommendation': 0.6,
	})
	default_relationship_confidence: float = 0.7


class IndexConfig(_Strict):
	max_cast_terms: int = 10
	max_text_words: int = 20
	quick_min_confidence: float = 0.8
	quick_limit: int = 5
	deep_limit: int = 25
	fuzzy_cutoff: float = 85.0  # rapidfuzz score (0..100) for fuzzy term lookup


class EngineConfig(_Strict):
	content: ContentConfig = Field(default_factory=ContentConfig)
	semantic: SemanticConfig = Field(default_factory=SemanticConfig)
	cultural: CulturalConfig = Field(default_factory=CulturalConfig)
	person: PersonConfig = Field(default_factory=PersonConfig)
	collection: CollectionConfig = Field(default_factory=CollectionConfig)
	company: CompanyConfig = Field(default_factory=CompanyConfig)
	graph: GraphConfig = Field(default_factory=GraphConfig)
	index: IndexConfig = Field(default_factory=IndexConfig)

	@classmethod
	def from_file(cls, path) -> 'EngineConfig':
		"""Load overrides from a JSON file; omitted sections keep their defaults."""
		path = Path(path)
		if not path.exists():
			raise FileNotFoundError(f"Config file not found: {path}")
		with open(path, 'r', encoding='utf-8') as f:
			return cls.model_validate(json.load(f))
