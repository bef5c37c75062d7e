"""
Search index compiler.
Flattens the corpus into term / category / context maps and a bidirectional intent map,
and offers a read-only lookup over the compiled maps with fuzzy term matching.
"""

import re  # tokenizing text and queries
from dataclasses import dataclass, field  # compiled index record
from typing import Dict, Iterable, List, Optional, Set, Tuple

from rapidfuzz import process, fuzz  # fuzzy matching utilities

from loguru import logger  # console logging

from .cache import BuildCache
from .config import IndexConfig
from .cultural_analyzer import CulturalAnalyzer
from .models import Corpus, Entity
from .semantic_analyzer import SemanticAnalyzer
from . import rules

RE_NON_ALNUM = re.compile(r'[^a-z0-9]+')
RE_NON_WORD = re.compile(r'[^\w\s]')
RE_SPACES = re.compile(r'\s+')

# Entity kind -> category tag
KIND_CATEGORIES = {'movie': 'movie', 'show': 'tv_show', 'person': 'person'}

# Key prefixes tried when a query term is looked up in the category/context maps
TAG_PREFIXES = ('', 'genre_', 'theme_', 'studio_', 'language_', 'decade_', 'seasonal_', 'cultural_')


def important_words(text: str, limit: int) -> List[str]:
	"""First `limit` non-stop-words longer than two characters."""
	words = [w for w in RE_NON_ALNUM.split(text.lower()) if len(w) > 2 and w not in rules.STOP_WORDS]
	return words[:limit]


def company_variations(company_name: str) -> List[str]:
	"""Suffix-stripped forms, an acronym and the longer single words of a company name."""
	name = company_name.lower()
	variations = []
	for suffix in rules.COMPANY_SUFFIXES:
		if suffix in name:
			variations.append(name.replace(suffix, '', 1).strip())
	words = name.split()
	if len(words) > 1:
		variations.append(''.join(word[0] for word in words))
	variations.extend(word for word in words if len(word) > 3)
	return [v for v in variations if v]


def studio_family(company_name: str) -> Optional[str]:
	name = company_name.lower()
	for keyword, category in rules.STUDIO_FAMILIES:
		if keyword in name:
			return category
	return None


def expand_intents(intents: Dict[str, List[str]]) -> Dict[str, List[str]]:
	"""
	Make the curated intent map bidirectional: every expansion term points back to its base
	term and to its sibling expansions.
	"""
	expanded: Dict[str, List[str]] = {base: list(terms) for base, terms in intents.items()}
	for base, terms in intents.items():
		for term in terms:
			related = expanded.setdefault(term, [])
			related.append(base)
			related.extend(other for other in terms if other != term)

	result = {}
	for term, related in expanded.items():
		seen = []
		for item in related:
			if item != term and item not in seen:
				seen.append(item)
		result[term] = seen
	return dict(sorted(result.items()))


@dataclass
class SearchIndex:
	"""Compiled lookup tables. All values are sorted lists of entity ids."""
	term_map: Dict[str, List[str]] = field(default_factory=dict)
	category_map: Dict[str, List[str]] = field(default_factory=dict)
	context_map: Dict[str, List[str]] = field(default_factory=dict)
	intent_map: Dict[str, List[str]] = field(default_factory=dict)
	config: IndexConfig = field(default_factory=IndexConfig)

	def to_dict(self) -> Dict[str, Dict[str, List[str]]]:
		return {
			'termMap': self.term_map,
			'categoryMap': self.category_map,
			'contextMap': self.context_map,
			'intentMap': self.intent_map,
		}

	@classmethod
	def from_dict(cls, data: Dict[str, Dict[str, List[str]]], config: Optional[IndexConfig] = None) -> 'SearchIndex':
		return cls(
			term_map=dict(data.get('termMap', {})),
			category_map=dict(data.get('categoryMap', {})),
			context_map=dict(data.get('contextMap', {})),
			intent_map=dict(data.get('intentMap', {})),
			config=config or IndexConfig(),
		)

	# --- query side ------------------------------------------------------

	@staticmethod
	def normalize_query(query: str) -> str:
		return RE_SPACES.sub(' ', RE_NON_WORD.sub(' ', query.lower())).strip()

	def correct_typos(self, tokens: List[str]) -> List[str]:
		"""Swap unknown tokens for the closest known term or intent when one is close enough."""
		vocabulary = sorted(set(self.term_map) | set(self.intent_map))
		corrected = []
		for token in tokens:
			if token in self.term_map or token in self.intent_map or not vocabulary:
				corrected.append(token)
				continue
			match = process.extractOne(token, vocabulary, scorer=fuzz.ratio, score_cutoff=self.config.fuzzy_cutoff)
			corrected.append(match[0] if match else token)
		return corrected

	def base_terms(self, query: str) -> List[str]:
		"""The normalized query, its typo-corrected form and its tokens."""
		normalized = self.normalize_query(query)
		tokens = self.correct_typos([t for t in normalized.split() if len(t) > 1 and t not in rules.STOP_WORDS])
		return [t for t in dict.fromkeys([normalized, ' '.join(tokens)] + tokens) if t]

	def expand(self, query: str) -> List[str]:
		"""Base terms plus their intent expansions, de-duplicated in order."""
		terms = self.base_terms(query)
		for base in list(terms):
			terms.extend(self.intent_map.get(base, []))
		seen: List[str] = []
		for term in terms:
			if term and term not in seen:
				seen.append(term)
		return seen

	def lookup(self, query: str, limit: int = 20) -> List[Tuple[str, float]]:
		"""
		Rank entity ids for a query: exact term hits score highest, then category/context
		tags, then fuzzy term matches. Expansion terms count at reduced weight.
		"""
		if not query or not query.strip():
			raise ValueError("Query cannot be empty")

		terms = self.expand(query)
		direct = set(self.base_terms(query))
		scores: Dict[str, float] = {}

		def credit(ids: Iterable[str], weight: float):
			for entity_id in ids:
				scores[entity_id] = scores.get(entity_id, 0.0) + weight

		term_keys = sorted(self.term_map)
		for term in terms:
			factor = 1.0 if term in direct else 0.6
			if term in self.term_map:
				credit(self.term_map[term], 1.0 * factor)
			tag = term.replace(' ', '_')
			for prefix in TAG_PREFIXES:
				key = prefix + tag
				credit(self.category_map.get(key, []), 0.8 * factor)
				credit(self.context_map.get(key, []), 0.8 * factor)
			if term_keys and len(term) > 3:
				for match, score, _ in process.extract(term, term_keys, scorer=fuzz.WRatio, score_cutoff=self.config.fuzzy_cutoff, limit=5):
					if match != term:
						credit(self.term_map[match], 0.5 * factor * score / 100)

		ranked = sorted(scores.items(), key=lambda kv: (-kv[1], kv[0]))
		return ranked[:limit]


class SearchIndexBuilder:
	"""
	Compiles a SearchIndex from the corpus using the shared rule vocabulary.
	"""

	def __init__(
		self,
		config: Optional[IndexConfig] = None,
		semantic: Optional[SemanticAnalyzer] = None,
		cultural: Optional[CulturalAnalyzer] = None,
	):
		self.config = config or IndexConfig()
		self.semantic = semantic or SemanticAnalyzer()
		self.cultural = cultural or CulturalAnalyzer()

	def build(self, corpus: Corpus, cache: Optional[BuildCache] = None) -> SearchIndex:
		cache = cache or BuildCache()
		terms: Dict[str, Set[str]] = {}
		categories: Dict[str, Set[str]] = {}
		contexts: Dict[str, Set[str]] = {}

		logger.info(f"[SearchIndex] Indexing {len(corpus)} entities...")
		for entity in corpus.entities():
			for term in self.search_terms(entity):
				terms.setdefault(term, set()).add(entity.id)
			for category in self.categories(entity, cache):
				categories.setdefault(category, set()).add(entity.id)
			for context in self.contexts(entity, cache):
				contexts.setdefault(context, set()).add(entity.id)

		index = SearchIndex(
			term_map=self._freeze(terms),
			category_map=self._freeze(categories),
			context_map=self._freeze(contexts),
			intent_map=expand_intents(rules.INTENT_MAP),
			config=self.config,
		)
		logger.info(
			f"[SearchIndex] {len(index.term_map)} terms, {len(index.category_map)} categories, "
			f"{len(index.context_map)} contexts, {len(index.intent_map)} intents"
		)
		return index

	@staticmethod
	def _freeze(mapping: Dict[str, Set[str]]) -> Dict[str, List[str]]:
		return {key: sorted(ids) for key, ids in sorted(mapping.items())}

	# --- terms -----------------------------------------------------------

	def search_terms(self, entity: Entity) -> Set[str]:
		cfg = self.config
		found: Set[str] = set()

		for key in ('name', 'title', 'original_name', 'original_title'):
			if entity.text(key):
				found.add(entity.text(key).lower())
		for alias in entity.attributes.get('also_known_as') or []:
			if isinstance(alias, str):
				found.add(alias.strip().lower())

		for keyword in entity.keyword_names():
			found.add(keyword.lower())
			found.add(RE_NON_ALNUM.sub('', keyword.lower()))
		found.update(genre.lower() for genre in entity.genre_names())

		for _, company in entity.companies():
			if company:
				found.add(company.lower())
				found.update(company_variations(company))

		for member in entity.cast()[:cfg.max_cast_terms]:
			if isinstance(member.get('name'), str):
				found.add(member['name'].lower())
		for member in entity.crew():
			if member.get('job') in ('Director', 'Producer', 'Writer', 'Screenplay') and isinstance(member.get('name'), str):
				found.add(member['name'].lower())

		found.update(important_words(entity.text('overview'), cfg.max_text_words))
		found.update(important_words(entity.text('tagline'), cfg.max_text_words))

		for code in entity.countries():
			found.add(code.lower())
			found.add(rules.COUNTRY_NAMES.get(code, code).lower())
		for country in entity.attributes.get('production_countries') or []:
			if isinstance(country, dict) and isinstance(country.get('name'), str):
				found.add(country['name'].lower())
		for language in entity.attributes.get('spoken_languages') or []:
			if isinstance(language, dict):
				for key in ('name', 'english_name'):
					if isinstance(language.get(key), str):
						found.add(language[key].lower())

		if entity.year:
			found.add(str(entity.year))
			found.add(f"{entity.year // 10 * 10}s")

		collection = entity.collection
		if collection and isinstance(collection.get('name'), str):
			found.add(collection['name'].lower())

		return {term.strip() for term in found if term and len(term.strip()) > 1}

	# --- categories ------------------------------------------------------

	def categories(self, entity: Entity, cache: BuildCache) -> Set[str]:
		found: Set[str] = {KIND_CATEGORIES.get(entity.kind, entity.kind)}

		for genre in entity.genre_names():
			found.add('genre_' + RE_SPACES.sub('_', genre.lower()))
		for _, company in entity.companies():
			family = studio_family(company)
			if family:
				found.add(family)

		rating = entity.rating
		if rating >= 8.0:
			found.add('highly_rated')
		elif rating >= 7.0:
			found.add('well_rated')
		elif rating >= 6.0:
			found.add('decent_rated')

		popularity = entity.popularity
		if popularity >= 50:
			found.add('very_popular')
		elif popularity >= 20:
			found.add('popular')
		elif popularity >= 5:
			found.add('somewhat_popular')

		year = entity.year
		if year:
			found.add(f"decade_{year // 10 * 10}s")
			found.add(next((era for floor, era in rules.ERAS if year >= floor), rules.OLDEST_ERA))

		language = entity.attributes.get('original_language')
		if isinstance(language, str) and language:
			found.add(f"language_{language}")
			if language != 'en':
				found.add('foreign_language')

		if entity.attributes.get('adult') is True:
			found.add('adult_content')

		if entity.text('overview'):
			profile = self.semantic.profile(entity, cache)
			found.update(f"theme_{theme}" for theme in profile['themes'])

		return found

	# --- contexts --------------------------------------------------------

	def contexts(self, entity: Entity, cache: BuildCache) -> Set[str]:
		profile = self.cultural.profile(entity, cache)
		found = {f"cultural_{marker}" for marker in profile.markers}

		content = f"{entity.text('overview')} {entity.title}".lower()
		for season, pattern in rules.SEASONAL_PATTERNS.items():
			if pattern.search(content):
				found.add(f"seasonal_{season}")

		if entity.rating >= 8.0:
			found.add('award_worthy')
		if entity.popularity >= 80:
			found.add('mainstream_hit')
		if entity.collection:
			found.add('part_of_franchise')
		return found
