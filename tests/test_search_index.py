"""
Tests for the compiled search index and query lookup.
"""

import pytest

from relationship_engine.search_index import (
	SearchIndex, SearchIndexBuilder, company_variations, expand_intents, important_words, studio_family,
)
from relationship_engine import rules

from tests.corpus_helpers import movie, sample_corpus

AVENGERS = ['movie:1', 'movie:2']
A24_HORROR = ['movie:3', 'movie:4', 'movie:5']


@pytest.fixture(scope='module')
def index():
	return SearchIndexBuilder().build(sample_corpus())


def test_company_variations():
	variations = company_variations('Marvel Studios')
	assert 'marvel' in variations
	assert 'ms' in variations
	assert studio_family('Walt Disney Pictures') == 'studio_disney'
	assert studio_family('Tiny Films') is None


def test_important_words_skip_stop_words():
	assert important_words('The heroes of the war go to space', 3) == ['heroes', 'war', 'space']


def test_term_map(index):
	assert index.term_map['marvel studios'] == AVENGERS
	assert index.term_map['marvel'] == AVENGERS
	assert index.term_map['a24'] == A24_HORROR
	assert index.term_map['chris evans'] == AVENGERS
	assert index.term_map['2010s'] == AVENGERS + A24_HORROR


def test_category_map(index):
	assert index.category_map['movie'] == AVENGERS + A24_HORROR
	assert index.category_map['genre_horror'] == A24_HORROR
	assert index.category_map['genre_science_fiction'] == AVENGERS
	assert index.category_map['studio_marvel'] == AVENGERS
	assert index.category_map['studio_a24'] == A24_HORROR
	assert index.category_map['highly_rated'] == AVENGERS
	assert index.category_map['language_en'] == AVENGERS + A24_HORROR


def test_context_map(index):
	assert index.context_map['part_of_franchise'] == AVENGERS
	assert index.context_map['award_worthy'] == AVENGERS
	assert index.context_map['mainstream_hit'] == AVENGERS
	assert 'movie:1' in index.context_map['cultural_blockbuster']


def test_intent_map_is_bidirectional(index):
	assert 'mcu' in index.intent_map['marvel']
	assert 'marvel' in index.intent_map['mcu']
	assert 'avengers' in index.intent_map['mcu']  # siblings
	for term, related in index.intent_map.items():
		assert term not in related
		assert len(related) == len(set(related))


def test_expand_intents_small_map():
	assert expand_intents({'a': ['b', 'c']}) == {'a': ['b', 'c'], 'b': ['a', 'c'], 'c': ['a', 'b']}
	assert len(expand_intents(rules.INTENT_MAP)) > len(rules.INTENT_MAP)


def test_typo_correction(index):
	assert index.correct_typos(['horor', 'marvel', 'qqqqq']) == ['horror', 'marvel', 'qqqqq']


def test_lookup_ranks_exact_and_fuzzy_matches(index):
	ranked = index.lookup('mavel')
	assert {entity_id for entity_id, _ in ranked[:2]} == set(AVENGERS)

	horror = index.lookup('A24 horror')
	assert {entity_id for entity_id, _ in horror[:3]} == set(A24_HORROR)


def test_lookup_rejects_empty_query(index):
	with pytest.raises(ValueError):
		index.lookup('   ')


def test_build_is_deterministic(index):
	again = SearchIndexBuilder().build(sample_corpus())
	assert again.to_dict() == index.to_dict()
	restored = SearchIndex.from_dict(again.to_dict())
	assert restored.lookup('marvel') == index.lookup('marvel')


def test_movie_country_terms_come_from_production_countries():
	amelie = movie(
		194, 'Amelie',
		production_countries=[{'iso_3166_1': 'FR', 'name': 'France'}, {'iso_3166_1': 'SE', 'name': 'Sweden'}],
	)
	terms = SearchIndexBuilder().search_terms(amelie)
	assert {'fr', 'france', 'se', 'sweden'} <= terms
