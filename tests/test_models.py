"""
Tests for entity ids, Entity accessors and Connection validation.
"""

import pytest

from relationship_engine.models import Connection, Corpus, Entity, parse_entity_id, make_entity_id

from tests.corpus_helpers import movie


def test_parse_entity_id_variants():
	assert parse_entity_id('movie:603') == ('movie', 603)
	assert parse_entity_id('person_287') == ('person', 287)
	assert parse_entity_id('tv:1399') == ('show', 1399)
	assert make_entity_id('company', '420') == 'company:420'


@pytest.mark.parametrize('bad', ['', 'movie', 'planet:1', 'movie:abc', 603, None])
def test_parse_entity_id_rejects_garbage(bad):
	with pytest.raises(ValueError):
		parse_entity_id(bad)


def test_accessors_treat_malformed_fields_as_absent():
	entity = movie(
		1, 'Broken',
		genres='Action',  # wrong type
		vote_average='n/a',
		popularity=None,
		release_date='unknown',
		production_companies=[None, {'name': 'Nameless Co'}],
		credits={'cast': [{'name': 'No Id'}], 'crew': 'oops'},
	)
	assert entity.genre_names() == []
	assert entity.rating == 0.0
	assert entity.popularity == 0.0
	assert entity.year == 0
	assert entity.companies() == [(None, 'Nameless Co')]
	assert entity.cast() == []
	assert entity.crew() == []


def test_genre_ids_fall_back_to_names():
	entity = movie(2, 'Ids Only', genre_ids=[27, 53, 999999])
	assert entity.genre_names() == ['Horror', 'Thriller']


def test_with_derived_adds_but_never_overwrites():
	entity = movie(3, 'Base', overview='x')
	enriched = entity.with_derived(career={'stage': 'emerging'})
	assert enriched.get('career') == {'stage': 'emerging'}
	assert 'career' not in entity.derived
	with pytest.raises(ValueError):
		enriched.with_derived(overview='replaced')


def test_entities_are_read_only():
	entity = movie(4, 'Frozen')
	with pytest.raises(TypeError):
		entity.attributes['title'] = 'changed'


def test_corpus_iterates_sorted():
	corpus = Corpus({e.id: e for e in [movie(3, 'c'), movie(1, 'a'), movie(2, 'b')]})
	assert list(corpus) == ['movie:1', 'movie:2', 'movie:3']
	assert 'movie:2' in corpus
	assert len(corpus.without(['movie:2'])) == 2


def test_connection_final_score_is_product():
	c = Connection(target_id='movie:2', type='genre_match', strength=0.5, confidence=0.8, reason='Shared genres: Drama')
	assert c.final_score == 0.5 * 0.8
	assert c.to_dict()['finalScore'] == c.final_score


@pytest.mark.parametrize('kwargs', [
	{'strength': 1.2},
	{'confidence': -0.1},
	{'reason': '   '},
	{'type': 'made_up'},
])
def test_connection_rejects_invalid_values(kwargs):
	base = {'target_id': 'movie:2', 'type': 'genre_match', 'strength': 0.5, 'confidence': 0.5, 'reason': 'ok'}
	base.update(kwargs)
	with pytest.raises(ValueError):
		Connection(**base)
