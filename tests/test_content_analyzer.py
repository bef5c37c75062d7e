"""
Tests for structured-attribute relationships.
"""

import pytest

from relationship_engine.cache import BuildCache
from relationship_engine.config import ContentConfig
from relationship_engine.content_analyzer import ContentAnalyzer

from tests.corpus_helpers import MARVEL, corpus_of, movie


def analyze(source, *others):
	corpus = corpus_of(source, *others)
	return ContentAnalyzer().analyze(source, corpus, BuildCache())


def by_type(connections, type_):
	return [c for c in connections if c.type == type_]


def test_genre_match_example():
	a = movie(1, 'A', genres=['Horror', 'Thriller', 'Drama'])
	b = movie(2, 'B', genres=['Horror', 'Thriller'])

	matches = by_type(analyze(a, b), 'genre_match')

	assert len(matches) == 1
	match = matches[0]
	assert match.metadata['jaccard'] == pytest.approx(2 / 3)
	assert match.strength == pytest.approx(2 / 3 * 0.90 * 0.85 * 1.1)
	assert match.strength > 0.3
	assert 'Horror' in match.reason and 'Thriller' in match.reason
	# distinctive genre (Horror) plus one extra shared genre
	assert match.confidence == pytest.approx(0.95)


def test_weak_genre_overlap_is_dropped():
	a = movie(1, 'A', genres=['Drama', 'Comedy', 'Family', 'Music'])
	b = movie(2, 'B', genres=['Drama', 'War', 'History', 'Western'])
	assert by_type(analyze(a, b), 'genre_match') == []


def test_studio_universe_example():
	a = movie(1, 'Iron Man', production_companies=[MARVEL])
	b = movie(2, 'Thor', production_companies=[MARVEL])

	studio = by_type(analyze(a, b), 'studio_universe')

	assert len(studio) == 1
	assert studio[0].strength >= 0.9
	assert studio[0].confidence >= 0.9
	assert 'Marvel Studios' in studio[0].reason


def test_studio_tiers():
	analyzer = ContentAnalyzer()
	assert analyzer.studio_importance('Marvel Studios') == 0.95
	assert analyzer.studio_importance('A24') == 0.85
	assert analyzer.studio_importance('Tiny Films') == 0.7


def test_talent_overlap_with_shared_director():
	crew = [{'id': 525, 'name': 'Christopher Nolan', 'job': 'Director'}]
	a = movie(1, 'Inception', credits={'crew': crew})
	b = movie(2, 'Interstellar', credits={'crew': crew})

	talent = by_type(analyze(a, b), 'talent_overlap')

	assert len(talent) == 1
	assert talent[0].strength == pytest.approx((0.4 + 0.1 * 0.95) * 1.3)
	assert talent[0].confidence == pytest.approx(0.9)
	assert 'Christopher Nolan' in talent[0].reason


def test_talent_overlap_key_roles_bonus_and_cap():
	crew = [
		{'id': 1, 'name': 'Dir', 'job': 'Director'},
		{'id': 2, 'name': 'Prod', 'job': 'Producer'},
		{'id': 3, 'name': 'Writer', 'job': 'Writer'},
	]
	a = movie(1, 'A', credits={'crew': crew})
	b = movie(2, 'B', credits={'crew': crew})

	talent = by_type(analyze(a, b), 'talent_overlap')[0]

	assert talent.strength == pytest.approx(0.95)  # capped
	assert talent.confidence == pytest.approx(0.95)


def test_cast_importance_by_billing_and_popularity():
	analyzer = ContentAnalyzer()
	entity = movie(1, 'A', credits={'cast': [
		{'id': 1, 'name': 'Lead', 'order': 0, 'popularity': 50},
		{'id': 2, 'name': 'Fourth', 'order': 3},
		{'id': 3, 'name': 'Extra', 'order': 40},
	]})
	people = analyzer.person_importance(entity)
	assert people[1].importance == pytest.approx(0.95)
	assert people[2].importance == pytest.approx(0.8)
	assert people[3].importance == pytest.approx(0.5)


def test_franchise_member():
	collection = {'id': 10, 'name': 'Star Wars Collection'}
	a = movie(1, 'A New Hope', belongs_to_collection=collection)
	b = movie(2, 'Empire', belongs_to_collection=collection)

	franchise = by_type(analyze(a, b), 'franchise_member')

	assert len(franchise) == 1
	assert franchise[0].strength == pytest.approx(0.92)
	assert franchise[0].confidence >= 0.95


def test_rating_similarity_boundary():
	a = movie(1, 'A', vote_average=8.4)
	b = movie(2, 'B', vote_average=7.5)
	c = movie(3, 'C', vote_average=6.9)

	rated = by_type(analyze(a, b, c), 'rating_similarity')

	assert [r.target_id for r in rated] == ['movie:2']
	assert rated[0].strength == pytest.approx((1 - 0.09) * 0.6)


def test_rating_difference_of_exactly_one_is_allowed():
	a = movie(1, 'A', vote_average=8.2)
	b = movie(2, 'B', vote_average=7.2)
	assert len(by_type(analyze(a, b), 'rating_similarity')) == 1


def test_no_self_loops_and_malformed_fields_are_ignored():
	a = movie(1, 'A', genres=None, production_companies='Marvel', credits=[1, 2], vote_average='high')
	b = movie(2, 'B', genres=['Horror'])
	connections = analyze(a, b)
	assert connections == []
	assert all(c.target_id != a.id for c in analyze(b, a))


def test_config_overrides_apply():
	analyzer = ContentAnalyzer(ContentConfig(franchise_strength=0.5))
	collection = {'id': 10, 'name': 'X'}
	a = movie(1, 'A', belongs_to_collection=collection)
	b = movie(2, 'B', belongs_to_collection=collection)
	conns = analyzer.analyze(a, corpus_of(a, b), BuildCache())
	assert by_type(conns, 'franchise_member')[0].strength == 0.5
