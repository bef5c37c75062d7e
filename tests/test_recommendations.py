"""
Tests for quick/deep recommendation lists.
"""

import pytest

from relationship_engine.graph_builder import GraphBuilder
from relationship_engine.recommendations import RecommendationCompiler

from tests.corpus_helpers import FixedAnalyzer, conn, corpus_of, movie


def compiled():
	corpus = corpus_of(movie(1, 'A'), movie(2, 'B'), movie(3, 'C'), movie(4, 'D'))
	edges = {
		'movie:1': [
			conn('movie:2', 0.98, 'studio_universe', reason='Same studio: Marvel Studios'),
			conn('movie:3', 0.8, 'genre_match'),
		],
		'movie:3': [conn('movie:4', 0.9, 'genre_match')],
	}
	graph = GraphBuilder(analyzers={'direct': [FixedAnalyzer(edges)]}).build(corpus)
	return RecommendationCompiler().compile(graph)


def test_quick_list_keeps_only_confident_direct_links():
	quick = compiled().to_dict()['movie:1']['quick']

	assert [item['id'] for item in quick] == ['movie:2']
	item = quick[0]
	assert item['confidence'] == pytest.approx(0.98 * 0.9 * 0.95)
	assert item['score'] == pytest.approx(0.98 * item['confidence'])
	assert item['type'] == 'direct'
	assert item['reason'] == 'Same studio: Marvel Studios'
	assert 'relationship' not in item


def test_deep_list_merges_categories_in_score_order():
	deep = compiled().to_dict()['movie:1']['deep']

	assert [item['id'] for item in deep] == ['movie:2', 'movie:3', 'movie:4']
	assert deep[2]['type'] == 'collaborative'
	assert deep[2]['relationship'] == 'peer_recommendation'
	scores = [item['score'] for item in deep]
	assert scores == sorted(scores, reverse=True)


def test_every_entity_gets_lists():
	entries = compiled().to_dict()
	assert sorted(entries) == ['movie:1', 'movie:2', 'movie:3', 'movie:4']
	assert entries['movie:2']['quick'] == []
	assert entries['movie:2']['deep'][0]['id'] == 'movie:1'


def test_for_entity_filters():
	recs = compiled()
	assert [i['id'] for i in recs.for_entity('movie:1', min_confidence=0.5)] == ['movie:2', 'movie:3']
	assert [i['id'] for i in recs.for_entity('movie:1', category='collaborative')] == ['movie:4']
	assert len(recs.for_entity('movie:1', limit=1)) == 1

	with pytest.raises(ValueError):
		recs.for_entity('movie:99')
	with pytest.raises(ValueError):
		recs.for_entity('movie:1', category='nonsense')
