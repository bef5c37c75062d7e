"""
Tests for keyword-pattern semantic similarity.
"""

import pytest

from relationship_engine.cache import BuildCache
from relationship_engine.semantic_analyzer import SemanticAnalyzer, content_string

from tests.corpus_helpers import corpus_of, movie

HAUNTED = 'A haunted house hides a sinister evil.'


def test_extraction_unions_text_genre_and_title_signals():
	analyzer = SemanticAnalyzer()
	entity = movie(1, 'Saw 3', genres=['Horror'], overview=HAUNTED)

	profile = analyzer.extract_keywords(entity)

	assert 'horror' in profile['themes']
	assert 'dark' in profile['moods']
	assert 'mature' in profile['audience']  # from the Horror genre
	assert 'mainstream' in profile['audience']  # trailing sequel number in the title


def test_content_string_is_lowercase_and_includes_keywords():
	entity = movie(1, 'Alien', overview='In Space', keywords=[{'id': 1, 'name': 'Xenomorph'}], genres=['Horror'])
	text = content_string(entity)
	assert text == text.lower()
	assert 'xenomorph' in text and 'horror' in text


def test_similar_horror_titles_connect():
	a = movie(1, 'House One', genres=['Horror'], overview=HAUNTED)
	b = movie(2, 'House Two', genres=['Horror'], overview=HAUNTED)

	connections = SemanticAnalyzer().analyze(a, corpus_of(a, b), BuildCache())

	assert len(connections) == 1
	link = connections[0]
	assert link.type == 'semantic_similarity'
	assert link.target_id == 'movie:2'
	assert 0.3 < link.strength <= 1.0
	assert 0.7 <= link.confidence <= 0.95
	assert 'horror' in link.metadata['common_themes']
	assert link.reason.startswith('Similar themes:')


def test_entities_without_keywords_emit_nothing():
	blank = movie(1, 'Zzz')
	other = movie(2, 'House', genres=['Horror'], overview=HAUNTED)
	analyzer = SemanticAnalyzer()
	cache = BuildCache()
	assert analyzer.analyze(blank, corpus_of(blank, other), cache) == []
	assert analyzer.analyze(other, corpus_of(blank, other), cache) == []


def test_output_capped_at_twenty_and_sorted():
	entities = [movie(i, f'House {chr(65 + i)}', genres=['Horror'], overview=HAUNTED) for i in range(1, 26)]
	corpus = corpus_of(*entities)

	connections = SemanticAnalyzer().analyze(entities[0], corpus, BuildCache())

	assert len(connections) == 20
	strengths = [c.strength for c in connections]
	assert strengths == sorted(strengths, reverse=True)
	assert all(c.target_id != entities[0].id for c in connections)


def test_similarity_score_is_capped_and_boosted():
	analyzer = SemanticAnalyzer()
	profile = analyzer.extract_keywords(movie(1, 'House', genres=['Horror'], overview=HAUNTED))
	result = analyzer.similarity(profile, profile)
	assert result['score'] == pytest.approx(1.0)
	assert analyzer.confidence(result) == pytest.approx(0.95)
