"""
Tests for person career enrichment.
"""

import pytest

from relationship_engine.config import PersonConfig
from relationship_engine.person_enricher import PersonEnricher

from tests.corpus_helpers import corpus_of, movie, person


def steady_actor(num=1, popularity=40):
	cast = [
		{
			'id': 100 + i, 'title': f'Film {i}', 'release_date': f'{2010 + i}-05-01',
			'popularity': 5 + 5 * i, 'vote_average': 7.5, 'genre_ids': [18],
		}
		for i in range(12)
	]
	return person(num, 'Steady Actor', popularity=popularity, known_for_department='Acting',
				  combined_credits={'cast': cast, 'crew': []})


def enricher():
	return PersonEnricher(PersonConfig(reference_year=2024))


def test_enrich_adds_career_fields():
	enriched = enricher().enrich(steady_actor())

	career = enriched.get('career')
	assert career['stage'] == 'established'
	assert career['span_years'] == 12
	assert career['total_credits'] == 12
	assert career['primary_role'] == 'actor'
	assert career['consistency'] == 'high'

	genres = enriched.get('genre_specialization')
	assert genres['specialization'] == 'Drama'
	assert genres['diversity_score'] == 0.0

	assert enriched.get('collaboration_metrics') == {'collaboration_score': 50}

	trajectory = enriched.get('career_trajectory')
	assert trajectory['trajectory'] == 'ascending'
	assert trajectory['trend'] == 'stable'
	assert trajectory['career_peak']['title'] == 'Film 11'
	assert trajectory['recent_projects'] == 1

	influence = enriched.get('influence_metrics')
	assert influence['overall_influence'] == 77
	assert influence['industry_impact'] == 'high'
	assert influence['career_significance'] == 'notable'
	assert influence['legacy_potential'] == 'memorable'


def test_existing_attributes_untouched():
	raw = steady_actor()
	enriched = enricher().enrich(raw)
	assert enriched.attributes == raw.attributes
	assert raw.derived == {}


def test_diversity_is_normalized_entropy():
	assert PersonEnricher.diversity([5, 5]) == pytest.approx(1.0)
	assert PersonEnricher.diversity([9]) == 0.0
	assert 0.0 < PersonEnricher.diversity([8, 1, 1]) < 1.0


def test_versatile_when_no_genre_dominates():
	credits = [{'genre_ids': [g]} for g in (18, 35, 27, 28, 53)]
	result = enricher().genre_specialization(credits)
	assert result['specialization'] == 'versatile'
	assert result['confidence'] == pytest.approx(0.2)


def test_short_careers_report_insufficient_data():
	assert enricher().trajectory([{'release_date': '2020-01-01'}]) == {
		'trajectory': 'insufficient_data', 'trend': 'unknown',
	}


def test_stage_falls_back_to_credit_count():
	e = enricher()
	assert e.career_stage(2, 40) == 'veteran'
	assert e.career_stage(50, 3) == 'emerging'


def test_enrich_corpus_excludes_unqualified_people():
	obscure = steady_actor(2, popularity=3)
	no_credits = person(3, 'Nobody', popularity=80)
	film = movie(1, 'Film')
	corpus = corpus_of(steady_actor(1), obscure, no_credits, film)

	enriched, excluded = enricher().enrich_corpus(corpus)

	assert excluded == ['person:2', 'person:3']
	assert list(enriched) == ['movie:1', 'person:1']
	assert 'career' in enriched['person:1'].derived


def test_enrichment_failure_keeps_raw_entity(monkeypatch):
	e = enricher()

	def boom(entity):
		raise RuntimeError('bad credits')

	monkeypatch.setattr(e, 'enrich', boom)
	enriched, excluded = e.enrich_corpus(corpus_of(steady_actor(1)))

	assert excluded == []
	assert enriched['person:1'].derived == {}
