"""
Tests for production company profiles.
"""

from relationship_engine.company_enricher import CompanyEnricher, base_title
from relationship_engine.config import CompanyConfig

from tests.corpus_helpers import company, corpus_of, movie, sample_corpus


def enricher():
	return CompanyEnricher(CompanyConfig(reference_year=2024))


def test_company_profile_from_produced_movies():
	a24 = company(41077, 'A24')
	enriched = enricher().enrich_corpus(corpus_of(*sample_corpus().entities(), a24))['company:41077']

	assert enriched.get('studio_category') == 'independent'
	assert enriched.get('genre_specialization') == {
		'specialization': 'Horror',
		'confidence': 0.43,
		'top_genres': [
			{'genre': 'Horror', 'count': 3, 'percentage': 43},
			{'genre': 'Drama', 'count': 2, 'percentage': 29},
			{'genre': 'Thriller', 'count': 2, 'percentage': 29},
		],
	}
	assert enriched.get('production_scale') == {'scale': 'boutique', 'movie_count': 3, 'average_popularity': 35.0}
	assert enriched.get('time_period') == {
		'period': 'recent', 'start_year': 2015, 'end_year': 2019, 'span': 5, 'is_active': True,
	}
	assert enriched.get('studio_universe')['universe_type'] == 'standalone'


def test_company_without_movies():
	enriched = enricher().enrich_corpus(corpus_of(company(1, 'Unknown Pictures')))['company:1']

	assert enriched.get('studio_category') == 'production'
	assert enriched.get('genre_specialization')['specialization'] == 'unknown'
	assert enriched.get('production_scale')['scale'] == 'unknown'
	assert enriched.get('time_period')['period'] == 'unknown'


def test_category_by_name_then_description():
	assert CompanyEnricher.category('Walt Disney Pictures') == 'major_studio'
	assert CompanyEnricher.category('Pixar') == 'animation'
	assert CompanyEnricher.category('Blumhouse Productions') == 'horror'
	assert CompanyEnricher.category('Northern Lights', 'An independent distributor') == 'independent'
	assert CompanyEnricher.category('Northern Lights', 'Television production house') == 'television'


def test_mixed_output_is_diverse():
	movies = [
		movie(1, 'One', genres=['Comedy']),
		movie(2, 'Two', genres=['Drama']),
		movie(3, 'Three', genres=['Western']),
	]
	spec = enricher().genre_specialization(movies)
	assert spec['specialization'] == 'diverse'
	assert spec['confidence'] == 0.33


def test_scale_and_period_thresholds():
	many = [movie(i, f'Film {i}', release_date='2023-01-01', popularity=10) for i in range(1, 21)]
	assert enricher().production_scale(many)['scale'] == 'medium'
	assert enricher().time_period(many)['period'] == 'active'

	old = [movie(1, 'Silent', release_date='1950-01-01')]
	period = enricher().time_period(old)
	assert period['period'] == 'historical'
	assert period['is_active'] is False


def test_studio_universe_counts_title_families():
	titles = ['Iron Man', 'Iron Man 2', 'Iron Man 3', 'Ant-Man', 'Ant-Man II', 'Black Panther']
	movies = [movie(i, t) for i, t in enumerate(titles, start=1)]

	universe = enricher().studio_universe(movies)
	assert universe['universe_type'] == 'franchise_studio'
	assert universe['franchises'] == ['ant-man', 'iron man']

	movies += [movie(7, 'Thor'), movie(8, 'Thor Part 2')]
	universe = enricher().studio_universe(movies)
	assert universe['universe_type'] == 'cinematic_universe'
	assert universe['has_connected_universe'] is True
	assert universe['franchise_count'] == 3


def test_base_title_strips_sequel_markers():
	assert base_title('Iron Man 3') == 'iron man'
	assert base_title('Rocky IV') == 'rocky'
	assert base_title('Saw II') is None
