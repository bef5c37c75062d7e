"""
Small hand-built entities shared by the test modules.
"""

from relationship_engine.models import Connection, Corpus, Entity


def movie(num, title, **attrs):
	return Entity(id=f"movie:{num}", kind='movie', name=title, attributes={'title': title, **attrs})


def person(num, name, **attrs):
	return Entity(id=f"person:{num}", kind='person', name=name, attributes={'name': name, **attrs})


def collection(num, name, **attrs):
	return Entity(id=f"collection:{num}", kind='collection', name=name, attributes={'name': name, **attrs})


def company(num, name, **attrs):
	return Entity(id=f"company:{num}", kind='company', name=name, attributes={'name': name, **attrs})


def corpus_of(*entities):
	return Corpus({e.id: e for e in entities})


def conn(target, strength, type_='genre_match', confidence=0.9, reason='test edge'):
	return Connection(target_id=target, type=type_, strength=strength, confidence=confidence, reason=reason)


class FixedAnalyzer:
	"""Returns preset connections per source id."""

	name = 'fixed'

	def __init__(self, edges):
		self.edges = edges

	def analyze(self, entity, corpus, cache):
		return list(self.edges.get(entity.id, []))


class BrokenAnalyzer:
	"""Raises for one entity, behaves like FixedAnalyzer otherwise."""

	name = 'broken'

	def __init__(self, bad_id, edges=None):
		self.bad_id = bad_id
		self.edges = edges or {}

	def analyze(self, entity, corpus, cache):
		if entity.id == self.bad_id:
			raise KeyError('genres')
		return list(self.edges.get(entity.id, []))


MARVEL = {'id': 420, 'name': 'Marvel Studios'}


def sample_corpus():
	"""A handful of movies with overlapping genres, studios, talent and a franchise."""
	director = {'id': 10, 'name': 'Anthony Russo', 'job': 'Director'}
	star = {'id': 20, 'name': 'Chris Evans', 'order': 0, 'popularity': 40}
	avengers = {'id': 86311, 'name': 'The Avengers Collection'}
	return corpus_of(
		movie(
			1, 'Avengers: Endgame',
			genres=[{'id': 28, 'name': 'Action'}, {'id': 878, 'name': 'Science Fiction'}],
			overview='The remaining heroes assemble for one final battle to undo the snap, a box office phenomenon.',
			production_companies=[MARVEL],
			credits={'cast': [star], 'crew': [director]},
			belongs_to_collection=avengers,
			vote_average=8.3, vote_count=20000, popularity=95,
			release_date='2019-04-24', original_language='en', origin_country=['US'],
		),
		movie(
			2, 'Avengers: Infinity War',
			genres=[{'id': 28, 'name': 'Action'}, {'id': 878, 'name': 'Science Fiction'}, {'id': 12, 'name': 'Adventure'}],
			overview='The heroes battle Thanos in a war across space, the biggest box office phenomenon.',
			production_companies=[MARVEL],
			credits={'cast': [star], 'crew': [director]},
			belongs_to_collection=avengers,
			vote_average=8.2, vote_count=25000, popularity=90,
			release_date='2018-04-25', original_language='en', origin_country=['US'],
		),
		movie(
			3, 'Hereditary',
			genres=[{'id': 27, 'name': 'Horror'}, {'id': 53, 'name': 'Thriller'}, {'id': 18, 'name': 'Drama'}],
			overview='A grieving family is haunted by a sinister, dark evil after the death of their grandmother.',
			production_companies=[{'id': 41077, 'name': 'A24'}],
			vote_average=7.3, vote_count=6000, popularity=40,
			release_date='2018-06-07', original_language='en', origin_country=['US'],
		),
		movie(
			4, 'The Witch',
			genres=[{'id': 27, 'name': 'Horror'}, {'id': 53, 'name': 'Thriller'}],
			overview='A family in 1630s New England is torn apart by the dark, sinister forces of witchcraft and evil.',
			production_companies=[{'id': 41077, 'name': 'A24'}],
			vote_average=7.0, vote_count=5000, popularity=30,
			release_date='2015-02-19', original_language='en', origin_country=['US'],
		),
		movie(
			5, 'Midsommar',
			genres=[{'id': 27, 'name': 'Horror'}, {'id': 18, 'name': 'Drama'}],
			overview='A couple travels to a festival in rural Sweden that turns dark and sinister.',
			production_companies=[{'id': 41077, 'name': 'A24'}],
			vote_average=7.1, vote_count=4000, popularity=35,
			release_date='2019-07-03', original_language='en', origin_country=['US', 'SE'],
		),
	)
