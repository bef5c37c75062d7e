"""
End-to-end build tests over the sample corpus.
"""

import json

import pytest
from pydantic import ValidationError

from relationship_engine.artifacts import ArtifactWriter, read_artifact
from relationship_engine.config import EngineConfig
from relationship_engine.pipeline import build
from relationship_engine.rules import RULES_VERSION

from tests.corpus_helpers import collection, company, corpus_of, person, sample_corpus


def config():
	return EngineConfig.model_validate({
		'cultural': {'reference_year': 2024},
		'person': {'reference_year': 2024},
		'collection': {'reference_year': 2024},
		'company': {'reference_year': 2024},
	})


def with_people():
	corpus = sample_corpus()
	director = person(10, 'Anthony Russo', popularity=25, known_for_department='Directing', movie_credits={
		'crew': [{'id': 1, 'title': 'Avengers: Endgame', 'job': 'Director', 'release_date': '2019-04-24'}],
	})
	nobody = person(11, 'Nobody', popularity=1)
	return corpus_of(*corpus.entities(), director, nobody)


def test_build_produces_all_artifacts():
	result = build(with_people(), config())
	artifacts = result.artifacts()

	assert sorted(artifacts) == ['corpus', 'graph', 'recommendations', 'search_index', 'summary']
	assert result.excluded == ['person:11']
	assert 'person:11' not in artifacts['graph']
	assert 'career' in artifacts['corpus']['person:10']

	summary = artifacts['summary']
	assert summary['rules_version'] == RULES_VERSION
	assert summary['excluded_people'] == ['person:11']
	assert summary['stats']['entities'] == 6
	assert summary['stats']['analyzer_failures'] == 0


def test_build_profiles_collections_and_companies():
	corpus = corpus_of(
		*sample_corpus().entities(),
		collection(86311, 'The Avengers Collection'),
		company(420, 'Marvel Studios'),
	)
	dumped = build(corpus, config()).artifacts()['corpus']

	avengers = dumped['collection:86311']
	assert avengers['franchise_type'] == 'superhero'
	assert avengers['sequencing']['type'] == 'duology'
	assert avengers['release_span']['start_year'] == 2018

	marvel = dumped['company:420']
	assert marvel['production_scale'] == {'scale': 'boutique', 'movie_count': 2, 'average_popularity': 92.5}
	assert marvel['time_period']['period'] == 'recent'


def test_reverse_edges_hold_after_full_build():
	graph = build(sample_corpus(), config()).graph
	for source, by_category in graph.edges.items():
		for category, conns in by_category.items():
			for c in conns:
				if not c.bidirectional:
					continue
				forward = c.metadata['reverse_of'].split('->')
				assert forward == [c.target_id, source]
				original = [
					o for o in graph.connections(c.target_id, category)
					if o.target_id == source and o.type == c.type
				]
				if original:
					assert c.strength == pytest.approx(0.9 * original[0].strength)


def test_identical_builds_write_identical_bytes(tmp_path):
	first = ArtifactWriter(tmp_path / 'one').write_all(build(sample_corpus(), config()).artifacts())
	second = ArtifactWriter(tmp_path / 'two').write_all(build(sample_corpus(), config()).artifacts())
	for name, path in first.items():
		assert path.read_bytes() == second[name].read_bytes()


def test_artifacts_are_plain_json(tmp_path):
	paths = ArtifactWriter(tmp_path).write_all(build(sample_corpus(), config()).artifacts())
	graph = read_artifact(paths['graph'])
	direct = graph['movie:1']['direct']
	assert direct and {'targetId', 'type', 'strength', 'confidence', 'finalScore', 'reason'} <= set(direct[0])


def test_config_from_file(tmp_path):
	path = tmp_path / 'engine.json'
	path.write_text(json.dumps({'graph': {'category_cap': 5}, 'semantic': {'threshold': 0.5}}))

	loaded = EngineConfig.from_file(path)

	assert loaded.graph.category_cap == 5
	assert loaded.semantic.threshold == 0.5
	assert loaded.graph.reverse_factor == 0.9


def test_config_rejects_unknown_keys(tmp_path):
	with pytest.raises(ValidationError):
		EngineConfig.model_validate({'graph': {'categroy_cap': 5}})
	with pytest.raises(FileNotFoundError):
		EngineConfig.from_file(tmp_path / 'missing.json')


def test_default_rules_leave_quick_lists_empty():
	# the strongest default content edge (franchise, 0.92) rescored is 0.92 * 0.9 * 0.95, below 0.8
	recommendations = build(sample_corpus(), config()).recommendations.to_dict()
	assert all(entry['quick'] == [] for entry in recommendations.values())
	assert recommendations['movie:1']['deep']
