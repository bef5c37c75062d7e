"""
Tests for atomic artifact writing.
"""

import json
import os

import pytest

from relationship_engine.artifacts import ARTIFACT_FILES, ArtifactWriter, read_artifact
from relationship_engine.errors import ArtifactError


def test_write_all_creates_files(tmp_path):
	out = tmp_path / 'out'
	paths = ArtifactWriter(out).write_all({'graph': {'b': 1, 'a': [1, 2]}, 'summary': {'rules_version': '1'}})

	assert paths['graph'] == out / ARTIFACT_FILES['graph']
	assert read_artifact(paths['graph']) == {'a': [1, 2], 'b': 1}
	assert read_artifact(out / 'build_summary.json') == {'rules_version': '1'}
	# keys are written sorted so identical builds produce identical bytes
	text = paths['graph'].read_text(encoding='utf-8')
	assert text.index('"a"') < text.index('"b"')


def test_no_temp_files_left_behind(tmp_path):
	ArtifactWriter(tmp_path).write('graph.json', {'x': 1})
	assert os.listdir(tmp_path) == ['graph.json']


def test_unserializable_payload_keeps_previous_file(tmp_path):
	writer = ArtifactWriter(tmp_path)
	writer.write('graph.json', {'ok': True})

	with pytest.raises(ArtifactError):
		writer.write('graph.json', {'bad': object()})

	assert json.loads((tmp_path / 'graph.json').read_text(encoding='utf-8')) == {'ok': True}
	assert os.listdir(tmp_path) == ['graph.json']


def test_unknown_artifact_name_rejected(tmp_path):
	with pytest.raises(ValueError):
		ArtifactWriter(tmp_path).write_all({'extras': {}})


def test_read_missing_artifact(tmp_path):
	with pytest.raises(FileNotFoundError):
		read_artifact(tmp_path / 'nope.json')
