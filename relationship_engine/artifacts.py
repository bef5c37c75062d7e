"""
Atomic artifact persistence.
Each artifact is written to a temp file in the target directory and moved into place,
so readers never observe a partial file.
"""

import json  # artifact format
import os  # atomic replace
import tempfile  # sibling temp files
from pathlib import Path  # filesystem-safe paths
from typing import Any, Dict

from loguru import logger  # console logging

from .errors import ArtifactError

ARTIFACT_FILES = {
	'corpus': 'corpus.json',
	'graph': 'graph.json',
	'search_index': 'search_index.json',
	'recommendations': 'recommendations.json',
	'summary': 'build_summary.json',
}


class ArtifactWriter:

	def __init__(self, output_dir):
		self.output_dir = Path(output_dir)

	def write_all(self, artifacts: Dict[str, Any]) -> Dict[str, Path]:
		"""Write every known artifact present in `artifacts`; returns name -> path."""
		unknown = set(artifacts) - set(ARTIFACT_FILES)
		if unknown:
			raise ValueError(f"Unknown artifacts: {sorted(unknown)}")
		self.output_dir.mkdir(parents=True, exist_ok=True)
		return {name: self.write(ARTIFACT_FILES[name], payload) for name, payload in artifacts.items()}

	def write(self, filename: str, payload: Any) -> Path:
		target = self.output_dir / filename
		fd, tmp_path = tempfile.mkstemp(prefix=f".{filename}.", suffix='.tmp', dir=self.output_dir)
		try:
			with os.fdopen(fd, 'w', encoding='utf-8') as f:
				json.dump(payload, f, sort_keys=True, ensure_ascii=False, indent=1)
			os.replace(tmp_path, target)
		except (OSError, TypeError, ValueError) as e:
			if os.path.exists(tmp_path):
				os.remove(tmp_path)
			raise ArtifactError(f"Failed to write {target}: {e}") from e
		logger.info(f"[Artifacts] Wrote {target}")
		return target


def read_artifact(path) -> Any:
	path = Path(path)
	if not path.exists():
		raise FileNotFoundError(f"Artifact not found: {path}")
	with open(path, 'r', encoding='utf-8') as f:
		return json.load(f)
