"""
Corpus loading and normalization.
Reads an entity corpus from JSON or JSON Lines and turns each record into an Entity.
"""

# Standard libs for JSON parsing, typing, and paths
import json  # read JSON / JSON lines
from typing import Any, Dict, List, Optional, Tuple  # type hints
from pathlib import Path  # filesystem-safe paths

# Our entity and corpus records
from .models import Corpus, Entity, make_entity_id, parse_entity_id, KIND_ALIASES, ENTITY_KINDS
from .errors import CorpusError

# Console logging
from loguru import logger  # console logger


class CorpusLoader:
	"""
	Handles loading and normalizing an entity corpus.
	"""

	# Genre synonym mapping: provider/user spellings -> single standard name
	GENRE_SYNONYMS = {
		'sci-fi': 'Science Fiction',  # hyphenated form
		'sci fi': 'Science Fiction',  # spaced form
		'science-fiction': 'Science Fiction',  # dashed form
		'scifi': 'Science Fiction',  # joined form
		'science fiction': 'Science Fiction',
		'romantic': 'Romance',
		'funny': 'Comedy',
		'animated': 'Animation',
		'musical': 'Music',  # TMDB has no Musical genre; the musical theme comes from Music in GENRE_SEMANTICS
		'scary': 'Horror',
		'sci-fi & fantasy': 'Sci-Fi & Fantasy',
	}

	def __init__(self):
		"""Initialize the loader and expose the synonyms mapping."""
		self.genre_synonyms = self.GENRE_SYNONYMS  # store mapping for reuse

	def load(self, filepath) -> Corpus:
		"""
		Load a corpus file. A `.jsonl` file holds one record per line (each with an id);
		anything else must be a JSON object mapping entity id -> record.
		"""
		filepath = Path(filepath)  # normalize path

		# Validate the file presence early to give clear error messages
		if not filepath.exists():
			raise FileNotFoundError(f"Corpus file not found: {filepath}")

		logger.info(f"[CorpusLoader] Loading corpus from {filepath}...")

		if filepath.suffix == '.jsonl':
			records = self._read_jsonl(filepath)
		else:
			try:
				with open(filepath, 'r', encoding='utf-8') as f:
					root = json.load(f)
			except json.JSONDecodeError as e:
				raise CorpusError(f"Corpus root is not valid JSON: {e}") from e
			if not isinstance(root, dict):
				raise CorpusError("Corpus root must be a JSON object of id -> record")
			records = list(root.items())

		corpus = self.from_records(records)
		logger.info(f"[CorpusLoader] Successfully loaded {len(corpus)} entities.")
		return corpus

	def from_mapping(self, raw: Dict[str, Any]) -> Corpus:
		"""Build a corpus from an in-memory {id: record} mapping."""
		if not isinstance(raw, dict):
			raise ValueError("Corpus input must be a mapping of entity id -> record")
		return self.from_records(list(raw.items()))

	def from_records(self, records: List[Tuple[Optional[str], Any]]) -> Corpus:
		entities: Dict[str, Entity] = {}
		for raw_id, record in records:
			try:
				entity = self._parse_entity(raw_id, record)
			except Exception as e:
				logger.warning(f"[CorpusLoader] Skipping record {raw_id!r}: {e}")
				continue
			if entity.id in entities:
				logger.warning(f"[CorpusLoader] Duplicate entity {entity.id}; keeping first occurrence")
				continue
			entities[entity.id] = entity
		return Corpus(entities)

	def _read_jsonl(self, filepath: Path) -> List[Tuple[Optional[str], Any]]:
		records = []
		# Read line-by-line to handle large corpora
		with open(filepath, 'r', encoding='utf-8') as f:
			for line_num, line in enumerate(f, 1):
				if not line.strip():
					continue
				try:
					data = json.loads(line)
				except json.JSONDecodeError as e:
					logger.warning(f"[CorpusLoader] Skipping invalid JSON at line {line_num}: {e}")
					continue
				records.append((None, data))
		return records

	def _parse_entity(self, raw_id: Optional[str], data: Any) -> Entity:
		"""Convert a raw record into an Entity with a canonical id."""
		if not isinstance(data, dict):
			raise ValueError("record is not an object")

		entity_id = self._resolve_id(raw_id, data)
		kind, _ = parse_entity_id(entity_id)

		attributes = dict(data)
		if 'genres' in attributes:
			attributes['genres'] = self._normalize_genres(attributes['genres'])

		name = self._normalize_text(data.get('title')) or self._normalize_text(data.get('name'))
		if not name:
			raise ValueError(f"{entity_id} has no title or name")

		return Entity(id=entity_id, kind=kind, name=name, attributes=attributes)

	def _resolve_id(self, raw_id: Optional[str], data: Dict[str, Any]) -> str:
		"""
		Accept "movie:603", "movie_603", or a numeric `id` plus `media_type`.
		"""
		for candidate in (raw_id, data.get('id')):
			if isinstance(candidate, str) and not candidate.isdigit():
				kind, num = parse_entity_id(candidate)
				return make_entity_id(kind, num)

		num = data.get('tmdb_id', data.get('id'))
		if isinstance(raw_id, str) and raw_id.isdigit():
			num = int(raw_id)
		media_type = str(data.get('media_type') or '').strip().lower()
		kind = KIND_ALIASES.get(media_type, media_type)
		if kind not in ENTITY_KINDS:
			raise ValueError(f"cannot determine entity kind (media_type={media_type!r})")
		if isinstance(num, str) and num.isdigit():
			num = int(num)
		if not isinstance(num, int) or isinstance(num, bool):
			raise ValueError("record has no numeric id")
		return make_entity_id(kind, num)

	def _normalize_genres(self, genres: Any) -> List[Any]:
		"""
		Keep genre entries as given but map their names to canonical spellings.
		Non-list values become an empty list.
		"""
		if not isinstance(genres, list):
			return []
		normalized = []
		for genre in genres:
			if isinstance(genre, str):
				normalized.append(self._normalize_genre(genre))
			elif isinstance(genre, dict) and isinstance(genre.get('name'), str):
				normalized.append({**genre, 'name': self._normalize_genre(genre['name'])})
		return [g for g in normalized if g]

	def _normalize_text(self, text: Any) -> str:
		"""Trim whitespace; non-strings become empty."""
		if not isinstance(text, str):
			return ''
		return text.strip()

	def _normalize_genre(self, genre: str) -> str:
		"""
		Map a raw genre to its canonical form using synonyms; otherwise keep it trimmed.
		"""
		genre_lower = genre.strip().lower()
		if genre_lower in self.genre_synonyms:
			return self.genre_synonyms[genre_lower]
		return genre.strip()

	def dump(self, corpus: Corpus) -> Dict[str, Dict[str, Any]]:
		"""Serializable snapshot: raw attributes plus derived fields, keyed by id."""
		snapshot = {}
		for entity in corpus.entities():
			record = dict(entity.attributes)
			record.update(entity.derived)
			record['id'] = entity.id
			snapshot[entity.id] = record
		return snapshot
