"""
Exception types raised across the engine boundary.
Per-entity analyzer problems never surface as these; they are logged and skipped.
"""


class EngineError(Exception):
	"""Base class for build-level failures."""


class CorpusError(EngineError):
	"""The corpus root is unreadable or structurally corrupt; the build cannot proceed."""


class ArtifactError(EngineError):
	"""An output artifact could not be written."""
