"""
End-to-end build: enrich -> graph -> search index -> recommendations.
Callers hand in a frozen corpus and receive every artifact as plain serializable maps.
"""

from dataclasses import dataclass  # build result
from typing import Any, Dict, List, Optional

from loguru import logger  # console logging

from .cache import BuildCache
from .collection_enricher import CollectionEnricher
from .company_enricher import CompanyEnricher
from .config import EngineConfig
from .data_loader import CorpusLoader
from .graph_builder import GraphBuilder, RelationshipGraph, default_analyzers
from .models import Corpus
from .person_enricher import PersonEnricher
from .recommendations import RecommendationCompiler, RecommendationSet
from .rules import RULES_VERSION
from .search_index import SearchIndex, SearchIndexBuilder
from .semantic_analyzer import SemanticAnalyzer
from .cultural_analyzer import CulturalAnalyzer


@dataclass
class BuildResult:
	corpus: Corpus
	excluded: List[str]
	graph: RelationshipGraph
	index: SearchIndex
	recommendations: RecommendationSet

	def artifacts(self) -> Dict[str, Any]:
		return {
			'corpus': CorpusLoader().dump(self.corpus),
			'graph': self.graph.to_dict(),
			'search_index': self.index.to_dict(),
			'recommendations': self.recommendations.to_dict(),
			'summary': {
				'rules_version': RULES_VERSION,
				'excluded_people': self.excluded,
				'clusters': [c.to_dict() for c in self.graph.clusters],
				'stats': self.graph.stats.to_dict(),
			},
		}


def build(corpus: Corpus, config: Optional[EngineConfig] = None) -> BuildResult:
	"""Run one full build with a fresh build-scoped cache."""
	config = config or EngineConfig()
	cache = BuildCache()

	enriched, excluded = PersonEnricher(config.person).enrich_corpus(corpus, cache)
	enriched = CollectionEnricher(config.collection).enrich_corpus(enriched, cache)
	enriched = CompanyEnricher(config.company).enrich_corpus(enriched, cache)
	graph = GraphBuilder(config.graph, default_analyzers(config)).build(enriched, cache)
	index = SearchIndexBuilder(
		config.index,
		semantic=SemanticAnalyzer(config.semantic),
		cultural=CulturalAnalyzer(config.cultural),
	).build(enriched, cache)
	recommendations = RecommendationCompiler(config.index).compile(graph)

	logger.info(f"[Pipeline] Build complete; cache held {len(cache)} entries ({cache.hits} hits)")
	return BuildResult(enriched, excluded, graph, index, recommendations)
