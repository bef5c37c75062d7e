"""
Graph builder.
Runs every registered analyzer over the corpus and post-processes the merged edges:
reverse-edge enhancement, peer-to-peer inference, semantic clustering and confidence scoring.
Each phase reads the frozen output of the previous one and produces a new frozen edge map.
"""

import time  # phase timings
from dataclasses import dataclass, field, replace  # result records
from typing import Dict, List, Optional, Sequence, Tuple

from loguru import logger  # console logger

from .cache import BuildCache
from .config import EngineConfig, GraphConfig
from .content_analyzer import ContentAnalyzer
from .cultural_analyzer import CulturalAnalyzer
from .models import CATEGORIES, Cluster, Connection, Corpus
from .semantic_analyzer import SemanticAnalyzer

# entity id -> category -> connections
EdgeMap = Dict[str, Dict[str, Tuple[Connection, ...]]]


@dataclass
class BuildStats:
	entities: int = 0
	analyzer_failures: int = 0
	reverse_edges: int = 0
	peer_edges: int = 0
	clusters: int = 0
	edges_per_category: Dict[str, int] = field(default_factory=dict)

	def to_dict(self) -> Dict[str, object]:
		return {
			'entities': self.entities,
			'analyzer_failures': self.analyzer_failures,
			'reverse_edges': self.reverse_edges,
			'peer_edges': self.peer_edges,
			'clusters': self.clusters,
			'edges_per_category': dict(sorted(self.edges_per_category.items())),
		}


@dataclass(frozen=True)
class RelationshipGraph:
	"""Finished graph: per-entity, per-category connections sorted by final score."""
	edges: EdgeMap
	clusters: Tuple[Cluster, ...] = ()
	stats: BuildStats = field(default_factory=BuildStats)

	def connections(self, entity_id: str, category: Optional[str] = None) -> List[Connection]:
		by_category = self.edges.get(entity_id, {})
		if category is not None:
			return list(by_category.get(category, ()))
		return [conn for cat in CATEGORIES for conn in by_category.get(cat, ())]

	def to_dict(self) -> Dict[str, Dict[str, List[Dict[str, object]]]]:
		return {
			entity_id: {cat: [c.to_dict() for c in by_category.get(cat, ())] for cat in CATEGORIES}
			for entity_id, by_category in sorted(self.edges.items())
		}


def default_analyzers(config: Optional[EngineConfig] = None) -> Dict[str, List[object]]:
	"""Category -> analyzers. Contextual and temporal slots start empty."""
	config = config or EngineConfig()
	return {
		'direct': [ContentAnalyzer(config.content)],
		'semantic': [SemanticAnalyzer(config.semantic)],
		'cultural': [CulturalAnalyzer(config.cultural)],
	}


class GraphBuilder:
	"""
	Orchestrates analyzers and the five post-processing phases.
	"""

	def __init__(
		self,
		config: Optional[GraphConfig] = None,
		analyzers: Optional[Dict[str, Sequence[object]]] = None,
	):
		self.config = config or GraphConfig()
		self.analyzers = analyzers if analyzers is not None else default_analyzers()
		unknown = set(self.analyzers) - set(CATEGORIES)
		if unknown:
			raise ValueError(f"Analyzers registered for unknown categories: {sorted(unknown)}")

	def build(self, corpus: Corpus, cache: Optional[BuildCache] = None) -> RelationshipGraph:
		if not isinstance(corpus, Corpus):
			raise ValueError("GraphBuilder.build expects a Corpus")
		cache = cache or BuildCache()
		stats = BuildStats(entities=len(corpus))

		logger.info(f"[GraphBuilder] Building graph for {len(corpus)} entities...")
		t0 = time.time()

		edges = self.analyze(corpus, cache, stats)
		edges = self.add_reverse_edges(edges, corpus, stats)
		edges = self.infer_peers(edges, stats)
		edges, clusters = self.cluster(edges, stats)
		edges = self.score(edges)

		stats.edges_per_category = {
			cat: sum(len(by_cat.get(cat, ())) for by_cat in edges.values()) for cat in CATEGORIES
		}
		logger.info(
			f"[GraphBuilder] Done in {time.time() - t0:.2f}s; "
			f"{sum(stats.edges_per_category.values())} edges, {len(clusters)} clusters, "
			f"{stats.analyzer_failures} analyzer failures"
		)
		return RelationshipGraph(edges=edges, clusters=clusters, stats=stats)

	# --- phase 1: analysis ----------------------------------------------

	def analyze(self, corpus: Corpus, cache: BuildCache, stats: BuildStats) -> EdgeMap:
		edges: EdgeMap = {}
		for entity in corpus.entities():
			collected: Dict[str, List[Connection]] = {cat: [] for cat in CATEGORIES}
			for category, analyzers in self.analyzers.items():
				for analyzer in analyzers:
					try:
						found = analyzer.analyze(entity, corpus, cache)
					except Exception as e:
						stats.analyzer_failures += 1
						logger.warning(f"[GraphBuilder] {getattr(analyzer, 'name', type(analyzer).__name__)} failed on {entity.id}: {e}")
						continue
					collected[category].extend(self._valid(entity.id, found, corpus, collected[category]))
			edges[entity.id] = {cat: tuple(conns) for cat, conns in collected.items()}
		logger.info(f"[GraphBuilder] Analysis produced {self._count(edges)} edges")
		return edges

	@staticmethod
	def _valid(source_id: str, found, corpus: Corpus, existing: List[Connection]) -> List[Connection]:
		"""Drop self-loops, dangling targets and duplicate (target, type) pairs."""
		seen = {(c.target_id, c.type) for c in existing}
		kept = []
		for conn in found or []:
			if not isinstance(conn, Connection):
				continue
			key = (conn.target_id, conn.type)
			if conn.target_id == source_id or conn.target_id not in corpus or key in seen:
				continue
			seen.add(key)
			kept.append(conn)
		return kept

	# --- phase 2: bidirectional enhancement ------------------------------

	def add_reverse_edges(self, edges: EdgeMap, corpus: Corpus, stats: BuildStats) -> EdgeMap:
		factor = self.config.reverse_factor
		grown: Dict[str, Dict[str, List[Connection]]] = {
			source: {cat: list(conns) for cat, conns in by_cat.items()} for source, by_cat in edges.items()
		}
		present = {
			(source, cat, c.target_id, c.type)
			for source, by_cat in edges.items() for cat, conns in by_cat.items() for c in conns
		}

		for source in sorted(edges):
			for category in CATEGORIES:
				for conn in edges[source].get(category, ()):
					target = conn.target_id
					if target not in corpus or target not in grown:
						continue
					key = (target, category, source, conn.type)
					if key in present:
						continue
					present.add(key)
					grown[target][category].append(Connection(
						target_id=source,
						type=conn.type,
						strength=conn.strength * factor,
						confidence=conn.confidence * factor,
						reason=f"Reverse: {conn.reason}",
						metadata={**conn.metadata, 'reverse_of': f"{source}->{target}"},
						bidirectional=True,
					))
					stats.reverse_edges += 1

		logger.info(f"[GraphBuilder] Added {stats.reverse_edges} reverse edges")
		return {source: {cat: self._cap(conns) for cat, conns in by_cat.items()} for source, by_cat in grown.items()}

	def _cap(self, conns: List[Connection]) -> Tuple[Connection, ...]:
		return tuple(sorted(conns, key=Connection.sort_key)[:self.config.category_cap])

	# --- phase 3: peer-to-peer inference ---------------------------------

	def infer_peers(self, edges: EdgeMap, stats: BuildStats) -> EdgeMap:
		cfg = self.config
		result: EdgeMap = {}
		for a in sorted(edges):
			direct_a = edges[a].get('direct', ())
			best: Dict[str, Tuple[float, str, Connection, Connection]] = {}

			for ab in direct_a:
				b = ab.target_id
				for bc in edges.get(b, {}).get('direct', ()):
					c = bc.target_id
					if c == a:
						continue
					strength = ab.strength * bc.strength * cfg.peer_factor
					if strength <= cfg.peer_threshold:
						continue
					current = best.get(c)
					if current is None or strength > current[0] or (strength == current[0] and b < current[1]):
						best[c] = (strength, b, ab, bc)

			peers = [
				Connection(
					target_id=c,
					type='peer_recommendation',
					strength=strength,
					confidence=min(ab.confidence, bc.confidence),
					reason=f"Connected through {b}",
					metadata={'via': b, 'first_hop': ab.type, 'second_hop': bc.type},
				)
				for c, (strength, b, ab, bc) in sorted(best.items())
			]
			stats.peer_edges += len(peers)

			by_cat = dict(edges[a])
			by_cat['collaborative'] = self._cap(list(by_cat.get('collaborative', ())) + peers)
			result[a] = by_cat

		logger.info(f"[GraphBuilder] Inferred {stats.peer_edges} peer recommendations")
		return result

	# --- phase 4: clustering ---------------------------------------------

	def cluster(self, edges: EdgeMap, stats: BuildStats) -> Tuple[EdgeMap, Tuple[Cluster, ...]]:
		cfg = self.config
		groups: Dict[str, set] = {}
		for source in sorted(edges):
			for conn in edges[source].get('semantic', ()):
				members = groups.setdefault(f"{conn.type}_cluster", set())
				members.update((source, conn.target_id))

		clusters = tuple(
			Cluster(key=key, members=frozenset(members))
			for key, members in sorted(groups.items())
			if len(members) >= cfg.cluster_min_members
		)
		stats.clusters = len(clusters)

		added: Dict[str, List[Connection]] = {}
		for cluster in clusters:
			label = cluster.key.replace('_', ' ')
			for member in sorted(cluster.members):
				for other in sorted(cluster.members):
					if other == member:
						continue
					added.setdefault(member, []).append(Connection(
						target_id=other,
						type='cluster_member',
						strength=cfg.cluster_strength,
						confidence=cfg.cluster_strength,
						reason=f"Part of {label}",
						metadata={'cluster': cluster.key, 'cluster_size': len(cluster.members)},
					))

		result: EdgeMap = {}
		for source, by_cat in edges.items():
			by_cat = dict(by_cat)
			if source in added:
				by_cat['cluster'] = self._cap(list(by_cat.get('cluster', ())) + added[source])
			result[source] = by_cat

		logger.info(f"[GraphBuilder] Formed {len(clusters)} clusters")
		return result, clusters

	# --- phase 5: confidence scoring -------------------------------------

	def relationship_confidence(self, connection_type: str) -> float:
		return self.config.relationship_confidence.get(connection_type, self.config.default_relationship_confidence)

	def score(self, edges: EdgeMap) -> EdgeMap:
		cfg = self.config
		result: EdgeMap = {}
		for source, by_cat in edges.items():
			scored = {}
			for category in CATEGORIES:
				type_conf = cfg.type_confidence.get(category, 0.5)
				rescored = [
					replace(
						conn,
						confidence=min(1.0, conn.strength * type_conf * self.relationship_confidence(conn.type)),
						metadata={**conn.metadata, 'evidence_confidence': conn.confidence},
					)
					for conn in by_cat.get(category, ())
				]
				scored[category] = tuple(sorted(rescored, key=Connection.sort_key))
			result[source] = scored
		return result

	@staticmethod
	def _count(edges: EdgeMap) -> int:
		return sum(len(conns) for by_cat in edges.values() for conns in by_cat.values())
