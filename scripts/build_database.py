"""
Build the relationship database.

This script:
1) Loads the entity corpus from data/corpus.json (or a given path)
2) Enriches people and builds the relationship graph
3) Compiles the search index and recommendation lists
4) Writes all artifacts atomically to output/

Usage:
    python -m scripts.build_database [--corpus data/corpus.json] [--out output] [--config config.json]
"""

import argparse  # command line options
import time  # measure step timings
from pathlib import Path  # filesystem-safe paths

from loguru import logger  # console logging

from relationship_engine.artifacts import ArtifactWriter  # atomic JSON output
from relationship_engine.config import EngineConfig  # tunable weights
from relationship_engine.data_loader import CorpusLoader  # corpus ingestion
from relationship_engine.pipeline import build  # full build


def parse_args(argv=None):
	root = Path(__file__).resolve().parents[1]  # project root
	parser = argparse.ArgumentParser(description="Build the entity relationship database")
	parser.add_argument('--corpus', default=str(root / 'data' / 'corpus.json'), help="corpus JSON or JSONL file")
	parser.add_argument('--out', default=str(root / 'output'), help="artifact output directory")
	parser.add_argument('--config', default=None, help="optional JSON config override file")
	return parser.parse_args(argv)


def main(argv=None):
	args = parse_args(argv)

	# Headline banner for visibility in console
	logger.info("=" * 60)
	logger.info("Build Relationship Database")
	logger.info("=" * 60)

	config = EngineConfig.from_file(args.config) if args.config else EngineConfig()

	# 1) Load data
	logger.info("[1/4] Loading corpus...")
	corpus = CorpusLoader().load(args.corpus)
	logger.info(f"[OK] Loaded {len(corpus)} entities")

	# 2) + 3) Enrich, analyze, index
	logger.info("\n[2/4] Building graph...")
	t0 = time.time()
	result = build(corpus, config)
	logger.info(f"[OK] Graph built in {time.time() - t0:.2f}s; {len(result.graph.clusters)} clusters")

	logger.info("\n[3/4] Search index and recommendations compiled")
	logger.info(f"[OK] {len(result.index.term_map)} terms; {len(result.recommendations.entries)} recommendation sets")

	# 4) Save artifacts
	logger.info("\n[4/4] Writing artifacts...")
	paths = ArtifactWriter(args.out).write_all(result.artifacts())
	logger.info(f"[OK] Wrote {len(paths)} files to {args.out}")

	logger.info("=" * 60)


if __name__ == '__main__':
	main()  # invoke builder
