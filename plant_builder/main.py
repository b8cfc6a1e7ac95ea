"""Orchestrator CLI for the plant library builder."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from .config import Settings, load_settings, load_vocabulary
from .enrichment import EnrichmentClient
from .plants.run_pipeline import run_pipeline, validate_corpus
from .storage import ManifestWriteError, write_index

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Reconcile and canonicalize the plant JSON library")
    parser.add_argument(
        "--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    )
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Merge duplicates, stamp variants, classify and rewrite the index")
    run.add_argument("--plants-dir", type=Path, help="Input directory of plant JSON documents")
    run.add_argument("--output-dir", type=Path, help="Where documents are written (default: in place)")
    run.add_argument("--images-dir", type=Path, help="Root of the per-species image folders")
    run.add_argument("--vocab", type=Path, help="JSON vocabulary override file")
    run.add_argument("--sync-images", action="store_true", help="Rebuild `images` from the image folders")
    run.add_argument("--enrich", action="store_true", help="Fetch taxonomy/descriptions from GBIF and Wikipedia")
    run.add_argument("--assign-ids", action="store_true", help="Give records without an id a fresh one")
    run.add_argument("--dry-run", action="store_true", help="Compute and report, write nothing")

    index = sub.add_parser("index", help="Regenerate the index manifest for a directory")
    index.add_argument("--plants-dir", type=Path, help="Directory to index")

    validate = sub.add_parser("validate", help="Report out-of-vocabulary values and duplicate ids")
    validate.add_argument("--plants-dir", type=Path, help="Directory to validate")
    validate.add_argument("--vocab", type=Path, help="JSON vocabulary override file")
    return parser


def _settings_from_args(args: argparse.Namespace) -> Settings:
    settings = load_settings()
    plants_dir = getattr(args, "plants_dir", None)
    output_dir = getattr(args, "output_dir", None)
    if plants_dir is not None and output_dir is None and settings.output_dir == settings.plants_dir:
        output_dir = plants_dir
    return settings.with_overrides(
        plants_dir=plants_dir,
        output_dir=output_dir,
        images_dir=getattr(args, "images_dir", None),
        vocab_path=getattr(args, "vocab", None),
        dry_run=True if getattr(args, "dry_run", False) else None,
    )


def _run(args: argparse.Namespace) -> int:
    settings = _settings_from_args(args)
    vocab = load_vocabulary(settings.vocab_path)
    enricher = EnrichmentClient(settings) if args.enrich else None
    try:
        report = run_pipeline(
            settings,
            vocab=vocab,
            enricher=enricher,
            sync_images=args.sync_images,
            assign_ids=args.assign_ids,
        )
    except ManifestWriteError:
        logger.exception("Index manifest could not be written; the run is incomplete")
        return 1
    logger.info(
        "✓ %d updated, %d skipped, %d errored, %d removed (%d in index)",
        report.updated,
        report.skipped,
        report.errored,
        report.removed,
        report.manifest_count or 0,
    )
    return 0


def _index(args: argparse.Namespace) -> int:
    settings = _settings_from_args(args)
    try:
        write_index(args.plants_dir or settings.output_dir, settings.index_name)
    except ManifestWriteError:
        logger.exception("Index manifest could not be written")
        return 1
    return 0


def _validate(args: argparse.Namespace) -> int:
    settings = _settings_from_args(args)
    report = validate_corpus(settings.plants_dir, settings.index_name, load_vocabulary(settings.vocab_path))
    problems = sum(len(found) for found in report["violations"].values()) + len(report["duplicate_ids"])
    logger.info(
        "Validated %d file(s): %d vocabulary violation(s), %d shared id(s), %d malformed",
        report["files"],
        sum(len(found) for found in report["violations"].values()),
        len(report["duplicate_ids"]),
        len(report["malformed"]),
    )
    return 1 if problems else 0


COMMANDS = {"run": _run, "index": _index, "validate": _validate}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )
    return COMMANDS[args.command](args)


if __name__ == "__main__":
    raise SystemExit(main())
