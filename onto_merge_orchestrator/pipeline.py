"""Merge pipeline: load ontologies, merge them and serialize the result, plus the CLI entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import structlog
import yaml
from pydantic import ValidationError as PydanticValidationError

from onto_merge_core.errors import ManifestValidationError, OntoMergeError
from onto_merge_core.manager import OntologyManager
from onto_merge_core.model import Ontology
from onto_merge_engine.operation import SkippedSource, merge_into
from onto_merge_ingest.ontology_to_rdf import save_ontology
from onto_merge_ingest.rdf_to_ontology import load_ontology
from onto_merge_orchestrator.models import MergeManifest, MergeOptions
from onto_merge_orchestrator.validation import run_preflight_checks

# Configure structured logging
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer() if sys.stderr.isatty() else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=False,
)

logger = structlog.get_logger(__name__)


def _format_errors(error: PydanticValidationError) -> List[str]:
    return [" -> ".join(str(l) for l in e["loc"]) + f": {e['msg']}" for e in error.errors()]


@dataclass
class MergeArtifacts:
    output: Path
    target: Ontology
    axiom_count: int
    skipped_sources: List[SkippedSource] = field(default_factory=list)


def load_manifest(path: Path) -> MergeManifest:
    """Load and validate a merge manifest.

    Relative paths in the manifest are resolved against its directory.

    Raises:
        ManifestValidationError: If the manifest is not a YAML mapping
    """
    logger.info("loading_manifest", path=str(path))
    with open(path, 'r') as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ManifestValidationError("Manifest must be a YAML mapping", manifest_path=str(path))
    try:
        manifest = MergeManifest.model_validate(data)
    except PydanticValidationError as e:
        raise ManifestValidationError(
            "Manifest validation failed", manifest_path=str(path), errors=_format_errors(e)
        ) from e
    return manifest.resolve_paths(path.resolve().parent)


def load_ontologies(manifest: MergeManifest) -> Tuple[OntologyManager, List[Ontology]]:
    """Load the inputs and import files of ``manifest`` into one manager.

    Inputs may share an identity and are all merged. Import files are
    resolved by IRI and must be unique.

    Returns:
        The manager and the input ontologies in manifest order

    Raises:
        OntologyLoadError: If a file cannot be parsed
    """
    manager = OntologyManager()
    inputs = []
    for path in manifest.inputs:
        ontology = load_ontology(path, manager=manager, allow_duplicate=True)
        logger.info("input_loaded", path=path, ontology=str(ontology.ontology_id), axioms=ontology.axiom_count())
        inputs.append(ontology)
    for path in manifest.imports:
        ontology = load_ontology(path, manager=manager)
        logger.debug("import_loaded", path=path, ontology=str(ontology.ontology_id))
    return manager, inputs


def run_merge(manifest: MergeManifest) -> MergeArtifacts:
    """Run a merge job described by ``manifest``.

    The first input is the merge target.

    Raises:
        OntoMergeError: If loading or merging fails
    """
    log = logger.bind(job=manifest.name)
    _, inputs = load_ontologies(manifest)
    target = inputs[0]

    log.info("merge_started", sources=len(inputs), **manifest.options.as_kwargs())
    result = merge_into(inputs, target, **manifest.options.as_kwargs())
    for skipped in result.skipped_sources:
        log.warning("source_skipped", index=skipped.index, ontology=str(skipped.ontology_id), reason=skipped.reason)

    output = save_ontology(target, manifest.output, format=manifest.format)
    log.info("merge_complete", output=str(output), axioms=target.axiom_count())

    return MergeArtifacts(
        output=output,
        target=target,
        axiom_count=target.axiom_count(),
        skipped_sources=result.skipped_sources,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="onto-merge",
        description="Merge ontologies into a single ontology",
    )
    parser.add_argument("--manifest", type=Path, help="Path to a merge manifest YAML")
    parser.add_argument(
        "-i", "--input",
        dest="inputs",
        action="append",
        default=[],
        help="Ontology to merge; repeat for several, the first is the target",
    )
    parser.add_argument(
        "--import",
        dest="imports",
        action="append",
        default=[],
        help="Ontology loaded only to resolve imports; repeatable",
    )
    parser.add_argument("-o", "--output", help="Path of the merged ontology")
    parser.add_argument("--format", default="turtle", help="Output format (default: turtle)")
    parser.add_argument("--include-annotations", action="store_true", help="Merge ontology annotations")
    parser.add_argument(
        "--collapse-import-closure",
        action="store_true",
        help="Merge imports closures and remove import declarations",
    )
    parser.add_argument("--annotate-defined-by", action="store_true", help="Add rdfs:isDefinedBy to entities")
    parser.add_argument("--annotate-derived-from", action="store_true", help="Add prov:wasDerivedFrom to axioms")
    return parser


def manifest_from_args(args: argparse.Namespace) -> MergeManifest:
    """Build a manifest from parsed command-line arguments."""
    if args.manifest:
        run_preflight_checks(args.manifest, strict=True)
        return load_manifest(args.manifest)

    if not args.inputs or not args.output:
        raise ManifestValidationError("Either --manifest or at least one --input and --output are required")

    try:
        manifest = MergeManifest(
            inputs=args.inputs,
            imports=args.imports,
            output=args.output,
            format=args.format,
            options=MergeOptions(
                include_annotations=args.include_annotations,
                collapse_imports_closure=args.collapse_import_closure,
                defined_by=args.annotate_defined_by,
                derived_from=args.annotate_derived_from,
            ),
        )
    except PydanticValidationError as e:
        raise ManifestValidationError("Invalid command-line options", errors=_format_errors(e)) from e
    return manifest.resolve_paths(Path.cwd())


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the ``onto-merge`` command.

    Returns:
        Process exit code
    """
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)

    try:
        manifest = manifest_from_args(args)
        artifacts = run_merge(manifest)
    except OntoMergeError as e:
        logger.error("merge_failed", **e.to_dict())
        return 1

    logger.info("merge_success", output=str(artifacts.output), skipped=len(artifacts.skipped_sources))
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    sys.exit(main())
