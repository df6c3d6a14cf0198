"""Merge one or more ontologies into a single target ontology.

Two strategies are available for each source:

- Collapsing the imports closure: provenance is folded through the imports
  of the source, every axiom of the closure is copied into the target, and
  all import declarations are stripped from the target at the end.
- Keeping imports as pointers: only the source's own axioms are copied, and
  the target's import declarations are restored after each source.

Sources are an ordered sequence, never a set: two ontologies may share an
IRI and still hold different axioms.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Union

from onto_merge_core.errors import MergeError
from onto_merge_core.helpers import add_ontology_annotation, remove_imports
from onto_merge_core.model import Imports, Ontology, OntologyID
from onto_merge_engine.imports import fold_import_provenance
from onto_merge_engine.provenance import tag_defined_by, tag_derived_from

LOGGER = logging.getLogger(__name__)

COLLAPSE_IMPORTS_CLOSURE = "collapse-imports-closure"

DEFAULT_OPTIONS: Dict[str, str] = {
    COLLAPSE_IMPORTS_CLOSURE: "false",
}


@dataclass
class SkippedSource:
    """A source whose contribution was dropped from a merge."""

    index: int
    ontology_id: OntologyID
    reason: str


@dataclass
class MergeResult:
    """Outcome of ``merge_into``."""

    target: Ontology
    axioms_added: int = 0
    skipped_sources: List[SkippedSource] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        """True when every source contributed to the target."""
        return not self.skipped_sources


def merge_into(
    sources: Union[Ontology, Sequence[Ontology]],
    target: Ontology,
    include_annotations: bool = False,
    collapse_imports_closure: bool = False,
    defined_by: bool = False,
    derived_from: bool = False,
) -> MergeResult:
    """Add the axioms of ``sources`` to ``target``.

    Args:
        sources: Ontology or ordered sequence of ontologies to merge
        target: Ontology to merge into; often ``sources[0]``
        include_annotations: Copy the ontology annotations of each source
            (annotations of imported ontologies are not copied)
        collapse_imports_closure: Include the imports closure of each source
            and remove all import declarations from ``target``
        defined_by: Annotate entities with ``rdfs:isDefinedBy``
        derived_from: Annotate axioms with ``prov:wasDerivedFrom``

    Returns:
        MergeResult listing any source that had to be skipped

    Raises:
        MergeError: If ``sources`` is empty
    """
    if isinstance(sources, Ontology):
        sources = [sources]
    sources = list(sources)
    if not sources:
        raise MergeError("At least one source ontology is required", source_count=0)

    result = MergeResult(target=target)
    LOGGER.info(
        "Merging %d ontologies into %s (collapse_imports_closure=%s)",
        len(sources), target.ontology_id, collapse_imports_closure,
    )

    for index, source in enumerate(sources):
        if collapse_imports_closure:
            if defined_by or derived_from:
                fold_import_provenance(source, target, defined_by, derived_from)
            result.axioms_added += target.add_axioms(source.get_axioms(Imports.INCLUDED))
        else:
            imports = target.import_declarations
            try:
                remove_imports(target)
            except Exception as exc:
                LOGGER.warning(
                    "Could not remove imports of %s; skipping source %s: %s",
                    target.ontology_id, source.ontology_id, exc,
                )
                result.skipped_sources.append(SkippedSource(index, source.ontology_id, str(exc)))
                continue
            if defined_by:
                tag_defined_by(source, target, Imports.EXCLUDED)
            if derived_from:
                tag_derived_from(source, target, Imports.EXCLUDED)
            result.axioms_added += target.add_axioms(source.get_axioms(Imports.EXCLUDED))
            for declaration in imports:
                target.add_import(declaration)

        if include_annotations:
            for annotation in source.annotations:
                add_ontology_annotation(target, annotation)

    if collapse_imports_closure:
        remove_imports(target)

    LOGGER.info(
        "Merged %d axioms into %s (%d source(s) skipped)",
        result.axioms_added, target.ontology_id, len(result.skipped_sources),
    )
    return result


def merge(ontology: Ontology) -> Ontology:
    """Collapse the imports closure of ``ontology`` into itself."""
    merge_into([ontology], ontology, include_annotations=False, collapse_imports_closure=True)
    return ontology


def merge_ontologies(
    ontologies: Sequence[Ontology],
    include_annotations: bool = False,
    collapse_imports_closure: bool = False,
    defined_by: bool = False,
    derived_from: bool = False,
) -> Ontology:
    """Merge ``ontologies`` into the first of them and return it."""
    if not ontologies:
        raise MergeError("At least one source ontology is required", source_count=0)
    target = ontologies[0]
    merge_into(
        ontologies,
        target,
        include_annotations=include_annotations,
        collapse_imports_closure=collapse_imports_closure,
        defined_by=defined_by,
        derived_from=derived_from,
    )
    return target


def merge_with_options(
    ontologies: Sequence[Ontology],
    merge_options: Optional[Mapping[str, str]] = None,
) -> Ontology:
    """Merge ``ontologies`` into the first, collapsing imports closures.

    Kept for backward compatibility: ``merge_options`` is accepted but not
    read, and ontology annotations are never copied. Use
    ``merge_ontologies`` with explicit flags instead.
    """
    if merge_options:
        LOGGER.debug("Ignoring merge options %s", sorted(merge_options))
    if not ontologies:
        raise MergeError("At least one source ontology is required", source_count=0)
    target = ontologies[0]
    merge_into(ontologies, target, include_annotations=False, collapse_imports_closure=True)
    return target


def get_default_options() -> Dict[str, str]:
    """Return a fresh map from merge option name to its default value."""
    return dict(DEFAULT_OPTIONS)
