"""Provenance folding across an ontology's imports closure."""

from __future__ import annotations

import logging

from onto_merge_core.model import Imports, Ontology
from onto_merge_engine.provenance import tag_defined_by, tag_derived_from

LOGGER = logging.getLogger(__name__)


def fold_import_provenance(
    source: Ontology,
    target: Ontology,
    defined_by: bool = False,
    derived_from: bool = False,
) -> None:
    """Tag every ontology of the imports closure of ``source`` with its own identity.

    Imported ontologies are tagged into the ontology that imports them,
    deepest first, and ``source`` itself is tagged into ``target`` last. Once
    the closure is flattened into ``target`` each entity and axiom still
    points at the ontology it came from.

    Args:
        source: Ontology about to be merged with its imports closure
        target: Ontology receiving the merge
        defined_by: Tag entities with ``rdfs:isDefinedBy``
        derived_from: Tag axioms with ``prov:wasDerivedFrom``
    """
    if not (defined_by or derived_from):
        return

    order = source.import_order()
    LOGGER.debug("Folding provenance of %d ontologies into %s", len(order), target.ontology_id)

    if defined_by:
        for importer, imported in order:
            for ontology in imported:
                if ontology is not importer:
                    tag_defined_by(ontology, importer, Imports.EXCLUDED)
        tag_defined_by(source, target, Imports.EXCLUDED)

    if derived_from:
        for importer, imported in order:
            for ontology in imported:
                if ontology is not importer:
                    tag_derived_from(ontology, importer, Imports.EXCLUDED)
        tag_derived_from(source, target, Imports.EXCLUDED)
