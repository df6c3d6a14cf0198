"""Provenance tagging for merged ontologies.

Two independent taggers are provided:

- ``tag_defined_by`` annotates every entity of a source ontology with
  ``rdfs:isDefinedBy <ontology IRI>``.
- ``tag_derived_from`` annotates every axiom of a source ontology with
  ``prov:wasDerivedFrom <version IRI or ontology IRI>`` and moves the
  annotated axioms into the target.

Both are idempotent and keep the first provenance written: an entity that
already has an ``rdfs:isDefinedBy`` assertion, or an axiom that already has a
``prov:wasDerivedFrom`` annotation, is left as it is.
"""

from __future__ import annotations

import logging

from onto_merge_core.helpers import add_axiom_annotation, add_entity_annotation, has_entity_annotation
from onto_merge_core.model import Entity, Imports, Ontology
from onto_merge_core.vocabulary import IS_DEFINED_BY, WAS_DERIVED_FROM, WAS_DERIVED_FROM_DECLARATION

LOGGER = logging.getLogger(__name__)

PROVENANCE_PROPERTIES = frozenset({IS_DEFINED_BY, WAS_DERIVED_FROM})


def _has_defined_by(entity: Entity, source: Ontology, target: Ontology) -> bool:
    if has_entity_annotation(target, entity, IS_DEFINED_BY):
        return True
    return source is not target and has_entity_annotation(source, entity, IS_DEFINED_BY)


def tag_defined_by(source: Ontology, target: Ontology, imports: Imports = Imports.EXCLUDED) -> int:
    """Annotate the entities of ``source`` with its ontology IRI, writing into ``target``.

    Args:
        source: Ontology whose signature is tagged
        target: Ontology receiving the ``rdfs:isDefinedBy`` assertions
        imports: Whether the signature of the imports closure is tagged too

    Returns:
        Number of assertions added
    """
    ontology_iri = source.ontology_iri
    if ontology_iri is None:
        LOGGER.debug("Skipping defined-by tagging of anonymous ontology")
        return 0

    added = 0
    for entity in source.get_signature(imports):
        if entity.iri in PROVENANCE_PROPERTIES or _has_defined_by(entity, source, target):
            continue
        if add_entity_annotation(target, entity, IS_DEFINED_BY, ontology_iri, allow_duplicate=False):
            added += 1

    LOGGER.info("Tagged %d entities of %s with rdfs:isDefinedBy", added, source.ontology_id)
    return added


def tag_derived_from(source: Ontology, target: Ontology, imports: Imports = Imports.EXCLUDED) -> int:
    """Annotate the axioms of ``source`` with its version IRI, writing into ``target``.

    The version IRI is preferred; the ontology IRI is used when there is no
    version. Annotated axioms are stored in ``target`` and, when ``source``
    is a different ontology, the originals are removed from ``source`` so a
    later copy of ``source`` cannot add them a second time.

    Args:
        source: Ontology whose axioms are tagged
        target: Ontology receiving the annotated axioms
        imports: Whether the axioms of the imports closure are tagged too

    Returns:
        Number of axioms that received a new annotation
    """
    provenance_iri = source.version_iri or source.ontology_iri
    if provenance_iri is None:
        LOGGER.debug("Skipping derived-from tagging of anonymous ontology")
        return 0

    source_axioms = source.get_axioms(imports)
    tagged = 0
    for axiom in source_axioms:
        if axiom == WAS_DERIVED_FROM_DECLARATION:
            continue
        if axiom.annotation_values(WAS_DERIVED_FROM):
            target.add_axiom(axiom)
            continue
        add_axiom_annotation(target, axiom, WAS_DERIVED_FROM, provenance_iri, allow_duplicate=False)
        tagged += 1

    target.add_axiom(WAS_DERIVED_FROM_DECLARATION)
    if source is not target:
        source.remove_axioms(source_axioms)

    LOGGER.info("Tagged %d axioms of %s with prov:wasDerivedFrom <%s>", tagged, source.ontology_id, provenance_iri)
    return tagged
