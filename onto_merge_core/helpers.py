"""Small ontology editing primitives used by the merge engine."""

from __future__ import annotations

import logging
from typing import FrozenSet, Optional

from rdflib import URIRef

from onto_merge_core.model import (
    Annotation,
    AnnotationAssertion,
    AnnotationValue,
    Axiom,
    Entity,
    ImportDeclaration,
    Ontology,
)

LOGGER = logging.getLogger(__name__)


def has_entity_annotation(
    ontology: Ontology,
    entity: Entity,
    property: URIRef,
    value: Optional[AnnotationValue] = None,
) -> bool:
    """Check whether ``ontology`` annotates ``entity`` with ``property``.

    When ``value`` is None any value matches.
    """
    return any(
        assertion.property == property and (value is None or assertion.value == value)
        for assertion in ontology.get_annotation_assertions(entity.iri)
    )


def add_entity_annotation(
    ontology: Ontology,
    entity: Entity,
    property: URIRef,
    value: AnnotationValue,
    allow_duplicate: bool = False,
) -> Optional[AnnotationAssertion]:
    """Add an annotation assertion on ``entity`` to ``ontology``.

    Args:
        ontology: Ontology receiving the assertion
        entity: Annotated entity
        property: Annotation property IRI
        value: Annotation value
        allow_duplicate: If False, do nothing when the entity already carries
            the same (property, value) annotation, whatever its axiom annotations

    Returns:
        The added assertion, or None if it was skipped
    """
    if not allow_duplicate and has_entity_annotation(ontology, entity, property, value):
        return None
    assertion = AnnotationAssertion(property=property, subject=entity.iri, value=value)
    ontology.add_axiom(assertion)
    return assertion


def add_axiom_annotation(
    ontology: Ontology,
    axiom: Axiom,
    property: URIRef,
    value: AnnotationValue,
    allow_duplicate: bool = False,
) -> Axiom:
    """Replace ``axiom`` in ``ontology`` with a copy carrying one more annotation.

    The unannotated form is removed from ``ontology`` if present and the
    annotated form is added, so only one of the two is ever stored.

    Args:
        ontology: Ontology that holds (or will hold) the annotated axiom
        axiom: Axiom to annotate
        property: Annotation property IRI
        value: Annotation value
        allow_duplicate: If False, leave ``axiom`` untouched when it already
            carries the same annotation

    Returns:
        The axiom now stored in ``ontology``
    """
    annotation = Annotation(property, value)
    if not allow_duplicate and annotation in axiom.annotations:
        ontology.add_axiom(axiom)
        return axiom
    annotated = axiom.annotated([annotation])
    ontology.remove_axiom(axiom)
    ontology.add_axiom(annotated)
    return annotated


def add_ontology_annotation(ontology: Ontology, annotation: Annotation) -> bool:
    return ontology.add_annotation(annotation)


def remove_imports(ontology: Ontology) -> FrozenSet[ImportDeclaration]:
    """Remove every import declaration from ``ontology`` and return the removed set."""
    declarations = ontology.import_declarations
    for declaration in declarations:
        ontology.remove_import(declaration)
    if declarations:
        LOGGER.debug("Removed %d import declaration(s) from %s", len(declarations), ontology.ontology_id)
    return declarations
