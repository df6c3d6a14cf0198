"""Write an Ontology back to an rdflib Graph."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Union

from rdflib import BNode, Graph, URIRef
from rdflib.namespace import OWL, PROV, RDF, RDFS

from onto_merge_core.model import (
    AnnotationAssertion,
    Axiom,
    ClassAssertion,
    Declaration,
    Entity,
    EntityType,
    Ontology,
    PropertyAssertion,
    PropertyDomain,
    PropertyRange,
    SubClassOf,
    SubPropertyOf,
)

LOGGER = logging.getLogger(__name__)

ENTITY_TYPE_IRIS: Dict[EntityType, URIRef] = {
    EntityType.CLASS: OWL.Class,
    EntityType.OBJECT_PROPERTY: OWL.ObjectProperty,
    EntityType.DATA_PROPERTY: OWL.DatatypeProperty,
    EntityType.ANNOTATION_PROPERTY: OWL.AnnotationProperty,
    EntityType.NAMED_INDIVIDUAL: OWL.NamedIndividual,
    EntityType.DATATYPE: RDFS.Datatype,
}


def axiom_to_triple(axiom: Axiom):
    """Return the (subject, predicate, object) triple an axiom is written as."""
    if isinstance(axiom, Declaration):
        return (axiom.entity.iri, RDF.type, ENTITY_TYPE_IRIS[axiom.entity.entity_type])
    if isinstance(axiom, SubClassOf):
        return (axiom.sub_class.iri, RDFS.subClassOf, axiom.super_class.iri)
    if isinstance(axiom, SubPropertyOf):
        return (axiom.sub_property.iri, RDFS.subPropertyOf, axiom.super_property.iri)
    if isinstance(axiom, PropertyDomain):
        return (axiom.property.iri, RDFS.domain, axiom.domain.iri)
    if isinstance(axiom, PropertyRange):
        return (axiom.property.iri, RDFS.range, axiom.range.iri)
    if isinstance(axiom, ClassAssertion):
        return (axiom.individual.iri, RDF.type, axiom.class_entity.iri)
    if isinstance(axiom, PropertyAssertion):
        value = axiom.value.iri if isinstance(axiom.value, Entity) else axiom.value
        return (axiom.subject.iri, axiom.property.iri, value)
    if isinstance(axiom, AnnotationAssertion):
        return (axiom.subject, axiom.property, axiom.value)
    raise TypeError(f"Unsupported axiom type: {type(axiom).__name__}")


def ontology_to_graph(ontology: Ontology) -> Graph:
    """Build an rdflib Graph holding ``ontology``.

    Axiom annotations are written with ``owl:Axiom`` reification.
    """
    graph = Graph()
    graph.bind("owl", OWL)
    graph.bind("rdfs", RDFS)
    graph.bind("prov", PROV)

    header = ontology.ontology_iri if ontology.ontology_iri is not None else BNode()
    graph.add((header, RDF.type, OWL.Ontology))
    if ontology.version_iri is not None:
        graph.add((header, OWL.versionIRI, ontology.version_iri))
    for declaration in ontology.import_declarations:
        graph.add((header, OWL.imports, declaration.iri))
    for annotation in ontology.annotations:
        graph.add((header, annotation.property, annotation.value))

    for axiom in ontology.get_axioms():
        subject, predicate, obj = axiom_to_triple(axiom)
        graph.add((subject, predicate, obj))
        if axiom.annotations:
            node = BNode()
            graph.add((node, RDF.type, OWL.Axiom))
            graph.add((node, OWL.annotatedSource, subject))
            graph.add((node, OWL.annotatedProperty, predicate))
            graph.add((node, OWL.annotatedTarget, obj))
            for annotation in axiom.annotations:
                graph.add((node, annotation.property, annotation.value))

    return graph


def save_ontology(ontology: Ontology, path: Union[str, Path], format: str = "turtle") -> Path:
    """Serialize ``ontology`` to ``path`` and return the path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    graph = ontology_to_graph(ontology)
    graph.serialize(destination=str(path), format=format)
    LOGGER.info("Saved %s to %s (%d triples)", ontology.ontology_id, path, len(graph))
    return path
