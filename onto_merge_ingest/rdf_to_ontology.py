"""Read the named-entity OWL fragment of an RDF graph into an Ontology.

Supported constructs:

- Ontology header: ``owl:Ontology``, ``owl:versionIRI``, ``owl:imports`` and
  any other header triple as an ontology annotation
- Entity declarations (``rdf:type owl:Class`` etc.)
- ``rdfs:subClassOf``, ``rdfs:subPropertyOf``, ``rdfs:domain``, ``rdfs:range``
- Class assertions, object and data property assertions
- Annotation assertions
- Axiom annotations written with ``owl:Axiom`` reification

Triples that need blank nodes outside reification (class expressions, lists,
anonymous individuals) are skipped with a warning.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Set, Tuple, Union

from rdflib import BNode, Graph, Literal, URIRef
from rdflib.namespace import OWL, RDF, RDFS, XSD

from onto_merge_core.errors import OntologyLoadError
from onto_merge_core.manager import OntologyManager
from onto_merge_core.model import (
    Annotation,
    AnnotationAssertion,
    Axiom,
    ClassAssertion,
    Declaration,
    Entity,
    EntityType,
    ImportDeclaration,
    Ontology,
    OntologyID,
    PropertyAssertion,
    PropertyDomain,
    PropertyRange,
    SubClassOf,
    SubPropertyOf,
)
from onto_merge_core.vocabulary import BUILTIN_ANNOTATION_PROPERTIES

LOGGER = logging.getLogger(__name__)

DECLARATION_TYPES: Dict[URIRef, EntityType] = {
    OWL.Class: EntityType.CLASS,
    RDFS.Class: EntityType.CLASS,
    OWL.ObjectProperty: EntityType.OBJECT_PROPERTY,
    OWL.DatatypeProperty: EntityType.DATA_PROPERTY,
    OWL.AnnotationProperty: EntityType.ANNOTATION_PROPERTY,
    OWL.NamedIndividual: EntityType.NAMED_INDIVIDUAL,
    RDFS.Datatype: EntityType.DATATYPE,
}

HEADER_PREDICATES = frozenset({RDF.type, OWL.versionIRI, OWL.imports})
REIFICATION_PREDICATES = frozenset({RDF.type, OWL.annotatedSource, OWL.annotatedProperty, OWL.annotatedTarget})

Triple = Tuple[URIRef, URIRef, Union[URIRef, Literal]]
EntityTypes = Dict[URIRef, Set[EntityType]]


def _find_ontology_node(graph: Graph) -> Optional[URIRef]:
    nodes = sorted({s for s in graph.subjects(RDF.type, OWL.Ontology) if isinstance(s, URIRef)}, key=str)
    if len(nodes) > 1:
        LOGGER.warning("Graph declares %d ontologies; using <%s>", len(nodes), nodes[0])
    return nodes[0] if nodes else None


def _entity_types(graph: Graph) -> EntityTypes:
    types: EntityTypes = defaultdict(set)
    for rdf_type, entity_type in DECLARATION_TYPES.items():
        for subject in graph.subjects(RDF.type, rdf_type):
            if isinstance(subject, URIRef):
                types[subject].add(entity_type)
    return types


def _reified_annotations(graph: Graph) -> Tuple[Dict[Triple, List[FrozenSet[Annotation]]], Set[BNode]]:
    """Collect axiom annotations keyed by the triple they annotate."""
    reified: Dict[Triple, List[FrozenSet[Annotation]]] = defaultdict(list)
    nodes: Set[BNode] = set()
    for node in set(graph.subjects(RDF.type, OWL.Axiom)):
        source = graph.value(node, OWL.annotatedSource)
        prop = graph.value(node, OWL.annotatedProperty)
        target = graph.value(node, OWL.annotatedTarget)
        if source is None or prop is None or target is None:
            continue
        annotations = frozenset(
            Annotation(p, o)
            for p, o in graph.predicate_objects(node)
            if p not in REIFICATION_PREDICATES and not isinstance(o, BNode)
        )
        reified[(source, prop, target)].append(annotations)
        nodes.add(node)
    return reified, nodes


def _property(iri: URIRef, types: EntityTypes) -> Entity:
    declared = types.get(iri, set())
    for entity_type in (EntityType.OBJECT_PROPERTY, EntityType.DATA_PROPERTY, EntityType.ANNOTATION_PROPERTY):
        if entity_type in declared:
            return Entity(iri, entity_type)
    return Entity(iri, EntityType.OBJECT_PROPERTY)


def _is_datatype(iri: URIRef, types: EntityTypes) -> bool:
    return (
        str(iri).startswith(str(XSD))
        or iri == RDFS.Literal
        or EntityType.DATATYPE in types.get(iri, set())
    )


def _triple_to_axiom(subject: URIRef, predicate: URIRef, obj, types: EntityTypes) -> Optional[Axiom]:
    """Map one triple to the axiom it denotes, or None for header-only triples."""
    if isinstance(obj, URIRef):
        if predicate == RDF.type:
            if obj in DECLARATION_TYPES:
                return Declaration(Entity(subject, DECLARATION_TYPES[obj]))
            if obj in (OWL.Ontology, OWL.Axiom):
                return None
            return ClassAssertion(
                individual=Entity(subject, EntityType.NAMED_INDIVIDUAL),
                class_entity=Entity(obj, EntityType.CLASS),
            )
        if predicate == RDFS.subClassOf:
            return SubClassOf(Entity(subject, EntityType.CLASS), Entity(obj, EntityType.CLASS))
        if predicate == RDFS.subPropertyOf:
            return SubPropertyOf(_property(subject, types), _property(obj, types))
        if predicate == RDFS.domain:
            return PropertyDomain(_property(subject, types), Entity(obj, EntityType.CLASS))
        if predicate == RDFS.range:
            prop = _property(subject, types)
            if prop.entity_type is EntityType.DATA_PROPERTY or _is_datatype(obj, types):
                return PropertyRange(prop, Entity(obj, EntityType.DATATYPE))
            return PropertyRange(prop, Entity(obj, EntityType.CLASS))

    declared = types.get(predicate, set())
    if EntityType.ANNOTATION_PROPERTY in declared or predicate in BUILTIN_ANNOTATION_PROPERTIES:
        return AnnotationAssertion(property=predicate, subject=subject, value=obj)
    if EntityType.OBJECT_PROPERTY in declared and isinstance(obj, URIRef):
        return PropertyAssertion(
            Entity(predicate, EntityType.OBJECT_PROPERTY),
            Entity(subject, EntityType.NAMED_INDIVIDUAL),
            Entity(obj, EntityType.NAMED_INDIVIDUAL),
        )
    if EntityType.DATA_PROPERTY in declared and isinstance(obj, Literal):
        return PropertyAssertion(
            Entity(predicate, EntityType.DATA_PROPERTY),
            Entity(subject, EntityType.NAMED_INDIVIDUAL),
            obj,
        )
    return AnnotationAssertion(property=predicate, subject=subject, value=obj)


def graph_to_ontology(graph: Graph) -> Ontology:
    """Build an Ontology from an rdflib Graph.

    Args:
        graph: Parsed RDF graph

    Returns:
        A new Ontology not yet registered with any manager
    """
    ontology_node = _find_ontology_node(graph)
    annotations: List[Annotation] = []
    imports: List[ImportDeclaration] = []
    ontology_id = OntologyID()

    if ontology_node is not None:
        version = graph.value(ontology_node, OWL.versionIRI)
        ontology_id = OntologyID(ontology_node, version if isinstance(version, URIRef) else None)
        imports = [
            ImportDeclaration(iri) for iri in graph.objects(ontology_node, OWL.imports)
            if isinstance(iri, URIRef)
        ]
        annotations = [
            Annotation(p, o) for p, o in graph.predicate_objects(ontology_node)
            if p not in HEADER_PREDICATES and not isinstance(o, BNode)
        ]

    types = _entity_types(graph)
    reified, reification_nodes = _reified_annotations(graph)
    axioms: List[Axiom] = []
    skipped = 0

    for s, p, o in graph:
        if s == ontology_node or s in reification_nodes:
            continue
        if isinstance(s, BNode) or isinstance(o, BNode):
            skipped += 1
            continue
        axiom = _triple_to_axiom(s, p, o, types)
        if axiom is None:
            continue
        annotation_sets = reified.pop((s, p, o), None)
        if annotation_sets:
            axioms.extend(axiom.annotated(a) for a in annotation_sets)
        else:
            axioms.append(axiom)

    # Reified triples that are not asserted still denote annotated axioms
    for (s, p, o), annotation_sets in reified.items():
        if isinstance(s, BNode) or isinstance(o, BNode):
            skipped += 1
            continue
        axiom = _triple_to_axiom(s, p, o, types)
        if axiom is not None:
            axioms.extend(axiom.annotated(a) for a in annotation_sets)

    if skipped:
        LOGGER.warning("Skipped %d triples with blank nodes in %s", skipped, ontology_id)

    return Ontology(ontology_id, axioms=axioms, annotations=annotations, imports=imports)


def load_ontology(
    path: Union[str, Path],
    manager: Optional[OntologyManager] = None,
    format: Optional[str] = None,
    allow_duplicate: bool = False,
) -> Ontology:
    """Parse an ontology document.

    Args:
        path: Path to the ontology file
        manager: Manager to register the ontology with, if any
        format: rdflib format name; guessed from the file extension if None
        allow_duplicate: Register the ontology even if the manager already
            holds one with the same identity

    Returns:
        Loaded Ontology

    Raises:
        OntologyLoadError: If the file is missing or cannot be parsed
    """
    path = Path(path)
    if not path.is_file():
        raise OntologyLoadError("Ontology file not found", path=str(path), format=format)

    graph = Graph()
    try:
        graph.parse(str(path), format=format)
    except Exception as exc:
        raise OntologyLoadError(f"Failed to parse ontology: {exc}", path=str(path), format=format) from exc

    ontology = graph_to_ontology(graph)
    if manager is not None:
        manager.add_ontology(ontology, allow_duplicate=allow_duplicate)
    LOGGER.info("Loaded %s from %s (%d axioms)", ontology.ontology_id, path, ontology.axiom_count())
    return ontology
