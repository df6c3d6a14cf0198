"""Ontology object model shared by the merge engine and the RDF codec.

Axioms are immutable values compared structurally, their annotation set
included. "Annotating" an axiom therefore produces a new value, and the
owning ontology swaps the stored axiom for the annotated one. Ontologies are
mutable containers of axioms, ontology-level annotations and import
declarations; they are never compared by identity IRI, only by object
identity.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Dict, FrozenSet, Iterable, List, Optional, Set, Tuple, Union

from rdflib import Literal, URIRef

if TYPE_CHECKING:
    from onto_merge_core.manager import OntologyManager

LOGGER = logging.getLogger(__name__)

AnnotationValue = Union[URIRef, Literal]


class EntityType(str, Enum):
    """Kinds of named OWL entities."""
    CLASS = "Class"
    OBJECT_PROPERTY = "ObjectProperty"
    DATA_PROPERTY = "DataProperty"
    ANNOTATION_PROPERTY = "AnnotationProperty"
    NAMED_INDIVIDUAL = "NamedIndividual"
    DATATYPE = "Datatype"


class Imports(Enum):
    """Whether a query covers only the ontology itself or its imports closure."""
    INCLUDED = "included"
    EXCLUDED = "excluded"


@dataclass(frozen=True)
class Entity:
    """A named resource referenced by axioms."""

    iri: URIRef
    entity_type: EntityType

    def __str__(self) -> str:
        return f"{self.entity_type.value}(<{self.iri}>)"


@dataclass(frozen=True)
class Annotation:
    """A (property, value) pair attached to an axiom or an ontology."""

    property: URIRef
    value: AnnotationValue


@dataclass(frozen=True)
class ImportDeclaration:
    """Pointer from one ontology to another, by IRI."""

    iri: URIRef


@dataclass(frozen=True)
class OntologyID:
    """Identity of an ontology: an optional ontology IRI and version IRI."""

    ontology_iri: Optional[URIRef] = None
    version_iri: Optional[URIRef] = None

    def is_anonymous(self) -> bool:
        return self.ontology_iri is None

    def __str__(self) -> str:
        if self.ontology_iri is None:
            return "<anonymous>"
        if self.version_iri is None:
            return f"<{self.ontology_iri}>"
        return f"<{self.ontology_iri}> <{self.version_iri}>"


@dataclass(frozen=True)
class Axiom:
    """Base class for all axioms.

    Subclasses declare their logical operands as dataclass fields and
    implement ``_operands`` to list the entities among them.
    """

    annotations: FrozenSet[Annotation] = field(default=frozenset(), kw_only=True)

    def __post_init__(self) -> None:
        object.__setattr__(self, "annotations", frozenset(self.annotations))

    def _operands(self) -> Iterable[Entity]:
        raise NotImplementedError

    def signature(self) -> Set[Entity]:
        """Return the entities mentioned by this axiom, including its annotation properties."""
        entities = set(self._operands())
        entities.update(
            Entity(annotation.property, EntityType.ANNOTATION_PROPERTY)
            for annotation in self.annotations
        )
        return entities

    def annotated(self, annotations: Iterable[Annotation]) -> "Axiom":
        """Return a copy of this axiom carrying the extra ``annotations``."""
        return replace(self, annotations=self.annotations | frozenset(annotations))

    def without_annotations(self) -> "Axiom":
        return replace(self, annotations=frozenset())

    def annotation_values(self, property: URIRef) -> Set[AnnotationValue]:
        return {a.value for a in self.annotations if a.property == property}


@dataclass(frozen=True)
class Declaration(Axiom):
    entity: Entity

    def _operands(self) -> Iterable[Entity]:
        return (self.entity,)


@dataclass(frozen=True)
class SubClassOf(Axiom):
    sub_class: Entity
    super_class: Entity

    def _operands(self) -> Iterable[Entity]:
        return (self.sub_class, self.super_class)


@dataclass(frozen=True)
class SubPropertyOf(Axiom):
    sub_property: Entity
    super_property: Entity

    def _operands(self) -> Iterable[Entity]:
        return (self.sub_property, self.super_property)


@dataclass(frozen=True)
class PropertyDomain(Axiom):
    property: Entity
    domain: Entity

    def _operands(self) -> Iterable[Entity]:
        return (self.property, self.domain)


@dataclass(frozen=True)
class PropertyRange(Axiom):
    property: Entity
    range: Entity

    def _operands(self) -> Iterable[Entity]:
        return (self.property, self.range)


@dataclass(frozen=True)
class ClassAssertion(Axiom):
    individual: Entity
    class_entity: Entity

    def _operands(self) -> Iterable[Entity]:
        return (self.individual, self.class_entity)


@dataclass(frozen=True)
class PropertyAssertion(Axiom):
    """Object or data property assertion; ``value`` is an individual or a literal."""

    property: Entity
    subject: Entity
    value: Union[Entity, Literal]

    def _operands(self) -> Iterable[Entity]:
        if isinstance(self.value, Entity):
            return (self.property, self.subject, self.value)
        return (self.property, self.subject)


@dataclass(frozen=True)
class AnnotationAssertion(Axiom):
    """Annotation on an IRI subject.

    The subject is a plain IRI, not an entity, so it does not contribute to
    the signature; only the annotation property does.
    """

    property: URIRef
    subject: URIRef
    value: AnnotationValue

    def _operands(self) -> Iterable[Entity]:
        return (Entity(self.property, EntityType.ANNOTATION_PROPERTY),)


class Ontology:
    """Mutable set of axioms, ontology annotations and import declarations."""

    def __init__(
        self,
        ontology_id: Optional[OntologyID] = None,
        axioms: Iterable[Axiom] = (),
        annotations: Iterable[Annotation] = (),
        imports: Iterable[ImportDeclaration] = (),
        manager: Optional["OntologyManager"] = None,
    ) -> None:
        self.ontology_id = ontology_id or OntologyID()
        self.manager = manager
        self._axioms: Set[Axiom] = set()
        self._assertions_by_subject: Dict[URIRef, Set[AnnotationAssertion]] = defaultdict(set)
        self._annotations: Set[Annotation] = set(annotations)
        self._imports: Set[ImportDeclaration] = set(imports)
        self.add_axioms(axioms)

    def __repr__(self) -> str:
        return f"Ontology({self.ontology_id}, axioms={len(self._axioms)})"

    @property
    def ontology_iri(self) -> Optional[URIRef]:
        return self.ontology_id.ontology_iri

    @property
    def version_iri(self) -> Optional[URIRef]:
        return self.ontology_id.version_iri

    # Axioms

    def get_axioms(self, imports: Imports = Imports.EXCLUDED) -> FrozenSet[Axiom]:
        """Return a snapshot of the axioms, optionally across the imports closure."""
        if imports is Imports.EXCLUDED:
            return frozenset(self._axioms)
        axioms: Set[Axiom] = set()
        for ontology in self.imports_closure():
            axioms.update(ontology._axioms)
        return frozenset(axioms)

    def axiom_count(self, imports: Imports = Imports.EXCLUDED) -> int:
        if imports is Imports.EXCLUDED:
            return len(self._axioms)
        return len(self.get_axioms(imports))

    def contains_axiom(self, axiom: Axiom, imports: Imports = Imports.EXCLUDED) -> bool:
        if imports is Imports.EXCLUDED:
            return axiom in self._axioms
        return any(axiom in ontology._axioms for ontology in self.imports_closure())

    def add_axiom(self, axiom: Axiom) -> bool:
        """Add ``axiom``; return False if a structurally equal axiom was already present."""
        if axiom in self._axioms:
            return False
        self._axioms.add(axiom)
        if isinstance(axiom, AnnotationAssertion):
            self._assertions_by_subject[axiom.subject].add(axiom)
        return True

    def add_axioms(self, axioms: Iterable[Axiom]) -> int:
        return sum(1 for axiom in axioms if self.add_axiom(axiom))

    def remove_axiom(self, axiom: Axiom) -> bool:
        if axiom not in self._axioms:
            return False
        self._axioms.remove(axiom)
        if isinstance(axiom, AnnotationAssertion):
            assertions = self._assertions_by_subject[axiom.subject]
            assertions.discard(axiom)
            if not assertions:
                del self._assertions_by_subject[axiom.subject]
        return True

    def remove_axioms(self, axioms: Iterable[Axiom]) -> int:
        return sum(1 for axiom in list(axioms) if self.remove_axiom(axiom))

    def get_annotation_assertions(self, subject: URIRef) -> FrozenSet[AnnotationAssertion]:
        return frozenset(self._assertions_by_subject.get(subject, ()))

    def get_signature(self, imports: Imports = Imports.EXCLUDED) -> FrozenSet[Entity]:
        entities: Set[Entity] = set()
        for axiom in self.get_axioms(imports):
            entities.update(axiom.signature())
        return frozenset(entities)

    # Ontology annotations

    @property
    def annotations(self) -> FrozenSet[Annotation]:
        return frozenset(self._annotations)

    def add_annotation(self, annotation: Annotation) -> bool:
        if annotation in self._annotations:
            return False
        self._annotations.add(annotation)
        return True

    def remove_annotation(self, annotation: Annotation) -> bool:
        if annotation not in self._annotations:
            return False
        self._annotations.remove(annotation)
        return True

    # Imports

    @property
    def import_declarations(self) -> FrozenSet[ImportDeclaration]:
        return frozenset(self._imports)

    def add_import(self, declaration: ImportDeclaration) -> bool:
        if declaration in self._imports:
            return False
        self._imports.add(declaration)
        return True

    def remove_import(self, declaration: ImportDeclaration) -> bool:
        if declaration not in self._imports:
            return False
        self._imports.remove(declaration)
        return True

    def direct_imports(self) -> List["Ontology"]:
        """Resolve import declarations to loaded ontologies, in IRI order.

        Declarations that do not resolve through the manager are skipped.
        """
        resolved: List[Ontology] = []
        for declaration in sorted(self._imports, key=lambda d: str(d.iri)):
            imported = self.manager.get_imported_ontology(declaration) if self.manager is not None else None
            if imported is None:
                LOGGER.warning("Import %s of %s is not loaded; skipping", declaration.iri, self.ontology_id)
                continue
            resolved.append(imported)
        return resolved

    def imports_closure(self) -> List["Ontology"]:
        """Return this ontology followed by every ontology reachable through imports.

        Traversal uses an explicit worklist so deep or cyclic import graphs are safe.
        """
        closure: List[Ontology] = []
        seen: Set[int] = set()
        worklist: List[Ontology] = [self]
        while worklist:
            current = worklist.pop(0)
            if id(current) in seen:
                continue
            seen.add(id(current))
            closure.append(current)
            worklist.extend(o for o in current.direct_imports() if id(o) not in seen)
        return closure

    def import_order(self) -> List[Tuple["Ontology", List["Ontology"]]]:
        """Return (ontology, direct imports) pairs, imported ontologies before importers.

        Each reachable ontology appears once; a back edge of an import cycle is
        still reported as an import of the ontology that declares it.
        """
        order: List[Tuple[Ontology, List[Ontology]]] = []
        visited: Set[int] = {id(self)}
        stack: List[Tuple[Ontology, List[Ontology], int]] = [(self, self.direct_imports(), 0)]
        while stack:
            current, imported, position = stack.pop()
            if position < len(imported):
                stack.append((current, imported, position + 1))
                child = imported[position]
                if id(child) not in visited:
                    visited.add(id(child))
                    stack.append((child, child.direct_imports(), 0))
            else:
                order.append((current, imported))
        return order
