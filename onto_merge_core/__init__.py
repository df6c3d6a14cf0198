"""onto-merge core ontology model and editing primitives."""

from .errors import (
    MergeError,
    OntoMergeError,
    OntologyAlreadyExistsError,
    OntologyError,
    OntologyLoadError,
)
from .helpers import (
    add_axiom_annotation,
    add_entity_annotation,
    add_ontology_annotation,
    has_entity_annotation,
    remove_imports,
)
from .manager import OntologyManager
from .model import (
    Annotation,
    AnnotationAssertion,
    Axiom,
    ClassAssertion,
    Declaration,
    Entity,
    EntityType,
    ImportDeclaration,
    Imports,
    Ontology,
    OntologyID,
    PropertyAssertion,
    PropertyDomain,
    PropertyRange,
    SubClassOf,
    SubPropertyOf,
)
from .vocabulary import IS_DEFINED_BY, WAS_DERIVED_FROM, WAS_DERIVED_FROM_DECLARATION

__all__ = [
    # Model
    "Annotation",
    "AnnotationAssertion",
    "Axiom",
    "ClassAssertion",
    "Declaration",
    "Entity",
    "EntityType",
    "ImportDeclaration",
    "Imports",
    "Ontology",
    "OntologyID",
    "OntologyManager",
    "PropertyAssertion",
    "PropertyDomain",
    "PropertyRange",
    "SubClassOf",
    "SubPropertyOf",
    # Primitives
    "add_axiom_annotation",
    "add_entity_annotation",
    "add_ontology_annotation",
    "has_entity_annotation",
    "remove_imports",
    # Vocabulary
    "IS_DEFINED_BY",
    "WAS_DERIVED_FROM",
    "WAS_DERIVED_FROM_DECLARATION",
    # Errors
    "MergeError",
    "OntoMergeError",
    "OntologyAlreadyExistsError",
    "OntologyError",
    "OntologyLoadError",
]
