"""Annotation properties used for provenance tagging."""

from __future__ import annotations

from rdflib.namespace import OWL, PROV, RDFS

from onto_merge_core.model import Declaration, Entity, EntityType

IS_DEFINED_BY = RDFS.isDefinedBy
WAS_DERIVED_FROM = PROV.wasDerivedFrom

WAS_DERIVED_FROM_PROPERTY = Entity(WAS_DERIVED_FROM, EntityType.ANNOTATION_PROPERTY)
WAS_DERIVED_FROM_DECLARATION = Declaration(WAS_DERIVED_FROM_PROPERTY)

# Predicates read as annotations even when an ontology does not declare them.
BUILTIN_ANNOTATION_PROPERTIES = frozenset({
    RDFS.label,
    RDFS.comment,
    RDFS.seeAlso,
    RDFS.isDefinedBy,
    OWL.versionInfo,
    OWL.deprecated,
    OWL.priorVersion,
    OWL.backwardCompatibleWith,
    OWL.incompatibleWith,
    PROV.wasDerivedFrom,
})
