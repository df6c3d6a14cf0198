"""
Unit tests for ontology editing primitives.
"""

import pytest
from rdflib import Literal, Namespace
from rdflib.namespace import PROV, RDFS

from onto_merge_core.helpers import (
    add_axiom_annotation,
    add_entity_annotation,
    add_ontology_annotation,
    has_entity_annotation,
    remove_imports,
)
from onto_merge_core.model import (
    Annotation,
    AnnotationAssertion,
    Entity,
    EntityType,
    ImportDeclaration,
    Ontology,
    SubClassOf,
)

EX = Namespace("http://example.org/")
DOG = Entity(EX["Dog"], EntityType.CLASS)
ANIMAL = Entity(EX["Animal"], EntityType.CLASS)


class TestEntityAnnotations:
    """Test entity annotation helpers."""

    @pytest.mark.unit
    def test_add_entity_annotation(self):
        """Test that an annotation assertion on the entity IRI is added."""
        ontology = Ontology()

        assertion = add_entity_annotation(ontology, DOG, RDFS.isDefinedBy, EX["animals"])

        assert assertion == AnnotationAssertion(property=RDFS.isDefinedBy, subject=EX["Dog"], value=EX["animals"])
        assert ontology.contains_axiom(assertion)

    @pytest.mark.unit
    def test_duplicate_is_skipped(self):
        """Test that the same (property, value) pair is not added twice."""
        ontology = Ontology()
        add_entity_annotation(ontology, DOG, RDFS.isDefinedBy, EX["animals"])

        assert add_entity_annotation(ontology, DOG, RDFS.isDefinedBy, EX["animals"]) is None
        assert ontology.axiom_count() == 1

    @pytest.mark.unit
    def test_duplicate_check_ignores_axiom_annotations(self):
        """Test that an annotated assertion still counts as the same pair."""
        existing = AnnotationAssertion(
            property=RDFS.isDefinedBy,
            subject=EX["Dog"],
            value=EX["animals"],
            annotations=[Annotation(RDFS.comment, Literal("from import"))],
        )
        ontology = Ontology(axioms=[existing])

        assert add_entity_annotation(ontology, DOG, RDFS.isDefinedBy, EX["animals"]) is None

    @pytest.mark.unit
    def test_allow_duplicate_adds_other_value(self):
        """Test that a different value is added when duplicates are allowed."""
        ontology = Ontology()
        add_entity_annotation(ontology, DOG, RDFS.isDefinedBy, EX["animals"])

        add_entity_annotation(ontology, DOG, RDFS.isDefinedBy, EX["pets"], allow_duplicate=True)

        assert ontology.axiom_count() == 2

    @pytest.mark.unit
    def test_has_entity_annotation_any_value(self):
        """Test that a missing value matches any value."""
        ontology = Ontology()
        add_entity_annotation(ontology, DOG, RDFS.isDefinedBy, EX["animals"])

        assert has_entity_annotation(ontology, DOG, RDFS.isDefinedBy)
        assert has_entity_annotation(ontology, DOG, RDFS.isDefinedBy, EX["animals"])
        assert not has_entity_annotation(ontology, DOG, RDFS.isDefinedBy, EX["pets"])
        assert not has_entity_annotation(ontology, ANIMAL, RDFS.isDefinedBy)


class TestAxiomAnnotations:
    """Test axiom annotation helper."""

    @pytest.mark.unit
    def test_replaces_plain_axiom(self):
        """Test that the plain axiom is swapped for the annotated one."""
        axiom = SubClassOf(DOG, ANIMAL)
        ontology = Ontology(axioms=[axiom])

        annotated = add_axiom_annotation(ontology, axiom, PROV.wasDerivedFrom, EX["animals"])

        assert ontology.get_axioms() == {annotated}
        assert annotated.annotation_values(PROV.wasDerivedFrom) == {EX["animals"]}

    @pytest.mark.unit
    def test_writes_into_other_ontology(self):
        """Test that annotating into an ontology that lacks the axiom just adds it."""
        axiom = SubClassOf(DOG, ANIMAL)
        source = Ontology(axioms=[axiom])
        target = Ontology()

        annotated = add_axiom_annotation(target, axiom, PROV.wasDerivedFrom, EX["animals"])

        assert target.get_axioms() == {annotated}
        assert source.get_axioms() == {axiom}

    @pytest.mark.unit
    def test_existing_annotation_left_untouched(self):
        """Test that an axiom already carrying the annotation is not changed."""
        axiom = SubClassOf(DOG, ANIMAL).annotated([Annotation(PROV.wasDerivedFrom, EX["animals"])])
        ontology = Ontology(axioms=[axiom])

        result = add_axiom_annotation(ontology, axiom, PROV.wasDerivedFrom, EX["animals"])

        assert result is axiom
        assert ontology.get_axioms() == {axiom}


class TestOntologyLevelHelpers:
    """Test ontology annotation and import helpers."""

    @pytest.mark.unit
    def test_add_ontology_annotation(self):
        """Test adding an ontology annotation."""
        ontology = Ontology()
        annotation = Annotation(RDFS.label, Literal("O"))

        assert add_ontology_annotation(ontology, annotation) is True
        assert add_ontology_annotation(ontology, annotation) is False

    @pytest.mark.unit
    def test_remove_imports(self):
        """Test that every import declaration is removed and returned."""
        declarations = {ImportDeclaration(EX["a"]), ImportDeclaration(EX["b"])}
        ontology = Ontology(imports=declarations)

        removed = remove_imports(ontology)

        assert removed == declarations
        assert ontology.import_declarations == frozenset()

    @pytest.mark.unit
    def test_remove_imports_when_none(self):
        """Test that removing from an ontology without imports is harmless."""
        assert remove_imports(Ontology()) == frozenset()
