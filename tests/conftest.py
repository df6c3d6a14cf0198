"""
Pytest configuration and shared fixtures for onto-merge tests.

This module provides fixtures for:
- Ontology managers and small hand-built ontologies
- Import chains and import cycles
- Ontology documents written to temporary files
- Merge manifest helpers
"""

from pathlib import Path
from typing import Any, Dict

import pytest
import yaml
from rdflib import Literal, Namespace
from rdflib.namespace import RDFS

from onto_merge_core.manager import OntologyManager
from onto_merge_core.model import (
    Annotation,
    AnnotationAssertion,
    ClassAssertion,
    Declaration,
    Entity,
    EntityType,
    ImportDeclaration,
    SubClassOf,
)

EX = Namespace("http://example.org/")


# ============================================================================
# Entity Helpers
# ============================================================================

def cls(name: str) -> Entity:
    """Return the class ``ex:<name>``."""
    return Entity(EX[name], EntityType.CLASS)


def individual(name: str) -> Entity:
    """Return the named individual ``ex:<name>``."""
    return Entity(EX[name], EntityType.NAMED_INDIVIDUAL)


# ============================================================================
# Ontology Fixtures
# ============================================================================

@pytest.fixture
def manager() -> OntologyManager:
    """Provide an empty ontology manager."""
    return OntologyManager()


@pytest.fixture
def animals(manager):
    """Ontology ``ex:animals`` with a small class hierarchy."""
    ontology = manager.create_ontology(EX["animals"], EX["animals/1.0"])
    ontology.add_axioms([
        Declaration(cls("Animal")),
        Declaration(cls("Dog")),
        SubClassOf(cls("Dog"), cls("Animal")),
    ])
    ontology.add_annotation(Annotation(RDFS.label, Literal("Animals")))
    return ontology


@pytest.fixture
def pets(manager):
    """Ontology ``ex:pets`` without a version IRI."""
    ontology = manager.create_ontology(EX["pets"])
    ontology.add_axioms([
        Declaration(cls("Pet")),
        SubClassOf(cls("Dog"), cls("Pet")),
        ClassAssertion(individual("rex"), cls("Dog")),
        AnnotationAssertion(property=RDFS.label, subject=EX["rex"], value=Literal("Rex")),
    ])
    ontology.add_annotation(Annotation(RDFS.comment, Literal("Household pets")))
    return ontology


@pytest.fixture
def import_chain(manager):
    """Three ontologies where ``app`` imports ``mid`` and ``mid`` imports ``base``.

    Returns:
        Tuple of (app, mid, base)
    """
    base = manager.create_ontology(EX["base"])
    base.add_axiom(Declaration(cls("Thing")))

    mid = manager.create_ontology(EX["mid"])
    mid.add_axiom(SubClassOf(cls("Part"), cls("Thing")))
    mid.add_import(ImportDeclaration(EX["base"]))

    app = manager.create_ontology(EX["app"])
    app.add_axiom(SubClassOf(cls("Wheel"), cls("Part")))
    app.add_import(ImportDeclaration(EX["mid"]))
    return app, mid, base


@pytest.fixture
def import_cycle(manager):
    """Two ontologies that import each other.

    Returns:
        Tuple of (left, right)
    """
    left = manager.create_ontology(EX["left"])
    left.add_axiom(Declaration(cls("Left")))
    right = manager.create_ontology(EX["right"])
    right.add_axiom(Declaration(cls("Right")))
    left.add_import(ImportDeclaration(EX["right"]))
    right.add_import(ImportDeclaration(EX["left"]))
    return left, right


# ============================================================================
# Ontology Document Fixtures
# ============================================================================

@pytest.fixture
def animals_ttl() -> str:
    """Turtle document for an ontology that imports ``ex:base``."""
    return '''@prefix ex: <http://example.org/> .
@prefix owl: <http://www.w3.org/2002/07/owl#> .
@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .
@prefix xsd: <http://www.w3.org/2001/XMLSchema#> .

ex:animals a owl:Ontology ;
    owl:versionIRI <http://example.org/animals/1.0> ;
    owl:imports ex:base ;
    rdfs:label "Animals" .

ex:Animal a owl:Class .
ex:Dog a owl:Class ;
    rdfs:subClassOf ex:Animal ;
    rdfs:label "Dog" .

ex:hasOwner a owl:ObjectProperty ;
    rdfs:domain ex:Dog ;
    rdfs:range ex:Person .

ex:age a owl:DatatypeProperty ;
    rdfs:range xsd:integer .

ex:rex a owl:NamedIndividual, ex:Dog ;
    ex:hasOwner ex:alice ;
    ex:age 3 .
'''


@pytest.fixture
def base_ttl() -> str:
    """Turtle document for ``ex:base``."""
    return '''@prefix ex: <http://example.org/> .
@prefix owl: <http://www.w3.org/2002/07/owl#> .
@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .

ex:base a owl:Ontology .

ex:Person a owl:Class ;
    rdfs:comment "A human being" .
'''


@pytest.fixture
def pets_ttl() -> str:
    """Turtle document for ``ex:pets``."""
    return '''@prefix ex: <http://example.org/> .
@prefix owl: <http://www.w3.org/2002/07/owl#> .
@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .

ex:pets a owl:Ontology ;
    rdfs:comment "Household pets" .

ex:Pet a owl:Class .
ex:Dog rdfs:subClassOf ex:Pet .
'''


@pytest.fixture
def ontology_files(temp_dir, animals_ttl, base_ttl, pets_ttl) -> Dict[str, Path]:
    """Write the sample ontology documents and return their paths by name."""
    ontology_dir = temp_dir / "ontologies"
    ontology_dir.mkdir(parents=True, exist_ok=True)
    paths = {}
    for name, content in (("animals", animals_ttl), ("base", base_ttl), ("pets", pets_ttl)):
        path = ontology_dir / f"{name}.ttl"
        path.write_text(content)
        paths[name] = path
    return paths


# ============================================================================
# Path and Manifest Fixtures
# ============================================================================

@pytest.fixture
def temp_dir(tmp_path):
    """Provide a temporary directory for test artifacts."""
    return tmp_path


@pytest.fixture
def manifest_data(ontology_files) -> Dict[str, Any]:
    """Provide a merge manifest with paths relative to the ontology directory."""
    return {
        "name": "animals-and-pets",
        "inputs": ["animals.ttl", "pets.ttl"],
        "imports": ["base.ttl"],
        "output": "out/merged.ttl",
        "format": "turtle",
        "options": {
            "include-annotations": True,
            "annotate-defined-by": False,
        },
    }


@pytest.fixture
def write_manifest(ontology_files):
    """Provide a helper writing a manifest next to the sample ontologies."""
    def write(data: Dict[str, Any], name: str = "merge.yaml") -> Path:
        path = ontology_files["animals"].parent / name
        with open(path, 'w') as f:
            yaml.dump(data, f)
        return path

    return write


# ============================================================================
# Pytest Configuration Hooks
# ============================================================================

def pytest_configure(config):
    """Register custom markers."""
    for marker in (
        "unit: fast tests of a single module",
        "integration: tests that run the merge pipeline end to end",
        "property: hypothesis property-based tests",
        "provenance: tests of provenance tagging",
        "imports: tests of imports closure handling",
    ):
        config.addinivalue_line("markers", marker)


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        # Auto-mark tests based on path
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        # Auto-mark based on test name
        if "provenance" in item.nodeid.lower() or "tag_" in item.nodeid.lower():
            item.add_marker(pytest.mark.provenance)
        if "import" in item.nodeid.lower():
            item.add_marker(pytest.mark.imports)
