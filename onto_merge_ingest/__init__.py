"""RDF ingest and serialization for onto-merge ontologies."""

from .ontology_to_rdf import axiom_to_triple, ontology_to_graph, save_ontology
from .rdf_to_ontology import graph_to_ontology, load_ontology

__all__ = [
    "axiom_to_triple",
    "graph_to_ontology",
    "load_ontology",
    "ontology_to_graph",
    "save_ontology",
]
